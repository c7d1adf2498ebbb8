import logging
from enum import Enum

from sqlmodel import Session

from app.core.errors import (
    InvalidQuantityError,
    NotFoundError,
    ProductNotFoundError,
    ValidationError,
)
from app.models.cart import CartLine
from app.models.product import Product
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class CartMergePolicy(str, Enum):
    """
    How a requested quantity is merged into an existing cart line.

    ACCUMULATE: existing + requested
    REPLACE:    requested overwrites existing
    """

    ACCUMULATE = "accumulate"
    REPLACE = "replace"

    def merge(self, existing: int, requested: int) -> int:
        if self is CartMergePolicy.ACCUMULATE:
            return existing + requested
        return requested


class CartService:
    """
    Business logic for cart operations.

    Responsibilities:
      - validate quantity and product existence
      - snapshot name / price / image_url from the product on first insert
      - merge repeat adds with an explicit CartMergePolicy

    The (user_id, product_id) unique constraint on the carts table is the
    only guard against duplicate lines. A concurrent insert that loses the
    race fails with an IntegrityError, which is not retried.
    """

    def __init__(
        self,
        cart_repo: CartRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
    ):
        self.cart_repo = cart_repo
        self.product_repo = product_repo
        self.user_repo = user_repo

    # ---- internal helpers ----

    def _get_product(self, session: Session, product_id: int) -> Product:
        product = self.product_repo.get_by_id(session, product_id)
        if not product:
            raise ProductNotFoundError()
        return product

    # ---- public operations ----

    def get_cart(self, session: Session, user_id: int) -> list[CartLine]:
        """All lines of one user's cart, in insertion order."""
        return self.cart_repo.list_for_user(session, user_id)

    def add_or_update(
        self,
        session: Session,
        user_id: int,
        product_id: int | None,
        quantity: int | None,
        policy: CartMergePolicy,
    ) -> CartLine:
        """
        Put a product in the user's cart.

        Rules:
          - product_id must be given and positive (ValidationError)
          - quantity must be >= 1 (InvalidQuantityError)
          - the user must still exist (NotFoundError); a deleted
            user's token stays valid until it expires
          - product must exist (ProductNotFoundError)
          - new line: snapshot the product, quantity = requested
          - existing line: quantity = policy.merge(existing, requested)
        """
        if quantity is None or quantity < 1:
            raise InvalidQuantityError()
        if product_id is None or product_id < 1:
            raise ValidationError("Invalid productId")
        if self.user_repo.get_by_id(session, user_id) is None:
            raise NotFoundError("User not found")

        product = self._get_product(session, product_id)
        existing = self.cart_repo.get_line(session, user_id, product.id)

        if existing:
            existing.quantity = policy.merge(existing.quantity, quantity)
            line = self.cart_repo.update(session, existing)
        else:
            line = self.cart_repo.create_from_product(
                session,
                user_id=user_id,
                product=product,
                quantity=quantity,
            )

        logger.debug(
            "Cart user=%s product=%s quantity=%s (%s)",
            user_id, product.id, line.quantity, policy.value,
        )
        return line

    def remove_line(
        self,
        session: Session,
        user_id: int,
        product_id: int,
    ) -> None:
        """
        Remove one product from the cart.

        Raises:
            NotFoundError(404): if the user has no line for this product.
        """
        removed = self.cart_repo.delete_line(session, user_id, product_id)
        if removed == 0:
            raise NotFoundError("Cart item not found")

    def clear_cart(
        self,
        session: Session,
        user_id: int,
    ) -> None:
        """
        Clear all items from the cart. Succeeds on an empty cart too.
        """
        self.cart_repo.clear_user_cart(session, user_id)
