import logging

from sqlmodel import Session

from app.core.errors import MissingFieldsError, ProductNotFoundError, ValidationError
from app.core.storage_utils import (
    delete_public_url,
    upload_to_storage,
    validate_image,
)
from app.models.product import Product
from app.repositories.product_repo import ProductRepository
from app.schemas.product import ProductUpdate

logger = logging.getLogger(__name__)


class ProductService:
    """
    Business logic for the product catalog.

    Responsibilities:
      - required-field validation
      - image upload/delete orchestration with local storage
      - admin-only operations (enforced at router via require_admin)
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    # ----- Products -----

    def list_products(self, session: Session) -> list[Product]:
        """Every product, no pagination."""
        return self.repo.list(session)

    def get_product(self, session: Session, product_id: int) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise ProductNotFoundError()
        return product

    def create_product(
        self,
        session: Session,
        *,
        name: str | None,
        price: float | None,
        description: str | None,
        image_name: str | None,
        image_content_type: str | None,
        image_bytes: bytes | None,
    ) -> Product:
        """
        Create a new product with its image.

        - name, price and image are all required.
        - The image is written to the upload dir before the row is inserted.
        """
        name = name.strip() if name else None
        if not name or not price or not image_bytes:
            raise MissingFieldsError()
        if price < 0:
            raise ValidationError("Price cannot be negative")

        validate_image(image_content_type, image_bytes)
        image_url = upload_to_storage(image_name, image_bytes)

        product = Product(
            name=name,
            price=price,
            description=description,
            image_url=image_url,
        )
        try:
            product = self.repo.create(session, product)
        except Exception:
            delete_public_url(image_url)
            raise

        logger.info("Created product id=%s", product.id)
        return product

    def update_product(
        self,
        session: Session,
        product_id: int,
        payload: ProductUpdate,
    ) -> Product:
        """
        Replace name / price / description of a product.

        The image is not updatable here. Cart snapshots are left untouched.
        """
        if not payload.name or not payload.price:
            raise ValidationError("Name and price are required")
        if payload.price < 0:
            raise ValidationError("Price cannot be negative")

        product = self.get_product(session, product_id)
        product.name = payload.name
        product.price = payload.price
        product.description = payload.description

        return self.repo.update(session, product)

    def delete_product(
        self,
        session: Session,
        product_id: int,
    ) -> None:
        """
        Delete a product and its image file.

        Cart lines for the product are removed by the database cascade.
        """
        product = self.get_product(session, product_id)
        image_url = product.image_url

        self.repo.delete(session, product)
        delete_public_url(image_url)
        logger.info("Deleted product id=%s", product_id)
