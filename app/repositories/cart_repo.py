from sqlalchemy import delete
from sqlmodel import Session, select
from app.models.cart import CartLine
from app.models.product import Product


class CartRepository:

    # Get lines for a user, in insertion order
    def list_for_user(self, session: Session, user_id: int) -> list[CartLine]:
        stmt = (
            select(CartLine)
            .where(CartLine.user_id == user_id)
            .order_by(CartLine.id)
        )
        return session.exec(stmt).all()

    def get_line(
        self, session: Session, user_id: int, product_id: int
    ) -> CartLine | None:
        stmt = select(CartLine).where(
            CartLine.user_id == user_id, CartLine.product_id == product_id
        )
        return session.exec(stmt).first()

    # CRUD
    def update(self, session: Session, line: CartLine) -> CartLine:
        session.add(line)
        session.commit()
        session.refresh(line)
        return line

    def delete_line(self, session: Session, user_id: int, product_id: int) -> int:
        """
        Delete the line for (user_id, product_id).

        Returns the number of rows removed (0 or 1).
        """
        stmt = delete(CartLine).where(
            CartLine.user_id == user_id, CartLine.product_id == product_id
        )
        result = session.exec(stmt)
        session.commit()
        return result.rowcount

    def clear_user_cart(self, session: Session, user_id: int) -> int:
        stmt = delete(CartLine).where(CartLine.user_id == user_id)
        result = session.exec(stmt)
        session.commit()
        return result.rowcount

    def create_from_product(
            self,
            session: Session,
            *,
            user_id: int,
            product: Product,
            quantity: int,
    ) -> CartLine:
        """
        Create a CartLine from a Product, snapshotting:
          - name
          - price
          - image_url

        Business logic (e.g., rejecting qty < 1) should live in the service.
        """
        line = CartLine(
            user_id=user_id,
            product_id=product.id,
            name=product.name,
            price=product.price,
            image_url=product.image_url,
            quantity=quantity,
        )
        session.add(line)
        session.commit()
        session.refresh(line)
        return line
