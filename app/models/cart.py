# app/models/cart.py
from sqlalchemy import UniqueConstraint
from sqlmodel import SQLModel, Field


class CartLine(SQLModel, table=True):
    """
    Shopping cart entry for a user.
    One user cannot have 2 rows for the same product.

    name / price / image_url are a snapshot of the product taken when the
    line was first inserted; later product edits do not touch them.
    Rows are removed by the database when the user or product is deleted.
    """

    __tablename__ = "carts"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_carts_user_product"),
    )

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    user_id: int = Field(
        foreign_key="users.id",
        ondelete="CASCADE",
        index=True,
    )

    product_id: int = Field(
        foreign_key="products.id",
        ondelete="CASCADE",
        index=True,
    )

    name: str
    price: float
    image_url: str

    quantity: int = Field(
        default=1,
        description="Must be >= 1",
    )
