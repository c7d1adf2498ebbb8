# app/models/product.py
from sqlmodel import SQLModel, Field


class Product(SQLModel, table=True):
    """
    Product catalog entry.

    Columns:
      - id, name, price, description, image_url
    """

    __tablename__ = "products"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        description="Display name of the product",
    )

    price: float = Field(
        description="Unit price",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    image_url: str = Field(
        description="Public URL path of the uploaded image, e.g. /uploads/<file>",
    )
