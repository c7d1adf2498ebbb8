# app/schemas/product.py
from pydantic import field_validator

from app.schemas.base import CamelModel


class ProductRead(CamelModel):
    """
    Product representation for clients.
    """

    id: int
    name: str
    price: float
    description: str | None = None
    image_url: str


class ProductUpdate(CamelModel):
    """
    Payload for PUT /products/{id}.

    name and price are required by the service; the image cannot be
    changed through this payload.
    """

    name: str | None = None
    price: float | None = None
    description: str | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return v
        return v.strip() or None
