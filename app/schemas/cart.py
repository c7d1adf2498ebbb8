# app/schemas/cart.py
from app.schemas.base import CamelModel


class CartLineWrite(CamelModel):
    """
    Payload for adding to / updating the cart.

    Range checks (quantity >= 1, product exists) happen in the service so
    both cart entry points report the same errors.
    """

    product_id: int | None = None
    quantity: int | None = None


class CartLineRead(CamelModel):
    """
    Read model for a single cart line, including the product snapshot.
    """

    id: int
    user_id: int
    product_id: int
    name: str
    price: float
    image_url: str
    quantity: int
