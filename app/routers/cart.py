# app/routers/cart.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import Principal, require_user
from app.database import get_session
from app.repositories.cart_repo import CartRepository
from app.repositories.product_repo import ProductRepository
from app.repositories.user_repo import UserRepository
from app.schemas.base import MessageResponse
from app.schemas.cart import CartLineRead, CartLineWrite
from app.services.cart_service import CartMergePolicy, CartService

router = APIRouter(prefix="/cart", tags=["Cart"])

cart_repo = CartRepository()
product_repo = ProductRepository()
service = CartService(cart_repo, product_repo, UserRepository())


@router.get("", response_model=list[CartLineRead])
def get_my_cart(
    session: Session = Depends(get_session),
    current_user: Principal = Depends(require_user),
):
    """
    Get current user's cart lines.

    Auth:
      - Only role='user' (customer) can access.
      - Admins are forbidden.
    """
    return service.get_cart(session, current_user.id)


@router.post("", response_model=MessageResponse)
def set_cart_item(
    payload: CartLineWrite,
    session: Session = Depends(get_session),
    current_user: Principal = Depends(require_user),
):
    """
    Add a product or set its quantity.

    Policy: REPLACE. If the product is already in the cart, its quantity
    becomes `quantity`.
    """
    service.add_or_update(
        session,
        current_user.id,
        payload.product_id,
        payload.quantity,
        CartMergePolicy.REPLACE,
    )
    return MessageResponse(message="Cart updated")


@router.post("/items", response_model=MessageResponse)
def add_cart_item(
    payload: CartLineWrite,
    session: Session = Depends(get_session),
    current_user: Principal = Depends(require_user),
):
    """
    Add a product to the cart.

    Policy: ACCUMULATE. If the product is already in the cart, `quantity`
    is added to the existing quantity.
    """
    service.add_or_update(
        session,
        current_user.id,
        payload.product_id,
        payload.quantity,
        CartMergePolicy.ACCUMULATE,
    )
    return MessageResponse(message="Cart updated")


@router.delete("/{product_id}", response_model=MessageResponse)
def remove_cart_item(
    product_id: int,
    session: Session = Depends(get_session),
    current_user: Principal = Depends(require_user),
):
    """
    Remove a product from the cart. 404 if it was not in the cart.
    """
    service.remove_line(session, current_user.id, product_id)
    return MessageResponse(message="Item removed from cart")


@router.delete("", response_model=MessageResponse)
def clear_cart(
    session: Session = Depends(get_session),
    current_user: Principal = Depends(require_user),
):
    """
    Clear the entire cart.
    """
    service.clear_cart(session, current_user.id)
    return MessageResponse(message="Cart cleared")
