# app/routers/products.py
from fastapi import (
    APIRouter,
    Depends,
    File,
    Form,
    UploadFile,
)
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.base import MessageResponse
from app.schemas.product import ProductRead, ProductUpdate
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)


# -------- Public endpoints --------


@router.get("", response_model=list[ProductRead])
def list_products(session: Session = Depends(get_session)):
    """
    List all products.

    - Public endpoint, no pagination.
    """
    return service.list_products(session)


# -------- Admin endpoints --------


@router.post(
    "",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def create_product(
    name: str | None = Form(None),
    price: float | None = Form(None),
    description: str | None = Form(None),
    image: UploadFile | None = File(None),
    session: Session = Depends(get_session),
):
    """
    Create a new product (admin only).

    Multipart form: name, price, description (optional), image (file).
    """
    image_bytes = image.file.read() if image is not None else None
    return service.create_product(
        session,
        name=name,
        price=price,
        description=description,
        image_name=image.filename if image is not None else None,
        image_content_type=image.content_type if image is not None else None,
        image_bytes=image_bytes,
    )


@router.put(
    "/{product_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    session: Session = Depends(get_session),
):
    """
    Update name, price and description of a product (admin only).
    """
    service.update_product(session, product_id, payload)
    return MessageResponse(message="Product updated")


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Delete a product, its image, and every cart line holding it (admin only).
    """
    service.delete_product(session, product_id)
    return MessageResponse(message="Product deleted")
