# app/routers/users.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import require_admin
from app.database import get_session
from app.repositories.user_repo import UserRepository
from app.schemas.base import MessageResponse
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["Users"])

repo = UserRepository()
service = UserService(repo)


# -------- Admin endpoints --------


@router.delete(
    "/{user_id}",
    response_model=MessageResponse,
    dependencies=[Depends(require_admin)],
)
def delete_user(
    user_id: int,
    session: Session = Depends(get_session),
):
    """
    Delete a user and their cart (admin only).
    """
    service.delete_user(session, user_id)
    return MessageResponse(message=f"User with ID {user_id} deleted successfully")
