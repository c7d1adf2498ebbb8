import logging

from sqlmodel import Session

from app.core.errors import NotFoundError
from app.models.user import User
from app.repositories.user_repo import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    """
    Admin-side user management.
    """

    def __init__(self, repo: UserRepository):
        self.repo = repo

    def get_user(self, session: Session, user_id: int) -> User:
        """
        Get a user by id.

        Raises:
            NotFoundError(404): if not found.
        """
        user = self.repo.get_by_id(session, user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    def delete_user(self, session: Session, user_id: int) -> None:
        """Delete a user (admin only). Their cart goes with them."""
        user = self.get_user(session, user_id)
        self.repo.delete(session, user)
        logger.info("Deleted user id=%s", user_id)
