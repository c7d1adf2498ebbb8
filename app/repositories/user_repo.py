from sqlmodel import Session, select

from app.models.user import User


class UserRepository:
    """
    Data access layer for User.

    Responsibilities:
      - Pure DB operations (CRUD + queries)
      - No FastAPI, no HTTP, no business logic
    """

    def get_by_id(self, session: Session, user_id: int) -> User | None:
        """Return a User by primary key, or None if not found."""
        return session.get(User, user_id)

    def get_by_email(self, session: Session, email: str) -> User | None:
        """Return a User by unique email, or None if not found."""
        stmt = select(User).where(User.email == email)
        return session.exec(stmt).first()

    def create(self, session: Session, user: User) -> User:
        """
        Insert a new User and return the persisted row.

        Raises sqlalchemy IntegrityError if the email is already taken.
        """
        session.add(user)
        session.commit()
        session.refresh(user)
        return user

    def delete(self, session: Session, user: User) -> None:
        """Delete a User. Their cart rows are removed by the database."""
        session.delete(user)
        session.commit()
