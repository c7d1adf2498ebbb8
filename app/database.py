# app/database.py
from collections.abc import Iterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

# ---------------------------------------------------------
# Store handle
#
# The engine is owned by a Database object instead of living at module
# level. The app opens it in its lifespan handler, keeps it on
# `app.state.db`, and disposes of it on shutdown.
#
# SQLite needs two tweaks:
# - check_same_thread=False : FastAPI runs sync endpoints in a threadpool
# - PRAGMA foreign_keys=ON  : otherwise ON DELETE CASCADE is ignored
#
# In-memory SQLite ("sqlite://") additionally uses a StaticPool so every
# session sees the same database.
# ---------------------------------------------------------


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """
    Relational store with an explicit open/close lifecycle.

    Usage:

        db = Database("sqlite:///./ecommerce.db")
        db.open()
        with db.session() as session:
            ...
        db.close()
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = url
        self.echo = echo
        self._engine: Engine | None = None

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def open(self) -> None:
        """
        Create the engine and all tables defined in SQLModel metadata
        if they do not exist.
        """
        if self._engine is not None:
            return

        kwargs: dict = {"echo": self.echo, "pool_pre_ping": True}
        if self.is_sqlite:
            kwargs["connect_args"] = {"check_same_thread": False}
            if self.url in ("sqlite://", "sqlite:///:memory:"):
                kwargs["poolclass"] = StaticPool

        engine = create_engine(self.url, **kwargs)
        if self.is_sqlite:
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)

        # Import models so SQLModel metadata is populated before create_all()
        from app.models import cart as _cart_models  # noqa: F401
        from app.models import product as _product_models  # noqa: F401
        from app.models import user as _user_models  # noqa: F401

        SQLModel.metadata.create_all(engine)
        self._engine = engine

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None

    def session(self) -> Session:
        return Session(self.engine)


def get_session(request: Request) -> Iterator[Session]:
    """
    FastAPI dependency that yields a SQLModel Session bound to the
    app's Database.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    db: Database = request.app.state.db
    with db.session() as session:
        yield session
