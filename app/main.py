# app/main.py
from contextlib import asynccontextmanager
import logging
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError

from app.core.config import get_settings
from app.core.errors import AppError, InternalError
from app.database import Database

# Routers
from app.routers.auth import router as auth_router
from app.routers.products import router as products_router
from app.routers.users import router as users_router
from app.routers.cart import router as cart_router

logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Open the store (engine + tables).

    Shutdown:
      - Dispose of the engine.
    """
    db: Database = app.state.db
    logger.info("Startup: opening database %s", db.url.split("@")[-1])
    try:
        db.open()
        logger.info("Startup: DB connection OK, tables verified.")
    except Exception as e:
        logger.error(f"Startup: DB connection FAILED: {e}")
        raise
    yield
    db.close()
    logger.info("Shutdown: database closed.")


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid data"
    first = errors[0]
    field = ".".join(str(p) for p in first.get("loc", ()) if p != "body")
    msg = first.get("msg", "Invalid data")
    return f"{field}: {msg}" if field else msg


def register_exception_handlers(app: FastAPI) -> None:
    """Map every error to a `{"error": message}` body."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": _first_validation_message(exc)},
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception("Store failure on %s %s", request.method, request.url.path)
        error = InternalError()
        return JSONResponse(status_code=error.status_code, content={"error": error.message})


def create_app() -> FastAPI:
    """
    Build the app from `get_settings()`, the same cached settings the
    auth, hashing and upload helpers read.
    """
    settings = get_settings()

    logging.basicConfig(level=settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.db = Database(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

    # --- CORS configuration ---
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(auth_router, prefix=settings.API_PREFIX)
    app.include_router(products_router, prefix=settings.API_PREFIX)
    app.include_router(users_router, prefix=settings.API_PREFIX)
    app.include_router(cart_router, prefix=settings.API_PREFIX)

    # Uploaded product images
    upload_dir = Path(settings.UPLOAD_DIR)
    upload_dir.mkdir(parents=True, exist_ok=True)
    app.mount(
        settings.UPLOAD_URL_PREFIX,
        StaticFiles(directory=upload_dir),
        name="uploads",
    )

    @app.get("/")
    def root():
        """Health check endpoint."""
        return {"status": "ok", "service": "storefront-api"}

    return app


app = create_app()
