"""FastAPI application entry point"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from flashdeck.api import auth as auth_router
from flashdeck.api import cards as cards_router
from flashdeck.api import decks as decks_router
from flashdeck.api import system as system_router
from flashdeck.api import users as users_router
from flashdeck.core.config import settings
from flashdeck.core.database import db_manager
from flashdeck.core.metrics import init_metrics
from flashdeck.core.middleware import RequestTracingMiddleware

# Import all models first to ensure proper mapper configuration
from flashdeck.modules.cards.models import Card  # noqa: F401
from flashdeck.modules.decks.models import Deck  # noqa: F401
from flashdeck.modules.users.models import User  # noqa: F401
from flashdeck.shared.errors import setup_exception_handlers
from flashdeck.shared.logging import get_logger, setup_logger

logger = get_logger(__name__)

TAGS_METADATA = [
    {"name": "Auth", "description": "Регистрация и вход, выдача JWT"},
    {"name": "Users", "description": "Профиль текущего пользователя"},
    {"name": "Decks", "description": "Колоды карточек: создание, поиск, доступ"},
    {"name": "Cards", "description": "Карточки внутри колоды"},
    {"name": "System", "description": "Health checks и метрики"},
]


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager for startup and shutdown events."""
    setup_logger(settings)
    logger.info("Starting {}...", settings.app.name)

    db_manager.init()
    logger.info("Database connection pool initialized")

    init_metrics()

    yield

    logger.info("Shutting down...")
    await db_manager.close()
    logger.info("Database connections closed")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    app = FastAPI(
        title=settings.app.name,
        description="Многопользовательский сервис колод флеш-карточек",
        version=settings.app.version,
        openapi_tags=TAGS_METADATA,
        debug=settings.app.debug,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.app.debug else None,
        redoc_url="/api/redoc" if settings.app.debug else None,
        openapi_url="/api/openapi.json" if settings.app.debug else None,
        redirect_slashes=False,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.app.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestTracingMiddleware)

    setup_exception_handlers(app)

    app.include_router(auth_router.router, prefix="/api")
    app.include_router(users_router.router, prefix="/api")
    app.include_router(decks_router.router, prefix="/api")
    app.include_router(cards_router.router, prefix="/api")

    # System router (no /api prefix - accessible at root)
    app.include_router(system_router.router)

    return app


app = create_app()
