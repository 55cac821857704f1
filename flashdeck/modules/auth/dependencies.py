"""FastAPI dependencies for authentication."""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.database import get_db

from .service import AuthService


async def get_auth_service(
    session: Annotated[AsyncSession, Depends(get_db)],
) -> AuthService:
    """Dependency to get AuthService instance."""
    return AuthService(session)
