"""
FastAPI зависимости (dependencies).
"""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.modules.auth.principal import Principal
from flashdeck.modules.users.repository import UserRepository

from .database import get_db
from .exceptions import AuthenticationError
from .security import TokenPayload, verify_access_token

_bearer_scheme = HTTPBearer(auto_error=False)


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]


async def get_token(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_bearer_scheme)],
) -> str:
    """
    Извлечь bearer токен из заголовка Authorization.

    Raises:
        AuthenticationError: Токен не предоставлен.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Authorization header is required")
    return credentials.credentials


async def get_token_payload(token: Annotated[str, Depends(get_token)]) -> TokenPayload:
    """Получить и валидировать payload токена."""
    return verify_access_token(token)


async def get_current_principal(
    payload: Annotated[TokenPayload, Depends(get_token_payload)],
    session: DatabaseSession,
) -> Principal:
    """
    Разрешить текущего пользователя по email из токена.

    Returns:
        Principal с id, email и username пользователя.

    Raises:
        AuthenticationError: Пользователь из токена не существует.
    """
    user = await UserRepository(session).get_by_email(payload.sub)
    if user is None:
        raise AuthenticationError("User from token no longer exists")
    return Principal.from_user(user)


CurrentPrincipal = Annotated[Principal, Depends(get_current_principal)]
