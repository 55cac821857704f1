"""FastAPI роутер для эндпоинтов пользователей."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.database import get_db
from flashdeck.core.dependencies import CurrentPrincipal
from flashdeck.core.exceptions import AuthenticationError
from flashdeck.modules.users.schemas import UserResponse
from flashdeck.modules.users.service import UserService

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(
    session: Annotated[AsyncSession, Depends(get_db)],
) -> UserService:
    """Получить экземпляр сервиса пользователей."""
    return UserService(session)


@router.get(
    "/me",
    response_model=UserResponse,
    summary="Получить профиль текущего пользователя",
    responses={401: AuthenticationError.openapi_response()},
)
async def get_current_user(
    principal: CurrentPrincipal,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Получить профиль текущего аутентифицированного пользователя.

    Returns:
        UserResponse: Профиль без хеша пароля
    """
    user = await service.get_by_id(principal.id)
    return UserResponse.model_validate(user)
