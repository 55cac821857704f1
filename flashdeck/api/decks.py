"""FastAPI роутер для эндпоинтов колод."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.database import get_db
from flashdeck.core.dependencies import CurrentPrincipal
from flashdeck.core.exceptions import (
    AuthenticationError,
    DeckNotFoundError,
    DuplicateResourceError,
    PermissionDeniedError,
    UserNotFoundError,
)
from flashdeck.modules.decks.query import DEFAULT_PAGE_SIZE
from flashdeck.modules.decks.schemas import DeckCreate, DeckResponse, DeckUpdate
from flashdeck.modules.decks.service import DeckService
from flashdeck.shared.schemas import PageResponse

router = APIRouter(prefix="/decks", tags=["Decks"])

DeckId = Annotated[UUID, Path(description="ID колоды")]


async def get_deck_service(
    session: Annotated[AsyncSession, Depends(get_db)],
) -> DeckService:
    """Получить экземпляр сервиса колод."""
    return DeckService(session)


@router.post(
    "",
    response_model=DeckResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать новую колоду",
    responses={
        401: AuthenticationError.openapi_response(),
        404: UserNotFoundError.openapi_response(),
        409: DuplicateResourceError.openapi_response(),
    },
)
async def create_deck(
    data: DeckCreate,
    principal: CurrentPrincipal,
    service: Annotated[DeckService, Depends(get_deck_service)],
) -> DeckResponse:
    """Создать новую колоду.

    Колода принадлежит текущему пользователю. Отсутствующие теги
    становятся пустым списком, флаг публичности - false.

    Args:
        data: Название, описание, теги и флаг публичности
        principal: Текущий пользователь
        service: Сервис колод

    Returns:
        DeckResponse: Созданная колода
    """
    return await service.create_deck(data, principal)


@router.get(
    "",
    response_model=PageResponse[DeckResponse],
    summary="Получить список колод",
    responses={401: AuthenticationError.openapi_response()},
)
async def list_decks(
    principal: CurrentPrincipal,
    service: Annotated[DeckService, Depends(get_deck_service)],
    page: Annotated[int, Query(description="Номер страницы (с нуля)")] = 0,
    size: Annotated[
        int, Query(description="Размер страницы (ограничивается 1..100)")
    ] = DEFAULT_PAGE_SIZE,
    search: Annotated[
        str | None, Query(description="Подстрока названия без учета регистра")
    ] = None,
    tags: Annotated[
        str | None, Query(description="Теги через запятую; колода должна иметь все")
    ] = None,
    only_public: Annotated[
        bool | None, Query(alias="onlyPublic", description="Только публичные колоды")
    ] = None,
) -> PageResponse[DeckResponse]:
    """Получить страницу колод, видимых текущему пользователю.

    Фильтры не комбинируются: применяется первый заданный из
    tags, search, onlyPublic; без фильтров возвращаются свои и
    публичные колоды. Новые колоды идут первыми.
    """
    return await service.list_decks(
        principal,
        page=page,
        page_size=size,
        search=search,
        tags=tags,
        only_public=only_public,
    )


@router.get(
    "/{deck_id}",
    response_model=DeckResponse,
    summary="Получить колоду по ID",
    responses={
        401: AuthenticationError.openapi_response(),
        404: DeckNotFoundError.openapi_response(),
    },
)
async def get_deck(
    deck_id: DeckId,
    principal: CurrentPrincipal,
    service: Annotated[DeckService, Depends(get_deck_service)],
) -> DeckResponse:
    """Получить колоду.

    Приватная колода другого пользователя возвращает 404.
    """
    return await service.get_deck(deck_id, principal)


@router.patch(
    "/{deck_id}",
    response_model=DeckResponse,
    summary="Частично обновить колоду",
    responses={
        401: AuthenticationError.openapi_response(),
        403: PermissionDeniedError.openapi_response(),
        404: DeckNotFoundError.openapi_response(),
    },
)
async def update_deck(
    deck_id: DeckId,
    data: DeckUpdate,
    principal: CurrentPrincipal,
    service: Annotated[DeckService, Depends(get_deck_service)],
) -> DeckResponse:
    """Обновить переданные поля колоды.

    Отсутствующие и null поля не меняются; `tags: []` очищает теги;
    пустое описание удаляет его. Запрос без полей ничего не меняет.
    """
    return await service.update_deck(deck_id, data, principal)


@router.delete(
    "/{deck_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Удалить колоду",
    responses={
        401: AuthenticationError.openapi_response(),
        403: PermissionDeniedError.openapi_response(),
        404: DeckNotFoundError.openapi_response(),
    },
)
async def delete_deck(
    deck_id: DeckId,
    principal: CurrentPrincipal,
    service: Annotated[DeckService, Depends(get_deck_service)],
) -> Response:
    """Удалить колоду вместе со всеми карточками."""
    await service.delete_deck(deck_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
