"""FastAPI роутер для эндпоинтов карточек колоды."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Path, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from flashdeck.core.database import get_db
from flashdeck.core.dependencies import CurrentPrincipal
from flashdeck.core.exceptions import (
    AuthenticationError,
    CardNotFoundError,
    DeckNotFoundError,
    PermissionDeniedError,
)
from flashdeck.modules.cards.schemas import CardCreate, CardResponse, CardUpdate
from flashdeck.modules.cards.service import CardService
from flashdeck.modules.decks.query import DEFAULT_PAGE_SIZE
from flashdeck.shared.schemas import PageResponse

router = APIRouter(prefix="/decks/{deck_id}/cards", tags=["Cards"])

DeckId = Annotated[UUID, Path(description="ID колоды")]
CardId = Annotated[UUID, Path(description="ID карточки")]


async def get_card_service(
    session: Annotated[AsyncSession, Depends(get_db)],
) -> CardService:
    """Получить экземпляр сервиса карточек."""
    return CardService(session)


@router.get(
    "",
    response_model=PageResponse[CardResponse],
    summary="Получить карточки колоды",
    responses={
        401: AuthenticationError.openapi_response(),
        404: DeckNotFoundError.openapi_response(),
    },
)
async def list_cards(
    deck_id: DeckId,
    principal: CurrentPrincipal,
    service: Annotated[CardService, Depends(get_card_service)],
    page: Annotated[int, Query(description="Номер страницы (с нуля)")] = 0,
    size: Annotated[int, Query(description="Размер страницы")] = DEFAULT_PAGE_SIZE,
) -> PageResponse[CardResponse]:
    """Получить страницу карточек колоды в порядке добавления."""
    return await service.list_cards(deck_id, principal, page=page, page_size=size)


@router.get(
    "/{card_id}",
    response_model=CardResponse,
    summary="Получить карточку",
    responses={
        401: AuthenticationError.openapi_response(),
        404: CardNotFoundError.openapi_response(),
    },
)
async def get_card(
    deck_id: DeckId,
    card_id: CardId,
    principal: CurrentPrincipal,
    service: Annotated[CardService, Depends(get_card_service)],
) -> CardResponse:
    """Получить карточку колоды."""
    return await service.get_card(deck_id, card_id, principal)


@router.post(
    "",
    response_model=CardResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Добавить карточку в колоду",
    responses={
        401: AuthenticationError.openapi_response(),
        403: PermissionDeniedError.openapi_response(),
        404: DeckNotFoundError.openapi_response(),
    },
)
async def create_card(
    deck_id: DeckId,
    data: CardCreate,
    principal: CurrentPrincipal,
    service: Annotated[CardService, Depends(get_card_service)],
) -> CardResponse:
    """Добавить карточку; доступно только владельцу колоды."""
    return await service.create_card(deck_id, data, principal)


@router.patch(
    "/{card_id}",
    response_model=CardResponse,
    summary="Частично обновить карточку",
    responses={
        401: AuthenticationError.openapi_response(),
        403: PermissionDeniedError.openapi_response(),
        404: CardNotFoundError.openapi_response(),
    },
)
async def update_card(
    deck_id: DeckId,
    card_id: CardId,
    data: CardUpdate,
    principal: CurrentPrincipal,
    service: Annotated[CardService, Depends(get_card_service)],
) -> CardResponse:
    """Обновить переданные стороны карточки."""
    return await service.update_card(deck_id, card_id, data, principal)


@router.delete(
    "/{card_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Удалить карточку",
    responses={
        401: AuthenticationError.openapi_response(),
        403: PermissionDeniedError.openapi_response(),
        404: CardNotFoundError.openapi_response(),
    },
)
async def delete_card(
    deck_id: DeckId,
    card_id: CardId,
    principal: CurrentPrincipal,
    service: Annotated[CardService, Depends(get_card_service)],
) -> Response:
    """Удалить карточку."""
    await service.delete_card(deck_id, card_id, principal)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
