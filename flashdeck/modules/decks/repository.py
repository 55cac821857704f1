"""Доступ к таблице колод."""

from collections.abc import Sequence
from uuid import UUID

from sqlalchemy import select

from flashdeck.modules.auth.principal import Principal
from flashdeck.shared.repository import BaseRepository

from .models import Deck
from .query import DeckListQuery, build_list_statement, visible_to


class DeckRepository(BaseRepository[Deck]):
    """Репозиторий колод."""

    model = Deck

    async def get_visible(self, deck_id: UUID, principal: Principal) -> Deck | None:
        """
        Получить колоду, если она принадлежит принципалу или публична.

        Приватная чужая колода неотличима от отсутствующей.
        """
        stmt = select(Deck).where(Deck.id == deck_id, visible_to(principal))
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_page(
        self, query: DeckListQuery, principal: Principal
    ) -> tuple[Sequence[Deck], int]:
        """
        Страница колод и общее количество по отфильтрованному набору.

        Returns:
            Кортеж (колоды текущей страницы, общее количество)
        """
        stmt = build_list_statement(query, principal)
        total = await self.count(stmt)
        if total == 0 or query.offset >= total:
            return [], total
        decks = await self.fetch_page(stmt, query.offset, query.limit)
        return decks, total
