"""
Правила доступа к колодам.

Чистые функции без побочных эффектов: просмотр разрешен владельцу
и всем для публичных колод, изменение и удаление - только владельцу.
"""

from typing import Protocol
from uuid import UUID

from flashdeck.modules.auth.principal import Principal


class OwnedResource(Protocol):
    owner_id: UUID
    is_public: bool


def is_owner(deck: OwnedResource, principal: Principal) -> bool:
    return deck.owner_id == principal.id


def can_view(deck: OwnedResource, principal: Principal) -> bool:
    """Владелец или публичная колода."""
    return is_owner(deck, principal) or deck.is_public


def can_mutate(deck: OwnedResource, principal: Principal) -> bool:
    """Только владелец."""
    return is_owner(deck, principal)
