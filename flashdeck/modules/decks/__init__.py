"""Decks module - authorization-aware deck queries and mutations."""

from .models import Deck
from .policy import can_mutate, can_view
from .query import DeckFilter, DeckListQuery
from .schemas import DeckCreate, DeckResponse, DeckUpdate
from .service import DeckService

__all__ = [
    "Deck",
    "DeckCreate",
    "DeckFilter",
    "DeckListQuery",
    "DeckResponse",
    "DeckService",
    "DeckUpdate",
    "can_mutate",
    "can_view",
]
