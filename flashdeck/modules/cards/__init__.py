"""Cards module - flashcards stored inside decks."""

from .models import Card
from .repository import CardRepository

__all__ = ["Card", "CardRepository"]
