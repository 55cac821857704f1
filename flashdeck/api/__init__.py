"""API routers package."""

from flashdeck.api import auth, cards, decks, system, users

__all__ = [
    "auth",
    "cards",
    "decks",
    "system",
    "users",
]
