"""Pytest configuration for unit tests.

Services are built over AsyncMock repositories, so nothing here
touches a database.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from flashdeck.modules.auth.principal import Principal
from flashdeck.modules.cards.repository import CardRepository
from flashdeck.modules.decks.repository import DeckRepository
from flashdeck.modules.decks.service import DeckService
from flashdeck.modules.users.repository import UserRepository
from flashdeck.tests.factories import DeckFactory, UserFactory


@pytest.fixture
def mock_session():
    """Create a mock AsyncSession for testing."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    session.scalar = AsyncMock()
    session.get = AsyncMock()
    return session


@pytest.fixture
def owner():
    """User owning the decks under test."""
    return UserFactory.build(email="owner@example.com", username="owner")


@pytest.fixture
def stranger():
    """Another registered user."""
    return UserFactory.build(email="stranger@example.com", username="stranger")


@pytest.fixture
def owner_principal(owner) -> Principal:
    return Principal.from_user(owner)


@pytest.fixture
def stranger_principal(stranger) -> Principal:
    return Principal.from_user(stranger)


@pytest.fixture
def private_deck(owner):
    return DeckFactory.build(owner_id=owner.id, title="Calculus", tags=["math"])


@pytest.fixture
def public_deck(owner):
    return DeckFactory.build(owner_id=owner.id, title="Capitals", public=True)


@pytest.fixture
def user_repo(owner, stranger):
    """UserRepository mock that knows about owner and stranger."""
    known = {owner.id: owner, stranger.id: stranger}

    repo = AsyncMock(spec=UserRepository)
    repo.get_by_id.side_effect = lambda user_id: known.get(user_id)
    repo.get_many_by_ids.side_effect = lambda ids: {
        user_id: known[user_id] for user_id in ids if user_id in known
    }
    return repo


@pytest.fixture
def deck_repo():
    repo = AsyncMock(spec=DeckRepository)
    repo.add.side_effect = lambda deck: _persisted(deck)
    repo.save.side_effect = lambda deck: deck
    return repo


@pytest.fixture
def card_repo():
    repo = AsyncMock(spec=CardRepository)
    repo.count_by_deck.return_value = 0
    repo.count_by_decks.side_effect = lambda ids: {deck_id: 0 for deck_id in ids}
    repo.delete_by_deck.return_value = 0
    return repo


@pytest.fixture
def deck_service(mock_session, deck_repo, user_repo, card_repo) -> DeckService:
    """DeckService over mocked repositories."""
    return DeckService(mock_session, decks=deck_repo, users=user_repo, cards=card_repo)


def _persisted(deck):
    """Fill the columns the database would generate on INSERT."""
    template = DeckFactory.build(owner_id=deck.owner_id)
    deck.id = template.id
    deck.created_at = template.created_at
    deck.updated_at = template.updated_at
    return deck
