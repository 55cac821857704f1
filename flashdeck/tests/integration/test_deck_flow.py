"""End-to-end deck scenarios against PostgreSQL.

Skipped unless FLASHDECK_TEST_DB=1 points the suite at a disposable database.
"""

from datetime import UTC, datetime, timedelta

import pytest
from sqlalchemy import select

from flashdeck.core.exceptions import (
    DeckNotFoundError,
    DuplicateResourceError,
    PermissionDeniedError,
)
from flashdeck.modules.auth.principal import Principal
from flashdeck.modules.cards.models import Card
from flashdeck.modules.cards.schemas import CardCreate
from flashdeck.modules.cards.service import CardService
from flashdeck.modules.decks.schemas import DeckCreate, DeckUpdate
from flashdeck.modules.decks.service import DeckService
from flashdeck.modules.users.service import UserService
from flashdeck.tests.factories import DeckFactory, UserFactory

pytestmark = pytest.mark.integration


@pytest.fixture
async def alice(db_session) -> Principal:
    user = await UserService(db_session).create("alice@example.com", "alice", "secret1")
    return Principal.from_user(user)


@pytest.fixture
async def bob(db_session) -> Principal:
    user = await UserService(db_session).create("bob@example.com", "bob", "secret1")
    return Principal.from_user(user)


async def test_email_is_unique_ignoring_case(db_session, alice):
    with pytest.raises(DuplicateResourceError):
        await UserService(db_session).create("ALICE@example.com", "alice2", "secret1")


async def test_visibility(db_session, alice, bob):
    service = DeckService(db_session)
    private = await service.create_deck(DeckCreate(title="Private"), alice)
    public = await service.create_deck(DeckCreate(title="Public", is_public=True), alice)

    with pytest.raises(DeckNotFoundError):
        await service.get_deck(private.id, bob)
    assert (await service.get_deck(public.id, bob)).owner.username == "alice"

    bob_view = await service.list_decks(bob)
    assert [deck.id for deck in bob_view.items] == [public.id]

    with pytest.raises(PermissionDeniedError):
        await service.update_deck(public.id, DeckUpdate(title="Stolen"), bob)

    with pytest.raises(PermissionDeniedError):
        await service.delete_deck(public.id, bob)
    assert (await service.get_deck(public.id, alice)).title == "Public"


async def test_filters_do_not_combine(db_session, alice, bob):
    service = DeckService(db_session)
    await service.create_deck(DeckCreate(title="Calculus", tags=["math", "calc"]), alice)
    await service.create_deck(DeckCreate(title="Algebra", tags=["math"], is_public=True), bob)
    await service.create_deck(DeckCreate(title="Capitals", tags=["geo"]), bob)

    by_tags = await service.list_decks(alice, tags="math", search="nothing matches")
    assert {deck.title for deck in by_tags.items} == {"Calculus", "Algebra"}

    by_search = await service.list_decks(alice, search="ALG")
    assert [deck.title for deck in by_search.items] == ["Algebra"]

    by_all_tags = await service.list_decks(alice, tags=["math", "calc"])
    assert [deck.title for deck in by_all_tags.items] == ["Calculus"]

    public_only = await service.list_decks(bob, only_public=True)
    assert [deck.title for deck in public_only.items] == ["Algebra"]


async def test_search_treats_wildcards_literally(db_session, alice):
    service = DeckService(db_session)
    await service.create_deck(DeckCreate(title="100% recall"), alice)
    await service.create_deck(DeckCreate(title="1000 words"), alice)

    result = await service.list_decks(alice, search="0%")

    assert [deck.title for deck in result.items] == ["100% recall"]


async def test_pagination_newest_first(db_session):
    owner = await UserFactory.create_async(session=db_session)
    start = datetime.now(UTC) - timedelta(hours=1)
    for minute in range(5):
        await DeckFactory.create_async(
            session=db_session,
            owner_id=owner.id,
            title=f"Deck {minute}",
            created_at=start + timedelta(minutes=minute),
        )

    page = await DeckService(db_session).list_decks(
        Principal.from_user(owner), page=1, page_size=2
    )

    assert [deck.title for deck in page.items] == ["Deck 2", "Deck 1"]
    assert page.total_count == 5
    assert page.total_pages == 3


async def test_card_count_and_cascade(db_session, alice):
    decks = DeckService(db_session)
    cards = CardService(db_session)
    deck = await decks.create_deck(DeckCreate(title="Capitals"), alice)
    for front, back in [("France", "Paris"), ("Spain", "Madrid")]:
        await cards.create_card(deck.id, CardCreate(front=front, back=back), alice)

    assert (await decks.get_deck(deck.id, alice)).card_count == 2

    await decks.delete_deck(deck.id, alice)

    remaining = await db_session.scalars(select(Card).where(Card.deck_id == deck.id))
    assert remaining.all() == []
    with pytest.raises(DeckNotFoundError):
        await decks.get_deck(deck.id, alice)


async def test_empty_update_keeps_timestamp(db_session, alice):
    service = DeckService(db_session)
    deck = await service.create_deck(DeckCreate(title="Calc"), alice)

    result = await service.update_deck(deck.id, DeckUpdate(), alice)

    assert result.updated_at == deck.updated_at
