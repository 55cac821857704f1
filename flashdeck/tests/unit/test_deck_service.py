"""Unit tests for DeckService over mocked repositories."""

import pytest

from flashdeck.core.exceptions import (
    DeckNotFoundError,
    PermissionDeniedError,
    UserNotFoundError,
)
from flashdeck.modules.auth.principal import Principal
from flashdeck.modules.decks.query import DeckFilter, DeckListQuery
from flashdeck.modules.decks.schemas import DeckCreate, DeckUpdate
from flashdeck.shared.uuid7 import uuid7
from flashdeck.tests.factories import DeckFactory

# ==================== create_deck ====================


class TestCreateDeck:
    async def test_defaults(self, deck_service, deck_repo, owner, owner_principal):
        result = await deck_service.create_deck(DeckCreate(title="Calculus"), owner_principal)

        deck_repo.add.assert_awaited_once()
        assert result.title == "Calculus"
        assert result.tags == []
        assert result.is_public is False
        assert result.description is None
        assert result.card_count == 0
        assert result.owner.id == owner.id
        assert result.owner.username == "owner"

    async def test_all_fields(self, deck_service, deck_repo, owner_principal):
        data = DeckCreate(
            title="Capitals",
            description="  Europe  ",
            tags=["geo", "europe"],
            is_public=True,
        )

        result = await deck_service.create_deck(data, owner_principal)

        stored = deck_repo.add.await_args.args[0]
        assert stored.owner_id == owner_principal.id
        assert stored.description == "Europe"
        assert result.tags == ["geo", "europe"]
        assert result.is_public is True

    async def test_blank_description_stored_as_null(self, deck_service, deck_repo, owner_principal):
        await deck_service.create_deck(
            DeckCreate(title="Calc", description="   "), owner_principal
        )

        assert deck_repo.add.await_args.args[0].description is None

    async def test_unknown_principal(self, deck_service, deck_repo):
        ghost = Principal(id=uuid7(), email="ghost@example.com", username="ghost")

        with pytest.raises(UserNotFoundError):
            await deck_service.create_deck(DeckCreate(title="Calc"), ghost)
        deck_repo.add.assert_not_awaited()


# ==================== get_deck ====================


class TestGetDeck:
    async def test_owner_gets_private_deck(
        self, deck_service, deck_repo, card_repo, private_deck, owner_principal
    ):
        deck_repo.get_visible.return_value = private_deck
        card_repo.count_by_deck.return_value = 3

        result = await deck_service.get_deck(private_deck.id, owner_principal)

        assert result.id == private_deck.id
        assert result.card_count == 3
        deck_repo.get_visible.assert_awaited_once_with(private_deck.id, owner_principal)

    async def test_hidden_deck_is_not_found(
        self, deck_service, deck_repo, private_deck, stranger_principal
    ):
        deck_repo.get_visible.return_value = None

        with pytest.raises(DeckNotFoundError) as exc_info:
            await deck_service.get_deck(private_deck.id, stranger_principal)

        assert exc_info.value.resource_id == private_deck.id
        assert exc_info.value.status_code == 404

    async def test_stranger_sees_public_deck_owner(
        self, deck_service, deck_repo, public_deck, stranger_principal
    ):
        deck_repo.get_visible.return_value = public_deck

        result = await deck_service.get_deck(public_deck.id, stranger_principal)

        assert result.owner.username == "owner"

    async def test_loaded_deck_is_checked_against_view_policy(
        self, deck_service, deck_repo, private_deck, stranger_principal
    ):
        deck_repo.get_visible.return_value = private_deck

        with pytest.raises(DeckNotFoundError):
            await deck_service.get_viewable(private_deck.id, stranger_principal)


# ==================== list_decks ====================


class TestListDecks:
    async def test_page_envelope(
        self, deck_service, deck_repo, card_repo, private_deck, public_deck, owner_principal
    ):
        deck_repo.list_page.return_value = ([public_deck, private_deck], 2)
        card_repo.count_by_decks.side_effect = lambda ids: {
            public_deck.id: 5,
            private_deck.id: 0,
        }

        page = await deck_service.list_decks(owner_principal)

        assert [item.id for item in page.items] == [public_deck.id, private_deck.id]
        assert [item.card_count for item in page.items] == [5, 0]
        assert page.page == 0
        assert page.page_size == 20
        assert page.total_count == 2
        assert page.total_pages == 1

    async def test_empty(self, deck_service, deck_repo, owner_principal):
        deck_repo.list_page.return_value = ([], 0)

        page = await deck_service.list_decks(owner_principal)

        assert page.items == []
        assert page.total_count == 0
        assert page.total_pages == 0

    async def test_parameters_are_normalized(self, deck_service, deck_repo, owner_principal):
        deck_repo.list_page.return_value = ([], 0)

        page = await deck_service.list_decks(
            owner_principal, page=-1, page_size=1000, tags=" math, ", search="calc"
        )

        query: DeckListQuery = deck_repo.list_page.await_args.args[0]
        assert query.page == 0
        assert query.page_size == 100
        assert query.tags == ("math",)
        assert query.branch is DeckFilter.TAGS
        assert page.page_size == 100

    async def test_page_past_the_end(self, deck_service, deck_repo, owner_principal):
        deck_repo.list_page.return_value = ([], 41)

        page = await deck_service.list_decks(owner_principal, page=10, page_size=20)

        assert page.items == []
        assert page.total_count == 41
        assert page.total_pages == 3
        assert page.page == 10


# ==================== update_deck ====================


class TestUpdateDeck:
    async def test_owner_updates_present_fields(
        self, deck_service, deck_repo, private_deck, owner_principal
    ):
        deck_repo.get_by_id.return_value = private_deck

        result = await deck_service.update_deck(
            private_deck.id, DeckUpdate(title="Linear Algebra", tags=[]), owner_principal
        )

        deck_repo.save.assert_awaited_once_with(private_deck)
        assert result.title == "Linear Algebra"
        assert result.tags == []
        assert result.description == private_deck.description

    async def test_empty_update_is_noop(
        self, deck_service, deck_repo, private_deck, owner_principal
    ):
        deck_repo.get_by_id.return_value = private_deck
        before = private_deck.updated_at

        result = await deck_service.update_deck(private_deck.id, DeckUpdate(), owner_principal)

        deck_repo.save.assert_not_awaited()
        assert result.updated_at == before

    async def test_stranger_cannot_update_public_deck(
        self, deck_service, deck_repo, public_deck, stranger_principal
    ):
        deck_repo.get_by_id.return_value = public_deck

        with pytest.raises(PermissionDeniedError) as exc_info:
            await deck_service.update_deck(
                public_deck.id, DeckUpdate(title="Mine now"), stranger_principal
            )

        assert exc_info.value.status_code == 403
        assert public_deck.title == "Capitals"
        deck_repo.save.assert_not_awaited()

    async def test_missing_deck(self, deck_service, deck_repo, owner_principal):
        deck_repo.get_by_id.return_value = None

        with pytest.raises(DeckNotFoundError):
            await deck_service.update_deck(uuid7(), DeckUpdate(title="x"), owner_principal)


# ==================== delete_deck ====================


class TestDeleteDeck:
    async def test_owner_deletes_deck_and_cards(
        self, deck_service, deck_repo, card_repo, private_deck, owner_principal
    ):
        deck_repo.get_by_id.return_value = private_deck
        card_repo.delete_by_deck.return_value = 4

        await deck_service.delete_deck(private_deck.id, owner_principal)

        card_repo.delete_by_deck.assert_awaited_once_with(private_deck.id)
        deck_repo.delete.assert_awaited_once_with(private_deck)

    async def test_stranger_cannot_delete(
        self, deck_service, deck_repo, card_repo, private_deck, stranger_principal
    ):
        deck_repo.get_by_id.return_value = private_deck

        with pytest.raises(PermissionDeniedError):
            await deck_service.delete_deck(private_deck.id, stranger_principal)

        card_repo.delete_by_deck.assert_not_awaited()
        deck_repo.delete.assert_not_awaited()

    async def test_public_deck_survives_stranger_delete(
        self, deck_service, deck_repo, card_repo, public_deck, stranger_principal
    ):
        deck_repo.get_by_id.return_value = public_deck
        deck_repo.get_visible.return_value = public_deck

        with pytest.raises(PermissionDeniedError):
            await deck_service.delete_deck(public_deck.id, stranger_principal)

        deck_repo.delete.assert_not_awaited()
        result = await deck_service.get_deck(public_deck.id, stranger_principal)
        assert result.id == public_deck.id

    async def test_missing_deck(self, deck_service, deck_repo, owner_principal):
        deck_repo.get_by_id.return_value = None

        with pytest.raises(DeckNotFoundError):
            await deck_service.delete_deck(uuid7(), owner_principal)


async def test_assembler_requires_owner(deck_service, deck_repo, owner_principal):
    orphan = DeckFactory.build(owner_id=uuid7(), public=True)
    deck_repo.get_visible.return_value = orphan

    with pytest.raises(UserNotFoundError):
        await deck_service.get_deck(orphan.id, owner_principal)
