"""Unit tests for partial deck updates."""

from datetime import UTC, datetime, timedelta

from flashdeck.modules.decks.merge import DeckPatch, apply_update, normalize_description
from flashdeck.modules.decks.schemas import DeckUpdate
from flashdeck.shared.sentinel import UNSET


class TestDeckPatchFromUpdate:
    def test_missing_fields_are_unset(self):
        patch = DeckPatch.from_update(DeckUpdate())

        assert patch.is_empty
        assert patch.title is UNSET

    def test_null_fields_are_unset(self):
        patch = DeckPatch.from_update(
            DeckUpdate.model_validate({"title": None, "tags": None, "isPublic": None})
        )

        assert patch.is_empty

    def test_empty_values_are_set(self):
        patch = DeckPatch.from_update(
            DeckUpdate.model_validate({"tags": [], "isPublic": False, "description": ""})
        )

        assert not patch.is_empty
        assert patch.tags == []
        assert patch.is_public is False
        assert patch.description == ""
        assert patch.title is UNSET


class TestApplyUpdate:
    def test_empty_patch_leaves_deck_untouched(self, private_deck):
        before = private_deck.updated_at

        changed = apply_update(private_deck, DeckPatch())

        assert changed is False
        assert private_deck.updated_at == before

    def test_only_present_fields_change(self, private_deck):
        original_title = private_deck.title
        original_description = private_deck.description
        private_deck.updated_at = datetime.now(UTC) - timedelta(days=1)

        changed = apply_update(private_deck, DeckPatch(tags=["a", "b"]))

        assert changed is True
        assert private_deck.tags == ["a", "b"]
        assert private_deck.title == original_title
        assert private_deck.description == original_description
        assert private_deck.updated_at > datetime.now(UTC) - timedelta(minutes=1)

    def test_empty_tags_clear(self, private_deck):
        apply_update(private_deck, DeckPatch(tags=[]))

        assert private_deck.tags == []

    def test_blank_description_is_removed(self, private_deck):
        apply_update(private_deck, DeckPatch(description="   "))

        assert private_deck.description is None

    def test_visibility_toggle(self, private_deck):
        apply_update(private_deck, DeckPatch(is_public=True))

        assert private_deck.is_public is True


def test_normalize_description():
    assert normalize_description(None) is None
    assert normalize_description("") is None
    assert normalize_description("  text  ") == "text"
