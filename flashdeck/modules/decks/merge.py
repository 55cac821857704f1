"""
Частичное обновление колоды.

Каждое поле запроса находится в одном из двух состояний: UNSET
(не трогать) или значение. Пустые значения ("", [], False) являются
значениями и применяются.
"""

from dataclasses import dataclass, fields

from flashdeck.shared.sentinel import UNSET, Unset

from .models import Deck
from .schemas import DeckUpdate


def normalize_description(description: str | None) -> str | None:
    """Обрезать пробелы; пустое описание хранится как NULL."""
    if description is None:
        return None
    description = description.strip()
    return description or None


@dataclass(frozen=True, slots=True)
class DeckPatch:
    """Разреженное обновление колоды."""

    title: str | Unset = UNSET
    description: str | Unset = UNSET
    tags: list[str] | Unset = UNSET
    is_public: bool | Unset = UNSET

    @classmethod
    def from_update(cls, data: DeckUpdate) -> "DeckPatch":
        """
        Построить патч из запроса.

        Поле считается переданным, только если оно присутствует в JSON
        и не равно null.
        """
        values = {
            name: getattr(data, name)
            for name in data.model_fields_set
            if getattr(data, name) is not None
        }
        return cls(**values)

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, f.name) is UNSET for f in fields(self))


def apply_update(deck: Deck, patch: DeckPatch) -> bool:
    """
    Применить патч к колоде.

    Returns:
        True, если колода изменена (и updated_at обновлен);
        False для пустого патча - колода не тронута.
    """
    if patch.is_empty:
        return False

    if patch.title is not UNSET:
        deck.title = patch.title
    if patch.description is not UNSET:
        deck.description = normalize_description(patch.description)
    if patch.tags is not UNSET:
        deck.tags = list(patch.tags)
    if patch.is_public is not UNSET:
        deck.is_public = patch.is_public

    deck.touch()
    return True
