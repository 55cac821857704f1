"""Sentinel for "field not provided" in partial updates.

``None`` cannot play this role because a present field may legitimately
carry an empty value, so partial-update containers use ``UNSET`` instead.
"""

from enum import Enum
from typing import Final


class Unset(Enum):
    """Marker type with a single member."""

    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False


UNSET: Final = Unset.UNSET
