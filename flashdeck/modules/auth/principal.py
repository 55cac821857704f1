"""Аутентифицированный пользователь, от имени которого выполняется операция."""

from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

if TYPE_CHECKING:
    from flashdeck.modules.users.models import User


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Идентичность вызывающего.

    Передается явным аргументом во все операции над колодами
    и карточками; на нем основаны проверки доступа.
    """

    id: UUID
    email: str
    username: str

    @classmethod
    def from_user(cls, user: "User") -> "Principal":
        return cls(id=user.id, email=user.email, username=user.username)
