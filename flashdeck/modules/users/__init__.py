"""Users module - identity store."""

from .models import User
from .repository import UserRepository
from .schemas import OwnerInfo, UserResponse
from .service import UserService, normalize_email

__all__ = [
    "OwnerInfo",
    "User",
    "UserRepository",
    "UserResponse",
    "UserService",
    "normalize_email",
]
