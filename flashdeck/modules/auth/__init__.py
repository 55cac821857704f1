"""Auth module - registration, login and the request principal."""

from .principal import Principal
from .schemas import AuthResponse, LoginRequest, RegisterRequest
from .service import AuthService

__all__ = [
    "AuthResponse",
    "AuthService",
    "LoginRequest",
    "Principal",
    "RegisterRequest",
]
