"""Схемы Pydantic для эндпоинтов аутентификации."""

from pydantic import BaseModel, EmailStr, Field

from flashdeck.modules.users.schemas import UserResponse
from flashdeck.shared.schemas import BaseSchema


class RegisterRequest(BaseModel):
    """Схема запроса на регистрацию пользователя.

    Пароль не нормализуется: пробелы в нем значимы.
    """

    email: EmailStr = Field(
        ...,
        description="Email пользователя для входа в систему",
        examples=["user@example.com"],
    )
    username: str = Field(
        ...,
        min_length=3,
        max_length=100,
        pattern=r"\S",
        description="Публичное имя пользователя",
        examples=["ivan"],
    )
    password: str = Field(
        ...,
        min_length=6,
        max_length=50,
        description="Пароль пользователя (6-50 символов)",
    )


class LoginRequest(BaseModel):
    """Схема запроса на вход в систему."""

    email: EmailStr = Field(
        ...,
        description="Email пользователя",
        examples=["user@example.com"],
    )
    password: str = Field(
        ...,
        min_length=1,
        max_length=50,
        description="Пароль пользователя",
    )


class AuthResponse(BaseSchema):
    """Ответ после успешной регистрации или входа."""

    token: str = Field(
        ...,
        description="JWT токен доступа",
    )
    user: UserResponse = Field(
        ...,
        description="Данные пользователя",
    )
