"""
Безопасность: хеширование паролей и работа с JWT токенами.

Subject токена - email пользователя; идентичность по нему повторно
разрешается в хранилище пользователей на каждом запросе.
"""

from datetime import UTC, datetime, timedelta
from enum import StrEnum
from typing import Any

import jwt
from passlib.context import CryptContext
from pydantic import BaseModel

from .config import settings
from .exceptions import TokenExpiredError, TokenInvalidError


class TokenType(StrEnum):
    """Типы JWT токенов."""

    ACCESS = "access"


class TokenPayload(BaseModel):
    """Payload JWT токена."""

    sub: str  # email
    type: TokenType
    exp: datetime
    iat: datetime


# Контекст для хеширования паролей
_pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=12,
)


def hash_password(password: str) -> str:
    """
    Захешировать пароль с использованием bcrypt.

    Args:
        password: Пароль в открытом виде.

    Returns:
        Хеш пароля.
    """
    return _pwd_context.hash(password)  # type: ignore[no-any-return]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Проверить соответствие пароля хешу.

    Args:
        plain_password: Пароль в открытом виде.
        hashed_password: Хеш пароля.

    Returns:
        True если пароль верный, False иначе.
    """
    return _pwd_context.verify(plain_password, hashed_password)  # type: ignore[no-any-return]


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
    additional_claims: dict[str, Any] | None = None,
) -> str:
    """
    Создать access токен.

    Args:
        subject: Email пользователя.
        expires_delta: Время жизни токена; по умолчанию из настроек.
        additional_claims: Дополнительные claims.

    Returns:
        Закодированный JWT токен.
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.jwt.access_token_expire_minutes)

    payload: dict[str, Any] = {
        "sub": subject,
        "type": TokenType.ACCESS.value,
        "exp": now + expires_delta,
        "iat": now,
    }
    if additional_claims:
        payload.update(additional_claims)

    return jwt.encode(
        payload,
        settings.jwt.secret_key,
        algorithm=settings.jwt.algorithm,
    )


def decode_token(token: str) -> TokenPayload:
    """
    Декодировать и валидировать JWT токен.

    Args:
        token: Закодированный JWT токен.

    Returns:
        Payload токена.

    Raises:
        TokenExpiredError: Токен истек.
        TokenInvalidError: Токен невалиден.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt.secret_key,
            algorithms=[settings.jwt.algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
        return TokenPayload(
            sub=payload["sub"],
            type=TokenType(payload.get("type", TokenType.ACCESS)),
            exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
            iat=datetime.fromtimestamp(payload["iat"], tz=UTC),
        )
    except jwt.ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except (jwt.InvalidTokenError, ValueError) as e:
        raise TokenInvalidError() from e


def verify_access_token(token: str) -> TokenPayload:
    """
    Проверить access токен.

    Raises:
        TokenInvalidError: Токен не является access токеном.
    """
    payload = decode_token(token)
    if payload.type != TokenType.ACCESS:
        raise TokenInvalidError("Expected access token")
    return payload
