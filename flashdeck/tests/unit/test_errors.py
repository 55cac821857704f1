"""Unit tests for the error hierarchy, mapping and HTTP handlers."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError, OperationalError

from flashdeck.core.exceptions import (
    CardNotFoundError,
    DeckNotFoundError,
    DuplicateResourceError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from flashdeck.shared.errors import (
    AppError,
    ExceptionMapper,
    ServiceUnavailableError,
    ValidationError,
    safe,
    setup_exception_handlers,
)
from flashdeck.shared.uuid7 import uuid7


def _integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO users ...", {}, Exception(message))


class TestAppError:
    def test_codes_and_statuses(self):
        assert DeckNotFoundError.code == "DECK_NOT_FOUND"
        assert CardNotFoundError.status_code == 404
        assert PermissionDeniedError.code == "PERMISSION_DENIED"
        assert PermissionDeniedError.status_code == 403
        assert InvalidCredentialsError.status_code == 401
        assert EmailAlreadyExistsError.code == "EMAIL_ALREADY_EXISTS"
        assert EmailAlreadyExistsError.status_code == 409

    def test_resource_details(self):
        deck_id = uuid7()

        error = DeckNotFoundError(deck_id)

        assert error.message == "Deck not found."
        assert error.details == {"resource_type": "deck", "resource_id": str(deck_id)}

    def test_to_dict(self):
        data = PermissionDeniedError().to_dict()

        assert data["error"] == "PERMISSION_DENIED"
        assert set(data) == {"error", "message", "details", "trace_id"}


class TestExceptionMapper:
    def test_unique_violation_is_duplicate(self):
        error = ExceptionMapper.map(
            _integrity_error('duplicate key value violates unique constraint "uq_users_email_lower"')
        )

        assert isinstance(error, DuplicateResourceError)
        assert error.status_code == 409

    def test_foreign_key_violation(self):
        error = ExceptionMapper.map(
            _integrity_error('insert violates foreign key constraint "fk_decks_owner_id_users"')
        )

        assert isinstance(error, ValidationError)
        assert error.details == {"constraint": "foreign_key"}

    def test_operational_error(self):
        error = ExceptionMapper.map(OperationalError("SELECT 1", {}, Exception("gone")))

        assert isinstance(error, ServiceUnavailableError)

    def test_unknown_exception(self):
        error = ExceptionMapper.map(KeyError("x"), "lookup")

        assert type(error) is AppError
        assert error.status_code == 500


class TestSafe:
    async def test_translates_async(self):
        @safe
        async def insert():
            raise _integrity_error("unique constraint")

        with pytest.raises(DuplicateResourceError) as exc_info:
            await insert()

        assert isinstance(exc_info.value.__cause__, IntegrityError)

    async def test_app_errors_pass_through(self):
        @safe
        async def lookup():
            raise DeckNotFoundError()

        with pytest.raises(DeckNotFoundError):
            await lookup()

    def test_translates_sync(self):
        @safe
        def insert():
            raise _integrity_error("unique constraint")

        with pytest.raises(DuplicateResourceError):
            insert()


# ==================== HTTP handlers ====================


class _Payload(BaseModel):
    size: int


@pytest.fixture
def client() -> TestClient:
    app = FastAPI()
    setup_exception_handlers(app)

    @app.get("/missing")
    async def missing():
        raise DeckNotFoundError()

    @app.get("/boom")
    async def boom():
        raise RuntimeError("boom")

    @app.post("/validate")
    async def validate(payload: _Payload):
        return payload

    return TestClient(app, raise_server_exceptions=False)


class TestHandlers:
    def test_app_error(self, client):
        response = client.get("/missing")

        assert response.status_code == 404
        assert response.headers["X-Error-Code"] == "DECK_NOT_FOUND"
        body = response.json()
        assert body["error"] == "DECK_NOT_FOUND"
        assert body["message"] == "Deck not found."
        assert body["details"]["resource_type"] == "deck"

    def test_validation_error(self, client):
        response = client.post("/validate", json={"size": "many"})

        assert response.status_code == 422
        body = response.json()
        assert body["error"] == "VALIDATION_ERROR"
        assert body["details"]["errors"][0]["loc"] == ["body", "size"]

    def test_unknown_route(self, client):
        response = client.get("/nowhere")

        assert response.status_code == 404
        assert response.json()["error"] == "HTTP_404"

    def test_unexpected_error(self, client):
        response = client.get("/boom")

        assert response.status_code == 500
        assert response.json()["error"] == "INTERNAL_SERVER_ERROR"
