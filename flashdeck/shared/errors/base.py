"""Base exception class for application errors.

Error codes are derived from the class name and default messages
from the first docstring line, so most subclasses only declare
a status code.
"""

import logging
import re
from typing import Any

from pydantic import ValidationError

from ..context import trace_id_var
from .schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for all application errors.

    - ``code`` is generated from the class name (DeckNotFoundError -> DECK_NOT_FOUND)
    - ``default_message`` is taken from the class docstring
    - ``details`` are validated through ErrorDetail
    - ``trace_id`` is read from the request context
    """

    status_code: int = 500
    code: str = "INTERNAL_ERROR"
    default_message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        details: dict[str, Any] | ErrorDetail | None = None,
        status_code: int | None = None,
        code: str | None = None,
    ) -> None:
        self.message = message or self.default_message

        if details is None:
            self.details: dict[str, Any] = {}
        elif isinstance(details, ErrorDetail):
            self.details = details.model_dump(exclude_none=True)
        else:
            try:
                self.details = ErrorDetail(**details).model_dump(exclude_none=True)
            except ValidationError:
                logger.warning("Unstructured details in %s", self.__class__.__name__)
                self.details = details

        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code

        super().__init__(self.message)

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)

        if "code" not in cls.__dict__:
            name = cls.__name__
            for suffix in ("Exception", "Error"):
                if name.endswith(suffix):
                    name = name[: -len(suffix)]
                    break
            cls.code = re.sub(r"(?<!^)(?=[A-Z])", "_", name).upper()

        if "default_message" not in cls.__dict__ and cls.__doc__:
            cls.default_message = cls.__doc__.strip().split("\n")[0]

    @property
    def trace_id(self) -> str:
        return trace_id_var.get()

    def to_response(self) -> ErrorResponse:
        """Serialize to the unified error body."""
        return ErrorResponse(
            error=self.code,
            message=self.message,
            details=self.details,
            trace_id=self.trace_id,
        )

    def to_dict(self) -> dict[str, Any]:
        return self.to_response().model_dump()

    @classmethod
    def openapi_response(cls) -> dict[str, Any]:
        """OpenAPI ``responses`` entry documenting this error."""
        return {
            "model": ErrorResponse,
            "description": cls.default_message,
            "content": {
                "application/json": {
                    "example": {
                        "error": cls.code,
                        "message": cls.default_message,
                        "details": {},
                        "trace_id": "example-trace-id",
                    }
                }
            },
        }
