"""Time-ordered UUID7 identifiers and their column type."""

import time
import uuid
from typing import Any

from sqlalchemy import TypeDecorator
from sqlalchemy.dialects.postgresql import UUID as PG_UUID


def uuid7() -> uuid.UUID:
    """Generate a UUID7 value.

    Layout: 48 bits of unix milliseconds, version nibble 7,
    RFC 4122 variant bits, the rest random. Values created later
    sort after earlier ones, which keeps primary key indexes compact.
    """
    timestamp_ms = int(time.time() * 1000)
    value = timestamp_ms << 80
    value |= 0x7000 << 64
    value |= uuid.uuid4().int & ((1 << 62) - 1)
    value = (value & ~(0x3 << 62)) | (0x2 << 62)
    return uuid.UUID(int=value)


class UUID7(TypeDecorator):
    """PostgreSQL UUID column that always hands back ``uuid.UUID``."""

    impl = PG_UUID
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> str | None:
        if value is None:
            return None
        return str(value) if isinstance(value, uuid.UUID) else value

    def process_result_value(self, value: Any, dialect) -> uuid.UUID | None:
        if value is None or isinstance(value, uuid.UUID):
            return value
        return uuid.UUID(str(value))
