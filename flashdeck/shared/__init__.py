"""
Shared module - cross-cutting concerns and utilities.

- Context variables for request/trace IDs
- Logging utilities with Loguru
- Error hierarchy and handlers
- SQLAlchemy mixins and base schemas
"""

from .context import (
    get_request_id,
    get_trace_id,
    request_id_var,
    set_request_id,
    set_trace_id,
    trace_id_var,
)
from .sentinel import UNSET, Unset

__all__ = [
    # Context
    "get_request_id",
    "get_trace_id",
    "request_id_var",
    "set_request_id",
    "set_trace_id",
    "trace_id_var",
    # Sentinel
    "UNSET",
    "Unset",
]
