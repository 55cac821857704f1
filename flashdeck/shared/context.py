"""
Request-scoped context variables.

The middleware fills them at the start of every request so that log
records and error bodies can be correlated without passing ids around.
"""

from contextvars import ContextVar

trace_id_var: ContextVar[str] = ContextVar("trace_id", default="")
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def get_trace_id() -> str:
    return trace_id_var.get()


def get_request_id() -> str:
    return request_id_var.get()


def set_trace_id(trace_id: str) -> None:
    trace_id_var.set(trace_id)


def set_request_id(request_id: str) -> None:
    request_id_var.set(request_id)
