"""
Middleware для обработки запросов.
"""

import logging
import time
import uuid
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from flashdeck.shared.context import request_id_var, trace_id_var

from .config import settings
from .metrics import HTTP_REQUEST_IN_PROGRESS, record_http_request

logger = logging.getLogger(__name__)


class RequestTracingMiddleware(BaseHTTPMiddleware):
    """Middleware для трейсинга и логирования запросов.

    Проставляет request ID в контекст логирования, пишет метрики
    и одну строку access-лога на запрос.
    """

    # Endpoints для пропуска логирования
    SKIP_LOG_ENDPOINTS: frozenset[str] = frozenset(
        {
            "/observability/health",
            "/observability/ready",
            "/observability/live",
            "/observability/metrics",
        }
    )

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Обработать запрос с трейсингом и метриками."""
        request_id = (
            request.headers.get("X-Request-ID")
            or request.headers.get("X-Correlation-ID")
            or str(uuid.uuid4())
        )
        trace_id = request.headers.get("X-Trace-ID") or request_id
        request.state.request_id = request_id

        request_token = request_id_var.set(request_id)
        trace_token = trace_id_var.set(trace_id)

        method = request.method
        endpoint = self._get_endpoint(request)
        track = settings.metrics.enabled

        if track:
            HTTP_REQUEST_IN_PROGRESS.labels(method=method, endpoint=endpoint).inc()
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            duration = time.perf_counter() - start_time
            if track:
                record_http_request(method, self._get_endpoint(request), 500, duration)
            logger.exception(
                "%s %s failed after %.2f ms",
                method,
                request.url.path,
                duration * 1000,
            )
            raise
        finally:
            if track:
                HTTP_REQUEST_IN_PROGRESS.labels(method=method, endpoint=endpoint).dec()
            request_id_var.reset(request_token)
            trace_id_var.reset(trace_token)

        duration = time.perf_counter() - start_time
        if track:
            record_http_request(method, self._get_endpoint(request), response.status_code, duration)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Trace-ID"] = trace_id

        self._log_request(request, response, duration, request_id)
        return response

    def _get_endpoint(self, request: Request) -> str:
        """Шаблон пути маршрута (низкая кардинальность меток), иначе сырой путь."""
        route = request.scope.get("route")
        path = getattr(route, "path", None)
        return path or request.url.path

    def _log_request(
        self,
        request: Request,
        response: Response,
        duration: float,
        request_id: str,
    ) -> None:
        """Логировать детали запроса."""
        if request.url.path in self.SKIP_LOG_ENDPOINTS:
            return

        level = logging.INFO
        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING

        logger.log(
            level,
            "%s %s -> %s (%.2f ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration * 1000,
            extra={
                "request_id": request_id,
                "status_code": response.status_code,
                "duration_ms": round(duration * 1000, 2),
                "client_ip": request.client.host if request.client else "unknown",
            },
        )
