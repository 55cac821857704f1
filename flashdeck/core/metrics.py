"""
Prometheus метрики для мониторинга приложения.
"""

from fastapi.responses import Response
from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    Info,
    generate_latest,
)

from .config import settings

# Отдельный registry, чтобы не смешивать метрики приложения с метриками процесса
REGISTRY = CollectorRegistry(auto_describe=True)


# ==================== Application Info ====================

APP_INFO = Info(
    "flashdeck_app",
    "Application information",
    registry=REGISTRY,
)


# ==================== HTTP Metrics ====================

HTTP_REQUEST_COUNT = Counter(
    "flashdeck_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status_code"],
    registry=REGISTRY,
)

HTTP_REQUEST_LATENCY = Histogram(
    "flashdeck_http_request_duration_seconds",
    "HTTP request latency in seconds",
    ["method", "endpoint"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0),
    registry=REGISTRY,
)

HTTP_REQUEST_IN_PROGRESS = Gauge(
    "flashdeck_http_requests_in_progress",
    "Number of HTTP requests currently in progress",
    ["method", "endpoint"],
    registry=REGISTRY,
)


# ==================== Domain Metrics ====================

AUTH_ATTEMPTS_TOTAL = Counter(
    "flashdeck_auth_attempts_total",
    "Authentication attempts",
    ["operation", "result"],
    registry=REGISTRY,
)

DECK_OPERATIONS_TOTAL = Counter(
    "flashdeck_deck_operations_total",
    "Deck operations by outcome",
    ["operation", "result"],
    registry=REGISTRY,
)

CARD_OPERATIONS_TOTAL = Counter(
    "flashdeck_card_operations_total",
    "Card operations by outcome",
    ["operation", "result"],
    registry=REGISTRY,
)


# ==================== Helper Functions ====================


def record_http_request(method: str, endpoint: str, status_code: int, duration: float) -> None:
    """Записать метрики HTTP запроса."""
    HTTP_REQUEST_COUNT.labels(
        method=method,
        endpoint=endpoint,
        status_code=str(status_code),
    ).inc()
    HTTP_REQUEST_LATENCY.labels(method=method, endpoint=endpoint).observe(duration)


def record_auth_attempt(operation: str, result: str) -> None:
    """Записать попытку регистрации или входа."""
    AUTH_ATTEMPTS_TOTAL.labels(operation=operation, result=result).inc()


def record_deck_operation(operation: str, result: str = "success") -> None:
    """Записать операцию над колодой."""
    DECK_OPERATIONS_TOTAL.labels(operation=operation, result=result).inc()


def record_card_operation(operation: str, result: str = "success") -> None:
    """Записать операцию над карточкой."""
    CARD_OPERATIONS_TOTAL.labels(operation=operation, result=result).inc()


# ==================== Metrics Endpoint ====================


def get_metrics() -> tuple[bytes, str]:
    """
    Получить метрики в формате Prometheus.

    Returns:
        Tuple из (содержимое, content-type).
    """
    return generate_latest(REGISTRY), CONTENT_TYPE_LATEST


async def metrics_endpoint() -> Response:
    """Endpoint для экспорта метрик."""
    content, content_type = get_metrics()
    return Response(content=content, media_type=content_type)


def init_metrics() -> None:
    """Инициализировать метрики при старте приложения."""
    if not settings.metrics.enabled:
        return
    APP_INFO.info({"name": settings.app.name, "version": settings.app.version})
