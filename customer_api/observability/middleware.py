from __future__ import annotations

import uuid
from time import perf_counter
from typing import Any, Callable

import structlog
from starlette.datastructures import MutableHeaders

from customer_api.observability.metrics import get_metrics

_UNMETERED_ROUTES = frozenset({"/metrics"})
_FIXED_ROUTES = frozenset({"/", "/health", "/metrics", "/customers"})


def route_label(path: str) -> tuple[str, str | None]:
    """Collapse a request path to its route template plus the raw customer id.

    ``/customers/17`` becomes ``("/customers/{id}", "17")``; paths outside the
    service's routes share the ``"unmatched"`` label so metrics stay bounded.
    """

    if path in _FIXED_ROUTES:
        return path, None
    if path.startswith("/static/"):
        return "/static", None
    prefix, sep, segment = path.partition("/customers/")
    if not prefix and sep and segment and "/" not in segment:
        return "/customers/{id}", segment
    return "unmatched", None


class RequestContextMiddleware:
    """Binds request_id/route/customer_id for logs, sets X-Request-ID, meters requests."""

    def __init__(self, app: Callable[..., Any]) -> None:
        self.app = app

    async def __call__(self, scope: dict[str, Any], receive: Callable[..., Any], send: Callable[..., Any]) -> None:
        if scope.get("type") != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())
        method = scope.get("method", "")
        route, customer_id = route_label(scope.get("path", ""))

        context: dict[str, Any] = {"request_id": request_id, "method": method, "route": route}
        if customer_id is not None:
            context["customer_id"] = customer_id
        structlog.contextvars.bind_contextvars(**context)

        start = perf_counter()
        status_code: int = 500

        async def send_wrapper(message: dict[str, Any]) -> None:
            nonlocal status_code

            if message.get("type") == "http.response.start":
                status_code = int(message.get("status", 500))
                MutableHeaders(scope=message)["X-Request-ID"] = request_id

            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            elapsed_ms = (perf_counter() - start) * 1000.0

            if route not in _UNMETERED_ROUTES:
                get_metrics().observe_http_request(
                    elapsed_ms=elapsed_ms,
                    status_code=status_code,
                    route=f"{method} {route}",
                )

            structlog.get_logger("customer_api.access").info(
                "http_request",
                status_code=status_code,
                elapsed_ms=round(elapsed_ms, 2),
            )

            structlog.contextvars.clear_contextvars()
