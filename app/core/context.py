from __future__ import annotations

from contextvars import ContextVar
from typing import Optional

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
route_ctx: ContextVar[Optional[str]] = ContextVar("route", default=None)


def set_request_context(request_id: Optional[str], route: Optional[str] = None) -> None:
    request_id_ctx.set(request_id)
    route_ctx.set(route)


def clear_request_context() -> None:
    set_request_context(None, None)


def get_request_id() -> Optional[str]:
    return request_id_ctx.get()


def get_route() -> Optional[str]:
    """Method and path of the request being served, if any."""
    return route_ctx.get()
