"""Failure bodies returned when the gateway answers on the backend's behalf.

Canonical shape, used by every route::

    {"success": "false", "code": "missing_fields", "message": "..."}

With ``legacy=True`` the per-family bodies older clients expect are rendered
instead: ``{"error": "..."}`` for the leave routes and
``{"success": "false", "message": "..."}`` for everything else.
"""

from __future__ import annotations

from typing import Any

from gateway.proxy.errors import GatewayError, TransportError, UnauthorizedError
from gateway.proxy.models import ErrorFamily

# Wording the leave routes always used, whatever the route's own messages say.
_LEGACY_LEAVE_MESSAGES = {
    UnauthorizedError: "Unauthorized",
    TransportError: "Internal server error",
}


def error_body(
    exc: GatewayError,
    family: ErrorFamily = ErrorFamily.STANDARD,
    *,
    legacy: bool = False,
) -> dict[str, Any]:
    """Render *exc* as a JSON-serialisable failure body."""
    if legacy and family is ErrorFamily.LEAVE:
        for cls, text in _LEGACY_LEAVE_MESSAGES.items():
            if isinstance(exc, cls):
                return {"error": text}
        return {"error": exc.message}

    body: dict[str, Any] = {"success": "false"}
    if not legacy:
        body["code"] = exc.code
    body["message"] = exc.message
    if exc.detail:
        body["error"] = exc.detail
    return body
