"""Failure taxonomy for forwarded requests.

Every class carries the HTTP status it maps to and a machine-readable
``code``.  These never escape :func:`gateway.proxy.forwarder.forward`; they are
turned into a JSON failure body at the handler boundary.

A backend that answers with a non-2xx status is *not* an error here: its
status and body are passed through unchanged.
"""

from __future__ import annotations

from typing import Sequence


class GatewayError(Exception):
    """Base class for failures produced by the gateway itself."""

    status_code: int = 500
    code: str = "gateway_error"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        detail: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.detail = detail


# ---------------------------------------------------------------------------
# Validation (generated locally, no outbound call)
# ---------------------------------------------------------------------------

class GatewayValidationError(GatewayError):
    status_code = 400
    code = "validation_error"


class MissingFieldsError(GatewayValidationError):
    code = "missing_fields"

    def __init__(self, message: str, fields: Sequence[str]) -> None:
        super().__init__(message)
        self.fields = tuple(fields)


class MissingParameterError(GatewayValidationError):
    code = "missing_parameter"

    def __init__(self, message: str, name: str) -> None:
        super().__init__(message)
        self.name = name


class InvalidBodyError(GatewayValidationError):
    code = "invalid_json"


class UnauthorizedError(GatewayError):
    status_code = 401
    code = "unauthorized"


# ---------------------------------------------------------------------------
# Transport (the outbound call could not be completed)
# ---------------------------------------------------------------------------

class TransportError(GatewayError):
    status_code = 500
    code = "backend_error"


class BackendUnavailableError(TransportError):
    """The backend refused or never accepted the connection."""

    status_code = 503
    code = "backend_unavailable"
