"""The one forwarding behaviour every gateway route shares.

``forward()`` runs a fixed, linear sequence for a :class:`ForwardRoute`:

1. check required query/path parameters,
2. check the bearer token,
3. parse the JSON body and check required fields,
4. make exactly one call to the backend,
5. pass the backend's status and JSON body straight through.

Steps 1-3 answer 400/401 locally without touching the backend.  If step 4
cannot complete, the caller gets a synthesized 500 (or 503 for routes that
report an unreachable backend).  Nothing is retried and nothing is kept
between calls.
"""

from __future__ import annotations

import json
import math
from typing import Any, Optional, Sequence
from urllib.parse import quote

import httpx

from gateway.config import Settings
from gateway.log import get_logger
from gateway.proxy.auth import bearer_header, extract_bearer_token
from gateway.proxy.envelope import error_body
from gateway.proxy.errors import (
    BackendUnavailableError,
    GatewayError,
    InvalidBodyError,
    MissingFieldsError,
    MissingParameterError,
    TransportError,
    UnauthorizedError,
)
from gateway.proxy.models import ForwardRoute, GatewayResponse, InboundRequest

logger = get_logger(__name__)

_DIAGNOSTIC_LIMIT = 120


# ---------------------------------------------------------------------------
# Message helpers
# ---------------------------------------------------------------------------

def required_fields_message(fields: Sequence[str]) -> str:
    """``("email", "password")`` → ``"Email and password are required"``."""
    names = list(fields)
    if len(names) == 1:
        text, verb = names[0], "is"
    else:
        text, verb = ", ".join(names[:-1]) + " and " + names[-1], "are"
    return f"{text[:1].upper()}{text[1:]} {verb} required"


def required_parameter_message(name: str) -> str:
    return f"{name[:1].upper()}{name[1:]} parameter is required"


def _is_missing(value: Any) -> bool:
    # Numeric zero is a real value (a latitude of 0, say).
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return False
    return not value


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------

def _resolve_params(route: ForwardRoute, inbound: InboundRequest) -> dict[str, str]:
    params: dict[str, str] = {}
    for name in route.required_query:
        value = inbound.query.get(name)
        if not value:
            raise MissingParameterError(required_parameter_message(name), name)
        params[name] = value
    for name in route.path_params:
        params[name] = inbound.path_params.get(name, "")
    return params


def _resolve_token(route: ForwardRoute, inbound: InboundRequest) -> Optional[str]:
    if not route.requires_auth:
        return None
    token = extract_bearer_token(inbound.headers)
    if token is None:
        raise UnauthorizedError(route.unauthorized_message)
    return token


def _resolve_body(route: ForwardRoute, inbound: InboundRequest) -> Any:
    if not route.reads_body:
        return None

    if not inbound.body.strip():
        data: Any = {}
    else:
        try:
            data = json.loads(inbound.body)
        except ValueError as exc:
            raise InvalidBodyError("Invalid JSON in request body") from exc

    fields = data if isinstance(data, dict) else {}
    missing = [name for name in route.required_fields if _is_missing(fields.get(name))]
    if missing:
        message = route.missing_fields_message or required_fields_message(route.required_fields)
        raise MissingFieldsError(message, missing)

    if route.build_body is not None:
        return route.build_body(fields)
    return data


def _backend_path(route: ForwardRoute, params: dict[str, str]) -> str:
    if not params:
        return route.backend_path
    return route.backend_path.format(
        **{name: quote(value, safe="") for name, value in params.items()}
    )


# ---------------------------------------------------------------------------
# Failure mapping
# ---------------------------------------------------------------------------

def _diagnostic(route: ForwardRoute, exc: BaseException) -> Optional[str]:
    if not route.expose_error_detail:
        return None
    text = str(exc) or type(exc).__name__
    return text[:_DIAGNOSTIC_LIMIT]


def _transport_error(route: ForwardRoute, exc: BaseException) -> TransportError:
    return TransportError(route.failure_message, detail=_diagnostic(route, exc))


def _connect_error(
    route: ForwardRoute, settings: Settings, exc: BaseException
) -> TransportError:
    if route.connect_error_status == BackendUnavailableError.status_code:
        return BackendUnavailableError(
            "Cannot connect to backend server. "
            f"Please ensure the backend is running on {settings.api_base_url}",
            detail=_diagnostic(route, exc),
        )
    return _transport_error(route, exc)


def _rejection_context(exc: GatewayError) -> dict[str, Any]:
    if isinstance(exc, MissingFieldsError):
        return {"missing_fields": list(exc.fields)}
    if isinstance(exc, MissingParameterError):
        return {"missing_parameter": exc.name}
    return {}


def _failure(
    route: ForwardRoute, exc: GatewayError, settings: Settings, log: Any
) -> GatewayResponse:
    if exc.status_code < 500:
        log.info(
            "request_rejected",
            status=exc.status_code,
            code=exc.code,
            **_rejection_context(exc),
        )
    return GatewayResponse(
        status_code=exc.status_code,
        body=error_body(exc, route.family, legacy=settings.legacy_error_bodies),
    )


# ---------------------------------------------------------------------------
# Outbound call
# ---------------------------------------------------------------------------

def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text[:20]}")
    return value


def _parse_backend_json(content: bytes) -> Any:
    """Strict JSON: a ``NaN`` or infinite value could not be sent back to the caller."""
    return json.loads(content, parse_constant=_reject_constant, parse_float=_finite_float)


async def _call_backend(
    route: ForwardRoute,
    url: str,
    headers: dict[str, str],
    payload: Any,
    settings: Settings,
    log: Any,
) -> GatewayResponse:
    log.info("backend_request", url=url)
    try:
        async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
            response = await client.request(route.method, url, headers=headers, json=payload)
    except httpx.ConnectError as exc:
        log.error("backend_unreachable", url=url, error=repr(exc))
        raise _connect_error(route, settings, exc) from exc
    except httpx.HTTPError as exc:
        log.error("backend_call_failed", url=url, error=repr(exc))
        raise _transport_error(route, exc) from exc

    log.info("backend_responded", status=response.status_code)

    if not response.content:
        return GatewayResponse(status_code=response.status_code, empty=True)

    try:
        body = _parse_backend_json(response.content)
    except ValueError as exc:
        log.error(
            "backend_body_unparseable",
            status=response.status_code,
            content_type=response.headers.get("content-type"),
        )
        raise _transport_error(route, exc) from exc

    log.debug("backend_body", body=body)
    return GatewayResponse(status_code=response.status_code, body=body)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------

async def forward(
    route: ForwardRoute, inbound: InboundRequest, settings: Settings
) -> GatewayResponse:
    """Forward *inbound* according to *route* and return the caller's response.

    Never raises: every failure becomes a :class:`GatewayResponse` carrying a
    failure body from :func:`gateway.proxy.envelope.error_body`.
    """
    log = logger.bind(route=route.name, method=route.method)
    log.info("request_received", path=route.path)

    try:
        params = _resolve_params(route, inbound)
        token = _resolve_token(route, inbound)
        payload = _resolve_body(route, inbound)

        headers = {"Content-Type": "application/json"}
        if token is not None:
            headers["Authorization"] = bearer_header(token)

        url = settings.backend_url(_backend_path(route, params))
        return await _call_backend(route, url, headers, payload, settings, log)
    except GatewayError as exc:
        return _failure(route, exc, settings, log)
    except Exception as exc:  # noqa: BLE001
        log.exception("request_failed")
        return _failure(route, _transport_error(route, exc), settings, log)
