"""Data models for the forwarding pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Mapping, Optional

DEFAULT_UNAUTHORIZED_MESSAGE = "Authorization token required"
DEFAULT_FAILURE_MESSAGE = "Internal server error. Please try again later."

_PLACEHOLDER = re.compile(r"\{(\w+)\}")

BodyBuilder = Callable[[dict[str, Any]], Any]


class ErrorFamily(str, Enum):
    """Legacy error-body dialect a route answered with."""

    STANDARD = "standard"
    LEAVE = "leave"


@dataclass(frozen=True)
class ForwardRoute:
    """Declarative description of one forwarded operation.

    ``path`` is relative to the ``/api`` mount point; ``backend_path`` is
    relative to the configured backend base URL and may hold ``{name}``
    placeholders filled from path or query parameters.
    """

    name: str
    method: str
    path: str
    backend_path: str
    requires_auth: bool = True
    required_fields: tuple[str, ...] = ()
    required_query: tuple[str, ...] = ()
    forwards_body: bool = False
    build_body: Optional[BodyBuilder] = None
    family: ErrorFamily = ErrorFamily.STANDARD
    missing_fields_message: Optional[str] = None
    unauthorized_message: str = DEFAULT_UNAUTHORIZED_MESSAGE
    failure_message: str = DEFAULT_FAILURE_MESSAGE
    connect_error_status: int = 500
    expose_error_detail: bool = False
    summary: str = ""

    @property
    def reads_body(self) -> bool:
        """Whether the inbound JSON body is parsed at all."""
        return self.forwards_body or bool(self.required_fields) or self.build_body is not None

    @property
    def path_params(self) -> tuple[str, ...]:
        """Placeholders declared in the inbound ``path``."""
        return tuple(_PLACEHOLDER.findall(self.path))


@dataclass
class InboundRequest:
    """The parts of an incoming HTTP request the forwarder looks at.

    Header names are lower-cased.
    """

    method: str
    headers: Mapping[str, str] = field(default_factory=dict)
    query: Mapping[str, str] = field(default_factory=dict)
    path_params: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""


@dataclass
class GatewayResponse:
    """Status code and JSON body returned to the caller.

    ``empty`` marks a backend answer with no content at all, as opposed to a
    JSON ``null`` body.
    """

    status_code: int
    body: Any = None
    empty: bool = False
