"""Bearer token extraction from the inbound ``Authorization`` header."""

from __future__ import annotations

from typing import Mapping, Optional


def extract_bearer_token(headers: Mapping[str, str]) -> Optional[str]:
    """Return the token from ``Authorization: Bearer <token>``, or ``None``.

    The scheme is matched case-insensitively.  A missing header, another
    scheme, or an empty token all yield ``None``.  The token itself is opaque
    and returned unmodified.
    """
    value = headers.get("authorization")
    if not value:
        return None
    scheme, _, token = value.strip().partition(" ")
    if scheme.lower() != "bearer":
        return None
    token = token.strip()
    return token or None


def bearer_header(token: str) -> str:
    return f"Bearer {token}"
