"""The gateway's route table.

Each :class:`ForwardRoute` below becomes one HTTP endpoint under ``/api``.
Adding an operation means adding an entry here, not writing a handler.

Body builders only reshape what the front-end sends into what the backend
expects; value checks beyond presence belong to the backend.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, Optional

from gateway.proxy.models import ErrorFamily, ForwardRoute

CLOCK_OUT_DEFAULT_ADDRESS = "Location not available"
CLOCK_OUT_DEFAULT_ACCURACY = 10
CLOCK_OUT_DEFAULT_NOTES = "Clock out via web app"

_UNREACHABLE = 503


# ---------------------------------------------------------------------------
# Body builders
# ---------------------------------------------------------------------------

def _iso_utc(moment: datetime) -> str:
    """``2024-05-01T08:30:00.123Z``"""
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def _strip(value: Any) -> Any:
    return value.strip() if isinstance(value, str) else value


def _number(value: Any, kind: Callable[[Any], Any] = float) -> Any:
    """Coerce *value* with *kind*; leave it as sent when it doesn't convert."""
    if isinstance(value, bool):
        return value
    try:
        return kind(value)
    except (TypeError, ValueError):
        return value


def pick(*names: str) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """Builder forwarding only *names* from the inbound body."""

    def _build(body: dict[str, Any]) -> dict[str, Any]:
        return {name: body.get(name) for name in names}

    return _build


def build_clock_in(body: dict[str, Any], now: Optional[datetime] = None) -> dict[str, Any]:
    now = now or datetime.now(timezone.utc)
    return {"location": body.get("location"), "timestamp": _iso_utc(now)}


def build_clock_out(body: dict[str, Any], now: Optional[datetime] = None) -> dict[str, Any]:
    """Turn the front-end's clock-out form into the backend's clock-out record.

    ``date`` is local midnight of the current day written as a UTC instant, so
    on a UTC+7 host it reads ``...T17:00:00.000Z`` of the previous day.  The
    day boundary is taken in *now*'s own timezone, which defaults to the
    host's.  ``clockOutTime`` is the actual instant.
    """
    now = now or datetime.now().astimezone()
    location = body.get("location")
    if not isinstance(location, dict):
        location = {}
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    return {
        "date": _iso_utc(midnight),
        "clockOutTime": _iso_utc(now),
        "clockOutLocation": {
            "latitude": location.get("latitude"),
            "longitude": location.get("longitude"),
            "address": location.get("address") or CLOCK_OUT_DEFAULT_ADDRESS,
            "accuracy": location.get("accuracy") or CLOCK_OUT_DEFAULT_ACCURACY,
            "name": body.get("workLocationName"),
        },
        "workLocationId": body.get("workLocationId"),
        "notes": body.get("notes") or CLOCK_OUT_DEFAULT_NOTES,
    }


def build_create_user(body: dict[str, Any]) -> dict[str, Any]:
    email = _strip(body.get("email"))
    role = body.get("role")
    return {
        "email": email.lower() if isinstance(email, str) else email,
        "fname": _strip(body.get("fname")),
        "lname": _strip(body.get("lname")),
        "contact": _strip(body.get("contact")),
        "role": role.lower() if isinstance(role, str) else role,
        "password": body.get("password"),
    }


def build_work_location(body: dict[str, Any]) -> dict[str, Any]:
    return {
        "latitude": _number(body.get("latitude")),
        "longitude": _number(body.get("longitude")),
        "address": _strip(body.get("address")),
        "radius": _number(body.get("radius"), int),
        "name": _strip(body.get("name")) or "",
    }


# ---------------------------------------------------------------------------
# Route table
# ---------------------------------------------------------------------------

CREATE_USER_FIELDS = ("email", "fname", "lname", "contact", "role", "password")
WORK_LOCATION_FIELDS = ("latitude", "longitude", "address", "radius")

ROUTES: tuple[ForwardRoute, ...] = (
    # -- auth ---------------------------------------------------------------
    ForwardRoute(
        name="login",
        method="POST",
        path="/auth/login",
        backend_path="/users/login",
        requires_auth=False,
        required_fields=("email", "password"),
        build_body=pick("email", "password"),
        summary="Exchange email and password for a backend token.",
    ),
    # -- leave --------------------------------------------------------------
    ForwardRoute(
        name="create-leave",
        method="POST",
        path="/leave/create",
        backend_path="/leave/create",
        forwards_body=True,
        family=ErrorFamily.LEAVE,
        unauthorized_message="Unauthorized",
        failure_message="Internal server error",
        summary="Submit a leave request.",
    ),
    ForwardRoute(
        name="list-my-leave",
        method="GET",
        path="/leave/my",
        backend_path="/leave/my",
        family=ErrorFamily.LEAVE,
        unauthorized_message="Unauthorized",
        failure_message="Internal server error",
        summary="List the caller's leave requests.",
    ),
    # -- shift / attendance -------------------------------------------------
    ForwardRoute(
        name="shift-status",
        method="GET",
        path="/shift/status",
        backend_path="/shift/me/date/{date}",
        required_query=("date",),
        expose_error_detail=True,
        summary="Shift status of the caller for one date.",
    ),
    ForwardRoute(
        name="clock-in",
        method="POST",
        path="/shift/clock-in",
        backend_path="/shift/clock-in",
        build_body=build_clock_in,
        summary="Clock in at the given location.",
    ),
    ForwardRoute(
        name="clock-out",
        method="POST",
        path="/shift/clock-out",
        backend_path="/shift/clock-out",
        required_fields=("location", "workLocationId", "workLocationName"),
        missing_fields_message="Location, work location ID and name are required",
        build_body=build_clock_out,
        summary="Clock out at a work location.",
    ),
    ForwardRoute(
        name="attendance-by-date",
        method="GET",
        path="/attendance/{date}",
        backend_path="/shift/attendance/{date}",
        unauthorized_message="Authorization header missing",
        failure_message="Failed to fetch attendance data",
        summary="Attendance records for one date.",
    ),
    # -- users --------------------------------------------------------------
    ForwardRoute(
        name="list-users",
        method="GET",
        path="/user/getall",
        backend_path="/users/getall",
        unauthorized_message="No token provided",
        failure_message="Failed to fetch users",
        connect_error_status=_UNREACHABLE,
        summary="List all users.",
    ),
    ForwardRoute(
        name="get-profile",
        method="GET",
        path="/user/profile",
        backend_path="/users/profile",
        unauthorized_message="No token provided",
        failure_message="Failed to fetch user profile",
        connect_error_status=_UNREACHABLE,
        summary="Profile of the caller.",
    ),
    ForwardRoute(
        name="create-user",
        method="POST",
        path="/user/create",
        backend_path="/users/create",
        required_fields=CREATE_USER_FIELDS,
        missing_fields_message="All fields are required: " + ", ".join(CREATE_USER_FIELDS),
        build_body=build_create_user,
        connect_error_status=_UNREACHABLE,
        summary="Create a user account.",
    ),
    ForwardRoute(
        name="delete-user",
        method="DELETE",
        path="/user/delete",
        backend_path="/users/deleteUser",
        required_fields=("email",),
        build_body=pick("email"),
        connect_error_status=_UNREACHABLE,
        summary="Delete a user by email.",
    ),
    ForwardRoute(
        name="reset-password",
        method="POST",
        path="/user/reset-password",
        backend_path="/users/resetPassword",
        required_fields=("currentPassword", "newPassword"),
        missing_fields_message="Current password and new password are required",
        build_body=pick("currentPassword", "newPassword"),
        connect_error_status=_UNREACHABLE,
        summary="Change the caller's password.",
    ),
    # -- work locations -----------------------------------------------------
    ForwardRoute(
        name="create-work-location",
        method="POST",
        path="/work-locations/create",
        backend_path="/locations/create",
        required_fields=WORK_LOCATION_FIELDS,
        missing_fields_message="All fields are required: " + ", ".join(WORK_LOCATION_FIELDS),
        build_body=build_work_location,
        connect_error_status=_UNREACHABLE,
        summary="Register a work location.",
    ),
)

ROUTES_BY_NAME: dict[str, ForwardRoute] = {route.name: route for route in ROUTES}
