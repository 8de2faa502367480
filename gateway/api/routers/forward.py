"""Forwarding endpoints, one per entry of the route table.

Routes (mounted under ``/api``)
-------------------------------
POST   /auth/login               → /users/login
POST   /leave/create             → /leave/create
GET    /leave/my                 → /leave/my
GET    /shift/status?date=…      → /shift/me/date/{date}
POST   /shift/clock-in           → /shift/clock-in
POST   /shift/clock-out          → /shift/clock-out
GET    /attendance/{date}        → /shift/attendance/{date}
GET    /user/getall              → /users/getall
GET    /user/profile             → /users/profile
POST   /user/create              → /users/create
DELETE /user/delete              → /users/deleteUser
POST   /user/reset-password      → /users/resetPassword
POST   /work-locations/create    → /locations/create

See :mod:`gateway.proxy.routes` for what each one checks and forwards.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Iterable

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, Response

from gateway.proxy import ROUTES, ForwardRoute, GatewayResponse, InboundRequest, forward

router = APIRouter()


# ---------------------------------------------------------------------------
# Conversion helpers
# ---------------------------------------------------------------------------

async def _inbound(request: Request) -> InboundRequest:
    return InboundRequest(
        method=request.method,
        headers={key.lower(): value for key, value in request.headers.items()},
        query=dict(request.query_params),
        path_params=dict(request.path_params),
        body=await request.body(),
    )


def _response(result: GatewayResponse) -> Response:
    if result.empty or result.status_code == 204:
        return Response(status_code=result.status_code)
    return JSONResponse(content=result.body, status_code=result.status_code)


def _endpoint(route: ForwardRoute) -> Callable[[Request], Awaitable[Response]]:
    async def endpoint(request: Request) -> Response:
        result = await forward(route, await _inbound(request), request.app.state.settings)
        return _response(result)

    endpoint.__name__ = route.name.replace("-", "_") + "_endpoint"
    endpoint.__doc__ = route.summary
    return endpoint


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------

def _register(routes: Iterable[ForwardRoute]) -> None:
    for route in routes:
        router.add_api_route(
            route.path,
            _endpoint(route),
            methods=[route.method],
            name=route.name,
            summary=route.summary,
            response_model=None,
        )


_register(ROUTES)
