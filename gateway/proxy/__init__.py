"""Request-forwarding package.

Public API::

    from gateway.proxy import ROUTES_BY_NAME, forward
    response = await forward(ROUTES_BY_NAME["login"], inbound, settings)
"""

from gateway.proxy.forwarder import forward
from gateway.proxy.models import ErrorFamily, ForwardRoute, GatewayResponse, InboundRequest
from gateway.proxy.routes import ROUTES, ROUTES_BY_NAME

__all__ = [
    "forward",
    "ErrorFamily",
    "ForwardRoute",
    "GatewayResponse",
    "InboundRequest",
    "ROUTES",
    "ROUTES_BY_NAME",
]
