"""HTTP gateway for pingwire."""

from pingwire.gateway.api import create_gateway_app

__all__ = ["create_gateway_app"]
