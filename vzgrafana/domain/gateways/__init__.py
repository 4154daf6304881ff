"""
Gateways Package - Domain Layer

Interfaces for talking to the volkszaehler middleware. Implementations are
provided by the infrastructure layer.
"""

from .middleware_gateway import IMiddlewareGateway

__all__ = ["IMiddlewareGateway"]
