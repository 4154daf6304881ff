"""
Gateways Package - Infrastructure Layer

Concrete implementations of the gateway interfaces defined in the domain
layer.
"""

from .volkszaehler_gateway import VolkszaehlerGateway

__all__ = ["VolkszaehlerGateway"]
