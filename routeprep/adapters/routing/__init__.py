"""Routing adapters - Implementations of RoutingPort.

Available implementations:
- OsrmRoutedAdapter: osrm-routed over HTTP
- LibosrmAdapter: OSRM in-process through the optional bindings
- OrsAdapter: openrouteservice over HTTP
"""

from .libosrm_adapter import LibosrmAdapter, libosrm_available
from .ors_adapter import OrsAdapter
from .osrm_routed_adapter import OsrmRoutedAdapter

__all__ = ["OsrmRoutedAdapter", "LibosrmAdapter", "OrsAdapter", "libosrm_available"]
