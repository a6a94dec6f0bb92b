"""Ports layer - Abstract interfaces (Protocols) for the application.

Ports define the contracts between the ingestion core and the external
routing backends it attaches to the problem.
"""

from .routing import RoutingPort

__all__ = ["RoutingPort"]
