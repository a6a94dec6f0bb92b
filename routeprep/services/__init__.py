"""Services layer - Application orchestration.

Available services:
- InputParserService: Turns problem documents into Input aggregates
- RoutingResolver: Selects the routing backend for a problem
"""

from .input_parser import InputParserService, parse
from .routing_resolver import RoutingResolver

__all__ = ["InputParserService", "RoutingResolver", "parse"]
