"""Ingestion layer for route-optimization problems.

Validates loosely structured problem documents (vehicles, jobs,
shipments, optional cost matrix) and builds the Input aggregate a
solver consumes, with a routing backend attached.

    from routeprep import parse
    problem = parse(open("problem.json").read())
"""

from .domain import ErrorKind, Input, InputError, RoutePrepError, RoutingError
from .services import InputParserService, parse

__all__ = [
    "parse",
    "InputParserService",
    "Input",
    "ErrorKind",
    "RoutePrepError",
    "InputError",
    "RoutingError",
]
