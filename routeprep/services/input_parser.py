"""Input parser service - Document orchestrator.

Turns a JSON problem document into a validated Input aggregate:
1. JSON decoding
2. Top-level shape checks (jobs/shipments, vehicles)
3. Amount dimensionality from the first vehicle
4. Vehicles, and the common routing profile
5. Jobs and shipments, with or without a caller-provided matrix
6. Routing backend resolution

The first violated invariant aborts the whole parse.
"""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass, field
from typing import Any, Optional

from ..config import AppConfig, get_config
from ..domain.errors import InputError
from ..domain.models import Matrix
from ..domain.problem import Input
from ..parsing.builders import check_id, get_job, get_shipment, get_vehicle
from ..parsing.fields import get_string, is_array, is_object, is_uint
from .routing_resolver import RoutingResolver


def _parse_float(literal: str) -> float:
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number too big to be stored in double: {literal}.")
    return value


def _reject_constant(name: str) -> float:
    # NaN and Infinity are accepted by json.loads but are not JSON.
    raise ValueError(f"Invalid value: {name}.")


def _non_empty_array(document: Any, key: str) -> bool:
    return is_object(document) and is_array(document.get(key)) and bool(document[key])


def parse_matrix(value: Any) -> Matrix:
    """Validate a square matrix of unsigned integers.

    Raises:
        InputError: Naming the first invalid line or entry.
    """
    if not is_array(value):
        raise InputError("Invalid matrix.", key="matrix")

    size = len(value)
    rows = []
    for i, line in enumerate(value):
        if not is_array(line) or len(line) != size:
            raise InputError(f"Invalid matrix line {i}.", key="matrix")
        for j, cost in enumerate(line):
            if not is_uint(cost):
                raise InputError(f"Invalid matrix entry ({i},{j}).", key="matrix")
        rows.append(tuple(line))
    return tuple(rows)


@dataclass
class InputParserService:
    """Main service for ingesting problem documents.

    Attributes:
        config: Application configuration (parsing defaults, routing)
        routing_resolver: Builds the routing backend for the problem
    """

    config: AppConfig = field(default_factory=get_config)
    routing_resolver: Optional[RoutingResolver] = None

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if self.routing_resolver is None:
            self.routing_resolver = RoutingResolver(self.config.routing)

    def parse(self, text: str) -> Input:
        """Parse a JSON problem document.

        Args:
            text: The UTF-8 JSON document.

        Returns:
            The populated Input, with its routing backend attached.

        Raises:
            InputError: If the document is malformed or inconsistent.
            RoutingError: If the routing backend cannot be built.
        """
        try:
            document = json.loads(
                text, parse_float=_parse_float, parse_constant=_reject_constant
            )
        except json.JSONDecodeError as e:
            raise InputError(f"{e.msg} (offset: {e.pos})", cause=e)
        except ValueError as e:
            raise InputError(str(e), cause=e)
        except RecursionError as e:
            raise InputError("Document nesting too deep.", cause=e)
        return self.parse_document(document)

    def parse_document(self, document: Any) -> Input:
        """Build an Input from an already decoded JSON document."""
        parsing = self.config.parsing

        has_jobs = _non_empty_array(document, "jobs")
        has_shipments = _non_empty_array(document, "shipments")
        if not has_jobs and not has_shipments:
            raise InputError("Invalid jobs or shipments.")

        if not _non_empty_array(document, "vehicles"):
            raise InputError("Invalid vehicles.", key="vehicles")

        first_vehicle = document["vehicles"][0]
        check_id(first_vehicle, "vehicle")
        capacity = first_vehicle.get("capacity")
        amount_size = len(capacity) if is_array(capacity) else 0

        problem = Input(amount_size)
        problem.set_geometry(self.config.routing.geometry)

        # Only the first vehicle's profile selects the routing backend.
        common_profile = ""
        for json_vehicle in document["vehicles"]:
            problem.add_vehicle(get_vehicle(json_vehicle, amount_size, parsing))

            current_profile = get_string(json_vehicle, "profile")
            if not current_profile:
                current_profile = parsing.default_profile
            if not common_profile:
                common_profile = current_profile

        matrix_size: Optional[int] = None
        if "matrix" in document:
            matrix = parse_matrix(document["matrix"])
            matrix_size = len(matrix)
            problem.set_matrix(matrix)

        if has_jobs:
            for json_job in document["jobs"]:
                problem.add_job(get_job(json_job, amount_size, matrix_size, parsing))

        if has_shipments:
            for json_shipment in document["shipments"]:
                pickup, delivery = get_shipment(
                    json_shipment, amount_size, matrix_size, parsing
                )
                problem.add_shipment(pickup, delivery)

        assert self.routing_resolver is not None
        problem.set_routing(self.routing_resolver.resolve(common_profile))

        self._logger.info(
            "Problem parsed",
            extra={
                "vehicles": len(problem.vehicles),
                "jobs": len(problem.jobs),
                "amount_size": amount_size,
                "matrix_size": matrix_size,
                "profile": common_profile,
            },
        )
        return problem


def parse(text: str, config: Optional[AppConfig] = None) -> Input:
    """Parse a JSON problem document with the given or default configuration."""
    return InputParserService(config or get_config()).parse(text)
