"""Shared plumbing for HTTP routing backends.

Handles what osrm-routed and openrouteservice have in common:
- a requests session with a configured timeout
- translation of transport and decoding failures into RoutingError
- conversion of floating-point durations into an integer matrix
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple

import requests

from ...config import Server
from ...domain.errors import RoutingError
from ...domain.models import Location, Matrix


def round_cost(value: float) -> int:
    """Round a non-negative duration half up to whole seconds."""
    return int(value + 0.5)


def lon_lat(location: Location) -> Tuple[float, float]:
    if location.coordinates is None:
        raise RoutingError("Missing coordinates for routing engine.")
    return location.coordinates.lon, location.coordinates.lat


def durations_to_matrix(
    durations: Sequence[Sequence[Optional[float]]],
    locations: Sequence[Location],
    profile: str = "",
) -> Matrix:
    """Build an integer matrix, rejecting routes the backend could not find."""
    if len(durations) != len(locations):
        raise RoutingError("Inconsistent matrix size in routing response.", profile=profile)

    rows: List[Tuple[int, ...]] = []
    for location, line in zip(locations, durations):
        if len(line) != len(locations) or any(value is None for value in line):
            lon, lat = lon_lat(location)
            raise RoutingError(
                f"Unfound route(s) from location [{lon},{lat}].", profile=profile
            )
        rows.append(tuple(round_cost(value) for value in line))
    return tuple(rows)


@dataclass
class HttpRoutingAdapter(ABC):
    """Base for routing backends reached over HTTP.

    Subclasses implement ``_request_durations``, which queries the
    backend and returns its raw duration rows.

    Attributes:
        profile: Routing profile served by the backend
        server: Host and port of the routing server
        timeout_seconds: Timeout applied to every request
        session: HTTP session, injectable for tests
    """

    profile: str
    server: Server
    timeout_seconds: float = 10.0
    session: requests.Session = field(default_factory=requests.Session, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def get_matrix(self, locations: Sequence[Location]) -> Matrix:
        if not locations:
            return ()
        durations = self._request_durations(locations)
        return durations_to_matrix(durations, locations, self.profile)

    @abstractmethod
    def _request_durations(
        self, locations: Sequence[Location]
    ) -> Sequence[Sequence[Optional[float]]]:
        """Return one row of durations in seconds per location, None for no route."""

    def _send(self, method: str, url: str, **kwargs: Any) -> Dict[str, Any]:
        """Send a request and decode its JSON body.

        Raises:
            RoutingError: If the server is unreachable or answers with
                something other than a JSON object.
        """
        self._logger.debug(
            "Routing request", extra={"method": method, "url": url}
        )
        try:
            response = self.session.request(
                method, url, timeout=self.timeout_seconds, **kwargs
            )
            data = response.json()
        except (requests.RequestException, ValueError) as e:
            self._logger.warning(
                "Routing server unreachable",
                extra={"url": url, "error": str(e)},
            )
            raise RoutingError(
                f"Failed to connect to {self.server.host}:{self.server.port}",
                profile=self.profile,
                cause=e,
            )

        if not isinstance(data, dict):
            raise RoutingError("Invalid routing response.", profile=self.profile)
        return data
