"""openrouteservice adapter.

Talks to an openrouteservice instance through its v2 matrix endpoint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...domain.errors import RoutingError
from ...domain.models import Location
from .http_adapter import HttpRoutingAdapter, lon_lat


@dataclass
class OrsAdapter(HttpRoutingAdapter):
    """Routing backend backed by an openrouteservice server.

    This adapter implements RoutingPort.
    """

    def _request_durations(
        self, locations: Sequence[Location]
    ) -> Sequence[Sequence[Optional[float]]]:
        url = f"{self.server.base_url}/ors/v2/matrix/{self.profile}"
        body = {
            "locations": [list(lon_lat(location)) for location in locations],
            "metrics": ["duration"],
        }
        data = self._send("POST", url, json=body)

        if "error" in data:
            error = data["error"]
            message = error.get("message") if isinstance(error, dict) else error
            raise RoutingError(f"ORS error: {message}", profile=self.profile)
        if "durations" not in data:
            raise RoutingError("Missing durations in ORS response.", profile=self.profile)
        return data["durations"]
