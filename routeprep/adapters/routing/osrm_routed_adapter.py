"""osrm-routed adapter.

Talks to an osrm-routed HTTP server through its table service:
- coordinate formatting ('lon,lat;lon,lat;...')
- URL construction (/table/v1/<profile>/...)
- response validation (OSRM 'code' field)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

from ...domain.errors import RoutingError
from ...domain.models import Location
from .http_adapter import HttpRoutingAdapter, lon_lat


@dataclass
class OsrmRoutedAdapter(HttpRoutingAdapter):
    """Routing backend backed by an osrm-routed server.

    This adapter implements RoutingPort.
    """

    def format_coordinates(self, locations: Sequence[Location]) -> str:
        """Convert locations to the OSRM path format 'lon,lat;lon,lat;...'."""
        return ";".join(f"{lon},{lat}" for lon, lat in map(lon_lat, locations))

    def _request_durations(
        self, locations: Sequence[Location]
    ) -> Sequence[Sequence[Optional[float]]]:
        url = (
            f"{self.server.base_url}/table/v1/{self.profile}/"
            f"{self.format_coordinates(locations)}"
        )
        data = self._send("GET", url)

        if data.get("code") != "Ok":
            raise RoutingError(
                f"OSRM error: {data.get('message', 'Unknown error')}",
                profile=self.profile,
            )
        if "durations" not in data:
            raise RoutingError("Missing durations in OSRM response.", profile=self.profile)
        return data["durations"]
