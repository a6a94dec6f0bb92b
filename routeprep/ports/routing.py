"""Routing port - Abstraction for travel-cost computation.

This protocol defines the contract the ingested problem relies on to
compute a cost matrix when the caller did not provide one, allowing
different backends (osrm-routed, in-process libosrm, openrouteservice)
to be attached interchangeably.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Location, Matrix


class RoutingPort(Protocol):
    """Port for routing backends.

    Implementations:
    - adapters/routing/osrm_routed_adapter.py (OsrmRoutedAdapter)
    - adapters/routing/libosrm_adapter.py (LibosrmAdapter)
    - adapters/routing/ors_adapter.py (OrsAdapter)
    """

    @property
    def profile(self) -> str:
        """Return the routing profile served by this backend.

        Returns:
            The profile name (e.g., 'car').
        """
        ...

    def get_matrix(self, locations: Sequence[Location]) -> Matrix:
        """Compute the square travel-duration matrix between locations.

        Args:
            locations: Locations carrying coordinates, in matrix order.

        Returns:
            Durations in whole seconds, rows indexed like ``locations``.

        Raises:
            RoutingError: If the backend fails or a route is not found.
        """
        ...
