"""Routing backend selection.

Maps the configured router kind and the problem's common profile to a
concrete RoutingPort implementation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..adapters.routing import LibosrmAdapter, OrsAdapter, OsrmRoutedAdapter
from ..config import RoutingConfig, Server, get_config
from ..domain.errors import InputError, RoutingError
from ..ports.routing import RoutingPort


@dataclass
class RoutingResolver:
    """Builds the routing backend attached to a parsed problem.

    Attributes:
        config: Routing configuration (router kind, servers, timeout)
    """

    config: RoutingConfig = field(default_factory=lambda: get_config().routing)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def resolve(self, profile: str) -> RoutingPort:
        """Return the backend for ``profile``.

        Raises:
            InputError: If an HTTP router has no server for the profile.
            RoutingError: If the in-process engine is unavailable or
                cannot open the profile's dataset.
        """
        router = self.config.router
        if router == "osrm":
            routing: RoutingPort = OsrmRoutedAdapter(
                profile, self._server(profile), self.config.timeout_seconds
            )
        elif router == "ors":
            routing = OrsAdapter(
                profile, self._server(profile), self.config.timeout_seconds
            )
        elif router == "libosrm":
            try:
                routing = LibosrmAdapter(profile)
            except RuntimeError as e:
                raise RoutingError(
                    f"Invalid profile: {profile}", profile=profile, cause=e
                )
        else:
            raise RoutingError(f"Unknown router: {router}.", profile=profile)

        self._logger.info(
            "Routing backend resolved",
            extra={"router": router, "profile": profile},
        )
        return routing

    def _server(self, profile: str) -> Server:
        server = self.config.servers.get(profile)
        if server is None:
            raise InputError(f"Invalid profile: {profile}.", key="profile")
        return server
