"""In-process OSRM adapter.

Wraps the optional ``osrm`` Python bindings (``osrm-bindings`` on the
package index, installed with the ``libosrm`` extra). The engine is
opened on the shared-memory dataset named after the routing profile,
as loaded by ``osrm-datastore --dataset-name <profile>``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ...domain.errors import RoutingError
from ...domain.models import Location, Matrix
from .http_adapter import durations_to_matrix, lon_lat

osrm: Optional[Any] = None
try:
    import osrm as _osrm_module

    osrm = _osrm_module
except ImportError:
    pass


def libosrm_available() -> bool:
    """Check whether the osrm bindings are installed."""
    return osrm is not None


@dataclass
class LibosrmAdapter:
    """Routing backend running OSRM in-process.

    This adapter implements RoutingPort.

    Attributes:
        profile: Routing profile, also the shared-memory dataset name

    Raises:
        RoutingError: On construction, if the bindings are missing.
        RuntimeError: On construction, if the engine rejects the dataset.
    """

    profile: str
    _engine: Any = field(init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if osrm is None:
            raise RoutingError(
                "routeprep installed without libosrm support "
                "(install the 'libosrm' extra).",
                profile=self.profile,
            )
        self._engine = osrm.OSRM(use_shared_memory=True, dataset_name=self.profile)
        self._logger.debug("libosrm engine opened", extra={"profile": self.profile})

    def get_matrix(self, locations: Sequence[Location]) -> Matrix:
        if not locations:
            return ()

        params = osrm.TableParameters(
            coordinates=[lon_lat(location) for location in locations]
        )
        try:
            result = self._engine.Table(params)
        except RuntimeError as e:
            raise RoutingError(
                f"libosrm error: {e}", profile=self.profile, cause=e
            )
        return durations_to_matrix(result["durations"], locations, self.profile)
