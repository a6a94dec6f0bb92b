"""Tests for routing backend selection."""

from unittest.mock import MagicMock

import pytest

from routeprep.adapters.routing import LibosrmAdapter, OrsAdapter, OsrmRoutedAdapter
from routeprep.adapters.routing import libosrm_adapter
from routeprep.config import RoutingConfig, Server
from routeprep.domain.errors import ErrorKind, InputError, RoutingError
from routeprep.services.routing_resolver import RoutingResolver


def test_osrm_router():
    config = RoutingConfig(
        router="osrm",
        servers={"car": Server(host="osrm.local", port="5001")},
        timeout_seconds=3.0,
    )
    routing = RoutingResolver(config).resolve("car")

    assert isinstance(routing, OsrmRoutedAdapter)
    assert routing.profile == "car"
    assert routing.server.host == "osrm.local"
    assert routing.timeout_seconds == 3.0


def test_ors_router():
    config = RoutingConfig(router="ors", servers={"hgv": Server(port="8080")})
    routing = RoutingResolver(config).resolve("hgv")

    assert isinstance(routing, OrsAdapter)
    assert routing.server.base_url == "http://0.0.0.0:8080"


@pytest.mark.parametrize("router", ["osrm", "ors"])
def test_unknown_profile_is_input_error(router):
    resolver = RoutingResolver(RoutingConfig(router=router, servers={"car": Server()}))

    with pytest.raises(InputError) as exc_info:
        resolver.resolve("bike")
    assert exc_info.value.message == "Invalid profile: bike."
    assert exc_info.value.kind is ErrorKind.INPUT


def test_libosrm_missing_bindings(monkeypatch):
    monkeypatch.setattr(libosrm_adapter, "osrm", None)
    assert not libosrm_adapter.libosrm_available()

    with pytest.raises(RoutingError) as exc_info:
        RoutingResolver(RoutingConfig(router="libosrm")).resolve("car")
    assert "without libosrm support" in exc_info.value.message
    assert exc_info.value.kind is ErrorKind.ROUTING


def test_libosrm_engine_failure(monkeypatch):
    bindings = MagicMock()
    bindings.OSRM.side_effect = RuntimeError("no shared memory dataset")
    monkeypatch.setattr(libosrm_adapter, "osrm", bindings)

    with pytest.raises(RoutingError) as exc_info:
        RoutingResolver(RoutingConfig(router="libosrm")).resolve("truck")
    assert exc_info.value.message == "Invalid profile: truck"
    assert exc_info.value.profile == "truck"
    assert isinstance(exc_info.value.cause, RuntimeError)


def test_libosrm_engine(monkeypatch):
    bindings = MagicMock()
    monkeypatch.setattr(libosrm_adapter, "osrm", bindings)

    routing = RoutingResolver(RoutingConfig(router="libosrm")).resolve("car")

    assert isinstance(routing, LibosrmAdapter)
    bindings.OSRM.assert_called_once_with(use_shared_memory=True, dataset_name="car")


def test_libosrm_ignores_servers(monkeypatch):
    monkeypatch.setattr(libosrm_adapter, "osrm", MagicMock())
    config = RoutingConfig(router="libosrm", servers={})

    assert RoutingResolver(config).resolve("anything").profile == "anything"
