"""Tests for configuration loading."""

import pytest

from routeprep.config import AppConfig, ParsingConfig, RoutingConfig, get_config, reset_config
from routeprep.observability import configure_logging


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


def test_defaults():
    config = AppConfig()

    assert config.routing.router == "osrm"
    assert config.routing.servers["car"].base_url == "http://0.0.0.0:5000"
    assert config.routing.geometry is False
    assert config.parsing.default_profile == "car"
    assert config.parsing.max_priority == 100
    assert config.parsing.time_window_end == 2**32 - 1


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("ROUTEPREP_ROUTING_ROUTER", "ors")
    monkeypatch.setenv(
        "ROUTEPREP_ROUTING_SERVERS", '{"bike": {"host": "ors.local", "port": "8080"}}'
    )
    monkeypatch.setenv("ROUTEPREP_PARSING_MAX_PRIORITY", "10")

    routing = RoutingConfig()
    assert routing.router == "ors"
    assert routing.servers["bike"].host == "ors.local"
    assert ParsingConfig().max_priority == 10


def test_get_config_is_cached():
    assert get_config() is get_config()


def test_configure_logging_does_not_raise():
    configure_logging(AppConfig().observability)
