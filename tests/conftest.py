"""Pytest configuration and fixtures for MeshGraph tests."""

import pytest

from meshgraph.common.config import GraphSettings, Settings
from meshgraph.graph.builder import Telemetry


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    """Get test settings."""
    return Settings(
        environment="development",
        debug=True,
        graph={"default_graph_type": "workload"},
        logging={"format": "console", "level": "DEBUG"},
    )


@pytest.fixture
def graph_settings() -> GraphSettings:
    """Graph settings that skip malformed telemetry."""
    return GraphSettings(default_graph_type="workload", skip_malformed=True)


@pytest.fixture
def strict_graph_settings() -> GraphSettings:
    """Graph settings that fail on malformed telemetry."""
    return GraphSettings(default_graph_type="workload", skip_malformed=False)


# =============================================================================
# Sample Telemetry Fixtures
# =============================================================================


@pytest.fixture
def sample_telemetry() -> Telemetry:
    """Frontend calling the billing API through its service."""
    return Telemetry(
        source_namespace="shop",
        source_workload="frontend-v1",
        source_app="frontend",
        source_version="v1",
        dest_service_namespace="billing",
        dest_service="api",
        dest_workload_namespace="billing",
        dest_workload="api-v2",
        dest_app="api",
        dest_version="v2",
    )


@pytest.fixture
def unknown_source_telemetry() -> Telemetry:
    """Unattributable caller reaching the billing API."""
    return Telemetry(
        source_namespace="unknown",
        source_workload="unknown",
        source_app="unknown",
        source_version="unknown",
        dest_service_namespace="billing",
        dest_service="api",
        dest_workload_namespace="billing",
        dest_workload="api-v2",
        dest_app="api",
        dest_version="v2",
    )


@pytest.fixture
def unknown_dest_telemetry() -> Telemetry:
    """Ingress request to an unknown path in the billing namespace."""
    return Telemetry(
        source_namespace="istio-system",
        source_workload="istio-ingressgateway",
        source_app="istio-ingressgateway",
        source_version="unknown",
        dest_service_namespace="billing",
        dest_service="unknown",
        dest_workload_namespace="unknown",
        dest_workload="unknown",
        dest_app="unknown",
        dest_version="unknown",
    )


@pytest.fixture
def malformed_telemetry() -> Telemetry:
    """Telemetry with no usable destination workload, app or service."""
    return Telemetry(
        source_namespace="shop",
        source_workload="frontend-v1",
        source_app="frontend",
        source_version="v1",
        dest_service_namespace="billing",
        dest_service="",
        dest_workload_namespace="billing",
        dest_workload="",
        dest_app="unknown",
        dest_version="",
    )


# =============================================================================
# Markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
