"""
Unit tests for metrics endpoint.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from dog_rentals.main import app
from dog_rentals.metrics import (
    lifecycle_transitions,
    notifications_dispatched,
    operation_duration,
    orphaned_requests_removed,
)


@pytest.fixture
def client() -> TestClient:
    """FastAPI test client."""
    return TestClient(app)


@pytest.mark.unit
def test_metrics_endpoint_returns_prometheus_format(client: TestClient) -> None:
    """Test that /metrics endpoint returns Prometheus text format."""
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "text/plain" in response.headers["content-type"]


@pytest.mark.unit
def test_metrics_endpoint_contains_lifecycle_metrics(client: TestClient) -> None:
    """Test that /metrics endpoint includes the rental lifecycle metrics."""
    lifecycle_transitions.labels(operation="submit", outcome="success").inc()
    operation_duration.labels(operation="submit").observe(0.02)
    notifications_dispatched.labels(kind="rental_request", status="sent").inc()
    orphaned_requests_removed.inc(0)

    content = client.get("/metrics").text

    assert "dog_rentals_lifecycle_transitions_total" in content
    assert "dog_rentals_operation_duration_seconds" in content
    assert "dog_rentals_notifications_dispatched_total" in content
    assert "dog_rentals_orphaned_requests_removed_total" in content


@pytest.mark.unit
def test_metrics_endpoint_includes_help_and_type_metadata(client: TestClient) -> None:
    """Test that metrics include Prometheus HELP and TYPE metadata."""
    content = client.get("/metrics").text

    assert "# HELP dog_rentals_lifecycle_transitions_total" in content
    assert "# TYPE dog_rentals_lifecycle_transitions_total counter" in content
