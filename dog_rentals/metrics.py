"""
Prometheus metrics for the rental lifecycle.

Metrics are exposed via the /metrics endpoint for scraping by Prometheus.

Example:
    >>> from dog_rentals.metrics import lifecycle_transitions, operation_duration
    >>> with operation_duration.labels(operation="approve").time():
    ...     rental_id = approve_request(engine, request_id, owner_id)
    >>> lifecycle_transitions.labels(operation="approve", outcome="success").inc()
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

# =============================================================================
# Lifecycle Metrics
# =============================================================================

lifecycle_transitions = Counter(
    "dog_rentals_lifecycle_transitions_total",
    "Rental lifecycle operations by outcome",
    ["operation", "outcome"],
)
"""
Counter for lifecycle operations.

Labels:
    operation: submit, approve, reject, cancel
    outcome: success, replayed, or the error code (not_available, forbidden, ...)
"""

operation_duration = Histogram(
    "dog_rentals_operation_duration_seconds",
    "Duration of rental lifecycle operations in seconds",
    ["operation"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, float("inf")),
)

# =============================================================================
# Notification Metrics
# =============================================================================

notifications_dispatched = Counter(
    "dog_rentals_notifications_dispatched_total",
    "Notifications dispatched, by kind and status",
    ["kind", "status"],
)
"""
Counter for notification dispatches.

Labels:
    kind: Notification kind (rental_request, rental_approved, ...)
    status: sent or failed
"""

# =============================================================================
# Reconciliation Metrics
# =============================================================================

orphaned_requests_removed = Counter(
    "dog_rentals_orphaned_requests_removed_total",
    "Pending rental requests deleted because their listing no longer exists",
)
