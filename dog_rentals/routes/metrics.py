"""
Prometheus metrics endpoint.

Example:
    GET /metrics

    Response:
        # HELP dog_rentals_lifecycle_transitions_total Rental lifecycle operations by outcome
        # TYPE dog_rentals_lifecycle_transitions_total counter
        dog_rentals_lifecycle_transitions_total{operation="submit",outcome="success"} 4.0
        ...
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter
from fastapi.responses import Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

router = APIRouter()


@router.get("/metrics", response_class=Response)
async def metrics() -> Any:
    """Prometheus metrics in text exposition format."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
