# dog_rentals/main.py

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from dog_rentals.config import ALLOWED_ORIGINS
from dog_rentals.logging_config import setup_logging
from dog_rentals.middleware import RequestIDMiddleware
from dog_rentals.routes.health import router as health_router
from dog_rentals.routes.listings import router as listings_router
from dog_rentals.routes.metrics import router as metrics_router
from dog_rentals.routes.notifications import router as notifications_router
from dog_rentals.routes.requests import router as requests_router

# Initialize structured logging
setup_logging()
logger = structlog.get_logger(__name__)

app = FastAPI(
    title="Dog Rentals API",
    description="Rental lifecycle for peer-to-peer dog listings",
    version="1.0.0",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS if "*" not in ALLOWED_ORIGINS else ["*"],
    # Browsers reject wildcard CORS with credentials enabled
    allow_credentials="*" not in ALLOWED_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestIDMiddleware)

app.include_router(health_router, tags=["Health"])
app.include_router(metrics_router, tags=["Metrics"])
app.include_router(listings_router, tags=["Listings"])
app.include_router(requests_router, tags=["Rental Requests"])
app.include_router(notifications_router, tags=["Notifications"])
