"""
API Routes Configuration
"""

from fastapi import APIRouter

from boligscore.api.endpoints import health, properties, scoring, weights

# Create main router
router = APIRouter()

# Include endpoint routers
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(scoring.router, prefix="/scoring", tags=["scoring"])
router.include_router(properties.router, prefix="/properties", tags=["properties"])
router.include_router(weights.router, prefix="/weights", tags=["weights"])
