from fastapi import APIRouter
from boligscore.core.config import settings
from boligscore.core.logging import get_logger
from boligscore.scoring.criteria import ScoringCriterion

logger = get_logger(__name__)
router = APIRouter()

@router.get("/")
async def health_check():
    """Basic health check endpoint."""
    logger.info("Health check requested")
    return {"status": "healthy", "service": settings.PROJECT_NAME}

@router.get("/detailed")
async def detailed_health_check():
    """Detailed health check with scoring configuration summary."""
    logger.info("Detailed health check requested")

    return {
        "status": "healthy",
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "components": {
            "scoring_engine": "ok",
            "criteria": len(ScoringCriterion),
            "storage": "in_memory"
        }
    }
