from fastapi import APIRouter, Depends
from typing import Dict

from boligscore.api.deps import get_catalog
from boligscore.core.exceptions import BoligscoreException, from_domain_exception
from boligscore.core.logging import get_logger
from boligscore.scoring.criteria import ScoringCriterion
from boligscore.scoring.weights import clamp_weight
from boligscore.services.catalog import PropertyCatalog

logger = get_logger(__name__)
router = APIRouter()

@router.get("/", response_model=Dict[ScoringCriterion, int])
async def get_weights(catalog: PropertyCatalog = Depends(get_catalog)):
    """Current weights."""
    return catalog.weights

@router.put("/", response_model=Dict[ScoringCriterion, int])
async def update_weights(updates: Dict[ScoringCriterion, int], catalog: PropertyCatalog = Depends(get_catalog)):
    """
    Partially update weights. Values are clamped to each criterion's editor range
    and every stored property is rescored.
    """
    clamped = {criterion: clamp_weight(criterion, value) for criterion, value in updates.items()}
    try:
        return catalog.update_weights(clamped)
    except BoligscoreException as e:
        logger.warning("Weight update failed", error=e.message)
        raise from_domain_exception(e)

@router.post("/reset", response_model=Dict[ScoringCriterion, int])
async def reset_weights(catalog: PropertyCatalog = Depends(get_catalog)):
    """Restore the default weights and rescore."""
    return catalog.reset_weights()
