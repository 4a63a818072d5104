from fastapi import APIRouter
from typing import Dict, List, Optional
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from boligscore.core.exceptions import BoligscoreException, from_domain_exception
from boligscore.core.logging import get_logger
from boligscore.scoring.criteria import DEFAULT_WEIGHTS, SCORING_CRITERIA_DEFINITIONS, ScoringCriterion
from boligscore.scoring.engine import calculate_property_scores
from boligscore.scoring.models import Property, ScoringResult
from boligscore.scoring.weights import default_weights, merge_weights

logger = get_logger(__name__)
router = APIRouter()

class CriterionResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: ScoringCriterion
    label: str
    description: str
    default_weight: int
    min_weight: Optional[int] = None
    max_weight: Optional[int] = None
    step: Optional[int] = None

class EvaluateRequest(BaseModel):
    property: Property
    weights: Optional[Dict[str, int]] = None  # Partial; missing criteria use the defaults
    current_year: Optional[int] = None

@router.get("/criteria", response_model=List[CriterionResponse])
async def list_criteria():
    """List every scoring criterion with its definition and default weight."""
    return [
        CriterionResponse(
            id=definition.id,
            label=definition.label,
            description=definition.description,
            default_weight=DEFAULT_WEIGHTS[definition.id],
            min_weight=definition.min_weight,
            max_weight=definition.max_weight,
            step=definition.step
        )
        for definition in SCORING_CRITERIA_DEFINITIONS
    ]

@router.get("/weights/default", response_model=Dict[ScoringCriterion, int])
async def get_default_weights():
    """Default weight table."""
    return default_weights()

@router.post("/evaluate", response_model=ScoringResult)
async def evaluate_property(request: EvaluateRequest):
    """Score a property without storing it."""
    try:
        weights = merge_weights(DEFAULT_WEIGHTS, request.weights)
    except BoligscoreException as e:
        logger.warning("Rejected weights", error=e.message, details=e.details)
        raise from_domain_exception(e)

    result = calculate_property_scores(request.property, weights, current_year=request.current_year)
    logger.info("Property evaluated", property_id=request.property.id, total_score=result.total_score)
    return result
