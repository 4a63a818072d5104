"""
Scoring module - property normalization and weighted aggregation
"""

from .criteria import (
    DEFAULT_WEIGHTS,
    SCORING_CRITERIA_DEFINITIONS,
    ConditionRating,
    CriterionDefinition,
    LocationRating,
    PropertyType,
    ScoringCriterion,
)
from .engine import calculate_property_scores, evaluate, normalize_score, score_properties, score_property
from .models import CriterionScore, Property, ScoringResult
from .weights import WeightMap, clamp_weight, default_weights, merge_weights, validate_weights

__all__ = [
    "DEFAULT_WEIGHTS",
    "SCORING_CRITERIA_DEFINITIONS",
    "ConditionRating",
    "CriterionDefinition",
    "CriterionScore",
    "LocationRating",
    "Property",
    "PropertyType",
    "ScoringCriterion",
    "ScoringResult",
    "WeightMap",
    "calculate_property_scores",
    "clamp_weight",
    "default_weights",
    "evaluate",
    "merge_weights",
    "normalize_score",
    "score_properties",
    "score_property",
    "validate_weights",
]
