"""
Scoring Engine - per-criterion normalization and weighted aggregation
"""

import math
from dataclasses import dataclass
from datetime import date
from functools import partial
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Union
import structlog

from boligscore.core.config import ScoringThresholds, get_scoring_thresholds
from .criteria import (
    DEFAULT_WEIGHTS,
    RATED_CRITERIA,
    ConditionRating,
    LocationRating,
    ScoringCriterion,
)
from .models import CriterionScore, Property, ScoringResult, coerce_number

logger = structlog.get_logger(__name__)

# Substrings in the renovation notes that mean the building must be gutted or torn down
RENOVATION_TRIGGERS = ("totalrenover", "rives")

CONDITION_SCORES: Dict[ConditionRating, float] = {
    ConditionRating.NEW: 100,
    ConditionRating.VERY_GOOD: 90,
    ConditionRating.GOOD: 75,
    ConditionRating.FAIR: 50,
    ConditionRating.POOR: 25,
    ConditionRating.NEEDS_MAJOR_RENOVATION: 5,
}

LOCATION_SCORES: Dict[LocationRating, float] = {
    LocationRating.EXCELLENT: 100,
    LocationRating.VERY_GOOD: 90,
    LocationRating.GOOD: 75,
    LocationRating.AVERAGE: 50,
    LocationRating.BELOW_AVERAGE: 25,
}

GARAGE_POINTS = 60
POINTS_PER_PARKING_SPOT = 20
MAX_PARKING_SPOT_POINTS = 40
MAX_OVERSIZE_PENALTY = 20
OLD_HOUSE_BASE = 50
OLD_HOUSE_PENALTY_PER_YEAR = 2
WELL_KEPT_OLD_HOUSE_BONUS = 40

# Derived fields are never inputs
_DERIVED_KEYS = ("scores", "totalScore", "total_score")

PropertyInput = Union[Property, Mapping[str, Any]]


@dataclass(frozen=True)
class ScoringContext:
    """Inputs shared by every scorer during one evaluation"""
    thresholds: ScoringThresholds
    current_year: int


def normalize_score(value: float, min_value: float, max_value: float, invert: bool = False) -> float:
    """
    Map ``value`` linearly onto 0-100 over [min_value, max_value], clamped.

    With ``invert`` the result is reflected (100 - score), so lower raw values score higher.
    """
    if max_value == min_value:
        fraction = 1.0 if value >= max_value else 0.0
    else:
        fraction = max(0.0, min(1.0, (value - min_value) / (max_value - min_value)))
    score = fraction * 100
    return 100 - score if invert else score


def _clamp(score: float) -> float:
    return max(0.0, min(100.0, score))


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _fmt(value: float) -> str:
    """Render a number without a trailing .0"""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def _fmt_thousands(value: float) -> str:
    return f"{_round_half_up(value):,}".replace(",", "\u00a0")


def score_price_per_sqm(prop: Property, ctx: ScoringContext) -> CriterionScore:
    if prop.area <= 0:
        return CriterionScore(score=0, description="Areal mangler")
    price_per_sqm = prop.price / prop.area
    if not math.isfinite(price_per_sqm):
        return CriterionScore(score=0, description="Pris/kvm: ukjent")
    score = normalize_score(
        price_per_sqm,
        ctx.thresholds.MIN_EXPECTED_PRICE_PER_SQM,
        ctx.thresholds.MAX_EXPECTED_PRICE_PER_SQM,
        invert=True,
    )
    return CriterionScore(score=score, description=f"Pris/kvm: {_fmt_thousands(price_per_sqm)} kr")


def score_area_size(prop: Property, ctx: ScoringContext) -> CriterionScore:
    optimal = ctx.thresholds.OPTIMAL_AREA_SIZE
    cap = ctx.thresholds.MAX_AREA_SCORE_CAP
    if prop.area <= optimal:
        score = prop.area / optimal * 100
    else:
        # Oversized homes lose up to MAX_OVERSIZE_PENALTY points, reached at the cap
        penalty = (prop.area - optimal) / (cap - optimal) * MAX_OVERSIZE_PENALTY
        score = 100 - min(MAX_OVERSIZE_PENALTY, penalty)
    return CriterionScore(score=_clamp(score), description=f"Areal: {_fmt(prop.area)} m²")


def score_condition(prop: Property, ctx: ScoringContext) -> CriterionScore:
    score = CONDITION_SCORES.get(prop.condition, 0)
    notes = prop.renovation_needs.lower()
    if any(trigger in notes for trigger in RENOVATION_TRIGGERS):
        score = min(score, 5)
    label = prop.condition.value if prop.condition else "Ukjent"
    return CriterionScore(score=score, description=f"Tilstand: {label}")


def score_location(prop: Property, ctx: ScoringContext) -> CriterionScore:
    score = LOCATION_SCORES.get(prop.location, 0)
    label = prop.location.value if prop.location else "Ukjent"
    return CriterionScore(score=score, description=f"Makro-Beliggenhet: {label}")


def score_parking(prop: Property, ctx: ScoringContext) -> CriterionScore:
    score = GARAGE_POINTS if prop.has_garage else 0
    score += min(MAX_PARKING_SPOT_POINTS, prop.parking_spots * POINTS_PER_PARKING_SPOT)

    parts = []
    if prop.has_garage:
        parts.append("Garasje")
    if prop.parking_spots > 0:
        parts.append(f"{_fmt(prop.parking_spots)} P-plass(er)")
    description = ", ".join(parts) if parts else "Ingen dedikert parkering"
    return CriterionScore(score=_clamp(score), description=description)


def score_garden(prop: Property, ctx: ScoringContext) -> CriterionScore:
    if prop.garden_size <= 0:
        return CriterionScore(score=0, description="Ingen hage")
    score = min(100.0, prop.garden_size / ctx.thresholds.MAX_GARDEN_SIZE_BENEFIT * 100)
    return CriterionScore(score=score, description=f"Hage: {_fmt(prop.garden_size)} m²")


def score_rental_unit(prop: Property, ctx: ScoringContext) -> CriterionScore:
    if prop.has_rental_unit:
        return CriterionScore(score=100, description="Har utleiedel")
    return CriterionScore(score=0, description="Ingen utleiedel")


def score_age(prop: Property, ctx: ScoringContext) -> CriterionScore:
    if prop.year_built == 0:
        return CriterionScore(score=0, description="Byggeår ukjent")

    new_limit = ctx.thresholds.MAX_YEAR_BUILT_BENEFIT
    old_limit = ctx.thresholds.OLDEST_YEAR_PENALTY_START
    age = ctx.current_year - prop.year_built

    if age <= new_limit:
        score = 100.0
    elif age > old_limit:
        well_kept = prop.condition in (ConditionRating.NEW, ConditionRating.VERY_GOOD)
        bonus = WELL_KEPT_OLD_HOUSE_BONUS if well_kept else 0
        score = max(0.0, OLD_HOUSE_BASE - (age - old_limit) * OLD_HOUSE_PENALTY_PER_YEAR) + bonus
    else:
        score = normalize_score(age, new_limit, old_limit, invert=True)

    return CriterionScore(
        score=_clamp(score),
        description=f"Byggeår: {_fmt(prop.year_built)} (Alder: {_fmt(age)} år)",
    )


def score_bedrooms(prop: Property, ctx: ScoringContext) -> CriterionScore:
    if prop.bedrooms >= 4:
        score = 100
    elif prop.bedrooms == 3:
        score = 90
    elif prop.bedrooms == 2:
        score = 70
    elif prop.bedrooms == 1:
        score = 40
    else:
        score = 10  # studio
    return CriterionScore(score=score, description=f"{_fmt(prop.bedrooms)} soverom")


def score_bathrooms(prop: Property, ctx: ScoringContext) -> CriterionScore:
    if prop.bathrooms >= 2:
        score = 100
    elif prop.bathrooms == 1.5:
        score = 80
    elif prop.bathrooms == 1:
        score = 60
    else:
        score = 10  # WC only
    return CriterionScore(score=score, description=f"{_fmt(prop.bathrooms)} bad")


def score_rating(field_name: str, label: str, prop: Property, ctx: ScoringContext) -> CriterionScore:
    """Scale a 0-10 rating to 0-100"""
    rating = getattr(prop, field_name)
    score = max(0.0, min(10.0, rating)) * 10
    return CriterionScore(score=score, description=f"{label}: {_fmt(rating)}/10")


Scorer = Callable[[Property, ScoringContext], CriterionScore]

CRITERION_SCORERS: Dict[ScoringCriterion, Scorer] = {
    ScoringCriterion.PRICE_PER_SQM: score_price_per_sqm,
    ScoringCriterion.AREA_SIZE: score_area_size,
    ScoringCriterion.CONDITION: score_condition,
    ScoringCriterion.LOCATION: score_location,
    ScoringCriterion.PARKING: score_parking,
    ScoringCriterion.GARDEN: score_garden,
    ScoringCriterion.RENTAL_UNIT: score_rental_unit,
    ScoringCriterion.AGE: score_age,
    ScoringCriterion.BEDROOMS: score_bedrooms,
    ScoringCriterion.BATHROOMS: score_bathrooms,
}
CRITERION_SCORERS.update({
    criterion: partial(score_rating, field_name, label)
    for criterion, (field_name, label) in RATED_CRITERIA.items()
})


def _as_property(prop: PropertyInput) -> Property:
    if isinstance(prop, Property):
        return prop
    data = {k: v for k, v in prop.items() if k not in _DERIVED_KEYS}
    return Property.model_validate(data)


def _weight_for(weights: Mapping[Any, Any], criterion: ScoringCriterion) -> float:
    value = weights.get(criterion)
    if value is None:
        value = weights.get(criterion.name)
    return coerce_number(value)


def aggregate(scores: Mapping[ScoringCriterion, CriterionScore], weights: Mapping[Any, Any]) -> int:
    """
    Weighted average of the per-criterion scores.

    Criteria without a strictly positive weight contribute to neither numerator nor
    denominator. Returns 0 when no criterion is active.
    """
    active = []
    for criterion in ScoringCriterion:
        criterion_score = scores.get(criterion)
        weight = _weight_for(weights, criterion)
        if criterion_score is None or weight <= 0:
            continue
        active.append((criterion_score.score, weight))

    if not active:
        return 0

    # Weights are relative, so scale by the largest to keep the sums finite
    largest = max(weight for _, weight in active)
    weighted_sum = sum(score * (weight / largest) for score, weight in active)
    weight_sum = sum(weight / largest for _, weight in active)
    average = weighted_sum / weight_sum
    if not math.isfinite(average):
        return 0
    return max(0, min(100, _round_half_up(average)))


def calculate_property_scores(
    prop: PropertyInput,
    weights: Optional[Mapping[Any, Any]] = None,
    current_year: Optional[int] = None,
    thresholds: Optional[ScoringThresholds] = None,
) -> ScoringResult:
    """
    Score a property on every criterion and aggregate with ``weights``.

    Args:
        prop: Property model or a raw mapping in camelCase or snake_case
        weights: criterion -> importance; defaults to DEFAULT_WEIGHTS
        current_year: reference year for the age criterion; defaults to today
        thresholds: normalization bounds; defaults to the process-wide table

    Returns:
        ScoringResult with all criteria present and total_score in [0, 100]
    """
    prop = _as_property(prop)
    ctx = ScoringContext(
        thresholds=thresholds or get_scoring_thresholds(),
        current_year=current_year if current_year is not None else date.today().year,
    )
    if weights is None:
        weights = DEFAULT_WEIGHTS

    scores = {criterion: CRITERION_SCORERS[criterion](prop, ctx) for criterion in ScoringCriterion}
    total_score = aggregate(scores, weights)

    logger.debug("Property scored", property_id=prop.id, total_score=total_score)
    return ScoringResult(total_score=total_score, scores=scores)


evaluate = calculate_property_scores


def score_property(
    prop: PropertyInput,
    weights: Optional[Mapping[Any, Any]] = None,
    current_year: Optional[int] = None,
) -> Property:
    """Return a copy of ``prop`` carrying freshly computed scores"""
    prop = _as_property(prop)
    return prop.with_result(calculate_property_scores(prop, weights, current_year))


def score_properties(
    properties: Iterable[PropertyInput],
    weights: Optional[Mapping[Any, Any]] = None,
    current_year: Optional[int] = None,
) -> List[Property]:
    """Rescore every property against the same weights, preserving order"""
    return [score_property(prop, weights, current_year) for prop in properties]
