"""
Weight map construction and validation.

A weight map assigns every criterion a non-negative integer importance. Values are
relative; they do not have to sum to any fixed total.
"""

from typing import Any, Dict, Mapping, Optional

from boligscore.core.exceptions import ValidationException
from .criteria import DEFAULT_WEIGHTS, ScoringCriterion, get_definition

WeightMap = Dict[ScoringCriterion, int]


def default_weights() -> WeightMap:
    """Fresh, mutable copy of the default weight table"""
    return dict(DEFAULT_WEIGHTS)


def _parse_criterion(key: Any) -> ScoringCriterion:
    if isinstance(key, ScoringCriterion):
        return key
    if isinstance(key, str):
        try:
            return ScoringCriterion(key)
        except ValueError:
            if key in ScoringCriterion.__members__:
                return ScoringCriterion[key]
    raise ValidationException(
        f"Unknown scoring criterion: {key!r}",
        error_code="UNKNOWN_CRITERION",
        details={"criterion": str(key)}
    )


def _parse_weight(criterion: ScoringCriterion, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationException(
            f"Weight for {criterion.value} must be a number",
            error_code="INVALID_WEIGHT",
            details={"criterion": criterion.value, "value": repr(value)}
        )
    if value != value or value < 0 or int(value) != value:
        raise ValidationException(
            f"Weight for {criterion.value} must be a non-negative integer",
            error_code="INVALID_WEIGHT",
            details={"criterion": criterion.value, "value": value}
        )
    return int(value)


def _parse_entries(raw: Mapping[Any, Any]) -> WeightMap:
    return {
        criterion: _parse_weight(criterion, value)
        for criterion, value in ((_parse_criterion(k), v) for k, v in raw.items())
    }


def validate_weights(raw: Mapping[Any, Any]) -> WeightMap:
    """
    Validate a complete weight map.

    Keys may be criterion members, their values or their names. Every criterion must be
    present; unknown keys and negative or fractional weights are rejected.

    Raises:
        ValidationException: if the map is incomplete or contains invalid entries
    """
    weights = _parse_entries(raw)
    missing = [c.value for c in ScoringCriterion if c not in weights]
    if missing:
        raise ValidationException(
            "Weight map is missing criteria",
            error_code="MISSING_WEIGHTS",
            details={"missing": missing}
        )
    # Re-key in enumeration order
    return {criterion: weights[criterion] for criterion in ScoringCriterion}


def merge_weights(base: Mapping[Any, Any], overrides: Optional[Mapping[Any, Any]] = None) -> WeightMap:
    """Apply a partial update to ``base`` and validate the result"""
    merged = _parse_entries(base)
    if overrides:
        merged.update(_parse_entries(overrides))
    return validate_weights(merged)


def clamp_weight(criterion: ScoringCriterion, value: int) -> int:
    """Clamp a weight into the editor range of its criterion definition"""
    return get_definition(criterion).clamp(value)
