"""
Property record and scoring result models
"""

import math
from typing import Any, Dict, Mapping, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from .criteria import ConditionRating, LocationRating, PropertyType, ScoringCriterion

NUMERIC_FIELDS = (
    "price", "area", "year_built", "bedrooms", "bathrooms", "parking_spots", "garden_size",
    "kitchen_quality", "living_room_quality", "storage_quality", "floor_plan_quality",
    "balcony_terrace_quality", "light_and_air_quality", "area_impression",
    "neighborhood_impression", "public_transport_access", "schools_proximity",
    "viewing_impression", "potential_score",
)

_TRUE_STRINGS = {"true", "1", "yes", "ja", "on"}


def coerce_number(value: Any) -> float:
    """Best-effort float conversion; anything unusable becomes 0."""
    if value is None:
        return 0.0
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, str):
        # "3 000 000" and "1,5" as typed in Norwegian forms
        value = value.replace(" ", "").replace(" ", "").replace(",", ".")
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return 0.0
    if math.isnan(number) or math.isinf(number):
        return 0.0
    return number


def _coerce_enum(enum_cls, value: Any):
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str):
        try:
            return enum_cls(value)
        except ValueError:
            return enum_cls.__members__.get(value.upper())
    return None


class CriterionScore(BaseModel):
    """Normalized 0-100 score for one criterion plus the raw input that produced it"""

    model_config = ConfigDict(frozen=True)

    score: float
    description: str


class ScoringResult(BaseModel):
    """Output of one engine evaluation"""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    total_score: int = Field(ge=0, le=100)
    scores: Dict[ScoringCriterion, CriterionScore]


class Property(BaseModel):
    """
    A candidate property.

    Numeric inputs are coerced leniently: missing, NaN, infinite or unparsable values
    become 0 so scoring always sees a usable number. ``scores`` and ``total_score``
    are derived and may be discarded at any time.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = ""
    address: str = ""
    price: float = 0
    area: float = 0  # BRA in m²
    property_type: PropertyType = PropertyType.OTHER
    condition: Optional[ConditionRating] = None
    location: Optional[LocationRating] = None
    parking_spots: float = 0
    has_garage: bool = False
    garden_size: float = 0  # m², 0 if no garden
    has_rental_unit: bool = False
    renovation_needs: str = ""
    other_attributes: str = ""
    year_built: float = 0  # 0 when unknown
    bedrooms: float = 0
    bathrooms: float = 0  # 1.5 means one bathroom plus a WC

    finn_link: Optional[str] = None
    user_comment: Optional[str] = None

    # 0-10 ratings
    kitchen_quality: float = 0
    living_room_quality: float = 0
    storage_quality: float = 0
    floor_plan_quality: float = 0
    balcony_terrace_quality: float = 0
    light_and_air_quality: float = 0
    area_impression: float = 0  # micro location
    neighborhood_impression: float = 0
    public_transport_access: float = 0
    schools_proximity: float = 0
    viewing_impression: float = 0
    potential_score: float = 0

    scores: Optional[Dict[ScoringCriterion, CriterionScore]] = None
    total_score: Optional[int] = Field(default=None, ge=0, le=100)

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _numeric(cls, value: Any) -> float:
        return coerce_number(value)

    # Derived fields sent back by clients may be stale; unusable values are dropped, never rejected

    @field_validator("scores", mode="before")
    @classmethod
    def _derived_scores(cls, value: Any) -> Optional[Dict[ScoringCriterion, CriterionScore]]:
        if not isinstance(value, Mapping):
            return None
        try:
            return {ScoringCriterion(k): CriterionScore.model_validate(v) for k, v in value.items()}
        except (TypeError, ValueError):
            return None

    @field_validator("total_score", mode="before")
    @classmethod
    def _derived_total(cls, value: Any) -> Optional[int]:
        if value is None:
            return None
        number = coerce_number(value)
        return max(0, min(100, int(math.floor(number + 0.5))))

    @field_validator("id", "address", "renovation_needs", "other_attributes", mode="before")
    @classmethod
    def _text(cls, value: Any) -> str:
        return "" if value is None else str(value)

    @field_validator("finn_link", "user_comment", mode="before")
    @classmethod
    def _optional_text(cls, value: Any) -> Optional[str]:
        return None if value is None else str(value)

    @field_validator("has_garage", "has_rental_unit", mode="before")
    @classmethod
    def _flag(cls, value: Any) -> bool:
        if isinstance(value, str):
            return value.strip().lower() in _TRUE_STRINGS
        return bool(value)

    @field_validator("condition", mode="before")
    @classmethod
    def _condition(cls, value: Any) -> Optional[ConditionRating]:
        return _coerce_enum(ConditionRating, value)

    @field_validator("location", mode="before")
    @classmethod
    def _location(cls, value: Any) -> Optional[LocationRating]:
        return _coerce_enum(LocationRating, value)

    @field_validator("property_type", mode="before")
    @classmethod
    def _property_type(cls, value: Any) -> PropertyType:
        return _coerce_enum(PropertyType, value) or PropertyType.OTHER

    def with_result(self, result: ScoringResult) -> "Property":
        """Return a copy carrying the derived scores of ``result``"""
        return self.model_copy(update={"scores": dict(result.scores), "total_score": result.total_score})

    def without_scores(self) -> "Property":
        return self.model_copy(update={"scores": None, "total_score": None})
