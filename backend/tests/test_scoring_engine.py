import math

import pytest

from boligscore.core.config import ScoringThresholds
from boligscore.scoring.criteria import DEFAULT_WEIGHTS, ConditionRating, LocationRating, ScoringCriterion
from boligscore.scoring.engine import (
    aggregate,
    calculate_property_scores,
    evaluate,
    normalize_score,
    score_properties,
)
from boligscore.scoring.models import CriterionScore, Property

CURRENT_YEAR = 2025


def score(criterion, year=CURRENT_YEAR, **fields):
    """Score a single criterion for a property built from ``fields``."""
    result = calculate_property_scores(Property(**fields), current_year=year)
    return result.scores[criterion]


def only(criterion, weight=10):
    """Weights where a single criterion is active."""
    weights = {c: 0 for c in ScoringCriterion}
    weights[criterion] = weight
    return weights


# normalize_score

@pytest.mark.parametrize("value,expected", [(0, 0), (50, 50), (100, 100), (-20, 0), (150, 100)])
def test_normalize_score_clamps_to_range(value, expected):
    assert normalize_score(value, 0, 100) == pytest.approx(expected)

def test_normalize_score_inverted():
    assert normalize_score(25, 0, 100, invert=True) == pytest.approx(75)
    assert normalize_score(-5, 0, 100, invert=True) == pytest.approx(100)
    assert normalize_score(500, 0, 100, invert=True) == pytest.approx(0)


# Price per m²

def test_price_per_sqm_scenario():
    result = score(ScoringCriterion.PRICE_PER_SQM, price=3_000_000, area=60)
    expected = 100 - (50_000 - 20_000) / (150_000 - 20_000) * 100
    assert result.score == pytest.approx(expected)
    assert result.score == pytest.approx(76.9, abs=0.05)
    assert result.description == "Pris/kvm: 50\u00a0000 kr"

def test_price_per_sqm_bounds():
    assert score(ScoringCriterion.PRICE_PER_SQM, price=1_000_000, area=100).score == pytest.approx(100)
    assert score(ScoringCriterion.PRICE_PER_SQM, price=20_000_000, area=100).score == pytest.approx(0)

def test_price_per_sqm_missing_area():
    result = score(ScoringCriterion.PRICE_PER_SQM, price=3_000_000, area=0)
    assert result == CriterionScore(score=0, description="Areal mangler")


# Area size

@pytest.mark.parametrize("area,expected", [
    (0, 0),
    (60, 50),
    (120, 100),
    (185, 90),
    (250, 80),
    (400, 80),
])
def test_area_size(area, expected):
    assert score(ScoringCriterion.AREA_SIZE, area=area).score == pytest.approx(expected)

def test_area_size_description():
    assert score(ScoringCriterion.AREA_SIZE, area=87.5).description == "Areal: 87.5 m²"
    assert score(ScoringCriterion.AREA_SIZE, area=120).description == "Areal: 120 m²"


# Condition and location

@pytest.mark.parametrize("condition,expected", [
    (ConditionRating.NEW, 100),
    (ConditionRating.VERY_GOOD, 90),
    (ConditionRating.GOOD, 75),
    (ConditionRating.FAIR, 50),
    (ConditionRating.POOR, 25),
    (ConditionRating.NEEDS_MAJOR_RENOVATION, 5),
])
def test_condition_lookup(condition, expected):
    result = score(ScoringCriterion.CONDITION, condition=condition)
    assert result.score == expected
    assert result.description == f"Tilstand: {condition.value}"

@pytest.mark.parametrize("notes", ["Må totalrenoveres", "Huset bør RIVES", "TOTALRENOVERING av bad"])
def test_condition_capped_by_renovation_notes(notes):
    result = score(ScoringCriterion.CONDITION, condition=ConditionRating.NEW, renovation_needs=notes)
    assert result.score == 5

def test_condition_notes_without_trigger_words():
    result = score(ScoringCriterion.CONDITION, condition=ConditionRating.NEW, renovation_needs="Needs full renovation")
    assert result.score == 100

def test_condition_unknown():
    result = score(ScoringCriterion.CONDITION)
    assert result.score == 0
    assert result.description == "Tilstand: Ukjent"

@pytest.mark.parametrize("location,expected", [
    (LocationRating.EXCELLENT, 100),
    (LocationRating.VERY_GOOD, 90),
    (LocationRating.GOOD, 75),
    (LocationRating.AVERAGE, 50),
    (LocationRating.BELOW_AVERAGE, 25),
])
def test_location_lookup(location, expected):
    result = score(ScoringCriterion.LOCATION, location=location)
    assert result.score == expected
    assert result.description == f"Makro-Beliggenhet: {location.value}"


# Parking, garden, rental unit

@pytest.mark.parametrize("has_garage,spots,expected", [
    (False, 0, 0),
    (True, 0, 60),
    (True, 1, 80),
    (True, 2, 100),
    (True, 5, 100),
    (False, 1, 20),
    (False, 4, 40),
])
def test_parking(has_garage, spots, expected):
    assert score(ScoringCriterion.PARKING, has_garage=has_garage, parking_spots=spots).score == expected

def test_parking_descriptions():
    assert score(ScoringCriterion.PARKING).description == "Ingen dedikert parkering"
    assert score(ScoringCriterion.PARKING, has_garage=True).description == "Garasje"
    assert score(ScoringCriterion.PARKING, has_garage=True, parking_spots=2).description == "Garasje, 2 P-plass(er)"

@pytest.mark.parametrize("garden,expected", [(0, 0), (250, 50), (500, 100), (1000, 100)])
def test_garden(garden, expected):
    assert score(ScoringCriterion.GARDEN, garden_size=garden).score == pytest.approx(expected)

def test_garden_descriptions():
    assert score(ScoringCriterion.GARDEN).description == "Ingen hage"
    assert score(ScoringCriterion.GARDEN, garden_size=300).description == "Hage: 300 m²"

def test_rental_unit():
    assert score(ScoringCriterion.RENTAL_UNIT, has_rental_unit=True) == CriterionScore(score=100, description="Har utleiedel")
    assert score(ScoringCriterion.RENTAL_UNIT) == CriterionScore(score=0, description="Ingen utleiedel")


# Age

@pytest.mark.parametrize("year_built,condition,expected", [
    (2030, None, 100),  # built in the future still counts as new
    (2022, None, 100),
    (2020, None, 100),
    (2000, None, 100 - 20 / 45 * 100),
    (1975, None, 0),
    (1965, None, 30),
    (1965, ConditionRating.VERY_GOOD, 70),
    (1965, ConditionRating.NEW, 70),
    (1965, ConditionRating.GOOD, 30),
    (1900, None, 0),
    (1900, ConditionRating.NEW, 40),
])
def test_age(year_built, condition, expected):
    result = score(ScoringCriterion.AGE, year_built=year_built, condition=condition)
    assert result.score == pytest.approx(expected)

def test_age_description():
    assert score(ScoringCriterion.AGE, year_built=2000).description == "Byggeår: 2000 (Alder: 25 år)"

def test_age_unknown_year():
    result = score(ScoringCriterion.AGE, year_built=0)
    assert result == CriterionScore(score=0, description="Byggeår ukjent")


# Rooms

@pytest.mark.parametrize("bedrooms,expected", [(6, 100), (4, 100), (3, 90), (2, 70), (1, 40), (0, 10)])
def test_bedrooms(bedrooms, expected):
    result = score(ScoringCriterion.BEDROOMS, bedrooms=bedrooms)
    assert result.score == expected
    assert result.description == f"{bedrooms} soverom"

@pytest.mark.parametrize("bathrooms,expected", [(3, 100), (2, 100), (1.5, 80), (1, 60), (0.5, 10), (0, 10)])
def test_bathrooms(bathrooms, expected):
    assert score(ScoringCriterion.BATHROOMS, bathrooms=bathrooms).score == expected

def test_bathrooms_description():
    assert score(ScoringCriterion.BATHROOMS, bathrooms=1.5).description == "1.5 bad"


# 0-10 ratings

@pytest.mark.parametrize("rating,expected", [(0, 0), (5, 50), (7, 70), (10, 100), (12, 100), (-3, 0)])
def test_rating_scaled_and_clamped(rating, expected):
    result = score(ScoringCriterion.KITCHEN_QUALITY, kitchen_quality=rating)
    assert result.score == expected
    assert result.description == f"Kjøkken: {rating}/10"

def test_every_rating_reads_its_own_field():
    result = calculate_property_scores(Property(potential_score=9, schools_proximity=3), current_year=CURRENT_YEAR)
    assert result.scores[ScoringCriterion.POTENTIAL].score == 90
    assert result.scores[ScoringCriterion.POTENTIAL].description == "Potensial: 9/10"
    assert result.scores[ScoringCriterion.SCHOOLS_PROXIMITY].score == 30
    assert result.scores[ScoringCriterion.KITCHEN_QUALITY].score == 0


# Aggregation

def test_all_criteria_present(sample_property):
    result = evaluate(sample_property, DEFAULT_WEIGHTS, current_year=CURRENT_YEAR)
    assert list(result.scores) == list(ScoringCriterion)
    assert len(result.scores) == 22

def test_scores_and_total_within_bounds():
    extreme = Property(
        price=1, area=10_000, has_garage=True, parking_spots=50, garden_size=99_999,
        year_built=1500, bedrooms=40, bathrooms=-2, kitchen_quality=99, potential_score=-99,
    )
    result = calculate_property_scores(extreme, current_year=CURRENT_YEAR)
    assert all(0 <= s.score <= 100 for s in result.scores.values())
    assert 0 <= result.total_score <= 100

def test_all_weights_zero_gives_zero(sample_property):
    zero = {c: 0 for c in ScoringCriterion}
    assert calculate_property_scores(sample_property, zero).total_score == 0
    assert calculate_property_scores(sample_property, {}).total_score == 0

def test_single_active_weight_gives_that_score(sample_property):
    result = calculate_property_scores(sample_property, only(ScoringCriterion.BEDROOMS, 3))
    assert result.total_score == 70

def test_golden_total(sample_property):
    result = calculate_property_scores(sample_property, DEFAULT_WEIGHTS, current_year=CURRENT_YEAR)
    assert result.total_score == 52

def test_golden_total_without_year(sample_property):
    prop = sample_property.model_copy(update={"year_built": 0})
    assert calculate_property_scores(prop, DEFAULT_WEIGHTS, current_year=CURRENT_YEAR).total_score == 50

def test_default_weights_used_when_omitted(sample_property):
    assert calculate_property_scores(sample_property, current_year=CURRENT_YEAR).total_score == 52

def test_total_rounds_half_up():
    scores = {
        ScoringCriterion.KITCHEN_QUALITY: CriterionScore(score=50, description=""),
        ScoringCriterion.STORAGE_QUALITY: CriterionScore(score=51, description=""),
    }
    weights = {ScoringCriterion.KITCHEN_QUALITY: 1, ScoringCriterion.STORAGE_QUALITY: 1}
    assert aggregate(scores, weights) == 51

def test_kitchen_monotonicity(sample_property):
    previous = None
    for rating in range(11):
        prop = sample_property.model_copy(update={"kitchen_quality": rating})
        result = calculate_property_scores(prop, DEFAULT_WEIGHTS, current_year=CURRENT_YEAR)
        kitchen = result.scores[ScoringCriterion.KITCHEN_QUALITY].score
        assert kitchen == rating * 10
        if previous is not None:
            assert kitchen - previous[0] == 10
            assert result.total_score >= previous[1]
        previous = (kitchen, result.total_score)

def test_idempotent(sample_property):
    first = calculate_property_scores(sample_property, DEFAULT_WEIGHTS, current_year=CURRENT_YEAR)
    second = calculate_property_scores(sample_property, DEFAULT_WEIGHTS, current_year=CURRENT_YEAR)
    assert first == second
    assert first.model_dump() == second.model_dump()

def test_zero_weight_excludes_criterion(sample_property):
    weights = dict(DEFAULT_WEIGHTS)
    weights[ScoringCriterion.KITCHEN_QUALITY] = 0
    totals = {
        calculate_property_scores(
            sample_property.model_copy(update={"kitchen_quality": rating}), weights, current_year=CURRENT_YEAR
        ).total_score
        for rating in (0, 3, 10)
    }
    assert len(totals) == 1

    without_key = {c: w for c, w in weights.items() if c != ScoringCriterion.KITCHEN_QUALITY}
    assert calculate_property_scores(sample_property, without_key, current_year=CURRENT_YEAR).total_score in totals

def test_malformed_weights_are_excluded(sample_property):
    weights = only(ScoringCriterion.BEDROOMS, 5)
    weights[ScoringCriterion.KITCHEN_QUALITY] = -10
    weights[ScoringCriterion.POTENTIAL] = "lots"
    weights[ScoringCriterion.GARDEN] = float("nan")
    assert calculate_property_scores(sample_property, weights).total_score == 70

def test_weights_keyed_by_value_or_name(sample_property):
    by_value = {ScoringCriterion.BEDROOMS.value: 1}
    by_name = {"BEDROOMS": 1}
    assert calculate_property_scores(sample_property, by_value).total_score == 70
    assert calculate_property_scores(sample_property, by_name).total_score == 70


# Degenerate input

def test_malformed_numeric_input_is_treated_as_zero():
    raw = {
        "price": "abc",
        "area": None,
        "yearBuilt": float("nan"),
        "bedrooms": float("inf"),
        "kitchenQuality": "n/a",
        "condition": "Splendid",
        "hasGarage": None,
    }
    result = calculate_property_scores(raw, current_year=CURRENT_YEAR)
    assert result.scores[ScoringCriterion.PRICE_PER_SQM].description == "Areal mangler"
    assert result.scores[ScoringCriterion.AGE].description == "Byggeår ukjent"
    assert result.scores[ScoringCriterion.BEDROOMS].score == 10
    assert result.scores[ScoringCriterion.KITCHEN_QUALITY].score == 0
    assert result.scores[ScoringCriterion.CONDITION].score == 0
    assert 0 <= result.total_score <= 100
    assert not math.isnan(result.total_score)

def test_mapping_input_with_formatted_numbers(sample_property_data):
    raw = {**sample_property_data, "price": "3 000 000", "bathrooms": "1,5"}
    result = calculate_property_scores(raw, current_year=CURRENT_YEAR)
    assert result.scores[ScoringCriterion.PRICE_PER_SQM].description == "Pris/kvm: 50\u00a0000 kr"
    assert result.scores[ScoringCriterion.BATHROOMS].score == 80

def test_stale_derived_fields_are_ignored(sample_property_data):
    raw = {**sample_property_data, "totalScore": 999, "scores": {"bogus": 1}}
    result = calculate_property_scores(raw, current_year=CURRENT_YEAR)
    assert result.total_score == 52

def test_property_model_tolerates_stale_derived_fields():
    prop = Property.model_validate({"totalScore": 76.9, "scores": {"bogus": 1}})
    assert prop.total_score == 77
    assert prop.scores is None
    assert Property.model_validate({"totalScore": -4}).total_score == 0

def test_integer_too_large_for_float_is_treated_as_zero():
    result = calculate_property_scores({"price": 10**400, "area": 60, "kitchenQuality": 10**400})
    assert result.scores[ScoringCriterion.PRICE_PER_SQM].score == pytest.approx(100)
    assert result.scores[ScoringCriterion.KITCHEN_QUALITY].score == 0
    assert Property(price=10**400).price == 0

def test_price_per_sqm_overflow():
    result = calculate_property_scores({"price": 1e308, "area": 0.5}, current_year=CURRENT_YEAR)
    assert result.scores[ScoringCriterion.PRICE_PER_SQM] == CriterionScore(score=0, description="Pris/kvm: ukjent")
    assert 0 <= result.total_score <= 100

@pytest.mark.parametrize("huge", [1e307, 1e308])
def test_huge_weights_do_not_overflow(sample_property, huge):
    weights = only(ScoringCriterion.KITCHEN_QUALITY, huge)
    assert calculate_property_scores(sample_property, weights, current_year=CURRENT_YEAR).total_score == 50

    prop = sample_property.model_copy(update={"kitchen_quality": 4, "living_room_quality": 6})
    weights[ScoringCriterion.LIVING_ROOM_QUALITY] = huge
    assert calculate_property_scores(prop, weights, current_year=CURRENT_YEAR).total_score == 50


# Batch and configuration

def test_score_properties_preserves_order(sample_property):
    cheap = sample_property.model_copy(update={"id": "cheap", "price": 1_000_000})
    pricey = sample_property.model_copy(update={"id": "pricey", "price": 9_000_000})
    scored = score_properties([pricey, cheap], DEFAULT_WEIGHTS, current_year=CURRENT_YEAR)
    assert [p.id for p in scored] == ["pricey", "cheap"]
    assert scored[1].total_score > scored[0].total_score
    assert all(len(p.scores) == 22 for p in scored)

def test_custom_thresholds():
    thresholds = ScoringThresholds(MIN_EXPECTED_PRICE_PER_SQM=10_000, MAX_EXPECTED_PRICE_PER_SQM=110_000)
    result = calculate_property_scores(Property(price=3_000_000, area=50), thresholds=thresholds)
    assert result.scores[ScoringCriterion.PRICE_PER_SQM].score == pytest.approx(50)
