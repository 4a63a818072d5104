"""
Criterion enumeration, categorical ratings and the static definition tables
"""

import enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple
from pydantic import BaseModel, ConfigDict

from boligscore.core.exceptions import ConfigurationException


class PropertyType(str, enum.Enum):
    HOUSE = "Enebolig"
    APARTMENT = "Leilighet"
    TOWNHOUSE = "Rekkehus"
    SEMI_DETACHED = "Tomannsbolig"
    OTHER = "Annet"


class ConditionRating(str, enum.Enum):
    NEW = "Nytt"
    VERY_GOOD = "Meget God"
    GOOD = "God"
    FAIR = "Grei"
    POOR = "Dårlig"
    NEEDS_MAJOR_RENOVATION = "Totalrenovering"


class LocationRating(str, enum.Enum):
    EXCELLENT = "Utmerket"
    VERY_GOOD = "Meget God"
    GOOD = "God"
    AVERAGE = "Gjennomsnittlig"
    BELOW_AVERAGE = "Under Middels"


class ScoringCriterion(str, enum.Enum):
    """The closed set of scoring axes. Member order is the display order."""

    PRICE_PER_SQM = "Pris per kvm"
    AREA_SIZE = "Størrelse (BRA)"
    CONDITION = "Tilstand (Generell)"
    LOCATION = "Beliggenhet (Makro)"
    PARKING = "Parkering"
    GARDEN = "Hage"
    RENTAL_UNIT = "Utleiedel (Hybel)"
    AGE = "Alder på bolig"
    BEDROOMS = "Antall Soverom"
    BATHROOMS = "Antall Bad"
    KITCHEN_QUALITY = "Kjøkkenkvalitet"
    LIVING_ROOM_QUALITY = "Stuekvalitet"
    STORAGE_QUALITY = "Oppbevaringsmuligheter"
    FLOOR_PLAN_QUALITY = "Planløsning"
    BALCONY_TERRACE_QUALITY = "Balkong/Terrasse"
    LIGHT_AND_AIR_QUALITY = "Lysforhold og luftighet"
    AREA_IMPRESSION = "Områdeinntrykk (Mikro)"
    NEIGHBORHOOD_IMPRESSION = "Nabolagsfølelse"
    PUBLIC_TRANSPORT_ACCESS = "Tilgang Offentlig Transport"
    SCHOOLS_PROXIMITY = "Nærhet Skoler/Barnehager"
    VIEWING_IMPRESSION = "Inntrykk på Visning"
    POTENTIAL = "Potensial"


# Criteria scored directly from a 0-10 rating: (property field, short label)
RATED_CRITERIA: Mapping[ScoringCriterion, Tuple[str, str]] = MappingProxyType({
    ScoringCriterion.KITCHEN_QUALITY: ("kitchen_quality", "Kjøkken"),
    ScoringCriterion.LIVING_ROOM_QUALITY: ("living_room_quality", "Stue"),
    ScoringCriterion.STORAGE_QUALITY: ("storage_quality", "Oppbevaring"),
    ScoringCriterion.FLOOR_PLAN_QUALITY: ("floor_plan_quality", "Planløsning"),
    ScoringCriterion.BALCONY_TERRACE_QUALITY: ("balcony_terrace_quality", "Balkong/Terrasse"),
    ScoringCriterion.LIGHT_AND_AIR_QUALITY: ("light_and_air_quality", "Lys/Luft"),
    ScoringCriterion.AREA_IMPRESSION: ("area_impression", "Område (Mikro)"),
    ScoringCriterion.NEIGHBORHOOD_IMPRESSION: ("neighborhood_impression", "Nabolag"),
    ScoringCriterion.PUBLIC_TRANSPORT_ACCESS: ("public_transport_access", "Off. transp."),
    ScoringCriterion.SCHOOLS_PROXIMITY: ("schools_proximity", "Skoler/Bhg."),
    ScoringCriterion.VIEWING_IMPRESSION: ("viewing_impression", "Visn.inntrykk"),
    ScoringCriterion.POTENTIAL: ("potential_score", "Potensial"),
})


DEFAULT_WEIGHTS: Mapping[ScoringCriterion, int] = MappingProxyType({
    ScoringCriterion.PRICE_PER_SQM: 15,
    ScoringCriterion.AREA_SIZE: 15,
    ScoringCriterion.CONDITION: 15,
    ScoringCriterion.LOCATION: 10,
    ScoringCriterion.PARKING: 6,
    ScoringCriterion.GARDEN: 5,
    ScoringCriterion.RENTAL_UNIT: 3,
    ScoringCriterion.AGE: 5,
    ScoringCriterion.BEDROOMS: 8,
    ScoringCriterion.BATHROOMS: 10,
    ScoringCriterion.KITCHEN_QUALITY: 10,
    ScoringCriterion.LIVING_ROOM_QUALITY: 10,
    ScoringCriterion.STORAGE_QUALITY: 5,
    ScoringCriterion.FLOOR_PLAN_QUALITY: 4,
    ScoringCriterion.BALCONY_TERRACE_QUALITY: 7,
    ScoringCriterion.LIGHT_AND_AIR_QUALITY: 6,
    ScoringCriterion.AREA_IMPRESSION: 10,
    ScoringCriterion.NEIGHBORHOOD_IMPRESSION: 10,
    ScoringCriterion.PUBLIC_TRANSPORT_ACCESS: 7,
    ScoringCriterion.SCHOOLS_PROXIMITY: 8,
    ScoringCriterion.VIEWING_IMPRESSION: 8,
    ScoringCriterion.POTENTIAL: 7,
})

# Slider range used by weight editors when a definition sets no bounds
DEFAULT_MIN_WEIGHT = 0
DEFAULT_MAX_WEIGHT = 25


class CriterionDefinition(BaseModel):
    """Static, display-oriented description of a criterion"""

    model_config = ConfigDict(frozen=True)

    id: ScoringCriterion
    label: str
    description: str
    min_weight: Optional[int] = None
    max_weight: Optional[int] = None
    step: Optional[int] = None

    def clamp(self, value: int) -> int:
        """Clamp a weight into this criterion's editor range"""
        low = self.min_weight if self.min_weight is not None else DEFAULT_MIN_WEIGHT
        high = self.max_weight if self.max_weight is not None else DEFAULT_MAX_WEIGHT
        return max(low, min(high, value))


SCORING_CRITERIA_DEFINITIONS: Tuple[CriterionDefinition, ...] = (
    CriterionDefinition(id=ScoringCriterion.PRICE_PER_SQM, label="Pris per kvm",
                        description="Vurderer pris i forhold til areal. Lavere er bedre."),
    CriterionDefinition(id=ScoringCriterion.AREA_SIZE, label="Størrelse (BRA)",
                        description="Total bruksareal. Større er generelt bedre, innenfor rimelighetens grenser."),
    CriterionDefinition(id=ScoringCriterion.CONDITION, label="Tilstand (Generell)",
                        description="Boligens generelle vedlikeholdsstandard."),
    CriterionDefinition(id=ScoringCriterion.LOCATION, label="Beliggenhet (Makro)",
                        description="Kvaliteten på den overordnede geografiske plasseringen (bydel, kommune)."),
    CriterionDefinition(id=ScoringCriterion.PARKING, label="Parkering",
                        description="Tilgjengelighet og type parkering (garasje, antall plasser)."),
    CriterionDefinition(id=ScoringCriterion.GARDEN, label="Hage",
                        description="Tilstedeværelse og størrelse på hage."),
    CriterionDefinition(id=ScoringCriterion.RENTAL_UNIT, label="Utleiedel (Hybel)",
                        description="Om boligen har en separat, godkjent utleiedel."),
    CriterionDefinition(id=ScoringCriterion.AGE, label="Alder på bolig",
                        description="Nyere boliger får ofte høyere score, men totalrenoverte eldre boliger kan også score høyt."),
    CriterionDefinition(id=ScoringCriterion.BEDROOMS, label="Antall Soverom",
                        description="Antall soverom i boligen. Vurderes også ift. totalstørrelse."),
    CriterionDefinition(id=ScoringCriterion.BATHROOMS, label="Antall Bad",
                        description="Antall bad/WC i boligen. Vurderes også ift. standard."),
    CriterionDefinition(id=ScoringCriterion.KITCHEN_QUALITY, label="Kjøkkenkvalitet",
                        description="Standard og funksjonalitet på kjøkken (0-10 poeng).", max_weight=20),
    CriterionDefinition(id=ScoringCriterion.LIVING_ROOM_QUALITY, label="Stuekvalitet",
                        description="Størrelse, lysforhold og atmosfære i stue(r) (0-10 poeng).", max_weight=20),
    CriterionDefinition(id=ScoringCriterion.STORAGE_QUALITY, label="Oppbevaringsmuligheter",
                        description="Kvalitet og mengde lagringsplass (boder, skap) (0-10 poeng).", max_weight=15),
    CriterionDefinition(id=ScoringCriterion.FLOOR_PLAN_QUALITY, label="Planløsning",
                        description="Effektivitet og funksjonalitet i boligens planløsning (0-10 poeng).", max_weight=15),
    CriterionDefinition(id=ScoringCriterion.BALCONY_TERRACE_QUALITY, label="Balkong/Terrasse",
                        description="Kvalitet, størrelse og solforhold for uteplass(er) (0-10 poeng).", max_weight=15),
    CriterionDefinition(id=ScoringCriterion.LIGHT_AND_AIR_QUALITY, label="Lysforhold og luftighet",
                        description="Generelle lysforhold, vindusflater og romfølelse (0-10 poeng).", max_weight=15),
    CriterionDefinition(id=ScoringCriterion.AREA_IMPRESSION, label="Områdeinntrykk (Mikro)",
                        description="Inntrykk av umiddelbart nærområde, gaten, utsikt (0-10 poeng).", max_weight=20),
    CriterionDefinition(id=ScoringCriterion.NEIGHBORHOOD_IMPRESSION, label="Nabolagsfølelse",
                        description="Atmosfære, trygghet og fasiliteter i nabolaget (0-10 poeng).", max_weight=20),
    CriterionDefinition(id=ScoringCriterion.PUBLIC_TRANSPORT_ACCESS, label="Tilgang Offentlig Transport",
                        description="Nærhet og frekvens for buss, bane, tog (0-10 poeng).", max_weight=15),
    CriterionDefinition(id=ScoringCriterion.SCHOOLS_PROXIMITY, label="Nærhet Skoler/Barnehager",
                        description="Tilgjengelighet og kvalitet på skoler/barnehager (0-10 poeng).", max_weight=15),
    CriterionDefinition(id=ScoringCriterion.VIEWING_IMPRESSION, label="Inntrykk på Visning",
                        description="Subjektivt helhetsinntrykk fra visningen (0-10 poeng).", max_weight=15),
    CriterionDefinition(id=ScoringCriterion.POTENTIAL, label="Potensial",
                        description="Muligheter for utbygging, modernisering eller verdivekst (0-10 poeng).", max_weight=15),
)

_DEFINITIONS_BY_ID = {definition.id: definition for definition in SCORING_CRITERIA_DEFINITIONS}


def get_definition(criterion: ScoringCriterion) -> CriterionDefinition:
    return _DEFINITIONS_BY_ID[criterion]


def _check_tables() -> None:
    for name, table in (("DEFAULT_WEIGHTS", DEFAULT_WEIGHTS), ("SCORING_CRITERIA_DEFINITIONS", _DEFINITIONS_BY_ID)):
        missing = set(ScoringCriterion) - set(table)
        if missing:
            raise ConfigurationException(
                f"{name} is missing criteria",
                error_code="INCOMPLETE_CRITERIA_TABLE",
                details={"missing": sorted(c.value for c in missing)},
            )


_check_tables()
