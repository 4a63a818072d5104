"""
Property Catalog - in-memory collection of scored properties and the active weights
"""

import threading
import uuid
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from functools import partial
from typing import Any, List, Mapping, Optional
import structlog

from boligscore.core.config import settings
from boligscore.core.exceptions import PropertyNotFoundException
from boligscore.scoring.criteria import ScoringCriterion
from boligscore.scoring.engine import PropertyInput, score_property
from boligscore.scoring.models import Property
from boligscore.scoring.weights import WeightMap, default_weights, merge_weights, validate_weights

logger = structlog.get_logger(__name__)


class SortKey(str, Enum):
    """Fields a property list can be ordered by"""
    TOTAL_SCORE = "totalScore"
    PRICE = "price"
    AREA = "area"
    ADDRESS = "address"


class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class PropertyCatalog:
    """
    Holds properties together with the weights they were scored against.

    Every mutation of a property rescores that property; every weight change rescores
    the whole catalog, so stored scores always match the current weights.
    """

    def __init__(
        self,
        weights: Optional[Mapping[Any, Any]] = None,
        current_year: Optional[int] = None,
        max_workers: int = settings.RESCORE_MAX_WORKERS,
        parallel_threshold: int = settings.RESCORE_PARALLEL_THRESHOLD,
    ):
        self._lock = threading.RLock()
        self._properties: List[Property] = []
        self._weights: WeightMap = validate_weights(weights) if weights is not None else default_weights()
        self._current_year = current_year
        self.max_workers = max_workers
        self.parallel_threshold = parallel_threshold
        logger.info("Property catalog initialized", max_workers=max_workers)

    @property
    def weights(self) -> WeightMap:
        with self._lock:
            return dict(self._weights)

    def __len__(self) -> int:
        with self._lock:
            return len(self._properties)

    def _score(self, prop: PropertyInput) -> Property:
        return score_property(prop, self._weights, self._current_year)

    def _index_of(self, property_id: str) -> int:
        for index, prop in enumerate(self._properties):
            if prop.id == property_id:
                return index
        raise PropertyNotFoundException(property_id)

    def _rescore_all(self) -> None:
        """Rescore every held property against the current weights"""
        if len(self._properties) < self.parallel_threshold or self.max_workers <= 1:
            self._properties = [self._score(prop) for prop in self._properties]
            return

        # executor.map yields results in input order
        scorer = partial(score_property, weights=dict(self._weights), current_year=self._current_year)
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            self._properties = list(executor.map(scorer, self._properties))

    # Properties

    def add_property(self, data: PropertyInput) -> Property:
        """Assign a new id, score the property and put it first in the catalog"""
        if isinstance(data, Property):
            data = data.model_dump(exclude={"scores", "total_score"})
        else:
            data = dict(data)
        data["id"] = str(uuid.uuid4())

        with self._lock:
            prop = self._score(data)
            self._properties.insert(0, prop)

        logger.info("Property added", property_id=prop.id, total_score=prop.total_score)
        return prop

    def get_property(self, property_id: str) -> Property:
        with self._lock:
            return self._properties[self._index_of(property_id)]

    def update_property(self, prop: PropertyInput) -> Property:
        """Replace the property with the same id and rescore it"""
        if not isinstance(prop, Property):
            prop = Property.model_validate({k: v for k, v in prop.items() if k not in ("scores", "totalScore", "total_score")})

        with self._lock:
            index = self._index_of(prop.id)
            scored = self._score(prop.without_scores())
            self._properties[index] = scored

        logger.info("Property updated", property_id=scored.id, total_score=scored.total_score)
        return scored

    def delete_property(self, property_id: str) -> None:
        with self._lock:
            del self._properties[self._index_of(property_id)]
        logger.info("Property deleted", property_id=property_id)

    def list_properties(
        self,
        sort_key: SortKey = SortKey.TOTAL_SCORE,
        direction: Optional[SortDirection] = None,
    ) -> List[Property]:
        """
        Return the catalog ordered by ``sort_key``.

        Addresses sort ascending by default, numeric keys descending.
        """
        sort_key = SortKey(sort_key)
        if direction is None:
            direction = SortDirection.ASC if sort_key == SortKey.ADDRESS else SortDirection.DESC
        direction = SortDirection(direction)

        if sort_key == SortKey.ADDRESS:
            key = lambda p: p.address.casefold()
        elif sort_key == SortKey.TOTAL_SCORE:
            key = lambda p: p.total_score or 0
        elif sort_key == SortKey.PRICE:
            key = lambda p: p.price
        else:
            key = lambda p: p.area

        with self._lock:
            snapshot = list(self._properties)
        return sorted(snapshot, key=key, reverse=direction == SortDirection.DESC)

    # Weights

    def update_weight(self, criterion: ScoringCriterion, value: int) -> WeightMap:
        return self.update_weights({criterion: value})

    def update_weights(self, overrides: Mapping[Any, Any]) -> WeightMap:
        """Apply a partial weight update and rescore the whole catalog"""
        with self._lock:
            self._weights = merge_weights(self._weights, overrides)
            self._rescore_all()
            weights = dict(self._weights)

        logger.info("Weights updated", changed=len(overrides), rescored=len(self))
        return weights

    def reset_weights(self) -> WeightMap:
        with self._lock:
            self._weights = default_weights()
            self._rescore_all()
            weights = dict(self._weights)

        logger.info("Weights reset to defaults", rescored=len(self))
        return weights
