from fastapi import APIRouter, Depends, Query, status
from typing import List, Optional
from pydantic import BaseModel

from boligscore.api.deps import get_catalog
from boligscore.core.exceptions import BoligscoreException, from_domain_exception
from boligscore.core.logging import get_logger
from boligscore.scoring.models import Property
from boligscore.services.catalog import PropertyCatalog, SortDirection, SortKey

logger = get_logger(__name__)
router = APIRouter()

class PropertyListResponse(BaseModel):
    properties: List[Property]
    total: int
    sort_key: SortKey
    direction: SortDirection

@router.get("/", response_model=PropertyListResponse)
async def list_properties(
    sort_key: SortKey = Query(SortKey.TOTAL_SCORE, description="Field to sort by"),
    direction: Optional[SortDirection] = Query(None, description="asc or desc; defaults depend on the key"),
    catalog: PropertyCatalog = Depends(get_catalog)
):
    """List scored properties."""
    logger.info("Properties list requested", sort_key=sort_key.value)
    properties = catalog.list_properties(sort_key, direction)
    if direction is None:
        direction = SortDirection.ASC if sort_key == SortKey.ADDRESS else SortDirection.DESC
    return PropertyListResponse(
        properties=properties,
        total=len(properties),
        sort_key=sort_key,
        direction=direction
    )

@router.post("/", response_model=Property, status_code=status.HTTP_201_CREATED)
async def create_property(prop: Property, catalog: PropertyCatalog = Depends(get_catalog)):
    """Add a property; it is scored with the current weights."""
    return catalog.add_property(prop)

@router.get("/{property_id}", response_model=Property)
async def get_property(property_id: str, catalog: PropertyCatalog = Depends(get_catalog)):
    """Get property by ID."""
    try:
        return catalog.get_property(property_id)
    except BoligscoreException as e:
        logger.warning("Property not found", property_id=property_id)
        raise from_domain_exception(e)

@router.put("/{property_id}", response_model=Property)
async def update_property(property_id: str, prop: Property, catalog: PropertyCatalog = Depends(get_catalog)):
    """Replace a property and rescore it."""
    try:
        return catalog.update_property(prop.model_copy(update={"id": property_id}))
    except BoligscoreException as e:
        logger.warning("Property update failed", property_id=property_id, error=e.message)
        raise from_domain_exception(e)

@router.delete("/{property_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_property(property_id: str, catalog: PropertyCatalog = Depends(get_catalog)):
    """Delete a property."""
    try:
        catalog.delete_property(property_id)
    except BoligscoreException as e:
        logger.warning("Property delete failed", property_id=property_id, error=e.message)
        raise from_domain_exception(e)
