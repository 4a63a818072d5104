"""
Shared FastAPI dependencies
"""

from functools import lru_cache

from boligscore.services.catalog import PropertyCatalog


@lru_cache()
def get_catalog() -> PropertyCatalog:
    """Process-wide property catalog"""
    return PropertyCatalog()
