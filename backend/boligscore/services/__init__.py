"""
Services package - stateful collaborators around the scoring engine
"""

from .catalog import PropertyCatalog, SortDirection, SortKey

__all__ = ["PropertyCatalog", "SortDirection", "SortKey"]
