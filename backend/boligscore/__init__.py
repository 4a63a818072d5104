"""
Boligscore - rank candidate properties by a weighted multi-criterion score
"""

__version__ = "1.0.0"
