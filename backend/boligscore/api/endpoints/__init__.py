"""
API endpoints package
"""

from . import health
from . import properties
from . import scoring
from . import weights
