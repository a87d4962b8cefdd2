"""
API Routers
===========
Each router handles a specific domain of the API.
"""
from . import guard, health

__all__ = ["guard", "health"]
