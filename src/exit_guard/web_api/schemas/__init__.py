"""
Pydantic Schemas
===============
Response models for the API.
"""
from .guard import GuardStatus, TerminationRecord

__all__ = ["GuardStatus", "TerminationRecord"]
