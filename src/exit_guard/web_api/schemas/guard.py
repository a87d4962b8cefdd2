"""
Guard Schemas
=============
Response models for the exit guard endpoints.
"""
from pydantic import BaseModel, Field
from typing import List, Optional


class TerminationRecord(BaseModel):
    """One intercepted termination request"""

    code: int = Field(..., description="Exit code passed by the caller")


class GuardStatus(BaseModel):
    """Current state of the exit guard"""

    installed: bool = Field(..., description="Whether a guard is active for this app")
    policy: Optional[str] = Field(default=None, description="forward or intercept")
    requests: List[TerminationRecord] = Field(default_factory=list)
    count: int = Field(default=0)

    model_config = {
        "json_schema_extra": {
            "example": {
                "installed": True,
                "policy": "intercept",
                "requests": [{"code": 2}, {"code": 3}],
                "count": 2,
            }
        }
    }
