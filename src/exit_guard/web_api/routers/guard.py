"""
Guard Router
============
Read-only view of the exit guard serving this app.
"""
from fastapi import APIRouter, Request

from exit_guard.guard import active_guard
from exit_guard.web_api.schemas import GuardStatus, TerminationRecord

router = APIRouter()


@router.get("", response_model=GuardStatus)
async def guard_status(request: Request) -> GuardStatus:
    """
    Report the guard's policy and the exits it has intercepted.

    Uses the guard injected by ``create_app``; falls back to the
    process-wide installed guard.
    """
    guard = getattr(request.app.state, "guard", None) or active_guard()
    if guard is None:
        return GuardStatus(installed=False)

    requests = [TerminationRecord(code=r.code) for r in guard.requests]
    return GuardStatus(
        installed=True,
        policy=guard.policy.value,
        requests=requests,
        count=len(requests),
    )
