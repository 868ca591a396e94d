"""Notification endpoints: deliver pending toasts.

Open before sign-in so the client can show auth failures.
"""

from fastapi import APIRouter, Depends, Query

from staffsphere.dependencies import get_toasts
from staffsphere.notifications.schemas import ToastListResponse
from staffsphere.notifications.service import ToastQueue

router = APIRouter(prefix="", tags=["notifications"])


# ── GET / (pending toasts, oldest first) ────────────────────────────

@router.get("", response_model=ToastListResponse)
async def list_toasts(
    peek: bool = Query(default=False, description="Leave the toasts queued"),
    toasts: ToastQueue = Depends(get_toasts),
):
    """Return pending toasts; they are removed unless ``peek`` is set."""
    return ToastListResponse(data=toasts.peek() if peek else toasts.drain())
