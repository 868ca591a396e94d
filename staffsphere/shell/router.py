"""Session router: auth callback, session state, logout, theme.

The callback endpoint is open (it is how a session starts) and rate limited;
the remaining endpoints only read or reset shell state.
"""

from fastapi import APIRouter, Depends, Request

from staffsphere.common.rate_limit import AUTH_CALLBACK_LIMIT, limiter
from staffsphere.dependencies import get_app_store, get_shell
from staffsphere.shell.schemas import (
    AuthCallbackRequest,
    NavigationResponse,
    ShellStateResponse,
    ThemeResponse,
)
from staffsphere.shell.service import SessionShell
from staffsphere.shell.state import AppStore

router = APIRouter(prefix="", tags=["session"])


def _state(store: AppStore) -> dict:
    return dict(
        initialized=store.initialized,
        is_authenticated=store.session.is_authenticated,
        user=store.user,
        dark_mode=store.dark_mode,
    )


# ── POST /callback ──────────────────────────────────────────────────

@router.post("/callback", response_model=NavigationResponse)
@limiter.limit(AUTH_CALLBACK_LIMIT)
async def auth_callback(
    request: Request,
    body: AuthCallbackRequest,
    shell: SessionShell = Depends(get_shell),
):
    """Report the identity observed by the client and get the navigation target."""
    await shell.restore_theme()
    redirect_to = await shell.handle_callback(body.location, body.token)
    return NavigationResponse(redirect_to=redirect_to, **_state(shell.store))


# ── GET "" ──────────────────────────────────────────────────────────

@router.get("", response_model=ShellStateResponse)
async def get_session(store: AppStore = Depends(get_app_store)):
    return ShellStateResponse(**_state(store))


# ── POST /logout ────────────────────────────────────────────────────

@router.post("/logout", response_model=NavigationResponse)
async def logout(shell: SessionShell = Depends(get_shell)):
    redirect_to = shell.logout()
    return NavigationResponse(redirect_to=redirect_to, **_state(shell.store))


# ── Theme ───────────────────────────────────────────────────────────

@router.get("/theme", response_model=ThemeResponse)
async def get_theme(shell: SessionShell = Depends(get_shell)):
    return ThemeResponse(dark_mode=await shell.restore_theme())


@router.post("/theme/toggle", response_model=ThemeResponse)
async def toggle_theme(shell: SessionShell = Depends(get_shell)):
    """Flip dark mode and persist the choice."""
    return ThemeResponse(dark_mode=await shell.toggle_theme())
