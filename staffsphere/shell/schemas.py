"""Session shell Pydantic schemas."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# ── Embedded / Shared ──────────────────────────────────────────────

class Identity(BaseModel):
    """Identity record reported by the auth provider; extra claims are kept."""

    model_config = ConfigDict(extra="allow")

    user_id: str
    name: Optional[str] = None
    email: Optional[str] = None


class Session(BaseModel):
    is_authenticated: bool = False
    user: Optional[Identity] = None


# ── Requests ────────────────────────────────────────────────────────

class AuthCallbackRequest(BaseModel):
    location: str = Field("/", description="Path plus query string the client is on")
    token: Optional[str] = Field(None, description="Identity token; omitted when signed out")


# ── Responses ───────────────────────────────────────────────────────

class ShellStateResponse(BaseModel):
    initialized: bool
    is_authenticated: bool
    user: Optional[Identity] = None
    dark_mode: bool


class NavigationResponse(ShellStateResponse):
    redirect_to: Optional[str] = None


class ThemeResponse(BaseModel):
    dark_mode: bool
