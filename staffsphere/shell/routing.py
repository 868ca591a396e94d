"""Route kinds and post-authentication redirect resolution.

Every client path carries an explicit ``RouteKind`` derived from its first
path segment, so ``/reports/login-history`` is an ordinary page while
``/login?redirect=/employees`` is the login page.
"""

from __future__ import annotations

import enum
from typing import Optional
from urllib.parse import parse_qs, quote, urlsplit


class RouteKind(str, enum.Enum):
    login = "login"
    signup = "signup"
    callback = "callback"
    error = "error"
    app = "app"


AUTH_ROUTE_KINDS = frozenset(
    {RouteKind.login, RouteKind.signup, RouteKind.callback, RouteKind.error}
)

_SEGMENT_KINDS: dict[str, RouteKind] = {
    "login": RouteKind.login,
    "signup": RouteKind.signup,
    "callback": RouteKind.callback,
    "error": RouteKind.error,
}

HOME_PATH = "/"
LOGIN_PATH = "/login"


def classify_route(location: str) -> RouteKind:
    path = urlsplit(location).path
    segment = path.strip("/").split("/", 1)[0].lower()
    return _SEGMENT_KINDS.get(segment, RouteKind.app)


def is_auth_page(location: str) -> bool:
    return classify_route(location) in AUTH_ROUTE_KINDS


def current_path(location: str) -> str:
    """Path plus query string of *location*, scheme and host dropped."""
    parts = urlsplit(location)
    path = parts.path or HOME_PATH
    return f"{path}?{parts.query}" if parts.query else path


def redirect_param(location: str) -> Optional[str]:
    """Value of the ``redirect`` query parameter; blank counts as absent."""
    values = parse_qs(urlsplit(location).query).get("redirect")
    return values[0] if values and values[0] else None


def with_redirect(base: str, target: str) -> str:
    return f"{base}?redirect={quote(target, safe='/')}"


def resolve_redirect(location: str, authenticated: bool) -> str:
    """Where to navigate after an auth state change observed at *location*."""
    kind = classify_route(location)
    auth_page = kind in AUTH_ROUTE_KINDS
    redirect = redirect_param(location)

    if authenticated:
        if redirect:
            return redirect
        if not auth_page:
            return location
        return HOME_PATH

    if not auth_page:
        # Ordinary pages are never login/signup kinds: always the bare login page.
        return LOGIN_PATH
    if redirect:
        if not is_auth_page(redirect):
            return with_redirect(LOGIN_PATH, redirect)
        return location
    return location
