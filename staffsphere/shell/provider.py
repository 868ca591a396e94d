"""Auth provider: reports identity changes through success/error callbacks."""

from __future__ import annotations

import abc
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError

from staffsphere.shell.schemas import Identity

SuccessCallback = Callable[[Optional[Identity]], None]
ErrorCallback = Callable[[Exception], None]


class AuthProviderError(Exception):
    """The provider could not establish who the user is."""


class AuthProvider(abc.ABC):
    """Invokes ``on_success(identity | None)`` or ``on_error(error)``.

    ``setup`` registers the callbacks once; ``authenticate`` reports the
    outcome for one sign-in attempt through them.
    """

    def __init__(self) -> None:
        self._on_success: Optional[SuccessCallback] = None
        self._on_error: Optional[ErrorCallback] = None

    @property
    def is_setup(self) -> bool:
        return self._on_success is not None

    def setup(self, *, on_success: SuccessCallback, on_error: ErrorCallback) -> None:
        self._on_success = on_success
        self._on_error = on_error

    async def authenticate(self, token: Optional[str]) -> None:
        if self._on_success is None or self._on_error is None:
            raise RuntimeError("Auth provider used before setup().")
        try:
            identity = await self.resolve_identity(token)
        except AuthProviderError as exc:
            self._on_error(exc)
            return
        self._on_success(identity)

    @abc.abstractmethod
    async def resolve_identity(self, token: Optional[str]) -> Optional[Identity]:
        """Return the identity for *token*, ``None`` when signed out."""


class TokenAuthProvider(AuthProvider):
    """Verifies signed identity tokens (JWT) issued by the hosted auth service."""

    def __init__(self, secret: str, algorithm: str = "HS256") -> None:
        super().__init__()
        self._secret = secret
        self._algorithm = algorithm

    async def resolve_identity(self, token: Optional[str]) -> Optional[Identity]:
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except ExpiredSignatureError as exc:
            raise AuthProviderError("Your session has expired.") from exc
        except JWTError as exc:
            raise AuthProviderError("Invalid identity token.") from exc

        subject = payload.pop("sub", None)
        if not subject:
            raise AuthProviderError("Identity token has no subject.")
        for reserved in ("exp", "user_id"):
            payload.pop(reserved, None)
        try:
            return Identity(user_id=str(subject), **payload)
        except (TypeError, ValidationError) as exc:
            raise AuthProviderError("Identity token has malformed claims.") from exc

    def issue(self, identity: Identity, expires_in: timedelta = timedelta(hours=24)) -> str:
        """Sign an identity token (used by the hosted login flow and tests)."""
        claims = identity.model_dump(exclude={"user_id"}, exclude_none=True)
        claims.update(
            sub=identity.user_id,
            exp=datetime.now(timezone.utc) + expires_in,
        )
        return jwt.encode(claims, self._secret, algorithm=self._algorithm)
