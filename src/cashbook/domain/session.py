"""Session context carrying the current user's identity.

The identity provider is external; a :class:`SessionContext` only caches what
the provider returns, between explicit :meth:`SessionContext.refresh` and
:meth:`SessionContext.clear` calls. No authorization decisions are made here.
"""

import os
from dataclasses import dataclass, replace
from typing import Callable, Mapping, Optional

from cashbook.domain.entities import RecorderIdentity
from cashbook.domain.errors import AuthenticationError

DEFAULT_ROLE = "user"


@dataclass(frozen=True)
class SessionUser:
    """User as reported by the identity provider."""

    id: Optional[str]
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    role: Optional[str] = None


IdentityProvider = Callable[[], Optional[SessionUser]]


def name_from_email(email: Optional[str]) -> str:
    """Local part of an email address, used when no name is known."""
    if not email:
        return ""
    at_index = email.find("@")
    if at_index <= 0:
        return email
    return email[:at_index]


class SessionContext:
    """Explicit holder of the current user."""

    def __init__(self, provider: IdentityProvider):
        self._provider = provider
        self._user: Optional[SessionUser] = None

    @property
    def current_user(self) -> Optional[SessionUser]:
        return self._user

    @property
    def role(self) -> Optional[str]:
        if self._user is None:
            return None
        return self._user.role or DEFAULT_ROLE

    @property
    def display_name(self) -> str:
        if self._user is None:
            return ""
        parts = [p for p in (self._user.first_name, self._user.last_name) if p]
        if parts:
            return " ".join(parts)
        return name_from_email(self._user.email)

    def refresh(self) -> Optional[SessionUser]:
        """Reload the user from the provider."""
        self._user = self._provider()
        return self._user

    def clear(self) -> None:
        """Forget the current user."""
        self._user = None

    def identity(self) -> Optional[RecorderIdentity]:
        """Identity to stamp on records, or None when nobody is loaded."""
        if self._user is None:
            return None
        return RecorderIdentity(
            id=self._user.id,
            name=self.display_name or None,
            email=self._user.email,
        )

    def require_identity(self) -> RecorderIdentity:
        """Identity to stamp on records.

        Raises:
            AuthenticationError: If no user is loaded
        """
        identity = self.identity()
        if identity is None:
            raise AuthenticationError("No authenticated user in session")
        return identity


def environment_identity_provider(
    env: Optional[Mapping[str, str]] = None,
) -> IdentityProvider:
    """Provider reading the user from CASHBOOK_USER_* variables.

    Returns None from the provider when neither an id nor an email is set.
    """

    def provide() -> Optional[SessionUser]:
        source = os.environ if env is None else env
        user_id = source.get("CASHBOOK_USER_ID") or None
        email = source.get("CASHBOOK_USER_EMAIL") or None
        if user_id is None and email is None:
            return None
        return SessionUser(
            id=user_id,
            email=email,
            first_name=source.get("CASHBOOK_USER_NAME") or None,
            role=source.get("CASHBOOK_USER_ROLE") or None,
        )

    return provide


def static_identity_provider(user: Optional[SessionUser]) -> IdentityProvider:
    """Provider that always returns the same user."""
    return lambda: user


def overriding_identity_provider(
    provider: IdentityProvider,
    id: Optional[str] = None,
    email: Optional[str] = None,
    first_name: Optional[str] = None,
) -> IdentityProvider:
    """Provider applying explicit values on top of another provider's user.

    Values left as None keep what the wrapped provider returned. Returns None
    when the combined user has neither an id nor an email.
    """
    overrides = {
        key: value
        for key, value in (("id", id), ("email", email), ("first_name", first_name))
        if value
    }

    def provide() -> Optional[SessionUser]:
        user = provider() or SessionUser(id=None)
        user = replace(user, **overrides)
        if user.id is None and user.email is None:
            return None
        return user

    return provide
