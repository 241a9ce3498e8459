"""Tests for the session context."""

import pytest

from cashbook.domain.errors import AuthenticationError
from cashbook.domain.session import (
    DEFAULT_ROLE,
    SessionContext,
    SessionUser,
    environment_identity_provider,
    name_from_email,
    overriding_identity_provider,
    static_identity_provider,
)


def test_empty_session():
    session = SessionContext(static_identity_provider(None))
    session.refresh()

    assert session.current_user is None
    assert session.role is None
    assert session.display_name == ""
    assert session.identity() is None
    with pytest.raises(AuthenticationError):
        session.require_identity()


def test_refresh_loads_user_and_clear_forgets_it():
    user = SessionUser(id="u1", email="marta.diaz@example.com", first_name="Marta", last_name="Diaz")
    session = SessionContext(static_identity_provider(user))

    assert session.current_user is None
    session.refresh()
    assert session.current_user == user
    assert session.display_name == "Marta Diaz"
    assert session.role == DEFAULT_ROLE

    identity = session.require_identity()
    assert identity.id == "u1"
    assert identity.name == "Marta Diaz"
    assert identity.email == "marta.diaz@example.com"

    session.clear()
    assert session.current_user is None


def test_refresh_picks_up_provider_changes():
    users = [SessionUser(id="a"), SessionUser(id="b", role="admin")]
    session = SessionContext(lambda: users[0])

    session.refresh()
    assert session.current_user.id == "a"

    users.pop(0)
    assert session.current_user.id == "a"
    session.refresh()
    assert session.current_user.id == "b"
    assert session.role == "admin"


def test_display_name_falls_back_to_email():
    session = SessionContext(static_identity_provider(SessionUser(id="u1", email="luis@example.com")))
    session.refresh()
    assert session.display_name == "luis"


@pytest.mark.parametrize(
    "email, expected",
    [("luis@example.com", "luis"), ("plain", "plain"), ("@example.com", "@example.com"), (None, "")],
)
def test_name_from_email(email, expected):
    assert name_from_email(email) == expected


def test_environment_identity_provider():
    provider = environment_identity_provider(
        {"CASHBOOK_USER_ID": "u9", "CASHBOOK_USER_NAME": "Rosa", "CASHBOOK_USER_ROLE": "admin"}
    )
    user = provider()

    assert user.id == "u9"
    assert user.first_name == "Rosa"
    assert user.role == "admin"
    assert user.email is None


def test_environment_identity_provider_without_identity():
    assert environment_identity_provider({"CASHBOOK_USER_NAME": "Rosa"})() is None


def test_overrides_replace_environment_values_and_keep_role():
    base = environment_identity_provider(
        {"CASHBOOK_USER_EMAIL": "rosa@example.com", "CASHBOOK_USER_NAME": "Rosa", "CASHBOOK_USER_ROLE": "admin"}
    )
    user = overriding_identity_provider(base, id="u3", first_name="Rosita")()

    assert user.id == "u3"
    assert user.email == "rosa@example.com"
    assert user.first_name == "Rosita"
    assert user.role == "admin"


def test_overrides_without_base_user():
    provider = overriding_identity_provider(static_identity_provider(None), email="luis@example.com")
    user = provider()

    assert user.id is None
    assert user.email == "luis@example.com"
    assert user.role is None


def test_overrides_without_identity_return_none():
    provider = overriding_identity_provider(static_identity_provider(None), first_name="Luis")
    assert provider() is None


def test_overrides_pass_through_when_unset():
    user = SessionUser(id="u1", role="admin")
    assert overriding_identity_provider(static_identity_provider(user))() == user
