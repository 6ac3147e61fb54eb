"""Tests for the session stub and the login rule."""

import pytest

from lailatov.core.constants import SESSION_ROLE_KEY, SESSION_USERNAME_KEY
from lailatov.services.auth_manager import Session, resolve_login


def test_login_writes_both_keys():
    storage = {}
    Session(storage).login("levi-family", "parent")
    assert storage == {SESSION_USERNAME_KEY: "levi-family", SESSION_ROLE_KEY: "parent"}


def test_login_overwrites_previous_session():
    storage = {SESSION_USERNAME_KEY: "coach", SESSION_ROLE_KEY: "coach"}
    session = Session(storage)
    session.login("cohen-family", "parent")
    assert session.current_user().username == "cohen-family"
    assert session.is_coach() is False


def test_login_rejects_unknown_role():
    with pytest.raises(ValueError):
        Session({}).login("someone", "admin")


def test_logout_clears_keys_and_tolerates_empty_session():
    storage = {SESSION_USERNAME_KEY: "coach", SESSION_ROLE_KEY: "coach"}
    session = Session(storage)
    session.logout()
    assert storage == {}
    session.logout()
    user = session.current_user()
    assert user.username is None
    assert user.role is None


def test_is_parent_is_case_sensitive():
    session = Session({})
    session.login("levi-family", "parent")
    assert session.is_parent("levi-family") is True
    assert session.is_parent("Levi-Family") is False
    assert session.is_coach() is False


def test_coach_is_not_a_parent():
    session = Session({})
    session.login("coach", "coach")
    assert session.is_coach() is True
    assert session.is_parent("coach") is False


def test_tampered_role_is_ignored():
    session = Session({SESSION_USERNAME_KEY: "x", SESSION_ROLE_KEY: "superuser"})
    assert session.current_user().role is None
    assert session.is_coach() is False


@pytest.mark.parametrize("typed", ["coach", "Coach", "  COACH "])
def test_resolve_login_coach_any_case(typed):
    user = resolve_login(typed)
    assert user.role == "coach"
    assert user.username == "coach"


def test_resolve_login_parent_verbatim():
    user = resolve_login(" משפחת כהן ")
    assert user.role == "parent"
    assert user.username == "משפחת כהן"


@pytest.mark.parametrize("typed", ["", "   "])
def test_resolve_login_rejects_empty(typed):
    with pytest.raises(ValueError):
        resolve_login(typed)
