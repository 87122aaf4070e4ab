"""Tests for data models."""

from datetime import datetime, timezone

import pytest

from fitness_tracker.errors import ValidationFailure
from fitness_tracker.models import LoginForm, RegisterForm, Session, SessionState, UserProfile


class TestSession:
    """Tests for Session model."""

    def test_session_round_trip(self):
        """Test session serialization."""
        session = Session(access_token="a", refresh_token="r")
        assert Session.from_dict(session.to_dict()) == session

    @pytest.mark.parametrize(
        "payload",
        [
            {"access": "a", "refresh": "r"},
            {"access_token": "a", "refresh_token": "r"},
            {"user": {"id": 1}, "tokens": {"access": "a", "refresh": "r"}},
        ],
    )
    def test_from_token_response(self, payload):
        """Test both token key spellings and nested tokens are accepted."""
        session = Session.from_token_response(payload)
        assert session == Session(access_token="a", refresh_token="r")

    @pytest.mark.parametrize("payload", [None, [], {}, {"refresh": "r"}, {"access": ""}])
    def test_from_token_response_without_access(self, payload):
        assert Session.from_token_response(payload) is None

    def test_with_access_token_keeps_refresh(self):
        session = Session(access_token="old", refresh_token="r")
        refreshed = session.with_access_token("new")
        assert refreshed == Session(access_token="new", refresh_token="r")
        assert session.access_token == "old"

    def test_with_access_token_rotates_refresh(self):
        session = Session(access_token="old", refresh_token="r1")
        assert session.with_access_token("new", "r2").refresh_token == "r2"

    def test_repr_hides_tokens(self):
        """Test tokens do not leak into logs."""
        text = repr(Session(access_token="secret-access", refresh_token="secret-refresh"))
        assert "secret" not in text

    def test_state_values(self):
        assert SessionState("refreshing") == SessionState.REFRESHING


class TestUserProfile:
    """Tests for UserProfile model."""

    def test_from_dict(self):
        """Test profile deserialization."""
        profile = UserProfile.from_dict(
            {
                "id": 3,
                "username": "sam",
                "email": "sam@example.com",
                "first_name": "Sam",
                "last_name": "Lee",
                "created_at": "2023-06-01T12:00:00Z",
            }
        )
        assert profile.display_name == "Sam Lee"
        assert profile.created_at == datetime(2023, 6, 1, 12, 0, tzinfo=timezone.utc)
        assert profile.member_since == "2023-06-01"

    def test_date_joined_alias(self):
        profile = UserProfile.from_dict({"username": "sam", "date_joined": "2022-02-02T00:00:00"})
        assert profile.member_since == "2022-02-02"

    def test_missing_fields(self):
        """Test sparse payloads fall back to defaults."""
        profile = UserProfile.from_dict({"username": "sam", "created_at": "not a date"})
        assert profile.display_name == "sam"
        assert profile.member_since == "N/A"
        assert profile.email == ""

    def test_to_dict(self):
        profile = UserProfile(id=1, username="sam", email="s@e.com")
        data = profile.to_dict()
        assert data["username"] == "sam"
        assert data["created_at"] is None


class TestLoginForm:
    """Tests for LoginForm validation."""

    def test_valid(self):
        form = LoginForm(email=" jane@example.com ", password="pw")
        assert form.validate() == {}
        assert form.to_payload() == {"email": "jane@example.com", "password": "pw"}

    def test_required(self):
        errors = LoginForm().validate()
        assert errors == {
            "email": ["This field is required."],
            "password": ["This field is required."],
        }

    def test_email_format(self):
        assert LoginForm(email="not-an-email", password="pw").validate() == {
            "email": ["Enter a valid email address."]
        }

    def test_ensure_valid_raises(self):
        with pytest.raises(ValidationFailure) as exc_info:
            LoginForm(email="jane@example.com").ensure_valid()
        assert exc_info.value.field_errors == {"password": ["This field is required."]}


class TestRegisterForm:
    """Tests for RegisterForm validation."""

    def make(self, **overrides):
        values = dict(
            username="sam",
            email="sam@example.com",
            password="pw-12345",
            password_confirm="pw-12345",
            first_name="Sam",
            last_name="Lee",
        )
        values.update(overrides)
        return RegisterForm(**values)

    def test_valid(self):
        form = self.make()
        assert form.validate() == {}
        assert form.to_payload()["password2"] == "pw-12345"
        assert form.credentials == LoginForm(email="sam@example.com", password="pw-12345")

    def test_password_mismatch(self):
        errors = self.make(password_confirm="other").validate()
        assert errors == {"password_confirm": ["Passwords do not match."]}

    def test_all_fields_required(self):
        errors = RegisterForm().validate()
        assert set(errors) == {
            "username",
            "email",
            "password",
            "password_confirm",
            "first_name",
            "last_name",
        }
