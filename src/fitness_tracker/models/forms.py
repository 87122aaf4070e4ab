"""Login and registration form models.

Validation mirrors the constraints the HTML forms declare (required fields,
``type=email``) so that incomplete forms are rejected before any request is
sent.
"""

import re
from dataclasses import dataclass

from ..errors import ValidationFailure

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+$")


def _check_required(values: dict[str, str], errors: dict[str, list[str]]) -> None:
    for name, value in values.items():
        if not value or not value.strip():
            errors.setdefault(name, []).append("This field is required.")


def _check_email(email: str, errors: dict[str, list[str]]) -> None:
    if email and email.strip() and not _EMAIL_RE.match(email.strip()):
        errors.setdefault("email", []).append("Enter a valid email address.")


@dataclass
class LoginForm:
    """Email/password login form."""

    email: str = ""
    password: str = ""

    def validate(self) -> dict[str, list[str]]:
        """Return field errors; empty when the form can be submitted."""
        errors: dict[str, list[str]] = {}
        _check_required({"email": self.email, "password": self.password}, errors)
        _check_email(self.email, errors)
        return errors

    def ensure_valid(self) -> None:
        """Raise ValidationFailure if the form has errors."""
        errors = self.validate()
        if errors:
            raise ValidationFailure("Please fill in all required fields", field_errors=errors)

    def to_payload(self) -> dict:
        return {"email": self.email.strip(), "password": self.password}


@dataclass
class RegisterForm:
    """New account registration form."""

    username: str = ""
    email: str = ""
    password: str = ""
    password_confirm: str = ""
    first_name: str = ""
    last_name: str = ""

    def validate(self) -> dict[str, list[str]]:
        """Return field errors; empty when the form can be submitted."""
        errors: dict[str, list[str]] = {}
        _check_required(
            {
                "username": self.username,
                "email": self.email,
                "password": self.password,
                "password_confirm": self.password_confirm,
                "first_name": self.first_name,
                "last_name": self.last_name,
            },
            errors,
        )
        _check_email(self.email, errors)
        if self.password and self.password_confirm and self.password != self.password_confirm:
            errors.setdefault("password_confirm", []).append("Passwords do not match.")
        return errors

    def ensure_valid(self) -> None:
        """Raise ValidationFailure if the form has errors."""
        errors = self.validate()
        if errors:
            raise ValidationFailure("Please correct the highlighted fields", field_errors=errors)

    def to_payload(self) -> dict:
        return {
            "username": self.username.strip(),
            "email": self.email.strip(),
            "password": self.password,
            "password2": self.password_confirm,
            "first_name": self.first_name.strip(),
            "last_name": self.last_name.strip(),
        }

    @property
    def credentials(self) -> LoginForm:
        """Login form for the account being registered."""
        return LoginForm(email=self.email, password=self.password)
