"""Interactive form input via questionary."""

from datetime import date

import questionary
from questionary import Style

from ..models.forms import LoginForm, RegisterForm

# Custom style for questionnaires
custom_style = Style(
    [
        ("qmark", "fg:#2e7d32 bold"),
        ("question", "bold"),
        ("answer", "fg:#1565c0 bold"),
        ("pointer", "fg:#2e7d32 bold"),
        ("highlighted", "fg:#2e7d32 bold"),
        ("instruction", ""),
        ("text", ""),
    ]
)

WORKOUT_TYPES = [
    "strength",
    "cardio",
    "hiit",
    "flexibility",
    "sports",
    "other",
]

MEAL_TYPES = ["breakfast", "lunch", "dinner", "snack"]


def _required(value: str) -> bool | str:
    return True if value and value.strip() else "This field is required"


def _optional_number(value: str) -> bool | str:
    if not value.strip():
        return True
    try:
        float(value)
    except ValueError:
        return "Enter a number"
    return True


def _number_or_none(value: str | None):
    if value is None or not value.strip():
        return None
    number = float(value)
    return int(number) if number.is_integer() else number


class ManualInputClient:
    """Interactive questionnaires for the CLI forms.

    Each method returns None when the user aborts with Ctrl+C.
    """

    async def collect_login(self, email: str | None = None) -> LoginForm | None:
        """Ask for login credentials."""
        if email is None:
            email = await questionary.text(
                "Email address:", validate=_required, style=custom_style
            ).ask_async()
            if email is None:
                return None

        password = await questionary.password(
            "Password:", validate=_required, style=custom_style
        ).ask_async()
        if password is None:
            return None

        return LoginForm(email=email, password=password)

    async def collect_registration(self) -> RegisterForm | None:
        """Walk through the account registration questions."""
        print("\n=== Create your Fitness Tracker account ===\n")

        answers = await questionary.form(
            first_name=questionary.text("First name:", validate=_required, style=custom_style),
            last_name=questionary.text("Last name:", validate=_required, style=custom_style),
            username=questionary.text("Username:", validate=_required, style=custom_style),
            email=questionary.text("Email address:", validate=_required, style=custom_style),
            password=questionary.password("Password:", validate=_required, style=custom_style),
            password_confirm=questionary.password(
                "Confirm password:", validate=_required, style=custom_style
            ),
        ).ask_async()

        if not answers:
            return None
        return RegisterForm(**answers)

    async def collect_workout(self, existing: dict | None = None) -> dict | None:
        """Ask for the fields of a workout, pre-filled from ``existing``."""
        existing = existing or {}

        answers = await questionary.form(
            name=questionary.text(
                "Workout name:",
                default=str(existing.get("name", "")),
                validate=_required,
                style=custom_style,
            ),
            workout_type=questionary.select(
                "Type:",
                choices=WORKOUT_TYPES,
                default=existing.get("workout_type") if existing.get("workout_type") in WORKOUT_TYPES else None,
                style=custom_style,
            ),
            date=questionary.text(
                "Date (YYYY-MM-DD):",
                default=str(existing.get("date", date.today().isoformat())),
                validate=_required,
                style=custom_style,
            ),
            duration_minutes=questionary.text(
                "Duration (minutes):",
                default=str(existing.get("duration_minutes") or ""),
                validate=_optional_number,
                style=custom_style,
            ),
            calories_burned=questionary.text(
                "Calories burned:",
                default=str(existing.get("calories_burned") or ""),
                validate=_optional_number,
                style=custom_style,
            ),
            notes=questionary.text(
                "Notes:", default=str(existing.get("notes") or ""), style=custom_style
            ),
        ).ask_async()

        if not answers:
            return None

        answers["duration_minutes"] = _number_or_none(answers["duration_minutes"])
        answers["calories_burned"] = _number_or_none(answers["calories_burned"])
        return answers

    async def collect_meal(self) -> dict | None:
        """Ask for the fields of a meal."""
        answers = await questionary.form(
            name=questionary.text("Meal name:", validate=_required, style=custom_style),
            meal_type=questionary.select("Meal:", choices=MEAL_TYPES, style=custom_style),
            date=questionary.text(
                "Date (YYYY-MM-DD):",
                default=date.today().isoformat(),
                validate=_required,
                style=custom_style,
            ),
            calories=questionary.text(
                "Calories:", validate=_optional_number, style=custom_style
            ),
            notes=questionary.text("Notes:", style=custom_style),
        ).ask_async()

        if not answers:
            return None

        answers["calories"] = _number_or_none(answers["calories"])
        return answers
