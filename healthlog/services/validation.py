"""
Input validation for profiles, check-ins and accounts.

Each validator checks its rules in a fixed order and stops at the first
violation, returning ``Result.err(ValidationError(message))``. The accepted
vocabularies are immutable class-level constants.
"""

import re
from typing import ClassVar

from healthlog.domain.enums import ActivityLevel, Gender, Mood
from healthlog.services.results import Result, ValidationError

USERNAME_PATTERN = re.compile(r"[a-zA-Z0-9_]+")
USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 20
PASSWORD_MIN_LENGTH = 6

ValidationResult = Result[bool, ValidationError]


def _passed() -> ValidationResult:
    return Result.ok(True)


def _failed(message: str) -> ValidationResult:
    return Result.err(ValidationError(message))


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _is_whole(value: float) -> bool:
    return float(value).is_integer()


class HealthProfileValidator:
    """Range and vocabulary checks for a submitted health profile."""

    GENDERS: ClassVar[frozenset[str]] = frozenset(g.value for g in Gender)
    ACTIVITY_LEVELS: ClassVar[frozenset[str]] = frozenset(a.value for a in ActivityLevel)

    def validate(
        self,
        weight: float,
        height: float,
        age: int,
        gender: str,
        activity_level: str,
        target_weight: float,
    ) -> ValidationResult:
        if not 0 < weight <= 300:
            return _failed("Weight must be between 0 and 300 kg")

        if not 0 < height <= 250:
            return _failed("Height must be between 0 and 250 cm")

        if not 0 < age <= 150:
            return _failed("Age must be between 0 and 150 years")

        if not _is_whole(age):
            return _failed("Age must be a whole number")

        if gender not in self.GENDERS:
            return _failed("Gender must be M (male) or F (female)")

        if activity_level not in self.ACTIVITY_LEVELS:
            return _failed("Activity level must be a valid value")

        if not 0 <= target_weight <= 300:
            return _failed("Target weight must be between 0 and 300 kg")

        return _passed()


class CheckInValidator:
    """Range and vocabulary checks for a daily check-in."""

    MOODS: ClassVar[frozenset[str]] = frozenset(m.value for m in Mood)

    def validate(
        self, mood: str, sleep_hours: float, water_intake: int, exercise_minutes: int
    ) -> ValidationResult:
        if mood not in self.MOODS:
            return _failed("Mood must be a valid value")

        if not 0 <= sleep_hours <= 24:
            return _failed("Sleep hours must be between 0 and 24")

        if not 0 <= water_intake <= 10000:
            return _failed("Water intake must be between 0 and 10000 ml")

        if not _is_whole(water_intake):
            return _failed("Water intake must be a whole number of ml")

        if not 0 <= exercise_minutes <= 1440:
            return _failed("Exercise minutes must be between 0 and 1440")

        if not _is_whole(exercise_minutes):
            return _failed("Exercise minutes must be a whole number")

        return _passed()


class AccountValidator:
    """Format checks for usernames and passwords."""

    def validate_registration(
        self, username: str | None, password: str | None, confirm_password: str | None
    ) -> ValidationResult:
        if _is_blank(username):
            return _failed("Username cannot be empty")

        if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
            return _failed(
                f"Username must be between {USERNAME_MIN_LENGTH} and "
                f"{USERNAME_MAX_LENGTH} characters"
            )

        if not USERNAME_PATTERN.fullmatch(username):
            return _failed("Username may only contain letters, digits and underscores")

        if _is_blank(password):
            return _failed("Password cannot be empty")

        if len(password) < PASSWORD_MIN_LENGTH:
            return _failed(f"Password must be at least {PASSWORD_MIN_LENGTH} characters")

        if password != confirm_password:
            return _failed("Passwords do not match")

        return _passed()

    def validate_login(self, username: str | None, password: str | None) -> ValidationResult:
        if _is_blank(username):
            return _failed("Username cannot be empty")

        if _is_blank(password):
            return _failed("Password cannot be empty")

        return _passed()

    def validate_new_password(
        self, new_password: str | None, confirm_password: str | None
    ) -> ValidationResult:
        if _is_blank(new_password):
            return _failed("New password cannot be empty")

        if len(new_password) < PASSWORD_MIN_LENGTH:
            return _failed(f"New password must be at least {PASSWORD_MIN_LENGTH} characters")

        if new_password != confirm_password:
            return _failed("New passwords do not match")

        return _passed()
