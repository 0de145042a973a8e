"""Tests for the Result type and the input validators."""

import pytest
from hypothesis import given
from hypothesis import strategies as st

from healthlog.services.results import Result, ValidationError
from healthlog.services.validation import (
    AccountValidator,
    CheckInValidator,
    HealthProfileValidator,
)

VALID_PROFILE = {
    "weight": 70.0,
    "height": 175.0,
    "age": 30,
    "gender": "M",
    "activity_level": "moderate",
    "target_weight": 65.0,
}


class TestResult:
    """Test the Result type for explicit error handling."""

    def test_result_ok_creates_successful_result(self) -> None:
        result: Result[str, Exception] = Result.ok("success")
        assert result.is_ok()
        assert not result.is_err()
        assert result.unwrap() == "success"

    def test_result_error_creates_failed_result(self) -> None:
        error = ValidationError("bad input")
        result: Result[str, ValidationError] = Result.err(error)
        assert not result.is_ok()
        assert result.is_err()
        assert result.unwrap_or("default") == "default"
        assert result.unwrap_err() is error

    def test_unwrap_raises_on_error_result(self) -> None:
        result: Result[str, ValidationError] = Result.err(ValidationError("bad input"))

        with pytest.raises(ValidationError, match="bad input"):
            result.unwrap()

    def test_result_requires_exactly_one_side(self) -> None:
        with pytest.raises(ValueError):
            Result()
        with pytest.raises(ValueError):
            Result(value="x", error=ValidationError("y"))


def _profile_error(**overrides: object) -> str | None:
    fields = {**VALID_PROFILE, **overrides}
    result = HealthProfileValidator().validate(**fields)  # type: ignore[arg-type]
    return str(result.unwrap_err()) if result.is_err() else None


class TestHealthProfileValidator:
    def test_valid_profile_passes(self) -> None:
        assert _profile_error() is None

    @pytest.mark.parametrize(
        "overrides,message",
        [
            ({"weight": 0.0}, "Weight must be between 0 and 300 kg"),
            ({"height": 251.0}, "Height must be between 0 and 250 cm"),
            ({"age": 0}, "Age must be between 0 and 150 years"),
            ({"age": 30.5}, "Age must be a whole number"),
            ({"gender": "X"}, "Gender must be M (male) or F (female)"),
            ({"activity_level": "couch"}, "Activity level must be a valid value"),
            ({"target_weight": -1.0}, "Target weight must be between 0 and 300 kg"),
        ],
    )
    def test_each_rule_has_its_own_message(self, overrides: dict, message: str) -> None:
        assert _profile_error(**overrides) == message

    def test_first_violation_wins(self) -> None:
        assert _profile_error(weight=-5.0, height=999.0, gender="X") == (
            "Weight must be between 0 and 300 kg"
        )

    def test_upper_bounds_are_inclusive(self) -> None:
        assert _profile_error(weight=300.0, height=250.0, age=150, target_weight=300.0) is None

    def test_zero_target_means_no_goal(self) -> None:
        assert _profile_error(target_weight=0.0) is None

    @given(
        weight=st.one_of(
            st.floats(max_value=0.0, allow_nan=False),
            st.floats(min_value=300.0, exclude_min=True, allow_nan=False),
        )
    )
    def test_out_of_range_weight_always_rejected(self, weight: float) -> None:
        assert _profile_error(weight=weight) == "Weight must be between 0 and 300 kg"

    def test_nan_weight_rejected(self) -> None:
        assert _profile_error(weight=float("nan")) == "Weight must be between 0 and 300 kg"


class TestCheckInValidator:
    @pytest.fixture
    def validator(self) -> CheckInValidator:
        return CheckInValidator()

    def test_valid_check_in_passes(self, validator: CheckInValidator) -> None:
        assert validator.validate("great", 8.0, 2000, 30).is_ok()

    def test_bounds_are_inclusive(self, validator: CheckInValidator) -> None:
        assert validator.validate("terrible", 0.0, 0, 0).is_ok()
        assert validator.validate("terrible", 24.0, 10000, 1440).is_ok()

    @pytest.mark.parametrize(
        "args,message",
        [
            (("happy", 8.0, 2000, 30), "Mood must be a valid value"),
            (("good", 24.5, 2000, 30), "Sleep hours must be between 0 and 24"),
            (("good", 8.0, 10001, 30), "Water intake must be between 0 and 10000 ml"),
            (("good", 8.0, 1500.5, 30), "Water intake must be a whole number of ml"),
            (("good", 8.0, 2000, -1), "Exercise minutes must be between 0 and 1440"),
            (("good", 8.0, 2000, 20.5), "Exercise minutes must be a whole number"),
        ],
    )
    def test_rejections(self, validator: CheckInValidator, args: tuple, message: str) -> None:
        result = validator.validate(*args)
        assert result.is_err()
        assert str(result.unwrap_err()) == message

    def test_mood_vocabulary_is_immutable(self) -> None:
        assert isinstance(CheckInValidator.MOODS, frozenset)
        assert CheckInValidator.MOODS == {"great", "good", "normal", "bad", "terrible"}


class TestAccountValidator:
    @pytest.fixture
    def validator(self) -> AccountValidator:
        return AccountValidator()

    @pytest.mark.parametrize(
        "username,password,confirm,message",
        [
            ("", "secret1", "secret1", "Username cannot be empty"),
            ("   ", "secret1", "secret1", "Username cannot be empty"),
            (None, "secret1", "secret1", "Username cannot be empty"),
            ("ab", "secret1", "secret1", "Username must be between 3 and 20 characters"),
            ("a" * 21, "secret1", "secret1", "Username must be between 3 and 20 characters"),
            ("bad-name", "secret1", "secret1", "Username may only contain"),
            ("good_name", "      ", "      ", "Password cannot be empty"),
            ("good_name", "12345", "12345", "Password must be at least 6 characters"),
            ("good_name", "secret1", "secret2", "Passwords do not match"),
        ],
    )
    def test_registration_rejections(
        self,
        validator: AccountValidator,
        username: str | None,
        password: str,
        confirm: str,
        message: str,
    ) -> None:
        result = validator.validate_registration(username, password, confirm)
        assert result.is_err()
        assert str(result.unwrap_err()).startswith(message)

    def test_registration_accepts_valid_input(self, validator: AccountValidator) -> None:
        assert validator.validate_registration("valid_user1", "secret1", "secret1").is_ok()

    def test_username_with_trailing_newline_rejected(self, validator: AccountValidator) -> None:
        assert validator.validate_registration("valid_user\n", "secret1", "secret1").is_err()

    def test_login_requires_both_fields(self, validator: AccountValidator) -> None:
        assert str(validator.validate_login("", "x").unwrap_err()) == "Username cannot be empty"
        assert str(validator.validate_login("bob", " ").unwrap_err()) == "Password cannot be empty"
        assert validator.validate_login("bob", "x").is_ok()

    def test_new_password_rules(self, validator: AccountValidator) -> None:
        assert str(validator.validate_new_password("", "").unwrap_err()) == (
            "New password cannot be empty"
        )
        assert str(validator.validate_new_password("short", "short").unwrap_err()) == (
            "New password must be at least 6 characters"
        )
        assert str(validator.validate_new_password("secret2", "secret3").unwrap_err()) == (
            "New passwords do not match"
        )
        assert validator.validate_new_password("secret2", "secret2").is_ok()
