"""
Domain models for personal health tracking.

These models represent the core business concepts and are framework-agnostic.
They use Pydantic for validation but could be swapped to dataclasses if needed.
Entities are owned by the storage collaborator; the services never cache them.
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from healthlog.domain.calculations import HealthCalculations
from healthlog.domain.enums import ActivityLevel, BMICategory, Gender, Mood


class HealthProfile(BaseModel):
    """A user's physical profile. Only the latest one per user is current."""

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    user_id: int
    weight: float = Field(gt=0.0, le=300.0, description="Body weight in kg")
    height: float = Field(gt=0.0, le=250.0, description="Height in cm")
    age: int = Field(gt=0, le=150)
    gender: Gender
    activity_level: ActivityLevel
    target_weight: float = Field(
        default=0.0, ge=0.0, le=300.0, description="Goal weight in kg, 0 means no goal"
    )
    recorded_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @computed_field(return_type=float)
    def bmi(self) -> float:
        return HealthCalculations.calculate_bmi(self.weight, self.height)

    @computed_field(return_type=BMICategory)
    def bmi_category(self) -> BMICategory:
        return HealthCalculations.bmi_category(self.bmi)

    @computed_field(return_type=float)
    def bmr(self) -> float:
        """Resting calorie burn per day."""
        return HealthCalculations.calculate_bmr(self.weight, self.height, self.age, self.gender)

    @computed_field(return_type=float)
    def tdee(self) -> float:
        """Calories burned per day at the profile's activity level."""
        return HealthCalculations.calculate_tdee(self.bmr, self.activity_level)

    @computed_field(return_type=str)
    def ideal_weight_range(self) -> str:
        low, high = HealthCalculations.ideal_weight_bounds(self.height)
        return HealthCalculations.format_weight_range(low, high)

    @computed_field(return_type=float | None)
    def weight_difference(self) -> float | None:
        """Current minus target weight; positive means weight to lose. None without a goal."""
        if self.target_weight <= 0:
            return None
        return self.weight - self.target_weight


class HealthMetrics(BaseModel):
    """Snapshot of every metric derived from one profile."""

    model_config = ConfigDict(frozen=True)

    bmi: float
    bmi_category: BMICategory
    bmr: float
    tdee: float
    ideal_weight_range: str
    weight_difference: float | None = None


class CheckIn(BaseModel):
    """One day's wellbeing entry. Unique per (user_id, check_in_date)."""

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    user_id: int
    check_in_date: date
    mood: Mood
    sleep_hours: float = Field(ge=0.0, le=24.0)
    water_intake: int = Field(ge=0, le=10000, description="Millilitres")
    exercise_minutes: int = Field(ge=0, le=1440)
    notes: str = ""


class UserAccount(BaseModel):
    """Registered user. The password is stored as entered."""

    model_config = ConfigDict(validate_assignment=True)

    id: int | None = None
    username: str = Field(min_length=3, max_length=20, pattern=r"^[a-zA-Z0-9_]+$")
    password: str = Field(repr=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class HealthStatistics(BaseModel):
    """Aggregates over the check-ins inside a trailing window of days."""

    model_config = ConfigDict(frozen=True)

    user_id: int
    days: int = Field(ge=0)
    start_date: date
    end_date: date
    total_check_ins: int = Field(ge=0)
    average_sleep_hours: float | None = None
    average_water_intake: float | None = None
    average_exercise_minutes: float | None = None
    mood_counts: dict[Mood, int] = Field(default_factory=dict)


# Result shapes returned to the calling layer


class HealthProfileResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    profile: HealthProfile | None = None
    message: str


class CheckInResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    check_in: CheckIn | None = None
    message: str


class RegistrationResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str


class LoginResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    user: UserAccount | None = None
    message: str


class PasswordChangeResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool
    message: str


class UserStatistics(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_users: int = Field(ge=0)
    all_users: list[UserAccount] = Field(default_factory=list)
