"""
Health metric formulas.

Key concepts:
- BMI (Body Mass Index): weight over height squared, banded into categories
- BMR (Basal Metabolic Rate): resting calorie burn, Mifflin-St Jeor equation
- TDEE (Total Daily Energy Expenditure): BMR scaled by activity level
- Ideal weight: the normal BMI band mapped back to kilograms for a height
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from datetime import date, timedelta
from types import MappingProxyType
from typing import TYPE_CHECKING

from healthlog.domain.enums import ActivityLevel, BMICategory, Gender, Mood

if TYPE_CHECKING:
    from healthlog.domain.models import CheckIn

# Normal BMI band; also drives the report advice thresholds
BMI_UNDERWEIGHT_BELOW = 18.5
BMI_OVERWEIGHT_FROM = 24.0
BMI_OBESE_FROM = 28.0

ACTIVITY_MULTIPLIERS = MappingProxyType(
    {
        ActivityLevel.SEDENTARY: 1.2,
        ActivityLevel.LIGHT: 1.375,
        ActivityLevel.MODERATE: 1.55,
        ActivityLevel.ACTIVE: 1.725,
        ActivityLevel.VERY_ACTIVE: 1.9,
    }
)

GOAL_REACHED_TOLERANCE_KG = 0.5


class HealthCalculations:
    """Pure calculations over body measurements and check-in history."""

    @staticmethod
    def calculate_bmi(weight_kg: float, height_cm: float) -> float:
        """
        Calculate Body Mass Index.

        BMI = weight (kg) ÷ height (m)²
        """
        height_m = height_cm / 100.0
        return weight_kg / (height_m**2)

    @staticmethod
    def bmi_category(bmi: float) -> BMICategory:
        if bmi < BMI_UNDERWEIGHT_BELOW:
            return BMICategory.UNDERWEIGHT
        elif bmi < BMI_OVERWEIGHT_FROM:
            return BMICategory.NORMAL
        elif bmi < BMI_OBESE_FROM:
            return BMICategory.OVERWEIGHT
        else:
            return BMICategory.OBESE

    @staticmethod
    def calculate_bmr(weight_kg: float, height_cm: float, age: int, gender: Gender) -> float:
        """
        Calculate Basal Metabolic Rate with the Mifflin-St Jeor equation.

        Male:   10 × weight + 6.25 × height − 5 × age + 5
        Female: 10 × weight + 6.25 × height − 5 × age − 161
        """
        base = 10 * weight_kg + 6.25 * height_cm - 5 * age
        return base + 5 if gender == Gender.MALE else base - 161

    @staticmethod
    def calculate_tdee(bmr: float, activity_level: ActivityLevel) -> float:
        return bmr * ACTIVITY_MULTIPLIERS[activity_level]

    @staticmethod
    def ideal_weight_bounds(height_cm: float) -> tuple[float, float]:
        """Weights (kg) at the lower and upper edge of the normal BMI band."""
        height_m_squared = (height_cm / 100.0) ** 2
        return (
            BMI_UNDERWEIGHT_BELOW * height_m_squared,
            BMI_OVERWEIGHT_FROM * height_m_squared,
        )

    @staticmethod
    def format_weight_range(low_kg: float, high_kg: float) -> str:
        return f"{low_kg:.1f}-{high_kg:.1f}kg"

    @staticmethod
    def is_goal_reached(weight_difference: float) -> bool:
        return abs(weight_difference) < GOAL_REACHED_TOLERANCE_KG

    @staticmethod
    def count_consecutive_days(check_ins: Iterable[CheckIn], today: date) -> int:
        """
        Count the unbroken run of daily check-ins ending today or yesterday.

        ``check_ins`` must be ordered most recent first. A run whose newest
        record is older than yesterday is already broken and counts as zero.
        """
        records = iter(check_ins)
        latest = next(records, None)
        if latest is None or latest.check_in_date < today - timedelta(days=1):
            return 0

        streak = 1
        expected = latest.check_in_date - timedelta(days=1)
        for check_in in records:
            if check_in.check_in_date != expected:
                break
            streak += 1
            expected -= timedelta(days=1)
        return streak

    @staticmethod
    def mood_distribution(check_ins: Iterable[CheckIn]) -> dict[Mood, int]:
        counts = Counter(check_in.mood for check_in in check_ins)
        return {mood: counts[mood] for mood in Mood if counts[mood]}
