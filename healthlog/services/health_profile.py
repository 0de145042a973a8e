"""
Health profile service: validated upserts, derived metrics and the text report.

The service holds no state of its own. Every call validates its input, reads
the user's latest profile from storage and writes the new one back, either as
an update of that record or as a first insert.
"""

from types import MappingProxyType

from healthlog.domain.calculations import (
    BMI_OBESE_FROM,
    BMI_UNDERWEIGHT_BELOW,
    HealthCalculations,
)
from healthlog.domain.enums import ActivityLevel, Gender
from healthlog.domain.models import HealthMetrics, HealthProfile, HealthProfileResult
from healthlog.services.results import logger
from healthlog.services.validation import HealthProfileValidator
from healthlog.storage.base import HealthProfileStore

SAVE_SUCCEEDED = "Health data saved successfully!"
SAVE_FAILED = "Failed to save health data, please try again later"
NO_DATA_YET = "No health data yet. Please complete your health profile first."

ACTIVITY_DESCRIPTIONS = MappingProxyType(
    {
        ActivityLevel.SEDENTARY: "Sedentary (office work)",
        ActivityLevel.LIGHT: "Lightly active (exercise 1-3 times a week)",
        ActivityLevel.MODERATE: "Moderately active (exercise 3-5 times a week)",
        ActivityLevel.ACTIVE: "Active (exercise 6-7 times a week)",
        ActivityLevel.VERY_ACTIVE: "Very active (intense exercise every day)",
    }
)

LIFESTYLE_TIPS = (
    "Keep a regular daily routine",
    "Get enough sleep (7-8 hours a night)",
    "Exercise moderately, at least 150 minutes of moderate activity a week",
    "Drink plenty of water, at least 1500-2000 ml a day",
    "Monitor your weight and health metrics regularly",
)

REPORT_RULE = "=================="


class HealthProfileService:
    """
    Validates and stores health profiles and turns them into reports.

    Expected failures come back as ``HealthProfileResult(success=False)``;
    storage faults are logged and reported with a generic retry message.
    """

    def __init__(self, store: HealthProfileStore) -> None:
        self.store = store
        self.validator = HealthProfileValidator()
        self.logger = logger.bind(component="health_profile_service")

    def save_profile(
        self,
        user_id: int,
        weight: float,
        height: float,
        age: int,
        gender: str,
        activity_level: str,
        target_weight: float,
    ) -> HealthProfileResult:
        validation = self.validator.validate(
            weight, height, age, gender, activity_level, target_weight
        )
        if validation.is_err():
            message = str(validation.unwrap_err())
            self.logger.info("health_profile_rejected", user_id=user_id, reason=message)
            return HealthProfileResult(success=False, profile=None, message=message)

        profile = HealthProfile(
            user_id=user_id,
            weight=weight,
            height=height,
            age=age,
            gender=Gender(gender),
            activity_level=ActivityLevel(activity_level),
            target_weight=target_weight,
        )

        try:
            existing = self.store.get_latest(user_id)
            if existing is not None:
                profile.id = existing.id
                saved = self.store.update(profile)
            else:
                saved = self.store.insert(profile)
        except Exception as e:
            self.logger.exception("health_profile_storage_failed", user_id=user_id, error=str(e))
            return HealthProfileResult(success=False, profile=None, message=SAVE_FAILED)

        if not saved:
            self.logger.warning("health_profile_write_rejected", user_id=user_id)
            return HealthProfileResult(success=False, profile=None, message=SAVE_FAILED)

        self.logger.info(
            "health_profile_saved",
            user_id=user_id,
            profile_id=profile.id,
            updated=existing is not None,
        )
        return HealthProfileResult(success=True, profile=profile, message=SAVE_SUCCEEDED)

    def get_latest_profile(self, user_id: int) -> HealthProfile | None:
        return self.store.get_latest(user_id)

    def get_profile_history(self, user_id: int) -> list[HealthProfile]:
        return self.store.get_all(user_id)

    @staticmethod
    def derive_metrics(profile: HealthProfile) -> HealthMetrics:
        """Compute every derived metric for a profile. Pure, no storage access."""
        return HealthMetrics(
            bmi=profile.bmi,
            bmi_category=profile.bmi_category,
            bmr=profile.bmr,
            tdee=profile.tdee,
            ideal_weight_range=profile.ideal_weight_range,
            weight_difference=profile.weight_difference,
        )

    def render_report(self, user_id: int) -> str:
        """Render the latest profile of ``user_id`` as a text report."""
        profile = self.store.get_latest(user_id)
        if profile is None:
            return NO_DATA_YET
        return self.format_report(profile)

    def format_report(self, profile: HealthProfile) -> str:
        metrics = self.derive_metrics(profile)
        gender_label = "Male" if profile.gender == Gender.MALE else "Female"

        lines = [
            "=== Personal Health Report ===",
            "",
            "📋 Basic information:",
            f"  Height: {profile.height}cm",
            f"  Weight: {profile.weight}kg",
            f"  Age: {profile.age}",
            f"  Gender: {gender_label}",
            f"  Activity level: {describe_activity_level(profile.activity_level)}",
            "",
            "📊 Health metrics:",
            f"  BMI: {metrics.bmi:.1f} ({metrics.bmi_category.value})",
            f"  Basal metabolic rate: {metrics.bmr:.0f} kcal/day",
            f"  Total daily energy expenditure: {metrics.tdee:.0f} kcal/day",
            f"  Ideal weight range: {metrics.ideal_weight_range}",
            "",
        ]

        if metrics.weight_difference is not None:
            diff = metrics.weight_difference
            lines.append("🎯 Weight goal:")
            if HealthCalculations.is_goal_reached(diff):
                lines.append("  ✅ Congratulations! You have reached your target weight")
            elif diff > 0:
                lines.append(f"  Weight to lose: {diff:.1f}kg")
            else:
                lines.append(f"  Weight to gain: {abs(diff):.1f}kg")
            lines.append("")

        lines.append("💡 Health advice:")
        lines.extend(f"  • {advice}" for advice in generate_health_advice(metrics))
        lines.append("")
        lines.append(REPORT_RULE)
        return "\n".join(lines)


def generate_health_advice(metrics: HealthMetrics) -> list[str]:
    """Fixed advice rules keyed on BMI, followed by the calorie target and general tips."""
    advice: list[str] = []

    if metrics.bmi < BMI_UNDERWEIGHT_BELOW:
        advice.append("Your BMI is low, increase nutrition intake with balanced meals")
        advice.append("Consider asking a dietitian for a healthy weight gain plan")
    elif metrics.bmi >= BMI_OBESE_FROM:
        advice.append("Your BMI is high, reduce intake and increase cardio exercise")
        advice.append("Aim for at least 30 minutes of aerobic exercise every day")
        advice.append("Cut down on high-calorie foods")
    else:
        advice.append("Your BMI is normal, maintain your healthy lifestyle")

    advice.append(f"Aim for {metrics.tdee:.0f} calories a day to maintain your current weight")
    advice.extend(LIFESTYLE_TIPS)
    return advice


def describe_activity_level(activity_level: ActivityLevel) -> str:
    return ACTIVITY_DESCRIPTIONS.get(activity_level, "Unknown")
