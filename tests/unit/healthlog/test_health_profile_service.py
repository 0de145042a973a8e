"""
Tests for HealthProfileService.

Covers:
- Validation failures never touch storage
- Insert on first save, update with the prior identity on later saves
- Storage failures and faults turn into a retry message
- Report sections and the BMI-driven advice lines
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from healthlog.domain.enums import ActivityLevel, Gender
from healthlog.domain.models import HealthProfile
from healthlog.services.health_profile import (
    NO_DATA_YET,
    SAVE_FAILED,
    SAVE_SUCCEEDED,
    HealthProfileService,
)
from healthlog.storage.base import HealthProfileStore
from healthlog.storage.memory import InMemoryStore

VALID_ARGS = (1, 70.0, 175.0, 30, "M", "moderate", 65.0)


@pytest.fixture
def mock_store() -> MagicMock:
    store = MagicMock(spec=HealthProfileStore)
    store.get_latest.return_value = None
    store.insert.return_value = True
    store.update.return_value = True
    return store


@pytest.fixture
def service(store: InMemoryStore) -> HealthProfileService:
    return HealthProfileService(store.profiles)


def _stored_profile(weight: float, height: float = 170.0, target: float = 0.0) -> HealthProfile:
    return HealthProfile(
        id=7,
        user_id=1,
        weight=weight,
        height=height,
        age=30,
        gender=Gender.FEMALE,
        activity_level=ActivityLevel.LIGHT,
        target_weight=target,
    )


class TestSaveProfile:
    @pytest.mark.parametrize("weight", [0.0, -1.0, 300.01, 500.0])
    def test_weight_out_of_range_rejected_without_storage_access(
        self, mock_store: MagicMock, weight: float
    ) -> None:
        service = HealthProfileService(mock_store)

        result = service.save_profile(1, weight, 175.0, 30, "M", "moderate", 0.0)

        assert result.success is False
        assert result.profile is None
        assert result.message == "Weight must be between 0 and 300 kg"
        mock_store.insert.assert_not_called()
        mock_store.update.assert_not_called()

    def test_fractional_age_rejected_without_storage_access(self, mock_store: MagicMock) -> None:
        service = HealthProfileService(mock_store)

        result = service.save_profile(1, 70.0, 175.0, 30.5, "M", "moderate", 0.0)

        assert result.success is False
        assert result.profile is None
        assert result.message == "Age must be a whole number"
        mock_store.get_latest.assert_not_called()
        mock_store.insert.assert_not_called()

    def test_first_save_inserts(self, mock_store: MagicMock) -> None:
        service = HealthProfileService(mock_store)

        result = service.save_profile(*VALID_ARGS)

        assert result.success is True
        assert result.message == SAVE_SUCCEEDED
        assert result.profile is not None
        assert result.profile.gender == Gender.MALE
        assert result.profile.activity_level == ActivityLevel.MODERATE
        mock_store.insert.assert_called_once()
        mock_store.update.assert_not_called()

    def test_second_save_updates_prior_record(self, mock_store: MagicMock) -> None:
        mock_store.get_latest.return_value = _stored_profile(60.0)
        service = HealthProfileService(mock_store)

        result = service.save_profile(*VALID_ARGS)

        assert result.success is True
        mock_store.insert.assert_not_called()
        mock_store.update.assert_called_once()
        (updated,) = mock_store.update.call_args.args
        assert updated.id == 7
        assert updated.weight == 70.0

    def test_second_save_keeps_single_latest_record(self, service: HealthProfileService) -> None:
        service.save_profile(*VALID_ARGS)
        service.save_profile(1, 68.0, 175.0, 30, "M", "moderate", 65.0)

        history = service.get_profile_history(1)
        assert len(history) == 1
        assert history[0].weight == 68.0
        assert service.get_latest_profile(1) == history[0]

    def test_storage_rejection_reports_retry(self, mock_store: MagicMock) -> None:
        mock_store.insert.return_value = False
        service = HealthProfileService(mock_store)

        result = service.save_profile(*VALID_ARGS)

        assert result.success is False
        assert result.profile is None
        assert result.message == SAVE_FAILED

    def test_storage_fault_reports_retry(self, mock_store: MagicMock) -> None:
        mock_store.get_latest.side_effect = ConnectionError("database unavailable")
        service = HealthProfileService(mock_store)

        result = service.save_profile(*VALID_ARGS)

        assert result.success is False
        assert result.message == SAVE_FAILED
        mock_store.insert.assert_not_called()


class TestDeriveMetrics:
    def test_metrics_are_repeatable(self) -> None:
        profile = _stored_profile(63.58, target=60.0)

        first = HealthProfileService.derive_metrics(profile)
        second = HealthProfileService.derive_metrics(profile)

        assert first == second
        assert first.bmi == pytest.approx(22.0)
        assert first.weight_difference == pytest.approx(3.58)


class TestReport:
    def test_no_profile_returns_fixed_message(self, service: HealthProfileService) -> None:
        assert service.render_report(42) == NO_DATA_YET

    def test_underweight_advice(self, service: HealthProfileService) -> None:
        report = service.format_report(_stored_profile(49.13))

        assert "BMI: 17.0 (underweight)" in report
        assert "increase nutrition" in report
        assert "maintain your healthy lifestyle" not in report

    def test_high_bmi_advice(self, service: HealthProfileService) -> None:
        report = service.format_report(_stored_profile(86.7))

        assert "BMI: 30.0 (obese)" in report
        assert "reduce intake and increase cardio" in report
        assert "30 minutes of aerobic exercise" in report

    def test_normal_bmi_advice(self, service: HealthProfileService) -> None:
        report = service.format_report(_stored_profile(63.58))

        assert "BMI: 22.0 (normal)" in report
        assert "maintain your healthy lifestyle" in report
        assert "increase nutrition" not in report
        assert "cardio" not in report

    def test_report_sections_and_figures(self, service: HealthProfileService) -> None:
        service.save_profile(1, 80.5, 175.0, 30, "M", "moderate", 75.0)

        report = service.render_report(1)

        assert report.startswith("=== Personal Health Report ===")
        assert "Gender: Male" in report
        assert "Moderately active" in report
        # BMR 10*80.5 + 6.25*175 - 5*30 + 5 = 1753.75, TDEE = 1753.75 * 1.55
        assert "Basal metabolic rate: 1754 kcal/day" in report
        assert "Total daily energy expenditure: 2718 kcal/day" in report
        assert "Ideal weight range: 56.7-73.5kg" in report
        assert "Weight to lose: 5.5kg" in report
        assert "Aim for 2718 calories a day" in report
        assert report.endswith("==================")

    def test_goal_section_only_with_target(self, service: HealthProfileService) -> None:
        report = service.format_report(_stored_profile(63.58, target=0.0))
        assert "Weight goal" not in report

    @pytest.mark.parametrize(
        "weight,target,expected",
        [
            (70.0, 70.3, "Congratulations! You have reached your target weight"),
            (70.0, 72.0, "Weight to gain: 2.0kg"),
        ],
    )
    def test_goal_lines(
        self, service: HealthProfileService, weight: float, target: float, expected: str
    ) -> None:
        report = service.format_report(_stored_profile(weight, target=target))
        assert expected in report

    def test_lifestyle_tips_always_present(self, service: HealthProfileService) -> None:
        report = service.format_report(_stored_profile(63.58))

        for tip in ("7-8 hours", "150 minutes", "1500-2000 ml", "regular daily routine"):
            assert tip in report
        assert "Monitor your weight" in report
