"""
Daily check-in service: one mood/sleep/water/exercise entry per user per day.

"Today" comes from an injectable clock so tests can pin the calendar. Streaks
are derived from the stored history on every request and never stored.
"""

import statistics
from collections.abc import Callable
from datetime import date, timedelta

from healthlog.config import TrackingConfig
from healthlog.domain.calculations import HealthCalculations
from healthlog.domain.enums import Mood
from healthlog.domain.models import CheckIn, CheckInResult, HealthStatistics
from healthlog.services.results import logger
from healthlog.services.validation import CheckInValidator
from healthlog.storage.base import CheckInStore

CHECK_IN_FAILED = "Check-in failed, please try again later"

Clock = Callable[[], date]


class CheckInService:
    """Validates and upserts daily check-ins and reports streaks and statistics."""

    def __init__(
        self,
        store: CheckInStore,
        config: TrackingConfig | None = None,
        clock: Clock = date.today,
    ) -> None:
        self.store = store
        self.config = config or TrackingConfig()
        self.clock = clock
        self.validator = CheckInValidator()
        self.logger = logger.bind(component="check_in_service")

    def save_check_in(
        self,
        user_id: int,
        mood: str,
        sleep_hours: float,
        water_intake: int,
        exercise_minutes: int,
        notes: str = "",
    ) -> CheckInResult:
        validation = self.validator.validate(mood, sleep_hours, water_intake, exercise_minutes)
        if validation.is_err():
            message = str(validation.unwrap_err())
            self.logger.info("check_in_rejected", user_id=user_id, reason=message)
            return CheckInResult(success=False, check_in=None, message=message)

        today = self.clock()
        check_in = CheckIn(
            user_id=user_id,
            check_in_date=today,
            mood=Mood(mood),
            sleep_hours=sleep_hours,
            water_intake=water_intake,
            exercise_minutes=exercise_minutes,
            notes=notes or "",
        )

        try:
            existing = self.store.get_by_user_and_date(user_id, today)
            if existing is not None:
                check_in.id = existing.id
                saved = self.store.update(check_in)
            else:
                saved = self.store.insert(check_in)

            if not saved:
                self.logger.warning("check_in_write_rejected", user_id=user_id, day=str(today))
                return CheckInResult(success=False, check_in=None, message=CHECK_IN_FAILED)

            streak = self.get_consecutive_days(user_id)
        except Exception as e:
            self.logger.exception("check_in_storage_failed", user_id=user_id, error=str(e))
            return CheckInResult(success=False, check_in=None, message=CHECK_IN_FAILED)

        self.logger.info(
            "check_in_saved",
            user_id=user_id,
            day=str(today),
            updated=existing is not None,
            streak=streak,
        )
        return CheckInResult(
            success=True,
            check_in=check_in,
            message=f"Checked in successfully! {streak} consecutive days",
        )

    def get_today_check_in(self, user_id: int) -> CheckIn | None:
        return self.store.get_by_user_and_date(user_id, self.clock())

    def has_checked_in_today(self, user_id: int) -> bool:
        return self.get_today_check_in(user_id) is not None

    def get_recent_check_ins(self, user_id: int, days: int) -> list[CheckIn]:
        """Check-ins from the last ``days`` calendar days, newest first, gaps left as gaps."""
        if days <= 0:
            return []
        return self.store.get_recent(user_id, days, self.clock())

    def get_consecutive_days(self, user_id: int) -> int:
        """
        Length of the check-in streak ending today or yesterday.

        Only the last ``streak_lookback_days`` days are scanned, so longer
        streaks are reported at that cap.
        """
        today = self.clock()
        history = self.store.get_recent(user_id, self.config.streak_lookback_days, today)
        return HealthCalculations.count_consecutive_days(history, today)

    def get_health_statistics(self, user_id: int, days: int | None = None) -> HealthStatistics:
        """
        Averages and mood counts over ``[today - days + 1, today]``.

        Days without a check-in are left out of the averages rather than
        counted as zero. A window of zero or fewer days is empty, as in
        ``get_recent_check_ins``.
        """
        days = self.config.default_statistics_days if days is None else days
        today = self.clock()
        if days <= 0:
            return HealthStatistics(
                user_id=user_id, days=0, start_date=today, end_date=today, total_check_ins=0
            )

        check_ins = self.store.get_recent(user_id, days, today)

        def _average(values: list[float]) -> float | None:
            return statistics.fmean(values) if values else None

        return HealthStatistics(
            user_id=user_id,
            days=days,
            start_date=today - timedelta(days=days - 1),
            end_date=today,
            total_check_ins=len(check_ins),
            average_sleep_hours=_average([c.sleep_hours for c in check_ins]),
            average_water_intake=_average([c.water_intake for c in check_ins]),
            average_exercise_minutes=_average([c.exercise_minutes for c in check_ins]),
            mood_counts=HealthCalculations.mood_distribution(check_ins),
        )
