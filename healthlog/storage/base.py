"""
Storage protocols consumed by the services.

Writes report success as a bool; no partial-failure detail is exposed.
Upserts happen as a read followed by a write, so two concurrent saves for the
same user can race. Only an implementation with an atomic upsert keyed by
user (profiles) or (user, date) (check-ins) closes that gap.
"""

from datetime import date
from typing import Protocol

from healthlog.domain.models import CheckIn, HealthProfile, UserAccount


class HealthProfileStore(Protocol):
    def get_latest(self, user_id: int) -> HealthProfile | None:
        """Most recently recorded profile for the user, if any."""
        ...

    def get_all(self, user_id: int) -> list[HealthProfile]:
        """Every stored profile for the user, most recent first."""
        ...

    def insert(self, profile: HealthProfile) -> bool: ...

    def update(self, profile: HealthProfile) -> bool: ...


class CheckInStore(Protocol):
    def get_by_user_and_date(self, user_id: int, day: date) -> CheckIn | None: ...

    def get_recent(self, user_id: int, days: int, today: date) -> list[CheckIn]:
        """Check-ins dated within ``[today - days + 1, today]``, most recent first."""
        ...

    def insert(self, check_in: CheckIn) -> bool: ...

    def update(self, check_in: CheckIn) -> bool: ...


class UserStore(Protocol):
    def username_exists(self, username: str) -> bool: ...

    def authenticate(self, username: str, password: str) -> UserAccount | None: ...

    def get_by_id(self, user_id: int) -> UserAccount | None: ...

    def get_all(self) -> list[UserAccount]: ...

    def count(self) -> int: ...

    def insert(self, user: UserAccount) -> bool: ...

    def update(self, user: UserAccount) -> bool: ...

    def delete(self, user_id: int) -> bool: ...
