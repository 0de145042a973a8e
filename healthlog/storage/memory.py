"""
In-memory storage implementation.

Backs the demo script and the service tests. Each store keeps its records in
dictionaries guarded by a lock; ids are assigned on insert like a database
sequence would. Records are copied on the way in and on the way out, so
callers never hold a reference to the stored instance.
"""

import itertools
import threading
from datetime import date, timedelta

from healthlog.domain.models import CheckIn, HealthProfile, UserAccount
from healthlog.log import get_logger

logger = get_logger(__name__)


class InMemoryHealthProfileStore:
    """Keeps the full profile history per user."""

    def __init__(self) -> None:
        self._profiles: dict[int, HealthProfile] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.logger = logger.bind(store="health_profiles")

    def get_latest(self, user_id: int) -> HealthProfile | None:
        history = self.get_all(user_id)
        return history[0] if history else None

    def get_all(self, user_id: int) -> list[HealthProfile]:
        with self._lock:
            owned = [p for p in self._profiles.values() if p.user_id == user_id]
        return [
            p.model_copy()
            for p in sorted(owned, key=lambda p: (p.recorded_at, p.id or 0), reverse=True)
        ]

    def insert(self, profile: HealthProfile) -> bool:
        with self._lock:
            profile.id = next(self._ids)
            self._profiles[profile.id] = profile.model_copy()
        self.logger.debug("profile_inserted", profile_id=profile.id, user_id=profile.user_id)
        return True

    def update(self, profile: HealthProfile) -> bool:
        with self._lock:
            if profile.id is None or profile.id not in self._profiles:
                return False
            self._profiles[profile.id] = profile.model_copy()
        self.logger.debug("profile_updated", profile_id=profile.id, user_id=profile.user_id)
        return True


class InMemoryCheckInStore:
    """Check-ins keyed by (user_id, check_in_date)."""

    def __init__(self) -> None:
        self._check_ins: dict[tuple[int, date], CheckIn] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.logger = logger.bind(store="check_ins")

    def get_by_user_and_date(self, user_id: int, day: date) -> CheckIn | None:
        with self._lock:
            stored = self._check_ins.get((user_id, day))
        return stored.model_copy() if stored is not None else None

    def get_recent(self, user_id: int, days: int, today: date) -> list[CheckIn]:
        if days <= 0:
            return []
        start = today - timedelta(days=days - 1)
        with self._lock:
            window = [
                c
                for (owner, day), c in self._check_ins.items()
                if owner == user_id and start <= day <= today
            ]
        window.sort(key=lambda c: c.check_in_date, reverse=True)
        return [c.model_copy() for c in window]

    def insert(self, check_in: CheckIn) -> bool:
        key = (check_in.user_id, check_in.check_in_date)
        with self._lock:
            if key in self._check_ins:
                return False
            check_in.id = next(self._ids)
            self._check_ins[key] = check_in.model_copy()
        self.logger.debug("check_in_inserted", check_in_id=check_in.id, user_id=check_in.user_id)
        return True

    def update(self, check_in: CheckIn) -> bool:
        key = (check_in.user_id, check_in.check_in_date)
        with self._lock:
            existing = self._check_ins.get(key)
            if existing is None or existing.id != check_in.id:
                return False
            self._check_ins[key] = check_in.model_copy()
        self.logger.debug("check_in_updated", check_in_id=check_in.id, user_id=check_in.user_id)
        return True


class InMemoryUserStore:
    """User accounts keyed by id, usernames unique."""

    def __init__(self) -> None:
        self._users: dict[int, UserAccount] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()
        self.logger = logger.bind(store="users")

    def username_exists(self, username: str) -> bool:
        with self._lock:
            return any(u.username == username for u in self._users.values())

    def authenticate(self, username: str, password: str) -> UserAccount | None:
        with self._lock:
            match = next(
                (
                    u
                    for u in self._users.values()
                    if u.username == username and u.password == password
                ),
                None,
            )
        return match.model_copy() if match is not None else None

    def get_by_id(self, user_id: int) -> UserAccount | None:
        with self._lock:
            stored = self._users.get(user_id)
        return stored.model_copy() if stored is not None else None

    def get_all(self) -> list[UserAccount]:
        with self._lock:
            users = sorted(self._users.values(), key=lambda u: u.id or 0)
        return [u.model_copy() for u in users]

    def count(self) -> int:
        with self._lock:
            return len(self._users)

    def insert(self, user: UserAccount) -> bool:
        with self._lock:
            if any(u.username == user.username for u in self._users.values()):
                return False
            user.id = next(self._ids)
            self._users[user.id] = user.model_copy()
        self.logger.debug("user_inserted", user_id=user.id)
        return True

    def update(self, user: UserAccount) -> bool:
        with self._lock:
            if user.id is None or user.id not in self._users:
                return False
            self._users[user.id] = user.model_copy()
        self.logger.debug("user_updated", user_id=user.id)
        return True

    def delete(self, user_id: int) -> bool:
        with self._lock:
            removed = self._users.pop(user_id, None)
        if removed is not None:
            self.logger.debug("user_deleted", user_id=user_id)
        return removed is not None


class InMemoryStore:
    """Bundle of the three in-memory stores, one per service."""

    def __init__(self) -> None:
        self.profiles = InMemoryHealthProfileStore()
        self.check_ins = InMemoryCheckInStore()
        self.users = InMemoryUserStore()
