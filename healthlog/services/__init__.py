"""
Core services for the application.

This package contains the service implementations the calling layer talks to:
health profiles, daily check-ins and user accounts.
"""

from .check_in import CheckInService
from .health_profile import HealthProfileService
from .results import Result, ValidationError
from .user_account import UserAccountService

__all__ = [
    "CheckInService",
    "HealthProfileService",
    "UserAccountService",
    "Result",
    "ValidationError",
]
