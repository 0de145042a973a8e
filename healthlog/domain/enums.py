"""Closed vocabularies accepted by the health tracker."""

from enum import Enum


class Gender(str, Enum):
    MALE = "M"
    FEMALE = "F"


class ActivityLevel(str, Enum):
    """Self-reported activity levels, each mapped to a TDEE multiplier."""

    SEDENTARY = "sedentary"
    LIGHT = "light"
    MODERATE = "moderate"
    ACTIVE = "active"
    VERY_ACTIVE = "very_active"


class Mood(str, Enum):
    """Daily mood options for a check-in."""

    GREAT = "great"
    GOOD = "good"
    NORMAL = "normal"
    BAD = "bad"
    TERRIBLE = "terrible"


class BMICategory(str, Enum):
    UNDERWEIGHT = "underweight"
    NORMAL = "normal"
    OVERWEIGHT = "overweight"
    OBESE = "obese"
