"""
Domain enums for leChef application.
Contains all enumeration types used across the domain models.
"""

import enum


class SkillLevel(str, enum.Enum):
    """Cooking skill required by a recipe"""

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class CostLevel(str, enum.Enum):
    """Rough ingredient cost of a recipe"""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class StepType(str, enum.Enum):
    """Recipe step category"""

    PREPARATION = "preparation"
    COOKING = "cooking"


DAYS_IN_WEEK = 7
DAY_NAMES = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)
