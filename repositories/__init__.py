"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.recipe_repository import RecipeRepository
from repositories.weekly_plan_repository import WeeklyPlanRepository
from repositories.storage_repository import StoredFileRepository, UploadTicketRepository

__all__ = [
    "BaseRepository",
    "RecipeRepository",
    "WeeklyPlanRepository",
    "StoredFileRepository",
    "UploadTicketRepository",
]
