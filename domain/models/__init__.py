"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import (
    Base,
    engine,
    SessionLocal,
    init_database,
    get_db_session,
    utcnow,
)
from domain.models.recipe import Recipe, Ingredient, RecipeStep
from domain.models.weekly_plan import WeeklyPlan
from domain.models.storage import StoredFile, UploadTicket

__all__ = [
    # Database
    "Base",
    "engine",
    "SessionLocal",
    "init_database",
    "get_db_session",
    "utcnow",
    # Recipe models
    "Recipe",
    "Ingredient",
    "RecipeStep",
    # Plan models
    "WeeklyPlan",
    # Storage models
    "StoredFile",
    "UploadTicket",
]
