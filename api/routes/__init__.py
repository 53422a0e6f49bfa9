"""API routes package"""

from . import health, recipes, storage, weekly_plans

__all__ = ["health", "recipes", "storage", "weekly_plans"]
