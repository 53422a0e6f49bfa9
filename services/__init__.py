"""Services package - Business logic layer"""

from services.recipe_service import RecipeService
from services.weekly_plan_service import WeeklyPlanService
from services.shopping_service import ShoppingService
from services.storage_service import StorageService

# Note: ai_service and image_service contain module-level functions, not a class

__all__ = [
    "RecipeService",
    "WeeklyPlanService",
    "ShoppingService",
    "StorageService",
]
