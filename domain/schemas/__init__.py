"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.ai_schemas import (
    RecipePreferences,
    GeneratedIngredient,
    GeneratedRecipe,
    GeneratedPlanDay,
    GeneratedWeeklyPlan,
)
from domain.schemas.recipe_schemas import (
    IngredientInput,
    StepInput,
    RecipeCreate,
    RecipeUpdate,
    IngredientResponse,
    RecipeStepResponse,
    RecipeSummaryResponse,
    RecipeDetailResponse,
    SlugCheckResponse,
    ShareRecipeRequest,
    GenerateRecipeRequest,
    ImportRecipeRequest,
)
from domain.schemas.plan_schemas import (
    PlanDayInput,
    UpdateWeekRequest,
    GeneratePlanRequest,
    WeekRange,
    PlanDayResponse,
    WeeklyPlanResponse,
    WeeklyPlanSummaryResponse,
)
from domain.schemas.shopping_schemas import (
    ShoppingListItemResponse,
    ShoppingListResponse,
)
from domain.schemas.storage_schemas import UploadUrlResponse, UploadResultResponse

__all__ = [
    "RecipePreferences",
    "GeneratedIngredient",
    "GeneratedRecipe",
    "GeneratedPlanDay",
    "GeneratedWeeklyPlan",
    "IngredientInput",
    "StepInput",
    "RecipeCreate",
    "RecipeUpdate",
    "IngredientResponse",
    "RecipeStepResponse",
    "RecipeSummaryResponse",
    "RecipeDetailResponse",
    "SlugCheckResponse",
    "ShareRecipeRequest",
    "GenerateRecipeRequest",
    "ImportRecipeRequest",
    "PlanDayInput",
    "UpdateWeekRequest",
    "GeneratePlanRequest",
    "WeekRange",
    "PlanDayResponse",
    "WeeklyPlanResponse",
    "WeeklyPlanSummaryResponse",
    "ShoppingListItemResponse",
    "ShoppingListResponse",
    "UploadUrlResponse",
    "UploadResultResponse",
]
