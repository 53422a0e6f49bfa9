"""
Recipe domain mappers.
Handles transformation between Recipe ORM models and response DTOs.
"""

from typing import Optional

from domain.models import Recipe
from domain.schemas.recipe_schemas import RecipeDetailResponse, RecipeSummaryResponse


class RecipeMapper:
    """Mapper for recipe-related transformations."""

    @staticmethod
    def to_summary(
        recipe: Recipe,
        image_url: Optional[str] = None,
        is_own_recipe: Optional[bool] = None,
    ) -> RecipeSummaryResponse:
        summary = RecipeSummaryResponse.model_validate(recipe)
        return summary.model_copy(
            update={"image_url": image_url, "is_own_recipe": is_own_recipe}
        )

    @staticmethod
    def to_detail(recipe: Recipe, image_url: Optional[str] = None) -> RecipeDetailResponse:
        """
        Convert a Recipe with loaded ingredients and steps to RecipeDetailResponse.

        Children come out in their stored order.
        """
        detail = RecipeDetailResponse.model_validate(recipe)
        return detail.model_copy(update={"image_url": image_url, "is_own_recipe": True})
