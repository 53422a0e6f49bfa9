"""
Recipe Repository - Data access layer for recipes and their ingredients/steps
"""

from typing import Iterable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.models import Recipe, Ingredient, RecipeStep


class RecipeRepository(BaseRepository[Recipe]):
    """Repository for recipe data access"""

    def __init__(self, db: Session):
        super().__init__(db, Recipe)

    def get_with_children(self, recipe_id: UUID) -> Optional[Recipe]:
        """Get recipe with ingredients and steps eagerly loaded"""
        return (
            self.db.query(Recipe)
            .options(selectinload(Recipe.ingredients), selectinload(Recipe.steps))
            .filter(Recipe.recipe_id == recipe_id)
            .first()
        )

    def get_many(self, recipe_ids: Iterable[UUID]) -> List[Recipe]:
        ids = list(set(recipe_ids))
        if not ids:
            return []
        return self.db.query(Recipe).filter(Recipe.recipe_id.in_(ids)).all()

    def list_by_user(self, user_id: str) -> List[Recipe]:
        """User's recipes, newest first"""
        return (
            self.db.query(Recipe)
            .filter(Recipe.user_id == user_id)
            .order_by(Recipe.created_at.desc())
            .all()
        )

    def list_public(self, limit: Optional[int] = 50) -> List[Recipe]:
        return (
            self.db.query(Recipe)
            .filter(Recipe.is_public.is_(True))
            .order_by(Recipe.created_at.desc())
            .limit(limit)
            .all()
        )

    def get_by_slug(self, slug: str) -> Optional[Recipe]:
        return self.db.query(Recipe).filter(Recipe.slug == slug).first()

    def replace_children(
        self,
        recipe: Recipe,
        ingredients: List[Ingredient],
        steps: List[RecipeStep],
    ) -> None:
        """Swap in new ingredient and step rows; the old rows are deleted as orphans on flush"""
        recipe.ingredients = ingredients
        recipe.steps = steps
        self.db.flush()
