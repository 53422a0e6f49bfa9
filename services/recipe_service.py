"""Recipe service: CRUD, sharing, search and AI-assisted creation"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    ConflictError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from core.utils.helpers import slugify
from domain.enums import StepType
from domain.mappers import RecipeMapper
from domain.models import Ingredient, Recipe, RecipeStep, utcnow
from domain.schemas.ai_schemas import GeneratedRecipe, RecipePreferences
from domain.schemas.recipe_schemas import (
    IngredientInput,
    RecipeCreate,
    RecipeDetailResponse,
    RecipeSummaryResponse,
    RecipeUpdate,
    StepInput,
)
from repositories import RecipeRepository
from services import ai_service
from services.storage_service import StorageService

logger = logging.getLogger("lechef.recipes")

SLUG_TAKEN_MESSAGE = "A recipe with this slug already exists. Please choose a different name."


def _require(user_id: Optional[str]) -> str:
    if not user_id:
        raise UnauthorizedError()
    return user_id


def _build_children(ingredients: List[IngredientInput], steps: List[StepInput]):
    ingredient_rows = [
        Ingredient(name=item.name, amount=item.amount, order=i)
        for i, item in enumerate(ingredients)
    ]
    step_rows = [
        RecipeStep(type=step.type, step_number=i + 1, instruction=step.instruction, order=i)
        for i, step in enumerate(steps)
    ]
    return ingredient_rows, step_rows


def _check_image(db: Session, user_id: str, storage_id: Optional[UUID]) -> None:
    if storage_id is not None and not StorageService.owns(db, user_id, storage_id):
        raise ServiceValidationError(
            "Image not found or you don't have permission to use it",
            details={"image_storage_id": str(storage_id)},
        )


class RecipeService:
    """Business logic for recipes."""

    # ------------------ Queries ------------------

    @staticmethod
    def list_recipes(db: Session, user_id: Optional[str]) -> List[RecipeSummaryResponse]:
        """Caller's recipes, newest first; empty for anonymous callers"""
        if not user_id:
            return []
        recipes = RecipeRepository(db).list_by_user(user_id)
        urls = StorageService.get_urls(db, (r.image_storage_id for r in recipes))
        return [
            RecipeMapper.to_summary(r, image_url=urls.get(r.image_storage_id), is_own_recipe=True)
            for r in recipes
        ]

    @staticmethod
    def get_by_id(
        db: Session, user_id: Optional[str], recipe_id: UUID
    ) -> Optional[RecipeDetailResponse]:
        """Owner-only read with ordered ingredients and steps"""
        if not user_id:
            return None
        recipe = RecipeRepository(db).get_with_children(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            return None
        return RecipeMapper.to_detail(
            recipe, image_url=StorageService.get_url(db, recipe.image_storage_id)
        )

    @staticmethod
    def get_by_slug(db: Session, slug: str) -> Optional[RecipeDetailResponse]:
        """Public recipe behind a share slug; private recipes are never returned"""
        repo = RecipeRepository(db)
        recipe = repo.get_by_slug(slug)
        if recipe is None or not recipe.is_public:
            return None
        recipe = repo.get_with_children(recipe.recipe_id)
        detail = RecipeMapper.to_detail(
            recipe, image_url=StorageService.get_url(db, recipe.image_storage_id)
        )
        return detail.model_copy(update={"is_own_recipe": None})

    @staticmethod
    def list_public(db: Session, limit: int = 50) -> List[RecipeSummaryResponse]:
        recipes = RecipeRepository(db).list_public(limit)
        urls = StorageService.get_urls(db, (r.image_storage_id for r in recipes))
        return [RecipeMapper.to_summary(r, image_url=urls.get(r.image_storage_id)) for r in recipes]

    @staticmethod
    def search(
        db: Session,
        user_id: Optional[str],
        query: Optional[str] = None,
        limit: int = 50,
    ) -> List[RecipeSummaryResponse]:
        """
        Search the caller's recipes plus other users' public recipes.

        Own recipes come first. Matching is a case-insensitive substring test
        on title, description and each cuisine tag.
        """
        if not user_id:
            return []

        repo = RecipeRepository(db)
        seen = {}
        for recipe in repo.list_by_user(user_id):
            seen[recipe.recipe_id] = recipe
        for recipe in repo.list_public(limit=None):
            seen.setdefault(recipe.recipe_id, recipe)
        results = list(seen.values())

        needle = (query or "").strip().lower()
        if needle:
            results = [
                r for r in results
                if needle in r.title.lower()
                or needle in (r.description or "").lower()
                or any(needle in c.lower() for c in r.cuisine or [])
            ]

        results = results[: limit or 50]
        urls = StorageService.get_urls(db, (r.image_storage_id for r in results))
        return [
            RecipeMapper.to_summary(
                r,
                image_url=urls.get(r.image_storage_id),
                is_own_recipe=r.user_id == user_id,
            )
            for r in results
        ]

    # ------------------ Slugs ------------------

    @staticmethod
    def check_slug_exists(
        db: Session, slug: str, exclude_recipe_id: Optional[UUID] = None
    ) -> bool:
        """True when another recipe already uses ``slug``"""
        existing = RecipeRepository(db).get_by_slug(slug)
        if existing is None:
            return False
        if exclude_recipe_id is not None and existing.recipe_id == exclude_recipe_id:
            return False
        return True

    @staticmethod
    def generate_unique_slug(db: Session, title: str) -> str:
        """slugify(title), then slug-1, slug-2, ... until unused"""
        base = slugify(title) or "recipe"
        slug = base
        counter = 1
        while RecipeService.check_slug_exists(db, slug):
            slug = f"{base}-{counter}"
            counter += 1
        return slug

    # ------------------ Mutations ------------------

    @staticmethod
    def create(db: Session, user_id: Optional[str], data: RecipeCreate) -> RecipeDetailResponse:
        user_id = _require(user_id)
        slug = slugify(data.slug) if data.slug else None
        if slug and RecipeService.check_slug_exists(db, slug):
            raise ConflictError(SLUG_TAKEN_MESSAGE)
        _check_image(db, user_id, data.image_storage_id)

        ingredients, steps = _build_children(data.ingredients, data.steps)
        recipe = Recipe(
            user_id=user_id,
            title=data.title,
            description=data.description,
            cuisine=data.cuisine,
            skill_level=data.skill_level,
            cook_time=data.cook_time,
            prep_time=data.prep_time,
            cost=data.cost,
            can_freeze=data.can_freeze,
            can_reheat=data.can_reheat,
            servings=data.servings,
            slug=slug,
            is_public=data.is_public or bool(slug),
            image_storage_id=data.image_storage_id,
            ingredients=ingredients,
            steps=steps,
        )
        RecipeService._commit_new(db, recipe)

        logger.info(f"Created recipe {recipe.recipe_id} for user {user_id}")
        return RecipeService.get_by_id(db, user_id, recipe.recipe_id)

    @staticmethod
    def update(
        db: Session, user_id: Optional[str], recipe_id: UUID, data: RecipeUpdate
    ) -> RecipeDetailResponse:
        """
        Owner-only edit. Ingredients and steps are replaced wholesale.

        The stored image is deleted when it is removed or replaced. Its bytes
        go after the commit; a failed blob delete is logged and does not fail
        the edit.
        """
        user_id = _require(user_id)
        repo = RecipeRepository(db)
        recipe = repo.get_with_children(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            raise NotFoundError("Recipe not found or you don't have permission to edit it")

        old_image = recipe.image_storage_id
        replaced = data.image_storage_id is not None and data.image_storage_id != old_image
        if replaced:
            _check_image(db, user_id, data.image_storage_id)
        discarded = None
        if old_image is not None and (data.remove_image or replaced):
            discarded = StorageService.discard(db, user_id, old_image)

        recipe.title = data.title
        recipe.description = data.description
        recipe.cuisine = data.cuisine
        recipe.skill_level = data.skill_level
        recipe.cook_time = data.cook_time
        recipe.prep_time = data.prep_time
        recipe.cost = data.cost
        recipe.can_freeze = data.can_freeze
        recipe.can_reheat = data.can_reheat
        recipe.servings = data.servings
        recipe.updated_at = utcnow()
        if data.remove_image:
            recipe.image_storage_id = None
        elif data.image_storage_id is not None:
            recipe.image_storage_id = data.image_storage_id

        ingredients, steps = _build_children(data.ingredients, data.steps)
        repo.replace_children(recipe, ingredients, steps)
        db.commit()
        StorageService.purge(discarded)

        logger.info(f"Updated recipe {recipe_id}")
        return RecipeService.get_by_id(db, user_id, recipe_id)

    @staticmethod
    def remove(db: Session, user_id: Optional[str], recipe_id: UUID) -> UUID:
        """Owner-only delete of a recipe with its ingredients, steps and image"""
        user_id = _require(user_id)
        repo = RecipeRepository(db)
        recipe = repo.get_by_id(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            raise NotFoundError("Recipe not found or you don't have permission to delete it")

        discarded = StorageService.discard(db, user_id, recipe.image_storage_id)
        repo.delete(recipe)
        db.commit()
        StorageService.purge(discarded)

        logger.info(f"Deleted recipe {recipe_id}")
        return recipe_id

    @staticmethod
    def share(
        db: Session, user_id: Optional[str], recipe_id: UUID, name: str
    ) -> RecipeDetailResponse:
        """Make a recipe public under the slugified ``name``.

        Raises:
            NotFoundError: missing recipe or not the owner
            ConflictError: slug used by another recipe
        """
        user_id = _require(user_id)
        recipe = RecipeRepository(db).get_by_id(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            raise NotFoundError("Recipe not found or you don't have permission to share it")

        slug = slugify(name)
        if not slug:
            raise ServiceValidationError("Please choose a name that contains letters or numbers.")
        if RecipeService.check_slug_exists(db, slug, exclude_recipe_id=recipe_id):
            raise ConflictError(SLUG_TAKEN_MESSAGE)

        recipe.slug = slug
        recipe.is_public = True
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError(SLUG_TAKEN_MESSAGE)

        logger.info(f"Shared recipe {recipe_id} as '{slug}'")
        return RecipeService.get_by_id(db, user_id, recipe_id)

    # ------------------ AI-assisted creation ------------------

    @staticmethod
    def persist_generated(
        db: Session,
        user_id: str,
        generated: GeneratedRecipe,
        is_public: bool = False,
        slug: Optional[str] = None,
    ) -> Recipe:
        """Stage a recipe built from AI output; the caller commits"""
        ingredients = [
            Ingredient(name=item.name, amount=item.amount, order=i)
            for i, item in enumerate(generated.ingredients)
        ]
        steps = [
            RecipeStep(type=StepType.COOKING, step_number=i + 1, instruction=text, order=i)
            for i, text in enumerate(generated.steps)
        ]
        recipe = Recipe(
            user_id=user_id,
            title=generated.title,
            description=generated.description,
            cuisine=generated.cuisine,
            skill_level=generated.skill_level.lower(),
            cook_time=generated.cook_time,
            prep_time=generated.prep_time,
            cost=generated.cost.lower(),
            can_freeze=generated.can_freeze,
            can_reheat=generated.can_reheat,
            servings=generated.servings,
            is_public=is_public,
            slug=slug,
            ingredients=ingredients,
            steps=steps,
        )
        db.add(recipe)
        db.flush()
        return recipe

    @staticmethod
    def generate_from_prompt(
        db: Session,
        user_id: Optional[str],
        prompt: str,
        preferences: Optional[RecipePreferences] = None,
    ) -> RecipeDetailResponse:
        user_id = _require(user_id)
        generated = ai_service.generate_recipe(prompt, preferences)
        recipe = RecipeService.persist_generated(db, user_id, generated)
        db.commit()
        logger.info(f"Generated recipe {recipe.recipe_id} from prompt for user {user_id}")
        return RecipeService.get_by_id(db, user_id, recipe.recipe_id)

    @staticmethod
    def import_from_url(db: Session, user_id: Optional[str], url: str) -> RecipeDetailResponse:
        user_id = _require(user_id)
        generated = ai_service.extract_recipe_from_url(url)
        recipe = RecipeService.persist_generated(db, user_id, generated)
        db.commit()
        logger.info(f"Imported recipe {recipe.recipe_id} from {url} for user {user_id}")
        return RecipeService.get_by_id(db, user_id, recipe.recipe_id)

    @staticmethod
    def _commit_new(db: Session, recipe: Recipe) -> None:
        """Insert a recipe; a slug taken by a concurrent writer surfaces as ConflictError"""
        try:
            RecipeRepository(db).add(recipe)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError(SLUG_TAKEN_MESSAGE)
