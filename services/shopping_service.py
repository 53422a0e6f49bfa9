"""Shopping list service"""

import logging
from typing import Dict, Iterable, List, NamedTuple, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from domain.models import Recipe
from domain.schemas.shopping_schemas import ShoppingListItemResponse, ShoppingListResponse
from repositories import WeeklyPlanRepository

logger = logging.getLogger("lechef.shopping")


class IngredientLine(NamedTuple):
    recipe_id: UUID
    recipe_title: str
    name: str
    amount: str


def _capitalize(name: str) -> str:
    return name[:1].upper() + name[1:]


def aggregate_ingredients(lines: Iterable[IngredientLine]) -> List[ShoppingListItemResponse]:
    """
    Merge ingredient lines into shopping list items.

    Names are compared lower-cased and trimmed. Non-empty amounts of merged
    lines are joined with " + "; each item lists the distinct recipes that
    need it. Items are sorted by name.
    """
    merged: Dict[str, Dict[str, list]] = {}
    for line in lines:
        key = line.name.strip().lower()
        if not key:
            continue
        entry = merged.setdefault(key, {"amounts": [], "recipe_ids": [], "titles": []})
        amount = (line.amount or "").strip()
        if amount:
            entry["amounts"].append(amount)
        if line.recipe_id not in entry["recipe_ids"]:
            entry["recipe_ids"].append(line.recipe_id)
            entry["titles"].append(line.recipe_title)

    items = [
        ShoppingListItemResponse(
            name=_capitalize(key),
            amount=" + ".join(entry["amounts"]),
            recipes=entry["titles"],
            recipe_count=len(entry["recipe_ids"]),
        )
        for key, entry in merged.items()
    ]
    items.sort(key=lambda item: item.name.lower())
    return items


class ShoppingService:
    """Business logic for shopping list generation."""

    @staticmethod
    def generate_shopping_list(
        db: Session, user_id: Optional[str], plan_id: UUID
    ) -> Optional[ShoppingListResponse]:
        """
        Build the shopping list for one of the caller's weekly plans.

        Recipes referenced by the plan that no longer exist are skipped.

        Returns:
            The list, or None when the plan is missing or belongs to someone else
        """
        if not user_id:
            return None
        plan = WeeklyPlanRepository(db).get_by_id_and_user(plan_id, user_id)
        if plan is None:
            return None

        recipe_ids = [UUID(str(slot["recipe_id"])) for slot in plan.days or [] if slot.get("recipe_id")]
        if not recipe_ids:
            logger.info(f"Plan {plan_id} has no recipes, returning empty shopping list")
            return ShoppingListResponse(items=[], total_items=0)

        recipes = {
            r.recipe_id: r
            for r in db.query(Recipe)
            .options(selectinload(Recipe.ingredients))
            .filter(Recipe.recipe_id.in_(set(recipe_ids)))
            .all()
        }

        lines = []
        for recipe_id in recipe_ids:
            recipe = recipes.get(recipe_id)
            if recipe is None:
                logger.warning(f"Recipe {recipe_id} in plan {plan_id} no longer exists, skipping")
                continue
            for ingredient in recipe.ingredients:
                lines.append(
                    IngredientLine(recipe.recipe_id, recipe.title, ingredient.name, ingredient.amount)
                )

        items = aggregate_ingredients(lines)
        logger.info(f"Shopping list for plan {plan_id}: {len(items)} items")
        return ShoppingListResponse(items=items, total_items=len(items), plan_id=plan_id)
