"""
Weekly plan mappers.
Builds plan responses with each day slot resolved to its recipe.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional
from uuid import UUID

from core.utils.helpers import format_day_date, format_week_date_range
from domain.enums import DAY_NAMES
from domain.mappers.recipe_mapper import RecipeMapper
from domain.models import Recipe, WeeklyPlan
from domain.schemas.plan_schemas import (
    PlanDayResponse,
    WeekRange,
    WeeklyPlanResponse,
    WeeklyPlanSummaryResponse,
)


def _slot_recipe_id(slot: Dict[str, Any]) -> Optional[UUID]:
    value = slot.get("recipe_id")
    return UUID(str(value)) if value else None


class PlanMapper:
    """Mapper for weekly plan transformations."""

    @staticmethod
    def to_response(
        user_id: str,
        week_start_date: date,
        days: List[Dict[str, Any]],
        recipes: Dict[UUID, Recipe],
        image_urls: Dict[UUID, str],
        plan: Optional[WeeklyPlan] = None,
    ) -> WeeklyPlanResponse:
        """
        Convert a plan (or an unsaved default plan when ``plan`` is None) to its response.

        Args:
            days: the seven normalized day slots
            recipes: recipes referenced by the slots, keyed by id; ids missing
                from this mapping resolve to ``recipe: null``
            image_urls: image URL per image storage id
        """
        out_days = []
        for slot in days:
            index = slot["day_of_week"]
            recipe_id = _slot_recipe_id(slot)
            recipe = recipes.get(recipe_id) if recipe_id else None
            summary = None
            if recipe is not None:
                summary = RecipeMapper.to_summary(
                    recipe,
                    image_url=image_urls.get(recipe.image_storage_id),
                    is_own_recipe=recipe.user_id == user_id,
                )
            out_days.append(
                PlanDayResponse(
                    day_of_week=index,
                    day_name=DAY_NAMES[index],
                    date_label=format_day_date(week_start_date, index),
                    recipe_id=recipe_id,
                    recipe=summary,
                )
            )

        created_at: Optional[datetime] = plan.created_at if plan is not None else None
        updated_at: Optional[datetime] = plan.updated_at if plan is not None else None
        return WeeklyPlanResponse(
            plan_id=plan.plan_id if plan is not None else None,
            user_id=user_id,
            week_start_date=week_start_date,
            week_range=WeekRange(**format_week_date_range(week_start_date)),
            days=out_days,
            created_at=created_at,
            updated_at=updated_at,
        )

    @staticmethod
    def to_summary(plan: WeeklyPlan) -> WeeklyPlanSummaryResponse:
        recipe_count = sum(1 for slot in plan.days or [] if slot.get("recipe_id"))
        return WeeklyPlanSummaryResponse(
            plan_id=plan.plan_id,
            week_start_date=plan.week_start_date,
            week_range=WeekRange(**format_week_date_range(plan.week_start_date)),
            recipe_count=recipe_count,
            created_at=plan.created_at,
            updated_at=plan.updated_at,
        )
