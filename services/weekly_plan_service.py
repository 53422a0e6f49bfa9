"""Weekly plan service"""

import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.exceptions import (
    AIServiceError,
    ConflictError,
    LeChefError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from core.utils.helpers import week_start_for
from domain.enums import DAYS_IN_WEEK
from domain.mappers import PlanMapper
from domain.models import WeeklyPlan, utcnow
from domain.schemas.plan_schemas import (
    PlanDayInput,
    WeeklyPlanResponse,
    WeeklyPlanSummaryResponse,
)
from repositories import RecipeRepository, WeeklyPlanRepository
from services import ai_service
from services.recipe_service import RecipeService
from services.storage_service import StorageService

logger = logging.getLogger("lechef.plans")


def empty_days() -> List[Dict[str, Any]]:
    return [{"day_of_week": i, "recipe_id": None} for i in range(DAYS_IN_WEEK)]


def normalize_days(days: Iterable[PlanDayInput]) -> List[Dict[str, Any]]:
    """Expand any subset of day assignments to the full seven slots.

    Days not mentioned are empty; a repeated day keeps its last assignment.
    """
    slots = empty_days()
    for day in days:
        slots[day.day_of_week]["recipe_id"] = str(day.recipe_id) if day.recipe_id else None
    return slots


def _stored_days(plan: WeeklyPlan) -> List[Dict[str, Any]]:
    """Seven slots from a stored plan, tolerating rows written with fewer entries"""
    slots = empty_days()
    for slot in plan.days or []:
        index = slot.get("day_of_week")
        if isinstance(index, int) and 0 <= index < DAYS_IN_WEEK:
            slots[index]["recipe_id"] = slot.get("recipe_id")
    return slots


class WeeklyPlanService:
    """Business logic for weekly meal plans."""

    @staticmethod
    def _resolve(
        db: Session,
        user_id: str,
        week_start_date: date,
        plan: Optional[WeeklyPlan],
    ) -> WeeklyPlanResponse:
        days = _stored_days(plan) if plan is not None else empty_days()
        recipe_ids = [UUID(slot["recipe_id"]) for slot in days if slot["recipe_id"]]
        recipes = {r.recipe_id: r for r in RecipeRepository(db).get_many(recipe_ids)}
        image_urls = StorageService.get_urls(db, (r.image_storage_id for r in recipes.values()))
        return PlanMapper.to_response(
            user_id, week_start_date, days, recipes, image_urls, plan=plan
        )

    @staticmethod
    def get_week(
        db: Session, user_id: Optional[str], week_start_date: date
    ) -> Optional[WeeklyPlanResponse]:
        """
        Plan for the week containing ``week_start_date``.

        Returns the stored plan with each day resolved to its recipe, an
        unsaved plan with seven empty days when nothing is stored yet, or
        None for anonymous callers.
        """
        if not user_id:
            return None
        week_start = week_start_for(week_start_date)
        plan = WeeklyPlanRepository(db).get_by_user_and_week(user_id, week_start)
        return WeeklyPlanService._resolve(db, user_id, week_start, plan)

    @staticmethod
    def get_current_week(db: Session, user_id: Optional[str]) -> Optional[WeeklyPlanResponse]:
        return WeeklyPlanService.get_week(db, user_id, week_start_for())

    @staticmethod
    def get_by_id(
        db: Session, user_id: Optional[str], plan_id: UUID
    ) -> Optional[WeeklyPlanResponse]:
        if not user_id:
            return None
        plan = WeeklyPlanRepository(db).get_by_id_and_user(plan_id, user_id)
        if plan is None:
            return None
        return WeeklyPlanService._resolve(db, user_id, plan.week_start_date, plan)

    @staticmethod
    def list_plans(db: Session, user_id: Optional[str]) -> List[WeeklyPlanSummaryResponse]:
        if not user_id:
            return []
        plans = WeeklyPlanRepository(db).list_by_user(user_id)
        return [PlanMapper.to_summary(p) for p in plans]

    # ------------------ Mutations ------------------

    @staticmethod
    def _upsert(
        db: Session, user_id: str, week_start: date, days: List[Dict[str, Any]]
    ) -> WeeklyPlan:
        repo = WeeklyPlanRepository(db)
        plan = repo.get_by_user_and_week(user_id, week_start)
        if plan is None:
            plan = repo.add(WeeklyPlan(user_id=user_id, week_start_date=week_start, days=days))
        else:
            plan.days = days
            plan.updated_at = utcnow()
            db.flush()
        return plan

    @staticmethod
    def _check_access(db: Session, user_id: str, days: List[Dict[str, Any]]) -> None:
        repo = RecipeRepository(db)
        for slot in days:
            if not slot["recipe_id"]:
                continue
            recipe = repo.get_by_id(UUID(slot["recipe_id"]))
            if recipe is None:
                raise ServiceValidationError(f"Recipe not found for day {slot['day_of_week']}")
            if recipe.user_id != user_id and not recipe.is_public:
                raise ServiceValidationError(
                    f"You don't have access to recipe for day {slot['day_of_week']}"
                )

    @staticmethod
    def update_week(
        db: Session,
        user_id: Optional[str],
        week_start_date: date,
        days: Iterable[PlanDayInput],
    ) -> WeeklyPlanResponse:
        """
        Create or replace the caller's plan for a week.

        Every referenced recipe must exist and be owned by the caller or public.

        Raises:
            UnauthorizedError: anonymous caller
            ServiceValidationError: unknown or inaccessible recipe
            ConflictError: a concurrent request created the same week first
        """
        if not user_id:
            raise UnauthorizedError()
        week_start = week_start_for(week_start_date)
        slots = normalize_days(days)
        WeeklyPlanService._check_access(db, user_id, slots)

        try:
            plan = WeeklyPlanService._upsert(db, user_id, week_start, slots)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("A plan for this week was created concurrently, please retry")

        logger.info(f"Saved weekly plan {plan.plan_id} for user {user_id}, week {week_start}")
        return WeeklyPlanService._resolve(db, user_id, week_start, plan)

    @staticmethod
    def remove_recipe_from_day(
        db: Session, user_id: Optional[str], week_start_date: date, day_of_week: int
    ) -> WeeklyPlanResponse:
        if not user_id:
            raise UnauthorizedError()
        if not 0 <= day_of_week < DAYS_IN_WEEK:
            raise ServiceValidationError("day_of_week must be between 0 and 6")

        week_start = week_start_for(week_start_date)
        plan = WeeklyPlanRepository(db).get_by_user_and_week(user_id, week_start)
        if plan is None:
            raise NotFoundError("Weekly plan not found")

        days = _stored_days(plan)
        days[day_of_week]["recipe_id"] = None
        plan.days = days
        plan.updated_at = utcnow()
        db.commit()

        logger.info(f"Cleared day {day_of_week} of plan {plan.plan_id}")
        return WeeklyPlanService._resolve(db, user_id, week_start, plan)

    @staticmethod
    def remove(db: Session, user_id: Optional[str], plan_id: UUID) -> UUID:
        if not user_id:
            raise UnauthorizedError()
        repo = WeeklyPlanRepository(db)
        plan = repo.get_by_id_and_user(plan_id, user_id)
        if plan is None:
            raise NotFoundError("Weekly plan not found")
        repo.delete(plan)
        db.commit()
        logger.info(f"Deleted weekly plan {plan_id}")
        return plan_id

    @staticmethod
    def generate_plan(
        db: Session, user_id: Optional[str], week_start_date: date, prompt: str
    ) -> WeeklyPlanResponse:
        """
        Have the AI propose seven recipes and make them the plan for the week.

        Generated recipes are saved as public recipes with unique slugs. The
        recipes and the plan are written in one transaction.
        """
        if not user_id:
            raise UnauthorizedError()
        week_start = week_start_for(week_start_date)

        try:
            generated = ai_service.generate_weekly_plan(prompt)

            slots = empty_days()
            for day in generated.recipes:
                slug = RecipeService.generate_unique_slug(db, day.recipe.title)
                recipe = RecipeService.persist_generated(
                    db, user_id, day.recipe, is_public=True, slug=slug
                )
                slots[day.day_of_week]["recipe_id"] = str(recipe.recipe_id)

            plan = WeeklyPlanService._upsert(db, user_id, week_start, slots)
            db.commit()
        except IntegrityError:
            db.rollback()
            raise ConflictError("Failed to generate weekly plan: conflicting concurrent write")
        except LeChefError as e:
            db.rollback()
            error_cls = type(e) if isinstance(e, AIServiceError) else AIServiceError
            raise error_cls(f"Failed to generate weekly plan: {e.message}", details=e.details)

        logger.info(f"Generated weekly plan {plan.plan_id} for user {user_id}, week {week_start}")
        return WeeklyPlanService._resolve(db, user_id, week_start, plan)
