"""Weekly plan and shopping list routes"""

import logging
from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_identity, require_identity
from api.responses import DeletedResponse, ERROR_RESPONSES
from app.exceptions import NotFoundError
from domain.schemas import (
    GeneratePlanRequest,
    ShoppingListResponse,
    UpdateWeekRequest,
    WeeklyPlanResponse,
    WeeklyPlanSummaryResponse,
)
from services.shopping_service import ShoppingService
from services.weekly_plan_service import WeeklyPlanService

router = APIRouter(prefix="/weekly-plans", tags=["Weekly Plans"], responses=ERROR_RESPONSES)
logger = logging.getLogger("lechef.api.weekly_plans")


@router.get("", response_model=List[WeeklyPlanSummaryResponse])
def list_plans(
    identity: Optional[str] = Depends(get_identity), db: Session = Depends(get_db)
):
    """The caller's plans, most recent week first, with assigned recipe counts"""
    return WeeklyPlanService.list_plans(db, identity)


@router.get("/current", response_model=Optional[WeeklyPlanResponse])
def get_current_week(
    identity: Optional[str] = Depends(get_identity), db: Session = Depends(get_db)
):
    """This week's plan; an unsaved empty plan when none exists, null when not signed in"""
    return WeeklyPlanService.get_current_week(db, identity)


@router.get("/week", response_model=Optional[WeeklyPlanResponse])
def get_week(
    week_start_date: date = Query(..., description="Any date in the week; normalized to Monday"),
    identity: Optional[str] = Depends(get_identity),
    db: Session = Depends(get_db),
):
    return WeeklyPlanService.get_week(db, identity, week_start_date)


@router.put("/week", response_model=WeeklyPlanResponse)
def update_week(
    payload: UpdateWeekRequest,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Create or replace the plan for a week; omitted days are left empty"""
    return WeeklyPlanService.update_week(db, identity, payload.week_start_date, payload.days)


@router.delete("/week/{week_start_date}/days/{day_of_week}", response_model=WeeklyPlanResponse)
def remove_recipe_from_day(
    week_start_date: date,
    day_of_week: int,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    return WeeklyPlanService.remove_recipe_from_day(db, identity, week_start_date, day_of_week)


@router.post("/generate", response_model=WeeklyPlanResponse, status_code=status.HTTP_201_CREATED)
def generate_plan(
    payload: GeneratePlanRequest,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Generate seven recipes with AI and assign them to the week"""
    return WeeklyPlanService.generate_plan(db, identity, payload.week_start_date, payload.prompt)


@router.get("/{plan_id}", response_model=WeeklyPlanResponse)
def get_plan(
    plan_id: UUID,
    identity: Optional[str] = Depends(get_identity),
    db: Session = Depends(get_db),
):
    plan = WeeklyPlanService.get_by_id(db, identity, plan_id)
    if plan is None:
        raise NotFoundError("Weekly plan not found")
    return plan


@router.delete("/{plan_id}", response_model=DeletedResponse)
def delete_plan(
    plan_id: UUID,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    removed = WeeklyPlanService.remove(db, identity, plan_id)
    return DeletedResponse(removed=str(removed))


@router.get("/{plan_id}/shopping-list", response_model=ShoppingListResponse)
def get_shopping_list(
    plan_id: UUID,
    identity: Optional[str] = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Merged ingredients of every recipe in the plan, sorted by name"""
    shopping_list = ShoppingService.generate_shopping_list(db, identity, plan_id)
    if shopping_list is None:
        raise NotFoundError("Weekly plan not found")
    return shopping_list
