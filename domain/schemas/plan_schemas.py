from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.schemas.recipe_schemas import RecipeSummaryResponse


class PlanDayInput(BaseModel):
    day_of_week: int = Field(..., ge=0, le=6, description="0 = Monday, 6 = Sunday")
    recipe_id: Optional[UUID] = None


class UpdateWeekRequest(BaseModel):
    week_start_date: date
    days: List[PlanDayInput] = Field(default_factory=list, max_length=7)


class GeneratePlanRequest(BaseModel):
    week_start_date: date
    prompt: str = Field(..., min_length=1, description="Free-text preferences for the week")


class WeekRange(BaseModel):
    start: str
    end: str
    full: str


class PlanDayResponse(BaseModel):
    day_of_week: int
    day_name: str
    date_label: str
    recipe_id: Optional[UUID] = None
    recipe: Optional[RecipeSummaryResponse] = None


class WeeklyPlanResponse(BaseModel):
    """A stored plan, or an unsaved default (plan_id is null) with seven empty days."""

    plan_id: Optional[UUID] = None
    user_id: str
    week_start_date: date
    week_range: WeekRange
    days: List[PlanDayResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class WeeklyPlanSummaryResponse(BaseModel):
    plan_id: UUID
    week_start_date: date
    week_range: WeekRange
    recipe_count: int
    created_at: datetime
    updated_at: datetime
