"""Pydantic schemas for AI generation inputs and parsed AI replies."""

import re
from typing import Any, List, Optional

from pydantic import AliasChoices, BaseModel, Field, field_validator


class RecipePreferences(BaseModel):
    """Optional structured hints passed along with a generation prompt."""

    cuisine: List[str] = Field(default_factory=list)
    dietary_restrictions: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices("dietary_restrictions", "dietaryRestrictions"),
    )
    skill_level: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("skill_level", "skillLevel")
    )
    max_cook_time: Optional[int] = Field(
        default=None, ge=1, validation_alias=AliasChoices("max_cook_time", "maxCookTime")
    )
    servings: Optional[int] = Field(default=None, ge=1)


def _leading_int(v: Any) -> Any:
    """'30 minutes' -> 30; numbers pass through."""
    if isinstance(v, float):
        return int(round(v))
    if isinstance(v, str):
        match = re.search(r"\d+", v)
        return int(match.group()) if match else 0
    if v is None:
        return 0
    return v


class GeneratedIngredient(BaseModel):
    name: str
    amount: str = ""

    @field_validator("amount", mode="before")
    @classmethod
    def amount_to_text(cls, v: Any) -> str:
        return "" if v is None else str(v).strip()


class GeneratedRecipe(BaseModel):
    """Recipe as returned by the AI provider (snake_case or camelCase keys)."""

    title: str
    description: Optional[str] = None
    cuisine: List[str] = Field(default_factory=list)
    skill_level: str = Field(
        default="beginner", validation_alias=AliasChoices("skill_level", "skillLevel")
    )
    cook_time: int = Field(default=0, validation_alias=AliasChoices("cook_time", "cookTime"))
    prep_time: int = Field(default=0, validation_alias=AliasChoices("prep_time", "prepTime"))
    cost: str = "medium"
    can_freeze: bool = Field(
        default=False, validation_alias=AliasChoices("can_freeze", "canFreeze")
    )
    can_reheat: bool = Field(
        default=False, validation_alias=AliasChoices("can_reheat", "canReheat")
    )
    servings: int = 1
    ingredients: List[GeneratedIngredient]
    steps: List[str]

    @field_validator("cook_time", "prep_time", "servings", mode="before")
    @classmethod
    def parse_numbers(cls, v: Any) -> Any:
        return _leading_int(v)

    @field_validator("servings")
    @classmethod
    def at_least_one_serving(cls, v: int) -> int:
        return max(v, 1)

    @field_validator("cuisine", mode="before")
    @classmethod
    def cuisine_list(cls, v: Any) -> Any:
        if isinstance(v, str):
            return [v]
        return v or []

    @field_validator("ingredients", mode="before")
    @classmethod
    def ingredient_objects(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v

    @field_validator("steps", mode="before")
    @classmethod
    def step_strings(cls, v: Any) -> Any:
        if isinstance(v, list):
            out = []
            for item in v:
                if isinstance(item, dict):
                    item = item.get("instruction") or item.get("text") or ""
                out.append(str(item))
            return out
        return v


class GeneratedPlanDay(BaseModel):
    day_of_week: int = Field(
        ..., ge=0, le=6, validation_alias=AliasChoices("day_of_week", "dayOfWeek")
    )
    recipe: GeneratedRecipe


class GeneratedWeeklyPlan(BaseModel):
    recipes: List[GeneratedPlanDay]
