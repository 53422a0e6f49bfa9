"""Pydantic schemas for recipe requests and responses."""

from datetime import datetime
from typing import Any, List, Optional
from urllib.parse import urlparse
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from domain.enums import CostLevel, SkillLevel, StepType
from domain.schemas.ai_schemas import RecipePreferences


class IngredientInput(BaseModel):
    """Ingredient line; plain strings are accepted as a name without amount."""

    name: str = Field(..., min_length=1)
    amount: str = ""

    @field_validator("name", "amount", mode="before")
    @classmethod
    def strip_text(cls, v: Any) -> Any:
        if v is None:
            return ""
        return str(v).strip()


class StepInput(BaseModel):
    """Recipe step; plain strings are accepted as cooking steps."""

    instruction: str = Field(..., min_length=1)
    type: StepType = StepType.COOKING

    @field_validator("instruction", mode="before")
    @classmethod
    def strip_instruction(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v


class RecipeBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=300)
    description: Optional[str] = None
    cuisine: List[str] = Field(default_factory=list)
    skill_level: str = SkillLevel.BEGINNER.value
    cook_time: int = Field(default=0, ge=0, description="Minutes")
    prep_time: int = Field(default=0, ge=0, description="Minutes")
    cost: str = CostLevel.MEDIUM.value
    can_freeze: bool = False
    can_reheat: bool = False
    servings: int = Field(default=1, ge=1)
    ingredients: List[IngredientInput] = Field(default_factory=list)
    steps: List[StepInput] = Field(default_factory=list)
    image_storage_id: Optional[UUID] = None

    @field_validator("title", mode="before")
    @classmethod
    def strip_title(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("skill_level", "cost", mode="before")
    @classmethod
    def normalize_level(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("cuisine", mode="before")
    @classmethod
    def clean_cuisine(cls, v: Any) -> Any:
        if isinstance(v, str):
            v = [v]
        if isinstance(v, list):
            return [str(c).strip() for c in v if str(c).strip()]
        return v

    @field_validator("ingredients", mode="before")
    @classmethod
    def coerce_ingredients(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [{"name": item} if isinstance(item, str) else item for item in v]
        return v

    @field_validator("steps", mode="before")
    @classmethod
    def coerce_steps(cls, v: Any) -> Any:
        if isinstance(v, list):
            return [{"instruction": item} if isinstance(item, str) else item for item in v]
        return v


class RecipeCreate(RecipeBase):
    """Payload for creating a recipe."""

    is_public: bool = False
    slug: Optional[str] = None


class RecipeUpdate(RecipeBase):
    """
    Payload for editing a recipe. Ingredients and steps replace the stored ones.

    Image handling: ``remove_image`` clears the image, a new ``image_storage_id``
    replaces it, and leaving both unset keeps the current image.
    """

    remove_image: bool = False


class IngredientResponse(BaseModel):
    ingredient_id: UUID
    name: str
    amount: str
    order: int

    model_config = {"from_attributes": True}


class RecipeStepResponse(BaseModel):
    step_id: UUID
    type: StepType
    step_number: int
    instruction: str
    order: int

    model_config = {"from_attributes": True}


class RecipeSummaryResponse(BaseModel):
    """Recipe without children, as returned by list and search endpoints."""

    recipe_id: UUID
    user_id: str
    title: str
    description: Optional[str] = None
    cuisine: List[str] = []
    skill_level: str
    cook_time: int
    prep_time: int
    cost: str
    can_freeze: bool
    can_reheat: bool
    servings: int
    slug: Optional[str] = None
    is_public: bool = False
    image_storage_id: Optional[UUID] = None
    image_url: Optional[str] = None
    is_own_recipe: Optional[bool] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class RecipeDetailResponse(RecipeSummaryResponse):
    """Recipe with ordered ingredients and steps."""

    ingredients: List[IngredientResponse] = []
    steps: List[RecipeStepResponse] = []


class SlugCheckResponse(BaseModel):
    slug: str
    exists: bool


class ShareRecipeRequest(BaseModel):
    """Share name chosen by the user; it is slugified server-side."""

    slug: str = Field(..., min_length=1, max_length=200)


class GenerateRecipeRequest(BaseModel):
    prompt: str = Field(..., description="What to cook, e.g. 'spicy vegan ramen'")
    preferences: Optional[RecipePreferences] = None

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        v = v.strip()
        if len(v) < 3:
            raise ValueError("Please enter a recipe description (at least 3 characters)")
        return v


class ImportRecipeRequest(BaseModel):
    url: str = Field(..., description="Page that contains the recipe")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        v = v.strip()
        parsed = urlparse(v)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("Please enter a valid http(s) URL")
        return v
