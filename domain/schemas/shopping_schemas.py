"""Pydantic schemas for shopping list output."""

from pydantic import BaseModel
from typing import List, Optional
from uuid import UUID


class ShoppingListItemResponse(BaseModel):
    """One merged ingredient of a weekly plan."""
    name: str
    amount: str
    recipes: List[str] = []
    recipe_count: int


class ShoppingListResponse(BaseModel):
    """All ingredients needed for a weekly plan, sorted by name."""
    items: List[ShoppingListItemResponse] = []
    total_items: int
    plan_id: Optional[UUID] = None
