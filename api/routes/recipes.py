"""Recipe routes: CRUD, sharing, search and AI-assisted creation"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import get_db, get_identity, require_identity
from api.responses import DeletedResponse, ERROR_RESPONSES
from app.exceptions import NotFoundError
from domain.schemas import (
    GenerateRecipeRequest,
    ImportRecipeRequest,
    RecipeCreate,
    RecipeDetailResponse,
    RecipeSummaryResponse,
    RecipeUpdate,
    ShareRecipeRequest,
    SlugCheckResponse,
)
from services.recipe_service import RecipeService

router = APIRouter(prefix="/recipes", tags=["Recipes"], responses=ERROR_RESPONSES)
logger = logging.getLogger("lechef.api.recipes")


@router.get("", response_model=List[RecipeSummaryResponse])
def list_recipes(
    identity: Optional[str] = Depends(get_identity), db: Session = Depends(get_db)
):
    """The caller's recipes, newest first (empty when not signed in)"""
    return RecipeService.list_recipes(db, identity)


@router.post("", response_model=RecipeDetailResponse, status_code=status.HTTP_201_CREATED)
def create_recipe(
    payload: RecipeCreate,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    return RecipeService.create(db, identity, payload)


@router.get("/search", response_model=List[RecipeSummaryResponse])
def search_recipes(
    q: Optional[str] = Query(None, description="Matches title, description or cuisine"),
    limit: int = Query(50, ge=1, le=500),
    identity: Optional[str] = Depends(get_identity),
    db: Session = Depends(get_db),
):
    """Search own recipes and other users' public recipes"""
    return RecipeService.search(db, identity, q, limit)


@router.get("/public", response_model=List[RecipeSummaryResponse])
def list_public_recipes(
    limit: int = Query(50, ge=1, le=500), db: Session = Depends(get_db)
):
    return RecipeService.list_public(db, limit)


@router.get("/slug-exists", response_model=SlugCheckResponse)
def check_slug_exists(
    slug: str = Query(..., min_length=1),
    exclude_recipe_id: Optional[UUID] = Query(None),
    db: Session = Depends(get_db),
):
    exists = RecipeService.check_slug_exists(db, slug, exclude_recipe_id)
    return SlugCheckResponse(slug=slug, exists=exists)


@router.get("/by-slug/{slug}", response_model=RecipeDetailResponse)
def get_recipe_by_slug(slug: str, db: Session = Depends(get_db)):
    """Public recipe page; private recipes are reported as not found"""
    recipe = RecipeService.get_by_slug(db, slug)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe


@router.post(
    "/generate", response_model=RecipeDetailResponse, status_code=status.HTTP_201_CREATED
)
def generate_recipe(
    payload: GenerateRecipeRequest,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Generate a recipe with AI from a description and save it"""
    return RecipeService.generate_from_prompt(db, identity, payload.prompt, payload.preferences)


@router.post(
    "/import", response_model=RecipeDetailResponse, status_code=status.HTTP_201_CREATED
)
def import_recipe(
    payload: ImportRecipeRequest,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Extract a recipe from a web page and save it"""
    return RecipeService.import_from_url(db, identity, payload.url)


@router.get("/{recipe_id}", response_model=RecipeDetailResponse)
def get_recipe(
    recipe_id: UUID,
    identity: Optional[str] = Depends(get_identity),
    db: Session = Depends(get_db),
):
    recipe = RecipeService.get_by_id(db, identity, recipe_id)
    if recipe is None:
        raise NotFoundError("Recipe not found")
    return recipe


@router.put("/{recipe_id}", response_model=RecipeDetailResponse)
def update_recipe(
    recipe_id: UUID,
    payload: RecipeUpdate,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    return RecipeService.update(db, identity, recipe_id, payload)


@router.delete("/{recipe_id}", response_model=DeletedResponse)
def delete_recipe(
    recipe_id: UUID,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    removed = RecipeService.remove(db, identity, recipe_id)
    return DeletedResponse(removed=str(removed))


@router.post("/{recipe_id}/share", response_model=RecipeDetailResponse)
def share_recipe(
    recipe_id: UUID,
    payload: ShareRecipeRequest,
    identity: str = Depends(require_identity),
    db: Session = Depends(get_db),
):
    """Make a recipe public under a unique slug derived from the given name"""
    return RecipeService.share(db, identity, recipe_id, payload.slug)
