"""AI recipe and weekly-plan generation on top of the chat-completion client."""

import json
import logging
import re
from typing import Any, Dict, Optional

from pydantic import ValidationError

from adapters.openai_adapter import ChatCompletionClient, get_chat_client
from adapters import webpage_adapter
from app.exceptions import AIResponseError
from domain import prompts
from domain.enums import DAYS_IN_WEEK
from domain.schemas.ai_schemas import (
    GeneratedRecipe,
    GeneratedWeeklyPlan,
    RecipePreferences,
)

logger = logging.getLogger("lechef.ai")

_FENCED_JSON = re.compile(r"```(?:json)?\s*(\{[\s\S]*\})\s*```")


def parse_ai_response(content: str) -> Dict[str, Any]:
    """Parse a JSON object out of a reply, unwrapping a ```json fence if present."""
    match = _FENCED_JSON.search(content)
    raw = match.group(1) if match else content.strip()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise AIResponseError(f"Failed to parse AI response as JSON: {e}")
    if not isinstance(data, dict):
        raise AIResponseError("Failed to parse AI response as JSON: expected an object")
    return data


def _has_required_fields(data: Any) -> bool:
    return (
        isinstance(data, dict)
        and bool(data.get("title"))
        and data.get("ingredients") is not None
        and data.get("steps") is not None
    )


def _to_recipe(data: Dict[str, Any], error_message: str) -> GeneratedRecipe:
    if not _has_required_fields(data):
        raise AIResponseError(error_message)
    try:
        return GeneratedRecipe.model_validate(data)
    except ValidationError as e:
        raise AIResponseError(error_message, details={"errors": [err["msg"] for err in e.errors()]})


def generate_recipe(
    prompt: str,
    preferences: Optional[RecipePreferences] = None,
    client: Optional[ChatCompletionClient] = None,
) -> GeneratedRecipe:
    """Generate a single recipe from a free-text prompt."""
    client = client or get_chat_client()
    logger.info("Generating recipe for prompt: %.80s", prompt)

    content = client.complete(
        prompts.GENERATE_RECIPE_PROMPT,
        prompts.recipe_request(prompt, preferences),
    )
    return _to_recipe(parse_ai_response(content), "AI response missing required fields")


def extract_recipe_from_url(
    url: str,
    client: Optional[ChatCompletionClient] = None,
) -> GeneratedRecipe:
    """Fetch a recipe page and have the model pull a structured recipe out of it."""
    page_text = webpage_adapter.fetch_page_text(url)
    logger.info("Extracting recipe from %s (%d chars of text)", url, len(page_text))

    client = client or get_chat_client()
    content = client.complete(
        prompts.EXTRACT_RECIPE_PROMPT,
        prompts.extract_request(page_text, url),
    )
    return _to_recipe(
        parse_ai_response(content), "Failed to extract complete recipe from webpage"
    )


def generate_weekly_plan(
    prompt: str,
    client: Optional[ChatCompletionClient] = None,
) -> GeneratedWeeklyPlan:
    """Generate seven recipes, one per day Monday..Sunday.

    Raises:
        AIResponseError: not exactly seven recipes, or a day is out of range or incomplete
    """
    client = client or get_chat_client()
    logger.info("Generating weekly plan for prompt: %.80s", prompt)

    content = client.complete(prompts.WEEKLY_PLAN_PROMPT, prompts.weekly_plan_request(prompt))
    data = parse_ai_response(content)

    recipes = data.get("recipes")
    if not isinstance(recipes, list) or len(recipes) != DAYS_IN_WEEK:
        raise AIResponseError("Weekly plan must contain exactly 7 recipes")

    for entry in recipes:
        if not isinstance(entry, dict):
            raise AIResponseError("Invalid recipe data in weekly plan")
        day = entry.get("day_of_week", entry.get("dayOfWeek"))
        if not isinstance(day, int) or not 0 <= day < DAYS_IN_WEEK:
            raise AIResponseError("Invalid recipe data in weekly plan")
        if not _has_required_fields(entry.get("recipe")):
            raise AIResponseError("Invalid recipe data in weekly plan")

    try:
        return GeneratedWeeklyPlan.model_validate(data)
    except ValidationError as e:
        raise AIResponseError(
            "Invalid recipe data in weekly plan", details={"errors": [err["msg"] for err in e.errors()]}
        )
