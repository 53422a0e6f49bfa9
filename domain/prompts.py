"""System and user prompts for the chat-completion calls.
"""

from typing import Optional

from domain.schemas.ai_schemas import RecipePreferences


RECIPE_JSON_SHAPE = """
{
  "title": "Recipe title",
  "description": "Brief description of the recipe",
  "cuisine": ["cuisine1", "cuisine2"],
  "skill_level": "beginner" | "intermediate" | "advanced",
  "cook_time": number (minutes),
  "prep_time": number (minutes),
  "cost": "low" | "medium" | "high",
  "can_freeze": boolean,
  "can_reheat": boolean,
  "servings": number,
  "ingredients": [
    {"name": "ingredient name", "amount": "2 cups"}
  ],
  "steps": ["step 1", "step 2", ...]
}
""".strip()


GENERATE_RECIPE_PROMPT = f"""
You are a professional chef and recipe creator. Generate a complete recipe based on the user's request.

Return a JSON object with this exact structure:
{RECIPE_JSON_SHAPE}

Make sure all fields are properly filled. Ingredients should have both name and amount.
Steps should be clear and sequential.
""".strip()


EXTRACT_RECIPE_PROMPT = f"""
You are a recipe extraction expert. Extract recipe information from webpage content
and return it in a structured JSON format.

Return a JSON object with this exact structure:
{RECIPE_JSON_SHAPE}

If information is missing, make reasonable estimates. Extract ingredients with amounts if available.
""".strip()


WEEKLY_PLAN_PROMPT = f"""
You are a meal planning expert. Generate a weekly meal plan (Monday through Sunday) with 7 different recipes.

Return a JSON object with this exact structure:
{{
  "recipes": [
    {{
      "day_of_week": 0,
      "recipe": {RECIPE_JSON_SHAPE}
    }}
  ]
}}

day_of_week is 0 for Monday through 6 for Sunday.
Create 7 different recipes, one for each day of the week. Vary the cuisines and types of meals.
""".strip()


def recipe_request(prompt: str, preferences: Optional[RecipePreferences] = None) -> str:
    """User message for recipe generation, with a preferences block when any are set"""
    text = f"Create a recipe for: {prompt}"
    if preferences is None:
        return text

    lines = []
    if preferences.cuisine:
        lines.append(f"- Cuisine: {', '.join(preferences.cuisine)}")
    if preferences.dietary_restrictions:
        lines.append(f"- Dietary restrictions: {', '.join(preferences.dietary_restrictions)}")
    if preferences.skill_level:
        lines.append(f"- Skill level: {preferences.skill_level}")
    if preferences.max_cook_time:
        lines.append(f"- Maximum cook time: {preferences.max_cook_time} minutes")
    if preferences.servings:
        lines.append(f"- Servings: {preferences.servings}")

    if not lines:
        return text
    return text + "\n\nPreferences:\n" + "\n".join(lines)


def extract_request(page_text: str, url: str) -> str:
    return f"Extract the recipe from this webpage content:\n\n{page_text}\n\nSource URL: {url}"


def weekly_plan_request(prompt: str) -> str:
    return (
        "Create a weekly meal plan based on the following preferences:\n\n"
        f"{prompt}\n\n"
        "Generate 7 diverse recipes for Monday through Sunday. "
        "Make sure to incorporate all the preferences mentioned above."
    )
