"""
Tests for shopping list generation from weekly plans.

The shopping list is derived, never stored: every request reads the plan,
loads the recipes of its assigned days and merges their ingredients.

Example Plan to Shopping List Flow:
===================================

WEEKLY PLAN:
- Monday: Pasta Carbonara
  - Spaghetti: 400g, Eggs: 4, Guanciale: 150g, Pecorino Romano: 50g, Black pepper
- Wednesday: Vegetable Curry
  - Potatoes: 300g, Carrots: 200g, Coconut milk: 400ml, Curry paste: 2 tbsp, "Eggs ": 2
- Friday: Chicken Stir Fry
  - chicken breast: 400g, bell peppers: 200g, soy sauce: 50ml, "  CARROTS": 1

SHOPPING LIST:
- Black pepper        (no amount, 1 recipe)
- Carrots: 200g + 1   (Vegetable Curry, Chicken Stir Fry)
- Eggs: 4 + 2         (Pasta Carbonara, Vegetable Curry)
- ...sorted by name, first letter capitalized
"""

import uuid

import pytest

from test_fixtures import auth, client, create_recipe, new_user
from services.shopping_service import IngredientLine, aggregate_ingredients


def plan_with(user, assignments):
    """Save a plan for the week of 2024-01-15 and return its id"""
    days = [{"day_of_week": day, "recipe_id": recipe["recipe_id"]} for day, recipe in assignments]
    resp = client.put(
        "/weekly-plans/week",
        json={"week_start_date": "2024-01-15", "days": days},
        headers=auth(user),
    )
    assert resp.status_code == 200, resp.text
    return resp.json()["plan_id"]


def shopping_list(user, plan_id):
    return client.get(f"/weekly-plans/{plan_id}/shopping-list", headers=auth(user))


# =============================================================================
# AGGREGATION
# =============================================================================


class TestAggregateIngredients:
    """Pure merging rules, independent of the database"""

    def test_names_merge_case_and_whitespace_insensitively(self):
        r1, r2 = uuid.uuid4(), uuid.uuid4()
        items = aggregate_ingredients([
            IngredientLine(r1, "Curry", "Carrots", "200g"),
            IngredientLine(r2, "Stir Fry", "  CARROTS", "1"),
        ])

        assert len(items) == 1
        assert items[0].name == "Carrots"
        assert items[0].amount == "200g + 1"
        assert items[0].recipes == ["Curry", "Stir Fry"]
        assert items[0].recipe_count == 2

    def test_empty_amounts_are_not_joined(self):
        r1, r2 = uuid.uuid4(), uuid.uuid4()
        items = aggregate_ingredients([
            IngredientLine(r1, "A", "salt", ""),
            IngredientLine(r2, "B", "Salt", "1 tsp"),
            IngredientLine(r2, "B", "pepper", ""),
        ])

        by_name = {item.name: item for item in items}
        assert by_name["Salt"].amount == "1 tsp"
        assert by_name["Pepper"].amount == ""

    def test_same_recipe_counted_once(self):
        recipe_id = uuid.uuid4()
        items = aggregate_ingredients([
            IngredientLine(recipe_id, "Cake", "sugar", "100g"),
            IngredientLine(recipe_id, "Cake", "Sugar", "2 tbsp"),
        ])

        assert items[0].amount == "100g + 2 tbsp"
        assert items[0].recipes == ["Cake"]
        assert items[0].recipe_count == 1

    def test_sorted_by_name(self):
        r = uuid.uuid4()
        items = aggregate_ingredients([
            IngredientLine(r, "X", "zucchini", "1"),
            IngredientLine(r, "X", "Apples", "2"),
            IngredientLine(r, "X", "mint", "a bunch"),
        ])
        assert [item.name for item in items] == ["Apples", "Mint", "Zucchini"]

    def test_blank_names_are_skipped(self):
        items = aggregate_ingredients([IngredientLine(uuid.uuid4(), "X", "   ", "1")])
        assert items == []


# =============================================================================
# SHOPPING LIST FOR A PLAN
# =============================================================================


def test_shopping_list_for_full_week():
    user = new_user()
    carbonara = create_recipe(user, "carbonara")
    curry = create_recipe(user, "curry")
    stir_fry = create_recipe(user, "stir_fry")
    plan_id = plan_with(user, [(0, carbonara), (2, curry), (4, stir_fry)])

    resp = shopping_list(user, plan_id)
    assert resp.status_code == 200, resp.text
    data = resp.json()
    items = {item["name"]: item for item in data["items"]}

    assert data["plan_id"] == plan_id
    # 5 + 5 + 4 lines, with Eggs and Carrots merged
    assert data["total_items"] == 12
    assert len(data["items"]) == 12
    assert [item["name"] for item in data["items"]] == sorted(items, key=str.lower)

    assert items["Eggs"]["amount"] == "4 + 2"
    assert items["Eggs"]["recipes"] == ["Pasta Carbonara", "Vegetable Curry"]
    assert items["Carrots"]["amount"] == "200g + 1"
    assert items["Carrots"]["recipe_count"] == 2
    assert items["Black pepper"]["amount"] == ""
    assert items["Chicken breast"]["recipes"] == ["Chicken Stir Fry"]


def test_single_day_plan():
    user = new_user()
    curry = create_recipe(user, "curry")
    plan_id = plan_with(user, [(2, curry)])

    data = shopping_list(user, plan_id).json()
    assert [item["name"] for item in data["items"]] == [
        "Carrots",
        "Coconut milk",
        "Curry paste",
        "Eggs",
        "Potatoes",
    ]
    assert all(item["recipe_count"] == 1 for item in data["items"])


def test_public_recipe_of_another_user_contributes():
    me, chef = new_user(), new_user("chef")
    public = create_recipe(chef, "stir_fry", is_public=True)
    plan_id = plan_with(me, [(1, public)])

    data = shopping_list(me, plan_id).json()
    assert data["total_items"] == 4


def test_empty_plan_returns_empty_list():
    user = new_user()
    plan_id = plan_with(user, [])

    resp = shopping_list(user, plan_id)
    assert resp.status_code == 200
    assert resp.json()["items"] == []
    assert resp.json()["total_items"] == 0


def test_deleted_recipe_is_skipped():
    user = new_user()
    carbonara = create_recipe(user, "carbonara")
    curry = create_recipe(user, "curry")
    plan_id = plan_with(user, [(0, carbonara), (1, curry)])
    client.delete(f"/recipes/{curry['recipe_id']}", headers=auth(user))

    data = shopping_list(user, plan_id).json()
    assert data["total_items"] == 5
    assert {item["name"] for item in data["items"]} == {
        "Spaghetti",
        "Eggs",
        "Guanciale",
        "Pecorino romano",
        "Black pepper",
    }


@pytest.mark.parametrize("headers_for", ["other", "anonymous"])
def test_shopping_list_of_foreign_plan_is_not_found(headers_for):
    owner = new_user()
    plan_id = plan_with(owner, [(0, create_recipe(owner))])
    headers = auth(new_user()) if headers_for == "other" else {}

    resp = client.get(f"/weekly-plans/{plan_id}/shopping-list", headers=headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["message"] == "Weekly plan not found"
