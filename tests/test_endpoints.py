"""
Route wiring tests.

Services are monkeypatched so these tests only check that each route reads
the right parameters, passes the caller's identity through and returns the
service result with the right status code.
"""

import uuid
from datetime import date, datetime, timezone

from test_fixtures import auth, client
from domain.schemas import ShoppingListResponse, UploadUrlResponse, WeeklyPlanSummaryResponse
from domain.schemas.plan_schemas import WeekRange
from domain.schemas.recipe_schemas import RecipeCreate
from services.recipe_service import RecipeService
from services.shopping_service import ShoppingService
from services.storage_service import StorageService
from services.weekly_plan_service import WeeklyPlanService


def test_health_check():
    r = client.get("/health-check")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "leChef"}


def test_request_id_header():
    r = client.get("/health-check")
    assert r.headers["X-Request-ID"]
    assert "X-Process-Time" in r.headers


def test_search_passes_query_and_limit(monkeypatch):
    calls = []

    def fake_search(db, user_id, query=None, limit=50):
        calls.append((user_id, query, limit))
        return []

    monkeypatch.setattr(RecipeService, "search", fake_search)
    r = client.get("/recipes/search", params={"q": "curry", "limit": 5}, headers=auth("user|abc"))

    assert r.status_code == 200
    assert calls == [("user|abc", "curry", 5)]


def test_slug_exists_passes_exclusion(monkeypatch):
    excluded = uuid.uuid4()
    seen = {}

    def fake_check(db, slug, exclude_recipe_id=None):
        seen.update(slug=slug, exclude=exclude_recipe_id)
        return True

    monkeypatch.setattr(RecipeService, "check_slug_exists", fake_check)
    r = client.get(
        "/recipes/slug-exists",
        params={"slug": "pad-thai", "exclude_recipe_id": str(excluded)},
    )

    assert r.status_code == 200
    assert r.json() == {"slug": "pad-thai", "exists": True}
    assert seen == {"slug": "pad-thai", "exclude": excluded}


def test_list_plans(monkeypatch):
    now = datetime(2024, 1, 15, 9, 30, tzinfo=timezone.utc)
    summary = WeeklyPlanSummaryResponse(
        plan_id=uuid.uuid4(),
        week_start_date=date(2024, 1, 15),
        week_range=WeekRange(start="Jan 15", end="Jan 21, 2024", full="January 15, 2024"),
        recipe_count=4,
        created_at=now,
        updated_at=now,
    )
    monkeypatch.setattr(WeeklyPlanService, "list_plans", lambda db, user_id: [summary])

    r = client.get("/weekly-plans", headers=auth("user|abc"))
    assert r.status_code == 200
    assert r.json()[0]["recipe_count"] == 4


def test_week_query_parameter_is_required():
    r = client.get("/weekly-plans/week", headers=auth("user|abc"))
    assert r.status_code == 422


def test_shopping_list_route(monkeypatch):
    plan_id = uuid.uuid4()
    captured = {}

    def fake_list(db, user_id, pid):
        captured.update(user_id=user_id, plan_id=pid)
        return ShoppingListResponse(items=[], total_items=0, plan_id=pid)

    monkeypatch.setattr(ShoppingService, "generate_shopping_list", fake_list)
    r = client.get(f"/weekly-plans/{plan_id}/shopping-list", headers=auth("user|abc"))

    assert r.status_code == 200
    assert r.json()["plan_id"] == str(plan_id)
    assert captured == {"user_id": "user|abc", "plan_id": plan_id}


def test_upload_url_route(monkeypatch):
    expires = datetime(2024, 1, 15, 10, 0, tzinfo=timezone.utc)
    monkeypatch.setattr(
        StorageService,
        "generate_upload_url",
        lambda db, user_id: {"upload_url": f"http://files/upload/{user_id}", "expires_at": expires},
    )

    r = client.post("/storage/upload-url", headers=auth("user|abc"))
    assert r.status_code == 200
    assert UploadUrlResponse(**r.json()).upload_url == "http://files/upload/user|abc"


def test_generate_routes_return_created(monkeypatch):
    monkeypatch.setattr(
        RecipeService,
        "generate_from_prompt",
        lambda db, user_id, prompt, preferences=None: RecipeService.create(
            db, user_id, RecipeCreate(title=prompt)
        ),
    )

    r = client.post("/recipes/generate", json={"prompt": "green shakshuka"}, headers=auth("user|abc"))
    assert r.status_code == 201
    assert r.json()["title"] == "green shakshuka"