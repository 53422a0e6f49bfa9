"""
Error envelope and edge case tests.

Every error leaves the API in the same shape:

    {"success": false, "error": {"code": ..., "message": ..., "details"?: ...}, "timestamp": ...}

This suite covers:
- Missing or malformed identity (401)
- Missing resources and foreign resources (404)
- Slug conflicts (409)
- Request validation (422)
- Upstream AI failures (502)
- Error class defaults
"""

import asyncio
import json
from types import SimpleNamespace

import httpx
import pytest
from sqlalchemy.orm import Session

from test_fixtures import FakeChatBackend, auth, client, create_recipe, db_session, new_user
from api.middleware import error_body, general_exception_handler
from app.exceptions import (
    AIResponseError,
    AIServiceError,
    ConflictError,
    LeChefError,
    NotFoundError,
    ServiceValidationError,
    UnauthorizedError,
)
from domain.models import Recipe

MISSING_ID = "00000000-0000-0000-0000-0000000000aa"


def assert_envelope(resp, status_code, code):
    assert resp.status_code == status_code, resp.text
    body = resp.json()
    assert body["success"] is False
    assert body["error"]["code"] == code
    assert body["error"]["message"]
    assert "timestamp" in body
    return body["error"]


# =============================================================================
# IDENTITY
# =============================================================================


@pytest.mark.parametrize(
    "headers",
    [{}, {"Authorization": "Basic dXNlcjpwYXNz"}, {"Authorization": "Bearer "}],
    ids=["missing", "wrong-scheme", "empty-token"],
)
def test_mutation_without_identity_is_unauthorized(headers):
    resp = client.post("/recipes", json={"title": "Toast"}, headers=headers)
    assert_envelope(resp, 401, "UNAUTHORIZED")


def test_anonymous_reads_are_not_errors():
    assert client.get("/recipes").json() == []
    assert client.get("/recipes/search", params={"q": "pasta"}).json() == []
    assert client.get("/weekly-plans/current").json() is None


# =============================================================================
# NOT FOUND
# =============================================================================


def test_missing_recipe():
    error = assert_envelope(client.get(f"/recipes/{MISSING_ID}", headers=auth(new_user())), 404, "NOT_FOUND")
    assert error["message"] == "Recipe not found"


def test_foreign_recipe_looks_missing():
    owner, other = new_user(), new_user()
    recipe = create_recipe(owner)

    resp = client.put(f"/recipes/{recipe['recipe_id']}", json={"title": "Mine now"}, headers=auth(other))
    error = assert_envelope(resp, 404, "NOT_FOUND")
    assert error["message"] == "Recipe not found or you don't have permission to edit it"


def test_unknown_route_uses_envelope():
    assert_envelope(client.get("/no-such-route"), 404, "HTTP_404")


# =============================================================================
# CONFLICTS
# =============================================================================


def test_slug_conflict_on_create(db_session: Session):
    create_recipe(new_user(), slug="sunday-roast")

    resp = client.post(
        "/recipes",
        json={"title": "Another roast", "slug": "Sunday Roast"},
        headers=auth(new_user()),
    )
    error = assert_envelope(resp, 409, "CONFLICT")
    assert error["message"] == "A recipe with this slug already exists. Please choose a different name."
    assert db_session.query(Recipe).count() == 1


# =============================================================================
# VALIDATION
# =============================================================================


def test_request_validation_lists_field_errors():
    resp = client.post("/recipes", json={"title": "", "servings": 0}, headers=auth(new_user()))
    error = assert_envelope(resp, 422, "VALIDATION_ERROR")
    fields = {tuple(item["loc"])[-1] for item in error["details"]}
    assert {"title", "servings"} <= fields
    # details must be plain JSON
    json.dumps(error["details"])


def test_malformed_uuid_path():
    resp = client.get("/recipes/not-a-uuid", headers=auth(new_user()))
    assert_envelope(resp, 422, "VALIDATION_ERROR")


def test_service_validation_error_is_400():
    owner = new_user()
    recipe = create_recipe(owner)
    resp = client.post(f"/recipes/{recipe['recipe_id']}/share", json={"slug": "!!!"}, headers=auth(owner))
    assert_envelope(resp, 400, "SERVICE_VALIDATION_ERROR")


# =============================================================================
# AI FAILURES
# =============================================================================


def test_unparseable_ai_reply_is_bad_gateway():
    FakeChatBackend("I'd love to help, but...").install()
    resp = client.post("/recipes/generate", json={"prompt": "a cosy winter stew"}, headers=auth(new_user()))
    error = assert_envelope(resp, 502, "AI_RESPONSE_ERROR")
    assert error["message"].startswith("Failed to parse AI response as JSON")


def test_ai_provider_down_is_bad_gateway():
    FakeChatBackend(*[httpx.Response(503, text="unavailable")] * 3).install()
    resp = client.post("/recipes/generate", json={"prompt": "a cosy winter stew"}, headers=auth(new_user()))
    error = assert_envelope(resp, 502, "AI_SERVICE_ERROR")
    assert error["message"].startswith("Failed to call OpenAI API after 3 attempts")


# =============================================================================
# ERROR CLASSES
# =============================================================================


@pytest.mark.parametrize(
    "error_cls, status_code",
    [
        (ServiceValidationError, 400),
        (UnauthorizedError, 401),
        (NotFoundError, 404),
        (ConflictError, 409),
        (AIServiceError, 502),
        (AIResponseError, 502),
        (LeChefError, 500),
    ],
)
def test_error_status_codes(error_cls, status_code):
    assert error_cls().http_status == status_code


def test_error_to_dict():
    err = ServiceValidationError("Bad slug", details={"slug": "!!!"})
    assert err.to_dict() == {
        "message": "Bad slug",
        "code": "SERVICE_VALIDATION_ERROR",
        "details": {"slug": "!!!"},
    }
    assert str(err) == "Bad slug"


def test_error_body_omits_empty_details():
    body = error_body("NOT_FOUND", "Recipe not found")
    assert body["error"] == {"code": "NOT_FOUND", "message": "Recipe not found"}


def test_unexpected_error_hides_internals():
    request = SimpleNamespace(url="http://testserver/boom")
    resp = asyncio.run(general_exception_handler(request, RuntimeError("db password is hunter2")))
    body = json.loads(resp.body)
    assert resp.status_code == 500
    assert body["error"]["message"] == "An unexpected error occurred"
    assert "hunter2" not in resp.body.decode()
