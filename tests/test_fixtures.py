"""
Shared test fixtures and utilities for the leChef test suite.

This module contains the test client, a database session fixture, helper
factories for realistic recipes, and a fake chat-completion backend so AI
features can be exercised without network access.
"""

import json
import uuid
from io import BytesIO
from typing import Generator, List, Optional

import httpx
import pytest
from fastapi.testclient import TestClient
from PIL import Image
from sqlalchemy.orm import Session

from main import app
from adapters.openai_adapter import ChatCompletionClient, set_chat_client
from domain.models import SessionLocal

client = TestClient(app)


@pytest.fixture(scope="function")
def db_session() -> Generator[Session, None, None]:
    """
    Database session for service-level tests.

    Tables are created and dropped around each test by conftest, so every
    test starts from an empty database.
    """
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.close()


def new_user(prefix: str = "user") -> str:
    """Unique subject identifier, as issued by the identity provider"""
    return f"{prefix}|{uuid.uuid4().hex[:12]}"


def auth(user_id: str) -> dict:
    return {"Authorization": f"Bearer {user_id}"}


# Realistic recipes used across the suite
REALISTIC_RECIPES = {
    "carbonara": {
        "title": "Pasta Carbonara",
        "description": "Classic Roman pasta with eggs, guanciale and pecorino",
        "cuisine": ["Italian"],
        "skill_level": "intermediate",
        "cook_time": 15,
        "prep_time": 10,
        "cost": "medium",
        "can_freeze": False,
        "can_reheat": True,
        "servings": 4,
        "ingredients": [
            {"name": "Spaghetti", "amount": "400g"},
            {"name": "Eggs", "amount": "4"},
            {"name": "Guanciale", "amount": "150g"},
            {"name": "Pecorino Romano", "amount": "50g"},
            {"name": "Black pepper", "amount": ""},
        ],
        "steps": [
            "Boil the spaghetti in salted water",
            "Crisp the guanciale in a dry pan",
            "Whisk eggs with grated pecorino",
            "Toss pasta with guanciale, then the egg mixture off the heat",
        ],
    },
    "curry": {
        "title": "Vegetable Curry",
        "description": "Mild coconut curry with potatoes and carrots",
        "cuisine": ["Indian", "Vegetarian"],
        "skill_level": "beginner",
        "cook_time": 35,
        "prep_time": 15,
        "cost": "low",
        "can_freeze": True,
        "can_reheat": True,
        "servings": 3,
        "ingredients": [
            {"name": "Potatoes", "amount": "300g"},
            {"name": "Carrots", "amount": "200g"},
            {"name": "Coconut milk", "amount": "400ml"},
            {"name": "Curry paste", "amount": "2 tbsp"},
            {"name": "Eggs ", "amount": "2"},
        ],
        "steps": [
            {"instruction": "Peel and dice the vegetables", "type": "preparation"},
            {"instruction": "Fry the curry paste, add vegetables and coconut milk", "type": "cooking"},
            {"instruction": "Simmer until the potatoes are tender", "type": "cooking"},
        ],
    },
    "stir_fry": {
        "title": "Chicken Stir Fry",
        "description": "Quick weeknight stir fry",
        "cuisine": ["Chinese"],
        "skill_level": "beginner",
        "cook_time": 12,
        "prep_time": 15,
        "cost": "medium",
        "can_freeze": False,
        "can_reheat": True,
        "servings": 2,
        "ingredients": [
            {"name": "chicken breast", "amount": "400g"},
            {"name": "bell peppers", "amount": "200g"},
            {"name": "soy sauce", "amount": "50ml"},
            {"name": "  CARROTS", "amount": "1"},
        ],
        "steps": ["Slice everything thinly", "Stir fry on high heat"],
    },
}


def recipe_payload(kind: str = "carbonara", **overrides) -> dict:
    payload = json.loads(json.dumps(REALISTIC_RECIPES[kind]))
    payload.update(overrides)
    return payload


def create_recipe(user_id: str, kind: str = "carbonara", **overrides) -> dict:
    """Create a recipe through the API and return its JSON"""
    resp = client.post("/recipes", json=recipe_payload(kind, **overrides), headers=auth(user_id))
    assert resp.status_code == 201, resp.text
    return resp.json()


def generated_recipe(title: str = "Lemon Herb Chicken", **overrides) -> dict:
    """A recipe as the AI model returns it (camelCase keys, like the prompt examples)"""
    data = {
        "title": title,
        "description": "Bright and juicy roast chicken",
        "cuisine": ["Mediterranean"],
        "skillLevel": "Beginner",
        "cookTime": 45,
        "prepTime": "10 minutes",
        "cost": "medium",
        "canFreeze": True,
        "canReheat": True,
        "servings": 4,
        "ingredients": [
            {"name": "chicken thighs", "amount": "8"},
            {"name": "lemon", "amount": "1"},
            {"name": "garlic", "amount": "3 cloves"},
        ],
        "steps": ["Marinate the chicken", "Roast at 200C for 40 minutes"],
    }
    data.update(overrides)
    return data


def chat_completion(content: Optional[str]) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


class FakeChatBackend:
    """
    Scripted chat-completion endpoint.

    Each queued reply is either a content string (answered with 200) or an
    ``httpx.Response``. Requests are recorded for assertions.
    """

    def __init__(self, *replies):
        self.replies: List = list(replies)
        self.requests: List[httpx.Request] = []
        self.sleeps: List[float] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        reply = self.replies.pop(0)
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json=chat_completion(reply))

    def client(self, **kwargs) -> ChatCompletionClient:
        kwargs.setdefault("api_key", "test-key")
        kwargs.setdefault("retry_delay", 1.0)
        return ChatCompletionClient(
            transport=httpx.MockTransport(self.handler),
            sleep=self.sleeps.append,
            **kwargs,
        )

    def install(self, **kwargs) -> ChatCompletionClient:
        """Make this backend the process-wide client used by the services"""
        chat = self.client(**kwargs)
        set_chat_client(chat)
        return chat

    def payload(self, index: int = -1) -> dict:
        return json.loads(self.requests[index].content)


def image_bytes(size=(2000, 1000), fmt: str = "PNG", color=(200, 80, 40)) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, fmt)
    return buffer.getvalue()


def upload_path(upload_url: str) -> str:
    """Path part of an issued upload URL, for use with the TestClient"""
    return httpx.URL(upload_url).path
