"""
Pytest configuration and shared fixtures.
This file ensures the project root is in sys.path for imports and points the
application at an in-memory SQLite database before anything imports settings.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add project root to sys.path so we can import domain, services, etc.
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENVIRONMENT"] = "testing"
os.environ["OPENAI_API_KEY"] = "test-key"
os.environ["AI_RETRY_DELAY_SEC"] = "0"
os.environ["STORAGE_DIR"] = tempfile.mkdtemp(prefix="lechef-test-storage-")


@pytest.fixture(autouse=True)
def _schema():
    """Fresh tables for every test"""
    from domain.models import Base, engine

    Base.metadata.create_all(engine)
    yield
    Base.metadata.drop_all(engine)


@pytest.fixture(autouse=True)
def _reset_chat_client():
    from adapters.openai_adapter import set_chat_client

    yield
    set_chat_client(None)
