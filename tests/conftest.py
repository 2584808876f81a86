import os
import shutil
import tempfile

# Point db.py at a throwaway SQLite file before anything imports it
_TMP_DIR = tempfile.mkdtemp(prefix="mathbuddy-tests-")
os.environ["DATABASE_URL"] = "sqlite:///" + os.path.join(_TMP_DIR, "test.db")

import pytest  # noqa: E402

import models  # noqa: E402,F401
from db import Base, engine  # noqa: E402
from llm import get_generator  # noqa: E402
from main import app  # noqa: E402

Base.metadata.create_all(bind=engine)


class FakeGenerator:
    """Stands in for Gemini: replays canned replies and records prompts."""

    def __init__(self, replies=None, error=None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts = []
        self.json_modes = []

    def generate(self, prompt, json_mode=False):
        self.prompts.append(prompt)
        self.json_modes.append(json_mode)
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return "Great job! You subtracted correctly."


@pytest.fixture(scope="session", autouse=True)
def _test_database_dir():
    yield
    engine.dispose()
    shutil.rmtree(_TMP_DIR, ignore_errors=True)


@pytest.fixture(autouse=True)
def fake_llm():
    fake = FakeGenerator()
    app.dependency_overrides[get_generator] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_generator, None)
