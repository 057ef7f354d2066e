"""Shared pytest fixtures for Prompt Builder tests."""

from collections.abc import Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.llms.base import BaseLLM
from app.llms.gemini_client import GEMINI_BASE_URL
from app.main import create_app
from app.services.prompt_service import PromptGenerator

TEST_MODEL_ID = "gemini-test"
GEMINI_URL = f"{GEMINI_BASE_URL}/{TEST_MODEL_ID}:generateContent"


class StubLLM(BaseLLM):
    """In-memory LLM that records calls and returns a canned answer."""

    def __init__(self, answer: str = "FINAL PROMPT\n\nstub answer", error: Exception | None = None):
        self.model = TEST_MODEL_ID
        self.answer = answer
        self.error = error
        self.calls: list[tuple[str, str, float]] = []
        self.closed = False

    async def generate(self, system_hint: str, user_task: str, temperature: float) -> str:
        self.calls.append((system_hint, user_task, temperature))
        if self.error is not None:
            raise self.error
        return self.answer

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings_no_key(tmp_path: Path) -> Settings:
    """Settings without a Gemini key and without a static directory."""
    return Settings(gemini_api_key="", model_id=TEST_MODEL_ID, static_dir=str(tmp_path / "missing"))


@pytest.fixture
def settings_with_key(tmp_path: Path) -> Settings:
    """Settings with a (fake) Gemini key."""
    return Settings(
        gemini_api_key="test-key",
        model_id=TEST_MODEL_ID,
        static_dir=str(tmp_path / "missing"),
    )


@pytest.fixture
def stub_llm() -> StubLLM:
    return StubLLM()


@pytest.fixture
def no_key_client(settings_no_key: Settings, stub_llm: StubLLM) -> Generator[TestClient, None, None]:
    app = create_app(settings_no_key, PromptGenerator(settings_no_key, stub_llm))
    with TestClient(app) as client:
        yield client


@pytest.fixture
def remote_client(settings_with_key: Settings, stub_llm: StubLLM) -> Generator[TestClient, None, None]:
    app = create_app(settings_with_key, PromptGenerator(settings_with_key, stub_llm))
    with TestClient(app) as client:
        yield client
