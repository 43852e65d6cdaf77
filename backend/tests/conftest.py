"""Shared fakes for the test suite."""

from typing import List, Tuple, Union

import pytest
from fastapi.testclient import TestClient
from langchain_core.messages import AIMessage

from suhbat.config import Settings
from suhbat.main import create_app


class FakeLLM:
    """Chat model stand-in returning scripted texts or raising scripted errors."""

    def __init__(self, outcomes: List[Union[str, Exception]]):
        self.outcomes = list(outcomes)
        self.prompts: List[str] = []

    async def ainvoke(self, prompt):
        self.prompts.append(prompt)
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return AIMessage(content=outcome)


class StubModelCaller:
    """Model caller stand-in; records (system, task) pairs."""

    def __init__(self, outcomes: List[Union[str, Exception]]):
        self.outcomes = list(outcomes)
        self.calls: List[Tuple[str, str]] = []

    async def generate(self, system_prompt: str, user_prompt: str) -> str:
        self.calls.append((system_prompt, user_prompt))
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class RecordingSleep:
    """Simulated clock: records requested delays instead of waiting."""

    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)

    @property
    def elapsed(self) -> float:
        return sum(self.delays)


class ServerError(Exception):
    """Mimics an SDK error carrying an HTTP status."""

    def __init__(self, message: str, status: int):
        super().__init__(message)
        self.status = status


@pytest.fixture
def settings():
    return Settings(gemini_api_key="test-key", _env_file=None)


@pytest.fixture
def make_client(settings):
    """Build a TestClient around a StubModelCaller with the given outcomes."""
    clients = []

    def _make(outcomes=(), app_settings=None):
        caller = StubModelCaller(list(outcomes))
        client = TestClient(create_app(app_settings or settings, model_caller=caller))
        client.__enter__()
        clients.append(client)
        return client, caller

    yield _make

    for client in clients:
        client.__exit__(None, None, None)


def make_history(pairs: int, include_trailing_question: bool = False):
    history = []
    for i in range(1, pairs + 1):
        history.append({"role": "assistant", "content": f"Question {i}?"})
        history.append({"role": "user", "content": f"Answer {i}."})
    if include_trailing_question:
        history.append({"role": "assistant", "content": f"Question {pairs + 1}?"})
    return history
