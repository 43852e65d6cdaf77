import asyncio

import pytest

from suhbat.config import Settings
from suhbat.services.model_caller import ModelCaller, create_model_caller
from suhbat.utils.llm_retry import (
    ModelError,
    ModelNotConfiguredError,
    ModelOverloadedError,
    classify_model_error,
)

from conftest import FakeLLM, RecordingSleep, ServerError


def run(coro):
    return asyncio.run(coro)


def test_succeeds_on_third_attempt_after_two_failures():
    llm = FakeLLM([RuntimeError("boom"), RuntimeError("boom"), "  Tell me about yourself.  "])
    sleep = RecordingSleep()
    caller = ModelCaller(llm, max_attempts=3, sleep=sleep)

    assert run(caller.generate("system", "task")) == "Tell me about yourself."
    assert len(llm.prompts) == 3
    assert sleep.delays == [1.0, 1.0]


def test_propagates_last_error_after_three_failures():
    llm = FakeLLM([RuntimeError("first"), RuntimeError("second"), RuntimeError("third")])
    caller = ModelCaller(llm, max_attempts=3, sleep=RecordingSleep())

    with pytest.raises(ModelError, match="third"):
        run(caller.generate("system", "task"))
    assert len(llm.prompts) == 3


def test_overload_backoff_is_linear():
    overloaded = ServerError("The model is overloaded", status=503)
    llm = FakeLLM([overloaded, overloaded, "ok"])
    sleep = RecordingSleep()
    caller = ModelCaller(llm, max_attempts=3, sleep=sleep)

    assert run(caller.generate("system", "task")) == "ok"
    assert sleep.delays == [2.0, 4.0]
    assert sleep.elapsed == 6.0


def test_overload_exhaustion_raises_overloaded_error():
    llm = FakeLLM([ServerError("503 UNAVAILABLE", status=503)] * 3)
    sleep = RecordingSleep()
    caller = ModelCaller(llm, max_attempts=3, sleep=sleep)

    with pytest.raises(ModelOverloadedError):
        run(caller.generate("system", "task"))
    # No wait after the final attempt
    assert sleep.delays == [2.0, 4.0]


def test_empty_response_counts_as_failure():
    caller = ModelCaller(FakeLLM(["   ", "Question?"]), sleep=RecordingSleep())
    assert run(caller.generate("system", "task")) == "Question?"


def test_prompt_blocks_are_joined_with_blank_line():
    llm = FakeLLM(["ok"])
    run(ModelCaller(llm, sleep=RecordingSleep()).generate("SYSTEM", "TASK"))
    assert llm.prompts == ["SYSTEM\n\nTASK"]


def test_unconfigured_caller_fails_without_retrying():
    sleep = RecordingSleep()
    caller = ModelCaller(None, sleep=sleep)

    with pytest.raises(ModelNotConfiguredError):
        run(caller.generate("system", "task"))
    assert sleep.delays == []


@pytest.mark.parametrize("api_key", [None, "  ", "your_gemini_api_key_here"])
def test_missing_api_key_does_not_block_construction(api_key):
    caller = create_model_caller(Settings(gemini_api_key=api_key, _env_file=None))
    assert not caller.is_configured


@pytest.mark.parametrize("error, expected", [
    (ServerError("Service Unavailable", status=503), ModelOverloadedError),
    (RuntimeError("503 The model is overloaded. Please try again later."), ModelOverloadedError),
    (RuntimeError("400 API key not valid"), ModelError),
    (ServerError("Too many requests", status=429), ModelError),
])
def test_classify_model_error(error, expected):
    classified = classify_model_error(error)
    assert type(classified) is expected
