"""Utilities for robustly extracting the evaluation JSON from LLM responses."""

import json
import re
from typing import Any, Dict

from pydantic import ValidationError

from suhbat.core.exceptions import MalformedResponseError
from suhbat.prompts.schemas import EvaluationResult

_FENCE_OPEN = re.compile(r"```[A-Za-z0-9_-]*\s*")
_FENCE_CLOSE = re.compile(r"```\s*")


def strip_code_fences(text: str) -> str:
    """Remove ```json / ``` markers wherever they appear."""
    cleaned = _FENCE_OPEN.sub("", text or "")
    cleaned = _FENCE_CLOSE.sub("", cleaned)
    return cleaned.strip()


def extract_json_object(text: str) -> Dict[str, Any]:
    """
    Decode the first complete {...} object in `text`.

    Leading and trailing prose is ignored; text after the object may contain
    further braces without affecting the result.

    Raises:
        MalformedResponseError: If no object can be decoded
    """
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            data, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(data, dict):
            return data
        start = text.find("{", start + 1)
    raise MalformedResponseError("No JSON object found in model response")


def parse_evaluation(text: str) -> EvaluationResult:
    """
    Strict: parse model output into an EvaluationResult, else raise.

    Raises:
        MalformedResponseError: On missing, unparseable or wrongly shaped JSON
    """
    data = extract_json_object(strip_code_fences(text))
    try:
        return EvaluationResult.model_validate(data)
    except ValidationError as e:
        raise MalformedResponseError(f"Evaluation JSON has the wrong shape: {e}") from e
