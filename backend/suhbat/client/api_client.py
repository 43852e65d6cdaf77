"""
HTTP client for the SuhbatAI interview API.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:3000"


class InterviewApiError(Exception):
    """Raised when the API is unreachable or answers with an error status."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class InterviewApiClient:
    """Thin wrapper over the JSON endpoints; one request at a time."""

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, payload: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"{method} {path} failed: {e}")
            raise InterviewApiError(f"Could not reach {url}: {e}") from e

        try:
            data = response.json()
        except ValueError:
            data = None

        if not response.ok:
            message = data.get("error") if isinstance(data, dict) else None
            logger.error(f"{method} {path} returned {response.status_code}: {message}")
            raise InterviewApiError(message or f"HTTP {response.status_code}", response.status_code)

        return data

    def health(self) -> Dict[str, Any]:
        return self._request("GET", "/health")

    def professions(self) -> List[Dict[str, Any]]:
        return self._request("GET", "/professions")

    def start(self, profession: str) -> Dict[str, Any]:
        return self._request("POST", "/interview/start", {"profession": profession})

    def next_question(
        self,
        profession: str,
        conversation_history: List[Dict[str, str]],
        question_number: int
    ) -> Dict[str, Any]:
        return self._request("POST", "/interview/next", {
            "profession": profession,
            "conversationHistory": conversation_history,
            "questionNumber": question_number,
        })

    def evaluate(self, profession: str, conversation_history: List[Dict[str, str]]) -> Dict[str, Any]:
        return self._request("POST", "/interview/evaluate", {
            "profession": profession,
            "conversationHistory": conversation_history,
        })

    def close(self) -> None:
        self.session.close()
