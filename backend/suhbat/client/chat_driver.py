"""
Chat Driver
Client-side state machine sequencing start -> next x N -> evaluate.

States:
    STARTING -> AWAITING_ANSWER -> (ASKING -> AWAITING_ANSWER)* -> EVALUATING -> COMPLETE

Input is refused while a request is in flight, so at most one call is
outstanding per driver. A failed start leaves the driver in STARTING with
input disabled until begin() succeeds; nothing is retried automatically.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional

from suhbat.client.api_client import InterviewApiClient, InterviewApiError
from suhbat.client.results_store import ResultsStore
from suhbat.core.constants import MAX_QUESTIONS

logger = logging.getLogger(__name__)

START_FALLBACK_QUESTION = "Hello! Let's start your interview. Tell me about yourself."
NEXT_FALLBACK_QUESTION = "Could you elaborate on that?"
START_ERROR_MESSAGE = "Sorry, there was an error starting the interview. Please try again."
NEXT_ERROR_MESSAGE = "Sorry, there was an error. Please try again."
EVALUATING_MESSAGE = "Thank you for completing the interview! Evaluating your responses..."
EVALUATE_ERROR_MESSAGE = "There was an error evaluating your interview. Please try again."


class ChatState(str, Enum):
    STARTING = "starting"
    AWAITING_ANSWER = "awaiting_answer"
    ASKING = "asking"
    EVALUATING = "evaluating"
    COMPLETE = "complete"


class Speaker(str, Enum):
    AI = "ai"
    USER = "user"


@dataclass
class ChatMessage:
    """One line of the rendered chat window."""
    speaker: Speaker
    text: str
    is_error: bool = False


class ChatDriver:
    """
    Drives one interview for one profession against the API.

    Args:
        api: API client
        profession: Profession id
        store: Where the final results record is written
        max_questions: Answers collected before evaluation
        on_message: Called with every message added to the chat window
    """

    def __init__(
        self,
        api: InterviewApiClient,
        profession: str,
        store: ResultsStore,
        max_questions: int = MAX_QUESTIONS,
        on_message: Optional[Callable[[ChatMessage], None]] = None
    ):
        self.api = api
        self.profession = profession
        self.store = store
        self.max_questions = max_questions
        self.on_message = on_message

        self.state = ChatState.STARTING
        self.question_count = 0
        self.conversation_history: List[Dict[str, str]] = []
        self.messages: List[ChatMessage] = []
        self.evaluation: Optional[dict] = None
        self.in_flight = False

    @property
    def input_enabled(self) -> bool:
        return self.state == ChatState.AWAITING_ANSWER and not self.in_flight

    def _show(self, speaker: Speaker, text: str, is_error: bool = False) -> None:
        message = ChatMessage(speaker=speaker, text=text, is_error=is_error)
        self.messages.append(message)
        if self.on_message:
            self.on_message(message)

    def _ask(self, question: str) -> None:
        self._show(Speaker.AI, question)
        self.conversation_history.append({"role": "assistant", "content": question})

    def begin(self) -> None:
        """Request the opening question; a no-op unless STARTING and idle."""
        if self.state != ChatState.STARTING or self.in_flight:
            return

        self.in_flight = True
        try:
            data = self.api.start(self.profession)
        except InterviewApiError as e:
            logger.error(f"Start error: {e}")
            # Stay in STARTING with input disabled; begin() may be called again
            self._show(Speaker.AI, START_ERROR_MESSAGE, is_error=True)
            return
        finally:
            self.in_flight = False

        self._ask((data or {}).get("question") or START_FALLBACK_QUESTION)
        self.state = ChatState.AWAITING_ANSWER

    def submit(self, answer: str) -> bool:
        """
        Submit the candidate's answer.

        Returns:
            False when the answer was ignored (blank, wrong state or request in flight)
        """
        message = (answer or "").strip()
        if not message or not self.input_enabled:
            return False

        self._show(Speaker.USER, message)
        self.conversation_history.append({"role": "user", "content": message})
        self.question_count += 1

        if self.question_count >= self.max_questions:
            self._evaluate()
        else:
            self._next_question()
        return True

    def _next_question(self) -> None:
        self.state = ChatState.ASKING
        self.in_flight = True
        try:
            data = self.api.next_question(
                self.profession,
                self.conversation_history,
                self.question_count + 1
            )
            self._ask((data or {}).get("question") or NEXT_FALLBACK_QUESTION)
        except InterviewApiError as e:
            logger.error(f"Next question error: {e}")
            # Roll the answer back so the history keeps alternating; the user resubmits
            self.conversation_history.pop()
            self.question_count -= 1
            self._show(Speaker.AI, NEXT_ERROR_MESSAGE, is_error=True)
        finally:
            self.in_flight = False
            self.state = ChatState.AWAITING_ANSWER

    def _evaluate(self) -> None:
        self.state = ChatState.EVALUATING
        self._show(Speaker.AI, EVALUATING_MESSAGE)
        self.in_flight = True
        try:
            evaluation = self.api.evaluate(self.profession, self.conversation_history)
        except InterviewApiError as e:
            logger.error(f"Evaluation error: {e}")
            self._show(Speaker.AI, EVALUATE_ERROR_MESSAGE, is_error=True)
            return
        finally:
            self.in_flight = False

        self.evaluation = evaluation
        self.store.save(self.profession, evaluation)
        self.state = ChatState.COMPLETE
