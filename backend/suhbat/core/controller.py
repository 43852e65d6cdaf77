"""
Interview Session Controller
Stateless start / next / evaluate operations over a client-supplied history.

No session store is kept: every call carries the whole conversation, so any
worker can serve any request.
"""

import logging
from typing import Sequence

from suhbat.agents import InterviewEvaluatorAgent, QuestionGeneratorAgent
from suhbat.core.constants import MAX_QUESTIONS
from suhbat.core.exceptions import UpstreamError
from suhbat.core.models import ConversationTurn
from suhbat.core.professions import get_profession
from suhbat.prompts.schemas import EvaluationResult
from suhbat.services.model_caller import ModelCaller
from suhbat.utils.llm_retry import ModelError
from suhbat.utils.logging_config import log_interview_event

logger = logging.getLogger(__name__)


class InterviewSessionController:
    """
    Implements the three-step interview protocol (start, next x N, evaluate).

    Every operation validates the profession id first and raises
    InvalidProfessionError for unknown ids.
    """

    def __init__(self, model_caller: ModelCaller):
        self.model_caller = model_caller
        self.question_generator = QuestionGeneratorAgent(model_caller)
        self.evaluator = InterviewEvaluatorAgent(model_caller)

    async def start(self, profession_id: str) -> str:
        """
        Generate the opening question.

        Raises:
            InvalidProfessionError: Unknown profession id
            UpstreamError: Model call failed after retries
        """
        profile = get_profession(profession_id)
        logger.info(f"=== Starting {profile.name} Interview ===")

        try:
            question = await self.question_generator.opening_question(profile)
        except ModelError as e:
            logger.error(f"Start Error: {e}")
            raise UpstreamError("Failed to generate question") from e

        log_interview_event(logger, profession=profile.id, event_type="started")
        return question

    async def next_question(
        self,
        profession_id: str,
        history: Sequence[ConversationTurn],
        question_number: int
    ) -> str:
        """
        Generate question `question_number` (1-based) from the latest turns.

        Raises:
            InvalidProfessionError: Unknown profession id
            UpstreamError: Model call failed after retries
        """
        profile = get_profession(profession_id)
        logger.info(f"=== Question {question_number}/{MAX_QUESTIONS} for {profile.name} ===")

        try:
            question = await self.question_generator.next_question(profile, history, question_number)
        except ModelError as e:
            logger.error(f"Next Question Error: {e}")
            raise UpstreamError("Failed to generate question") from e

        log_interview_event(
            logger,
            profession=profile.id,
            event_type="question_asked",
            question_number=question_number,
        )
        return question

    async def evaluate(
        self,
        profession_id: str,
        history: Sequence[ConversationTurn]
    ) -> EvaluationResult:
        """
        Evaluate the finished interview.

        Model and parse failures yield the neutral fallback evaluation.

        Raises:
            InvalidProfessionError: Unknown profession id
        """
        profile = get_profession(profession_id)
        logger.info(f"=== Evaluating {profile.name} Interview ===")
        return await self.evaluator.evaluate(profile, history)

    def evaluate_unreadable(self, profession_id: str, error: Exception) -> EvaluationResult:
        """
        Answer an evaluate request whose history could not be read.

        The model is not called; the neutral fallback evaluation is returned.

        Raises:
            InvalidProfessionError: Unknown profession id
        """
        profile = get_profession(profession_id)
        return self.evaluator.fallback(profile, "malformed_history", error)
