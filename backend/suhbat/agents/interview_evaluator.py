"""
Interview Evaluator Agent
Produces the final structured evaluation, falling back to a neutral result.
"""

import logging
from typing import Sequence

from suhbat.core.exceptions import MalformedResponseError
from suhbat.core.models import ConversationTurn
from suhbat.core.professions import ProfessionProfile
from suhbat.prompts.interview import build_evaluation_prompt, pair_questions_and_answers
from suhbat.prompts.schemas import EvaluationResult, fallback_evaluation
from suhbat.services.evaluation_parser import parse_evaluation
from suhbat.services.model_caller import ModelCaller
from suhbat.utils.llm_retry import ModelError
from suhbat.utils.logging_config import log_interview_event
from suhbat.utils.metrics import record_evaluation_fallback

logger = logging.getLogger(__name__)


class InterviewEvaluatorAgent:
    """
    Specialized agent for end-of-interview evaluation.

    Never raises for model or parse failures: the caller always receives an
    EvaluationResult. Every substitution is logged at WARNING level and counted,
    since a fallback "7/10" is indistinguishable from a real score to the user.
    """

    def __init__(self, model_caller: ModelCaller):
        self.model_caller = model_caller
        logger.info("Initialized InterviewEvaluatorAgent")

    async def evaluate(
        self,
        profile: ProfessionProfile,
        history: Sequence[ConversationTurn]
    ) -> EvaluationResult:
        qa_pairs = pair_questions_and_answers(history)
        logger.info(f"Analyzing {len(qa_pairs)} Q&A pairs for {profile.name}...")

        prompt = build_evaluation_prompt(profile, history)

        try:
            response = await self.model_caller.generate(prompt.system, prompt.task)
        except ModelError as e:
            return self.fallback(profile, "model_error", e)

        try:
            evaluation = parse_evaluation(response)
        except MalformedResponseError as e:
            logger.debug(f"Unparseable evaluation response: {response[:200]}")
            return self.fallback(profile, "malformed_response", e)

        log_interview_event(
            logger,
            profession=profile.id,
            event_type="evaluated",
            average_score=evaluation.average_score,
            qa_pairs=len(qa_pairs),
        )
        return evaluation

    def fallback(self, profile: ProfessionProfile, reason: str, error: Exception) -> EvaluationResult:
        """Log, count and return the neutral evaluation in place of a real one."""
        logger.warning(
            f"Evaluation for {profile.name} failed ({reason}: {error}); returning fallback evaluation"
        )
        record_evaluation_fallback(reason)
        log_interview_event(logger, profession=profile.id, event_type="fallback", reason=reason)
        return fallback_evaluation()
