"""
Question Generator Agent
Generates the opening question and the stage-driven follow-up questions.
"""

import logging
import re
from typing import Sequence

from suhbat.core.models import ConversationTurn
from suhbat.core.professions import ProfessionProfile
from suhbat.prompts.interview import build_next_question_prompt, build_opening_prompt
from suhbat.services.model_caller import ModelCaller

logger = logging.getLogger(__name__)


class QuestionGeneratorAgent:
    """
    Specialized agent for interview question generation.

    Responsibilities:
    - Generate the warm, open-ended opening question
    - Generate follow-up questions for the background, technical and behavioral stages
    """

    def __init__(self, model_caller: ModelCaller):
        """
        Initialize question generator agent.

        Args:
            model_caller: Shared model caller (retries included)
        """
        self.model_caller = model_caller
        logger.info("Initialized QuestionGeneratorAgent")

    async def opening_question(self, profile: ProfessionProfile) -> str:
        """
        Raises:
            ModelError: If the model call failed after retries
        """
        prompt = build_opening_prompt(profile)
        raw = await self.model_caller.generate(prompt.system, prompt.task)
        return self._clean_question_response(raw)

    async def next_question(
        self,
        profile: ProfessionProfile,
        history: Sequence[ConversationTurn],
        question_number: int
    ) -> str:
        """
        Generate question `question_number` from the recent conversation.

        Raises:
            ModelError: If the model call failed after retries
        """
        prompt = build_next_question_prompt(profile, history, question_number)
        logger.info(f"Question {question_number} for {profile.name} (stage: {prompt.stage.value})")
        raw = await self.model_caller.generate(prompt.system, prompt.task)
        return self._clean_question_response(raw)

    def _clean_question_response(self, response: str) -> str:
        """Strip wrapping quotes and a leading 'Question:' label the model sometimes adds."""
        question = response.strip()
        question = re.sub(r"^(?:\*\*)?question(?: \d+)?:(?:\*\*)?\s*", "", question, flags=re.IGNORECASE)
        if len(question) >= 2 and question[0] == question[-1] and question[0] in ('"', "'"):
            question = question[1:-1].strip()
        return question
