"""
Prompts Module
Centralized LLM prompts with LangChain templates and structured output.

Provides:
- Pydantic schema for the evaluation output
- Prompt builders for the opening, follow-up and evaluation calls
"""

from .interview import (
    InterviewStage,
    NextQuestionPrompt,
    PromptPair,
    build_evaluation_prompt,
    build_next_question_prompt,
    build_opening_prompt,
    format_recent_conversation,
    pair_questions_and_answers,
    stage_for_question,
    stage_guidance,
)
from .schemas import (
    SKILL_RATING_LABELS,
    EvaluationResult,
    fallback_evaluation,
)


__all__ = [
    # Schemas
    'SKILL_RATING_LABELS',
    'EvaluationResult',
    'fallback_evaluation',

    # Prompts
    'InterviewStage',
    'NextQuestionPrompt',
    'PromptPair',
    'build_evaluation_prompt',
    'build_next_question_prompt',
    'build_opening_prompt',
    'format_recent_conversation',
    'pair_questions_and_answers',
    'stage_for_question',
    'stage_guidance',
]
