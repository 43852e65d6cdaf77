"""
Specialized Agent Modules for the interview flow
Each agent handles a specific kind of model call.
"""

from .question_generator import QuestionGeneratorAgent
from .interview_evaluator import InterviewEvaluatorAgent

__all__ = [
    'QuestionGeneratorAgent',
    'InterviewEvaluatorAgent'
]
