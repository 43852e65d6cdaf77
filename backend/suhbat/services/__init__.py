"""
Services module for the SuhbatAI backend.
"""

from suhbat.services.evaluation_parser import (
    extract_json_object,
    parse_evaluation,
    strip_code_fences,
)
from suhbat.services.model_caller import (
    ModelCaller,
    create_model_caller,
)

__all__ = [
    # Model calls
    "ModelCaller",
    "create_model_caller",
    # Evaluation parsing
    "extract_json_object",
    "parse_evaluation",
    "strip_code_fences",
]
