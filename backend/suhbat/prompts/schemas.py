"""
Pydantic Schemas for Structured LLM Outputs
Ensures type-safe responses from LLM calls.
"""

from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field


# The four labels the evaluation prompt asks the model to rate
SKILL_RATING_LABELS = ("Communication", "Structure", "Confidence", "Technical Knowledge")


class EvaluationResult(BaseModel):
    """Final interview evaluation (wire format uses camelCase keys)."""
    model_config = ConfigDict(populate_by_name=True)

    average_score: float = Field(
        alias="averageScore",
        description="Overall score from 1 to 10 (decimals allowed)"
    )

    skill_ratings: Dict[str, float] = Field(
        alias="skillRatings",
        description="Score from 1 to 10 per rated skill label"
    )

    # Expected to hold three items each; the model is not held to it
    strengths: List[str] = Field(
        default_factory=list,
        description="Specific strengths shown in the interview"
    )

    weak_points: List[str] = Field(
        default_factory=list,
        alias="weakPoints",
        description="Specific areas to improve"
    )

    recommendations: List[str] = Field(
        default_factory=list,
        description="Actionable tips for the candidate"
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


def fallback_evaluation() -> EvaluationResult:
    """Neutral evaluation returned when the model output cannot be used."""
    return EvaluationResult(
        average_score=7.0,
        skill_ratings={label: 7 for label in SKILL_RATING_LABELS},
        strengths=[
            "Clear communication throughout the interview",
            "Demonstrated understanding of key concepts",
            "Maintained professional demeanor",
        ],
        weak_points=[
            "Could provide more specific examples from experience",
            "Some answers would benefit from better structure",
            "Technical explanations could go deeper",
        ],
        recommendations=[
            "Use the STAR method for behavioral questions",
            "Prepare 3-5 concrete examples beforehand",
            "Practice explaining complex concepts simply",
        ],
    )
