"""
Data Models Module
Pydantic models for the conversation and API request/response schemas.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TurnRole(str, Enum):
    """Speaker of a conversation turn, using the wire values the client sends."""
    INTERVIEWER = "assistant"
    CANDIDATE = "user"


class ConversationTurn(BaseModel):
    """Represents a single message in the conversation."""
    role: TurnRole = Field(..., description="assistant (interviewer) or user (candidate)")
    content: str = Field(..., description="Content of the message")

    @property
    def is_candidate(self) -> bool:
        return self.role == TurnRole.CANDIDATE


class StartInterviewRequest(BaseModel):
    """Request model for starting an interview."""
    # Plain str so unknown ids reach the profession check and get a 400
    profession: Optional[str] = None


class NextQuestionRequest(BaseModel):
    """Request model for the next question; the client sends the whole history."""
    model_config = ConfigDict(populate_by_name=True)

    profession: Optional[str] = None
    conversation_history: List[ConversationTurn] = Field(
        default_factory=list, alias="conversationHistory"
    )
    question_number: int = Field(1, alias="questionNumber", ge=1)


class EvaluateInterviewRequest(BaseModel):
    """Request model for evaluating a finished interview."""
    model_config = ConfigDict(populate_by_name=True)

    profession: Optional[str] = None
    conversation_history: List[ConversationTurn] = Field(
        default_factory=list, alias="conversationHistory"
    )


class QuestionResponse(BaseModel):
    """Response model carrying one generated question."""
    question: str


class ProfessionSummary(BaseModel):
    """Public view of a profession profile."""
    id: str
    name: str
    skills: List[str]


class HealthResponse(BaseModel):
    """Response model for the health check."""
    model_config = ConfigDict(populate_by_name=True)

    status: str
    message: str
    api_provider: str = Field(alias="apiProvider")
    api_key: str = Field(alias="apiKey")


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str
    detail: Optional[str] = None
