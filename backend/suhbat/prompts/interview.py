"""
Interview Prompts
Builds the (system framing, task instruction) text pairs sent to the model.
Uses LangChain PromptTemplate; every builder is a pure function.
"""

from enum import Enum
from typing import List, NamedTuple, Sequence, Tuple

from langchain_core.prompts import PromptTemplate

from suhbat.core.constants import (
    BACKGROUND_STAGE_LAST_QUESTION,
    MAX_QUESTIONS,
    RECENT_HISTORY_TURNS,
    TECHNICAL_STAGE_LAST_QUESTION,
)
from suhbat.core.models import ConversationTurn
from suhbat.core.professions import ProfessionProfile


class PromptPair(NamedTuple):
    """Role framing plus task instruction for a single model call."""
    system: str
    task: str


class InterviewStage(str, Enum):
    """Coarse phase of the interview, derived from the question number."""
    BACKGROUND = "Background & Experience"
    TECHNICAL = "Technical Skills & Knowledge"
    BEHAVIORAL = "Behavioral & Problem-Solving"


class NextQuestionPrompt(NamedTuple):
    system: str
    task: str
    stage: InterviewStage
    guidance: str


def stage_for_question(question_number: int) -> InterviewStage:
    """Map a 1-based question number to its interview stage."""
    if question_number <= BACKGROUND_STAGE_LAST_QUESTION:
        return InterviewStage.BACKGROUND
    if question_number <= TECHNICAL_STAGE_LAST_QUESTION:
        return InterviewStage.TECHNICAL
    return InterviewStage.BEHAVIORAL


# ============================================================================
# OPENING QUESTION (First question of interview)
# ============================================================================

OPENING_SYSTEM = PromptTemplate.from_template(
    """You are a professional interviewer with 10+ years of experience conducting technical interviews.

Role: {name}
Focus: {focus}
Key Skills: {skills}

Your task: Ask engaging, relevant interview questions that assess the candidate's experience and skills."""
)

OPENING_TASK = PromptTemplate.from_template(
    """Generate the FIRST interview question for this {name} candidate.

Guidelines:
- Start with a warm, open-ended question
- Examples: "Tell me about yourself", "What interests you about this role?", "Walk me through your experience"
- Make it conversational and welcoming
- Focus on their background and motivation

Output ONLY the question. No greeting, no explanation, just the question."""
)


def build_opening_prompt(profile: ProfessionProfile) -> PromptPair:
    """Prompt pair for the warm, open-ended first question."""
    return PromptPair(
        system=OPENING_SYSTEM.format(
            name=profile.name,
            focus=profile.focus,
            skills=", ".join(profile.skills),
        ),
        task=OPENING_TASK.format(name=profile.name),
    )


# ============================================================================
# NEXT QUESTION (Stage-driven follow-ups)
# ============================================================================

NEXT_SYSTEM = PromptTemplate.from_template(
    """You are interviewing a {name} candidate.

Role Context:
- Position: {name}
- Focus Area: {focus}
- Required Skills: {skills}

Current Interview Stage: {stage}
Question {question_number} of {max_questions}

Recent conversation:
{conversation}

Your task: Generate the NEXT interview question based on:
1. The candidate's previous answer
2. The current interview stage
3. The role's required skills"""
)

NEXT_TASK = PromptTemplate.from_template(
    """Generate the next interview question.

Stage Guidance: {guidance}

Requirements:
- Build naturally on their previous answer
- Make it specific to {name} role
- Ask ONE clear question
- Be conversational and professional

Output ONLY the question, nothing else."""
)


def stage_guidance(profile: ProfessionProfile, stage: InterviewStage) -> str:
    """Stage-specific instruction referencing the profile's skills."""
    if stage is InterviewStage.BACKGROUND:
        return f"Ask about their practical experience with {profile.skills[0]} or {profile.skills[1]}."
    if stage is InterviewStage.TECHNICAL:
        return (
            f"Ask a technical question about {profile.skills[2]} or {profile.skills[3]}. "
            f"Make it specific to {profile.name} work."
        )
    return (
        'Ask a behavioral question: "Tell me about a time when..." or "How would you handle...". '
        f"Focus on real scenarios a {profile.name} faces."
    )


def format_recent_conversation(
    history: Sequence[ConversationTurn],
    max_turns: int = RECENT_HISTORY_TURNS
) -> str:
    """Render the last few turns as INTERVIEWER/CANDIDATE lines."""
    recent = list(history)[-max_turns:] if max_turns > 0 else []
    return "\n".join(
        f"{'CANDIDATE' if turn.is_candidate else 'INTERVIEWER'}: {turn.content}"
        for turn in recent
    )


def build_next_question_prompt(
    profile: ProfessionProfile,
    history: Sequence[ConversationTurn],
    question_number: int
) -> NextQuestionPrompt:
    """
    Prompt pair for question `question_number` (1-based).

    Only the most recent turns are included as context; the stage is derived
    from the question number alone.
    """
    stage = stage_for_question(question_number)
    guidance = stage_guidance(profile, stage)

    system = NEXT_SYSTEM.format(
        name=profile.name,
        focus=profile.focus,
        skills=", ".join(profile.skills),
        stage=stage.value,
        question_number=question_number,
        max_questions=MAX_QUESTIONS,
        conversation=format_recent_conversation(history),
    )
    task = NEXT_TASK.format(guidance=guidance, name=profile.name)

    return NextQuestionPrompt(system=system, task=task, stage=stage, guidance=guidance)


# ============================================================================
# EVALUATION (Final structured feedback)
# ============================================================================

EVALUATION_SYSTEM = PromptTemplate.from_template(
    """You are an expert interview evaluator for {name} positions.

Role Context:
- Position: {name}
- Required Skills: {skills}
- Focus: {focus}

Interview Transcript:
{transcript}

Your task: Provide a comprehensive, constructive evaluation of this interview performance."""
)

EVALUATION_TASK = PromptTemplate.from_template(
    """Evaluate this {name} interview and return ONLY valid JSON:

{{
  "averageScore": <number 1-10 (can be decimal like 7.5)>,
  "skillRatings": {{
    "Communication": <number 1-10>,
    "Structure": <number 1-10>,
    "Confidence": <number 1-10>,
    "Technical Knowledge": <number 1-10>
  }},
  "strengths": [
    "<specific strength 1>",
    "<specific strength 2>",
    "<specific strength 3>"
  ],
  "weakPoints": [
    "<specific area to improve 1>",
    "<specific area to improve 2>",
    "<specific area to improve 3>"
  ],
  "recommendations": [
    "<actionable tip 1>",
    "<actionable tip 2>",
    "<actionable tip 3>"
  ]
}}

CRITICAL RULES:
1. Output ONLY the JSON object above
2. NO markdown formatting, NO code blocks, NO extra text
3. Do NOT add bullets, checkmarks, or numbers (1.) to list items
4. Each list item should start with a capital letter and be plain text
5. Be specific and constructive in your feedback
6. Scores should reflect actual performance

Example of correct format:
"strengths": [
  "Demonstrated strong knowledge of React hooks",
  "Provided clear examples from real projects",
  "Communicated technical concepts effectively"
]"""
)


def pair_questions_and_answers(history: Sequence[ConversationTurn]) -> List[Tuple[str, str]]:
    """Pair entries (0, 1), (2, 3), ... as (question, answer); a trailing odd entry is dropped."""
    turns = list(history)
    return [
        (turns[i].content, turns[i + 1].content)
        for i in range(0, len(turns) - 1, 2)
    ]


def format_transcript(qa_pairs: Sequence[Tuple[str, str]]) -> str:
    return "\n\n".join(
        f"Q{i}: {question}\nA{i}: {answer}"
        for i, (question, answer) in enumerate(qa_pairs, start=1)
    )


def build_evaluation_prompt(
    profile: ProfessionProfile,
    history: Sequence[ConversationTurn]
) -> PromptPair:
    """Prompt pair asking for a single JSON evaluation of the whole transcript."""
    transcript = format_transcript(pair_questions_and_answers(history))
    return PromptPair(
        system=EVALUATION_SYSTEM.format(
            name=profile.name,
            skills=", ".join(profile.skills),
            focus=profile.focus,
            transcript=transcript,
        ),
        task=EVALUATION_TASK.format(name=profile.name),
    )
