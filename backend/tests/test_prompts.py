import pytest

from suhbat.core.models import ConversationTurn
from suhbat.core.professions import PROFESSIONS, get_profession
from suhbat.prompts import (
    InterviewStage,
    build_evaluation_prompt,
    build_next_question_prompt,
    build_opening_prompt,
    pair_questions_and_answers,
    stage_for_question,
)

from conftest import make_history


def turns(raw):
    return [ConversationTurn(**turn) for turn in raw]


@pytest.mark.parametrize("question_number, stage", [
    (1, InterviewStage.BACKGROUND),
    (2, InterviewStage.BACKGROUND),
    (3, InterviewStage.TECHNICAL),
    (4, InterviewStage.TECHNICAL),
    (5, InterviewStage.BEHAVIORAL),
    (6, InterviewStage.BEHAVIORAL),
])
def test_stage_for_question(question_number, stage):
    assert stage_for_question(question_number) is stage


def test_stage_guidance_variants_reference_profile_skills():
    profile = get_profession("backend")
    history = turns(make_history(1))

    background = build_next_question_prompt(profile, history, 2)
    technical = build_next_question_prompt(profile, history, 3)
    behavioral = build_next_question_prompt(profile, history, 6)

    assert "Background & Experience" in background.system
    assert "Node.js/Python/Java or SQL/NoSQL Databases" in background.task

    assert "Technical Skills & Knowledge" in technical.system
    assert "REST APIs or Authentication" in technical.task
    assert "specific to Backend Developer work" in technical.task

    assert "Behavioral & Problem-Solving" in behavioral.system
    assert "Tell me about a time when..." in behavioral.task
    assert "Question 6 of 6" in behavioral.system


def test_next_prompt_includes_only_last_four_turns():
    history = turns(make_history(3))
    prompt = build_next_question_prompt(get_profession("frontend"), history, 4)

    assert "Question 1?" not in prompt.system
    assert "Answer 1." not in prompt.system
    assert "INTERVIEWER: Question 2?" in prompt.system
    assert "CANDIDATE: Answer 3." in prompt.system


def test_opening_prompt_frames_role_and_asks_for_warm_question():
    prompt = build_opening_prompt(get_profession("designer"))

    assert "Role: UI/UX Designer" in prompt.system
    assert "Figma/Adobe XD, User Research" in prompt.system
    assert "warm, open-ended question" in prompt.task
    assert "Output ONLY the question" in prompt.task


def test_pairing_drops_trailing_unanswered_question():
    history = turns(make_history(2, include_trailing_question=True))
    assert pair_questions_and_answers(history) == [
        ("Question 1?", "Answer 1."),
        ("Question 2?", "Answer 2."),
    ]


def test_evaluation_prompt_contains_transcript_and_json_shape():
    prompt = build_evaluation_prompt(get_profession("data-scientist"), turns(make_history(2)))

    assert "Q1: Question 1?\nA1: Answer 1." in prompt.system
    assert "Q2: Question 2?\nA2: Answer 2." in prompt.system
    assert '"averageScore"' in prompt.task
    assert '"Technical Knowledge"' in prompt.task
    assert "{{" not in prompt.task


def test_all_profiles_have_at_least_four_skills():
    for profile in PROFESSIONS.values():
        assert len(profile.skills) >= 4
