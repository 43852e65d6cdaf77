import pytest

from suhbat.config import Settings
from suhbat.prompts.schemas import fallback_evaluation
from suhbat.utils.llm_retry import ModelError

from conftest import make_history

PROFESSION_IDS = [
    "frontend", "backend", "designer", "product-manager", "marketing-manager", "data-scientist",
]


def test_professions_lists_six_profiles_in_order(make_client):
    client, _ = make_client()
    response = client.get("/professions")

    assert response.status_code == 200
    body = response.json()
    assert [profession["id"] for profession in body] == PROFESSION_IDS
    assert all(profession["skills"] for profession in body)
    assert body[0]["name"] == "Frontend Developer"


def test_health_reports_configured_key(make_client):
    client, _ = make_client()
    body = client.get("/health").json()

    assert body == {
        "status": "ok",
        "message": "SuhbatAI Backend - AI-Driven",
        "apiProvider": "Google Gemini",
        "apiKey": "✓ Configured",
    }


def test_health_reports_missing_key(make_client):
    client, _ = make_client(app_settings=Settings(gemini_api_key=None, _env_file=None))
    assert client.get("/health").json()["apiKey"] == "✗ MISSING!"


def test_start_returns_generated_question(make_client):
    client, caller = make_client(["Tell me about your React experience."])
    response = client.post("/interview/start", json={"profession": "frontend"})

    assert response.status_code == 200
    assert response.json() == {"question": "Tell me about your React experience."}
    system_prompt, _ = caller.calls[0]
    assert "Role: Frontend Developer" in system_prompt


@pytest.mark.parametrize("path, payload", [
    ("/interview/start", {"profession": "astronaut"}),
    ("/interview/start", {}),
    ("/interview/next", {"profession": "astronaut", "conversationHistory": [], "questionNumber": 2}),
    ("/interview/evaluate", {"profession": "astronaut", "conversationHistory": []}),
])
def test_unknown_profession_is_rejected(make_client, path, payload):
    client, caller = make_client()
    response = client.post(path, json=payload)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid profession"
    assert caller.calls == []


def test_next_uses_stage_for_question_number(make_client):
    client, caller = make_client(["How do you approach responsive layouts?"])
    response = client.post("/interview/next", json={
        "profession": "frontend",
        "conversationHistory": make_history(2),
        "questionNumber": 3,
    })

    assert response.status_code == 200
    assert response.json()["question"] == "How do you approach responsive layouts?"
    system_prompt, task = caller.calls[0]
    assert "Technical Skills & Knowledge" in system_prompt
    assert "Responsive Design or Web Performance" in task


def test_start_and_next_surface_upstream_failure_as_500(make_client):
    client, _ = make_client([ModelError("API error: down"), ModelError("API error: down")])

    start = client.post("/interview/start", json={"profession": "backend"})
    follow_up = client.post("/interview/next", json={
        "profession": "backend", "conversationHistory": make_history(1), "questionNumber": 2,
    })

    assert start.status_code == 500
    assert start.json() == {"error": "Failed to generate question"}
    assert follow_up.status_code == 500


def test_server_keeps_serving_after_failure(make_client):
    client, _ = make_client([ModelError("API error: down"), "What drew you to product management?"])

    assert client.post("/interview/start", json={"profession": "product-manager"}).status_code == 500
    retry = client.post("/interview/start", json={"profession": "product-manager"})
    assert retry.status_code == 200


def test_evaluate_returns_fallback_with_200_on_garbage(make_client):
    client, _ = make_client(["no json here"])
    response = client.post("/interview/evaluate", json={
        "profession": "designer", "conversationHistory": make_history(6),
    })

    assert response.status_code == 200
    body = response.json()
    assert body["averageScore"] == 7.0
    assert body["skillRatings"] == {
        "Communication": 7.0, "Structure": 7.0, "Confidence": 7.0, "Technical Knowledge": 7.0,
    }
    assert len(body["strengths"]) == 3


def test_evaluate_returns_fallback_with_200_on_model_error(make_client):
    client, _ = make_client([ModelError("API error: down")])
    response = client.post("/interview/evaluate", json={
        "profession": "designer", "conversationHistory": make_history(6),
    })

    assert response.status_code == 200
    assert response.json()["averageScore"] == 7.0


def test_evaluate_parses_fenced_model_output(make_client):
    model_output = """```json
{"averageScore": 8.5, "skillRatings": {"Communication": 9}, "strengths": ["Clear"],
 "weakPoints": ["Brief"], "recommendations": ["Expand"]}
```"""
    client, _ = make_client([model_output])
    response = client.post("/interview/evaluate", json={
        "profession": "marketing-manager", "conversationHistory": make_history(6),
    })

    assert response.json() == {
        "averageScore": 8.5,
        "skillRatings": {"Communication": 9.0},
        "strengths": ["Clear"],
        "weakPoints": ["Brief"],
        "recommendations": ["Expand"],
    }


def test_malformed_body_is_a_client_error(make_client):
    client, _ = make_client()
    response = client.post("/interview/next", json={
        "profession": "frontend", "conversationHistory": "not a list", "questionNumber": 2,
    })

    assert response.status_code == 400
    assert "error" in response.json()


def test_metrics_endpoint_exposes_prometheus_text(make_client):
    client, _ = make_client()
    response = client.get("/metrics")

    assert response.status_code == 200
    assert "interview_requests_total" in response.text


def test_health_treats_placeholder_key_as_missing(make_client):
    placeholder = Settings(gemini_api_key="your_gemini_api_key_here", _env_file=None)
    client, _ = make_client(app_settings=placeholder)

    assert client.get("/health").json()["apiKey"] == "✗ MISSING!"


@pytest.mark.parametrize("history", [
    None,
    "not a list",
    [{"role": "assistant", "content": "Question 1?"}, {"role": "user", "content": None}],
    [{"role": "narrator", "content": "Once upon a time"}],
])
def test_evaluate_unreadable_history_returns_fallback_without_model_call(make_client, history):
    client, caller = make_client()
    response = client.post("/interview/evaluate", json={
        "profession": "frontend", "conversationHistory": history,
    })

    assert response.status_code == 200
    assert response.json() == fallback_evaluation().to_wire()
    assert caller.calls == []


def test_evaluate_unreadable_history_with_unknown_profession_is_rejected(make_client):
    client, _ = make_client()
    response = client.post("/interview/evaluate", json={
        "profession": "astronaut", "conversationHistory": None,
    })

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid profession"}
