import json

import httpx
import pytest

from services.completion_service import NO_REPLY
from tests.conftest import completion_body


def _user_prompt(request: httpx.Request) -> str:
    return json.loads(request.content)["messages"][1]["content"]


def test_survey_webhook_returns_reply(client, upstream):
    upstream.handler = lambda request: httpx.Response(
        200, json=completion_body("  Grow your list by 20%  ")
    )

    response = client.post(
        "/webhook/survey",
        json={"survey_answers": [{"question": "Goal", "answer": "Grow leads"}]},
    )

    assert response.status_code == 200
    assert response.json() == {"ok": True, "reply": "Grow your list by 20%"}
    assert _user_prompt(upstream.requests[0]) == "Goal: Grow leads"


def test_survey_webhook_empty_reply_placeholder(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, json=completion_body(""))

    response = client.post("/webhook/survey", json={"message": "hi"})

    assert response.json() == {"ok": True, "reply": NO_REPLY}


def test_missing_credential_returns_500_without_outbound_call(make_client, upstream):
    client = make_client(OPENAI_API_KEY=None)

    response = client.post("/webhook/survey", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing OPENAI_API_KEY"}
    assert upstream.calls == 0


def test_upstream_503_returns_502_with_detail(client, upstream):
    upstream.handler = lambda request: httpx.Response(503, text="upstream overloaded")

    response = client.post("/webhook/survey", json={"message": "hi"})

    assert response.status_code == 502
    assert response.json() == {"error": "OpenAI error", "detail": "upstream overloaded"}
    assert upstream.calls == 1


def test_network_failure_returns_server_error(client, upstream):
    def timeout(request):
        raise httpx.ReadTimeout("timed out", request=request)

    upstream.handler = timeout

    response = client.post("/webhook/survey", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Server error", "detail": "ReadTimeout: timed out"}


def test_unparseable_upstream_body_returns_server_error(client, upstream):
    upstream.handler = lambda request: httpx.Response(200, text="<html>oops</html>")

    response = client.post("/webhook/survey", json={"message": "hi"})

    assert response.status_code == 500
    body = response.json()
    assert body["error"] == "Server error"
    assert body["detail"].startswith("JSONDecodeError")


def test_invalid_json_returns_400(client, upstream):
    response = client.post(
        "/webhook/survey",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON payload"}
    assert upstream.calls == 0


def test_empty_body_is_treated_as_empty_object(client, upstream):
    response = client.post("/webhook/survey")

    assert response.status_code == 200
    assert _user_prompt(upstream.requests[0]) == "{}"


def test_generate_uses_message_field(client, upstream):
    response = client.post("/api/generate", json={"message": "Write me a headline", "extra": 1})

    assert response.status_code == 200
    assert response.json() == {"ok": True, "reply": "Sounds good."}
    assert _user_prompt(upstream.requests[0]) == "Write me a headline"


@pytest.mark.parametrize(
    "body",
    [
        {"form_answers": {"goal": "Grow leads"}},
        {"message": None, "niche": "Dentists"},
    ],
)
def test_generate_wraps_body_without_message(client, upstream, body):
    client.post("/api/generate", json=body)

    assert json.loads(_user_prompt(upstream.requests[0])) == body


def test_generate_accepts_raw_string_body(client, upstream):
    client.post("/api/generate", json="Plain prompt")

    assert _user_prompt(upstream.requests[0]) == "Plain prompt"


def test_generate_matches_survey_webhook(client, upstream):
    survey = client.post("/webhook/survey", json={"message": "Same prompt"})
    generate = client.post("/api/generate", json={"message": "Same prompt"})

    assert survey.status_code == generate.status_code == 200
    assert survey.json() == generate.json()
    assert upstream.requests[0].content == upstream.requests[1].content


def test_generate_missing_credential(make_client, upstream):
    client = make_client(OPENAI_API_KEY=None)

    response = client.post("/api/generate", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {"error": "Missing OPENAI_API_KEY"}
    assert upstream.calls == 0


def test_deeply_nested_json_returns_400(client, upstream):
    depth = 100000
    response = client.post(
        "/webhook/survey",
        content=b"[" * depth + b"]" * depth,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 400
    assert response.json() == {"error": "Invalid JSON payload", "detail": "JSON nesting too deep"}
    assert upstream.calls == 0


def test_unexpected_error_outside_relay_returns_json(make_client):
    from dependencies.services import get_webhook_service
    from main import app

    client = make_client(raise_server_exceptions=False)

    def broken_service():
        raise RuntimeError("service wiring failed")

    app.dependency_overrides[get_webhook_service] = broken_service

    response = client.post("/webhook/survey", json={"message": "hi"})

    assert response.status_code == 500
    assert response.json() == {
        "error": "Server error",
        "detail": "RuntimeError: service wiring failed",
    }


def test_falsy_answers_reach_the_prompt(client, upstream):
    client.post(
        "/webhook/survey",
        json={
            "survey_answers": [
                {"question": "Has website?", "answer": False},
                {"question": "Employees", "answer": 0},
            ]
        },
    )

    assert _user_prompt(upstream.requests[0]) == "Has website?: false\nEmployees: 0"
