"""API tests for the analyze endpoint.

The upstream chat model is stubbed; no network access is needed.
"""

from fastapi.testclient import TestClient
from langchain_core.messages import HumanMessage

from conftest import TINY_PNG_BASE64, make_ai_message
from fridge_check.agents.prompts import PHOTO_PROMPT
from fridge_check.main import app


class TestAnalyzeSuccess:
    """Tests for successful analyses."""

    def test_text_mode_returns_reply_with_usage(self, client, fake_llm, fried_rice_reply):
        """Text request returns the model's object merged with usage."""
        response = client.post(
            "/api/analyze",
            json={"mode": "text", "ingredients": "chicken, rice"},
        )

        assert response.status_code == 200
        assert response.json() == {
            **fried_rice_reply,
            "usage": {"input_tokens": 120, "output_tokens": 80},
        }
        fake_llm.ainvoke.assert_awaited_once()

    def test_text_mode_embeds_ingredients_verbatim(self, client, fake_llm):
        """The user's ingredient string appears unchanged in the prompt."""
        client.post(
            "/api/analyze",
            json={"mode": "text", "ingredients": "  2 eggs, half a leek  "},
        )

        messages = fake_llm.ainvoke.call_args.args[0]
        assert len(messages) == 1
        assert isinstance(messages[0], HumanMessage)
        assert "I have these ingredients:   2 eggs, half a leek  " in messages[0].content
        assert "Suggest 3 recipes" in messages[0].content

    def test_photo_mode_sends_image_and_instruction(self, client, fake_llm):
        """Photo request sends the image block followed by the instruction text."""
        response = client.post(
            "/api/analyze",
            json={"mode": "photo", "image": TINY_PNG_BASE64},
        )

        assert response.status_code == 200
        content = fake_llm.ainvoke.call_args.args[0][0].content
        assert content[0]["type"] == "image_url"
        assert content[0]["image_url"]["url"] == f"data:image/jpeg;base64,{TINY_PNG_BASE64}"
        assert content[1] == {"type": "text", "text": PHOTO_PROMPT}

    def test_reply_wrapped_in_prose_is_extracted(self, client, fake_llm):
        """JSON surrounded by prose and code fences is still found."""
        fake_llm.ainvoke.return_value = make_ai_message(
            'Sure! {not json} here you go:\n```json\n'
            '{"ingredients": ["egg"], "recipes": [{"name": "Omelette", "description": "Fluffy"}]}'
            "\n```\nEnjoy {your meal}!"
        )

        response = client.post("/api/analyze", json={"mode": "text", "ingredients": "egg"})

        assert response.status_code == 200
        data = response.json()
        assert data["ingredients"] == ["egg"]
        assert data["recipes"][0]["name"] == "Omelette"

    def test_usage_omitted_when_not_reported(self, client, fake_llm):
        """No usage key when upstream reported no token counts."""
        fake_llm.ainvoke.return_value = make_ai_message(
            '{"ingredients": [], "recipes": []}', input_tokens=None
        )

        response = client.post("/api/analyze", json={"mode": "text", "ingredients": "air"})

        assert response.status_code == 200
        assert response.json() == {"ingredients": [], "recipes": []}


class TestAnalyzeValidation:
    """Tests for request validation."""

    def test_photo_without_image_returns_400(self, client, fake_llm):
        """Photo mode without image is rejected before calling upstream."""
        response = client.post("/api/analyze", json={"mode": "photo"})

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request: provide image or ingredients"
        fake_llm.ainvoke.assert_not_called()

    def test_blank_ingredients_returns_400(self, client, fake_llm):
        response = client.post("/api/analyze", json={"mode": "text", "ingredients": "   "})

        assert response.status_code == 400
        fake_llm.ainvoke.assert_not_called()

    def test_text_mode_ignores_image(self, client, fake_llm):
        """An image does not satisfy text mode."""
        response = client.post(
            "/api/analyze",
            json={"mode": "text", "image": TINY_PNG_BASE64},
        )

        assert response.status_code == 400
        fake_llm.ainvoke.assert_not_called()

    def test_invalid_base64_returns_400(self, client, fake_llm):
        response = client.post(
            "/api/analyze",
            json={"mode": "photo", "image": "not-valid-base64!!!"},
        )

        assert response.status_code == 400
        assert response.json()["details"] == "Invalid base64 image data"
        fake_llm.ainvoke.assert_not_called()

    def test_unknown_mode_returns_400(self, client, fake_llm):
        response = client.post("/api/analyze", json={"mode": "video", "ingredients": "eggs"})

        assert response.status_code == 400
        assert "error" in response.json()
        fake_llm.ainvoke.assert_not_called()

    def test_malformed_json_returns_400(self, client, fake_llm):
        response = client.post(
            "/api/analyze",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert "error" in response.json()


class TestAnalyzeFailures:
    """Tests for configuration, upstream and parse failures."""

    def test_missing_api_key_returns_500(self, override_app, unconfigured_settings):
        override_app(unconfigured_settings)
        client = TestClient(app)

        response = client.post("/api/analyze", json={"mode": "text", "ingredients": "eggs"})

        assert response.status_code == 500
        assert response.json() == {"error": "API key not configured"}

    def test_missing_key_reported_before_input_checks(
        self, override_app, unconfigured_settings
    ):
        """A well-formed body without its input still gets the key error."""
        override_app(unconfigured_settings)
        client = TestClient(app)

        response = client.post("/api/analyze", json={"mode": "photo"})

        assert response.status_code == 500
        assert response.json() == {"error": "API key not configured"}

    def test_undecodable_body_rejected_before_key_check(
        self, override_app, unconfigured_settings
    ):
        """Bodies that are not JSON are rejected while parsing the request."""
        override_app(unconfigured_settings)
        client = TestClient(app)

        response = client.post(
            "/api/analyze",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid request: provide image or ingredients"

    def test_reply_without_json_returns_parse_error(self, client, fake_llm):
        """A reply with no object surfaces the raw text instead of crashing."""
        raw = "I'm sorry, I can't see any food in this picture."
        fake_llm.ainvoke.return_value = make_ai_message(raw)

        response = client.post("/api/analyze", json={"mode": "text", "ingredients": "eggs"})

        assert response.status_code == 500
        assert response.json() == {"error": "Could not parse AI response", "raw": raw}

    def test_truncated_reply_returns_parse_error(self, client, fake_llm):
        """A nested fragment of an unfinished object is not mistaken for the envelope."""
        raw = '{"ingredients": ["egg"], "recipes": [{"name": "Omelette", "nutrition": {"kcal": 200}'
        fake_llm.ainvoke.return_value = make_ai_message(raw)

        response = client.post("/api/analyze", json={"mode": "text", "ingredients": "eggs"})

        assert response.status_code == 500
        assert response.json()["raw"] == raw

    def test_reply_with_wrong_shape_returns_parse_error(self, client, fake_llm):
        fake_llm.ainvoke.return_value = make_ai_message('{"recipes": "three of them"}')

        response = client.post("/api/analyze", json={"mode": "text", "ingredients": "eggs"})

        assert response.status_code == 500
        assert response.json()["error"] == "Could not parse AI response"

    def test_upstream_failure_returns_message_and_code(self, client, fake_llm):
        class QuotaError(Exception):
            status_code = 429

        fake_llm.ainvoke.side_effect = QuotaError("rate limit exceeded")

        response = client.post("/api/analyze", json={"mode": "text", "ingredients": "eggs"})

        assert response.status_code == 500
        assert response.json() == {"error": "rate limit exceeded", "details": 429}
        fake_llm.ainvoke.assert_awaited_once()


class TestMethodsAndCors:
    """Tests for allowed methods and CORS."""

    def test_options_returns_200(self, client):
        response = client.options("/api/analyze")

        assert response.status_code == 200

    def test_preflight_allows_any_origin(self, client):
        response = client.options(
            "/api/analyze",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "POST",
                "Access-Control-Request-Headers": "Content-Type",
            },
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"
        assert "POST" in response.headers["access-control-allow-methods"]

    def test_get_returns_405(self, client):
        response = client.get("/api/analyze")

        assert response.status_code == 405
        assert response.json() == {"error": "Method not allowed"}


class TestInfoEndpoints:
    """Tests for / and /health."""

    def test_root_returns_service_info(self, client):
        response = client.get("/")

        assert response.status_code == 200
        data = response.json()
        assert data["health"] == "/health"
        assert data["analyze"] == "POST /api/analyze"

    def test_health_reports_llm(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "provider" in data["llm"]
