"""
Tests for the reward client against a mocked transport (no network).
"""
import asyncio
import json

import httpx

from app.services.reward import (
    EMPTY_RESPONSE_MESSAGE,
    MISSING_KEY_MESSAGE,
    SERVICE_ERROR_MESSAGE,
    RewardClient,
)


def _client(handler, api_key="test-key"):
    return RewardClient(
        api_key=api_key,
        model="test-model",
        api_base="https://example.test/v1beta/",
        transport=httpx.MockTransport(handler),
    )


def _answer(text):
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


class TestRewardClient:
    def test_returns_generated_text(self):
        seen = {}

        def handler(request):
            seen["url"] = str(request.url)
            seen["key"] = request.headers["x-goog-api-key"]
            seen["prompt"] = json.loads(request.content)["contents"][0]["parts"][0]["text"]
            return httpx.Response(200, json=_answer("  **Arrival**\n\nLanguage shapes time.  "))

        text = asyncio.run(_client(handler).recommend("Story of Your Life", "Ted Chiang"))
        assert text == "**Arrival**\n\nLanguage shapes time."
        assert seen["url"] == "https://example.test/v1beta/models/test-model:generateContent"
        assert seen["key"] == "test-key"
        assert '"Story of Your Life" by Ted Chiang' in seen["prompt"]

    def test_missing_key_skips_request(self):
        def handler(request):
            raise AssertionError("no request expected")

        assert asyncio.run(_client(handler, api_key="").recommend("t", "a")) == MISSING_KEY_MESSAGE

    def test_service_error(self):
        client = _client(lambda request: httpx.Response(500, json={"error": "boom"}))
        assert asyncio.run(client.recommend("t", "a")) == SERVICE_ERROR_MESSAGE

    def test_transport_failure(self):
        def handler(request):
            raise httpx.ConnectError("down", request=request)

        assert asyncio.run(_client(handler).recommend("t", "a")) == SERVICE_ERROR_MESSAGE

    def test_unreadable_payload(self):
        client = _client(lambda request: httpx.Response(200, json={"candidates": []}))
        assert asyncio.run(client.recommend("t", "a")) == SERVICE_ERROR_MESSAGE

    def test_empty_text(self):
        client = _client(lambda request: httpx.Response(200, json=_answer("   ")))
        assert asyncio.run(client.recommend("t", "a")) == EMPTY_RESPONSE_MESSAGE
