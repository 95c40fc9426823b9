"""
Reading reward client - asks a text-generation model for one movie that
follows a finished book.

`recommend` never raises: a missing key or any transport / service / payload
problem turns into one of the fixed fallback strings below, because the
reward is a bonus and must not break the library view.
"""
from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from app.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "API Key is missing. Unable to generate reward."
SERVICE_ERROR_MESSAGE = (
    "An error occurred while communicating with the Oracle. Please try again later."
)
EMPTY_RESPONSE_MESSAGE = "Could not generate a recommendation at this time."

# Returned instead of a recommendation; never stored on a book.
FALLBACK_MESSAGES = frozenset({MISSING_KEY_MESSAGE, SERVICE_ERROR_MESSAGE, EMPTY_RESPONSE_MESSAGE})

_PROMPT = """I just finished reading the book "{title}" by {author}.
Based on the intellectual depth, themes, and complexity of this book, recommend ONE specific, eye-opening movie.

The movie should be:
1. Intellectually stimulating (like Fight Club, The Matrix, Inception, Primer, etc.).
2. Thematically resonant with the book I read.

Provide the response in this format:
"**[Movie Title]**

[A short, compelling paragraph explaining why this movie is the perfect visual successor to the book, highlighting the shared philosophy or mind-bending nature.]"
"""


def build_prompt(title: str, author: str) -> str:
    return _PROMPT.format(title=title, author=author)


def _extract_text(data: Any) -> str:
    parts = data["candidates"][0]["content"]["parts"]
    return "".join(p.get("text", "") for p in parts).strip()


class RewardClient:
    def __init__(
        self,
        api_key: str,
        model: str,
        api_base: str,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_base = api_base.rstrip("/")
        self.timeout = timeout
        self._transport = transport

    @classmethod
    def from_settings(cls, s: Settings = default_settings) -> "RewardClient":
        return cls(
            api_key=s.REWARD_API_KEY,
            model=s.REWARD_MODEL,
            api_base=s.REWARD_API_BASE,
            timeout=s.REWARD_TIMEOUT_SECONDS,
        )

    async def recommend(self, title: str, author: str) -> str:
        if not self.api_key:
            return MISSING_KEY_MESSAGE

        url = f"{self.api_base}/models/{self.model}:generateContent"
        body = {"contents": [{"parts": [{"text": build_prompt(title, author)}]}]}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                r = await client.post(url, headers={"x-goog-api-key": self.api_key}, json=body)
                r.raise_for_status()
                text = _extract_text(r.json())
        except httpx.HTTPError as exc:
            logger.warning("Reward request for %r failed: %s", title, exc)
            return SERVICE_ERROR_MESSAGE
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            logger.warning("Reward response for %r unreadable: %s", title, exc)
            return SERVICE_ERROR_MESSAGE

        return text or EMPTY_RESPONSE_MESSAGE


def get_reward_client() -> RewardClient:
    """FastAPI dependency; tests override it with a fake."""
    return RewardClient.from_settings()
