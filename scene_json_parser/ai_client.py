"""
Thin Gemini wrapper used by the review panel.

Exposes one call, `generate(prompt, context, model_type) -> str`. Whatever goes
wrong inside the SDK is logged here and surfaces as AIRequestFailedError with
a generic message, so no provider detail reaches the UI.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from .config import Settings, require_api_key
from .errors import AIRequestFailedError

logger = logging.getLogger(__name__)

NO_RESPONSE_TEXT = "No response generated."

SUGGESTED_PROMPTS = [
    "Summarize the key themes",
    "Proofread and correct grammar",
    "Rewrite in a more engaging tone",
    "Extract key entities",
]


class AIModelType(enum.Enum):
    FAST = "FAST"
    THINKING = "THINKING"


def build_prompt(prompt: str, context: str) -> str:
    return f"Context Data:\n{context}\n\nUser Request:\n{prompt}"


class GeminiClient:
    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.settings = settings
        self._client = client

    def _get_client(self):
        if self._client is None:
            self._client = genai.Client(api_key=require_api_key(self.settings))
        return self._client

    def _request_options(self, model_type: AIModelType):
        if model_type is AIModelType.THINKING:
            config = types.GenerateContentConfig(
                thinking_config=types.ThinkingConfig(thinking_budget=self.settings.thinking_budget),
            )
            return self.settings.thinking_model, config
        return self.settings.fast_model, None

    def generate(self, prompt: str, context: str, model_type: AIModelType = AIModelType.FAST) -> str:
        model, config = self._request_options(model_type)
        try:
            response = self._get_client().models.generate_content(
                model=model,
                contents=build_prompt(prompt, context),
                config=config,
            )
            text = response.text
        except Exception as e:
            logger.exception("Gemini request failed (model=%s)", model)
            raise AIRequestFailedError() from e

        logger.info("Gemini response received (model=%s, %d chars)", model, len(text or ""))
        return text or NO_RESPONSE_TEXT
