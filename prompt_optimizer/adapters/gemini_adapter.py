from __future__ import annotations

import os
import random
import time
from typing import List

from google import genai
from google.genai import types

from prompt_optimizer.errors import MissingApiKeyError, ProviderError

from .llm_base import LLMAdapter


class GeminiAdapter(LLMAdapter):
    def __init__(self, api_key: str | None = None) -> None:
        api_key = api_key or os.getenv("GEMINI_API_KEY")
        if not api_key:
            raise MissingApiKeyError("GEMINI_API_KEY is not set.")

        self.client = genai.Client(api_key=api_key)

        primary = os.getenv("GEMINI_MODEL", "gemini-2.0-flash-001")
        self.model_candidates: List[str] = [
            primary,
            "gemini-flash-latest",
            "gemini-1.5-pro",
        ]

        self.max_attempts = int(os.getenv("GEMINI_MAX_ATTEMPTS", "5"))
        self.base_delay = float(os.getenv("GEMINI_BASE_DELAY_SECONDS", "1.0"))

    def _is_transient(self, err: Exception) -> bool:
        msg = str(err).lower()
        return any(s in msg for s in ["503", "unavailable", "429", "too many", "timeout", "temporarily"])

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        last_err: Exception | None = None
        config = types.GenerateContentConfig(
            system_instruction=system_prompt,
            max_output_tokens=int(os.getenv("OPTIMIZER_MAX_OUTPUT_TOKENS", "1000")),
            temperature=float(os.getenv("OPTIMIZER_TEMPERATURE", "0.7")),
        )

        for model in self.model_candidates:
            for attempt in range(1, self.max_attempts + 1):
                try:
                    print(f"[gemini] model={model} attempt={attempt}/{self.max_attempts}")
                    response = self.client.models.generate_content(
                        model=model,
                        contents=user_prompt,
                        config=config,
                    )
                    return getattr(response, "text", None) or ""

                except Exception as e:
                    last_err = e
                    if not self._is_transient(e):
                        break

                    delay = self.base_delay * (2 ** (attempt - 1)) + random.random() * 0.5
                    print(f"[gemini] transient error: {e} -> sleeping {delay:.2f}s")
                    time.sleep(delay)

            print(f"[gemini] switching model after failures: {model}")

        raise ProviderError(
            "Gemini generate_content failed for all candidate models. "
            f"Last error: {last_err}"
        ) from last_err
