from __future__ import annotations

import os
import time

from openai import OpenAI
from openai import APIConnectionError, APIError, APITimeoutError, RateLimitError, InternalServerError

from prompt_optimizer.errors import MissingApiKeyError, ProviderError

from .llm_base import LLMAdapter, LLMResponse

DEFAULT_BASE_URL = "https://openrouter.ai/api/v1"
DEFAULT_MODEL = "google/gemini-2.0-flash-001"
MAX_ATTEMPTS = 4


def _describe(exc: APIError) -> str:
    status = getattr(exc, "status_code", None)
    return exc.message or getattr(exc, "type", None) or f"API error: {status}"


class OpenRouterAdapter(LLMAdapter):
    def __init__(self, api_key: str | None) -> None:
        if not api_key:
            raise MissingApiKeyError()
        self.model = os.getenv("OPENROUTER_MODEL", DEFAULT_MODEL)
        self.client = OpenAI(
            api_key=api_key,
            base_url=os.getenv("OPENROUTER_BASE_URL", DEFAULT_BASE_URL),
            default_headers={
                "HTTP-Referer": os.getenv("OPENROUTER_REFERER", "http://localhost"),
                "X-Title": "Perfect Prompter",
            },
        )

    def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        max_tokens = int(os.getenv("OPTIMIZER_MAX_OUTPUT_TOKENS", "1000"))
        temperature = float(os.getenv("OPTIMIZER_TEMPERATURE", "0.7"))
        attempt = 0
        backoff = 1.0
        while True:
            attempt += 1
            try:
                print(f"[openrouter] model={self.model} attempt={attempt}/{MAX_ATTEMPTS}")
                response = self.client.chat.completions.create(
                    model=self.model,
                    messages=[
                        {"role": "system", "content": system_prompt},
                        {"role": "user", "content": user_prompt},
                    ],
                    max_tokens=max_tokens,
                    temperature=temperature,
                )
                choices = getattr(response, "choices", None) or []
                content = choices[0].message.content if choices else None
                usage = getattr(response, "usage", None)
                if usage:
                    print(
                        f"[openrouter] model={self.model} "
                        f"prompt_tokens={getattr(usage, 'prompt_tokens', None)} "
                        f"completion_tokens={getattr(usage, 'completion_tokens', None)} "
                        f"total_tokens={getattr(usage, 'total_tokens', None)}"
                    )
                else:
                    print("[openrouter] usage not provided by SDK")
                # An empty completion is a classification outcome, not a transport failure.
                return LLMResponse(raw_text=content or "")
            except RateLimitError as exc:
                if getattr(exc, "code", None) == "insufficient_quota":
                    raise ProviderError(
                        "OpenRouter quota exceeded. Add credits to your OpenRouter account."
                    ) from exc
                if attempt >= MAX_ATTEMPTS:
                    raise ProviderError(_describe(exc)) from exc
            except (APITimeoutError, APIConnectionError, InternalServerError) as exc:
                if attempt >= MAX_ATTEMPTS:
                    raise ProviderError(_describe(exc)) from exc
            except APIError as exc:
                print(
                    f"[openrouter] request_id={getattr(exc, 'request_id', None)} "
                    f"status={getattr(exc, 'status_code', None)} name={type(exc).__name__}"
                )
                raise ProviderError(_describe(exc)) from exc
            print(f"[openrouter] transient error -> sleeping {backoff:.2f}s")
            time.sleep(backoff)
            backoff *= 2

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        return self.complete(system_prompt, user_prompt).raw_text
