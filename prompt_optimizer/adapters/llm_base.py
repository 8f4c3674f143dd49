from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass
class LLMResponse:
    raw_text: str


class LLMAdapter(Protocol):
    def generate(self, system_prompt: str, user_prompt: str) -> str:
        raise NotImplementedError

    def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        return LLMResponse(raw_text=self.generate(system_prompt, user_prompt))
