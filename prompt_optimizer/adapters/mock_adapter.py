from __future__ import annotations

from dataclasses import dataclass

from .llm_base import LLMAdapter, LLMResponse

SCENARIOS = ("default", "optimized", "needs_more_info", "fallback", "empty")


@dataclass
class MockAdapter(LLMAdapter):
    scenario: str = "default"

    def __post_init__(self) -> None:
        if self.scenario not in SCENARIOS:
            raise ValueError(f"Unknown mock scenario: {self.scenario}")

    def complete(self, system_prompt: str, user_prompt: str) -> LLMResponse:
        return LLMResponse(raw_text=self._build_completion(user_prompt))

    def generate(self, system_prompt: str, user_prompt: str) -> str:
        return self.complete(system_prompt, user_prompt).raw_text

    def _build_completion(self, user_prompt: str) -> str:
        scenario = self.scenario
        if scenario == "default":
            scenario = "optimized" if "Additional context:" in user_prompt else "needs_more_info"

        if scenario == "empty":
            return ""
        if scenario == "fallback":
            return "Please provide the following: budget and timeline."
        if scenario == "needs_more_info":
            return (
                "We need more information before proceeding.\n\n"
                "**Missing Context**\n"
                "- What is the target audience?\n"
                "- What tone should be used?\n"
                "- How long should the response be?\n"
            )
        first_line = user_prompt.strip().splitlines()[0] if user_prompt.strip() else ""
        return (
            f"**Goal**\n{first_line}\n\n"
            "**Return Format**\nA concise, well-structured answer using headings and bullet points.\n\n"
            "**Warnings**\nDo not invent facts that are not supported by the context below.\n\n"
            f"**Context Dump**\n{user_prompt.strip()}"
        )
