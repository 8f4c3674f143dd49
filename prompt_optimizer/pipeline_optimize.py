from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional, Sequence, Tuple

from jsonschema import validate

from prompt_optimizer.adapters.gemini_adapter import GeminiAdapter
from prompt_optimizer.adapters.llm_base import LLMAdapter
from prompt_optimizer.adapters.mock_adapter import MockAdapter
from prompt_optimizer.adapters.openrouter_adapter import OpenRouterAdapter
from prompt_optimizer.artifacts.writers import write_answers, write_optimized_prompt, write_questions
from prompt_optimizer.classification.policy import classify
from prompt_optimizer.classification.results import ClassificationResult, NeedsMoreInfo, Optimized
from prompt_optimizer.classification.vocabulary import DEFAULT_VOCABULARY, HeadingVocabulary, load_vocabulary
from prompt_optimizer.credentials import CredentialStore
from prompt_optimizer.prompts import build_system_prompt
from prompt_optimizer.utils.io import read_text, write_json, write_text
from prompt_optimizer.utils.paths import CONFIGS_DIR, PROMPTS_DIR, SCHEMAS_DIR

PROVIDERS = ("openrouter", "gemini")


def compose_enhanced_prompt(original: str, answers: Sequence[str]) -> str:
    return f"{original}\n\nAdditional context:\n" + "\n".join(answers)


def basic_optimization(prompt: str) -> str:
    return (
        f'Enhanced version of: "{prompt}"\n\n'
        "This is a basic optimization of your prompt. For better results, "
        "consider providing additional context when requested."
    )


class OptimizePipeline:
    def __init__(
        self,
        mode: str,
        base_dir: Path,
        provider: str = "openrouter",
        scenario: str = "default",
        credentials: Optional[CredentialStore] = None,
    ) -> None:
        if provider not in PROVIDERS:
            raise ValueError(f"Unsupported provider: {provider}")
        self.mode = mode
        self.base_dir = base_dir
        self.provider = provider
        self.scenario = scenario
        self.schemas_dir = SCHEMAS_DIR
        self.prompts_dir = PROMPTS_DIR
        self.credentials = credentials or CredentialStore(base_dir / ".env")
        self.vocabulary = self._load_vocabulary()
        self._llm: Optional[LLMAdapter] = None
        self._turn = 0

    def optimize(self, prompt: str) -> ClassificationResult:
        _, result = self._optimize(prompt, None)
        return result

    def optimize_with_answers(self, prompt: str, answers: Sequence[str]) -> ClassificationResult:
        _, result = self._optimize(prompt, answers)
        return result

    def optimize_or_fallback(self, prompt: str, run_dir: Optional[Path] = None) -> Optimized:
        """Optimize without further questions, degrading to a generic rewrite."""
        result = self.run(prompt, run_dir) if run_dir is not None else self.optimize(prompt)
        if isinstance(result, Optimized):
            return result
        print(f"[pipeline] no usable rewrite ({type(result).__name__}), using basic optimization")
        fallback = Optimized(text=basic_optimization(prompt))
        if run_dir is not None:
            write_optimized_prompt(run_dir / "artifacts" / "optimized_prompt.md", fallback.text)
        return fallback

    def run(
        self,
        prompt: str,
        run_dir: Path,
        answers: Optional[Sequence[str]] = None,
        questions: Optional[Sequence[str]] = None,
    ) -> ClassificationResult:
        raw_dir = run_dir / "raw"
        artifacts_dir = run_dir / "artifacts"
        raw_dir.mkdir(parents=True, exist_ok=True)
        artifacts_dir.mkdir(parents=True, exist_ok=True)

        completion, result = self._optimize(prompt, answers)
        self._turn += 1
        turn = self._turn

        write_text(raw_dir / f"completion_{turn}.txt", completion)
        if answers and questions:
            write_answers(artifacts_dir / f"answers_{turn}.md", questions, answers)

        payload = result.to_payload()
        validate(instance=payload, schema=self._load_schema("classification_result.schema.json"))
        write_json(artifacts_dir / f"result_{turn}.json", payload)

        if isinstance(result, Optimized):
            write_optimized_prompt(artifacts_dir / "optimized_prompt.md", result.text)
        elif isinstance(result, NeedsMoreInfo):
            write_questions(artifacts_dir / f"questions_{turn}.md", result.questions)
        print(f"[pipeline] turn={turn} result={payload['kind']}")
        return result

    def system_prompt(self) -> str:
        return build_system_prompt(self.vocabulary, self.prompts_dir / "prompt_rewrite_system.md")

    def _optimize(
        self, prompt: str, answers: Optional[Sequence[str]]
    ) -> Tuple[str, ClassificationResult]:
        if not prompt or not prompt.strip():
            raise ValueError("Prompt must not be empty.")
        user_prompt = compose_enhanced_prompt(prompt, answers) if answers else prompt
        response = self._adapter().complete(self.system_prompt(), user_prompt)
        completion = response.raw_text
        return completion, classify(completion, self.vocabulary)

    def _adapter(self) -> LLMAdapter:
        if self._llm is None:
            if self.mode == "mock":
                self._llm = MockAdapter(self.scenario)
            elif self.provider == "gemini":
                self._llm = GeminiAdapter()
            else:
                self._llm = OpenRouterAdapter(self.credentials.get_key())
        return self._llm

    def _load_vocabulary(self) -> HeadingVocabulary:
        path = CONFIGS_DIR / "heading_vocabulary.yaml"
        if not path.exists():
            return DEFAULT_VOCABULARY
        return load_vocabulary(path, self.schemas_dir / "heading_vocabulary.schema.json")

    def _load_schema(self, name: str) -> Dict:
        return json.loads(read_text(self.schemas_dir / name))
