from __future__ import annotations

import argparse
import os
import sys
from getpass import getpass
from pathlib import Path
from typing import List, Optional, Sequence

from dotenv import load_dotenv

from prompt_optimizer.adapters.mock_adapter import SCENARIOS
from prompt_optimizer.classification.results import ClassificationResult, EmptyResponse, NeedsMoreInfo
from prompt_optimizer.credentials import CredentialStore
from prompt_optimizer.errors import MissingApiKeyError, ProviderError
from prompt_optimizer.pipeline_optimize import PROVIDERS, OptimizePipeline
from prompt_optimizer.utils.io import read_text, write_text
from prompt_optimizer.utils.time import utc_run_id

EMPTY_RESPONSE_MESSAGE = "Empty response from API. Please try again."


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Prompt Optimizer")
    parser.add_argument("--mode", choices=["mock", "live"], default="live")
    parser.add_argument("--provider", choices=PROVIDERS, default="openrouter")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--prompt", help="Prompt text to optimize")
    source.add_argument("--prompt-file", help="File holding the prompt to optimize")
    parser.add_argument("--scenario", choices=SCENARIOS, default="default", help="Mock completion scenario")
    parser.add_argument("--skip-questions", action="store_true", help="Never ask follow-up questions")
    parser.add_argument("--max-rounds", type=int, default=3)
    parser.add_argument("--runs-dir", help="Directory for run artifacts (default: ./runs)")
    parser.add_argument("--max-output-tokens", type=int, default=1000)
    parser.add_argument("--temperature", type=float, default=0.7)
    keys = parser.add_mutually_exclusive_group()
    keys.add_argument("--set-key", help="Save an OpenRouter API key")
    keys.add_argument("--clear-key", action="store_true", help="Remove the saved OpenRouter API key")
    return parser


def _read_prompt(args: argparse.Namespace) -> Optional[str]:
    if args.prompt is not None:
        return args.prompt
    if args.prompt_file:
        return read_text(Path(args.prompt_file))
    return None


def _ensure_key(credentials: CredentialStore) -> None:
    if credentials.has_key() or not sys.stdin.isatty():
        return
    key = getpass("OpenRouter API key: ")
    if key.strip():
        credentials.save_key(key)


def _ask(questions: Sequence[str]) -> Optional[List[str]]:
    print("\nAdditional Information Needed")
    print("To create the best optimized prompt, we need a few more details from you:")
    answers: List[str] = []
    for question in questions:
        answer = ""
        while not answer:
            try:
                answer = input(f"{question}\n> ").strip()
            except EOFError:
                return None
        answers.append(answer)
    return answers


def _interact(
    pipeline: OptimizePipeline, prompt: str, run_dir: Path, args: argparse.Namespace
) -> ClassificationResult:
    result = pipeline.run(prompt, run_dir)
    rounds = 0
    while isinstance(result, NeedsMoreInfo):
        rounds += 1
        answers = None
        if not args.skip_questions and rounds <= args.max_rounds:
            answers = _ask(result.questions)
        if answers is None:
            return pipeline.optimize_or_fallback(prompt, run_dir)
        result = pipeline.run(prompt, run_dir, answers=answers, questions=result.questions)
    return result


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    # .env and runs/ live in the directory the tool is run from.
    base_dir = Path.cwd()
    load_dotenv(base_dir / ".env")
    credentials = CredentialStore(base_dir / ".env")

    if args.set_key is not None:
        try:
            credentials.save_key(args.set_key)
        except ValueError as exc:
            parser.error(str(exc))
    if args.clear_key:
        credentials.clear_key()

    prompt = _read_prompt(args)
    if prompt is None:
        if args.set_key is not None or args.clear_key:
            return 0
        parser.error("one of --prompt or --prompt-file is required")
    if not prompt.strip():
        parser.error("the prompt must not be empty")

    os.environ["OPTIMIZER_MAX_OUTPUT_TOKENS"] = str(args.max_output_tokens)
    os.environ["OPTIMIZER_TEMPERATURE"] = str(args.temperature)

    if args.mode == "live" and args.provider == "openrouter":
        _ensure_key(credentials)

    runs_dir = Path(args.runs_dir) if args.runs_dir else base_dir / "runs"
    run_dir = runs_dir / utc_run_id()
    write_text(run_dir / "inputs" / "prompt.md", prompt)

    pipeline = OptimizePipeline(args.mode, base_dir, args.provider, args.scenario, credentials)
    try:
        result = _interact(pipeline, prompt, run_dir, args)
    except MissingApiKeyError as exc:
        print(str(exc))
        return 1
    except ProviderError as exc:
        print(f"Error connecting to API: {exc}")
        return 1

    if isinstance(result, EmptyResponse):
        print(EMPTY_RESPONSE_MESSAGE)
        return 1

    print("\nOptimized Prompt\n")
    print(result.text)
    print(f"\nArtifacts written to {run_dir}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
