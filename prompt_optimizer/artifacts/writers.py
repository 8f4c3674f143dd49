from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from prompt_optimizer.utils.io import write_text


def write_optimized_prompt(path: Path, text: str) -> None:
    write_text(path, text.rstrip("\n") + "\n")


def write_questions(path: Path, questions: Iterable[str]) -> None:
    lines: List[str] = ["# Additional Information Needed", ""]
    lines.extend(f"{index}. {question}" for index, question in enumerate(questions, start=1))
    write_text(path, "\n".join(lines) + "\n")


def write_answers(path: Path, questions: Iterable[str], answers: Iterable[str]) -> None:
    lines: List[str] = ["# Answers", ""]
    for question, answer in zip(questions, answers):
        lines.extend([f"## {question}", "", answer, ""])
    write_text(path, "\n".join(lines).strip() + "\n")
