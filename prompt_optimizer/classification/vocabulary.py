from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import yaml
from jsonschema import validate

from prompt_optimizer.utils.io import read_text


@dataclass(frozen=True)
class DeliverableSection:
    name: str
    guidance: Tuple[str, ...] = ()


@dataclass(frozen=True)
class HeadingVocabulary:
    """Marker strings shared by the rewrite prompt and the completion detectors.

    The system prompt asks the model to use exactly these headings, and the
    detectors look for exactly these headings, so both read from one place.
    """

    goal_heading: str = "Goal"
    format_headings: Tuple[str, ...] = ("Return Format", "Context Dump")
    deliverable_sections: Tuple[DeliverableSection, ...] = (
        DeliverableSection(
            "Goal",
            ("Clearly state what the user wants to achieve", "Set the primary objective"),
        ),
        DeliverableSection(
            "Return Format",
            (
                "Specify exactly how the information should be presented",
                "Establish the structure of the response",
            ),
        ),
        DeliverableSection(
            "Warnings",
            ("Highlight potential pitfalls to avoid", "Set boundaries for the response"),
        ),
        DeliverableSection(
            "Context Dump",
            (
                "Provide all relevant background information from the original prompt",
                "Give the AI the context it needs to generate accurate responses",
            ),
        ),
    )
    missing_context_headings: Tuple[str, ...] = (
        "Missing Context",
        "Additional Information Needed",
    )
    request_phrases: Tuple[str, ...] = (
        "we need more information",
        "please answer the following questions",
    )
    request_phrase_groups: Tuple[Tuple[str, ...], ...] = (("please provide", "following"),)
    default_question: str = "Please provide more context about your request"
    bullet_glyphs: str = "-*•◦▪"

    @property
    def goal_markers(self) -> Tuple[str, ...]:
        return (f"**{self.goal_heading}**", f"## {self.goal_heading}")

    @property
    def format_markers(self) -> Tuple[str, ...]:
        return tuple(f"**{heading}**" for heading in self.format_headings)


DEFAULT_VOCABULARY = HeadingVocabulary()


def _sections_from_config(raw: List[dict]) -> Tuple[DeliverableSection, ...]:
    return tuple(
        DeliverableSection(item["name"], tuple(item.get("guidance", [])))
        for item in raw
    )


def load_vocabulary(path: Path, schema_path: Optional[Path] = None) -> HeadingVocabulary:
    data = yaml.safe_load(read_text(path)) or {}
    if schema_path is not None:
        validate(instance=data, schema=json.loads(read_text(schema_path)))

    defaults = DEFAULT_VOCABULARY
    sections = data.get("deliverable_sections")
    groups = data.get("request_phrase_groups")
    return HeadingVocabulary(
        goal_heading=data.get("goal_heading", defaults.goal_heading),
        format_headings=tuple(data.get("format_headings", defaults.format_headings)),
        deliverable_sections=(
            _sections_from_config(sections) if sections is not None else defaults.deliverable_sections
        ),
        missing_context_headings=tuple(
            data.get("missing_context_headings", defaults.missing_context_headings)
        ),
        request_phrases=tuple(data.get("request_phrases", defaults.request_phrases)),
        request_phrase_groups=(
            tuple(tuple(group) for group in groups)
            if groups is not None
            else defaults.request_phrase_groups
        ),
        default_question=data.get("default_question", defaults.default_question),
        bullet_glyphs=data.get("bullet_glyphs", defaults.bullet_glyphs),
    )
