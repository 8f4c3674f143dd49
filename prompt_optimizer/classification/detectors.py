from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional

from prompt_optimizer.classification.vocabulary import DEFAULT_VOCABULARY, HeadingVocabulary


@dataclass(frozen=True)
class ClassificationSignals:
    has_proper_sections: bool
    explicitly_requests_more_info: bool
    missing_context_block: Optional[str]


def has_proper_sections(completion: str, vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY) -> bool:
    """True when the completion carries a Goal marker plus a format or context heading.

    Markers are matched literally, so ``**goal**`` does not count.
    """
    has_goal = any(marker in completion for marker in vocabulary.goal_markers)
    has_body = any(marker in completion for marker in vocabulary.format_markers)
    return has_goal and has_body


def explicitly_requests_more_info(
    completion: str, vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY
) -> bool:
    lowered = completion.lower()
    if any(phrase.lower() in lowered for phrase in vocabulary.request_phrases):
        return True
    # Words of a group may appear anywhere, in any order.
    return any(
        all(part.lower() in lowered for part in group)
        for group in vocabulary.request_phrase_groups
    )


def _missing_context_pattern(vocabulary: HeadingVocabulary) -> re.Pattern:
    headings = "|".join(re.escape(heading) for heading in vocabulary.missing_context_headings)
    # "**Missing Context**", "**Missing Context:**" and "**Missing Context**:" all count.
    # The span ends at the next bold marker opening a line, so bold words
    # inside a bullet stay part of the block.
    return re.compile(
        rf"\*\*\s*(?:{headings})\s*:?\s*\*\*:?(.*?)(?=^[ \t]*\*\*|\Z)",
        flags=re.IGNORECASE | re.DOTALL | re.MULTILINE,
    )


def locate_missing_context(
    completion: str, vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY
) -> Optional[str]:
    """Return the text after the first missing-context heading, up to the next bold line."""
    match = _missing_context_pattern(vocabulary).search(completion)
    if match is None:
        return None
    return match.group(1)


def collect_signals(
    completion: str, vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY
) -> ClassificationSignals:
    return ClassificationSignals(
        has_proper_sections=has_proper_sections(completion, vocabulary),
        explicitly_requests_more_info=explicitly_requests_more_info(completion, vocabulary),
        missing_context_block=locate_missing_context(completion, vocabulary),
    )
