from __future__ import annotations

import re
from typing import List, Optional

from prompt_optimizer.classification.vocabulary import DEFAULT_VOCABULARY, HeadingVocabulary

# "we need a bit more information: ...", "the prompt lacks context about ..."
_CLAUSE_PATTERN = re.compile(
    r"\b(?:need|missing|lacks|requires)\w*(?:\s+\w+)*?\s+(?:information|context|details)\b"
    r"[:\s]*(.*?)(?:\n\n|\n(?=\d\.)|\Z)",
    flags=re.IGNORECASE | re.DOTALL,
)


def _item_delimiter(vocabulary: HeadingVocabulary) -> re.Pattern:
    glyphs = re.escape(vocabulary.bullet_glyphs)
    return re.compile(rf"(?:^|\n)[ \t]*(?:[{glyphs}]|\d+\.)[ \t]*")


def split_items(block: str, vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY) -> List[str]:
    fragments = _item_delimiter(vocabulary).split(block)
    return [fragment.strip() for fragment in fragments if fragment.strip()]


def extract_from_prose(completion: str, vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY) -> List[str]:
    match = _CLAUSE_PATTERN.search(completion)
    if match is None:
        return []
    return split_items(match.group(1), vocabulary)


def extract_clarifications(
    block: Optional[str],
    completion: str,
    vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY,
) -> List[str]:
    """Turn a missing-context block, or failing that the whole completion, into questions.

    Items keep their source order. The result always holds at least one item:
    when nothing can be extracted the vocabulary's default question is used.
    """
    items: List[str] = []
    if block is not None:
        items = split_items(block, vocabulary)
    if not items:
        items = extract_from_prose(completion, vocabulary)
    if not items:
        items = [vocabulary.default_question]
    return items
