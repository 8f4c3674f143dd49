from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Tuple

from prompt_optimizer.classification.detectors import ClassificationSignals, collect_signals
from prompt_optimizer.classification.extractor import extract_clarifications
from prompt_optimizer.classification.results import (
    ClassificationResult,
    EmptyResponse,
    NeedsMoreInfo,
    Optimized,
)
from prompt_optimizer.classification.vocabulary import DEFAULT_VOCABULARY, HeadingVocabulary


@dataclass(frozen=True)
class DecisionRule:
    name: str
    applies: Callable[[ClassificationSignals], bool]
    decide: Callable[[str, ClassificationSignals, HeadingVocabulary], Optional[ClassificationResult]]


def _is_deliverable(signals: ClassificationSignals) -> bool:
    # A structured answer wins over a stray "missing context" note unless
    # the model is explicitly asking the user for input.
    return signals.has_proper_sections and not signals.explicitly_requests_more_info


def _asks_for_clarification(signals: ClassificationSignals) -> bool:
    return signals.explicitly_requests_more_info or signals.missing_context_block is not None


def _keep_completion(
    completion: str, signals: ClassificationSignals, vocabulary: HeadingVocabulary
) -> ClassificationResult:
    return Optimized(text=completion)


def _collect_questions(
    completion: str, signals: ClassificationSignals, vocabulary: HeadingVocabulary
) -> Optional[ClassificationResult]:
    questions = extract_clarifications(signals.missing_context_block, completion, vocabulary)
    if not questions:
        return None
    return NeedsMoreInfo(questions=tuple(questions))


# Evaluated top to bottom; the first rule that returns a result wins.
DECISION_RULES: Tuple[DecisionRule, ...] = (
    DecisionRule("deliverable", _is_deliverable, _keep_completion),
    DecisionRule("clarification", _asks_for_clarification, _collect_questions),
)


def is_empty_completion(completion: Optional[str]) -> bool:
    return completion is None or not completion.strip()


def classify(
    completion: Optional[str],
    vocabulary: HeadingVocabulary = DEFAULT_VOCABULARY,
    rules: Tuple[DecisionRule, ...] = DECISION_RULES,
) -> ClassificationResult:
    """Decide whether a model completion is a finished prompt or a request for input.

    Blank completions short-circuit to ``EmptyResponse`` before any detector
    runs. Otherwise the signals are computed once and handed to each rule in
    order. If no rule produces a result the completion is returned unchanged
    as ``Optimized``.
    """
    if is_empty_completion(completion):
        return EmptyResponse()

    signals = collect_signals(completion, vocabulary)
    for rule in rules:
        if not rule.applies(signals):
            continue
        result = rule.decide(completion, signals, vocabulary)
        if result is not None:
            return result
    return Optimized(text=completion)
