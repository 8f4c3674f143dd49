from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple, Union


@dataclass(frozen=True)
class Optimized:
    text: str

    def to_payload(self) -> Dict[str, object]:
        return {"kind": "optimized", "text": self.text}


@dataclass(frozen=True)
class NeedsMoreInfo:
    questions: Tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.questions:
            raise ValueError("NeedsMoreInfo requires at least one question.")
        object.__setattr__(self, "questions", tuple(self.questions))

    def to_payload(self) -> Dict[str, object]:
        return {"kind": "needs_more_info", "questions": list(self.questions)}


@dataclass(frozen=True)
class EmptyResponse:
    def to_payload(self) -> Dict[str, object]:
        return {"kind": "empty_response"}


ClassificationResult = Union[Optimized, NeedsMoreInfo, EmptyResponse]
