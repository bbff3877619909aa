"""Core Ferret data models."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Tuple

ScoreKey = Tuple[int, str]


def _freeze(mapping: Mapping) -> Mapping:
    if isinstance(mapping, MappingProxyType):
        return mapping
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True, slots=True)
class Document:
    """An indexed file and the occurrence count of each of its tokens."""

    id: int
    name: str
    path: Path
    tokens: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "tokens", _freeze(self.tokens))

    @property
    def total_tokens(self) -> int:
        return sum(self.tokens.values())


@dataclass(frozen=True, slots=True)
class Index:
    """Read-only result of an indexing run.

    ``scores`` maps ``(document_id, token)`` to the TF-IDF score of the token in
    that document, ``vocabulary`` maps every token to its corpus-wide IDF.
    """

    documents: Tuple[Document, ...] = ()
    scores: Mapping[ScoreKey, float] = field(default_factory=dict)
    vocabulary: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "documents", tuple(self.documents))
        object.__setattr__(self, "scores", _freeze(self.scores))
        object.__setattr__(self, "vocabulary", _freeze(self.vocabulary))

    @classmethod
    def empty(cls) -> "Index":
        return cls()

    @property
    def document_count(self) -> int:
        return len(self.documents)
