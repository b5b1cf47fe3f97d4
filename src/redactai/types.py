"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol


class EntityType(str, Enum):
    """Categories of sensitive text.  The value doubles as the MASK tag."""
    PERSON = "PERSON"
    LOCATION = "LOCATION"
    EMAIL_ADDRESS = "EMAIL_ADDRESS"
    IP_ADDRESS = "IP_ADDRESS"
    PHONE_NUMBER = "PHONE_NUMBER"
    CREDIT_CARD = "CREDIT_CARD"
    DATE_TIME = "DATE_TIME"
    URL = "URL"


class RedactionMode(str, Enum):
    MASK = "MASK"        # replace with [CATEGORY]
    REMOVE = "REMOVE"    # delete outright

    def placeholder(self, category: EntityType) -> str:
        return f"[{category.value}]" if self is RedactionMode.MASK else ""


@dataclass(frozen=True, slots=True)
class Entity:
    """A detected span of sensitive text.

    ``start``/``end`` are half-open offsets into the original text and stay
    ``None`` until the redaction step resolves them.
    """
    text: str
    category: EntityType
    start: int | None = None
    end: int | None = None
    source: str = "pattern"    # "pattern" | "presidio" | "custom"

    @property
    def resolved(self) -> bool:
        return self.start is not None and self.end is not None


@dataclass(slots=True)
class RedactionResult:
    """Output of a single redaction pass."""
    text: str
    entities: list[Entity] = field(default_factory=list)   # resolved, by start


@dataclass(slots=True)
class ProcessingStats:
    original_length: int
    redacted_length: int
    edit_distance: int
    similarity_score: float                 # 0–100, original vs redacted
    entity_count: int
    accuracy_score: float | None = None     # 0–100, redacted vs expected


@dataclass(slots=True)
class RedactedDocument:
    """Redaction result plus the stats computed for it."""
    original: str
    text: str
    entities: list[Entity]
    stats: ProcessingStats
    mode: RedactionMode = RedactionMode.MASK


class DiffKind(str, Enum):
    MATCH = "match"
    MISMATCH_ACTUAL = "mismatch-actual"
    MISMATCH_EXPECTED = "mismatch-expected"


@dataclass(frozen=True, slots=True)
class DiffChunk:
    value: str
    kind: DiffKind


@dataclass(slots=True)
class Alignment:
    actual_chunks: list[DiffChunk] = field(default_factory=list)
    expected_chunks: list[DiffChunk] = field(default_factory=list)


class Extractor(Protocol):
    """Semantic entity source (NER model, hosted LLM, ...).

    Implementations may be slow and may fail; the pipeline treats any
    exception as "no additional entities".
    """

    async def extract(self, text: str, high_accuracy: bool = False) -> list[Entity]:
        ...
