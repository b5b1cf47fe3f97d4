"""Redactor, the main API.  Layered: regex first, then a semantic extractor.

Usage:
    from redactai import Redactor, RedactorConfig, RedactionMode

    redactor = Redactor(RedactorConfig(use_presidio=False))

    doc = redactor.redact("Mail john@acme.com at 14:30")
    print(doc.text)                   # "Mail [EMAIL_ADDRESS] at [DATE_TIME]"
    print(doc.stats.similarity_score)

    # Fast path only, e.g. to show something before the extractor returns
    interim = redactor.redact_patterns(text)

The building blocks (``merge_entities``, ``apply_redaction``) are pure
functions and can be composed without the ``Redactor`` class.
"""

from __future__ import annotations
import asyncio
import logging
import re
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Sequence

from .diff import align_tokens
from .patterns import detect_pattern_entities
from .scoring import compute_stats
from .types import (
    Alignment,
    Entity,
    Extractor,
    ProcessingStats,
    RedactedDocument,
    RedactionMode,
    RedactionResult,
)

logger = logging.getLogger(__name__)

_SPACE_RUN = re.compile(r" +")


class TextTooLongError(ValueError):
    """Input exceeds ``RedactorConfig.max_text_length``."""


@dataclass
class RedactorConfig:
    """Configuration for the Redactor."""
    mode: RedactionMode = RedactionMode.MASK
    use_presidio: bool = True         # enable Layer 2 (NER)
    high_accuracy: bool = False       # large spaCy model, slower
    language: str = "en"
    score_threshold: float = 0.35     # minimum confidence for Presidio
    presidio_entities: list[str] | None = None  # None = defaults
    custom_scanners: list[Callable[[str], list[Entity]]] = field(default_factory=list)
    # Entity categories to always skip (e.g. don't redact dates)
    skip_types: set[str] = field(default_factory=set)
    # Allow-list: values that should NEVER be redacted
    allow_list: set[str] = field(default_factory=set)
    extractor_timeout: float | None = None   # seconds
    # Scoring and diffing are quadratic; None disables the guard
    max_text_length: int | None = 20_000


# ----------------------------------------------------------------------
# Pure building blocks
# ----------------------------------------------------------------------

def merge_entities(primary: Sequence[Entity], secondary: Sequence[Entity]) -> list[Entity]:
    """All of ``primary``, then ``secondary`` entities whose text isn't in it.

    Dedup is on the literal text only (case-sensitive); category and
    position are ignored.
    """
    merged = list(primary)
    seen = {e.text for e in primary}
    merged.extend(e for e in secondary if e.text not in seen)
    return merged


def apply_redaction(
    text: str,
    entities: Sequence[Entity],
    mode: RedactionMode = RedactionMode.MASK,
) -> RedactionResult:
    """Replace or remove every occurrence of each entity's text.

    Offsets are resolved against the original ``text``; substitution runs
    on the progressively redacted buffer, longest entity first, so a short
    entity can't match inside an already replaced longer one.
    """
    current = text
    resolved: list[Entity] = []

    # sorted() is stable, equal lengths keep their input order
    for entity in sorted(entities, key=lambda e: len(e.text), reverse=True):
        if not entity.text:
            continue

        length = len(entity.text)
        idx = text.find(entity.text)
        while idx != -1:
            end = idx + length
            if not any(idx < r.end and end > r.start for r in resolved):
                resolved.append(replace(entity, start=idx, end=end))
            idx = text.find(entity.text, idx + 1)

        placeholder = mode.placeholder(entity.category)
        current = re.sub(re.escape(entity.text), lambda _m: placeholder, current)

    current = _SPACE_RUN.sub(" ", current).strip()
    resolved.sort(key=lambda e: e.start or 0)
    return RedactionResult(text=current, entities=resolved)


# ----------------------------------------------------------------------
# Pipeline
# ----------------------------------------------------------------------

class Redactor:
    """Layered redactor.

    Layer 1: Fast regex patterns (emails, phones, IPs, dates, ...)
    Layer 2: Semantic extractor (Presidio by default; names, locations)
    Layer 3: Custom scanners (user-provided callables)
    """

    def __init__(
        self,
        config: RedactorConfig | None = None,
        *,
        extractor: Extractor | None = None,
    ) -> None:
        self.config = config or RedactorConfig()
        if extractor is None and self.config.use_presidio:
            from .presidio_layer import PresidioExtractor
            extractor = PresidioExtractor(
                language=self.config.language,
                entities=self.config.presidio_entities,
                score_threshold=self.config.score_threshold,
            )
        self.extractor = extractor

    def detect(self, text: str) -> list[Entity]:
        """Layers 1 and 3: regex patterns then custom scanners, filtered."""
        found = detect_pattern_entities(text)
        for scanner in self.config.custom_scanners:
            found.extend(scanner(text))
        return self._filter(found)

    def redact_patterns(
        self,
        text: str,
        *,
        expected: str | None = None,
        mode: RedactionMode | None = None,
    ) -> RedactedDocument:
        """Fast path: redact with locally detected entities only."""
        self._check_length(text)
        return self._finish(text, self.detect(text), expected, mode)

    async def aredact(
        self,
        text: str,
        *,
        expected: str | None = None,
        mode: RedactionMode | None = None,
    ) -> RedactedDocument:
        """Full pipeline: detect, extract, merge, redact, score."""
        self._check_length(text)
        local = self.detect(text)
        extracted = self._filter(await self._extract(text))
        merged = merge_entities(extracted, local)
        logger.debug(
            "Merged %d extracted + %d local entities into %d",
            len(extracted), len(local), len(merged),
        )
        return self._finish(text, merged, expected, mode)

    def redact(
        self,
        text: str,
        *,
        expected: str | None = None,
        mode: RedactionMode | None = None,
    ) -> RedactedDocument:
        """Synchronous wrapper around ``aredact``.

        Unlike ``asyncio.run``, closing the loop does not join the default
        executor, so an extractor thread abandoned by ``extractor_timeout``
        can't hold the caller.
        """
        loop = asyncio.new_event_loop()
        try:
            return loop.run_until_complete(
                self.aredact(text, expected=expected, mode=mode)
            )
        finally:
            loop.run_until_complete(loop.shutdown_asyncgens())
            loop.close()   # shuts the default executor down with wait=False

    def reapply(
        self,
        text: str,
        entities: Iterable[Entity],
        *,
        expected: str | None = None,
        mode: RedactionMode | None = None,
    ) -> RedactedDocument:
        """Redact again with an already known entity set (e.g. after a mode switch)."""
        self._check_length(text)
        return self._finish(text, list(entities), expected, mode)

    def evaluate(
        self,
        document: RedactedDocument,
        expected: str,
    ) -> tuple[ProcessingStats, Alignment]:
        """Score a redacted document against a reference output and diff them."""
        self._check_length(expected)
        stats = compute_stats(
            document.original, document.text, len(document.entities), expected,
        )
        return stats, align_tokens(document.text, expected)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    async def _extract(self, text: str) -> list[Entity]:
        """Call the extractor; any failure counts as zero entities."""
        if self.extractor is None:
            return []
        try:
            call = self.extractor.extract(text, self.config.high_accuracy)
            if self.config.extractor_timeout is not None:
                return list(await asyncio.wait_for(call, self.config.extractor_timeout))
            return list(await call)
        except asyncio.TimeoutError:
            logger.warning(
                "Extractor timed out after %ss, using pattern entities only",
                self.config.extractor_timeout,
            )
        except Exception:
            logger.warning("Extractor failed, using pattern entities only", exc_info=True)
        return []

    def _filter(self, entities: Iterable[Entity]) -> list[Entity]:
        filtered: list[Entity] = []
        for e in entities:
            if e.category.value in self.config.skip_types:
                continue
            if e.text in self.config.allow_list:
                continue
            filtered.append(e)
        return filtered

    def _finish(
        self,
        text: str,
        entities: list[Entity],
        expected: str | None,
        mode: RedactionMode | None,
    ) -> RedactedDocument:
        mode = mode or self.config.mode
        result = apply_redaction(text, entities, mode)
        stats = compute_stats(text, result.text, len(result.entities), expected)
        return RedactedDocument(
            original=text,
            text=result.text,
            entities=result.entities,
            stats=stats,
            mode=mode,
        )

    def _check_length(self, text: str) -> None:
        limit = self.config.max_text_length
        if limit is not None and len(text) > limit:
            raise TextTooLongError(
                f"text is {len(text)} characters, limit is {limit}"
            )
