"""Layer 2: Presidio NER-based extraction for unstructured entities.

Catches names and locations that regex can't reliably detect.  Uses
spaCy under the hood; ``high_accuracy`` swaps the small model for the
large one.  This is the default ``Extractor`` used by the pipeline.
"""

from __future__ import annotations
import asyncio
import logging
from typing import TYPE_CHECKING

from .types import Entity, EntityType

if TYPE_CHECKING:
    from presidio_analyzer import AnalyzerEngine

logger = logging.getLogger(__name__)

# Lazy cache, don't load spaCy until first use
_engines: dict[tuple[str, str], AnalyzerEngine] = {}


def _model_name(language: str, high_accuracy: bool) -> str:
    return f"{language}_core_web_{'lg' if high_accuracy else 'sm'}"


def _get_engine(language: str = "en", high_accuracy: bool = False) -> AnalyzerEngine:
    """Lazy-init a Presidio analyzer engine per (language, model)."""
    model = _model_name(language, high_accuracy)
    key = (language, model)
    if key not in _engines:
        from presidio_analyzer import AnalyzerEngine
        from presidio_analyzer.nlp_engine import NlpEngineProvider

        logger.debug("Loading Presidio analyzer with spaCy model %s", model)
        provider = NlpEngineProvider(nlp_configuration={
            "nlp_engine_name": "spacy",
            "models": [{"lang_code": language, "model_name": model}],
        })
        nlp_engine = provider.create_engine()
        _engines[key] = AnalyzerEngine(nlp_engine=nlp_engine, supported_languages=[language])
    return _engines[key]


# Entity types requested from Presidio.  DATE_TIME is left to the regex layer.
DEFAULT_ENTITIES = [
    "PERSON",
    "LOCATION",
    "EMAIL_ADDRESS",
    "IP_ADDRESS",
    "PHONE_NUMBER",
    "CREDIT_CARD",
    "URL",
]


def scan_presidio(
    text: str,
    *,
    language: str = "en",
    entities: list[str] | None = None,
    score_threshold: float = 0.35,
    high_accuracy: bool = False,
) -> list[Entity]:
    """Run Presidio analysis on text.

    Args:
        text: Input text to scan.
        language: ISO language code.
        entities: Entity types to detect (None = DEFAULT_ENTITIES).
        score_threshold: Minimum confidence score.
        high_accuracy: Use the large spaCy model.

    Returns unresolved entities (no offsets) in the order Presidio found them.
    """
    if not text or not text.strip():
        return []

    engine = _get_engine(language, high_accuracy)
    results = engine.analyze(
        text=text,
        language=language,
        entities=entities or DEFAULT_ENTITIES,
        score_threshold=score_threshold,
    )

    found: list[Entity] = []
    for r in sorted(results, key=lambda r: r.start):
        try:
            category = EntityType(r.entity_type)
        except ValueError:
            logger.debug("Dropping unsupported Presidio entity type %s", r.entity_type)
            continue
        found.append(Entity(
            text=text[r.start:r.end],
            category=category,
            source="presidio",
        ))
    return found


class PresidioExtractor:
    """Async ``Extractor`` backed by ``scan_presidio`` on a worker thread."""

    __slots__ = ("_language", "_entities", "_score_threshold")

    def __init__(
        self,
        *,
        language: str = "en",
        entities: list[str] | None = None,
        score_threshold: float = 0.35,
    ) -> None:
        self._language = language
        self._entities = entities
        self._score_threshold = score_threshold

    async def extract(self, text: str, high_accuracy: bool = False) -> list[Entity]:
        return await asyncio.to_thread(
            scan_presidio,
            text,
            language=self._language,
            entities=self._entities,
            score_threshold=self._score_threshold,
            high_accuracy=high_accuracy,
        )
