"""redactai: pattern + NER redaction with edit-distance scoring."""

from .redactor import (
    Redactor,
    RedactorConfig,
    TextTooLongError,
    apply_redaction,
    merge_entities,
)
from .patterns import detect_pattern_entities
from .scoring import compute_stats, levenshtein_distance, similarity
from .diff import align_tokens, tokenize
from .config import create_redactor, load_config, load_from_yaml
from .types import (
    Alignment,
    DiffChunk,
    DiffKind,
    Entity,
    EntityType,
    Extractor,
    ProcessingStats,
    RedactedDocument,
    RedactionMode,
    RedactionResult,
)

__all__ = [
    "Redactor", "RedactorConfig", "TextTooLongError",
    "apply_redaction", "merge_entities", "detect_pattern_entities",
    "compute_stats", "levenshtein_distance", "similarity",
    "align_tokens", "tokenize",
    "create_redactor", "load_config", "load_from_yaml",
    "Alignment", "DiffChunk", "DiffKind", "Entity", "EntityType", "Extractor",
    "ProcessingStats", "RedactedDocument", "RedactionMode", "RedactionResult",
]
__version__ = "0.1.0"
