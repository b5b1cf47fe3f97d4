"""Layer 1: regex patterns for structured sensitive data.

These run before the semantic extractor and are near-zero cost.  They
catch the deterministic stuff: emails, IPs, URLs, cards, phones, dates
and times.  Overlaps between patterns are left in; the redaction step
sorts them out.
"""

from __future__ import annotations
import re
from typing import Callable

from .types import Entity, EntityType

# Each pattern: (entity_type, compiled_regex, length filter)
# ASCII-only classes: \d, \w and \b must not match other scripts
_PATTERNS: list[tuple[EntityType, re.Pattern, Callable[[str], bool] | None]] = [
    # Email
    (EntityType.EMAIL_ADDRESS, re.compile(
        r"[\w.%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}",
        re.ASCII,
    ), None),

    # IPv4: octets are not range-checked, 999.999.999.999 matches
    (EntityType.IP_ADDRESS, re.compile(
        r"\b(?:\d{1,3}\.){3}\d{1,3}\b",
        re.ASCII,
    ), None),

    # URL with optional www. and path/query tail
    (EntityType.URL, re.compile(
        r"https?://(?:www\.)?[-a-zA-Z0-9@:%._+~#=]{1,256}\.[a-zA-Z0-9()]{1,6}\b"
        r"(?:[-a-zA-Z0-9()@:%_+.~#?&/=]*)",
        re.ASCII,
    ), None),

    # Credit card: 16 digits, optional space/hyphen between groups of 4
    (EntityType.CREDIT_CARD, re.compile(
        r"\b(?:\d{4}[ \-]?){3}\d{4}\b",
        re.ASCII,
    ), None),

    # Phone: (123) 456-7890, 123-456-7890, +1 123 456 7890
    (EntityType.PHONE_NUMBER, re.compile(
        r"(?:\+?\d{1,3}[ \-]?)?\(?\d{3}\)?[ \-]?\d{3}[ \-]?\d{4}",
        re.ASCII,
    ), lambda s: len(s) >= 10),

    # Date: 03/01/2024, 2024-01-03, 12-12-24
    (EntityType.DATE_TIME, re.compile(
        r"\b\d{1,4}[/\-]\d{1,2}[/\-]\d{2,4}\b",
        re.ASCII,
    ), lambda s: len(s) <= 10),

    # Time: 14:30, 06:12 PM, 9:00am
    (EntityType.DATE_TIME, re.compile(
        r"\b\d{1,2}:\d{2}(?::\d{2})?(?:\s?[APap][Mm])?\b",
        re.ASCII,
    ), None),
]


def detect_pattern_entities(text: str) -> list[Entity]:
    """Run all regex patterns against text, in pattern order.

    Returned entities have no offsets yet.
    """
    entities: list[Entity] = []
    for entity_type, pattern, accept in _PATTERNS:
        for m in pattern.finditer(text):
            if accept is not None and not accept(m.group()):
                continue
            entities.append(Entity(text=m.group(), category=entity_type, source="pattern"))
    return entities
