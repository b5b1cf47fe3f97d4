"""YAML/dict config loader for redactai.

Supports loading from a YAML file or a plain dict (for embedding in a
larger application config).

Example YAML:

    redactai:
      mode: MASK                 # or REMOVE
      use_presidio: true
      high_accuracy: false
      language: en
      score_threshold: 0.35
      extractor_timeout: 30
      max_text_length: 20000
      entities:
        - PERSON
        - LOCATION
      skip_types:
        - DATE_TIME
      allow_list:
        - support@example.com
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

import yaml

from .redactor import Redactor, RedactorConfig
from .types import Extractor, RedactionMode


def parse_mode(value: str | RedactionMode) -> RedactionMode:
    """Accept ``"mask"``/``"REMOVE"``/enum members."""
    if isinstance(value, RedactionMode):
        return value
    try:
        return RedactionMode(str(value).upper())
    except ValueError:
        raise ValueError(
            f"unknown redaction mode {value!r}, expected one of "
            f"{', '.join(m.value for m in RedactionMode)}"
        ) from None


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "redactai" key or flat
    if "redactai" in data:
        data = data["redactai"] or {}

    return {
        "mode": parse_mode(data.get("mode", RedactionMode.MASK)),
        "use_presidio": data.get("use_presidio", True),
        "high_accuracy": data.get("high_accuracy", False),
        "language": data.get("language", "en"),
        "score_threshold": data.get("score_threshold", 0.35),
        "entities": data.get("entities"),
        "skip_types": set(data.get("skip_types") or []),
        "allow_list": set(data.get("allow_list") or []),
        "extractor_timeout": data.get("extractor_timeout"),
        "max_text_length": data.get("max_text_length", 20_000),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(Path(path).expanduser(), encoding="utf-8") as f:
        return load_config(yaml.safe_load(f))


def to_redactor_config(cfg: dict[str, Any]) -> RedactorConfig:
    return RedactorConfig(
        mode=cfg["mode"],
        use_presidio=cfg["use_presidio"],
        high_accuracy=cfg["high_accuracy"],
        language=cfg["language"],
        score_threshold=cfg["score_threshold"],
        presidio_entities=cfg.get("entities"),
        skip_types=cfg["skip_types"],
        allow_list=cfg["allow_list"],
        extractor_timeout=cfg["extractor_timeout"],
        max_text_length=cfg["max_text_length"],
    )


def create_redactor(
    config: dict[str, Any],
    *,
    extractor: Extractor | None = None,
) -> Redactor:
    """Create a fully configured Redactor from a raw or normalized config dict."""
    cfg = load_config(config)
    return Redactor(to_redactor_config(cfg), extractor=extractor)
