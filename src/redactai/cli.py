"""CLI interface for redactai.

Usage:
    # Pattern entities only (stdin: text, stdout: JSON list)
    echo 'Mail john@x.com' | python -m redactai.cli detect

    # Full pipeline, scored against a reference output
    python -m redactai.cli redact --expected expected.txt < input.txt

    # Word-level diff of a redacted text against a reference
    python -m redactai.cli compare --expected expected.txt < redacted.txt

Logging goes to stderr; JSON goes to stdout.
"""

from __future__ import annotations
import argparse
import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path
from typing import Any

from .config import load_config, load_from_yaml, parse_mode, to_redactor_config
from .diff import align_tokens
from .patterns import detect_pattern_entities
from .redactor import Redactor
from .scoring import levenshtein_distance, similarity
from .types import Alignment, Entity

logger = logging.getLogger(__name__)


def _entity_dict(e: Entity) -> dict[str, Any]:
    out: dict[str, Any] = {"type": e.category.value, "text": e.text, "source": e.source}
    if e.resolved:
        out["start"] = e.start
        out["end"] = e.end
    return out


def _alignment_dict(alignment: Alignment) -> dict[str, Any]:
    return {
        "actual": [{"value": c.value, "type": c.kind.value} for c in alignment.actual_chunks],
        "expected": [{"value": c.value, "type": c.kind.value} for c in alignment.expected_chunks],
    }


def _read_text(parser: argparse.ArgumentParser, path: str | None) -> str | None:
    if not path:
        return None
    try:
        return Path(path).expanduser().read_text(encoding="utf-8")
    except OSError as e:
        parser.error(f"cannot read {path}: {e.strerror}")


def _build_redactor(args: argparse.Namespace) -> Redactor:
    cfg = load_from_yaml(args.config) if args.config else load_config({})
    if args.no_presidio:
        cfg["use_presidio"] = False
    if args.high_accuracy:
        cfg["high_accuracy"] = True
    if args.language:
        cfg["language"] = args.language
    if args.threshold is not None:
        cfg["score_threshold"] = args.threshold
    if args.skip_types:
        cfg["skip_types"] = set(args.skip_types.split(","))
    if args.allow_list:
        cfg["allow_list"] = set(args.allow_list.split(","))
    if getattr(args, "mode", None):
        cfg["mode"] = parse_mode(args.mode)
    return Redactor(to_redactor_config(cfg))


def _dump(data: Any) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_detect(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """List pattern entities found in stdin text."""
    text = sys.stdin.read()
    _dump([_entity_dict(e) for e in detect_pattern_entities(text)])


def cmd_redact(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Redact stdin text and report stats (and a diff when --expected is given)."""
    expected = _read_text(parser, args.expected)
    redactor = _build_redactor(args)
    text = sys.stdin.read()

    if args.patterns_only:
        doc = redactor.redact_patterns(text, expected=expected)
    else:
        doc = redactor.redact(text, expected=expected)
    logger.info("Redacted %d entities (%s)", len(doc.entities), doc.mode.value)

    output: dict[str, Any] = {
        "text": doc.text,
        "mode": doc.mode.value,
        "entities": [_entity_dict(e) for e in doc.entities],
        "stats": asdict(doc.stats),
    }
    if expected is not None and expected.strip():
        output["diff"] = _alignment_dict(align_tokens(doc.text, expected))
    _dump(output)


def cmd_compare(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Score and diff stdin text against --expected."""
    expected = _read_text(parser, args.expected) or ""
    actual = sys.stdin.read()
    distance = levenshtein_distance(expected, actual)
    _dump({
        "edit_distance": distance,
        "accuracy": similarity(expected, actual, distance),
        **_alignment_dict(align_tokens(actual, expected)),
    })


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="redactai",
        description="Redact sensitive entities and score the result",
    )
    parser.add_argument("--config", default="", help="YAML config file")
    parser.add_argument("--no-presidio", action="store_true", help="Regex-only mode")
    parser.add_argument("--high-accuracy", action="store_true", help="Large NER model (slower)")
    parser.add_argument("--language", default="", help="Language code")
    parser.add_argument("--threshold", type=float, default=None, help="Score threshold")
    parser.add_argument("--skip-types", default="", help="Comma-separated entity types to skip")
    parser.add_argument("--allow-list", default="", help="Comma-separated values to never redact")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("detect", help="Pattern entities in stdin text")

    p_redact = sub.add_parser("redact", help="Redact stdin text")
    p_redact.add_argument("--mode", choices=["MASK", "REMOVE"], type=str.upper, default=None)
    p_redact.add_argument("--expected", default="", help="Reference output file")
    p_redact.add_argument("--patterns-only", action="store_true", help="Skip the extractor")

    p_compare = sub.add_parser("compare", help="Diff stdin text against a reference")
    p_compare.add_argument("--expected", required=True, help="Reference output file")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "detect": cmd_detect,
        "redact": cmd_redact,
        "compare": cmd_compare,
    }
    cmds[args.command](args, parser)


if __name__ == "__main__":
    main()
