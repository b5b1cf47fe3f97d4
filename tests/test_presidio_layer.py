"""Tests for the Presidio layer, using a fake analyzer engine."""

import asyncio
import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))
from types import SimpleNamespace

import pytest

from redactai import presidio_layer
from redactai.presidio_layer import DEFAULT_ENTITIES, PresidioExtractor, scan_presidio
from redactai.types import Entity, EntityType


class FakeEngine:
    def __init__(self, results):
        self.results = results
        self.calls = []

    def analyze(self, text, language, entities, score_threshold):
        self.calls.append((language, entities, score_threshold))
        return self.results


def _result(entity_type, start, end, score=0.85):
    return SimpleNamespace(entity_type=entity_type, start=start, end=end, score=score)


@pytest.fixture
def fake_engine(monkeypatch):
    text = "Alice lives in Paris, she is French"
    engine = FakeEngine([
        _result("LOCATION", 15, 20),
        _result("PERSON", 0, 5),
        _result("NRP", 29, 35),
    ])
    requested = []

    def get_engine(language="en", high_accuracy=False):
        requested.append((language, high_accuracy))
        return engine

    monkeypatch.setattr(presidio_layer, "_get_engine", get_engine)
    return SimpleNamespace(text=text, engine=engine, requested=requested)


def test_scan_maps_types_and_drops_unknown(fake_engine):
    found = scan_presidio(fake_engine.text)
    assert found == [
        Entity("Alice", EntityType.PERSON, source="presidio"),
        Entity("Paris", EntityType.LOCATION, source="presidio"),
    ]
    assert fake_engine.engine.calls == [("en", DEFAULT_ENTITIES, 0.35)]


def test_scan_blank_text_skips_engine(monkeypatch):
    def boom(*args, **kwargs):
        raise AssertionError("engine should not load")

    monkeypatch.setattr(presidio_layer, "_get_engine", boom)
    assert scan_presidio("   ") == []


def test_extractor_passes_options(fake_engine):
    extractor = PresidioExtractor(language="en", entities=["PERSON"], score_threshold=0.5)
    found = asyncio.run(extractor.extract(fake_engine.text, high_accuracy=True))
    assert [e.text for e in found] == ["Alice", "Paris"]
    assert fake_engine.requested == [("en", True)]
    assert fake_engine.engine.calls == [("en", ["PERSON"], 0.5)]


def test_model_name():
    assert presidio_layer._model_name("en", False) == "en_core_web_sm"
    assert presidio_layer._model_name("en", True) == "en_core_web_lg"
