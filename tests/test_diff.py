"""Tests for tokenization and LCS token alignment."""

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from redactai.diff import align_tokens, tokenize
from redactai.types import DiffChunk, DiffKind

M, MA, ME = DiffKind.MATCH, DiffKind.MISMATCH_ACTUAL, DiffKind.MISMATCH_EXPECTED


def test_tokenize_keeps_delimiters():
    assert tokenize("Hello, world!") == ["Hello", ",", " ", "world", "!"]
    assert tokenize("a\nb") == ["a", "\n", "b"]
    assert tokenize("") == []


def test_tokens_rejoin_to_input():
    text = "Call [PHONE_NUMBER] at 9:00am;  thanks.\nBye"
    assert "".join(tokenize(text)) == text


def test_identical_texts_only_match():
    text = "Contact [EMAIL_ADDRESS] or call [PHONE_NUMBER]."
    alignment = align_tokens(text, text)
    assert all(c.kind == M for c in alignment.actual_chunks)
    assert all(c.kind == M for c in alignment.expected_chunks)
    assert "".join(c.value for c in alignment.actual_chunks) == text
    assert [c.value for c in alignment.expected_chunks] == tokenize(text)


def test_middle_word_differs():
    alignment = align_tokens("the cat sat", "the dog sat")
    assert alignment.actual_chunks == [
        DiffChunk("the", M), DiffChunk(" ", M), DiffChunk("cat", MA),
        DiffChunk(" ", M), DiffChunk("sat", M),
    ]
    assert alignment.expected_chunks == [
        DiffChunk("the", M), DiffChunk(" ", M), DiffChunk("dog", ME),
        DiffChunk(" ", M), DiffChunk("sat", M),
    ]


def test_empty_inputs():
    alignment = align_tokens("", "")
    assert alignment.actual_chunks == []
    assert alignment.expected_chunks == []

    alignment = align_tokens("", "a b")
    assert alignment.actual_chunks == []
    assert [c.kind for c in alignment.expected_chunks] == [ME, ME, ME]


def test_extra_tokens_on_actual_side():
    alignment = align_tokens("hello big world", "hello world")
    assert alignment.actual_chunks == [
        DiffChunk("hello", M), DiffChunk(" ", MA), DiffChunk("big", MA),
        DiffChunk(" ", M), DiffChunk("world", M),
    ]
    assert all(c.kind == M for c in alignment.expected_chunks)


def test_ties_charge_the_expected_side():
    alignment = align_tokens("x y", "y x")
    assert alignment.actual_chunks == [
        DiffChunk("x", MA), DiffChunk(" ", MA), DiffChunk("y", M),
    ]
    assert alignment.expected_chunks == [
        DiffChunk("y", M), DiffChunk(" ", ME), DiffChunk("x", ME),
    ]
