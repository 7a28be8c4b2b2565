"""
Unit tests for the Vocabulary Store.
"""

import json
import sys
from pathlib import Path

import pytest

from intent_classifier.exceptions import (
    ConfigurationError,
    ResourceFormatError,
    ResourceNotFoundError,
)
from intent_classifier.vocabulary.store import Vocabulary, load_vocabulary


def _write(path: Path, content) -> Path:
    if isinstance(content, str):
        path.write_text(content, encoding="utf-8")
    else:
        path.write_text(json.dumps(content), encoding="utf-8")
    return path


@pytest.fixture
def tokenizer_path(fixtures_dir) -> Path:
    return fixtures_dir / "tokenizer.json"


@pytest.fixture
def label_encoder_path(fixtures_dir) -> Path:
    return fixtures_dir / "label_encoder.json"


def test_load_fixture_tables(tokenizer_path, label_encoder_path):
    vocabulary = load_vocabulary(tokenizer_path, label_encoder_path)

    assert isinstance(vocabulary, Vocabulary)
    assert vocabulary.labels == ("create_event", "cancel_event", "query_event")
    assert vocabulary.num_labels == 3
    assert vocabulary.word_index["schedule"] == 2
    assert vocabulary.word_index["<OOV>"] == 1
    assert vocabulary.vocabulary_size == 17


def test_accepts_str_paths(tokenizer_path, label_encoder_path):
    vocabulary = load_vocabulary(str(tokenizer_path), str(label_encoder_path))
    assert vocabulary.num_labels == 3


def test_word_index_is_read_only(tokenizer_path, label_encoder_path):
    vocabulary = load_vocabulary(tokenizer_path, label_encoder_path)

    with pytest.raises(TypeError):
        vocabulary.word_index["new"] = 99


def test_extra_tokenizer_keys_ignored(tmp_path, label_encoder_path):
    tokenizer = _write(
        tmp_path / "tokenizer.json",
        {"word_index": {"hi": 2}, "word_counts": {"hi": 10}, "num_words": None},
    )

    vocabulary = load_vocabulary(tokenizer, label_encoder_path)
    assert dict(vocabulary.word_index) == {"hi": 2}


def test_missing_tokenizer(tmp_path, label_encoder_path):
    with pytest.raises(ResourceNotFoundError) as exc_info:
        load_vocabulary(tmp_path / "nope.json", label_encoder_path)

    assert exc_info.value.path == str(tmp_path / "nope.json")
    assert isinstance(exc_info.value, ConfigurationError)


def test_missing_label_encoder(tmp_path, tokenizer_path):
    with pytest.raises(ResourceNotFoundError):
        load_vocabulary(tokenizer_path, tmp_path / "nope.json")


def test_invalid_json(tmp_path, label_encoder_path):
    tokenizer = _write(tmp_path / "tokenizer.json", '{"word_index": {"hi": 2,}')

    with pytest.raises(ResourceFormatError) as exc_info:
        load_vocabulary(tokenizer, label_encoder_path)

    assert "Invalid JSON" in exc_info.value.message
    assert exc_info.value.details["errors"]


def test_top_level_not_object(tmp_path, tokenizer_path):
    labels = _write(tmp_path / "label_encoder.json", ["a", "b"])

    with pytest.raises(ResourceFormatError, match="JSON object"):
        load_vocabulary(tokenizer_path, labels)


def test_missing_word_index_key(tmp_path, label_encoder_path):
    tokenizer = _write(tmp_path / "tokenizer.json", {"index_word": {"2": "hi"}})

    with pytest.raises(ResourceFormatError) as exc_info:
        load_vocabulary(tokenizer, label_encoder_path)

    assert any("word_index" in e for e in exc_info.value.details["errors"])


def test_missing_classes_key(tmp_path, tokenizer_path):
    labels = _write(tmp_path / "label_encoder.json", {"labels": ["a"]})

    with pytest.raises(ResourceFormatError):
        load_vocabulary(tokenizer_path, labels)


@pytest.mark.parametrize("bad_id", ["2", 2.5, 0, -3, True, None])
def test_invalid_token_ids(tmp_path, label_encoder_path, bad_id):
    tokenizer = _write(tmp_path / "tokenizer.json", {"word_index": {"hi": bad_id}})

    with pytest.raises(ResourceFormatError):
        load_vocabulary(tokenizer, label_encoder_path)


def test_empty_label_table(tmp_path, tokenizer_path):
    labels = _write(tmp_path / "label_encoder.json", {"classes": []})

    with pytest.raises(ResourceFormatError):
        load_vocabulary(tokenizer_path, labels)


def test_non_string_label(tmp_path, tokenizer_path):
    labels = _write(tmp_path / "label_encoder.json", {"classes": ["a", 2]})

    with pytest.raises(ResourceFormatError):
        load_vocabulary(tokenizer_path, labels)


def test_duplicate_labels_are_kept(tmp_path, tokenizer_path):
    """Duplicates are only warned about; positions must stay aligned with the model."""
    labels = _write(tmp_path / "label_encoder.json", {"classes": ["a", "b", "a"]})

    vocabulary = load_vocabulary(tokenizer_path, labels)
    assert vocabulary.labels == ("a", "b", "a")


def test_empty_word_index_is_allowed(tmp_path, label_encoder_path):
    tokenizer = _write(tmp_path / "tokenizer.json", {"word_index": {}})

    vocabulary = load_vocabulary(tokenizer, label_encoder_path)
    assert vocabulary.vocabulary_size == 0


def test_deeply_nested_json(tmp_path, label_encoder_path):
    """Nesting beyond the decoder's recursion limit is a format error."""
    tokenizer = _write(tmp_path / "tokenizer.json", "[" * 100000 + "]" * 100000)

    with pytest.raises(ResourceFormatError) as exc_info:
        load_vocabulary(tokenizer, label_encoder_path)

    assert "RecursionError" in exc_info.value.message


@pytest.mark.skipif(
    not hasattr(sys, "get_int_max_str_digits"),
    reason="interpreter has no integer string conversion limit",
)
def test_oversized_integer_literal(tmp_path, label_encoder_path):
    tokenizer = _write(tmp_path / "tokenizer.json", '{"word_index": {"a": ' + "9" * 5000 + "}}")

    with pytest.raises(ResourceFormatError) as exc_info:
        load_vocabulary(tokenizer, label_encoder_path)

    assert exc_info.value.path == str(tokenizer)
