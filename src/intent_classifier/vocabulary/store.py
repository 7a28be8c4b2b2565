"""
Vocabulary Store: loads the tokenizer and label side-tables.

Both files are read once at pipeline initialization and are read-only
afterwards, so a loaded Vocabulary can be shared by any number of
concurrent readers.
"""

import json
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from intent_classifier.exceptions import ResourceFormatError, ResourceNotFoundError
from intent_classifier.models.resource_models import LabelEncoderResource, TokenizerResource


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class Vocabulary:
    """Word -> token id mapping plus the ordered Label Table."""

    word_index: Mapping[str, int]
    labels: tuple[str, ...]

    @property
    def num_labels(self) -> int:
        return len(self.labels)

    @property
    def vocabulary_size(self) -> int:
        return len(self.word_index)


def _read_json_object(path: Path) -> dict[str, Any]:
    if not path.is_file():
        raise ResourceNotFoundError(f"Resource file not found: {path}", path=str(path))

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ResourceFormatError(
            f"Invalid JSON in {path.name}: {e.msg}",
            path=str(path),
            errors=[f"{e.msg} at line {e.lineno} col {e.colno}"],
        ) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ResourceFormatError(
            f"Unable to read {path.name}: {e}", path=str(path)
        ) from e
    except (ValueError, RecursionError) as e:
        # Oversized integer literals or nesting too deep for the decoder
        raise ResourceFormatError(
            f"Invalid JSON in {path.name}: {type(e).__name__}",
            path=str(path),
            errors=[str(e)[:200]],
        ) from e

    if not isinstance(data, dict):
        raise ResourceFormatError(
            f"{path.name} must contain a JSON object (got {type(data).__name__})",
            path=str(path),
        )
    return data


def _parse(model: type[BaseModel], data: dict[str, Any], path: Path) -> BaseModel:
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()
        ]
        raise ResourceFormatError(
            f"{path.name} does not match the expected {model.__name__} shape",
            path=str(path),
            errors=errors,
        ) from e


def load_vocabulary(tokenizer_path: str | Path, label_encoder_path: str | Path) -> Vocabulary:
    """
    Load and validate both side-tables.

    Args:
        tokenizer_path: JSON file with a "word_index" object
        label_encoder_path: JSON file with a "classes" list

    Returns:
        Immutable Vocabulary

    Raises:
        ResourceNotFoundError: Either file is missing
        ResourceFormatError: Either file is unparsable or wrongly shaped
    """
    tokenizer_path = Path(tokenizer_path)
    label_encoder_path = Path(label_encoder_path)

    tokenizer = _parse(TokenizerResource, _read_json_object(tokenizer_path), tokenizer_path)
    label_encoder = _parse(
        LabelEncoderResource, _read_json_object(label_encoder_path), label_encoder_path
    )

    labels = tuple(label_encoder.classes)
    if len(set(labels)) != len(labels):
        logger.warning("Label Table contains duplicate labels", num_labels=len(labels))

    vocabulary = Vocabulary(
        word_index=MappingProxyType(dict(tokenizer.word_index)),
        labels=labels,
    )

    logger.info(
        "Vocabulary loaded",
        tokenizer_path=str(tokenizer_path),
        label_encoder_path=str(label_encoder_path),
        vocabulary_size=vocabulary.vocabulary_size,
        num_labels=vocabulary.num_labels,
    )
    return vocabulary
