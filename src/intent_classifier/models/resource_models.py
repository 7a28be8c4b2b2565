"""
Shapes of the two JSON side-tables bundled with the model.

Validated once at load time so a malformed file fails initialization
instead of surfacing as a silent default during prediction.
"""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


# Strict: JSON strings or floats are not accepted as token ids
TokenId = Annotated[int, Field(strict=True, gt=0)]


class TokenizerResource(BaseModel):
    """
    Tokenizer export: {"word_index": {"<word>": <id>, ...}, ...}.

    Extra keys written by the training tokenizer (word_counts, config...)
    are ignored.
    """

    model_config = ConfigDict(extra="ignore")

    word_index: dict[str, TokenId]


class LabelEncoderResource(BaseModel):
    """
    Label encoder export: {"classes": ["<label 0>", "<label 1>", ...]}.

    Position i in "classes" is model output position i.
    """

    model_config = ConfigDict(extra="ignore")

    classes: list[Annotated[str, Field(strict=True)]] = Field(..., min_length=1)
