"""
Sequence encoding: normalized text -> fixed-length token id sequence.
"""

import re
from typing import Mapping

# ASCII whitespace only; non-breaking and other Unicode spaces stay inside words
_WHITESPACE = re.compile(r"[ \t\n\x0b\f\r]+")


class SequenceEncoder:
    """
    Maps normalized text to exactly ``max_len`` integer token ids.

    - Words are split on runs of ASCII whitespace (empty text -> no words)
    - Unknown words become ``oov_id`` (1 by training convention)
    - Up to ``max_len`` ids are kept in order; the tail is dropped
    - Remaining positions are right-padded with ``pad_id`` (0)

    The OOV id is applied as-is even if some real word also maps to it.
    """

    def __init__(
        self,
        word_index: Mapping[str, int],
        max_len: int = 50,
        oov_id: int = 1,
        pad_id: int = 0,
    ):
        if max_len < 1:
            raise ValueError(f"max_len must be >= 1, got {max_len}")
        self.word_index = word_index
        self.max_len = max_len
        self.oov_id = oov_id
        self.pad_id = pad_id

    @staticmethod
    def split_words(text: str) -> list[str]:
        """Split on ASCII whitespace runs, never yielding empty-string words."""
        return [word for word in _WHITESPACE.split(text) if word]

    def tokenize(self, text: str) -> list[int]:
        """Token id for every word, OOV-substituted, not padded or truncated."""
        return [self.word_index.get(word, self.oov_id) for word in self.split_words(text)]

    def pad(self, tokens: list[int]) -> list[int]:
        """Truncate to ``max_len`` then right-pad with ``pad_id``."""
        kept = tokens[: self.max_len]
        return kept + [self.pad_id] * (self.max_len - len(kept))

    def encode(self, text: str) -> list[int]:
        """
        Encode normalized text.

        Examples:
            >>> SequenceEncoder({"set": 4, "alarm": 9}, max_len=4).encode("set an alarm")
            [4, 1, 9, 0]
        """
        return self.pad(self.tokenize(text))
