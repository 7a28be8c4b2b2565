"""
Text normalization applied before tokenization.

Must stay identical to the cleaning step used when the model was trained:
lower-case, trim, then whole-word correction of a fixed set of common
misspellings.
"""

import re
from typing import Iterable, Optional


# Applied in order. All patterns are disjoint whole words, so order only
# matters if a custom table introduces overlapping words.
DEFAULT_CORRECTIONS: tuple[tuple[str, str], ...] = (
    ("calender", "calendar"),
    ("calandar", "calendar"),
    ("tommorow", "tomorrow"),
    ("tommorrow", "tomorrow"),
    ("tomorow", "tomorrow"),
    ("tommorw", "tomorrow"),
    ("meating", "meeting"),
    ("meetting", "meeting"),
    ("shedule", "schedule"),
    ("schedual", "schedule"),
    ("alrm", "alarm"),
    ("alaram", "alarm"),
    ("massala", "masala"),
    ("panir", "paneer"),
)


class TextNormalizer:
    """
    Lower-cases input and rewrites known misspellings.

    Corrections are case-insensitive whole-word substitutions: "Calender"
    is fixed, "calendersmith" is left alone.

    Examples:
        >>> TextNormalizer().normalize("  Shedule a MEATING tommorow ")
        'schedule a meeting tomorrow'
    """

    def __init__(self, corrections: Optional[Iterable[tuple[str, str]]] = None):
        """
        Args:
            corrections: Ordered (misspelling, replacement) word pairs.
                Defaults to DEFAULT_CORRECTIONS.
        """
        self._pairs = DEFAULT_CORRECTIONS if corrections is None else tuple(corrections)
        self._patterns = [
            (re.compile(rf"\b{re.escape(wrong)}\b", re.IGNORECASE), right)
            for wrong, right in self._pairs
        ]

    @property
    def corrections(self) -> list[tuple[str, str]]:
        return list(self._pairs)

    def normalize(self, text: str) -> str:
        """
        Normalize raw user text.

        Args:
            text: Arbitrary string, possibly empty

        Returns:
            Corrected lower-case string with surrounding whitespace removed
        """
        cleaned = text.lower().strip()
        for pattern, replacement in self._patterns:
            cleaned = pattern.sub(replacement, cleaned)
        return cleaned
