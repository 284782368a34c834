"""Ordinal freshness labels and parsing of human-entered status text."""

import logging
from enum import IntEnum
from typing import Iterable, Optional

logger = logging.getLogger(__name__)


class FreshnessLabel(IntEnum):
    """Discrete freshness of one metric, ordered by severity."""
    FRESH = 0
    SLIGHTLY_DEGRADED = 1
    NOT_FRESH = 2
    UNFIT = 3

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def worst(cls, labels: Iterable["FreshnessLabel"]) -> "FreshnessLabel":
        """Most severe label of the given ones (FRESH for an empty input)."""
        return max(labels, default=cls.FRESH)


_DISPLAY_NAMES = {
    FreshnessLabel.FRESH: "Fresh",
    FreshnessLabel.SLIGHTLY_DEGRADED: "Slightly Degraded",
    FreshnessLabel.NOT_FRESH: "Not Fresh",
    FreshnessLabel.UNFIT: "Unfit",
}

# Vocabulary seen in the spreadsheet status columns ("status gas",
# "warna ikan") plus the English display names.
LABEL_SYNONYMS = {
    "FRESH": FreshnessLabel.FRESH,
    "GOOD": FreshnessLabel.FRESH,
    "SEGAR": FreshnessLabel.FRESH,
    "BAIK": FreshnessLabel.FRESH,
    "NORMAL": FreshnessLabel.FRESH,
    "AMAN": FreshnessLabel.FRESH,
    "SLIGHTLY DEGRADED": FreshnessLabel.SLIGHTLY_DEGRADED,
    "SLIGHTLY_DEGRADED": FreshnessLabel.SLIGHTLY_DEGRADED,
    "LESS FRESH": FreshnessLabel.SLIGHTLY_DEGRADED,
    "WARNING": FreshnessLabel.SLIGHTLY_DEGRADED,
    "KURANG SEGAR": FreshnessLabel.SLIGHTLY_DEGRADED,
    "KURANG": FreshnessLabel.SLIGHTLY_DEGRADED,
    "WASPADA": FreshnessLabel.SLIGHTLY_DEGRADED,
    "NOT FRESH": FreshnessLabel.NOT_FRESH,
    "NOT_FRESH": FreshnessLabel.NOT_FRESH,
    "BAD": FreshnessLabel.NOT_FRESH,
    "TIDAK SEGAR": FreshnessLabel.NOT_FRESH,
    "BURUK": FreshnessLabel.NOT_FRESH,
    "UNFIT": FreshnessLabel.UNFIT,
    "SPOILED": FreshnessLabel.UNFIT,
    "DANGER": FreshnessLabel.UNFIT,
    "TIDAK LAYAK": FreshnessLabel.UNFIT,
    "BUSUK": FreshnessLabel.UNFIT,
    "BAHAYA": FreshnessLabel.UNFIT,
}


def parse_label(text: Optional[str]) -> Optional[FreshnessLabel]:
    """Parse free-text status into a label.

    Matching is case-insensitive and collapses whitespace. Unknown or empty
    text returns None so the caller can ignore it.
    """
    if text is None:
        return None
    key = " ".join(str(text).replace("-", " ").split()).upper()
    if not key:
        return None
    label = LABEL_SYNONYMS.get(key)
    if label is None:
        logger.debug(f"Ignoring unrecognised status label {text!r}")
    return label
