from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Protocol, Tuple
import re

from prosecheck.core.config import METRIC_RULES

# (keywords, delta) rules per category, evaluated against one narrative section
ERROR_KEYWORDS: Dict[str, List[str]] = {
    "grammar": ["grammar", "grammatical"],
    "clarity": ["unclear", "clarity"],
    "vocabulary": ["vocabulary", "word choice"],
    "style": ["style", "formal", "informal"],
}

PRAISE_KEYWORDS: Dict[str, List[str]] = {
    "grammar": ["grammar", "grammatically accurate"],
    "clarity": ["clear", "coherent"],
    "vocabulary": ["vocabulary", "lexical"],
    "style": ["style", "consistent"],
}

READABILITY_RULES: List[Tuple[List[str], int]] = [
    (["cohesive", "coherent"], 8),
    (["clear", "well-structured"], 5),
    (["difficult to follow", "lacks clarity"], -10),
    (["confusing", "unclear", "incoherent"], -8),
]

VARIETY_RULES: List[Tuple[List[str], int]] = [
    (["varied", "diverse", "good variety"], 8),
    (["repetitive", "monotonous"], -10),
]


def mentions(text: str, keywords: Iterable[str]) -> bool:
    """Case-insensitive whole-word search for any of ``keywords``."""
    if not text:
        return False
    for kw in keywords:
        if re.search(r"(?<![\w-])" + re.escape(kw.lower()) + r"(?![\w-])", text.lower()):
            return True
    return False


class SignalExtractor(Protocol):
    def extract_signals(self, error_analysis: str, assessment: str) -> Dict[str, int]:
        ...


class KeywordSignalExtractor:
    """
    Turns the narrative feedback into per-category score deltas by keyword
    lookup. Categories: grammar, clarity, vocabulary, style, readability,
    variety. A category that is not mentioned gets 0.
    """

    def __init__(self, rules: Optional[Dict[str, Dict]] = None):
        self.rules = rules or METRIC_RULES

    def extract_signals(self, error_analysis: str, assessment: str) -> Dict[str, int]:
        error_analysis = error_analysis or ""
        assessment = assessment or ""
        signals: Dict[str, int] = {}
        for category, rule in self.rules.items():
            delta = 0
            if mentions(error_analysis, ERROR_KEYWORDS.get(category, [])):
                delta -= rule["penalty"]
            if mentions(assessment, PRAISE_KEYWORDS.get(category, [])):
                delta += rule["bonus"]
            signals[category] = delta
        signals["readability"] = sum(d for kws, d in READABILITY_RULES if mentions(assessment, kws))
        signals["variety"] = sum(d for kws, d in VARIETY_RULES if mentions(assessment, kws))
        return signals
