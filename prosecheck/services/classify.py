from __future__ import annotations
from typing import Dict
import re

from prosecheck.models.analysis import IssueType, IssueSeverity
from prosecheck.services.distance import levenshtein, common_prefix_length

PUNCT_CHARS = re.compile(r"[.,!?;:]")

SEVERITY_BY_TYPE: Dict[str, str] = {
    "grammar": "critical",
    "clarity": "critical",
    "spelling": "major",
    "punctuation": "major",
    "style": "major",
    "vocabulary": "major",
}

EXPLANATIONS: Dict[str, str] = {
    "grammar": 'Grammatical error: "{original}" should be "{suggestion}".',
    "spelling": 'Spelling error: "{original}" should be "{suggestion}".',
    "punctuation": 'Punctuation error: "{original}" should be "{suggestion}".',
    "clarity": 'Clarity issue: Replace "{original}" with "{suggestion}" for better readability.',
    "style": 'Style improvement: Replace "{original}" with "{suggestion}".',
    "vocabulary": 'Vocabulary: Replace "{original}" with the more precise "{suggestion}".',
}

RESTRUCTURE_EXPLANATION = "Consider restructuring this paragraph for better clarity or flow."


def determine_issue_type(original: str, corrected: str) -> IssueType:
    """First matching rule wins; grammar is the catch-all."""
    if PUNCT_CHARS.search(original) or PUNCT_CHARS.search(corrected):
        return "punctuation"

    lo, lc = original.lower(), corrected.lower()
    prefix = common_prefix_length(lo, lc)
    if prefix > 2 and prefix > len(original) / 2:
        return "spelling"

    if abs(len(original) - len(corrected)) > len(original) / 2:
        return "clarity"

    if levenshtein(lo, lc) > min(len(original), len(corrected)) / 2:
        return "vocabulary"

    if len(original) > 5 and len(corrected) > 5 and prefix >= 3 and lo != lc:
        return "style"

    return "grammar"


def severity_for(issue_type: str) -> IssueSeverity:
    return SEVERITY_BY_TYPE.get(issue_type, "major")


def explain(issue_type: str, original: str, suggestion: str) -> str:
    template = EXPLANATIONS.get(issue_type, 'Correction: "{original}" -> "{suggestion}".')
    return template.format(original=original, suggestion=suggestion)
