from __future__ import annotations
from typing import List, Optional
import logging
import math

from prosecheck.core.config import (
    MAX_ISSUES_PER_BLOCK, TOKENS_PER_ISSUE, PHRASE_WINDOW,
    PHRASE_MIN_DISTANCE, TOKEN_MIN_DISTANCE, RESTRUCTURE_RATIO,
)
from prosecheck.models.analysis import TextBlock, TextIssue
from prosecheck.services.classify import (
    determine_issue_type, severity_for, explain, RESTRUCTURE_EXPLANATION,
)
from prosecheck.services.distance import levenshtein, are_minor_variants
from prosecheck.services.segment import tokenize, is_punctuation

log = logging.getLogger("detect")


def issue_cap(token_count: int) -> int:
    """About one issue per 15 tokens, never more than 5."""
    return min(MAX_ISSUES_PER_BLOCK, math.ceil(token_count / TOKENS_PER_ISSUE))


def _phrase_end(text: str, tokens: List[str], start: int) -> Optional[int]:
    # walk the window token by token so a short token is never matched
    # inside an earlier, longer one
    end = start + len(tokens[0])
    for tok in tokens[1:]:
        pos = text.find(tok, end)
        if pos < 0:
            return None
        end = pos + len(tok)
    return end


def _significant(a: str, b: str, min_distance: int) -> bool:
    return a != b and not are_minor_variants(a, b) and levenshtein(a, b) > min_distance


def detect_issues(block_id: str, original: str, corrected: str) -> List[TextIssue]:
    """
    Compare a block with its corrected version token by token and return
    located, classified issues. Offsets are into ``original``.
    """
    issues: List[TextIssue] = []
    if not corrected or corrected == original:
        return issues

    otoks = tokenize(original)
    ctoks = tokenize(corrected)
    limit = issue_cap(len(otoks))

    def add(kind, severity, start, end, suggestion, explanation=None, issue_id=None):
        span = original[start:end]
        issues.append(TextIssue(
            id=issue_id or f"issue-{block_id}-{len(issues)}",
            type=kind,
            severity=severity,
            original=span,
            suggestion=suggestion,
            explanation=explanation or explain(kind, span, suggestion),
            start_index=start,
            end_index=end,
        ))

    cursor = 0
    found = 0
    i = 0
    while i < len(otoks) and found < limit:
        tok = otoks[i]
        if is_punctuation(tok):
            i += 1
            continue
        pos = original.find(tok, cursor)
        if pos < 0:
            i += 1
            continue

        if i + PHRASE_WINDOW <= len(otoks) and i + PHRASE_WINDOW <= len(ctoks):
            o_window = otoks[i:i + PHRASE_WINDOW]
            c_window = ctoks[i:i + PHRASE_WINDOW]
            if _significant("".join(o_window), "".join(c_window), PHRASE_MIN_DISTANCE):
                end = _phrase_end(original, o_window, pos)
                if end is not None:
                    suggestion = " ".join(c_window)
                    kind = determine_issue_type(original[pos:end], suggestion)
                    add(kind, "minor", pos, end, suggestion)
                    found += 1
                    cursor = end
                    i += PHRASE_WINDOW
                    continue

        if i < len(ctoks) and _significant(tok, ctoks[i], TOKEN_MIN_DISTANCE):
            kind = determine_issue_type(tok, ctoks[i])
            add(kind, severity_for(kind), pos, pos + len(tok), ctoks[i])
            found += 1

        cursor = pos + len(tok)
        i += 1

    if found < 2 and levenshtein(original, corrected) > len(original) * RESTRUCTURE_RATIO:
        add("clarity", "suggestion", 0, len(original), corrected,
            explanation=RESTRUCTURE_EXPLANATION, issue_id=f"issue-structure-{block_id}")

    return issues


def build_block(block_id: str, text: str, corrected: str) -> TextBlock:
    """A TextBlock for one aligned pair; a failing comparison leaves it without issues."""
    try:
        issues = detect_issues(block_id, text, corrected)
        return TextBlock(id=block_id, text=text, corrected=corrected or None, issues=issues)
    except Exception:
        log.warning("Change detection failed for %s, reporting it without issues", block_id, exc_info=True)
        return TextBlock(id=block_id, text=text, corrected=corrected or None)
