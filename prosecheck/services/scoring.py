from __future__ import annotations
from typing import Optional

from prosecheck.core.config import (
    WEIGHTS, GRAMMAR_PENALTY_MAX, CLARITY_PENALTY_MAX, LOW_SCORE_THRESHOLD,
    BAND_MAX, BAND_WEIGHT, SCORE_MIN,
)
from prosecheck.models.analysis import TextMetrics
from prosecheck.services.metrics import clamp_score


def overall_score(m: TextMetrics) -> int:
    """Weighted mean of the category scores, pulled down by weak grammar or clarity."""
    score = (
        m.grammar_score * WEIGHTS["grammar"] +
        m.clarity_score * WEIGHTS["clarity"] +
        m.readability_score * WEIGHTS["readability"] +
        m.vocabulary_score * WEIGHTS["vocabulary"] +
        m.style_consistency_score * WEIGHTS["style"]
    )
    score = round(score)
    # scores bottom out at SCORE_MIN, which earns the full penalty
    if m.grammar_score < LOW_SCORE_THRESHOLD:
        gap = (LOW_SCORE_THRESHOLD - m.grammar_score) / (LOW_SCORE_THRESHOLD - SCORE_MIN)
        score -= min(GRAMMAR_PENALTY_MAX, GRAMMAR_PENALTY_MAX * gap)
    if m.clarity_score < LOW_SCORE_THRESHOLD:
        gap = (LOW_SCORE_THRESHOLD - m.clarity_score) / (LOW_SCORE_THRESHOLD - SCORE_MIN)
        score -= min(CLARITY_PENALTY_MAX, CLARITY_PENALTY_MAX * gap)
    return clamp_score(score)


def blend_band(score: int, band: Optional[float]) -> int:
    """
    Blend a local score with an external 1-9 band estimate rescaled to
    0-100. The band dominates; without one the score is returned as is.
    """
    if band is None:
        return score
    rescaled = band / BAND_MAX * 100
    return clamp_score(score * (1 - BAND_WEIGHT) + rescaled * BAND_WEIGHT)


def fallback_score(word_count: int, issue_count: int) -> int:
    """Offline estimate from text length and locally detected issues only."""
    return clamp_score(60 + min(15, word_count // 25) - min(25, issue_count * 3))
