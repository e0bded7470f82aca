from __future__ import annotations
from typing import Dict, List, Optional
import logging
import random
import re
import statistics

import textstat

from prosecheck.core.config import (
    SCORE_MIN, SCORE_MAX, NEUTRAL_SCORE, MIN_EFFECTIVE_LENGTH, BASELINE_FLOOR,
    ISSUE_BASELINE_PENALTY, JITTER, METRIC_RULES, READABILITY_WEIGHTS,
    READABILITY_CAP, VARIETY_MIN_SENTENCES, VARIETY_LOW_SCORE,
    VARIETY_STDEV_RANGE, VARIETY_STDEV_LOW, VARIETY_STDEV_HIGH,
)
from prosecheck.models.analysis import TextBlock, TextMetrics, ISSUE_TYPES, SEVERITIES
from prosecheck.services.signals import KeywordSignalExtractor, SignalExtractor

log = logging.getLogger("metrics")

SENTENCE_END = re.compile(r"[.!?]+")


def clamp_score(value: float) -> int:
    return int(max(SCORE_MIN, min(SCORE_MAX, round(value))))


def baseline_score(total_issues: int) -> float:
    return max(BASELINE_FLOOR, 100 - total_issues * ISSUE_BASELINE_PENALTY)


def _density(count: int, text_length: int) -> float:
    # issues per 1000 characters, short texts count as 100 characters
    return count / max(text_length, MIN_EFFECTIVE_LENGTH) * 1000


def category_score(issue_count: int, text_length: int, rule: Dict, delta: int,
                   baseline: float, rng: random.Random) -> int:
    score = baseline - min(rule["cap"], _density(issue_count, text_length) * rule["weight"])
    score += delta
    score += rng.uniform(-JITTER, JITTER)
    return clamp_score(score)


def readability_score(by_type: Dict[str, int], text_length: int, delta: int, baseline: float) -> int:
    weighted = sum(by_type[k] * w for k, w in READABILITY_WEIGHTS.items())
    score = baseline - min(READABILITY_CAP, _density(1, text_length) * weighted)
    return clamp_score(score + delta)


def sentence_variety_score(text: str, delta: int, baseline: float) -> int:
    sentences = [s.strip() for s in SENTENCE_END.split(text) if s.strip()]
    if len(sentences) < VARIETY_MIN_SENTENCES:
        return VARIETY_LOW_SCORE

    lengths = [len(s) for s in sentences]
    spread = statistics.pstdev(lengths, mu=statistics.fmean(lengths))
    score = baseline
    low, high = VARIETY_STDEV_RANGE
    if low <= spread <= high:
        score += 10
    elif spread < VARIETY_STDEV_LOW:
        score -= 10
    elif spread > VARIETY_STDEV_HIGH:
        score -= 5

    first_words = [s.split()[0].lower() for s in sentences]
    unique_ratio = len(set(first_words)) / len(first_words)
    if unique_ratio > 0.7:
        score += 8
    elif unique_ratio < 0.4:
        score -= 10

    return clamp_score(score + delta)


def readability_details(text: str) -> Dict[str, float]:
    """Informational textstat figures; they do not feed any score."""
    if not text.strip():
        return {}
    try:
        return {
            "flesch_reading_ease": float(textstat.flesch_reading_ease(text)),
            "flesch_kincaid_grade": float(textstat.flesch_kincaid_grade(text)),
            "lexicon_count": float(textstat.lexicon_count(text)),
            "sentence_count": float(textstat.sentence_count(text)),
        }
    except Exception:
        log.warning("textstat readability figures unavailable, omitting them", exc_info=True)
        return {}


def calculate_metrics(
    blocks: List[TextBlock],
    error_analysis: str = "",
    assessment: str = "",
    rng: Optional[random.Random] = None,
    extractor: Optional[SignalExtractor] = None,
) -> TextMetrics:
    rng = rng or random.Random()
    extractor = extractor or KeywordSignalExtractor()

    issues = [i for b in blocks for i in b.issues]
    by_type = {k: 0 for k in ISSUE_TYPES}
    by_severity = {k: 0 for k in SEVERITIES}
    for issue in issues:
        by_type[issue.type] += 1
        by_severity[issue.severity] += 1

    text_length = sum(len(b.text) for b in blocks)
    baseline = baseline_score(len(issues))
    signals = extractor.extract_signals(error_analysis or "", assessment or "")

    scores = {
        category: category_score(by_type[category], text_length, rule,
                                 signals.get(category, 0), baseline, rng)
        for category, rule in METRIC_RULES.items()
    }
    all_text = " ".join(b.text for b in blocks)

    return TextMetrics(
        readability_score=readability_score(by_type, text_length, signals.get("readability", 0), baseline),
        grammar_score=scores["grammar"],
        clarity_score=scores["clarity"],
        vocabulary_score=scores["vocabulary"],
        style_consistency_score=scores["style"],
        sentence_variety_score=sentence_variety_score(all_text, signals.get("variety", 0), baseline),
        issues_by_type=by_type,
        issues_by_severity=by_severity,
        readability_details=readability_details(all_text),
    )


def neutral_metrics(narrative: str = "") -> TextMetrics:
    """Flat scores and zeroed counts, used when the pipeline degrades."""
    return TextMetrics(
        readability_score=NEUTRAL_SCORE,
        grammar_score=NEUTRAL_SCORE,
        clarity_score=NEUTRAL_SCORE,
        vocabulary_score=NEUTRAL_SCORE,
        style_consistency_score=NEUTRAL_SCORE,
        sentence_variety_score=NEUTRAL_SCORE,
        professor_feedback=narrative,
    )
