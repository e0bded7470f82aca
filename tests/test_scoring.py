import pytest

from prosecheck.core.config import WEIGHTS, SCORE_MIN, SCORE_MAX
from prosecheck.services.metrics import neutral_metrics
from prosecheck.services.scoring import overall_score, blend_band, fallback_score


def _metrics(**scores):
    return neutral_metrics().model_copy(update=scores)


def test_weights_sum_to_one():
    assert sum(WEIGHTS.values()) == pytest.approx(1.0)


def test_overall_score_of_flat_metrics():
    m = _metrics(grammar_score=80, clarity_score=80, readability_score=80,
                 vocabulary_score=80, style_consistency_score=80)
    assert overall_score(m) == 80


def test_weak_grammar_is_penalised():
    m = _metrics(grammar_score=30, clarity_score=80, readability_score=80,
                 vocabulary_score=80, style_consistency_score=80)
    # 67.5 -> 68, minus the full 15 point grammar penalty
    assert overall_score(m) == 53


def test_weak_clarity_is_penalised():
    m = _metrics(grammar_score=80, clarity_score=40, readability_score=80,
                 vocabulary_score=80, style_consistency_score=80)
    # 70 minus half of the 10 point clarity penalty
    assert overall_score(m) == 65


def test_overall_score_bounds():
    low = _metrics(grammar_score=30, clarity_score=30, readability_score=30,
                   vocabulary_score=30, style_consistency_score=30)
    high = _metrics(grammar_score=95, clarity_score=95, readability_score=95,
                    vocabulary_score=95, style_consistency_score=95)
    assert overall_score(low) == SCORE_MIN
    assert overall_score(high) == SCORE_MAX


def test_blend_band():
    assert blend_band(70, None) == 70
    assert blend_band(70, 4.5) == 54
    assert blend_band(70, 9.0) == 94


def test_blend_is_monotonic_in_band():
    bands = [1.0 + 0.5 * k for k in range(17)]
    for score in (30, 55, 70, 95):
        blended = [blend_band(score, b) for b in bands]
        assert blended == sorted(blended)
        assert all(SCORE_MIN <= s <= SCORE_MAX for s in blended)


def test_fallback_score():
    assert fallback_score(0, 0) == 60
    assert fallback_score(500, 0) == 75
    assert fallback_score(0, 20) == 35
    assert SCORE_MIN <= fallback_score(10_000, 1_000) <= SCORE_MAX
