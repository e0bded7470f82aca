from __future__ import annotations
from enum import Enum
from typing import Any, Callable, List, Mapping, Optional
import logging
import random

from prosecheck.core.config import ALIGNMENT_STRATEGY, FALLBACK_NARRATIVE
from prosecheck.models.analysis import Feedback, TextAnalysisResult, TextBlock
from prosecheck.services import llm
from prosecheck.services.align import align_blocks
from prosecheck.services.detect import build_block
from prosecheck.services.metrics import calculate_metrics, neutral_metrics
from prosecheck.services.scoring import overall_score, blend_band, fallback_score
from prosecheck.services.segment import split_paragraphs
from prosecheck.services.signals import SignalExtractor

log = logging.getLogger("analyze")

FeedbackFetcher = Callable[[str], Any]


class Stage(str, Enum):
    VALIDATING = "validating"
    FETCHING_FEEDBACK = "fetching-feedback"
    PARSING_FEEDBACK = "parsing-feedback"
    SEGMENTING = "segmenting"
    SCORING = "scoring"
    BLENDING = "blending"
    DONE = "done"
    DEGRADED = "degraded"


def _enter(stage: Stage) -> Stage:
    log.debug("analysis stage -> %s", stage.value)
    return stage


def coerce_feedback(raw: Any) -> Feedback:
    """Accept a Feedback, a mapping of its fields, raw model text or None."""
    if raw is None:
        return Feedback()
    if isinstance(raw, Feedback):
        return raw
    if isinstance(raw, Mapping):
        return Feedback.model_validate(dict(raw))
    if isinstance(raw, str):
        return llm.parse_feedback(raw)
    raise TypeError(f"Unsupported feedback payload: {type(raw).__name__}")


def _empty_result() -> TextAnalysisResult:
    return TextAnalysisResult(blocks=[], metrics=neutral_metrics(), overall_score=fallback_score(0, 0))


def _degraded(text: str, blocks: List[TextBlock]) -> TextAnalysisResult:
    if not blocks:
        try:
            blocks = [TextBlock(id=f"block-{i}", text=b) for i, b in enumerate(split_paragraphs(text))]
        except Exception:
            log.warning("Segmentation failed while degrading, returning no blocks", exc_info=True)
            blocks = []
    issue_count = sum(len(b.issues) for b in blocks)
    return TextAnalysisResult(
        blocks=blocks,
        metrics=neutral_metrics(FALLBACK_NARRATIVE),
        overall_score=fallback_score(len(text.split()), issue_count),
        ielts_feedback=FALLBACK_NARRATIVE,
    )


def analyze_text(
    text: str,
    fetcher: Optional[FeedbackFetcher] = None,
    rng: Optional[random.Random] = None,
    extractor: Optional[SignalExtractor] = None,
    strategy: str = ALIGNMENT_STRATEGY,
) -> TextAnalysisResult:
    """
    Full analysis of ``text``: fetch feedback, align the corrected rewrite
    paragraph by paragraph, detect issues, score. Never raises; any stage
    failure yields a neutral but well-formed result.
    """
    stage = _enter(Stage.VALIDATING)
    if not isinstance(text, str) or not text.strip():
        log.info("Empty input, returning an empty analysis")
        return _empty_result()

    fetcher = fetcher or llm.fetch_feedback
    rng = rng or random.Random()
    blocks: List[TextBlock] = []
    try:
        stage = _enter(Stage.FETCHING_FEEDBACK)
        raw = fetcher(text)

        stage = _enter(Stage.PARSING_FEEDBACK)
        feedback = coerce_feedback(raw)

        stage = _enter(Stage.SEGMENTING)
        originals = split_paragraphs(text)
        corrected = align_blocks(originals, feedback.corrected_text or "", strategy)
        blocks = [build_block(f"block-{i}", b, c) for i, (b, c) in enumerate(zip(originals, corrected))]

        stage = _enter(Stage.SCORING)
        metrics = calculate_metrics(blocks, feedback.error_analysis, feedback.assessment, rng, extractor)
        metrics = metrics.model_copy(update={
            "ielts_estimate": feedback.band_estimate,
            "professor_feedback": feedback.full_narrative or "",
        })

        stage = _enter(Stage.BLENDING)
        score = blend_band(overall_score(metrics), feedback.band_estimate)
        if feedback.band_estimate is not None:
            log.info("Blended band estimate %s into overall score %d", feedback.band_estimate, score)
        result = TextAnalysisResult(
            blocks=blocks,
            metrics=metrics,
            overall_score=score,
            ielts_feedback=feedback.full_narrative,
        )
    except Exception:
        log.warning("Analysis failed while %s, degrading to local defaults", stage.value, exc_info=True)
        _enter(Stage.DEGRADED)
        return _degraded(text, blocks)

    _enter(Stage.DONE)
    log.info("Analyzed %d blocks, %d issues, score=%d",
             len(blocks), sum(len(b.issues) for b in blocks), result.overall_score)
    return result
