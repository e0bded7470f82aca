from __future__ import annotations
from typing import List, Tuple
import logging

from prosecheck.core.config import ALIGNMENT_THRESHOLD, ALIGNMENT_STRATEGY
from prosecheck.services.segment import split_paragraphs, word_set

log = logging.getLogger("align")


def jaccard(a: str, b: str) -> float:
    """Jaccard index of the lowercase word sets, 0.0 when both are empty."""
    set_a, set_b = word_set(a), word_set(b)
    matches = len(set_a & set_b)
    union = len(set_a) + len(set_b) - matches
    return matches / union if union > 0 else 0.0


def candidate_pairs(originals: List[str], segments: List[str]) -> List[Tuple[float, int, int]]:
    """(similarity, original index, segment index) for every pair above the threshold."""
    pairs = []
    for i, block in enumerate(originals):
        for j, seg in enumerate(segments):
            score = jaccard(block, seg)
            if score > ALIGNMENT_THRESHOLD:
                pairs.append((score, i, j))
    return pairs


def _independent(originals: List[str], segments: List[str]) -> List[str]:
    # best segment per original block; a segment may be reused
    out = [""] * len(originals)
    best = [0.0] * len(originals)
    for score, i, j in candidate_pairs(originals, segments):
        if score > best[i]:
            best[i] = score
            out[i] = segments[j]
    return out


def _greedy(originals: List[str], segments: List[str]) -> List[str]:
    # highest-similarity pairs first, each segment used at most once
    out = [""] * len(originals)
    used_orig, used_seg = set(), set()
    pairs = sorted(candidate_pairs(originals, segments), key=lambda p: (-p[0], p[1], p[2]))
    for score, i, j in pairs:
        if i in used_orig or j in used_seg:
            continue
        out[i] = segments[j]
        used_orig.add(i)
        used_seg.add(j)
    return out


def align_blocks(originals: List[str], corrected_text: str, strategy: str = ALIGNMENT_STRATEGY) -> List[str]:
    """
    One corrected block per original block, "" where nothing matched with confidence.
    Paragraph counts that agree are aligned positionally; otherwise blocks are
    matched by word-set similarity.
    """
    if not originals:
        return []
    if not corrected_text or not corrected_text.strip():
        return [""] * len(originals)

    segments = split_paragraphs(corrected_text)
    if len(segments) == len(originals):
        return segments
    if len(originals) == 1:
        return [corrected_text.strip()]

    log.debug("Paragraph count mismatch (%d original, %d corrected), matching by similarity",
              len(originals), len(segments))
    if strategy == "greedy":
        return _greedy(originals, segments)
    if strategy != "independent":
        raise ValueError(f"Unknown alignment strategy: {strategy}")
    return _independent(originals, segments)
