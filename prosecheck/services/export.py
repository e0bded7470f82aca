from __future__ import annotations
from datetime import datetime
from typing import List, Optional

from prosecheck.models.analysis import TextAnalysisResult, TextBlock

LABELS = [
    (90, "Excellent"),
    (80, "Very Good"),
    (70, "Good"),
    (60, "Satisfactory"),
    (50, "Needs Improvement"),
    (40, "Poor"),
]


def score_label(score: int) -> str:
    for floor, label in LABELS:
        if score >= floor:
            return label
    return "Critical Issues"


def export_corrected_text(blocks: List[TextBlock]) -> str:
    return "\n\n".join(b.corrected or b.text for b in blocks)


def export_analysis_report(
    result: TextAnalysisResult,
    original_text: str,
    generated_at: Optional[datetime] = None,
) -> str:
    """Render an analysis as a Markdown report."""
    m = result.metrics
    when = (generated_at or datetime.now()).strftime("%Y-%m-%d %H:%M")
    lines = [
        "# Writing Analysis Report", "",
        f"Generated: {when}", "",
        "## Overall Assessment", "",
        f"Quality Score: {result.overall_score}/100 ({score_label(result.overall_score)})", "",
        "## Metrics", "",
        f"* Readability: {m.readability_score}/100",
        f"* Grammar: {m.grammar_score}/100",
        f"* Clarity: {m.clarity_score}/100",
        f"* Style Consistency: {m.style_consistency_score}/100",
        f"* Vocabulary Usage: {m.vocabulary_score}/100",
        f"* Sentence Variety: {m.sentence_variety_score}/100", "",
    ]

    if result.ielts_feedback:
        lines += ["## Professional IELTS Feedback", "", result.ielts_feedback, ""]
        if m.ielts_estimate is not None:
            lines += [f"Estimated IELTS Band: {m.ielts_estimate:g}", ""]

    sev = m.issues_by_severity
    lines += [
        "## Issues Summary", "",
        f"* Critical Issues: {sev['critical']}",
        f"* Major Issues: {sev['major']}",
        f"* Minor Issues: {sev['minor']}",
        f"* Suggestions: {sev['suggestion']}", "",
        "## Detailed Feedback", "",
    ]

    for n, block in enumerate(result.blocks, start=1):
        if not block.issues:
            continue
        lines += [
            f"### Paragraph {n}", "",
            f'Original: "{block.text}"', "",
            f'Corrected: "{block.corrected or block.text}"', "",
            "Issues:", "",
        ]
        for issue in block.sorted_issues():
            lines.append(f'* {issue.type.capitalize()} ({issue.severity}): "{issue.original}" -> "{issue.suggestion}"')
            lines += [f"  * {issue.explanation}", ""]

    lines += [
        "## Original Text", "", original_text, "",
        "## Corrected Text", "", export_corrected_text(result.blocks), "",
    ]
    return "\n".join(lines)
