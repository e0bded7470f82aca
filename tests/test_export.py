from datetime import datetime

import pytest

from prosecheck.models.analysis import TextAnalysisResult, TextBlock, TextIssue
from prosecheck.services.export import score_label, export_corrected_text, export_analysis_report
from prosecheck.services.metrics import neutral_metrics


@pytest.mark.parametrize("score,label", [
    (95, "Excellent"), (90, "Excellent"), (85, "Very Good"), (70, "Good"),
    (65, "Satisfactory"), (50, "Needs Improvement"), (41, "Poor"), (30, "Critical Issues"),
])
def test_score_label(score, label):
    assert score_label(score) == label


def _result():
    text = "She dose it and it recieve praise."
    issues = [
        TextIssue(id="issue-block-0-1", type="style", severity="major", original="recieve",
                  suggestion="receives", explanation="Style improvement.",
                  start_index=text.index("recieve"), end_index=text.index("recieve") + 7),
        TextIssue(id="issue-block-0-0", type="grammar", severity="critical", original="dose",
                  suggestion="does", explanation='Grammatical error: "dose" should be "does".',
                  start_index=4, end_index=8),
    ]
    blocks = [
        TextBlock(id="block-0", text=text, corrected="She does it and it receives praise.", issues=issues),
        TextBlock(id="block-1", text="Untouched paragraph."),
    ]
    metrics = neutral_metrics("narrative").model_copy(update={
        "ielts_estimate": 6.5,
        "issues_by_severity": {"critical": 1, "major": 1, "minor": 0, "suggestion": 0},
    })
    return TextAnalysisResult(blocks=blocks, metrics=metrics, overall_score=72, ielts_feedback="Solid effort.")


def test_export_corrected_text_falls_back_to_original():
    assert export_corrected_text(_result().blocks) == (
        "She does it and it receives praise.\n\nUntouched paragraph."
    )


def test_export_analysis_report():
    report = export_analysis_report(_result(), "original input", generated_at=datetime(2026, 1, 2, 3, 4))
    assert "Generated: 2026-01-02 03:04" in report
    assert "Quality Score: 72/100 (Good)" in report
    assert "Estimated IELTS Band: 6.5" in report
    assert "* Critical Issues: 1" in report
    assert "### Paragraph 1" in report
    assert "### Paragraph 2" not in report
    # issues are listed in reading order
    assert report.index('"dose" -> "does"') < report.index('"recieve" -> "receives"')
    assert report.rstrip().endswith("Untouched paragraph.")
