import pytest
from openai import OpenAIError

from prosecheck.services import llm
# bound at import time, before the autouse stub replaces the module attribute
from prosecheck.services.llm import fetch_feedback as real_fetch_feedback, parse_feedback, FeedbackError

RAW = """## CORRECTED TEXT
I have an apple.

It is red.

## CRITICAL ERROR ANALYSIS:
Subject-verb agreement: "I has" should be "I have".

## LANGUAGE ASSESSMENT
Vocabulary is basic but the text is clear.

## IELTS BAND SCORE ANALYSIS
Task Achievement: 5/9
Overall Band Estimate: 5.5/9
"""


def test_parse_feedback_sections():
    fb = parse_feedback(RAW)
    assert fb.corrected_text == "I have an apple.\n\nIt is red."
    assert fb.error_analysis.startswith("Subject-verb agreement")
    assert fb.assessment == "Vocabulary is basic but the text is clear."
    assert fb.band_estimate == 5.5
    assert fb.full_narrative == RAW


def test_parse_feedback_missing_sections():
    fb = parse_feedback("The model answered in free text only.")
    assert fb.corrected_text is None
    assert fb.error_analysis is None
    assert fb.band_estimate is None
    assert fb.full_narrative == "The model answered in free text only."


def test_out_of_range_band_is_dropped():
    assert parse_feedback("## IELTS BAND SCORE ANALYSIS\nOverall Band Estimate: 12").band_estimate is None


def test_fetch_requires_api_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    with pytest.raises(FeedbackError):
        real_fetch_feedback("Some text.")


def test_fetch_parses_model_answer(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    seen = {}

    def fake_chat(messages):
        seen["messages"] = messages
        return RAW

    monkeypatch.setattr(llm, "_chat", fake_chat)
    fb = real_fetch_feedback("I has an apple.")
    assert fb.band_estimate == 5.5
    assert seen["messages"][0]["role"] == "system"
    assert seen["messages"][1]["content"] == "I has an apple."


def test_fetch_wraps_client_errors(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")

    def failing_chat(messages):
        raise OpenAIError("connection reset")

    monkeypatch.setattr(llm, "_chat", failing_chat)
    with pytest.raises(FeedbackError):
        real_fetch_feedback("Some text.")


def test_fetch_rejects_empty_answer(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "test-key")
    monkeypatch.setattr(llm, "_chat", lambda messages: "   ")
    with pytest.raises(FeedbackError):
        real_fetch_feedback("Some text.")
