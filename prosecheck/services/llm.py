# prosecheck/services/llm.py
import os
import re
import logging
from typing import Optional

from openai import OpenAI, OpenAIError

from prosecheck.models.analysis import Feedback

log = logging.getLogger("llm")

MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
TIMEOUT = float(os.getenv("OPENAI_TIMEOUT", "60"))
MAX_RETRIES = int(os.getenv("OPENAI_MAX_RETRIES", "2"))

SYSTEM = (
    "You are an experienced IELTS writing examiner.\n"
    "Analyze the text the user sends and format your response exactly as follows:\n\n"
    "## CORRECTED TEXT\n"
    "[The text with all errors corrected, keeping the original meaning and paragraph breaks]\n\n"
    "## CRITICAL ERROR ANALYSIS\n"
    "[List and explain all grammatical, vocabulary, and structural errors found]\n\n"
    "## LANGUAGE ASSESSMENT\n"
    "[Evaluate vocabulary range, grammatical complexity, and coherence]\n\n"
    "## IELTS BAND SCORE ANALYSIS\n"
    "Task Achievement: [Score /9]\n"
    "Coherence and Cohesion: [Score /9]\n"
    "Lexical Resource: [Score /9]\n"
    "Grammatical Range and Accuracy: [Score /9]\n"
    "Overall Band Estimate: [Score /9]"
)

# a "## HEADING" section runs until the next "##" heading or the end
_SECTION = r"##\s*{}\s*:?[ \t]*\n?(.*?)(?=\n\s*##|\Z)"
_BAND = re.compile(r"Overall Band Estimate\s*:?\s*(\d+(?:\.\d+)?)", re.IGNORECASE)


class FeedbackError(RuntimeError):
    ...


_client: Optional[OpenAI] = None


def client() -> OpenAI:
    global _client
    if _client is None:
        _client = OpenAI(timeout=TIMEOUT, max_retries=MAX_RETRIES)
    return _client


def _section(raw: str, heading: str) -> Optional[str]:
    m = re.search(_SECTION.format(re.escape(heading)), raw, re.IGNORECASE | re.DOTALL)
    if not m:
        return None
    return m.group(1).strip() or None


def parse_feedback(raw: str) -> Feedback:
    """
    Split the examiner's markdown answer into its sections. Missing
    sections come back as None.
    """
    band = _BAND.search(raw)
    return Feedback(
        corrected_text=_section(raw, "CORRECTED TEXT"),
        error_analysis=_section(raw, "CRITICAL ERROR ANALYSIS"),
        assessment=_section(raw, "LANGUAGE ASSESSMENT"),
        full_narrative=raw,
        band_estimate=band.group(1) if band else None,
    )


def _chat(messages: list) -> str:
    """Single call to OpenAI Chat Completions."""
    log.info("LLM chat call model=%s, messages=%d", MODEL, len(messages))
    resp = client().chat.completions.create(model=MODEL, messages=messages)
    return resp.choices[0].message.content or ""


def fetch_feedback(text: str) -> Feedback:
    """Ask the model for a corrected rewrite plus examiner feedback on ``text``."""
    if not os.getenv("OPENAI_API_KEY"):
        raise FeedbackError("OPENAI_API_KEY is not set")
    messages = [
        {"role": "system", "content": SYSTEM},
        {"role": "user", "content": text},
    ]
    try:
        out = _chat(messages).strip()
    except OpenAIError as e:
        raise FeedbackError(f"LLM feedback failed: {e}") from e
    if not out:
        raise FeedbackError("LLM returned an empty response")
    return parse_feedback(out)
