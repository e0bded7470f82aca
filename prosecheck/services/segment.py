from __future__ import annotations
from typing import List, Set
import re

# a newline followed by one or more (whitespace-only) blank lines
PARAGRAPH_BREAK = re.compile(r"\n(?:\s*\n)+")
# delimiters are captured so punctuation survives as its own token
TOKEN_SPLIT = re.compile(r"(\s+|[.,!?;:\"'()\[\]{}])")
PUNCT_TOKEN = re.compile(r"^[.,!?;:\"'()\[\]{}]$")
WORD_SPLIT = re.compile(r"\W+")


def split_paragraphs(text: str) -> List[str]:
    """
    Split text on blank lines into trimmed, non-empty paragraph blocks.
    """
    if not text:
        return []
    return [p.strip() for p in PARAGRAPH_BREAK.split(text) if p.strip()]


def tokenize(text: str) -> List[str]:
    """
    Word and punctuation tokens in order. Whitespace is dropped, each
    punctuation mark is kept as a token of its own.
    """
    return [t for t in TOKEN_SPLIT.split(text) if t.strip()]


def is_punctuation(token: str) -> bool:
    return bool(PUNCT_TOKEN.match(token))


def word_set(text: str) -> Set[str]:
    return {w for w in WORD_SPLIT.split(text.lower()) if w}
