from __future__ import annotations
import logging
from typing import Dict, List, Literal, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from prosecheck.core.config import BAND_MIN, BAND_MAX

log = logging.getLogger("models")

IssueType = Literal["grammar", "spelling", "punctuation", "style", "clarity", "vocabulary"]
IssueSeverity = Literal["critical", "major", "minor", "suggestion"]

ISSUE_TYPES: tuple = ("grammar", "spelling", "punctuation", "style", "clarity", "vocabulary")
SEVERITIES: tuple = ("critical", "major", "minor", "suggestion")


class _Model(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


class TextIssue(_Model):
    id: str
    type: IssueType
    severity: IssueSeverity
    original: str
    suggestion: str
    explanation: str
    start_index: int = Field(ge=0)
    end_index: int

    @model_validator(mode="after")
    def _non_empty_span(self):
        if self.end_index <= self.start_index:
            raise ValueError(f"empty span {self.start_index}..{self.end_index}")
        return self


class TextBlock(_Model):
    id: str
    text: str
    corrected: Optional[str] = None
    issues: List[TextIssue] = Field(default_factory=list)

    @model_validator(mode="after")
    def _issues_match_text(self):
        for issue in self.issues:
            if issue.end_index > len(self.text):
                raise ValueError(f"{issue.id} ends past the block ({issue.end_index} > {len(self.text)})")
            if self.text[issue.start_index:issue.end_index] != issue.original:
                raise ValueError(f"{issue.id} does not match the block text at its offsets")
        return self

    def sorted_issues(self) -> List[TextIssue]:
        """Issues in reading order (stable on equal start offsets)."""
        return sorted(self.issues, key=lambda i: i.start_index)


def _zeroed(keys) -> Dict[str, int]:
    return {k: 0 for k in keys}


class TextMetrics(_Model):
    readability_score: int
    grammar_score: int
    clarity_score: int
    vocabulary_score: int
    style_consistency_score: int
    sentence_variety_score: int
    issues_by_type: Dict[IssueType, int] = Field(default_factory=lambda: _zeroed(ISSUE_TYPES))
    issues_by_severity: Dict[IssueSeverity, int] = Field(default_factory=lambda: _zeroed(SEVERITIES))
    ielts_estimate: Optional[float] = None
    professor_feedback: str = ""
    readability_details: Dict[str, float] = Field(default_factory=dict)

    @field_validator("issues_by_type")
    @classmethod
    def _all_types(cls, v):
        return {k: v.get(k, 0) for k in ISSUE_TYPES}

    @field_validator("issues_by_severity")
    @classmethod
    def _all_severities(cls, v):
        return {k: v.get(k, 0) for k in SEVERITIES}


class TextAnalysisResult(_Model):
    blocks: List[TextBlock] = Field(default_factory=list)
    metrics: TextMetrics
    overall_score: int
    ielts_feedback: Optional[str] = None


class Feedback(_Model):
    """What the feedback collaborator returns; every field may be missing."""
    corrected_text: Optional[str] = None
    error_analysis: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("error_analysis", "errorAnalysis", "errorAnalysisText"),
        serialization_alias="errorAnalysis",
    )
    assessment: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("assessment", "assessmentText"),
        serialization_alias="assessment",
    )
    full_narrative: Optional[str] = None
    band_estimate: Optional[float] = None

    @field_validator("band_estimate", mode="before")
    @classmethod
    def _band_in_range(cls, v):
        if v is None:
            return None
        try:
            band = float(v)
        except (TypeError, ValueError):
            log.warning("Ignoring unparsable band estimate %r", v)
            return None
        if not BAND_MIN <= band <= BAND_MAX:
            log.warning("Ignoring band estimate %s outside %s-%s", band, BAND_MIN, BAND_MAX)
            return None
        return band
