"""
Assessment Models

Questions, organization profiles, answers and answer sets.

Answers are a tagged union resolved once at the boundary by parse_answer();
scoring, derivation and sector analysis never inspect raw JSON values.
"""

import unicodedata
from datetime import datetime, timezone
from typing import Annotated, Any, List, Literal, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..constants import (
    FULL_COMPLIANCE_ANSWER,
    NEGATIVE_RESPONSES,
    PARTIAL_COMPLIANCE_ANSWER,
)
from ..exceptions import AnswerLengthError, InvalidAnswerError
from .enums import AnswerKind, CompanySize


def normalize_answer_value(value: str) -> str:
    """NFC-normalize, trim and casefold an answer string for vocabulary matching."""
    return unicodedata.normalize("NFC", value).strip().casefold()


class Question(BaseModel):
    """A single questionnaire item. Immutable once composed."""

    model_config = ConfigDict(frozen=True)

    id: int
    prompt: str
    kind: AnswerKind
    options: List[str] = Field(default_factory=list)
    sector: str = "base"
    requires_evidence: bool = False
    evidence_if_answer: Optional[str] = None
    description: str = ""


class OrganizationProfile(BaseModel):
    """Declared structure of an assessed organization."""

    organization_id: str
    sectors: List[str] = Field(default_factory=list)
    custom_sectors: List[str] = Field(default_factory=list)
    size: CompanySize = CompanySize.SMALL

    @field_validator("custom_sectors")
    @classmethod
    def strip_blank_custom_sectors(cls, v: List[str]) -> List[str]:
        return [name.strip() for name in v if name and name.strip()]


# ============================================================================
# Answer tagged union
# ============================================================================


class AnswerBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    def values(self) -> List[str]:
        return []

    def normalized_values(self) -> List[str]:
        return [normalize_answer_value(v) for v in self.values()]

    @property
    def is_answered(self) -> bool:
        return any(v.strip() for v in self.values())

    @property
    def is_full_compliance(self) -> bool:
        return False

    @property
    def is_partial_compliance(self) -> bool:
        return False

    @property
    def is_negative(self) -> bool:
        """True when any value belongs to the negative-response vocabulary."""
        return any(v in NEGATIVE_RESPONSES for v in self.normalized_values())


class Unanswered(AnswerBase):
    kind: Literal["unanswered"] = "unanswered"


class _ScalarAnswer(AnswerBase):
    def _scalar(self) -> str:
        raise NotImplementedError

    def values(self) -> List[str]:
        return [self._scalar()]

    @property
    def is_full_compliance(self) -> bool:
        return normalize_answer_value(self._scalar()) == FULL_COMPLIANCE_ANSWER

    @property
    def is_partial_compliance(self) -> bool:
        return normalize_answer_value(self._scalar()) == PARTIAL_COMPLIANCE_ANSWER


class TextAnswer(_ScalarAnswer):
    kind: Literal["text"] = "text"
    text: str

    def _scalar(self) -> str:
        return self.text


class SingleChoice(_ScalarAnswer):
    kind: Literal["single"] = "single"
    choice: str

    def _scalar(self) -> str:
        return self.choice


class MultiChoice(AnswerBase):
    """Multi-select answers never count as full or partial compliance."""

    kind: Literal["multiple"] = "multiple"
    choices: List[str]

    def values(self) -> List[str]:
        return list(self.choices)


Answer = Annotated[
    Union[Unanswered, TextAnswer, SingleChoice, MultiChoice],
    Field(discriminator="kind"),
]

RawAnswer = Union[None, str, Sequence[str]]


def parse_answer(raw: Any, question: Optional[Question] = None) -> Union[
    Unanswered, TextAnswer, SingleChoice, MultiChoice
]:
    """
    Resolve a raw submitted value into the answer tagged union.

    Args:
        raw: None, a string, or a list of strings
        question: Question the value answers; its kind decides text vs choice

    Returns:
        One of Unanswered, TextAnswer, SingleChoice, MultiChoice

    Raises:
        InvalidAnswerError: If the value is neither a string nor a list of strings
    """
    if isinstance(raw, (Unanswered, TextAnswer, SingleChoice, MultiChoice)):
        return raw

    if raw is None:
        return Unanswered()

    if isinstance(raw, str):
        if not raw.strip():
            return Unanswered()
        if question is not None and question.kind == AnswerKind.TEXT:
            return TextAnswer(text=raw)
        if question is not None and question.kind == AnswerKind.MULTIPLE:
            return MultiChoice(choices=[raw.strip()])
        return SingleChoice(choice=raw.strip())

    if isinstance(raw, (list, tuple)):
        if not all(isinstance(item, str) for item in raw):
            raise InvalidAnswerError("Multi-choice answers must contain only strings")
        choices = [item.strip() for item in raw if item.strip()]
        if not choices:
            return Unanswered()
        return MultiChoice(choices=choices)

    raise InvalidAnswerError(f"Unsupported answer type: {type(raw).__name__}")


def parse_answers(raw_answers: Sequence[Any], catalog: Sequence[Question]) -> List[
    Union[Unanswered, TextAnswer, SingleChoice, MultiChoice]
]:
    """
    Resolve a positional answer array against its catalog snapshot.

    Shorter arrays are padded with Unanswered; longer arrays are rejected.

    Raises:
        AnswerLengthError: If there are more answers than questions
        InvalidAnswerError: If any value has an unsupported type
    """
    if len(raw_answers) > len(catalog):
        raise AnswerLengthError(expected=len(catalog), actual=len(raw_answers))

    answers = [parse_answer(raw, question) for raw, question in zip(raw_answers, catalog)]
    answers.extend(Unanswered() for _ in range(len(catalog) - len(answers)))
    return answers


class AnswerSet(BaseModel):
    """One saved version of an organization's questionnaire answers."""

    organization_id: str
    answers: List[Answer] = Field(default_factory=list)
    is_complete: bool = False
    compliance_score: int = Field(0, ge=0, le=100)
    observations: Optional[str] = None
    version: int = 1
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class SectorAnalysis(BaseModel):
    """Per-sector compliance slice."""

    name: str
    score: int = Field(ge=0, le=100)
    answered_count: int
    total_count: int
    gaps: List[str] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
