"""
Unit tests for assessment, task and audit models.

Tests answer parsing into the tagged union, compliance classification and
immutability of audit records.
"""

import pytest
from pydantic import ValidationError as PydanticValidationError

from privacywatch.exceptions import AnswerLengthError, InvalidAnswerError
from privacywatch.models import (
    AnswerKind,
    AnswerSet,
    AuditEvent,
    AuditRecord,
    MultiChoice,
    Question,
    RemediationTask,
    RequestContext,
    SingleChoice,
    TaskPriority,
    TaskStatus,
    TextAnswer,
    Unanswered,
    parse_answer,
    parse_answers,
)

SINGLE = Question(id=1, prompt="Possui política?", kind=AnswerKind.SINGLE, options=["sim", "não", "parcial"])
TEXT = Question(id=6, prompt="Por qual motivo?", kind=AnswerKind.TEXT)
MULTI = Question(id=5, prompt="Quais dados?", kind=AnswerKind.MULTIPLE, options=["Nome", "CPF"])


@pytest.mark.unit
class TestParseAnswer:
    """Test resolution of raw values into answer variants."""

    def test_none_is_unanswered(self) -> None:
        assert isinstance(parse_answer(None, SINGLE), Unanswered)

    def test_blank_string_is_unanswered(self) -> None:
        assert isinstance(parse_answer("   ", SINGLE), Unanswered)

    def test_empty_list_is_unanswered(self) -> None:
        assert isinstance(parse_answer([], MULTI), Unanswered)

    def test_single_choice(self) -> None:
        answer = parse_answer("sim", SINGLE)
        assert isinstance(answer, SingleChoice)
        assert answer.is_full_compliance

    def test_text_question_gives_text_answer(self) -> None:
        answer = parse_answer("Para emissão de nota fiscal", TEXT)
        assert isinstance(answer, TextAnswer)
        assert answer.is_answered
        assert not answer.is_full_compliance

    def test_list_gives_multi_choice(self) -> None:
        answer = parse_answer(["Nome", "CPF"], MULTI)
        assert isinstance(answer, MultiChoice)
        assert answer.values() == ["Nome", "CPF"]

    def test_string_on_multi_question_wraps_in_list(self) -> None:
        answer = parse_answer("Nome", MULTI)
        assert isinstance(answer, MultiChoice)
        assert answer.values() == ["Nome"]

    def test_already_parsed_is_returned(self) -> None:
        answer = SingleChoice(choice="parcial")
        assert parse_answer(answer, SINGLE) is answer

    def test_unsupported_type_rejected(self) -> None:
        with pytest.raises(InvalidAnswerError):
            parse_answer(42, SINGLE)

    def test_list_with_non_strings_rejected(self) -> None:
        with pytest.raises(InvalidAnswerError):
            parse_answer(["Nome", 3], MULTI)


@pytest.mark.unit
class TestAnswerClassification:
    """Test full, partial and negative classification."""

    def test_case_and_whitespace_insensitive(self) -> None:
        assert parse_answer("  SIM ", SINGLE).is_full_compliance
        assert parse_answer("Parcial", SINGLE).is_partial_compliance

    @pytest.mark.parametrize("value", ["não", "Não", "nao", "nao-sei"])
    def test_negative_vocabulary(self, value: str) -> None:
        assert parse_answer(value, SINGLE).is_negative

    def test_other_values_are_not_negative(self) -> None:
        assert not parse_answer("talvez", SINGLE).is_negative
        assert not Unanswered().is_negative

    def test_multi_choice_negative_when_any_choice_negative(self) -> None:
        assert MultiChoice(choices=["Nome", "não"]).is_negative

    def test_multi_choice_never_full_compliance(self) -> None:
        answer = MultiChoice(choices=["sim"])
        assert not answer.is_full_compliance
        assert not answer.is_partial_compliance


@pytest.mark.unit
class TestParseAnswers:
    """Test positional parsing against a catalog."""

    def test_short_array_padded(self) -> None:
        answers = parse_answers(["sim"], [SINGLE, TEXT, MULTI])
        assert len(answers) == 3
        assert isinstance(answers[1], Unanswered)
        assert isinstance(answers[2], Unanswered)

    def test_long_array_rejected(self) -> None:
        with pytest.raises(AnswerLengthError) as exc_info:
            parse_answers(["sim", "não"], [SINGLE])
        assert exc_info.value.expected == 1
        assert exc_info.value.actual == 2

    def test_answer_set_keeps_variants(self) -> None:
        answer_set = AnswerSet(
            organization_id="org-1",
            answers=[SingleChoice(choice="sim"), Unanswered(), MultiChoice(choices=["CPF"])],
        )
        restored = AnswerSet.model_validate(answer_set.model_dump())
        assert isinstance(restored.answers[0], SingleChoice)
        assert isinstance(restored.answers[1], Unanswered)
        assert isinstance(restored.answers[2], MultiChoice)


@pytest.mark.unit
class TestRemediationTask:
    def test_due_date_from_offset(self) -> None:
        task = RemediationTask(
            organization_id="org-1",
            template_key="dpo",
            title="Designar DPO",
            category="governance",
            priority=TaskPriority.HIGH,
            due_in_days=15,
        )
        assert (task.due_date - task.created_at).days == 15
        assert task.status == TaskStatus.PENDING
        assert task.is_open


@pytest.mark.unit
class TestAuditRecord:
    def test_from_event_copies_context(self) -> None:
        context = RequestContext(actor_id="u1", ip_address="192.168.0.1", user_agent="browser")
        event = AuditEvent(action="submit", resource_type="task", resource_id="t1")
        record = AuditRecord.from_event(event, context)

        assert record.actor_id == "u1"
        assert record.ip_address == "192.168.0.1"
        assert record.user_agent == "browser"
        assert record.action == "submit"

    def test_records_are_immutable(self) -> None:
        record = AuditRecord(action="create", resource_type="document")
        with pytest.raises(PydanticValidationError):
            record.action = "delete"
