from __future__ import annotations

import pytest

from talent_risk.models import FirmSize, InvalidInput, RiskTier, SessionInput
from talent_risk.session import Questionnaire


def _complete(wizard: Questionnaire, answers: list[str]) -> None:
    for value in answers:
        wizard.answer(value)
        wizard.next_step()


def test_walkthrough_reaches_results_step() -> None:
    wizard = Questionnaire()
    assert wizard.current_step == 1
    assert wizard.current_field == "firm_size"
    assert wizard.progress == pytest.approx(20)

    _complete(wizard, ["medium", "medium", "other", "moderate"])

    assert wizard.finished
    assert wizard.current_field is None
    assert wizard.progress == pytest.approx(100)

    assessment, interpretation = wizard.assess()
    assert assessment.score == 50
    assert assessment.tier == RiskTier.MODERATE
    assert interpretation.recommendations


def test_cannot_advance_without_answer() -> None:
    wizard = Questionnaire()
    assert not wizard.can_advance()
    with pytest.raises(InvalidInput, match="firm_size"):
        wizard.next_step()
    assert wizard.current_step == 1


def test_invalid_answer_is_rejected_and_not_recorded() -> None:
    wizard = Questionnaire()
    with pytest.raises(InvalidInput, match="expected one of: small, medium, large"):
        wizard.answer("huge")
    assert wizard.answers.firm_size is None


def test_previous_step_keeps_answers() -> None:
    wizard = Questionnaire()
    _complete(wizard, ["large", "high"])
    assert wizard.current_step == 3

    wizard.previous_step()
    wizard.previous_step()
    wizard.previous_step()
    assert wizard.current_step == 1
    assert wizard.answers.firm_size == FirmSize.LARGE
    assert wizard.can_advance()


def test_results_step_accepts_no_answer() -> None:
    wizard = Questionnaire()
    _complete(wizard, ["small", "low", "liege", "stable"])
    with pytest.raises(InvalidInput):
        wizard.answer("small")
    assert wizard.next_step() == wizard.total_steps


def test_assess_before_completion_raises() -> None:
    wizard = Questionnaire()
    wizard.answer("small")
    with pytest.raises(InvalidInput, match="Missing answers"):
        wizard.assess()


def test_from_answers_accepts_camel_case_keys() -> None:
    session = SessionInput.from_answers(
        {"firmSize": "small", "bilingualExposure": "high", "region": "antwerp", "hiringPressure": "stable"}
    )
    assert session.is_complete


def test_from_answers_reports_bad_fields() -> None:
    with pytest.raises(InvalidInput) as exc_info:
        SessionInput.from_answers({"firmSize": "tiny", "region": "ghent"})
    assert exc_info.value.fields == ["firm_size", "region"]


def test_unknown_question_is_rejected() -> None:
    with pytest.raises(InvalidInput):
        SessionInput().set_answer("budget", "high")
