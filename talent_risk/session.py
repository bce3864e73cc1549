"""Questionnaire state: four gated question steps followed by the results step."""

from __future__ import annotations

from typing import Any

from talent_risk.config import QUESTION_STEPS, TABLES, TOTAL_STEPS, RiskTables
from talent_risk.models import (
    QUESTION_FIELDS,
    Interpretation,
    InvalidInput,
    RiskAssessment,
    SessionInput,
)
from talent_risk.scoring.engine import score
from talent_risk.scoring.interpretation import interpret

QUESTION_ORDER = list(QUESTION_FIELDS)


class Questionnaire:
    """Caller-owned wizard. Steps 1-4 ask one question each; step 5 shows results."""

    def __init__(self, answers: SessionInput | None = None) -> None:
        self.answers = answers or SessionInput()
        self.current_step = 1
        self.total_steps = TOTAL_STEPS

    @property
    def current_field(self) -> str | None:
        if self.current_step > QUESTION_STEPS:
            return None
        return QUESTION_ORDER[self.current_step - 1]

    @property
    def progress(self) -> float:
        return self.current_step / self.total_steps * 100

    @property
    def finished(self) -> bool:
        return self.current_step == self.total_steps

    def answer(self, value: Any) -> None:
        field = self.current_field
        if field is None:
            raise InvalidInput("No question on the results step")
        self.answers.set_answer(field, value)

    def can_advance(self) -> bool:
        field = self.current_field
        if field is None:
            return False
        return getattr(self.answers, field) is not None

    def next_step(self) -> int:
        if self.finished:
            return self.current_step
        if not self.can_advance():
            raise InvalidInput(f"Answer {self.current_field} before continuing", fields=[self.current_field])
        self.current_step += 1
        return self.current_step

    def previous_step(self) -> int:
        if self.current_step > 1:
            self.current_step -= 1
        return self.current_step

    def assess(self, tables: RiskTables = TABLES) -> tuple[RiskAssessment, Interpretation]:
        assessment = score(self.answers, tables)
        return assessment, interpret(self.answers, assessment, tables)
