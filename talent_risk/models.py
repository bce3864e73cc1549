"""Pydantic v2 models for questionnaire answers, assessments, and generated text."""

from __future__ import annotations

from enum import Enum
from html import escape
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from pydantic.alias_generators import to_camel


class FirmSize(str, Enum):
    SMALL = "small"
    MEDIUM = "medium"
    LARGE = "large"


class BilingualExposure(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Region(str, Enum):
    BRUSSELS = "brussels"
    ANTWERP = "antwerp"
    LIEGE = "liege"
    OTHER = "other"


class HiringPressure(str, Enum):
    STABLE = "stable"
    MODERATE = "moderate"
    AGGRESSIVE = "aggressive"


class RiskTier(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    ELEVATED = "elevated"
    STRUCTURAL = "structural"


class IndicatorBand(str, Enum):
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class InvalidInput(ValueError):
    """Raised when an answer is missing or outside its enumerated domain."""

    def __init__(self, message: str, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


# Field name -> enum type, in questionnaire order.
QUESTION_FIELDS: dict[str, type[Enum]] = {
    "firm_size": FirmSize,
    "bilingual_exposure": BilingualExposure,
    "region": Region,
    "hiring_pressure": HiringPressure,
}


class SessionInput(BaseModel):
    """Answers collected during one questionnaire session.

    Fields start unset and are filled one by one; scoring requires all four.
    """

    model_config = ConfigDict(populate_by_name=True, validate_assignment=True)

    firm_size: FirmSize | None = Field(default=None, alias="firmSize")
    bilingual_exposure: BilingualExposure | None = Field(default=None, alias="bilingualExposure")
    region: Region | None = None
    hiring_pressure: HiringPressure | None = Field(default=None, alias="hiringPressure")

    @classmethod
    def from_answers(cls, answers: Mapping[str, Any]) -> SessionInput:
        """Build from a raw mapping (snake_case or camelCase keys), raising InvalidInput."""
        try:
            return cls.model_validate(dict(answers))
        except ValidationError as exc:
            fields = sorted({_field_name(err["loc"]) for err in exc.errors()})
            raise InvalidInput(
                f"Invalid value for {', '.join(fields)}", fields=fields
            ) from exc

    def set_answer(self, field: str, value: Any) -> None:
        if field not in QUESTION_FIELDS:
            raise InvalidInput(f"Unknown question: {field}", fields=[field])
        try:
            setattr(self, field, value)
        except ValidationError as exc:
            allowed = ", ".join(m.value for m in QUESTION_FIELDS[field])
            raise InvalidInput(
                f"Invalid value {value!r} for {field} (expected one of: {allowed})",
                fields=[field],
            ) from exc

    def missing_fields(self) -> list[str]:
        return [name for name in QUESTION_FIELDS if getattr(self, name) is None]

    @property
    def is_complete(self) -> bool:
        return not self.missing_fields()


def _field_name(loc: tuple) -> str:
    name = str(loc[0]) if loc else "input"
    aliases = {"firmSize": "firm_size", "bilingualExposure": "bilingual_exposure", "hiringPressure": "hiring_pressure"}
    return aliases.get(name, name)


class Indicators(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    bilingual_pressure: float  # 0 - 100
    scarcity_exposure: float
    ai_leverage: float
    eor_feasibility: float


class RiskAssessment(BaseModel):
    model_config = ConfigDict(frozen=True)

    score: float  # 0 - 100
    tier: RiskTier
    label: str
    description: str
    indicators: Indicators


class HeatmapCell(BaseModel):
    model_config = ConfigDict(frozen=True)

    region: Region
    region_label: str
    level: str
    label: str
    description: str


class Interpretation(BaseModel):
    """Narrative generated for one assessment."""

    model_config = ConfigDict(frozen=True)

    diagnostic: str
    recommendations: list[str]
    market_context: str
    # Substring of the diagnostic that is emphasised in HTML
    risk_phrase: str = ""

    def as_text(self) -> str:
        lines = [f"Diagnostic stratégique : {self.diagnostic}", "", "Recommandations prioritaires :"]
        lines.extend(f"- {item}" for item in self.recommendations)
        lines.extend(["", f"Contexte marché : {self.market_context}"])
        return "\n".join(lines)

    def as_html(self) -> str:
        diagnostic = escape(self.diagnostic)
        if self.risk_phrase:
            phrase = escape(self.risk_phrase)
            diagnostic = diagnostic.replace(phrase, f"<strong>{phrase}</strong>", 1)
        items = "".join(f"<li>{escape(item)}</li>" for item in self.recommendations)
        return (
            f"<p><strong>Diagnostic stratégique :</strong> {diagnostic}</p>"
            f"<p><strong>Recommandations prioritaires :</strong></p><ul>{items}</ul>"
            f"<p><strong>Contexte marché :</strong> {escape(self.market_context)}</p>"
        )
