"""
HTTP surface for the retention risk model.

- Keep request handling thin and typed.
- Delegate scoring and narrative generation to talent_risk.scoring.
- Missing or unknown answers are client errors (400).
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from talent_risk.config import TABLES, TABLES_PATH, RiskTables, resolve_tables
from talent_risk.models import (
    HeatmapCell,
    IndicatorBand,
    Indicators,
    InvalidInput,
    RiskTier,
    SessionInput,
)
from talent_risk.scoring.engine import indicator_band, score
from talent_risk.scoring.interpretation import interpret, market_heatmap

logger = logging.getLogger(__name__)


class AssessRequest(BaseModel):
    # Untyped so that wrong values reach SessionInput and get a 400, not a 422.
    firmSize: Any = None
    bilingualExposure: Any = None
    region: Any = None
    hiringPressure: Any = None


class InterpretationPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    diagnostic: str
    recommendations: list[str]
    market_context: str = Field(alias="marketContext")


class AssessResponse(BaseModel):
    score: float
    tier: RiskTier
    label: str
    description: str
    indicators: Indicators
    bands: dict[str, IndicatorBand]
    interpretation: InterpretationPayload
    interpretationText: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    if getattr(app.state, "tables", None) is None:
        try:
            app.state.tables = resolve_tables()
        except (OSError, ValidationError) as exc:
            logger.error("Cannot load tables from %s: %s", TABLES_PATH, exc)
            raise
    yield


app = FastAPI(title="Bilingual talent retention risk", version="1.0.0", lifespan=lifespan)


def _tables(request: Request) -> RiskTables:
    # Tests and embedders may inject alternative tables on app.state.
    tables = getattr(request.app.state, "tables", None)
    return tables if tables is not None else TABLES


@app.get("/healthz")
def healthz() -> dict[str, str]:
    return {"status": "ok"}


@app.post("/assess", response_model=AssessResponse)
def assess(payload: AssessRequest, request: Request) -> AssessResponse:
    tables = _tables(request)
    try:
        session = SessionInput.from_answers(payload.model_dump())
        assessment = score(session, tables)
    except InvalidInput as exc:
        logger.info("Rejected assessment request: %s", exc)
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    interpretation = interpret(session, assessment, tables)
    bands = {
        name: indicator_band(value, tables)
        for name, value in assessment.indicators.model_dump(by_alias=True).items()
    }
    return AssessResponse(
        score=assessment.score,
        tier=assessment.tier,
        label=assessment.label,
        description=assessment.description,
        indicators=assessment.indicators,
        bands=bands,
        interpretation=InterpretationPayload(
            diagnostic=interpretation.diagnostic,
            recommendations=interpretation.recommendations,
            market_context=interpretation.market_context,
        ),
        interpretationText=interpretation.as_text(),
    )


@app.get("/heatmap", response_model=list[HeatmapCell])
def heatmap(request: Request) -> list[HeatmapCell]:
    return market_heatmap(_tables(request))
