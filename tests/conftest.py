from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from talent_risk.api.app import app
from talent_risk.models import SessionInput


@pytest.fixture
def neutral_session() -> SessionInput:
    """Every multiplier is 1.0."""
    return SessionInput(
        firm_size="medium",
        bilingual_exposure="medium",
        region="other",
        hiring_pressure="moderate",
    )


@pytest.fixture
def extreme_session() -> SessionInput:
    return SessionInput(
        firm_size="large",
        bilingual_exposure="high",
        region="brussels",
        hiring_pressure="aggressive",
    )


@pytest.fixture
def client():
    yield TestClient(app)
    if hasattr(app.state, "tables"):
        delattr(app.state, "tables")
