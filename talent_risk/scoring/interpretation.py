"""Narrative generation: one fixed template per tier, plus the regional heatmap."""

from __future__ import annotations

from talent_risk.config import TABLES, RiskTables
from talent_risk.models import (
    HeatmapCell,
    Interpretation,
    RiskAssessment,
    SessionInput,
)
from talent_risk.scoring.engine import require_complete


def interpret(
    session: SessionInput,
    assessment: RiskAssessment,
    tables: RiskTables = TABLES,
) -> Interpretation:
    """Build the diagnostic, recommendations and market context for an assessment."""
    require_complete(session)
    text = tables.tiers[assessment.tier]

    risk_phrase = f"niveau de risque {text.label.lower()}"
    diagnostic = (
        f"Votre cabinet de {tables.firm_size_labels[session.firm_size]} "
        f"exposé à {tables.bilingual_labels[session.bilingual_exposure]} de clientèle bilingue "
        f"en région {tables.region_labels[session.region]} "
        f"fait face à un {risk_phrase}. "
        f"{text.analysis}"
    )

    return Interpretation(
        diagnostic=diagnostic,
        recommendations=list(text.recommendations),
        market_context=tables.market_context,
        risk_phrase=risk_phrase,
    )


def market_heatmap(tables: RiskTables = TABLES) -> list[HeatmapCell]:
    return [
        HeatmapCell(
            region=region,
            region_label=tables.region_labels[region],
            level=entry.level,
            label=entry.label,
            description=entry.description,
        )
        for region, entry in tables.heatmap.items()
    ]
