"""Multiplier scorer — turns questionnaire answers into a RiskAssessment."""

from __future__ import annotations

import logging

from talent_risk.config import TABLES, RiskTables
from talent_risk.models import (
    BilingualExposure,
    FirmSize,
    HiringPressure,
    IndicatorBand,
    Indicators,
    InvalidInput,
    Region,
    RiskAssessment,
    RiskTier,
    SessionInput,
)

logger = logging.getLogger(__name__)


def clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return min(high, max(low, value))


def raw_score(session: SessionInput, tables: RiskTables = TABLES) -> float:
    """Base score times the four answer multipliers, before clamping."""
    require_complete(session)
    return (
        tables.base_score
        * tables.firm_size_risk[session.firm_size]
        * tables.bilingual_risk[session.bilingual_exposure]
        * tables.regional_pressure[session.region]
        * tables.hiring_pressure_risk[session.hiring_pressure]
    )


def classify_tier(score: float, tables: RiskTables = TABLES) -> RiskTier:
    if score >= tables.structural_threshold:
        return RiskTier.STRUCTURAL
    elif score >= tables.elevated_threshold:
        return RiskTier.ELEVATED
    elif score >= tables.moderate_threshold:
        return RiskTier.MODERATE
    else:
        return RiskTier.LOW


def derive_indicators(score: float, session: SessionInput) -> Indicators:
    """Modelled sub-indicators; the bonuses are fixed business constants."""
    require_complete(session)
    brussels_bonus = 15 if session.region == Region.BRUSSELS else 0
    large_bonus = 20 if session.firm_size == FirmSize.LARGE else 0
    eor_base = 85 if session.bilingual_exposure == BilingualExposure.HIGH else 60
    aggressive_bonus = 15 if session.hiring_pressure == HiringPressure.AGGRESSIVE else 0

    return Indicators(
        bilingual_pressure=clamp(score * 1.1 + brussels_bonus),
        scarcity_exposure=clamp(score * 1.2),
        ai_leverage=clamp(100 - score * 0.3 + large_bonus),
        eor_feasibility=clamp(eor_base + aggressive_bonus),
    )


def indicator_band(value: float, tables: RiskTables = TABLES) -> IndicatorBand:
    if value < tables.indicator_moderate_threshold:
        return IndicatorBand.LOW
    elif value < tables.indicator_high_threshold:
        return IndicatorBand.MODERATE
    return IndicatorBand.HIGH


def score(session: SessionInput, tables: RiskTables = TABLES) -> RiskAssessment:
    """Score a completed session. Raises InvalidInput if any answer is unset."""
    value = clamp(raw_score(session, tables))
    tier = classify_tier(value, tables)
    text = tables.tiers[tier]

    logger.debug("Scored %s -> %.2f (%s)", session.model_dump(mode="json"), value, tier.value)

    return RiskAssessment(
        score=value,
        tier=tier,
        label=text.label,
        description=text.description,
        indicators=derive_indicators(value, session),
    )


def require_complete(session: SessionInput) -> None:
    missing = session.missing_fields()
    if missing:
        raise InvalidInput(f"Missing answers: {', '.join(missing)}", fields=missing)
