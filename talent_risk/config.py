"""Environment settings and the scoring/label tables used by the risk model."""

from __future__ import annotations

import os
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from talent_risk.models import (
    BilingualExposure,
    FirmSize,
    HiringPressure,
    Region,
    RiskTier,
)

load_dotenv()

# --- Runtime ---
TABLES_PATH = os.getenv("TALENT_RISK_TABLES", "")
LOG_LEVEL = os.getenv("TALENT_RISK_LOG_LEVEL", "WARNING").upper()
API_HOST = os.getenv("TALENT_RISK_HOST", "127.0.0.1")
API_PORT = os.getenv("TALENT_RISK_PORT", "8000")  # parsed by the CLI

# --- Questionnaire ---
QUESTION_STEPS = 4
TOTAL_STEPS = QUESTION_STEPS + 1  # four questions, then results


class HeatmapEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    level: str
    label: str
    description: str


class TierText(BaseModel):
    """Display label, short description and narrative for one risk tier."""

    model_config = ConfigDict(frozen=True)

    label: str
    description: str
    analysis: str
    recommendations: tuple[str, ...]


# --- Scoring Configuration ---
class RiskTables(BaseModel):
    """All multipliers, thresholds, labels and narratives in one place.

    Multipliers reflect public Belgian labour-market signals (2024-2025).
    """

    model_config = ConfigDict(frozen=True, validate_default=True)

    base_score: float = 50.0  # neutral baseline

    # Firm size (larger = more complex retention)
    firm_size_risk: Mapping[FirmSize, float] = {
        FirmSize.SMALL: 0.8,    # 50-100: agile but key-person dependent
        FirmSize.MEDIUM: 1.0,   # 100-150: balanced exposure
        FirmSize.LARGE: 1.2,    # 150-250: complex organisational dynamics
    }

    # Share of bilingual clientele (higher = more vulnerable)
    bilingual_risk: Mapping[BilingualExposure, float] = {
        BilingualExposure.LOW: 0.7,     # <25%
        BilingualExposure.MEDIUM: 1.0,  # 25-50%
        BilingualExposure.HIGH: 1.4,    # >50%: critical dependency
    }

    # Regional market pressure (job posting density)
    regional_pressure: Mapping[Region, float] = {
        Region.BRUSSELS: 1.3,
        Region.ANTWERP: 1.2,
        Region.LIEGE: 0.9,
        Region.OTHER: 1.0,
    }

    # Hiring pressure correlation with retention risk
    hiring_pressure_risk: Mapping[HiringPressure, float] = {
        HiringPressure.STABLE: 0.8,
        HiringPressure.MODERATE: 1.0,
        HiringPressure.AGGRESSIVE: 1.3,  # poaching risk
    }

    # Tier thresholds (lower bound inclusive)
    moderate_threshold: float = 40.0
    elevated_threshold: float = 60.0
    structural_threshold: float = 80.0

    # Indicator bar bands
    indicator_moderate_threshold: float = 40.0
    indicator_high_threshold: float = 70.0

    firm_size_labels: Mapping[FirmSize, str] = {
        FirmSize.SMALL: "50–100 professionnels",
        FirmSize.MEDIUM: "100–150 professionnels",
        FirmSize.LARGE: "150–250 professionnels",
    }
    bilingual_labels: Mapping[BilingualExposure, str] = {
        BilingualExposure.LOW: "moins de 25%",
        BilingualExposure.MEDIUM: "25% à 50%",
        BilingualExposure.HIGH: "plus de 50%",
    }
    region_labels: Mapping[Region, str] = {
        Region.BRUSSELS: "bruxelloise",
        Region.ANTWERP: "anversoise",
        Region.LIEGE: "liégeoise",
        Region.OTHER: "belge",
    }

    tiers: Mapping[RiskTier, TierText] = {
        RiskTier.LOW: TierText(
            label="Faible",
            description=(
                "Votre exposition au turnover bilingue est maîtrisée. Maintenez vos pratiques "
                "actuelles tout en surveillant les évolutions du marché."
            ),
            analysis=(
                "Cette position favorable reflète probablement une base salariale compétitive "
                "et une politique de rétention éprouvée."
            ),
            recommendations=(
                "Maintenir la veille concurrentielle sur les évolutions de rémunération dans votre bassin d'emploi",
                "Anticiper les besoins de succession sur les postes bilingues critiques",
                "Évaluer l'automatisation IA des tâches juniors pour libérer capacité",
            ),
        ),
        RiskTier.MODERATE: TierText(
            label="Modéré",
            description=(
                "Risque de départ identifiable sur certains profils critiques. Une stratégie "
                "de rétention proactive est recommandée."
            ),
            analysis=(
                "Des signaux de tension apparaissent sur le marché belge du talent bilingue, "
                "notamment dans votre région."
            ),
            recommendations=(
                "Auditer immédiatement la positionnement salarial vs. marché public (LinkedIn, Glassdoor)",
                "Identifier les profils à risque de départ (antériorité, exposition client)",
                "Étudier la viabilité EOR pour les rôles de soutien non-stratégiques",
            ),
        ),
        RiskTier.ELEVATED: TierText(
            label="Élevé",
            description=(
                "Vulnérabilité significative aux départs. Intervention stratégique urgente "
                "nécessaire pour sécuriser vos talents bilingues."
            ),
            analysis=(
                "La combinaison de votre taille, exposition bilingue et localisation crée une "
                "vulnérabilité opérationnelle significative."
            ),
            recommendations=(
                "Mettre en œuvre un plan de rétention d'urgence (ajustement salarial, évolution de carrière)",
                "Activer des canaux EOR pour décompresser la pression de recrutement local",
                "Déployer l'automatisation IA sur les processus documentaires à fort volume",
                "Étudier la mobilité interne pour préserver le capital bilingue",
            ),
        ),
        RiskTier.STRUCTURAL: TierText(
            label="Risque structurel",
            description=(
                "Exposition critique à la pénurie de talents bilingues. Reconfiguration de "
                "votre modèle d'accès au talent requise."
            ),
            analysis=(
                "Votre modèle d'accès au talent est sous tension structurelle. La pénurie de "
                "profils bilingues qualifiés menace votre capacité de service."
            ),
            recommendations=(
                "Reconfigurer immédiatement la stratégie de rémunération (prime bilingue significative)",
                "Implémenter un modèle EOR multicountry pour accéder au talent européen",
                "Accélérer la transformation IA pour réduire la dépendance aux effectifs",
                "Restructurer l'organisation pour isoler les fonctions bilingues critiques",
            ),
        ),
    }

    market_context: str = (
        "Les données publiques de recrutement indiquent une vélocité de hiring de +23% pour "
        "les profils juridiques bilingues FR-NL à Bruxelles (LinkedIn, 2024). La prime de "
        "bilinguisme atteint 20-35% dans les cabinets d'avocats et d'audit (sources publiques). "
        "Sans intervention, le risque de turnover sélectif sur vos talents bilingues "
        "s'accroît de 15-25% annuellement."
    )

    # Market heatmap (modelled from public signals), in display order
    heatmap: Mapping[Region, HeatmapEntry] = {
        Region.BRUSSELS: HeatmapEntry(level="high", label="Tension critique", description="Prime bilingue +25-35%"),
        Region.ANTWERP: HeatmapEntry(level="high", label="Tension élevée", description="Prime bilingue +20-30%"),
        Region.LIEGE: HeatmapEntry(level="moderate", label="Tension modérée", description="Prime bilingue +15-25%"),
        Region.OTHER: HeatmapEntry(level="moderate", label="Tension variable", description="Prime bilingue +10-20%"),
    }

    @field_validator(
        "firm_size_risk",
        "bilingual_risk",
        "regional_pressure",
        "hiring_pressure_risk",
        "firm_size_labels",
        "bilingual_labels",
        "region_labels",
        "tiers",
        "heatmap",
    )
    @classmethod
    def _read_only(cls, value: Mapping) -> Mapping:
        return MappingProxyType(dict(value))

    @model_validator(mode="after")
    def _check_coverage(self) -> RiskTables:
        required = {
            "firm_size_risk": FirmSize,
            "bilingual_risk": BilingualExposure,
            "regional_pressure": Region,
            "hiring_pressure_risk": HiringPressure,
            "firm_size_labels": FirmSize,
            "bilingual_labels": BilingualExposure,
            "region_labels": Region,
            "tiers": RiskTier,
            "heatmap": Region,
        }
        for name, enum_type in required.items():
            missing = set(enum_type) - set(getattr(self, name))
            if missing:
                values = ", ".join(sorted(m.value for m in missing))
                raise ValueError(f"{name} is missing entries for: {values}")
        if not (self.moderate_threshold <= self.elevated_threshold <= self.structural_threshold):
            raise ValueError("tier thresholds must be non-decreasing")
        return self


def load_tables(path: str | Path) -> RiskTables:
    """Read a JSON tables file; omitted keys keep their defaults."""
    return RiskTables.model_validate_json(Path(path).read_text(encoding="utf-8"))


TABLES = RiskTables()


def resolve_tables(path: str | Path | None = None) -> RiskTables:
    """Tables from an explicit path, else from TALENT_RISK_TABLES, else the built-in ones."""
    path = path or TABLES_PATH
    return load_tables(path) if path else TABLES
