"""CLI entrypoint: run the questionnaire, score answers, and show the market heatmap."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from talent_risk.config import API_HOST, API_PORT, LOG_LEVEL, TABLES_PATH, RiskTables, resolve_tables
from talent_risk.models import (
    QUESTION_FIELDS,
    IndicatorBand,
    Interpretation,
    InvalidInput,
    RiskAssessment,
    RiskTier,
    SessionInput,
)
from talent_risk.scoring.engine import indicator_band, score
from talent_risk.scoring.interpretation import interpret, market_heatmap
from talent_risk.session import Questionnaire

console = Console()

TIER_COLORS = {
    RiskTier.STRUCTURAL: "bold red",
    RiskTier.ELEVATED: "red",
    RiskTier.MODERATE: "yellow",
    RiskTier.LOW: "green",
}

BAND_COLORS = {
    IndicatorBand.HIGH: "red",
    IndicatorBand.MODERATE: "yellow",
    IndicatorBand.LOW: "green",
}

LEVEL_COLORS = {"high": "red", "moderate": "yellow"}

QUESTIONS = {
    "firm_size": "Taille du cabinet",
    "bilingual_exposure": "Part de clientèle bilingue",
    "region": "Région principale",
    "hiring_pressure": "Pression de recrutement du marché",
}

INDICATOR_NAMES = {
    "bilingual_pressure": "Pression bilingue",
    "scarcity_exposure": "Exposition à la pénurie",
    "ai_leverage": "Levier IA",
    "eor_feasibility": "Faisabilité EOR",
}


def print_assessment(assessment: RiskAssessment, interpretation: Interpretation, tables: RiskTables) -> None:
    """Render score, indicator bars and the narrative."""
    style = TIER_COLORS.get(assessment.tier, "white")
    console.print(Panel(
        assessment.description,
        title=f"[{style}]{assessment.label}[/{style}] - Score: {assessment.score:.1f}",
        border_style=style.split()[-1],
    ))

    table = Table(show_header=True, show_lines=False, padding=(0, 1))
    table.add_column("Indicateur", style="white", min_width=24)
    table.add_column("Valeur", justify="right", min_width=6)
    table.add_column("", min_width=20)

    for name, value in assessment.indicators.model_dump().items():
        color = BAND_COLORS[indicator_band(value, tables)]
        bar = "█" * round(value / 5)
        table.add_row(
            INDICATOR_NAMES.get(name, name),
            f"[{color}]{round(value)}%[/{color}]",
            f"[{color}]{bar}[/{color}]",
        )

    console.print(table)
    console.print(f"\n[bold]Diagnostic stratégique :[/bold] {interpretation.diagnostic}\n")
    console.print("[bold]Recommandations prioritaires :[/bold]")
    for item in interpretation.recommendations:
        console.print(f"  • {item}")
    console.print(f"\n[bold]Contexte marché :[/bold] {interpretation.market_context}\n")


def print_heatmap(tables: RiskTables) -> None:
    table = Table(title="Carte de tension du marché bilingue", show_lines=True)
    table.add_column("Région", style="cyan")
    table.add_column("Tension", justify="center")
    table.add_column("Prime")

    for cell in market_heatmap(tables):
        color = LEVEL_COLORS.get(cell.level, "white")
        table.add_row(cell.region_label, f"[{color}]{cell.label}[/{color}]", cell.description)

    console.print(table)
    console.print()


def cmd_assess(args: argparse.Namespace, tables: RiskTables) -> None:
    """Score answers given as options."""
    session = SessionInput.from_answers({
        "firm_size": args.firm_size,
        "bilingual_exposure": args.bilingual_exposure,
        "region": args.region,
        "hiring_pressure": args.hiring_pressure,
    })
    assessment = score(session, tables)
    interpretation = interpret(session, assessment, tables)

    if args.json:
        payload = {
            **assessment.model_dump(mode="json", by_alias=True),
            "interpretation": interpretation.model_dump(mode="json"),
            "interpretationText": interpretation.as_text(),
        }
        console.print_json(json.dumps(payload, ensure_ascii=False))
    elif args.html:
        console.print(interpretation.as_html(), markup=False, highlight=False, soft_wrap=True)
    else:
        print_assessment(assessment, interpretation, tables)
        print_heatmap(tables)


def cmd_wizard(args: argparse.Namespace, tables: RiskTables) -> None:
    """Ask the four questions one step at a time; '<' goes back."""
    wizard = Questionnaire()

    while not wizard.finished:
        field = wizard.current_field
        choices = [member.value for member in QUESTION_FIELDS[field]]
        if wizard.current_step > 1:
            choices.append("<")

        console.print(
            f"\n[bold cyan]Étape {wizard.current_step}/{wizard.total_steps - 1}[/bold cyan] "
            f"[dim]({wizard.progress:.0f}%)[/dim]"
        )
        current = getattr(wizard.answers, field)
        extra = {"default": current.value} if current is not None else {}
        answer = Prompt.ask(QUESTIONS[field], choices=choices, console=console, **extra)
        if answer == "<":
            wizard.previous_step()
            continue

        wizard.answer(answer)
        wizard.next_step()

    console.print()
    assessment, interpretation = wizard.assess(tables)
    print_assessment(assessment, interpretation, tables)
    print_heatmap(tables)


def cmd_heatmap(args: argparse.Namespace, tables: RiskTables) -> None:
    print_heatmap(tables)


def cmd_serve(args: argparse.Namespace, tables: RiskTables) -> None:
    import uvicorn

    from talent_risk.api.app import app

    app.state.tables = tables
    uvicorn.run(app, host=args.host, port=args.port, log_level=LOG_LEVEL.lower())


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="talent-risk",
        description="Bilingual talent retention risk assessment",
    )
    parser.add_argument("--tables", help="JSON file overriding the scoring tables")
    sub = parser.add_subparsers(dest="command")

    # assess subcommand
    ass = sub.add_parser("assess", help="Score a firm profile given as options")
    ass.add_argument("--firm-size", help="small | medium | large")
    ass.add_argument("--bilingual-exposure", help="low | medium | high")
    ass.add_argument("--region", help="brussels | antwerp | liege | other")
    ass.add_argument("--hiring-pressure", help="stable | moderate | aggressive")
    fmt = ass.add_mutually_exclusive_group()
    fmt.add_argument("--json", action="store_true", help="Print the result as JSON")
    fmt.add_argument("--html", action="store_true", help="Print the interpretation as HTML")

    sub.add_parser("wizard", help="Answer the questionnaire interactively")
    sub.add_parser("heatmap", help="Show regional bilingual market tension")

    srv = sub.add_parser("serve", help="Run the HTTP API")
    srv.add_argument("--host", default=API_HOST)
    srv.add_argument("--port", type=int, default=API_PORT)

    return parser


COMMANDS = {
    "assess": cmd_assess,
    "wizard": cmd_wizard,
    "heatmap": cmd_heatmap,
    "serve": cmd_serve,
}


def main(argv: list[str] | None = None) -> None:
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        console.print(f"[red]Unknown log level in TALENT_RISK_LOG_LEVEL: {escape(LOG_LEVEL)}[/red]")
        sys.exit(1)

    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )

    parser = build_parser()
    args = parser.parse_args(argv)

    handler = COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        sys.exit(1)

    try:
        tables = resolve_tables(args.tables)
    except (OSError, ValidationError) as exc:
        source = args.tables or TABLES_PATH
        console.print(f"[red]Cannot load tables from {escape(source)}: {escape(str(exc))}[/red]")
        sys.exit(1)

    try:
        handler(args, tables)
    except InvalidInput as exc:
        console.print(f"[red]{escape(str(exc))}[/red]")
        sys.exit(2)


if __name__ == "__main__":
    main()
