"""Command-line interface for the corticosteroid taper and antidepressant switch calculators."""

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from dose_taper.config import get_settings
from dose_taper.data.corticosteroids import INDICATIONS
from dose_taper.data.drug_loader import ANTIDEPRESSANT_TABLE, CORTICOSTEROID_TABLE
from dose_taper.engine.evaluator import evaluate_switch, evaluate_taper
from dose_taper.evaluation.validation import (
    CaseValidationError,
    validate_percentage_rate,
    validate_switch_form,
    validate_taper_form,
)
from dose_taper.models.drug import DrugClass
from dose_taper.models.patient import Comorbidity, Route, SuppressionStatus
from dose_taper.models.result import Mode, ReductionMethod
from dose_taper.report.export import export_report
from dose_taper.report.formatter import (
    CATEGORY_LABELS,
    STRATEGY_LABELS,
    build_switch_report,
    build_taper_report,
    page_summary,
)
from dose_taper.report.records import switch_record, taper_record


# Rich console for better output
console = Console()

TABLES = {
    "corticosteroids": CORTICOSTEROID_TABLE,
    "antidepressants": ANTIDEPRESSANT_TABLE,
}
CATEGORY_COLORS = {"low": "green", "moderate": "yellow", "high": "red"}


def configure_logging(level: str) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def fail(message: str) -> None:
    """Print a validation error and exit with status 1."""
    console.print(f"[red]Error: {message}[/red]")
    raise SystemExit(1)


def print_record(record) -> None:
    """Show the calculation history record as JSON."""
    console.print(Panel(
        json.dumps(record.model_dump(mode="json"), indent=2, ensure_ascii=False),
        title="History record",
    ))


def run_export(report, export_path: Optional[str], save: bool) -> None:
    """Export the report to --export, or into the configured report directory with --save."""
    if export_path:
        destination = Path(export_path)
    elif save:
        destination = Path(get_settings().report_dir) / report.filename
    else:
        return

    path = asyncio.run(export_report(report, destination))
    pages, _ = page_summary(report)
    console.print(f"[yellow]Report saved to {path} ({pages} page(s))[/yellow]")


@click.group()
@click.option("--log-level", default=None, help="Override DOSE_TAPER_LOG_LEVEL")
def cli(log_level: Optional[str]):
    """Clinical dose taper and drug equivalence calculators."""
    configure_logging(log_level or get_settings().log_level)


@click.command()
@click.option("--catalog", type=click.Choice(sorted(TABLES)), default="corticosteroids",
              help="Reference table to list")
@click.option("--class", "drug_class", type=click.Choice([c.value for c in DrugClass]), default=None,
              help="Only list drugs of this class")
def drugs(catalog: str, drug_class: Optional[str]):
    """List drugs in a reference table."""
    table = TABLES[catalog]
    profiles = {key: profile for key, profile in table.items()}
    if drug_class:
        selected = table.by_class(DrugClass(drug_class))
        profiles = {key: profile for key, profile in profiles.items() if profile in selected}

    view = Table(title=f"{catalog.title()} (reference: {table.reference.name})")
    view.add_column("Key", style="cyan")
    view.add_column("Drug", style="green")
    view.add_column("Class", style="magenta")
    view.add_column("Equivalent dose", style="yellow")
    view.add_column("Range", style="blue")
    view.add_column("Metabolism")

    for key, profile in profiles.items():
        view.add_row(
            key,
            profile.name,
            profile.drug_class.value,
            f"{profile.equivalence_factor:g}mg",
            profile.dose_range,
            profile.metabolism or "-",
        )

    console.print(view)


@click.command()
@click.option("--drug", required=True, type=click.Choice(CORTICOSTEROID_TABLE.keys(), case_sensitive=False),
              help="Corticosteroid in use")
@click.option("--dose", required=True, help="Current daily dose in mg")
@click.option("--weeks", "duration_weeks", required=True, help="Duration of use in weeks")
@click.option("--pulse/--no-pulse", default=False, help="Recent pulse therapy")
@click.option("--suppression", type=click.Choice([s.value for s in SuppressionStatus]), default="unknown",
              help="Known HPA-axis suppression")
@click.option("--comorbidity", "comorbidities", multiple=True,
              type=click.Choice([c.value for c in Comorbidity]), help="Comorbidity (repeatable)")
@click.option("--route", type=click.Choice([r.value for r in Route]), default="oral")
@click.option("--method", type=click.Choice([m.value for m in ReductionMethod]), default=None,
              help="Reduction method")
@click.option("--rate", default=None, help="Percentage reduction per step")
@click.option("--mode", type=click.Choice([m.value for m in Mode]), default=None, help="Message phrasing")
@click.option("--start-date", default=None, help="Start date (YYYY-MM-DD), default today")
@click.option("--patient", default=None, help="Patient name (display only)")
@click.option("--age", default=None, help="Patient age (display only)")
@click.option("--sex", type=click.Choice(["m", "f"]), default=None)
@click.option("--indication", type=click.Choice(INDICATIONS, case_sensitive=False), default=None)
@click.option("--export", "export_path", default=None, help="Write the report to this file or directory")
@click.option("--save", is_flag=True, help="Write the report into DOSE_TAPER_REPORT_DIR")
def taper(drug: str, dose: str, duration_weeks: str, pulse: bool, suppression: str,
          comorbidities: Tuple[str, ...], route: str, method: Optional[str], rate: Optional[str],
          mode: Optional[str], start_date: Optional[str], patient: Optional[str], age: Optional[str],
          sex: Optional[str], indication: Optional[str], export_path: Optional[str], save: bool):
    """Calculate a corticosteroid taper schedule."""
    settings = get_settings()
    method = ReductionMethod(method or settings.default_method)
    mode = Mode(mode or settings.default_mode)

    try:
        case = validate_taper_form({
            "drug": drug,
            "dose": dose,
            "duration_weeks": duration_weeks,
            "pulse_therapy": pulse,
            "suppression": suppression,
            "comorbidities": comorbidities,
            "route": route,
            "start_date": start_date,
            "patient_name": patient,
            "age": age,
            "sex": sex,
            "indication": indication,
        })
        percentage_rate = None
        if method == ReductionMethod.PERCENTAGE:
            percentage_rate = validate_percentage_rate(rate if rate is not None else settings.percentage_rate)
    except CaseValidationError as e:
        fail(e.message)

    result = evaluate_taper(case, method=method, percentage_rate=percentage_rate, mode=mode)

    color = CATEGORY_COLORS[result.category.value]
    console.print(Panel.fit(
        f"[bold {color}]Adrenal suppression risk: {CATEGORY_LABELS[result.category.value]}[/bold {color}]\n"
        f"Taper type: {STRATEGY_LABELS[result.strategy.value]}\n"
        f"{result.reference_drug} equivalent: {result.normalized_dose:g}mg",
        title="Corticosteroid Taper"
    ))
    if result.used_equivalence_fallback:
        console.print("[yellow]No equivalence factor for this drug; dose used as entered.[/yellow]")

    schedule_table = Table(title=f"Taper schedule ({result.reference_drug} mg)")
    schedule_table.add_column("Week", style="cyan")
    schedule_table.add_column("Date", style="blue")
    schedule_table.add_column("Dose (mg)", style="green")
    schedule_table.add_column("Note", style="magenta")
    for step in result.schedule.steps:
        schedule_table.add_row(str(step.week), step.date.isoformat(), f"{step.dose:g}", step.annotation or "")
    console.print(schedule_table)

    if result.schedule.ceiling_reached:
        console.print(
            f"[bold red]Schedule stopped at the {result.schedule.max_steps}-step limit "
            f"before reaching discontinuation.[/bold red]"
        )

    console.print("\n[bold]Recommendations:[/bold]")
    for recommendation in result.recommendations:
        console.print(f"- {recommendation}")
    if result.alerts:
        console.print("\n[bold red]Alerts:[/bold red]")
        for alert in result.alerts:
            console.print(f"[red]{alert}[/red]")

    print_record(taper_record(case, result))

    if export_path or save:
        run_export(build_taper_report(case, result, datetime.now()), export_path, save)


@click.command()
@click.option("--source", required=True, type=click.Choice(ANTIDEPRESSANT_TABLE.keys(), case_sensitive=False),
              help="Current antidepressant")
@click.option("--destination", required=True, type=click.Choice(ANTIDEPRESSANT_TABLE.keys(), case_sensitive=False),
              help="Antidepressant to switch to")
@click.option("--dose", required=True, help="Current daily dose of the source drug in mg")
@click.option("--weeks", "duration_weeks", default=None, help="Duration of current use in weeks")
@click.option("--mode", type=click.Choice([m.value for m in Mode]), default=None, help="Message phrasing")
@click.option("--start-date", default=None, help="Start date (YYYY-MM-DD), default today")
@click.option("--patient", default=None, help="Patient name (display only)")
@click.option("--response", default=None, help="Therapeutic response (display only)")
@click.option("--adverse-events", default=None, help="Adverse events on the current drug (display only)")
@click.option("--goal", default=None, help="Goal of the switch (display only)")
@click.option("--export", "export_path", default=None, help="Write the report to this file or directory")
@click.option("--save", is_flag=True, help="Write the report into DOSE_TAPER_REPORT_DIR")
def switch(source: str, destination: str, dose: str, duration_weeks: Optional[str], mode: Optional[str],
           start_date: Optional[str], patient: Optional[str], response: Optional[str],
           adverse_events: Optional[str], goal: Optional[str], export_path: Optional[str], save: bool):
    """Calculate an antidepressant switch."""
    mode = Mode(mode or get_settings().default_mode)

    try:
        case = validate_switch_form({
            "source": source,
            "destination": destination,
            "dose": dose,
            "duration_weeks": duration_weeks,
            "start_date": start_date,
            "patient_name": patient,
            "response": response,
            "adverse_events": adverse_events,
            "switch_goal": goal,
        })
    except CaseValidationError as e:
        fail(e.message)

    result = evaluate_switch(case, mode=mode)

    console.print(Panel.fit(
        f"[bold green]{result.source} {case.dose:g}mg → {result.destination} "
        f"{result.suggested_dose:g}mg/day[/bold green]\n"
        f"{result.reference_drug} equivalent: {result.equivalent_dose:g}mg\n"
        f"Range: {result.destination_range}\n"
        f"Strategy: {STRATEGY_LABELS[result.strategy.value]}\n\n"
        f"{result.strategy_detail}",
        title="Antidepressant Switch"
    ))

    plan_table = Table(title="Cross-titration plan (mg/day)")
    plan_table.add_column("Week", style="cyan")
    plan_table.add_column("Date", style="blue")
    plan_table.add_column(result.source, style="yellow")
    plan_table.add_column(result.destination, style="green")
    plan_table.add_column("Note", style="magenta")
    for step in result.plan:
        plan_table.add_row(
            str(step.week), step.date.isoformat(), f"{step.source_dose:g}",
            f"{step.destination_dose:g}", step.annotation or "",
        )
    console.print(plan_table)

    if result.alerts:
        console.print("\n[bold red]Alerts:[/bold red]")
        for alert in result.alerts:
            console.print(f"[red]{alert}[/red]")
    console.print("\n[bold]Notes:[/bold]")
    for note in result.notes:
        console.print(f"- {note}")

    print_record(switch_record(case, result))

    if export_path or save:
        run_export(build_switch_report(case, result, datetime.now()), export_path, save)


# Add commands to CLI group
cli.add_command(drugs)
cli.add_command(taper)
cli.add_command(switch)


if __name__ == "__main__":
    cli()
