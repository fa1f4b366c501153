"""Calculation history records produced alongside each evaluation."""

from ..models.patient import SwitchCase, TaperCase
from ..models.result import CalculationRecord, SwitchResult, TaperResult


TAPER_CALCULATOR = ("Corticosteroid Taper", "corticosteroid-taper")
SWITCH_CALCULATOR = ("Antidepressant Equivalence", "antidepressant-equivalence")


def taper_record(case: TaperCase, result: TaperResult) -> CalculationRecord:
    """Summarize a taper evaluation for the history store."""
    name, slug = TAPER_CALCULATOR
    steps = len(result.schedule.steps)
    return CalculationRecord(
        calculator_name=name,
        calculator_slug=slug,
        patient_name=case.patient_name,
        date=case.start_date,
        summary=f"{case.drug} {case.dose:g}mg → Risk: {result.category.value} | {steps} steps",
        details=(
            ("Corticosteroid", case.drug),
            ("Current dose", f"{case.dose:g} mg"),
            ("Risk", result.category.value),
            ("Taper", result.strategy.value),
            ("Steps", str(steps)),
            ("Duration", f"{case.duration_weeks} weeks"),
        ),
    )


def switch_record(case: SwitchCase, result: SwitchResult) -> CalculationRecord:
    """Summarize a switch evaluation for the history store."""
    name, slug = SWITCH_CALCULATOR
    return CalculationRecord(
        calculator_name=name,
        calculator_slug=slug,
        patient_name=case.patient_name,
        date=case.start_date,
        summary=f"{result.source} → {result.destination}: {result.suggested_dose:g}mg",
        details=(
            ("Source", f"{result.source} {case.dose:g}mg"),
            ("Destination", f"{result.destination} {result.suggested_dose:g}mg"),
            ("Strategy", result.strategy.value),
            ("Destination range", result.destination_range),
        ),
    )
