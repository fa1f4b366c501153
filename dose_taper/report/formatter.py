"""Printable report content assembly.

Builds the text of the taper and switch reports and splits it into pages.
Rendering (PDF, terminal) is left to the caller; every value shown comes
from the case and result models, so no computation happens here.
"""

from datetime import datetime
from typing import List, Optional, Tuple
import unicodedata

from pydantic import BaseModel, ConfigDict, Field

from ..models.patient import SuppressionStatus, SwitchCase, TaperCase
from ..models.result import Mode, SwitchResult, TaperResult


LINES_PER_PAGE = 50
DISCLAIMER = "This plan is a suggestion and does not replace an in-person medical assessment."

CATEGORY_LABELS = {"low": "Low", "moderate": "Moderate", "high": "High"}
STRATEGY_LABELS = {
    "rapid": "Rapid",
    "gradual": "Gradual",
    "slow": "Slow with monitoring",
    "cross_taper": "Cross-taper",
    "partial_washout": "Switch with partial washout",
}
SUPPRESSION_LABELS = {
    SuppressionStatus.YES: "Yes",
    SuppressionStatus.NO: "No",
    SuppressionStatus.UNKNOWN: "Unknown",
}
MODE_LABELS = {Mode.CLINICAL: "Clinical", Mode.PATIENT: "Patient"}

# Characters without an ASCII decomposition
ASCII_REPLACEMENTS = {
    "–": "-", "—": "-", "‘": "'", "’": "'",
    "“": '"', "”": '"', "…": "...", "⚠": "[!]",
    "≤": "<=", "≥": ">=", "→": "->", "µ": "u",
}


class ReportSection(BaseModel):
    model_config = ConfigDict(extra='forbid')

    heading: str
    lines: List[str] = Field(default_factory=list)


class Report(BaseModel):
    """Report content as ordered sections."""
    model_config = ConfigDict(extra='forbid')

    title: str
    subtitle: str
    filename: str
    sections: List[ReportSection] = Field(default_factory=list)
    footer: List[str] = Field(default_factory=list)

    def lines(self) -> List[str]:
        """Flatten the report into plain text lines."""
        out = [self.title, self.subtitle, ""]
        for section in self.sections:
            out.append(f"{section.heading}:")
            out.extend(f"  {line}" for line in section.lines)
            out.append("")
        out.extend(self.footer)
        return out

    def pages(self, lines_per_page: int = LINES_PER_PAGE) -> List[List[str]]:
        """Split the flattened report into pages.

        A section heading is never left alone at the bottom of a page, except
        when pages hold a single line.
        """
        pages: List[List[str]] = [[]]
        for line in self.lines():
            page = pages[-1]
            if len(page) >= lines_per_page:
                # Carrying needs room for the heading and its first line
                strands_heading = lines_per_page > 1 and page[-1].endswith(":")
                carried = [page.pop()] if strands_heading else []
                pages.append(carried)
                page = pages[-1]
            page.append(line)
        return pages

    def to_text(self, lines_per_page: int = LINES_PER_PAGE) -> str:
        """Plain ASCII rendering with form feeds between pages."""
        return "\f".join(
            "\n".join(sanitize(line) for line in page) + "\n"
            for page in self.pages(lines_per_page)
        )


def sanitize(text: str) -> str:
    """Reduce text to printable ASCII for export."""
    for char, replacement in ASCII_REPLACEMENTS.items():
        text = text.replace(char, replacement)
    decomposed = unicodedata.normalize("NFKD", text)
    return decomposed.encode("ascii", "ignore").decode("ascii")


def _format_dose(value: float) -> str:
    return f"{value:g}"


def _identification(patient_name: Optional[str], start_date) -> ReportSection:
    lines = []
    if patient_name:
        lines.append(f"Patient: {patient_name}")
    lines.append(f"Date: {start_date.isoformat()}")
    return ReportSection(heading="Identification", lines=lines)


def _footer(mode: Mode, generated_at: datetime) -> List[str]:
    return [
        DISCLAIMER,
        f"Mode: {MODE_LABELS[Mode(mode)]} | Generated at {generated_at.strftime('%Y-%m-%d %H:%M')}",
    ]


def _slug(value: Optional[str]) -> str:
    return (value or "patient").strip().lower().replace(" ", "-")


def build_taper_report(case: TaperCase, result: TaperResult, generated_at: datetime) -> Report:
    """Assemble the corticosteroid taper report."""
    clinical = []
    if case.age is not None:
        clinical.append(f"Age: {case.age} years")
    if case.sex is not None:
        clinical.append(f"Sex: {'Male' if case.sex.value == 'm' else 'Female'}")
    if case.indication:
        clinical.append(f"Indication: {case.indication}")
    clinical.extend([
        f"Corticosteroid: {case.drug}",
        f"Current dose: {_format_dose(case.dose)} mg ({case.route.value})",
        f"{result.reference_drug} equivalent: {_format_dose(round(result.normalized_dose, 2))} mg",
        f"Duration of use: {case.duration_weeks} weeks",
        f"Recent pulse therapy: {'Yes' if case.pulse_therapy else 'No'}",
    ])
    if case.comorbidities:
        clinical.append("Comorbidities: " + ", ".join(sorted(c.value for c in case.comorbidities)))
    clinical.append(f"Known HPA suppression: {SUPPRESSION_LABELS[case.suppression]}")

    assessment = [
        f"Adrenal suppression risk: {CATEGORY_LABELS[result.category.value]}",
        f"Taper type: {STRATEGY_LABELS[result.strategy.value]}",
        f"Method: {result.method.value}",
    ]
    if result.used_equivalence_fallback:
        assessment.append("Equivalence factor unavailable: dose used as entered.")

    schedule_lines = [f"{'Week':<6}{'Date':<12}{'Dose (mg)':<11}Note"]
    for step in result.schedule.steps:
        schedule_lines.append(
            f"{step.week:<6}{step.date.isoformat():<12}{_format_dose(step.dose):<11}{step.annotation or ''}".rstrip()
        )
    if result.schedule.ceiling_reached:
        schedule_lines.append(
            f"Schedule stopped at the {result.schedule.max_steps}-step limit before discontinuation."
        )

    sections = [
        _identification(case.patient_name, case.start_date),
        ReportSection(heading="Clinical data", lines=clinical),
        ReportSection(heading="Assessment", lines=assessment),
        ReportSection(heading=f"Taper schedule ({result.reference_drug} mg)", lines=schedule_lines),
        ReportSection(heading="Recommendations", lines=[f"- {r}" for r in result.recommendations]),
    ]
    if result.alerts:
        sections.append(ReportSection(heading="Alerts", lines=list(result.alerts)))

    return Report(
        title="Corticosteroid Taper Calculator",
        subtitle="Individual dose reduction plan",
        filename=f"corticosteroid-taper-{_slug(case.patient_name)}-{case.start_date.isoformat()}.txt",
        sections=sections,
        footer=_footer(result.mode, generated_at),
    )


def build_switch_report(case: SwitchCase, result: SwitchResult, generated_at: datetime) -> Report:
    """Assemble the antidepressant switch report."""
    conversion = [
        f"Source: {result.source} {_format_dose(case.dose)}mg/day",
        f"Destination: {result.destination}",
    ]
    if case.duration_weeks is not None:
        conversion.append(f"Duration of current use: {case.duration_weeks} weeks")
    if case.response:
        conversion.append(f"Therapeutic response: {case.response}")
    if case.adverse_events:
        conversion.append(f"Adverse events: {case.adverse_events}")
    if case.switch_goal:
        conversion.append(f"Switch goal: {case.switch_goal}")

    outcome = [
        f"{result.reference_drug} equivalent dose: {_format_dose(result.equivalent_dose)}mg",
        f"Suggested {result.destination} dose: {_format_dose(result.suggested_dose)}mg/day",
        f"Strategy: {STRATEGY_LABELS[result.strategy.value]}",
        result.strategy_detail,
    ]

    plan_lines = [f"{'Week':<6}{'Date':<12}{result.source[:10]:<12}{result.destination[:10]:<12}Note"]
    for step in result.plan:
        plan_lines.append(
            f"{step.week:<6}{step.date.isoformat():<12}{_format_dose(step.source_dose):<12}"
            f"{_format_dose(step.destination_dose):<12}{step.annotation or ''}".rstrip()
        )
    if result.ceiling_reached:
        plan_lines.append("Plan stopped at the step limit before the target dose.")

    sections: List[ReportSection] = [
        _identification(case.patient_name, case.start_date),
        ReportSection(heading="Conversion data", lines=conversion),
        ReportSection(heading="Result", lines=outcome),
        ReportSection(heading="Cross-titration plan (mg/day)", lines=plan_lines),
    ]
    if result.alerts:
        sections.append(ReportSection(heading="Alerts", lines=list(result.alerts)))
    sections.append(ReportSection(heading="Notes", lines=[f"- {n}" for n in result.notes]))

    return Report(
        title="Antidepressant Equivalence Calculator",
        subtitle="Therapeutic transition plan",
        filename=f"antidepressant-switch-{_slug(case.patient_name)}-{case.start_date.isoformat()}.txt",
        sections=sections,
        footer=_footer(result.mode, generated_at),
    )


def page_summary(report: Report) -> Tuple[int, int]:
    """(page count, line count) of a report."""
    return len(report.pages()), len(report.lines())
