"""Tests for report assembly, pagination, history records and export."""

import asyncio
from datetime import datetime

import pytest

from dose_taper.engine.evaluator import evaluate_switch, evaluate_taper
from dose_taper.report.export import export_report
from dose_taper.report.formatter import (
    DISCLAIMER,
    Report,
    ReportSection,
    build_switch_report,
    build_taper_report,
    page_summary,
    sanitize,
)
from dose_taper.report.records import switch_record, taper_record

GENERATED_AT = datetime(2026, 1, 5, 9, 30)


@pytest.fixture
def taper_report(make_taper_case):
    case = make_taper_case(patient_name="Jane Doe", comorbidities=frozenset({"diabetes"}), duration_weeks=20)
    return build_taper_report(case, evaluate_taper(case), GENERATED_AT)


@pytest.fixture
def switch_report(make_switch_case):
    case = make_switch_case(source="paroxetine", destination="sertraline", dose=40)
    return build_switch_report(case, evaluate_switch(case), GENERATED_AT)


def test_taper_report_content(taper_report):
    text = "\n".join(taper_report.lines())
    assert taper_report.filename == "corticosteroid-taper-jane-doe-2026-01-05.txt"
    assert "Patient: Jane Doe" in text
    assert "Adrenal suppression risk: High" in text
    assert "Taper type: Slow with monitoring" in text
    assert "Comorbidities: diabetes" in text
    assert "Alerts:" in text
    assert taper_report.footer[0] == DISCLAIMER
    assert "Generated at 2026-01-05 09:30" in taper_report.footer[1]


def test_switch_report_content(switch_report):
    text = "\n".join(switch_report.lines())
    assert switch_report.filename == "antidepressant-switch-patient-2026-01-05.txt"
    assert "Suggested Sertraline dose: 100mg/day" in text
    assert "Strategy: Cross-taper" in text
    assert "Patient:" not in text


def test_ceiling_is_reported(make_taper_case):
    case = make_taper_case(dose=1000, duration_weeks=1)
    result = evaluate_taper(case, method="percentage", percentage_rate=10)
    report = build_taper_report(case, result, GENERATED_AT)
    assert any("step limit" in line for line in report.lines())


def test_pages_never_strand_a_heading():
    sections = [
        ReportSection(heading=f"Section {n}", lines=[f"line {n}.{i}" for i in range(n + 2)])
        for n in range(12)
    ]
    report = Report(title="T", subtitle="S", filename="t.txt", sections=sections)
    for size in (1, 2, 3, 4, 5, 6, 7, 9, 13):
        pages = report.pages(size)
        assert sum(len(page) for page in pages) == len(report.lines())
        for page in pages:
            assert 0 < len(page) <= size
            if size > 1 and page is not pages[-1]:
                assert not page[-1].endswith(":")


def test_single_page_report(switch_report):
    pages, lines = page_summary(switch_report)
    assert pages == 1
    assert lines == len(switch_report.lines())


def test_sanitize():
    assert sanitize("⚠ ≤5 mg → 250 µg") == "[!] <=5 mg -> 250 ug"
    assert sanitize("Addison’s – café") == "Addison's - cafe"


def test_to_text_is_ascii_with_form_feeds(taper_report):
    text = taper_report.to_text(lines_per_page=20)
    assert text.isascii()
    assert text.count("\f") == len(taper_report.pages(20)) - 1


def test_taper_record(make_taper_case):
    case = make_taper_case(patient_name="Jane Doe")
    record = taper_record(case, evaluate_taper(case))
    assert record.calculator_slug == "corticosteroid-taper"
    assert record.summary == "prednisone 20mg → Risk: high | 15 steps"
    assert record.details_dict()["Taper"] == "slow"
    assert record.patient_name == "Jane Doe"


def test_switch_record(make_switch_case):
    case = make_switch_case()
    record = switch_record(case, evaluate_switch(case))
    assert record.calculator_name == "Antidepressant Equivalence"
    assert record.summary == "Fluoxetine → Escitalopram: 10mg"
    assert list(record.details_dict()) == ["Source", "Destination", "Strategy", "Destination range"]


def test_export_into_directory(taper_report, tmp_path):
    path = asyncio.run(export_report(taper_report, tmp_path))
    assert path == tmp_path / taper_report.filename
    assert path.read_text(encoding="ascii") == taper_report.to_text()


def test_export_to_file_creates_parents(switch_report, tmp_path):
    target = tmp_path / "out" / "switch.txt"
    path = asyncio.run(export_report(switch_report, target))
    assert path == target
    assert "Cross-titration plan" in target.read_text(encoding="ascii")


def test_export_can_be_cancelled(taper_report, tmp_path):
    async def run():
        task = asyncio.ensure_future(export_report(taper_report, tmp_path / "cancelled.txt"))
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    asyncio.run(run())
