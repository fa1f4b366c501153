"""Tests for the command-line interface."""

import pytest
from click.testing import CliRunner

import cli as cli_module
from cli import cli
from dose_taper.config import reset_settings


@pytest.fixture
def runner(monkeypatch):
    for name in ("DOSE_TAPER_DEFAULT_MODE", "DOSE_TAPER_DEFAULT_METHOD", "DOSE_TAPER_PERCENTAGE_RATE"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(cli_module.console, "width", 200)
    reset_settings()
    yield CliRunner()
    reset_settings()


def test_drugs_lists_corticosteroids(runner):
    result = runner.invoke(cli, ["drugs"])
    assert result.exit_code == 0
    assert "Dexamethasone" in result.output
    assert "prednisone" in result.output


def test_drugs_lists_antidepressants(runner):
    result = runner.invoke(cli, ["drugs", "--catalog", "antidepressants"])
    assert result.exit_code == 0
    assert "Vortioxetine" in result.output


def test_taper(runner):
    result = runner.invoke(cli, [
        "taper", "--drug", "prednisone", "--dose", "20", "--weeks", "3",
        "--start-date", "2026-01-05", "--comorbidity", "diabetes",
    ])
    assert result.exit_code == 0, result.output
    assert "Adrenal suppression risk: High" in result.output
    assert "initial dose" in result.output
    assert "discontinuation" in result.output
    assert "corticosteroid-taper" in result.output


def test_taper_percentage(runner):
    result = runner.invoke(cli, [
        "taper", "--drug", "prednisone", "--dose", "20", "--weeks", "1",
        "--method", "percentage", "--rate", "10", "--mode", "patient",
    ])
    assert result.exit_code == 0, result.output
    assert "17.5" in result.output


@pytest.mark.parametrize(
    "args,message",
    [
        (["--dose", "0", "--weeks", "3"], "Dose must be greater than zero."),
        (["--dose", "abc", "--weeks", "3"], "Dose must be a number."),
        (["--dose", "20", "--weeks", "3", "--method", "percentage", "--rate", "150"],
         "Percentage reduction must be between 0 and 100."),
    ],
)
def test_taper_validation_errors(runner, args, message):
    result = runner.invoke(cli, ["taper", "--drug", "prednisone"] + args)
    assert result.exit_code == 1
    assert message in result.output


def test_switch(runner):
    result = runner.invoke(cli, [
        "switch", "--source", "fluoxetine", "--destination", "escitalopram",
        "--dose", "20", "--start-date", "2026-01-05",
    ])
    assert result.exit_code == 0, result.output
    assert "10mg/day" in result.output
    assert "source stopped" in result.output


def test_switch_same_drug(runner):
    result = runner.invoke(cli, ["switch", "--source", "sertraline", "--destination", "sertraline", "--dose", "50"])
    assert result.exit_code == 1
    assert "Source and destination must be different." in result.output


def test_taper_export(runner, tmp_path):
    result = runner.invoke(cli, [
        "taper", "--drug", "prednisone", "--dose", "20", "--weeks", "3",
        "--start-date", "2026-01-05", "--export", str(tmp_path),
    ])
    assert result.exit_code == 0, result.output
    exported = list(tmp_path.iterdir())
    assert [p.name for p in exported] == ["corticosteroid-taper-patient-2026-01-05.txt"]
    assert exported[0].read_text(encoding="ascii").startswith("Corticosteroid Taper Calculator")


def test_drugs_filtered_by_class(runner):
    result = runner.invoke(cli, ["drugs", "--catalog", "antidepressants", "--class", "SNRI"])
    assert result.exit_code == 0
    assert "Duloxetine" in result.output
    assert "Sertraline" not in result.output


def test_switch_save_uses_report_dir(runner, tmp_path, monkeypatch):
    monkeypatch.setenv("DOSE_TAPER_REPORT_DIR", str(tmp_path / "reports"))
    reset_settings()
    result = runner.invoke(cli, [
        "switch", "--source", "paroxetine", "--destination", "sertraline", "--dose", "40",
        "--start-date", "2026-01-05", "--patient", "Jane Doe", "--adverse-events", "insomnia", "--save",
    ])
    assert result.exit_code == 0, result.output
    saved = tmp_path / "reports" / "antidepressant-switch-jane-doe-2026-01-05.txt"
    text = saved.read_text(encoding="ascii")
    assert "Adverse events: insomnia" in text
    assert "Patient: Jane Doe" in text


def test_taper_rejects_infinite_dose(runner):
    result = runner.invoke(cli, ["taper", "--drug", "prednisone", "--dose", "inf", "--weeks", "3"])
    assert result.exit_code == 1
    assert "Dose must be a number." in result.output
