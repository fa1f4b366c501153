"""
Pytest fixtures for dose_taper tests.

Provides a fixed start date, case factories and a synthetic drug table so
engine behaviour can be checked without the shipped reference data.
"""

from datetime import date

import pytest

from dose_taper.data.drug_loader import DrugTable
from dose_taper.models.patient import SuppressionStatus, SwitchCase, TaperCase


START = date(2026, 1, 5)


@pytest.fixture
def start_date() -> date:
    return START


@pytest.fixture
def make_taper_case():
    """Factory for TaperCase with sensible defaults."""
    def _make(**overrides) -> TaperCase:
        fields = {
            "drug": "prednisone",
            "dose": 20,
            "duration_weeks": 3,
            "start_date": START,
            "pulse_therapy": False,
            "suppression": SuppressionStatus.UNKNOWN,
        }
        fields.update(overrides)
        return TaperCase(**fields)
    return _make


@pytest.fixture
def make_switch_case():
    """Factory for SwitchCase with sensible defaults."""
    def _make(**overrides) -> SwitchCase:
        fields = {
            "source": "fluoxetine",
            "destination": "escitalopram",
            "dose": 20,
            "start_date": START,
        }
        fields.update(overrides)
        return SwitchCase(**fields)
    return _make


@pytest.fixture
def synthetic_table() -> DrugTable:
    """Two-drug glucocorticoid table with round numbers."""
    return DrugTable.from_mapping(
        {
            "refasone": {"name": "Refasone", "class": "Glucocorticoid", "equivalence_factor": 10},
            "halfasone": {"name": "Halfasone", "class": "Glucocorticoid", "equivalence_factor": 5},
        },
        reference="refasone",
    )
