"""Tests for risk and strategy classification."""

import pytest

from dose_taper.data.drug_loader import ANTIDEPRESSANT_TABLE
from dose_taper.engine.classifier import (
    TAPER_RULES,
    classify,
    classify_switch,
    serotonergic_overlap,
    strategy_for,
)
from dose_taper.models.patient import SuppressionStatus
from dose_taper.models.result import RiskCategory, SwitchStrategy, TaperStrategy

YES = SuppressionStatus.YES
NO = SuppressionStatus.NO
UNKNOWN = SuppressionStatus.UNKNOWN


@pytest.mark.parametrize(
    "dose,weeks,pulse,suppression,expected",
    [
        # Rule 1: known suppression beats everything
        (1, 0, False, YES, RiskCategory.HIGH),
        # Rule 2 boundaries
        (20, 3, False, UNKNOWN, RiskCategory.HIGH),
        (19.99, 3, False, UNKNOWN, RiskCategory.MODERATE),
        (20, 2, False, UNKNOWN, RiskCategory.LOW),
        (25, 2, False, NO, RiskCategory.LOW),
        # Rule 3: pulse therapy regardless of dose
        (2, 1, True, NO, RiskCategory.HIGH),
        # Rule 4 boundaries
        (7.5, 3, False, NO, RiskCategory.MODERATE),
        (7.49, 3, False, NO, RiskCategory.LOW),
        # Rule 5: any dose for four weeks
        (1, 4, False, NO, RiskCategory.MODERATE),
        # Default
        (5, 2, False, UNKNOWN, RiskCategory.LOW),
    ],
)
def test_classification_rules(dose, weeks, pulse, suppression, expected):
    assert classify(dose, weeks, pulse, suppression) == expected


def test_rule_order_is_priority_order():
    names = [rule.name for rule in TAPER_RULES]
    assert names == [
        "known_suppression",
        "high_dose_three_weeks",
        "pulse_therapy",
        "moderate_dose_three_weeks",
        "prolonged_use",
    ]


def test_high_dose_input_is_never_downgraded_by_later_rules():
    # Matches rules 2, 4 and 5; the first match decides
    assert classify(40, 6, False, NO) == RiskCategory.HIGH


def test_suppression_no_is_not_high():
    assert classify(5, 1, False, NO) == RiskCategory.LOW


@pytest.mark.parametrize(
    "category,strategy",
    [
        (RiskCategory.LOW, TaperStrategy.RAPID),
        (RiskCategory.MODERATE, TaperStrategy.GRADUAL),
        (RiskCategory.HIGH, TaperStrategy.SLOW),
    ],
)
def test_strategy_lookup(category, strategy):
    assert strategy_for(category) == strategy


def test_serotonergic_overlap():
    t = ANTIDEPRESSANT_TABLE
    assert serotonergic_overlap(t.require("fluoxetine"), t.require("venlafaxine"))
    assert serotonergic_overlap(t.require("duloxetine"), t.require("sertraline"))
    assert not serotonergic_overlap(t.require("fluoxetine"), t.require("mirtazapine"))
    assert not serotonergic_overlap(t.require("amitriptyline"), t.require("sertraline"))


def test_switch_strategy():
    escitalopram = ANTIDEPRESSANT_TABLE.require("escitalopram")
    assert classify_switch("fluoxetine", escitalopram) == SwitchStrategy.PARTIAL_WASHOUT
    assert classify_switch("sertraline", escitalopram) == SwitchStrategy.CROSS_TAPER
