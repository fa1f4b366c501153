"""Risk and strategy classification.

Rules are evaluated in order and the first match wins. Conditions overlap,
so the order of ``TAPER_RULES`` is part of the behaviour.
"""

from typing import Callable, NamedTuple, Tuple
import logging

from ..models.drug import DrugProfile, SEROTONERGIC_CLASSES
from ..models.patient import SuppressionStatus
from ..models.result import RiskCategory, TaperStrategy, SwitchStrategy


logger = logging.getLogger("dose_taper.engine.classifier")

HIGH_RISK_DOSE = 20.0
MODERATE_RISK_DOSE = 7.5
MIN_RISK_WEEKS = 3
PROLONGED_USE_WEEKS = 4

# Source drugs whose half-life calls for a washout instead of a cross-taper
WASHOUT_SOURCES = frozenset({"fluoxetine"})


class TaperFacts(NamedTuple):
    normalized_dose: float
    duration_weeks: int
    pulse_therapy: bool
    suppression: SuppressionStatus


class Rule(NamedTuple):
    name: str
    applies: Callable[[TaperFacts], bool]
    category: RiskCategory


TAPER_RULES: Tuple[Rule, ...] = (
    Rule(
        "known_suppression",
        lambda f: f.suppression == SuppressionStatus.YES,
        RiskCategory.HIGH,
    ),
    Rule(
        "high_dose_three_weeks",
        lambda f: f.normalized_dose >= HIGH_RISK_DOSE and f.duration_weeks >= MIN_RISK_WEEKS,
        RiskCategory.HIGH,
    ),
    Rule(
        "pulse_therapy",
        lambda f: f.pulse_therapy,
        RiskCategory.HIGH,
    ),
    Rule(
        "moderate_dose_three_weeks",
        lambda f: f.normalized_dose >= MODERATE_RISK_DOSE and f.duration_weeks >= MIN_RISK_WEEKS,
        RiskCategory.MODERATE,
    ),
    Rule(
        "prolonged_use",
        lambda f: f.duration_weeks >= PROLONGED_USE_WEEKS,
        RiskCategory.MODERATE,
    ),
)

STRATEGY_BY_CATEGORY = {
    RiskCategory.LOW: TaperStrategy.RAPID,
    RiskCategory.MODERATE: TaperStrategy.GRADUAL,
    RiskCategory.HIGH: TaperStrategy.SLOW,
}


def classify(
    normalized_dose: float,
    duration_weeks: int,
    pulse_therapy: bool,
    suppression: SuppressionStatus,
) -> RiskCategory:
    """Classify adrenal suppression risk from the prednisone-equivalent dose."""
    facts = TaperFacts(normalized_dose, duration_weeks, pulse_therapy, SuppressionStatus(suppression))
    for rule in TAPER_RULES:
        if rule.applies(facts):
            logger.info("Risk rule %s matched %s -> %s", rule.name, facts, rule.category.value)
            return rule.category

    logger.info("No risk rule matched %s -> low", facts)
    return RiskCategory.LOW


def strategy_for(category: RiskCategory) -> TaperStrategy:
    """Taper strategy for a risk category."""
    return STRATEGY_BY_CATEGORY[RiskCategory(category)]


def serotonergic_overlap(source: DrugProfile, destination: DrugProfile) -> bool:
    """True when both drugs are SSRIs or SNRIs."""
    return source.drug_class in SEROTONERGIC_CLASSES and destination.drug_class in SEROTONERGIC_CLASSES


def classify_switch(source_key: str, destination: DrugProfile) -> SwitchStrategy:
    """Choose the switch strategy for a source drug key."""
    if source_key in WASHOUT_SOURCES:
        strategy = SwitchStrategy.PARTIAL_WASHOUT
    else:
        strategy = SwitchStrategy.CROSS_TAPER
    logger.info("Switch %s -> %s uses strategy %s", source_key, destination.name, strategy.value)
    return strategy
