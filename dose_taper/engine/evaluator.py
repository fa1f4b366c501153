"""Evaluation entry points for the taper and switch calculators.

Each call runs the full pipeline on one validated case snapshot and
returns a new immutable result. Nothing is cached between calls.
"""

from typing import Optional
import logging

from ..data.drug_loader import CORTICOSTEROID_TABLE, ANTIDEPRESSANT_TABLE, DrugTable, drug_key
from ..data.messages import SWITCH_MESSAGES, render
from ..models.patient import SwitchCase, TaperCase
from ..models.result import Mode, ReductionMethod, SwitchResult, TaperResult
from . import classifier, composer, normalizer, schedule


logger = logging.getLogger("dose_taper.engine.evaluator")

SWITCH_DOSE_ROUNDING = 5.0


def evaluate_taper(
    case: TaperCase,
    method: ReductionMethod = ReductionMethod.ABSOLUTE,
    percentage_rate: Optional[float] = None,
    mode: Mode = Mode.CLINICAL,
    table: DrugTable = CORTICOSTEROID_TABLE,
) -> TaperResult:
    """
    Evaluate a corticosteroid taper.

    The schedule is expressed in reference-compound (prednisone) mg, the
    dose the risk rules are defined on.
    """
    logger.info(
        "Evaluating taper for %s %smg over %s weeks (method=%s, mode=%s)",
        case.drug,
        case.dose,
        case.duration_weeks,
        method,
        mode,
    )

    normalized, used_fallback = normalizer.normalize_in_table(table, case.drug, case.dose)
    category = classifier.classify(normalized, case.duration_weeks, case.pulse_therapy, case.suppression)
    strategy = classifier.strategy_for(category)

    taper = schedule.generate(
        initial_dose=normalized,
        strategy=strategy,
        method=method,
        percentage_rate=percentage_rate,
        start_date=case.start_date,
    )
    recommendations, alerts = composer.compose(category, case.comorbidities, mode, case.duration_weeks)

    result = TaperResult(
        category=category,
        strategy=strategy,
        method=method,
        mode=mode,
        reference_drug=table.reference.name,
        normalized_dose=normalized,
        used_equivalence_fallback=used_fallback,
        schedule=taper,
        recommendations=tuple(recommendations),
        alerts=tuple(alerts),
    )
    logger.info(
        "Taper result: category=%s strategy=%s steps=%s complete=%s",
        category.value,
        strategy.value,
        len(taper.steps),
        taper.complete,
    )
    return result


def suggested_destination_dose(destination_dose: float, minimum: float, maximum: float) -> float:
    """Clamp a converted dose into the therapeutic range and round to 5mg."""
    clamped = min(max(destination_dose, minimum), maximum)
    suggested = schedule.round_half_up(clamped / SWITCH_DOSE_ROUNDING, 1) * SWITCH_DOSE_ROUNDING
    return suggested or minimum


def evaluate_switch(
    case: SwitchCase,
    mode: Mode = Mode.CLINICAL,
    table: DrugTable = ANTIDEPRESSANT_TABLE,
) -> SwitchResult:
    """Evaluate an antidepressant switch from ``case.source`` to ``case.destination``.

    Both drugs must be present in ``table``; validation guarantees this for
    form input, so a missing drug raises ``KeyError`` here.
    """
    source_key = drug_key(case.source)
    source = table.require(case.source)
    destination = table.require(case.destination)
    logger.info("Evaluating switch %s %smg -> %s (mode=%s)", source.name, case.dose, destination.name, mode)

    equivalent = normalizer.normalize(source, case.dose, table.reference_factor)
    converted = normalizer.convert(source, destination, case.dose, table.reference_factor)
    minimum = destination.min_dose if destination.min_dose is not None else 0.0
    maximum = destination.max_dose if destination.max_dose is not None else converted
    suggested = suggested_destination_dose(converted, minimum, maximum)

    strategy = classifier.classify_switch(source_key, destination)
    detail = render(
        SWITCH_MESSAGES,
        f"strategy.{strategy.value}",
        mode,
        source=source.name,
        destination=destination.name,
        destination_min=minimum,
    )
    alerts = composer.compose_switch_alerts(source_key, source, destination, mode)
    notes = composer.compose_switch_notes(destination, equivalent, mode)
    plan, ceiling_reached = schedule.generate_switch_plan(
        source_dose=case.dose,
        destination_start=minimum,
        destination_target=suggested,
        strategy=strategy,
        start_date=case.start_date,
    )

    result = SwitchResult(
        source=source.name,
        destination=destination.name,
        mode=mode,
        reference_drug=table.reference.name,
        equivalent_dose=schedule.round_half_up(equivalent, 1),
        suggested_dose=suggested,
        destination_range=destination.dose_range,
        strategy=strategy,
        strategy_detail=detail,
        alerts=tuple(alerts),
        notes=tuple(notes),
        plan=tuple(plan),
        ceiling_reached=ceiling_reached,
    )
    logger.info(
        "Switch result: suggested=%smg strategy=%s alerts=%s",
        suggested,
        strategy.value,
        len(alerts),
    )
    return result
