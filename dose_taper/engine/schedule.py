"""Taper and cross-titration schedule generation.

Absolute-method band tables map the current dose to a (reduction, interval)
pair. Bands are checked from the highest down and use strict ``>``
comparisons, so a dose sitting exactly on an edge (e.g. 40mg) falls into
the lower band.

Every loop checks ``MAX_STEPS_PER_STRATEGY`` before adding a step. Hitting
the ceiling ends generation with ``ceiling_reached`` set instead of
appending a discontinuation step that was never computed.
"""

from datetime import date, timedelta
from typing import List, NamedTuple, Optional, Tuple
import logging
import math

from ..data.messages import SCHEDULE_ANNOTATIONS
from ..models.result import (
    ReductionMethod,
    ScheduleStep,
    SwitchStep,
    SwitchStrategy,
    TaperSchedule,
    TaperStrategy,
)


logger = logging.getLogger("dose_taper.engine.schedule")

# Smallest clinical dosing unit used by the percentage method (mg)
DOSE_UNIT = 2.5
# Slow tapers flag steps at or below this dose for adrenal monitoring
ADRENAL_WATCH_DOSE = 5.0

MAX_STEPS_PER_STRATEGY = {
    TaperStrategy.RAPID: 30,
    TaperStrategy.GRADUAL: 40,
    TaperStrategy.SLOW: 50,
}
PERCENTAGE_MAX_STEPS = 30
SWITCH_MAX_STEPS = 12

# Cross-taper removes this fraction of the starting source dose each week
CROSS_TAPER_FRACTION = 0.25
CROSS_TAPER_RAMP_WEEKS = 4
WASHOUT_WEEKS = 2
WASHOUT_RAMP_WEEKS = 2
DESTINATION_ROUNDING = 5.0


class Band(NamedTuple):
    above: float  # band applies when dose > above
    reduction: float
    interval_weeks: int


BAND_TABLES = {
    TaperStrategy.RAPID: (
        Band(20, 10, 1),
        Band(10, 5, 1),
        Band(-math.inf, 2.5, 1),
    ),
    TaperStrategy.GRADUAL: (
        Band(40, 10, 1),
        Band(20, 5, 1),
        Band(10, 2.5, 1),
        Band(5, 1, 2),
        Band(-math.inf, 1, 2),
    ),
    TaperStrategy.SLOW: (
        Band(40, 5, 1),
        Band(20, 5, 2),
        Band(10, 2.5, 2),
        Band(5, 1, 2),
        Band(-math.inf, 1, 4),
    ),
}


def round_half_up(value: float, increment: float) -> float:
    """Round to the nearest multiple of ``increment``, halves rounding up."""
    return math.floor(value / increment + 0.5) * increment


def round_dose(value: float) -> float:
    """Round a dose to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def select_band(dose: float, bands: Tuple[Band, ...]) -> Band:
    """Pick the first band whose lower edge the dose is strictly above."""
    for band in bands:
        if dose > band.above:
            return band
    return bands[-1]


def step_date(start_date: date, week: int) -> date:
    return start_date + timedelta(days=7 * week)


class _StepCollector:
    """Accumulates dated steps against a start date."""

    def __init__(self, start_date: date):
        self.start_date = start_date
        self.steps: List[ScheduleStep] = []

    def add(self, week: int, dose: float, annotation: Optional[str] = None) -> None:
        self.steps.append(ScheduleStep(
            week=week,
            date=step_date(self.start_date, week),
            dose=math.floor(dose * 100 + 0.5) / 100,
            annotation=annotation,
        ))

    def __len__(self) -> int:
        return len(self.steps)


def _absolute_annotation(dose: float, strategy: TaperStrategy) -> Optional[str]:
    if dose == 0:
        return SCHEDULE_ANNOTATIONS["discontinuation"]
    if strategy == TaperStrategy.SLOW and dose <= ADRENAL_WATCH_DOSE:
        return SCHEDULE_ANNOTATIONS["adrenal_watch"]
    return None


def _generate_absolute(
    dose: float,
    strategy: TaperStrategy,
    collector: _StepCollector,
    bands: Tuple[Band, ...],
    max_steps: int,
) -> bool:
    """Fill the collector with band-table steps; returns True if the ceiling was hit."""
    week = 0
    while dose > 0:
        if len(collector) >= max_steps:
            return True
        band = select_band(dose, bands)
        dose = min(dose, round_dose(max(0.0, dose - band.reduction)))
        week += band.interval_weeks
        collector.add(week, dose, _absolute_annotation(dose, strategy))
    return False


def _generate_percentage(
    dose: float,
    strategy: TaperStrategy,
    rate: float,
    collector: _StepCollector,
    max_steps: int,
) -> bool:
    """Fill the collector with percentage steps; returns True if the ceiling was hit."""
    interval = 2 if strategy == TaperStrategy.SLOW else 1
    week = 0
    while dose > DOSE_UNIT:
        if len(collector) >= max_steps:
            return True
        reduced = round_half_up(dose - dose * (rate / 100), DOSE_UNIT)
        if reduced >= dose:
            # Rounding undid the reduction; step down to the next lower dosing unit
            reduced = math.ceil(dose / DOSE_UNIT - 1) * DOSE_UNIT
        dose = max(DOSE_UNIT, reduced)
        week += interval
        collector.add(week, dose)

    week += interval
    collector.add(week, 0, SCHEDULE_ANNOTATIONS["discontinuation"])
    return False


def generate(
    initial_dose: float,
    strategy: TaperStrategy,
    method: ReductionMethod,
    percentage_rate: Optional[float],
    start_date: date,
    bands: Optional[Tuple[Band, ...]] = None,
) -> TaperSchedule:
    """
    Generate a dated taper schedule.

    Args:
        initial_dose: Starting dose in reference-compound mg (> 0)
        strategy: Taper pace selected from the risk category
        method: Absolute band-table steps or percentage reductions
        percentage_rate: Reduction per step in percent, required for the percentage method
        start_date: Date of week 0
        bands: Override of the strategy's band table

    Returns:
        TaperSchedule starting with the initial dose at week 0
    """
    strategy = TaperStrategy(strategy)
    method = ReductionMethod(method)
    logger.info(
        "Generating %s %s schedule from %smg (rate=%s, start=%s)",
        strategy.value,
        method.value,
        initial_dose,
        percentage_rate,
        start_date,
    )

    collector = _StepCollector(start_date)
    collector.add(0, initial_dose, SCHEDULE_ANNOTATIONS["initial"])

    if method == ReductionMethod.PERCENTAGE:
        if percentage_rate is None or not 0 < percentage_rate < 100:
            raise ValueError(f"Percentage rate must be between 0 and 100, got {percentage_rate}")
        max_steps = PERCENTAGE_MAX_STEPS
        ceiling_reached = _generate_percentage(initial_dose, strategy, percentage_rate, collector, max_steps)
    else:
        max_steps = MAX_STEPS_PER_STRATEGY[strategy]
        ceiling_reached = _generate_absolute(
            initial_dose, strategy, collector, bands or BAND_TABLES[strategy], max_steps
        )

    if ceiling_reached:
        logger.warning(
            "Schedule hit the %s-step ceiling at %smg before discontinuation (%s, %s)",
            max_steps,
            collector.steps[-1].dose,
            strategy.value,
            method.value,
        )

    schedule = TaperSchedule(
        steps=tuple(collector.steps),
        max_steps=max_steps,
        ceiling_reached=ceiling_reached,
    )
    logger.info("Generated %s steps over %s weeks", len(schedule.steps), schedule.total_weeks)
    return schedule


def generate_switch_plan(
    source_dose: float,
    destination_start: float,
    destination_target: float,
    strategy: SwitchStrategy,
    start_date: date,
) -> Tuple[List[SwitchStep], bool]:
    """
    Generate a weekly cross-titration plan.

    Cross-taper lowers the source by a quarter of its starting dose each week
    while the destination rises from its starting dose to the target.
    Partial washout stops the source at week 0 and starts the destination
    after the washout weeks.

    Returns:
        (plan steps, whether the step ceiling was hit)
    """
    strategy = SwitchStrategy(strategy)
    if strategy == SwitchStrategy.CROSS_TAPER:
        source_step = source_dose * CROSS_TAPER_FRACTION
        source_offset = 0
        destination_week = 0
        ramp_weeks = CROSS_TAPER_RAMP_WEEKS
    else:
        source_step = source_dose
        source_offset = 1
        destination_week = WASHOUT_WEEKS
        ramp_weeks = WASHOUT_RAMP_WEEKS

    steps: List[SwitchStep] = []
    week = 0
    while True:
        if len(steps) >= SWITCH_MAX_STEPS:
            logger.warning("Switch plan hit the %s-step ceiling", SWITCH_MAX_STEPS)
            return steps, True

        source = max(0.0, round_dose(source_dose - source_step * (week + source_offset)))
        if week < destination_week:
            destination = 0.0
        else:
            progress = (week - destination_week) / ramp_weeks
            raw = destination_start + (destination_target - destination_start) * progress
            destination = min(destination_target, max(destination_start, round_half_up(raw, DESTINATION_ROUNDING)))

        done = source == 0 and destination == destination_target
        if done:
            annotation = SCHEDULE_ANNOTATIONS["target_reached"]
        elif week == 0:
            annotation = SCHEDULE_ANNOTATIONS[
                "switch_start" if strategy == SwitchStrategy.CROSS_TAPER else "source_stopped"
            ]
        elif week == destination_week:
            annotation = SCHEDULE_ANNOTATIONS["destination_started"]
        else:
            annotation = None

        steps.append(SwitchStep(
            week=week,
            date=step_date(start_date, week),
            source_dose=source,
            destination_dose=destination,
            annotation=annotation,
        ))
        if done:
            return steps, False
        week += 1
