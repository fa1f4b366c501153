"""Evaluation result models.

Results are frozen and use tuples so that a computed evaluation cannot be
changed after construction; a new calculation replaces it wholesale.
"""

from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict
from enum import Enum
import datetime


class RiskCategory(str, Enum):
    """Adrenal suppression risk category."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class TaperStrategy(str, Enum):
    """Taper pace derived from the risk category."""
    RAPID = "rapid"
    GRADUAL = "gradual"
    SLOW = "slow"


class SwitchStrategy(str, Enum):
    """Antidepressant switch strategy."""
    CROSS_TAPER = "cross_taper"
    PARTIAL_WASHOUT = "partial_washout"


class ReductionMethod(str, Enum):
    """How each taper step is sized."""
    ABSOLUTE = "absolute"
    PERCENTAGE = "percentage"


class Mode(str, Enum):
    """Phrasing track for composed messages."""
    CLINICAL = "clinical"
    PATIENT = "patient"


class ScheduleStep(BaseModel):
    """One dated dose step of a taper."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    week: int
    date: datetime.date
    dose: float
    annotation: Optional[str] = None


class TaperSchedule(BaseModel):
    """Ordered taper steps.

    ``ceiling_reached`` is set when generation stopped at the step ceiling
    before reaching a zero dose.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    steps: Tuple[ScheduleStep, ...]
    max_steps: int
    ceiling_reached: bool = False

    @property
    def complete(self) -> bool:
        return not self.ceiling_reached and self.steps[-1].dose == 0

    @property
    def total_weeks(self) -> int:
        return self.steps[-1].week


class SwitchStep(BaseModel):
    """One week of a cross-titration plan."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    week: int
    date: datetime.date
    source_dose: float
    destination_dose: float
    annotation: Optional[str] = None


class TaperResult(BaseModel):
    """Complete output of a corticosteroid taper evaluation."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    category: RiskCategory
    strategy: TaperStrategy
    method: ReductionMethod
    mode: Mode
    reference_drug: str
    normalized_dose: float
    used_equivalence_fallback: bool = False
    schedule: TaperSchedule
    recommendations: Tuple[str, ...]
    alerts: Tuple[str, ...]


class SwitchResult(BaseModel):
    """Complete output of an antidepressant switch evaluation."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    source: str
    destination: str
    mode: Mode
    reference_drug: str
    equivalent_dose: float
    suggested_dose: float
    destination_range: str
    strategy: SwitchStrategy
    strategy_detail: str
    alerts: Tuple[str, ...]
    notes: Tuple[str, ...]
    plan: Tuple[SwitchStep, ...]
    ceiling_reached: bool = False


class CalculationRecord(BaseModel):
    """Summary of a calculation for the history store."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    calculator_name: str
    calculator_slug: str
    date: datetime.date
    summary: str
    details: Tuple[Tuple[str, str], ...]
    patient_name: Optional[str] = None

    def details_dict(self):
        """Detail map in insertion order."""
        return dict(self.details)
