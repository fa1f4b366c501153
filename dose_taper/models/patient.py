"""Patient case models for the tapering and switch calculators."""

from typing import FrozenSet, Optional
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum
from datetime import date


class SuppressionStatus(str, Enum):
    """Known HPA-axis suppression."""
    YES = "yes"
    NO = "no"
    UNKNOWN = "unknown"


class Sex(str, Enum):
    """Patient sex as captured on the form."""
    MALE = "m"
    FEMALE = "f"


class Comorbidity(str, Enum):
    """Comorbidity tags offered by the corticosteroid calculator."""
    DIABETES = "diabetes"
    OSTEOPOROSIS = "osteoporosis"
    HYPERTENSION = "hypertension"
    GLAUCOMA = "glaucoma"
    OBESITY = "obesity"
    IMMUNOSUPPRESSION = "immunosuppression"
    PREGNANCY = "pregnancy"
    ELDERLY = "elderly"
    RENAL_FAILURE = "renal_failure"
    PEPTIC_ULCER = "peptic_ulcer"


class Route(str, Enum):
    """Administration route (display only)."""
    ORAL = "oral"
    INTRAVENOUS = "intravenous"
    INTRAMUSCULAR = "intramuscular"


class TaperCase(BaseModel):
    """Input snapshot for a corticosteroid taper calculation.

    Patient name, age, sex, indication and route are carried for display
    and reporting only; they never influence the computation.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    drug: str
    dose: float = Field(gt=0, allow_inf_nan=False)
    duration_weeks: int = Field(ge=0)
    start_date: date
    pulse_therapy: bool = False
    suppression: SuppressionStatus = SuppressionStatus.UNKNOWN
    comorbidities: FrozenSet[Comorbidity] = frozenset()
    route: Route = Route.ORAL

    # Display-only fields
    patient_name: Optional[str] = None
    age: Optional[int] = Field(default=None, ge=0)
    sex: Optional[Sex] = None
    indication: Optional[str] = None


class SwitchCase(BaseModel):
    """Input snapshot for an antidepressant switch calculation."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    source: str
    destination: str
    dose: float = Field(gt=0, allow_inf_nan=False)
    start_date: date
    duration_weeks: Optional[int] = Field(default=None, ge=0)

    # Display-only fields
    patient_name: Optional[str] = None
    response: Optional[str] = None
    adverse_events: Optional[str] = None
    switch_goal: Optional[str] = None
