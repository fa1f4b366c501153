"""Drug reference models for dose equivalence and tapering."""

from typing import Optional
from pydantic import BaseModel, Field, ConfigDict
from enum import Enum


class DrugClass(str, Enum):
    """Drug classes covered by the reference tables."""
    GLUCOCORTICOID = "Glucocorticoid"
    SSRI = "SSRI"
    SNRI = "SNRI"
    TRICYCLIC = "Tricyclic"
    NASSA = "Atypical (NaSSA)"
    NDRI = "Atypical (NDRI)"
    SARI = "Atypical (SARI)"
    MULTIMODAL = "Multimodal"


# Classes whose combination during a switch carries serotonin-syndrome risk
SEROTONERGIC_CLASSES = frozenset({DrugClass.SSRI, DrugClass.SNRI})


class RiskLevel(str, Enum):
    """Qualitative level of a drug attribute."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"


class DrugProfile(BaseModel):
    """Static reference data for a single drug."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    name: str
    drug_class: DrugClass
    equivalence_factor: float = Field(gt=0)  # mg equivalent to one reference unit
    min_dose: Optional[float] = None
    max_dose: Optional[float] = None
    half_life: Optional[str] = None
    onset: Optional[str] = None
    sedation: Optional[RiskLevel] = None
    weight_gain: Optional[RiskLevel] = None
    sexual_dysfunction: Optional[RiskLevel] = None
    qt_risk: Optional[RiskLevel] = None
    metabolism: str = ""  # free-text CYP descriptor

    @property
    def dose_range(self) -> str:
        """Therapeutic range as text, e.g. '10-20mg/day'."""
        if self.min_dose is None or self.max_dose is None:
            return "n/a"
        return f"{self.min_dose:g}-{self.max_dose:g}mg/day"
