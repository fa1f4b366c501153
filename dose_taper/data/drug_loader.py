"""Drug table loading and lookup utilities."""

from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional

from ..models.drug import DrugProfile, DrugClass, RiskLevel
from .antidepressants import ANTIDEPRESSANTS, REFERENCE_ANTIDEPRESSANT
from .corticosteroids import CORTICOSTEROIDS, REFERENCE_CORTICOSTEROID


def drug_key(name: str) -> str:
    """Normalize a drug name into a table key."""
    return name.strip().lower().replace(" ", "_").replace("-", "_")


class DrugTable:
    """Immutable reference table of drug profiles sharing one reference compound.

    Engine functions take a ``DrugTable`` argument, so tests can pass a
    table built from synthetic profiles instead of the shipped data.
    """

    def __init__(self, profiles: Mapping[str, DrugProfile], reference: str):
        """Initialize the table from already parsed profiles."""
        self._profiles = MappingProxyType(
            {drug_key(key): profile for key, profile in profiles.items()}
        )
        self._reference = drug_key(reference)
        if self._reference not in self._profiles:
            raise ValueError(f"Reference drug '{reference}' is not in the table")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Dict[str, Any]], reference: str) -> "DrugTable":
        """Build a table from raw dict rows like those in ``corticosteroids.py``."""
        profiles = {key: cls._parse_profile(key, row) for key, row in data.items()}
        return cls(profiles, reference)

    @staticmethod
    def _parse_profile(key: str, row: Dict[str, Any]) -> DrugProfile:
        """Parse one raw row into a DrugProfile."""
        if "equivalence_factor" not in row:
            raise ValueError(f"No equivalence factor found for {key}")

        def level(field: str) -> Optional[RiskLevel]:
            value = row.get(field)
            return RiskLevel(value) if value is not None else None

        return DrugProfile(
            name=row.get("name", key.title().replace("_", " ")),
            drug_class=DrugClass(row["class"]),
            equivalence_factor=row["equivalence_factor"],
            min_dose=row.get("min_dose"),
            max_dose=row.get("max_dose"),
            half_life=row.get("half_life"),
            onset=row.get("onset"),
            sedation=level("sedation"),
            weight_gain=level("weight_gain"),
            sexual_dysfunction=level("sexual_dysfunction"),
            qt_risk=level("qt_risk"),
            metabolism=row.get("metabolism", ""),
        )

    @property
    def reference(self) -> DrugProfile:
        """Profile of the reference compound."""
        return self._profiles[self._reference]

    @property
    def reference_key(self) -> str:
        """Table key of the reference compound."""
        return self._reference

    @property
    def reference_factor(self) -> float:
        """Equivalence factor of the reference compound, e.g. 5 for prednisone."""
        return self.reference.equivalence_factor

    def get(self, name: str) -> Optional[DrugProfile]:
        """Get a profile by name, or None when the drug is not in the table."""
        return self._profiles.get(drug_key(name))

    def require(self, name: str) -> DrugProfile:
        """Get a profile by name, raising KeyError when it is missing."""
        profile = self.get(name)
        if profile is None:
            raise KeyError(f"Drug '{name}' not found")
        return profile

    def by_class(self, drug_class: DrugClass) -> List[DrugProfile]:
        """Get all profiles of a drug class."""
        return [
            profile for profile in self._profiles.values()
            if profile.drug_class == drug_class
        ]

    def keys(self) -> List[str]:
        """List all table keys."""
        return list(self._profiles.keys())

    def items(self):
        """Iterate over (key, profile) pairs."""
        return self._profiles.items()

    def __contains__(self, name: str) -> bool:
        return drug_key(name) in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)


# Default tables built from the shipped reference data
CORTICOSTEROID_TABLE = DrugTable.from_mapping(CORTICOSTEROIDS, REFERENCE_CORTICOSTEROID)
ANTIDEPRESSANT_TABLE = DrugTable.from_mapping(ANTIDEPRESSANTS, REFERENCE_ANTIDEPRESSANT)
