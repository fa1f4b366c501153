"""Dose normalization to a reference-compound equivalent."""

from typing import Tuple
import logging

from ..models.drug import DrugProfile
from ..data.drug_loader import DrugTable


logger = logging.getLogger("dose_taper.engine.normalizer")


def normalize(drug: DrugProfile, dose: float, reference_factor: float) -> float:
    """Convert a dose of ``drug`` into reference-compound milligrams.

    No rounding is applied here; rounding belongs to the schedule and
    display stages.
    """
    return (dose / drug.equivalence_factor) * reference_factor


def unknown_drug_passthrough(drug_name: str, dose: float) -> float:
    """Fallback for a drug missing from the table: the dose is used as is."""
    logger.warning(
        "Drug %s not in reference table; using dose %s unchanged as reference equivalent",
        drug_name,
        dose,
    )
    return dose


def normalize_in_table(table: DrugTable, drug_name: str, dose: float) -> Tuple[float, bool]:
    """Normalize a dose by drug name.

    Returns:
        (normalized dose, whether the unknown-drug fallback was used)
    """
    drug = table.get(drug_name)
    if drug is None:
        return unknown_drug_passthrough(drug_name, dose), True

    normalized = normalize(drug, dose, table.reference_factor)
    logger.info(
        "Normalized %s %smg to %smg %s equivalent",
        drug.name,
        dose,
        normalized,
        table.reference.name,
    )
    return normalized, False


def convert(source: DrugProfile, destination: DrugProfile, dose: float, reference_factor: float) -> float:
    """Convert a source dose into the equivalent destination dose."""
    equivalent = normalize(source, dose, reference_factor)
    return (equivalent / reference_factor) * destination.equivalence_factor
