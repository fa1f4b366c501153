"""Validation of calculator form input.

Raw form values (usually strings as typed) are checked and converted into
case models before any engine stage runs. Every problem is reported as a
single user-facing message through ``CaseValidationError``.
"""

from datetime import date
from typing import Any, Iterable, Mapping, Optional
import logging
import math

from pydantic import ValidationError

from ..data.drug_loader import ANTIDEPRESSANT_TABLE, CORTICOSTEROID_TABLE, DrugTable, drug_key
from ..models.patient import Comorbidity, Route, Sex, SuppressionStatus, SwitchCase, TaperCase


logger = logging.getLogger("dose_taper.evaluation.validation")

MISSING_TAPER_FIELDS = "Fill in all required fields (*)."
MISSING_SWITCH_FIELDS = "Fill in the source antidepressant, the destination and the current dose."
SAME_SWITCH_DRUGS = "Source and destination must be different."

# Upper bound on any entered daily dose (mg)
MAX_DOSE = 10000.0


class CaseValidationError(ValueError):
    """Form input that cannot be evaluated."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def parse_number(value: Any, label: str) -> float:
    """Parse a numeric form value, accepting '20', '20mg' and '7,5'."""
    if isinstance(value, bool):
        raise CaseValidationError(f"{label} must be a number.")
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = str(value).strip().lower().replace("mg", "").replace(",", ".").strip()
        try:
            number = float(text)
        except ValueError:
            raise CaseValidationError(f"{label} must be a number.") from None
    if not math.isfinite(number):
        raise CaseValidationError(f"{label} must be a number.")
    return number


def parse_dose(value: Any) -> float:
    """Parse a daily dose in mg, greater than zero and at most ``MAX_DOSE``."""
    dose = parse_number(value, "Dose")
    if dose <= 0:
        raise CaseValidationError("Dose must be greater than zero.")
    if dose > MAX_DOSE:
        raise CaseValidationError(f"Dose cannot exceed {MAX_DOSE:g} mg.")
    return dose


def parse_whole_number(value: Any, label: str) -> int:
    number = parse_number(value, label)
    if not number.is_integer():
        raise CaseValidationError(f"{label} must be a whole number.")
    return int(number)


def parse_date(value: Any) -> date:
    """Parse an ISO date; a blank value means today."""
    if _is_blank(value):
        return date.today()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip())
    except ValueError:
        raise CaseValidationError(f"Invalid date '{value}'. Use YYYY-MM-DD.") from None


def parse_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if _is_blank(value):
        return False
    return str(value).strip().lower() in ("1", "yes", "y", "true", "on")


def _parse_choice(enum_cls, value: Any, label: str, default=None):
    if _is_blank(value):
        return default
    try:
        return enum_cls(str(value).strip().lower())
    except ValueError:
        options = ", ".join(member.value for member in enum_cls)
        raise CaseValidationError(f"Invalid {label} '{value}'. Options: {options}.") from None


def parse_comorbidities(values: Optional[Iterable[Any]]) -> frozenset:
    tags = set()
    for value in values or ():
        tags.add(_parse_choice(Comorbidity, drug_key(str(value)), "comorbidity"))
    return frozenset(tags)


def validate_percentage_rate(value: Any) -> float:
    """Percentage reduction per step, strictly between 0 and 100."""
    rate = parse_number(value, "Percentage reduction")
    if not 0 < rate < 100:
        raise CaseValidationError("Percentage reduction must be between 0 and 100.")
    return rate


def _build(model_cls, **fields):
    """Construct a case model, converting pydantic errors into one message."""
    try:
        return model_cls(**fields)
    except ValidationError as exc:
        first = exc.errors()[0]
        field = ".".join(str(part) for part in first["loc"])
        raise CaseValidationError(f"Invalid {field}: {first['msg']}.") from None


def validate_taper_form(form: Mapping[str, Any], table: DrugTable = CORTICOSTEROID_TABLE) -> TaperCase:
    """
    Validate corticosteroid taper form input.

    Required: drug, dose, duration_weeks. A drug missing from ``table`` is
    accepted and later evaluated through the normalizer's unknown-drug path.
    """
    if any(_is_blank(form.get(field)) for field in ("drug", "dose", "duration_weeks")):
        raise CaseValidationError(MISSING_TAPER_FIELDS)

    dose = parse_dose(form["dose"])
    weeks = parse_whole_number(form["duration_weeks"], "Duration")
    if weeks < 0:
        raise CaseValidationError("Duration cannot be negative.")

    drug = str(form["drug"]).strip()
    if drug not in table:
        logger.warning("Taper requested for %s, which is not in the reference table", drug)

    age = form.get("age")
    return _build(
        TaperCase,
        drug=drug,
        dose=dose,
        duration_weeks=weeks,
        start_date=parse_date(form.get("start_date")),
        pulse_therapy=parse_flag(form.get("pulse_therapy")),
        suppression=_parse_choice(
            SuppressionStatus, form.get("suppression"), "suppression status", SuppressionStatus.UNKNOWN
        ),
        comorbidities=parse_comorbidities(form.get("comorbidities")),
        route=_parse_choice(Route, form.get("route"), "route", Route.ORAL),
        patient_name=None if _is_blank(form.get("patient_name")) else str(form["patient_name"]).strip(),
        age=None if _is_blank(age) else parse_whole_number(age, "Age"),
        sex=_parse_choice(Sex, form.get("sex"), "sex"),
        indication=None if _is_blank(form.get("indication")) else str(form["indication"]).strip(),
    )


def validate_switch_form(form: Mapping[str, Any], table: DrugTable = ANTIDEPRESSANT_TABLE) -> SwitchCase:
    """Validate antidepressant switch form input."""
    if any(_is_blank(form.get(field)) for field in ("source", "destination", "dose")):
        raise CaseValidationError(MISSING_SWITCH_FIELDS)

    source = drug_key(str(form["source"]))
    destination = drug_key(str(form["destination"]))
    if source == destination:
        raise CaseValidationError(SAME_SWITCH_DRUGS)
    for name in (source, destination):
        if name not in table:
            raise CaseValidationError(f"Unknown antidepressant '{name}'.")

    dose = parse_dose(form["dose"])

    weeks = form.get("duration_weeks")
    return _build(
        SwitchCase,
        source=source,
        destination=destination,
        dose=dose,
        start_date=parse_date(form.get("start_date")),
        duration_weeks=None if _is_blank(weeks) else parse_whole_number(weeks, "Duration"),
        patient_name=None if _is_blank(form.get("patient_name")) else str(form["patient_name"]).strip(),
        response=form.get("response") or None,
        adverse_events=form.get("adverse_events") or None,
        switch_goal=form.get("switch_goal") or None,
    )
