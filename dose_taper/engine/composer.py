"""Recommendation and alert composition.

Decisions here only select message keys; the wording for each key comes
from the (key, mode) template tables in ``data.messages``.
"""

from typing import Iterable, List, Tuple
import logging
import re

from ..data.messages import TAPER_MESSAGES, SWITCH_MESSAGES, render
from ..models.drug import DrugClass, DrugProfile
from ..models.patient import Comorbidity
from ..models.result import Mode, RiskCategory
from .classifier import serotonergic_overlap
from .schedule import round_half_up


logger = logging.getLogger("dose_taper.engine.composer")

LONG_TERM_WEEKS = 12

CATEGORY_MESSAGES = {
    RiskCategory.HIGH: ("high.basal_cortisol", "high.acth_test", "high.endocrinology"),
    RiskCategory.MODERATE: ("moderate.monitor_insufficiency", "moderate.physiologic_cortisol"),
    RiskCategory.LOW: ("low.reassurance",),
}

# Comorbidities with an alert, in the order alerts are listed
COMORBIDITY_ALERTS = (
    (Comorbidity.DIABETES, "comorbidity.diabetes"),
    (Comorbidity.OSTEOPOROSIS, "comorbidity.osteoporosis"),
    (Comorbidity.GLAUCOMA, "comorbidity.glaucoma"),
    (Comorbidity.HYPERTENSION, "comorbidity.hypertension"),
    (Comorbidity.PREGNANCY, "comorbidity.pregnancy"),
    (Comorbidity.ELDERLY, "comorbidity.elderly"),
    (Comorbidity.IMMUNOSUPPRESSION, "comorbidity.immunosuppression"),
)

# Source drugs with a dedicated discontinuation alert
WITHDRAWAL_ALERTS = {
    "fluoxetine": "alert.withdrawal.fluoxetine",
    "paroxetine": "alert.withdrawal.paroxetine",
    "venlafaxine": "alert.withdrawal.venlafaxine",
}

CYP_TOKEN = re.compile(r"CYP\w+")


def compose(
    category: RiskCategory,
    comorbidities: Iterable[Comorbidity],
    mode: Mode,
    duration_weeks: int,
) -> Tuple[List[str], List[str]]:
    """
    Compose taper recommendations and comorbidity alerts.

    Returns:
        (recommendations, alerts)
    """
    present = {Comorbidity(c) for c in comorbidities}

    recommendation_keys = list(CATEGORY_MESSAGES[RiskCategory(category)])
    recommendation_keys.append("crisis_warning")
    if duration_weeks > LONG_TERM_WEEKS:
        recommendation_keys.append("long_term_use")

    alert_keys = [key for comorbidity, key in COMORBIDITY_ALERTS if comorbidity in present]

    logger.info(
        "Composed taper messages for %s: recommendations=%s alerts=%s",
        category,
        recommendation_keys,
        alert_keys,
    )
    recommendations = [render(TAPER_MESSAGES, key, mode) for key in recommendation_keys]
    alerts = [render(TAPER_MESSAGES, key, mode) for key in alert_keys]
    return recommendations, alerts


def shared_cyp_pathways(source: DrugProfile, destination: DrugProfile) -> List[str]:
    """CYP tokens the source inhibits and the destination is a substrate of.

    This is a text heuristic over the free-text metabolism descriptors: the
    source descriptor must mention an inhibitor, the destination a substrate,
    and the ``CYP\\w+`` tokens of both must intersect.
    """
    if "inhibitor" not in source.metabolism.lower() or "substrate" not in destination.metabolism.lower():
        return []
    source_tokens = CYP_TOKEN.findall(source.metabolism)
    destination_tokens = set(CYP_TOKEN.findall(destination.metabolism))
    return [token for token in source_tokens if token in destination_tokens]


def compose_switch_alerts(
    source_key: str,
    source: DrugProfile,
    destination: DrugProfile,
    mode: Mode,
) -> List[str]:
    """Safety alerts for switching from ``source`` to ``destination``."""
    alerts: List[str] = []
    fields = {"source": source.name, "destination": destination.name}

    if serotonergic_overlap(source, destination):
        alerts.append(render(SWITCH_MESSAGES, "alert.serotonin_syndrome", mode))

    if source_key in WITHDRAWAL_ALERTS:
        alerts.append(render(SWITCH_MESSAGES, WITHDRAWAL_ALERTS[source_key], mode))

    pathways = shared_cyp_pathways(source, destination)
    if pathways:
        alerts.append(render(SWITCH_MESSAGES, "alert.cyp_interaction", mode, pathways=", ".join(pathways), **fields))

    if destination.drug_class == DrugClass.TRICYCLIC:
        alerts.append(render(SWITCH_MESSAGES, "alert.tricyclic_qt", mode))

    logger.info("Composed %s switch alerts for %s -> %s", len(alerts), source.name, destination.name)
    return alerts


def compose_switch_notes(destination: DrugProfile, equivalent_dose: float, mode: Mode) -> List[str]:
    """Informational notes about the destination drug."""
    fields = {
        "destination": destination.name,
        "destination_range": destination.dose_range,
        "equivalent": round_half_up(equivalent_dose, 1),
        "onset": destination.onset or "n/a",
        "half_life": destination.half_life or "n/a",
    }
    return [
        render(SWITCH_MESSAGES, key, mode, **fields)
        for key in ("note.equivalence", "note.range", "note.onset", "note.half_life")
    ]
