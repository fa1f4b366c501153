"""Recommendation and alert templates keyed by (message key, mode).

Every message exists in a clinical and a patient phrasing. Templates may
contain ``str.format`` fields filled by the composer.
"""

from ..models.result import Mode

CLINICAL = Mode.CLINICAL
PATIENT = Mode.PATIENT

TAPER_MESSAGES = {
    # High risk
    ("high.basal_cortisol", CLINICAL):
        "Order a morning (8 am) basal cortisol before tapering below 7.5 mg/day of prednisone equivalent.",
    ("high.basal_cortisol", PATIENT):
        "Your doctor will order blood tests to check how your adrenal glands are working.",
    ("high.acth_test", CLINICAL):
        "Consider an ACTH stimulation test (250 µg) if basal cortisol is between 3 and 15 µg/dL.",
    ("high.acth_test", PATIENT):
        "A special test may be needed to check how your glands are working.",
    ("high.endocrinology", CLINICAL):
        "Referral to endocrinology is recommended to follow up the HPA axis.",
    ("high.endocrinology", PATIENT):
        "Seeing an endocrinologist is recommended to follow your treatment.",

    # Moderate risk
    ("moderate.monitor_insufficiency", CLINICAL):
        "Monitor for signs and symptoms of adrenal insufficiency during the taper (fatigue, hypotension, nausea).",
    ("moderate.monitor_insufficiency", PATIENT):
        "Watch for extreme tiredness, dizziness or nausea while the medicine is reduced.",
    ("moderate.physiologic_cortisol", CLINICAL):
        "Consider a basal cortisol level once a physiological dose is reached (≤5 mg prednisone).",
    ("moderate.physiologic_cortisol", PATIENT):
        "Tests may be ordered once the dose is very low.",

    # Low risk
    ("low.reassurance", CLINICAL):
        "Low risk of adrenal suppression. The taper can be conducted more quickly.",
    ("low.reassurance", PATIENT):
        "Your risk is low. Reducing the medicine should go smoothly.",

    # Always
    ("crisis_warning", CLINICAL):
        "Teach the patient the signs of adrenal crisis: severe hypotension, abdominal pain, mental confusion.",
    ("crisis_warning", PATIENT):
        "If you feel severe dizziness, intense abdominal pain or confusion, go to the emergency room immediately.",
    ("long_term_use", CLINICAL):
        "Prolonged use (>12 weeks): consider bone mineral density assessment and osteoporosis prophylaxis.",
    ("long_term_use", PATIENT):
        "Because the medicine was used for a long time, your doctor may order a bone exam.",

    # Comorbidity alerts
    ("comorbidity.diabetes", CLINICAL):
        "⚠ Diabetes: monitor blood glucose during the taper; risk of decompensation as the dose falls.",
    ("comorbidity.diabetes", PATIENT):
        "⚠ Watch your blood sugar while the corticosteroid is reduced.",
    ("comorbidity.osteoporosis", CLINICAL):
        "⚠ Osteoporosis: assess bone densitometry and consider calcium/vitamin D plus a bisphosphonate if use exceeds 3 months.",
    ("comorbidity.osteoporosis", PATIENT):
        "⚠ Take care of your bones: ask your doctor about calcium supplements.",
    ("comorbidity.glaucoma", CLINICAL):
        "⚠ Glaucoma: monitor intraocular pressure during and after the taper.",
    ("comorbidity.glaucoma", PATIENT):
        "⚠ Keep following up your eye pressure with an ophthalmologist.",
    ("comorbidity.hypertension", CLINICAL):
        "⚠ Hypertension: blood pressure may improve as the dose falls; adjust antihypertensives as needed.",
    ("comorbidity.hypertension", PATIENT):
        "⚠ Your blood pressure may change as the dose is reduced; check it regularly.",
    ("comorbidity.pregnancy", CLINICAL):
        "⚠ PREGNANT: prefer prednisone/prednisolone (metabolized by the placenta). Taper with obstetric follow-up.",
    ("comorbidity.pregnancy", PATIENT):
        "⚠ Pregnancy needs special follow-up. Let your obstetrician know.",
    ("comorbidity.elderly", CLINICAL):
        "⚠ Elderly: higher risk of adverse effects. A more cautious taper is recommended.",
    ("comorbidity.elderly", PATIENT):
        "⚠ Older patients need slower and more careful reductions.",
    ("comorbidity.immunosuppression", CLINICAL):
        "⚠ Immunosuppressed: increased risk of opportunistic infection during the taper. Monitor closely.",
    ("comorbidity.immunosuppression", PATIENT):
        "⚠ Pay special attention to infections while the medicine is reduced.",
}

SWITCH_MESSAGES = {
    ("strategy.cross_taper", CLINICAL):
        "Reduce {source} gradually (25-50% every 3-7 days) while starting {destination} at a low dose ({destination_min:g}mg), titrating to the target dose.",
    ("strategy.cross_taper", PATIENT):
        "{source} will be lowered little by little while {destination} is started at a low dose ({destination_min:g}mg) and slowly raised.",
    ("strategy.partial_washout", CLINICAL):
        "Stop fluoxetine and wait 1-2 weeks before starting {destination} at a low dose ({destination_min:g}mg). Fluoxetine's long half-life provides a natural self-taper.",
    ("strategy.partial_washout", PATIENT):
        "You will stop fluoxetine and wait 1-2 weeks before starting {destination} at a low dose ({destination_min:g}mg). Fluoxetine leaves the body slowly on its own.",

    ("alert.serotonin_syndrome", CLINICAL):
        "⚠ Risk of serotonin syndrome: monitor for agitation, tremor, hyperreflexia, hyperthermia and diarrhea during the transition.",
    ("alert.serotonin_syndrome", PATIENT):
        "⚠ During the change, seek help if you feel agitation, shaking, fever or diarrhea.",
    ("alert.withdrawal.fluoxetine", CLINICAL):
        "⚠ Fluoxetine has a very long half-life (norfluoxetine: 4-16 days). Consider a 2-5 week washout before starting the new antidepressant, especially if the destination is an MAOI.",
    ("alert.withdrawal.fluoxetine", PATIENT):
        "⚠ Fluoxetine stays in the body for weeks, so a waiting period may be needed before the new medicine.",
    ("alert.withdrawal.paroxetine", CLINICAL):
        "⚠ Paroxetine carries a high risk of discontinuation syndrome. Reduce slowly (10% every 1-2 weeks) before starting the new drug.",
    ("alert.withdrawal.paroxetine", PATIENT):
        "⚠ Paroxetine must be reduced slowly to avoid withdrawal symptoms.",
    ("alert.withdrawal.venlafaxine", CLINICAL):
        "⚠ Venlafaxine: high risk of discontinuation symptoms (dizziness, irritability, \"brain zaps\"). Reduce 37.5mg every 1-2 weeks.",
    ("alert.withdrawal.venlafaxine", PATIENT):
        "⚠ Venlafaxine can cause dizziness and irritability if stopped quickly; it will be reduced in small steps.",
    ("alert.cyp_interaction", CLINICAL):
        "⚠ Pharmacokinetic interaction: {source} inhibits {pathways}, which metabolizes {destination}. Risk of raised {destination} levels during the transition.",
    ("alert.cyp_interaction", PATIENT):
        "⚠ {source} can raise the level of {destination} in your blood during the change.",
    ("alert.tricyclic_qt", CLINICAL):
        "⚠ Tricyclics: obtain an ECG before and after dose adjustment. Monitor the QTc interval. Cardiotoxic in overdose.",
    ("alert.tricyclic_qt", PATIENT):
        "⚠ A heart tracing (ECG) is needed before and after adjusting this medicine.",

    ("note.equivalence", CLINICAL):
        "Estimated equivalent dose (fluoxetine 20mg basis): {equivalent:g}mg fluoxetine equivalent.",
    ("note.equivalence", PATIENT):
        "Your current dose is similar to {equivalent:g}mg of fluoxetine.",
    ("note.range", CLINICAL):
        "Therapeutic range of {destination}: {destination_range}.",
    ("note.range", PATIENT):
        "Usual daily dose of {destination}: {destination_range}.",
    ("note.onset", CLINICAL):
        "Expected onset of action: {onset}.",
    ("note.onset", PATIENT):
        "It usually takes {onset} to feel the effect.",
    ("note.half_life", CLINICAL):
        "Half-life of {destination}: {half_life}.",
    ("note.half_life", PATIENT):
        "{destination} stays in the body for about {half_life}.",
}

SCHEDULE_ANNOTATIONS = {
    "initial": "initial dose",
    "discontinuation": "discontinuation",
    "adrenal_watch": "monitor for adrenal insufficiency symptoms",
    "switch_start": "start cross-titration",
    "source_stopped": "source stopped",
    "destination_started": "destination started",
    "target_reached": "destination target reached",
}


def render(table, key: str, mode: Mode, **fields) -> str:
    """Look up the template for (key, mode) and fill in its fields."""
    return table[(key, Mode(mode))].format(**fields)
