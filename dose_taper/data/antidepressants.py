"""Antidepressant reference table.

Equivalence factors are the daily dose (mg) equivalent to 20 mg of
fluoxetine. The ``metabolism`` descriptor is free text; the switch alert
for pharmacokinetic interaction matches CYP tokens inside it.
"""

REFERENCE_ANTIDEPRESSANT = "fluoxetine"

ANTIDEPRESSANTS = {
    "fluoxetine": {
        "name": "Fluoxetine",
        "class": "SSRI",
        "equivalence_factor": 20,
        "min_dose": 20,
        "max_dose": 80,
        "half_life": "2-6 days (norfluoxetine: 4-16 days)",
        "onset": "2-4 weeks",
        "sedation": "low",
        "weight_gain": "low",
        "sexual_dysfunction": "high",
        "qt_risk": "low",
        "metabolism": "Potent CYP2D6 inhibitor",
    },
    "sertraline": {
        "name": "Sertraline",
        "class": "SSRI",
        "equivalence_factor": 50,
        "min_dose": 50,
        "max_dose": 200,
        "half_life": "26h",
        "onset": "2-4 weeks",
        "sedation": "low",
        "weight_gain": "low",
        "sexual_dysfunction": "moderate",
        "qt_risk": "low",
        "metabolism": "Mild CYP2D6 inhibitor",
    },
    "escitalopram": {
        "name": "Escitalopram",
        "class": "SSRI",
        "equivalence_factor": 10,
        "min_dose": 10,
        "max_dose": 20,
        "half_life": "27-32h",
        "onset": "1-2 weeks",
        "sedation": "low",
        "weight_gain": "low",
        "sexual_dysfunction": "moderate",
        "qt_risk": "moderate",
        "metabolism": "Minimal CYP inhibition",
    },
    "paroxetine": {
        "name": "Paroxetine",
        "class": "SSRI",
        "equivalence_factor": 20,
        "min_dose": 20,
        "max_dose": 60,
        "half_life": "21h",
        "onset": "2-4 weeks",
        "sedation": "moderate",
        "weight_gain": "high",
        "sexual_dysfunction": "high",
        "qt_risk": "low",
        "metabolism": "Potent CYP2D6 inhibitor",
    },
    "venlafaxine": {
        "name": "Venlafaxine",
        "class": "SNRI",
        "equivalence_factor": 75,
        "min_dose": 75,
        "max_dose": 375,
        "half_life": "5h (metabolite: 11h)",
        "onset": "2-4 weeks",
        "sedation": "low",
        "weight_gain": "low",
        "sexual_dysfunction": "high",
        "qt_risk": "low",
        "metabolism": "CYP2D6/3A4 substrate",
    },
    "duloxetine": {
        "name": "Duloxetine",
        "class": "SNRI",
        "equivalence_factor": 60,
        "min_dose": 30,
        "max_dose": 120,
        "half_life": "12h",
        "onset": "1-2 weeks",
        "sedation": "low",
        "weight_gain": "low",
        "sexual_dysfunction": "moderate",
        "qt_risk": "low",
        "metabolism": "Moderate CYP2D6 inhibitor",
    },
    "amitriptyline": {
        "name": "Amitriptyline",
        "class": "Tricyclic",
        "equivalence_factor": 100,
        "min_dose": 25,
        "max_dose": 300,
        "half_life": "10-28h",
        "onset": "2-4 weeks",
        "sedation": "high",
        "weight_gain": "high",
        "sexual_dysfunction": "moderate",
        "qt_risk": "high",
        "metabolism": "CYP2D6/2C19 substrate",
    },
    "nortriptyline": {
        "name": "Nortriptyline",
        "class": "Tricyclic",
        "equivalence_factor": 75,
        "min_dose": 25,
        "max_dose": 150,
        "half_life": "28-31h",
        "onset": "2-4 weeks",
        "sedation": "moderate",
        "weight_gain": "moderate",
        "sexual_dysfunction": "moderate",
        "qt_risk": "high",
        "metabolism": "CYP2D6 substrate",
    },
    "mirtazapine": {
        "name": "Mirtazapine",
        "class": "Atypical (NaSSA)",
        "equivalence_factor": 30,
        "min_dose": 15,
        "max_dose": 45,
        "half_life": "20-40h",
        "onset": "1-2 weeks",
        "sedation": "high",
        "weight_gain": "high",
        "sexual_dysfunction": "low",
        "qt_risk": "low",
        "metabolism": "CYP3A4/2D6/1A2 substrate",
    },
    "bupropion": {
        "name": "Bupropion",
        "class": "Atypical (NDRI)",
        "equivalence_factor": 150,
        "min_dose": 150,
        "max_dose": 450,
        "half_life": "21h",
        "onset": "2-4 weeks",
        "sedation": "low",
        "weight_gain": "low",
        "sexual_dysfunction": "low",
        "qt_risk": "low",
        "metabolism": "CYP2D6 inhibitor",
    },
    "trazodone": {
        "name": "Trazodone",
        "class": "Atypical (SARI)",
        "equivalence_factor": 150,
        "min_dose": 50,
        "max_dose": 400,
        "half_life": "5-9h",
        "onset": "1-3 weeks",
        "sedation": "high",
        "weight_gain": "low",
        "sexual_dysfunction": "low",
        "qt_risk": "moderate",
        "metabolism": "CYP3A4 substrate",
    },
    "vortioxetine": {
        "name": "Vortioxetine",
        "class": "Multimodal",
        "equivalence_factor": 10,
        "min_dose": 5,
        "max_dose": 20,
        "half_life": "66h",
        "onset": "2-4 weeks",
        "sedation": "low",
        "weight_gain": "low",
        "sexual_dysfunction": "low",
        "qt_risk": "low",
        "metabolism": "CYP2D6 substrate",
    },
}
