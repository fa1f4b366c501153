"""Systemic corticosteroid reference table.

Equivalence factors are the dose (mg) equivalent to 5 mg of prednisone.
"""

REFERENCE_CORTICOSTEROID = "prednisone"

CORTICOSTEROIDS = {
    "prednisone": {
        "name": "Prednisone",
        "class": "Glucocorticoid",
        "equivalence_factor": 5,
        "half_life": "12-36h (biological)",
    },
    "prednisolone": {
        "name": "Prednisolone",
        "class": "Glucocorticoid",
        "equivalence_factor": 5,
        "half_life": "12-36h (biological)",
    },
    "methylprednisolone": {
        "name": "Methylprednisolone",
        "class": "Glucocorticoid",
        "equivalence_factor": 4,
        "half_life": "12-36h (biological)",
    },
    "dexamethasone": {
        "name": "Dexamethasone",
        "class": "Glucocorticoid",
        "equivalence_factor": 0.75,
        "half_life": "36-72h (biological)",
    },
    "hydrocortisone": {
        "name": "Hydrocortisone",
        "class": "Glucocorticoid",
        "equivalence_factor": 20,
        "half_life": "8-12h (biological)",
    },
    "betamethasone": {
        "name": "Betamethasone",
        "class": "Glucocorticoid",
        "equivalence_factor": 0.6,
        "half_life": "36-72h (biological)",
    },
    "deflazacort": {
        "name": "Deflazacort",
        "class": "Glucocorticoid",
        "equivalence_factor": 6,
        "half_life": "12-36h (biological)",
    },
}

INDICATIONS = [
    "Asthma", "COPD", "Systemic Lupus Erythematosus", "Rheumatoid Arthritis",
    "Addison's Disease", "Vasculitis", "Inflammatory Bowel Disease",
    "Lupus Nephritis", "Sarcoidosis", "Polymyalgia Rheumatica",
    "Organ Transplant", "Dermatoses", "Multiple Sclerosis", "Other",
]
