"""
Per-condition default treatments.

Used when search yields nothing usable, and for the fixed fallback pair
returned after an unexpected aggregation failure. Keyed by lower-cased
condition name, including common aliases.
"""

from typing import Dict, List, Tuple

from src.treatment_finder.models import TreatmentCategory, TreatmentOption

STANDARD_INFO_LINK = "https://medlineplus.gov/druginfo/meds/"
ALTERNATIVE_INFO_LINK = "https://www.nccih.nih.gov/health/"

DEFAULT_STANDARD: Dict[str, List[str]] = {
    "type 2 diabetes": ["Metformin", "Glipizide"],
    "diabetes": ["Metformin", "Glipizide"],
    "hypertension": ["Lisinopril", "Amlodipine"],
    "high blood pressure": ["Lisinopril", "Amlodipine"],
    "hyperlipidemia": ["Atorvastatin", "Rosuvastatin"],
    "high cholesterol": ["Atorvastatin", "Rosuvastatin"],
    "gerd": ["Omeprazole", "Famotidine"],
    "acid reflux": ["Omeprazole", "Famotidine"],
    "sleep apnea": ["CPAP Therapy", "Modafinil"],
    "osteoarthritis": ["Acetaminophen", "Meloxicam"],
    "arthritis": ["Acetaminophen", "Meloxicam"],
}
GENERIC_STANDARD = ["Medication 1", "Medication 2"]

DEFAULT_ALTERNATIVES: Dict[str, List[str]] = {
    "type 2 diabetes": ["Cinnamon", "Chromium"],
    "diabetes": ["Cinnamon", "Chromium"],
    "hypertension": ["Potassium", "CoQ10"],
    "high blood pressure": ["Potassium", "CoQ10"],
    "hyperlipidemia": ["Fish Oil", "Plant Sterols"],
    "high cholesterol": ["Fish Oil", "Plant Sterols"],
    "gerd": ["Ginger", "Probiotics"],
    "acid reflux": ["Ginger", "Probiotics"],
    "sleep apnea": ["Weight Loss", "Positional Therapy"],
    "osteoarthritis": ["Glucosamine", "Turmeric"],
    "arthritis": ["Glucosamine", "Turmeric"],
}
GENERIC_ALTERNATIVES = ["Supplement", "Lifestyle Change"]

# (standard name, alternative name, standard price, alternative price)
FALLBACK_PAIRS: Dict[str, Tuple[str, str, str, str]] = {
    "type 2 diabetes": ("Metformin", "Cinnamon Supplements", "$4-$25", "$15-$35"),
    "diabetes": ("Metformin", "Cinnamon Supplements", "$4-$25", "$15-$35"),
    "hypertension": ("Lisinopril", "Potassium Supplements", "$8-$30", "$10-$40"),
    "high blood pressure": ("Lisinopril", "Potassium Supplements", "$8-$30", "$10-$40"),
    "hyperlipidemia": ("Atorvastatin", "Fish Oil", "$12-$75", "$15-$45"),
    "high cholesterol": ("Atorvastatin", "Fish Oil", "$12-$75", "$15-$45"),
    "gerd": ("Omeprazole", "Ginger Extract", "$10-$35", "$12-$30"),
    "acid reflux": ("Omeprazole", "Ginger Extract", "$10-$35", "$12-$30"),
    "sleep apnea": ("CPAP Therapy", "Positional Therapy", "$500-$1200", "$80-$200"),
    "osteoarthritis": ("Acetaminophen", "Glucosamine", "$5-$25", "$20-$60"),
    "arthritis": ("Acetaminophen", "Glucosamine", "$5-$25", "$20-$60"),
}


def default_standard(condition: str) -> List[str]:
    return list(DEFAULT_STANDARD.get(condition.lower(), GENERIC_STANDARD))


def default_alternatives(condition: str) -> List[str]:
    return list(DEFAULT_ALTERNATIVES.get(condition.lower(), GENERIC_ALTERNATIVES))


def fallback_options(condition: str) -> List[TreatmentOption]:
    """Fixed one-standard, one-alternative pair for a condition (uncategorized)."""
    standard, alternative, standard_price, alternative_price = FALLBACK_PAIRS.get(
        condition.lower(),
        (f"Medication for {condition}", f"Alternative for {condition}", "$15-$60", "$20-$45"),
    )
    return [
        TreatmentOption(
            name=standard,
            description=f"[Learn about {standard}]({STANDARD_INFO_LINK})",
            link=STANDARD_INFO_LINK,
            price=standard_price,
            category=TreatmentCategory.STANDARD,
        ),
        TreatmentOption(
            name=alternative,
            description=f"[Learn about {alternative}]({ALTERNATIVE_INFO_LINK})",
            link=ALTERNATIVE_INFO_LINK,
            price=alternative_price,
            category=TreatmentCategory.CONSERVATIVE,
        ),
    ]
