"""
Static reference sets used by the resolvers and extractors.

Everything here is plain data: known conditions and their synonyms, known
medications, the drug-name tokens searched for in result text, pharmacological
suffixes, and stop-word lists.
"""

from typing import Dict, List, Tuple


# Canonical condition labels, in priority order
KNOWN_CONDITIONS: List[str] = [
    "Type 2 Diabetes",
    "Hypertension",
    "Hyperlipidemia",
    "GERD",
    "Sleep Apnea",
    "Osteoarthritis",
]

# Ordered dispatch table: first entry whose synonym appears in the text wins.
# Synonyms are lower-case; matching is a case-insensitive substring test
# except for entries in WHOLE_WORD_SYNONYMS.
CONDITION_SYNONYMS: List[Tuple[str, List[str]]] = [
    ("Type 2 Diabetes", ["diabetes", "type 2", "type ii"]),
    ("Hypertension", ["hypertension", "high blood pressure"]),
    ("Hyperlipidemia", ["cholesterol", "lipid", "hyperlipidemia"]),
    ("GERD", ["gerd", "acid reflux", "heartburn"]),
    ("Sleep Apnea", ["sleep apnea", "osa"]),
    ("Osteoarthritis", ["arthritis", "joint pain"]),
]

# Short abbreviations that would otherwise match inside ordinary words ("dosage")
WHOLE_WORD_SYNONYMS = {"osa"}

KNOWN_MEDICATIONS: List[str] = [
    # Diabetes
    "Metformin", "Glipizide", "Januvia", "Ozempic", "Jardiance", "Insulin",
    "Glyburide", "Trulicity", "Victoza",
    # Hypertension
    "Lisinopril", "Amlodipine", "Losartan", "Hydrochlorothiazide", "Atenolol",
    "Metoprolol", "Valsartan", "Diltiazem",
    # Hyperlipidemia
    "Atorvastatin", "Rosuvastatin", "Simvastatin", "Pravastatin", "Ezetimibe",
    "Fenofibrate", "Lovastatin",
    # GERD
    "Omeprazole", "Pantoprazole", "Famotidine", "Esomeprazole", "Ranitidine",
    "Lansoprazole", "Cimetidine",
    # Sleep apnea
    "CPAP", "BiPAP", "Modafinil", "Armodafinil", "Acetazolamide", "Inspire Therapy",
    # Osteoarthritis
    "Acetaminophen", "Ibuprofen", "Naproxen", "Diclofenac", "Meloxicam",
    "Celecoxib", "Duloxetine", "Tramadol",
]

# Drug-name tokens recognised in search-result text (primary extraction strategy)
DRUG_NAME_TOKENS: List[str] = [
    "aspirin", "ibuprofen", "metformin", "lisinopril", "atorvastatin", "simvastatin",
    "amlodipine", "losartan", "omeprazole", "gabapentin", "hydrochlorothiazide",
    "metoprolol", "albuterol", "atenolol", "montelukast", "fluticasone", "sertraline",
    "escitalopram", "levothyroxine", "fluoxetine", "citalopram", "rosuvastatin",
    "pantoprazole", "lansoprazole", "duloxetine", "venlafaxine", "tramadol",
    "oxycodone", "lorazepam", "alprazolam", "zolpidem", "furosemide", "clopidogrel",
    "glipizide", "sitagliptin", "liraglutide", "semaglutide", "januvia", "ozempic",
    "warfarin", "apixaban", "rivaroxaban", "dabigatran", "sildenafil", "tadalafil",
    "cetirizine", "loratadine", "fexofenadine", "symbicort", "advair", "trelegy",
    "ezetimibe", "fenofibrate", "empagliflozin", "jardiance", "insulin",
    "dapagliflozin", "prednisone", "testosterone", "estradiol", "norethindrone",
    "medroxyprogesterone", "diclofenac", "naproxen", "allopurinol", "amoxicillin",
    "azithromycin", "ciprofloxacin", "doxycycline", "sumatriptan", "rizatriptan",
    "levetiracetam", "valproic acid", "lamotrigine", "quetiapine", "aripiprazole",
    "risperidone", "olanzapine", "lurasidone", "memantine", "donepezil", "dutasteride",
    "finasteride", "tamsulosin", "cyclobenzaprine", "methocarbamol", "carvedilol",
    "digoxin", "spironolactone", "valsartan", "celecoxib", "meloxicam", "adalimumab",
    "etanercept", "ustekinumab", "secukinumab", "guselkumab", "famotidine", "ranitidine",
]

# Heuristic classifier: any name ending in one of these is treated as a
# medication. Known false positives include ordinary words such as "Protein"
# or "Vitamin" (-in) and "Alcohol" (-ol).
MEDICATION_SUFFIXES: List[str] = [
    # Pharmacological stems
    "pril", "sartan", "statin", "mab", "zole", "prazole", "pam", "lol",
    # Generic chemical endings
    "in", "ol", "ide", "ine", "ate", "one", "il",
]

# Lower-case words excluded by the generalized capitalized-word matcher
STOP_WORDS = {
    "the", "and", "for", "with", "that", "have", "this", "from", "they", "will",
    "would", "there", "their", "what", "about", "which", "when", "make", "like",
    "time", "just", "know", "people", "year", "good", "some", "could", "them",
    "other", "than", "then", "now", "into", "only", "your", "very",
}

# Capitalized words excluded when looking for conservative (non-drug) options
ALTERNATIVE_STOP_WORDS = {
    "The", "And", "For", "With", "That", "This", "From", "They", "Will", "What",
    "About", "Which", "When", "Their", "Have", "Been", "Were", "Being", "More",
    "Most", "Some", "Such", "Many",
}

# Capitalized words that appear in nearly every formatted search line and
# never name a treatment
SEARCH_NOISE_WORDS = {
    "Source", "Error", "Searching", "Search", "Results", "Found", "Treatment",
    "Treatments", "Natural", "Alternative", "Alternatives", "Medication",
    "Medications", "Without", "Remedies", "Home", "Ways", "Tips", "Guide",
    "Information", "Clinic", "Health", "Healthline", "Medical", "News", "Today",
}

# Domains preferred when picking an information link out of search results
MEDICAL_LINK_DOMAINS: List[str] = [
    "nih.gov", "mayo", "webmd", "medline", "drugs.com", "rxlist", "medscape", "health",
]


def synonym_index() -> Dict[str, List[str]]:
    """Map each canonical condition to its canonical name plus synonyms."""
    return {
        condition: [condition.lower()] + [s for s in synonyms if s != condition.lower()]
        for condition, synonyms in CONDITION_SYNONYMS
    }
