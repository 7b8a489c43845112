"""
Keyword lists for relevance classification.

All terms are lower-case and matched as plain substrings of the
lower-cased item text.
"""

FUNDING_WORDS = [
    "funding", "funds", "budget", "budgets", "aid", "oda",
    "official development assistance",
    "appropriation", "appropriations", "spending", "cut", "cuts",
    "reduction", "reductions", "increase", "increases",
    "pledge", "pledges", "grant", "grants", "donor", "donors",
    "funding cut", "budget cut", "funding increase", "budget increase",
    # Agencies and bilateral donors
    "fcdo", "uk aid", "usaid", "state department", "sida", "norad", "giz",
    "kfw", "afd", "global affairs canada", "irish aid", "dfat", "dfatd",
    "ausaid", "nzaid", "jica", "koica",
    # Multilaterals and development banks
    "adb", "afdb", "african development bank", "isdb",
    "islamic development bank", "world bank", "ibrd", "ida", "ifc", "imf",
    "undp", "wfp", "unicef", "oecd dac", "eib", "echo", "eu humanitarian",
    "development finance", "development assistance", "official aid",
]

DONOR_COUNTRY_TERMS = [
    "united states", "usa", "u.s.", "us ", "canada", "united kingdom", "uk",
    "britain", "british", "australia", "new zealand", "ireland",
    "european union", "eu", "germany", "german", "france", "french",
    "netherlands", "dutch", "norway", "norwegian", "sweden", "swedish",
    "denmark", "danish", "finland", "finnish", "switzerland", "swiss",
    "spain", "italy", "belgium", "austria", "luxembourg", "portugal",
    "japan", "japanese", "south korea", "korea", "korean",
]

FUNDING_TRIGGERS = FUNDING_WORDS + DONOR_COUNTRY_TERMS

DEFAULT_REGION_WORDS = [
    "africa", "sub-saharan", "sahel", "horn of africa", "east africa",
    "west africa", "central africa", "southern africa",
    "south asia", "southeast asia", "asean",
    "ethiopia", "zambia", "rwanda", "uganda", "tanzania", "kenya", "burundi",
    "democratic republic of congo", "drc", "nigeria", "benin", "togo",
    "senegal", "ivory coast", "cote d'ivoire", "mali", "niger", "south sudan",
    "bangladesh", "indonesia", "philippines", "tibet", "vietnam",
]


def match_any(text: str, terms: list[str]) -> bool:
    """Check whether any term occurs in text (case-insensitive)."""
    lowered = (text or "").lower()
    return any(term and term in lowered for term in terms)
