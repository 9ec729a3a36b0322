"""
French to English place-name translation.

Some providers answer in the local language even when English is requested.
Names are matched exactly first, then by case-insensitive whole-word substring.
"""
import re
from typing import Optional

FRENCH_TO_ENGLISH: dict[str, str] = {
    # Countries
    "Allemagne": "Germany",
    "Angleterre": "England",
    "Arabie saoudite": "Saudi Arabia",
    "Argentine": "Argentina",
    "Australie": "Australia",
    "Autriche": "Austria",
    "Belgique": "Belgium",
    "Brésil": "Brazil",
    "Chili": "Chile",
    "Chine": "China",
    "Colombie": "Colombia",
    "Corée du Sud": "South Korea",
    "Danemark": "Denmark",
    "Égypte": "Egypt",
    "Espagne": "Spain",
    "États-Unis": "United States",
    "États-Unis d'Amérique": "United States",
    "Éthiopie": "Ethiopia",
    "Grèce": "Greece",
    "Hongrie": "Hungary",
    "Inde": "India",
    "Indonésie": "Indonesia",
    "Irlande": "Ireland",
    "Islande": "Iceland",
    "Italie": "Italy",
    "Japon": "Japan",
    "Maroc": "Morocco",
    "Mexique": "Mexico",
    "Mongolie": "Mongolia",
    "Norvège": "Norway",
    "Nouvelle-Zélande": "New Zealand",
    "Pays-Bas": "Netherlands",
    "Pérou": "Peru",
    "Pologne": "Poland",
    "Royaume-Uni": "United Kingdom",
    "Russie": "Russia",
    "Afrique du Sud": "South Africa",
    "Suède": "Sweden",
    "Suisse": "Switzerland",
    "Thaïlande": "Thailand",
    "Tunisie": "Tunisia",
    "Turquie": "Turkey",
    "Algérie": "Algeria",
    # Regions
    "Bavière": "Bavaria",
    "Californie": "California",
    "Écosse": "Scotland",
    "Floride": "Florida",
    "Géorgie": "Georgia",
    "Louisiane": "Louisiana",
    "Nouvelle-Galles du Sud": "New South Wales",
    "Pays de Galles": "Wales",
    "Sibérie": "Siberia",
    "Toscane": "Tuscany",
    # Cities
    "Alger": "Algiers",
    "Athènes": "Athens",
    "Bruxelles": "Brussels",
    "Le Caire": "Cairo",
    "Copenhague": "Copenhagen",
    "Genève": "Geneva",
    "Lisbonne": "Lisbon",
    "Londres": "London",
    "Moscou": "Moscow",
    "Pékin": "Beijing",
    "Varsovie": "Warsaw",
    "Vienne": "Vienna",
    "Le Cap": "Cape Town",
    "La Nouvelle-Orléans": "New Orleans",
    "Nouvelle-Delhi": "New Delhi",
}

# Longest keys first so "États-Unis d'Amérique" wins over "États-Unis"
_SUBSTRING_PATTERNS = [
    (re.compile(rf"(?<!\w){re.escape(french)}(?!\w)", re.IGNORECASE), english)
    for french, english in sorted(FRENCH_TO_ENGLISH.items(), key=lambda item: -len(item[0]))
]


def translate_place_name(name: Optional[str]) -> Optional[str]:
    """Translate a known French place name, leaving anything else untouched."""
    if not name:
        return name
    if name in FRENCH_TO_ENGLISH:
        return FRENCH_TO_ENGLISH[name]
    for pattern, english in _SUBSTRING_PATTERNS:
        if pattern.search(name):
            return pattern.sub(english, name, count=1)
    return name
