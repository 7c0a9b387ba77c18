# app/services/keyword_normalizer.py
"""
Query keyword normalisation (English + Polish)

- stop-word removal for both languages
- Polish city inflections -> one canonical English form
- Polish domain words -> English retrieval tokens
"""

import re
import string
from types import MappingProxyType
from typing import Dict, List, Optional, Tuple

MAX_KEYWORDS = 5
MIN_KEYWORD_LENGTH = 3

STOP_WORDS = frozenset({
    'the', 'a', 'an', 'and', 'or', 'but', 'in', 'on', 'at', 'to', 'for',
    'of', 'with', 'by', 'from', 'as', 'is', 'are', 'was', 'were', 'been',
    'be', 'have', 'has', 'had', 'do', 'does', 'did', 'will', 'would', 'could',
    'should', 'may', 'might', 'can', 'we', 'how', 'many', 'what', 'when',
    'where', 'who', 'which', 'this', 'that', 'these', 'those', 'you', 'your',
    'there', 'any', 'about',
    # Polish
    'w', 'o', 'z', 'do', 'na', 'i', 'czy', 'jak', 'jaki', 'jakie', 'jaka',
    'mamy', 'mam', 'ile', 'sie', 'się', 'dla', 'oraz', 'jest', 'są', 'macie',
})

# every known inflection -> canonical English form
CITY_FORMS = MappingProxyType({
    # Krakow
    'krakow': 'krakow', 'kraków': 'krakow', 'krakowie': 'krakow', 'krakowem': 'krakow',
    'krakowa': 'krakow', 'krakowowi': 'krakow', 'cracow': 'krakow',
    # Warsaw
    'warsaw': 'warsaw', 'warszawa': 'warsaw', 'warszawie': 'warsaw', 'warszawy': 'warsaw',
    'warszawą': 'warsaw', 'warszawę': 'warsaw', 'warszawo': 'warsaw',
    # Gdansk
    'gdansk': 'gdansk', 'gdańsk': 'gdansk', 'gdanska': 'gdansk', 'gdańska': 'gdansk',
    'gdansku': 'gdansk', 'gdańsku': 'gdansk', 'gdanskiem': 'gdansk', 'gdańskiem': 'gdansk',
    # Wroclaw
    'wroclaw': 'wroclaw', 'wrocław': 'wroclaw', 'wroclawia': 'wroclaw', 'wrocławia': 'wroclaw',
    'wroclawiu': 'wroclaw', 'wrocławiu': 'wroclaw', 'wroclawiem': 'wroclaw', 'wrocławiem': 'wroclaw',
    # Poznan
    'poznan': 'poznan', 'poznań': 'poznan', 'poznania': 'poznan', 'poznaniu': 'poznan',
    'poznaniem': 'poznan',
    # Hamburg (Polish spelling)
    'hamburg': 'hamburg', 'hamburgu': 'hamburg', 'hamburga': 'hamburg', 'hamburgiem': 'hamburg',
})

# Polish domain word -> English tokens (empty tuple drops the word)
DOMAIN_TERMS = MappingProxyType({
    # tours
    'wycieczka': ('tour',), 'wycieczki': ('tour', 'tours'), 'wycieczkach': ('tour', 'tours'),
    'wycieczek': ('tour', 'tours'), 'wycieczkę': ('tour',),
    'zwiedzanie': ('tour', 'visit'), 'zwiedzania': ('tour', 'visit'),
    # products
    'produkt': ('product',), 'produkty': ('product', 'products'), 'produktach': ('product', 'products'),
    'oferta': ('offer', 'product'), 'oferty': ('offer', 'product'), 'ofercie': ('offer', 'product'),
    # articles
    'artykul': ('article',), 'artykuł': ('article',), 'artykuly': ('article', 'articles'),
    'artykuły': ('article', 'articles'), 'artykulach': ('article', 'articles'),
    # bookings
    'rezerwacja': ('booking', 'reservation'), 'rezerwacje': ('booking', 'reservation'),
    'rezerwacji': ('booking', 'reservation'),
    # question words
    'jakie': (), 'jaki': (), 'jaka': (), 'ile': (), 'ilu': (), 'gdzie': (), 'kiedy': (),
    'mamy': (), 'mam': (), 'macie': (),
})

def _build_alias_index() -> Dict[str, Tuple[str, ...]]:
    index: Dict[str, List[str]] = {}
    for form, city in CITY_FORMS.items():
        index.setdefault(city, []).append(form)
    return {city: tuple(forms) for city, forms in index.items()}


CITY_ALIASES = MappingProxyType(_build_alias_index())

_PUNCTUATION = string.punctuation + '„”“‘’«»…–—'


def _clean_token(raw: str) -> str:
    return raw.lower().strip(_PUNCTUATION)


def canonical_city(word: str) -> str:
    """Map a city inflection to its canonical form; other words are returned as-is"""
    return CITY_FORMS.get(word.lower(), word)


def translate_term(word: str) -> Tuple[str, ...]:
    return DOMAIN_TERMS.get(word.lower(), (word,))


def normalize(query: str) -> List[str]:
    """Query -> ordered, de-duplicated keyword list (at most 5).

    An empty list is a valid result and means "match everything".
    """
    if not query:
        return []

    words = [_clean_token(w) for w in query.split()]
    words = [w for w in words if len(w) >= MIN_KEYWORD_LENGTH and w not in STOP_WORDS]

    keywords: List[str] = []
    for word in words:
        city = canonical_city(word)
        if city != word:
            keywords.append(city)
            continue
        keywords.extend(translate_term(word))

    unique = dict.fromkeys(k for k in keywords if len(k) >= MIN_KEYWORD_LENGTH)
    return list(unique)[:MAX_KEYWORDS]


def detect_city(query: str) -> Optional[str]:
    """First known city mentioned in the query, in canonical form"""
    for raw in re.split(r"\s+", query or ""):
        word = _clean_token(raw)
        if word in CITY_FORMS:
            return CITY_FORMS[word]
    return None


def city_aliases(canonical: str) -> List[str]:
    """Every known spelling of a canonical city, lower-case"""
    return list(CITY_ALIASES.get(canonical, ()))
