# app/services/intent_classifier.py
"""
Query intent classification and retrieval policies

Pure functions of the raw query text. They run on the same input as the
keyword normalizer but do not depend on it.
"""

import re
from enum import Enum


class Intent(str, Enum):
    LIST_ALL = "list_all"
    STATISTICS = "statistics"
    DEFAULT_SEARCH = "default_search"


LIST_TRIGGERS = re.compile(
    r"\b(list|all|available|lista|listę|wszystkie|wszystkich|dostępne|dostepne)\b",
    re.IGNORECASE,
)

STATISTICS_TRIGGERS = re.compile(
    r"\b(booking|bookings|booked|reservation|reservations|how many|rezerwac\w*|ile)\b",
    re.IGNORECASE,
)

TOUR_LISTING_PATTERN = re.compile(
    r"\b(tour|tours|list|offer|offers|wycieczk\w*|lista|ofert\w*|zwiedzani\w*)\b",
    re.IGNORECASE,
)

PRODUCT_PATTERN = re.compile(
    r"\b(tour|tours|product|products|offer|offers|book|booking|price|prices|ticket|tickets"
    r"|wycieczk\w*|produkt\w*|ofert\w*|rezerw\w*|cena|ceny|cennik|bilet\w*)\b",
    re.IGNORECASE,
)

RANKING_PATTERN = re.compile(
    r"\b(most|popular|top|best|najpopularniejsz\w*|najczęściej|najczesciej|najlepsz\w*)\b",
    re.IGNORECASE,
)

STATISTICS_FILLER = re.compile(
    r"\b(how many|how much|number of|count of|total|bookings|booking|booked|reservations|reservation"
    r"|were|was|are|is|there|did|do|does|have|has|we|for|of|the"
    r"|ile|było|bylo|jest|rezerwac\w*|dla|mamy|mieliśmy)\b",
    re.IGNORECASE,
)

_STRAY_PUNCTUATION = re.compile(r"[?!.,;:\"']")


def classify(query: str) -> Intent:
    text = (query or "").lower()
    if not text.strip():
        return Intent.DEFAULT_SEARCH
    if LIST_TRIGGERS.search(text):
        return Intent.LIST_ALL
    if STATISTICS_TRIGGERS.search(text):
        return Intent.STATISTICS
    return Intent.DEFAULT_SEARCH


def is_tour_listing_query(query: str) -> bool:
    """Asks which tours / offers exist (triggers the city fallback)"""
    return bool(TOUR_LISTING_PATTERN.search(query or ""))


def is_product_query(query: str) -> bool:
    """Product-related questions rank [TOUR] chunks above articles"""
    return bool(PRODUCT_PATTERN.search(query or ""))


def is_ranking_query(query: str) -> bool:
    return bool(RANKING_PATTERN.search(query or ""))


def clean_statistics_query(query: str) -> str:
    """Drop quantity and question filler, keep the subject with its casing.

    "how many bookings for City Tour" -> "City Tour"
    """
    cleaned = STATISTICS_FILLER.sub(" ", query or "")
    cleaned = RANKING_PATTERN.sub(" ", cleaned)
    cleaned = _STRAY_PUNCTUATION.sub(" ", cleaned)
    return " ".join(cleaned.split())
