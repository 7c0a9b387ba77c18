# app/services/fragment_formatter.py
"""
Row -> KnowledgeFragment mapping

Every fragment leaves here with a non-null source/content and content capped
at MAX_CONTENT_LENGTH characters.
"""

from typing import Any, Dict, Iterable, List, Optional

from app.schemas.knowledge_schemas import KnowledgeFragment, SemanticMatch

MAX_CONTENT_LENGTH = 1000
SHORT_DESCRIPTION_LENGTH = 300
LONG_DESCRIPTION_LENGTH = 800
CITY_DESCRIPTION_LENGTH = 500


def _first(row: Dict[str, Any], *keys: str, default: Optional[str] = None) -> Optional[str]:
    for key in keys:
        value = row.get(key)
        if value:
            return value
    return default


def make_fragment(source: Optional[str], content: Optional[str], metadata: Optional[Dict[str, Any]] = None) -> KnowledgeFragment:
    return KnowledgeFragment(
        source=source or "",
        content=(content or "")[:MAX_CONTENT_LENGTH],
        metadata=dict(metadata or {}),
    )


def product_fragment(row: Dict[str, Any]) -> KnowledgeFragment:
    title = _first(row, "title_en", "title", default="Untitled tour")
    city = _first(row, "city_name", "city_name_local")
    short = _first(row, "short_description_en", "short_description", default="N/A")
    long = _first(row, "long_description_en", "long_description", default="N/A")

    content = (
        f"**{title}**\n"
        f"Location: {city or 'Unknown'}\n"
        f"Short Description: {short[:SHORT_DESCRIPTION_LENGTH]}\n"
        f"Full Description: {long[:LONG_DESCRIPTION_LENGTH]}"
    )
    return make_fragment(
        f"Product: {title}",
        content,
        {
            "id": row.get("id"),
            "type": "product",
            "slug": _first(row, "slug_en", "slug"),
            "city": city,
        },
    )


def city_fragment(row: Dict[str, Any]) -> KnowledgeFragment:
    name = _first(row, "name_en", "name", default="Unknown city")
    description = _first(row, "description_en", "description", default="No description available")
    country = row.get("country")

    heading = f"**{name}**, {country}" if country else f"**{name}**"
    return make_fragment(
        f"City: {name}",
        f"{heading}\n{description[:CITY_DESCRIPTION_LENGTH]}",
        {
            "id": row.get("id"),
            "type": "city",
            "slug": _first(row, "slug_en", "slug"),
        },
    )


def stats_fragment(row: Dict[str, Any]) -> KnowledgeFragment:
    title = _first(row, "title_en", "title", default="Untitled tour")
    bookings = int(row.get("total_bookings") or 0)
    participants = int(row.get("total_participants") or 0)
    tours = int(row.get("total_tours") or 0)

    content = (
        f"**Booking Statistics for \"{title}\"**\n"
        f"- Total Tours Scheduled: {tours}\n"
        f"- Total Bookings: {bookings}\n"
        f"- Total Participants: {participants}"
    )
    return make_fragment(
        f"Booking Stats: {title}",
        content,
        {
            "id": row.get("id"),
            "type": "stats",
            "bookings": bookings,
            "participants": participants,
        },
    )


def catalog_fragment(rows: Iterable[Dict[str, Any]]) -> Optional[KnowledgeFragment]:
    """All products grouped under their city as one bulleted catalogue.

    Listing stops at the first title that would push the content past
    MAX_CONTENT_LENGTH, so the list is never cut mid-line. metadata["count"]
    is the number of titles listed, metadata["total"] the number of rows.
    """
    grouped: Dict[str, List[str]] = {}
    total = 0
    for row in rows:
        city = _first(row, "city_name", "city_name_local", default="Other")
        grouped.setdefault(city, []).append(_first(row, "title_en", "title", default="Untitled tour"))
        total += 1

    if not total:
        return None

    content = "**Complete Tour List**"
    listed = 0
    full = False
    for city, titles in grouped.items():
        heading = f"\n\n**{city}:**"
        for title in titles:
            line = f"\n  - {title}"
            if len(content) + len(heading) + len(line) > MAX_CONTENT_LENGTH:
                full = True
                break
            content += heading + line
            heading = ""
            listed += 1
        if full:
            break

    return make_fragment(
        "Complete Tour Catalog",
        content,
        {"type": "list", "count": listed, "total": total},
    )


def semantic_fragment(match: SemanticMatch) -> KnowledgeFragment:
    title = match.doc_title or "Untitled"
    label = f"[{match.entity_type.upper()}] {title} ({match.similarity * 100:.0f}%)"
    metadata = {
        "similarity": match.similarity,
        "chunk_id": match.chunk_id,
        "document_id": match.document_id,
        "entity_type": match.entity_type,
    }
    metadata.update(match.metadata)
    return make_fragment(label, match.text, metadata)
