# app/services/structured_search_service.py
"""
Structured catalogue search

Strategy order is fixed: product -> city -> stats -> list. Each strategy owns
its own pooled connection, so the strategies of one plan run concurrently.
"""

import asyncio
from typing import Awaitable, Callable, Dict, List, Sequence

from sqlalchemy import distinct, func, or_, select, true
from sqlalchemy.sql import Select

from app.config import settings
from app.models.catalog import Booking, BookingItem, City, Product, Tour
from app.schemas.knowledge_schemas import KnowledgeFragment
from app.services.database_service import DatabaseService, database_service
from app.services.fragment_formatter import (
    catalog_fragment,
    city_fragment,
    product_fragment,
    stats_fragment,
)
from app.services.intent_classifier import Intent, clean_statistics_query, is_ranking_query
from app.services.keyword_normalizer import normalize
from app.utils.logger import logger

PRODUCT_SEARCH_COLUMNS = (
    Product.title_en, Product.title,
    Product.short_description_en, Product.short_description,
    Product.long_description_en, Product.long_description,
    City.name_en, City.name,
)
CITY_SEARCH_COLUMNS = (City.name_en, City.name, City.description_en, City.description, City.country)
STATS_SEARCH_COLUMNS = (Product.title_en, Product.title, City.name_en, City.name)

# tokens that only describe the question, never the product
STATS_FILLER_TOKENS = frozenset({"booking", "bookings", "reservation", "reservations", "how", "many", "for"})


def _like_pattern(keyword: str) -> str:
    escaped = keyword.replace("/", "//").replace("%", "/%").replace("_", "/_")
    return f"%{escaped}%"


def any_keyword_condition(columns: Sequence, keywords: Sequence[str]):
    """OR over every (column ILIKE %keyword%) pair; no keywords matches all rows"""
    if not keywords:
        return true()
    return or_(*(
        column.ilike(_like_pattern(keyword), escape="/")
        for keyword in keywords
        for column in columns
    ))


def product_statement(keywords: Sequence[str], limit: int) -> Select:
    return (
        select(
            Product.id,
            Product.title_en,
            Product.title,
            Product.short_description_en,
            Product.short_description,
            Product.long_description_en,
            Product.long_description,
            Product.slug_en,
            Product.slug,
            City.name_en.label("city_name"),
            City.name.label("city_name_local"),
        )
        .select_from(Product)
        .outerjoin(City, Product.city_id == City.id)
        .where(any_keyword_condition(PRODUCT_SEARCH_COLUMNS, keywords))
        .order_by(Product.id)
        .limit(limit)
    )


def city_statement(keywords: Sequence[str], limit: int) -> Select:
    return (
        select(
            City.id,
            City.name_en,
            City.name,
            City.description_en,
            City.description,
            City.country,
            City.slug_en,
            City.slug,
        )
        .where(any_keyword_condition(CITY_SEARCH_COLUMNS, keywords))
        .order_by(City.id)
        .limit(limit)
    )


def stats_statement(condition, limit: int, include_zero_bookings: bool) -> Select:
    """Booking counts per product.

    The outer join chain keeps products without tours or bookings; they are
    only removed when include_zero_bookings is False.
    """
    total_bookings = func.count(distinct(Booking.id))
    statement = (
        select(
            Product.id,
            Product.title_en,
            Product.title,
            total_bookings.label("total_bookings"),
            func.count(distinct(BookingItem.id)).label("total_participants"),
            func.count(distinct(Tour.id)).label("total_tours"),
        )
        .select_from(Product)
        .outerjoin(City, Product.city_id == City.id)
        .outerjoin(Tour, Tour.product_id == Product.id)
        .outerjoin(Booking, Booking.tour_id == Tour.id)
        .outerjoin(BookingItem, BookingItem.booking_id == Booking.id)
        .where(condition)
        .group_by(Product.id, Product.title_en, Product.title)
    )
    if not include_zero_bookings:
        statement = statement.having(total_bookings > 0)
    return statement.order_by(total_bookings.desc(), Product.id).limit(limit)


def catalog_statement(limit: int) -> Select:
    return (
        select(
            Product.title_en,
            Product.title,
            City.name_en.label("city_name"),
            City.name.label("city_name_local"),
        )
        .select_from(Product)
        .outerjoin(City, Product.city_id == City.id)
        .order_by(City.name_en, Product.title_en)
        .limit(limit)
    )


def statistics_keywords(keywords: Sequence[str], query: str = "") -> List[str]:
    if query:
        return normalize(clean_statistics_query(query))
    return [k for k in keywords if k not in STATS_FILLER_TOKENS]


class StructuredSearchService:
    def __init__(self, db: DatabaseService = None):
        self.db = db or database_service

    async def search(self, keywords: Sequence[str], intent: Intent, query: str = "") -> List[KnowledgeFragment]:
        try:
            logger.info(f" structured search: intent={intent.value}, keywords={list(keywords)}")
            plan = self._plan(list(keywords), intent, query)
            groups = await asyncio.gather(*(strategy() for strategy in plan))
            fragments = [fragment for group in groups for fragment in group]
            logger.info(f" structured search complete: {len(fragments)} fragments")
            return fragments
        except Exception as e:
            logger.error(f" structured search failed: {e}")
            return []

    def _plan(self, keywords: List[str], intent: Intent, query: str) -> List[Callable[[], Awaitable[List[KnowledgeFragment]]]]:
        if intent == Intent.STATISTICS:
            basis = statistics_keywords(keywords, query)
            keep_zero = not is_ranking_query(query)
            return [lambda: self.search_statistics(basis, include_zero_bookings=keep_zero)]

        plan = [
            lambda: self.search_products(keywords),
            lambda: self.search_cities(keywords),
            lambda: self.search_statistics(keywords, include_zero_bookings=False),
        ]
        # the full catalogue goes after the keyword matches
        if intent == Intent.LIST_ALL:
            plan.append(self.search_catalog)
        return plan

    async def _run(self, name: str, statement: Select, build: Callable[[Dict], KnowledgeFragment]) -> List[KnowledgeFragment]:
        try:
            rows = await self.db.run_read_only_query(statement)
            logger.info(f" {name} matches: {len(rows)}")
            return [build(row) for row in rows]
        except Exception as e:
            logger.error(f" {name} search failed: {e}")
            return []

    async def search_products(self, keywords: Sequence[str]) -> List[KnowledgeFragment]:
        return await self._run("product", product_statement(keywords, settings.product_match_limit), product_fragment)

    async def search_cities(self, keywords: Sequence[str]) -> List[KnowledgeFragment]:
        return await self._run("city", city_statement(keywords, settings.city_match_limit), city_fragment)

    async def search_statistics(self, keywords: Sequence[str], include_zero_bookings: bool = True) -> List[KnowledgeFragment]:
        condition = any_keyword_condition(STATS_SEARCH_COLUMNS, keywords)
        statement = stats_statement(condition, settings.stats_match_limit, include_zero_bookings)
        return await self._run("stats", statement, stats_fragment)

    async def search_catalog(self) -> List[KnowledgeFragment]:
        try:
            rows = await self.db.run_read_only_query(catalog_statement(settings.catalog_limit))
            logger.info(f" list all results: {len(rows)}")
            fragment = catalog_fragment(rows)
            return [fragment] if fragment else []
        except Exception as e:
            logger.error(f" catalogue listing failed: {e}")
            return []


# global instance
structured_search_service = StructuredSearchService()
