# app/services/semantic_search_service.py
"""
Semantic (embedding) search over the knowledge collection

query -> embedding -> Qdrant nearest neighbours (exact scan on index failure)
      -> at most 2 chunks per document -> [TOUR] first for product questions
      -> city fallback when no tour survives
"""

import math
from typing import Any, Dict, List, Optional, Sequence

from langchain_openai import OpenAIEmbeddings
from qdrant_client import AsyncQdrantClient
from qdrant_client.models import FieldCondition, Filter, MatchText, MatchValue

from app.config import settings
from app.schemas.knowledge_schemas import KnowledgeFragment, SemanticMatch
from app.services.fragment_formatter import semantic_fragment
from app.services.intent_classifier import is_product_query, is_tour_listing_query
from app.services.keyword_normalizer import city_aliases, detect_city
from app.utils.exceptions import EmbeddingConfigurationError, EmbeddingError
from app.utils.logger import logger

TOUR_ENTITY = "tour"


def cosine_similarity(a: Sequence[float], b: Sequence[float]) -> float:
    """dot(a, b) / (|a| * |b|); 0 for mismatched lengths or zero vectors"""
    if len(a) != len(b) or not a:
        return 0.0
    dot = sum(x * y for x, y in zip(a, b))
    norm_a = math.sqrt(sum(x * x for x in a))
    norm_b = math.sqrt(sum(y * y for y in b))
    if norm_a == 0 or norm_b == 0:
        return 0.0
    return dot / (norm_a * norm_b)


def diversify_by_document(matches: Sequence[SemanticMatch], per_document: int = 2) -> List[SemanticMatch]:
    """Keep the best `per_document` chunks of each document, document order by best chunk"""
    groups: Dict[str, List[SemanticMatch]] = {}
    for match in sorted(matches, key=lambda m: -m.similarity):
        group = groups.setdefault(match.document_id, [])
        if len(group) < per_document:
            group.append(match)
    return [match for group in groups.values() for match in group]


def rank_matches(matches: Sequence[SemanticMatch], prioritize_tours: bool) -> List[SemanticMatch]:
    def sort_key(match: SemanticMatch):
        tour_rank = 0 if prioritize_tours and match.entity_type == TOUR_ENTITY else 1
        return (tour_rank, -match.similarity)

    return sorted(matches, key=sort_key)


def point_to_match(point: Any, score: float) -> SemanticMatch:
    payload = point.payload or {}
    return SemanticMatch(
        document_id=str(payload.get("document_id") or point.id),
        chunk_id=str(payload.get("chunk_id") or point.id),
        text=payload.get("text") or payload.get("page_content") or "",
        entity_type=payload.get("entity_type") or "unknown",
        similarity=score,
        doc_title=payload.get("doc_title"),
        metadata=payload.get("metadata") or {},
    )


def _point_vector(point: Any) -> List[float]:
    vector = point.vector
    if isinstance(vector, dict):
        vector = next(iter(vector.values()), None)
    return list(vector or [])


class SemanticSearchService:
    def __init__(self, qdrant_client: AsyncQdrantClient = None, embeddings: OpenAIEmbeddings = None, collection_name: str = None):
        self.qdrant_client = qdrant_client or AsyncQdrantClient(
            url=settings.qdrant_url,
            api_key=settings.qdrant_api_key
        )
        self._embeddings = embeddings
        self.collection_name = collection_name or settings.knowledge_collection
        logger.info(" SemanticSearchService initialised")

    def _get_embeddings(self) -> OpenAIEmbeddings:
        if self._embeddings is None:
            if not settings.openai_api_key:
                raise EmbeddingConfigurationError("OPENAI_API_KEY is not configured; semantic search is unavailable")
            self._embeddings = OpenAIEmbeddings(
                model=settings.embedding_model,
                openai_api_key=settings.openai_api_key
            )
        return self._embeddings

    async def embed_query(self, query: str) -> List[float]:
        embeddings = self._get_embeddings()
        try:
            return await embeddings.aembed_query(query)
        except Exception as e:
            raise EmbeddingError(f"embedding provider failed: {e}") from e

    async def search(self, query: str) -> List[KnowledgeFragment]:
        """Embedding errors propagate; everything else degrades to []"""
        logger.info(f" semantic search: query='{query}'")
        query_vector = await self.embed_query(query)

        try:
            matches = await self._search_with_vector(query, query_vector)
            logger.info(f" semantic search complete: {len(matches)} matches")
            return [semantic_fragment(match) for match in matches]
        except Exception as e:
            logger.error(f" semantic search failed: {e}")
            return []

    async def _search_with_vector(self, query: str, query_vector: List[float]) -> List[SemanticMatch]:
        try:
            matches = await self.match(query_vector, settings.semantic_threshold, settings.semantic_match_count)
        except Exception as e:
            logger.warning(f" vector index query failed, scanning raw embeddings: {e}")
            matches = await self.exact_match(query_vector)

        if not matches:
            if is_tour_listing_query(query):
                return await self.city_fallback(query)
            return []

        product_query = is_product_query(query)
        diversified = diversify_by_document(matches, settings.semantic_chunks_per_document)
        ranked = rank_matches(diversified, prioritize_tours=product_query)[:settings.semantic_result_limit]

        if product_query and not any(m.entity_type == TOUR_ENTITY for m in ranked):
            fallback = await self.city_fallback(query)
            if fallback:
                logger.info(f" no tours in semantic results, using {len(fallback)} city matches instead")
                return fallback

        return ranked

    async def match(self, query_vector: List[float], threshold: float, count: int) -> List[SemanticMatch]:
        response = await self.qdrant_client.query_points(
            collection_name=self.collection_name,
            query=query_vector,
            limit=count,
            score_threshold=threshold,
            with_payload=True
        )
        logger.info(f" {self.collection_name} index matches: {len(response.points)}")
        return [point_to_match(point, point.score) for point in response.points]

    async def exact_match(self, query_vector: List[float]) -> List[SemanticMatch]:
        """Client-side cosine over a bounded batch of stored vectors"""
        try:
            points, _ = await self.qdrant_client.scroll(
                collection_name=self.collection_name,
                limit=settings.semantic_fallback_batch,
                with_payload=True,
                with_vectors=True
            )
        except Exception as e:
            logger.error(f" raw embedding scan failed: {e}")
            return []

        scored = []
        for point in points:
            score = cosine_similarity(query_vector, _point_vector(point))
            if score >= settings.semantic_threshold:
                scored.append(point_to_match(point, score))

        scored.sort(key=lambda m: -m.similarity)
        return scored[:settings.semantic_fallback_limit]

    async def city_fallback(self, query: str) -> List[SemanticMatch]:
        """Tour chunks mentioning the city named in the query"""
        city = detect_city(query)
        if not city:
            return []

        aliases = city_aliases(city)
        spellings = list(dict.fromkeys(aliases + [alias.capitalize() for alias in aliases]))
        try:
            points, _ = await self.qdrant_client.scroll(
                collection_name=self.collection_name,
                scroll_filter=Filter(
                    must=[FieldCondition(key="entity_type", match=MatchValue(value=TOUR_ENTITY))],
                    should=[FieldCondition(key="text", match=MatchText(text=spelling)) for spelling in spellings]
                ),
                limit=settings.city_fallback_limit,
                with_payload=True
            )
        except Exception as e:
            logger.error(f" city fallback failed for '{city}': {e}")
            return []

        logger.info(f" city fallback '{city}': {len(points)} tour chunks")
        matches = []
        for point in points:
            match = point_to_match(point, 1.0)
            match.metadata = {**match.metadata, "match_source": "city_fallback", "city": city}
            matches.append(match)
        return matches

    async def close(self):
        await self.qdrant_client.close()


# global instance
semantic_search_service = SemanticSearchService()
