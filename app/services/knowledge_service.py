# app/services/knowledge_service.py
"""
Knowledge retrieval entry point
"""

from typing import List, NamedTuple

from app.config import settings
from app.schemas.knowledge_schemas import KnowledgeFragment
from app.services.intent_classifier import Intent, classify
from app.services.keyword_normalizer import normalize
from app.services.semantic_search_service import SemanticSearchService, semantic_search_service
from app.services.structured_search_service import StructuredSearchService, structured_search_service
from app.utils.exceptions import EmbeddingConfigurationError
from app.utils.logger import logger


class StructuredResult(NamedTuple):
    intent: Intent
    keywords: List[str]
    fragments: List[KnowledgeFragment]


class KnowledgeService:
    def __init__(
        self,
        structured: StructuredSearchService = None,
        semantic: SemanticSearchService = None
    ):
        self.structured = structured or structured_search_service
        self.semantic = semantic or semantic_search_service

    async def search_structured(self, query: str) -> StructuredResult:
        keywords = normalize(query)
        intent = classify(query)
        logger.info(f" knowledge search: query='{query}', keywords={keywords}, intent={intent.value}")
        fragments = await self.structured.search(keywords, intent, query)
        return StructuredResult(intent, keywords, fragments)

    async def search_semantic(self, query: str) -> List[KnowledgeFragment]:
        return await self.semantic.search(query)

    async def retrieve(self, query: str, use_semantic: bool = True) -> List[KnowledgeFragment]:
        """Semantic fragments first, then structured ones.

        A missing embedding key only disables the semantic half; provider
        failures still propagate.
        """
        fragments: List[KnowledgeFragment] = []
        if use_semantic and settings.semantic_search_enabled:
            try:
                fragments.extend(await self.search_semantic(query))
            except EmbeddingConfigurationError as e:
                logger.warning(f" semantic search skipped: {e}")

        structured = await self.search_structured(query)
        fragments.extend(structured.fragments)
        return fragments


# global instance
knowledge_service = KnowledgeService()
