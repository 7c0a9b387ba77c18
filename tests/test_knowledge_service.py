"""
Knowledge service (retrieval facade) tests
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from app.config import settings
from app.schemas.knowledge_schemas import KnowledgeFragment
from app.services.intent_classifier import Intent
from app.services.knowledge_service import KnowledgeService
from app.services.structured_search_service import StructuredSearchService
from app.utils.exceptions import EmbeddingConfigurationError, EmbeddingError


def _fragment(source):
    return KnowledgeFragment(source=source, content=f"content of {source}")


@pytest.fixture
def structured():
    mock = MagicMock()
    mock.search = AsyncMock(return_value=[_fragment("Product: City Tour")])
    return mock


@pytest.fixture
def semantic():
    mock = MagicMock()
    mock.search = AsyncMock(return_value=[_fragment("[TOUR] Krakow Old Town (91%)")])
    return mock


class TestSearchStructured:
    @pytest.mark.asyncio
    async def test_reports_intent_and_keywords(self, structured, semantic):
        service = KnowledgeService(structured=structured, semantic=semantic)

        result = await service.search_structured("how many bookings for City Tour")

        assert result.intent == Intent.STATISTICS
        assert "city" in result.keywords
        assert len(result.fragments) == 1
        structured.search.assert_awaited_once_with(
            result.keywords, Intent.STATISTICS, "how many bookings for City Tour"
        )

    @pytest.mark.asyncio
    async def test_against_catalogue(self, catalog_db, semantic):
        service = KnowledgeService(structured=StructuredSearchService(catalog_db), semantic=semantic)

        result = await service.search_structured("list all tours")

        assert result.intent == Intent.LIST_ALL
        assert result.fragments[-1].source == "Complete Tour Catalog"


class TestRetrieve:
    @pytest.mark.asyncio
    async def test_semantic_fragments_come_first(self, structured, semantic):
        service = KnowledgeService(structured=structured, semantic=semantic)

        fragments = await service.retrieve("tours in Krakow")

        assert [f.source for f in fragments] == ["[TOUR] Krakow Old Town (91%)", "Product: City Tour"]

    @pytest.mark.asyncio
    async def test_missing_embedding_key_skips_semantic_half(self, structured, semantic):
        semantic.search.side_effect = EmbeddingConfigurationError("OPENAI_API_KEY is not configured")
        service = KnowledgeService(structured=structured, semantic=semantic)

        fragments = await service.retrieve("tours in Krakow")

        assert [f.source for f in fragments] == ["Product: City Tour"]

    @pytest.mark.asyncio
    async def test_provider_failure_propagates(self, structured, semantic):
        semantic.search.side_effect = EmbeddingError("embedding provider failed: 401")
        service = KnowledgeService(structured=structured, semantic=semantic)

        with pytest.raises(EmbeddingError):
            await service.retrieve("tours in Krakow")

    @pytest.mark.asyncio
    async def test_semantic_disabled(self, structured, semantic, monkeypatch):
        monkeypatch.setattr(settings, "semantic_search_enabled", False)
        service = KnowledgeService(structured=structured, semantic=semantic)

        fragments = await service.retrieve("tours in Krakow")

        assert len(fragments) == 1
        semantic.search.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_use_semantic_flag(self, structured, semantic):
        service = KnowledgeService(structured=structured, semantic=semantic)

        await service.retrieve("tours in Krakow", use_semantic=False)

        semantic.search.assert_not_awaited()
