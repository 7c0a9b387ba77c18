# app/api/search.py
"""
Knowledge search API
"""

from fastapi import APIRouter, HTTPException

from app.services.knowledge_service import knowledge_service
from app.schemas.search_schemas import SearchMode, SearchRequest, SearchResponse
from app.utils.exceptions import EmbeddingError
from app.utils.logger import logger

router = APIRouter(tags=["search"])


@router.post("/knowledge/search", response_model=SearchResponse)
async def search_knowledge(request: SearchRequest):
    """Structured, semantic or combined knowledge search"""
    try:
        logger.info(f" knowledge search request: mode={request.mode.value}, query='{request.query}'")

        fragments = []
        intent = None
        keywords = []

        if request.mode in (SearchMode.SEMANTIC, SearchMode.HYBRID):
            fragments.extend(await knowledge_service.search_semantic(request.query))

        if request.mode in (SearchMode.STRUCTURED, SearchMode.HYBRID):
            result = await knowledge_service.search_structured(request.query)
            intent = result.intent.value
            keywords = result.keywords
            fragments.extend(result.fragments)

        logger.info(f" search complete: {len(fragments)} fragments")

        return SearchResponse(
            status="success",
            fragments=fragments,
            intent=intent,
            keywords=keywords,
            total_found=len(fragments)
        )

    except EmbeddingError as e:
        logger.error(f" semantic search unavailable: {e}")
        raise HTTPException(status_code=503, detail=f"Semantic search unavailable: {e}")
    except Exception as e:
        logger.error(f" knowledge search failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
