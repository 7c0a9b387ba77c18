# app/schemas/search_schemas.py
"""
Knowledge search schemas
"""

from enum import Enum
from pydantic import BaseModel, Field
from typing import List, Optional

from .commons_schemas import BaseResponse
from .knowledge_schemas import KnowledgeFragment


class SearchMode(str, Enum):
    STRUCTURED = "structured"
    SEMANTIC = "semantic"
    HYBRID = "hybrid"


class SearchRequest(BaseModel):
    query: str = Field(..., max_length=2000)
    mode: SearchMode = SearchMode.STRUCTURED


class SearchResponse(BaseResponse):
    fragments: List[KnowledgeFragment]
    intent: Optional[str] = None
    keywords: List[str] = []
    total_found: int
