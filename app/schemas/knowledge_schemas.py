# app/schemas/knowledge_schemas.py
"""
Knowledge fragment and semantic match schemas
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Any, Dict, Optional


class KnowledgeFragment(BaseModel):
    """One unit of retrieved knowledge handed to prompt assembly"""
    model_config = ConfigDict(frozen=True)

    source: str
    content: str
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SemanticMatch(BaseModel):
    document_id: str
    chunk_id: str
    text: str = ""
    entity_type: str = "unknown"
    similarity: float = 0.0
    doc_title: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("similarity")
    @classmethod
    def clamp_similarity(cls, value: float) -> float:
        return min(max(float(value), 0.0), 1.0)
