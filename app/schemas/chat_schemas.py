# app/schemas/chat_schemas.py
"""
Prompt assembly schemas
"""

from pydantic import BaseModel, Field
from typing import List, Literal
from .commons_schemas import BaseResponse


class HistoryMessage(BaseModel):
    role: Literal["user", "assistant", "system"]
    content: str


class PromptRequest(BaseModel):
    question: str = Field(..., min_length=1, max_length=2000)
    memory: List[str] = []
    history: List[HistoryMessage] = []
    use_semantic: bool = True


class PromptMessage(BaseModel):
    role: str
    content: str


class PromptResponse(BaseResponse):
    messages: List[PromptMessage]
    knowledge_used: bool
    fragment_count: int
