# app/schemas/__init__.py
"""
Schemas package
Only the shared schemas are exposed here; import the rest from their modules
"""

from .commons_schemas import BaseResponse
from .knowledge_schemas import KnowledgeFragment, SemanticMatch

# from .search_schemas import SearchRequest, SearchResponse
# from .chat_schemas import PromptRequest, PromptResponse
