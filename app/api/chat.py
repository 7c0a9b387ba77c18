# app/api/chat.py
"""
Prompt assembly API

Retrieves knowledge for a question and returns the message list for the
language model. Conversation history and user memory come from the caller.
"""

from fastapi import APIRouter, HTTPException

from app.prompts.chat_prompt import build_prompt
from app.schemas.chat_schemas import PromptMessage, PromptRequest, PromptResponse
from app.services.knowledge_service import knowledge_service
from app.utils.exceptions import EmbeddingError
from app.utils.logger import logger

router = APIRouter(tags=["chat"])

MESSAGE_ROLES = {"system": "system", "human": "user", "ai": "assistant"}


@router.post("/chat/prompt", response_model=PromptResponse)
async def assemble_prompt(request: PromptRequest):
    try:
        logger.info(f" prompt request: question='{request.question}', history={len(request.history)}")

        fragments = await knowledge_service.retrieve(request.question, use_semantic=request.use_semantic)
        messages = build_prompt(
            question=request.question,
            fragments=fragments,
            memory=request.memory,
            history=[message.model_dump() for message in request.history]
        )

        return PromptResponse(
            status="success",
            messages=[PromptMessage(role=MESSAGE_ROLES[m.type], content=m.content) for m in messages],
            knowledge_used=len(fragments) > 0,
            fragment_count=len(fragments)
        )

    except EmbeddingError as e:
        logger.error(f" embedding provider failed: {e}")
        raise HTTPException(status_code=503, detail=f"Semantic search unavailable: {e}")
    except Exception as e:
        logger.error(f" prompt assembly failed: {e}")
        raise HTTPException(status_code=500, detail=str(e))
