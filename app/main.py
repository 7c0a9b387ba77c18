# app/main.py
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.api import chat, search
from app.services.database_service import database_service
from app.services.semantic_search_service import semantic_search_service
from app.utils.logger import setup_logger
from app.config import settings
from app import __version__
import uvicorn

logger = setup_logger()

app = FastAPI(
    title="Tour Knowledge Service",
    description="Knowledge retrieval for the Walkative! tour assistant",
    version=__version__,
    debug=settings.debug
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

@app.on_event("startup")
async def startup_event():
    logger.info(" Tour Knowledge Service starting")
    logger.info(f" Debug mode: {settings.debug}")
    logger.info(f" Knowledge collection: {settings.knowledge_collection}")
    if not settings.openai_api_key:
        logger.warning(" OPENAI_API_KEY not set - semantic search will be unavailable")

@app.on_event("shutdown")
async def shutdown_event():
    logger.info(" Tour Knowledge Service stopping")
    await database_service.close()
    await semantic_search_service.close()

app.include_router(search.router, prefix="/api")
app.include_router(chat.router, prefix="/api")

@app.get("/")
async def root():
    return {
        "service": "Tour Knowledge Service",
        "version": __version__,
        "status": "running",
        "features": [
            "keyword search over the tour catalogue",
            "booking statistics",
            "semantic search with per-document diversification",
            "prompt assembly"
        ]
    }

@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "knowledge_collection": settings.knowledge_collection,
        "semantic_search": {
            "enabled": settings.semantic_search_enabled,
            "embedding_configured": bool(settings.openai_api_key)
        }
    }

if __name__ == "__main__":
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.debug,
        log_level=settings.log_level.lower()
    )
