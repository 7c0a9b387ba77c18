# app/config.py
from pydantic_settings import BaseSettings
from pydantic import ConfigDict
from typing import Optional

class Settings(BaseSettings):
    model_config = ConfigDict(env_file=".env", extra="allow")

    # OpenAI (embeddings only; checked when semantic search runs)
    openai_api_key: Optional[str] = None
    embedding_model: str = "text-embedding-3-small"
    embedding_dimension: int = 1536

    # Qdrant
    qdrant_url: Optional[str] = None
    qdrant_api_key: Optional[str] = None
    knowledge_collection: str = "knowledge_chunks"

    # PostgreSQL (read-only catalogue)
    postgres_host: str = "localhost"
    postgres_port: int = 25060
    postgres_user: str = "readonly"
    postgres_password: str = ""
    postgres_database: str = "walkative"
    postgres_ssl: bool = True
    db_pool_size: int = 10
    db_pool_recycle: int = 3600

    # Structured search limits
    product_match_limit: int = 10
    city_match_limit: int = 5
    stats_match_limit: int = 5
    catalog_limit: int = 50

    # Semantic search
    semantic_search_enabled: bool = True
    semantic_threshold: float = 0.4
    semantic_match_count: int = 50
    semantic_fallback_batch: int = 100
    semantic_fallback_limit: int = 5
    semantic_result_limit: int = 10
    semantic_chunks_per_document: int = 2
    city_fallback_limit: int = 10

    # App Settings
    debug: bool = False
    log_level: str = "INFO"

settings = Settings()
