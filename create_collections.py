from qdrant_client import QdrantClient
from qdrant_client.http.models import (
    Distance,
    PayloadSchemaType,
    TextIndexParams,
    TextIndexType,
    TokenizerType,
    VectorParams,
)

from app.config import settings


def create_knowledge_collection(client: QdrantClient, collection_name: str = None, vector_size: int = None):
    """Recreate the knowledge collection from scratch"""
    collection_name = collection_name or settings.knowledge_collection
    # must match the embedding model (text-embedding-3-small: 1536)
    vector_size = vector_size or settings.embedding_dimension

    if client.collection_exists(collection_name):
        client.delete_collection(collection_name)
        print(f"🗑️ Deleted existing: {collection_name}")

    client.create_collection(
        collection_name=collection_name,
        vectors_config=VectorParams(
            size=vector_size,
            distance=Distance.COSINE
        )
    )

    # filters used by the city fallback and per-document grouping
    client.create_payload_index(collection_name, field_name="entity_type", field_schema=PayloadSchemaType.KEYWORD)
    client.create_payload_index(collection_name, field_name="document_id", field_schema=PayloadSchemaType.KEYWORD)
    client.create_payload_index(
        collection_name,
        field_name="text",
        field_schema=TextIndexParams(
            type=TextIndexType.TEXT,
            tokenizer=TokenizerType.MULTILINGUAL,
            lowercase=True,
        )
    )
    print(f" Created: {collection_name} ({vector_size} dims)")


if __name__ == "__main__":
    # QDRANT_URL / QDRANT_API_KEY come from the environment or .env
    create_knowledge_collection(QdrantClient(url=settings.qdrant_url, api_key=settings.qdrant_api_key))
