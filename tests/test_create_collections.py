"""
Knowledge collection setup tests (Qdrant client mocked)
"""

from unittest.mock import MagicMock

from qdrant_client.http.models import Distance, PayloadSchemaType

from app.config import settings
from create_collections import create_knowledge_collection


def _client(exists=False):
    client = MagicMock()
    client.collection_exists.return_value = exists
    return client


def test_vector_size_follows_embedding_dimension(monkeypatch):
    monkeypatch.setattr(settings, "embedding_dimension", 3072)
    client = _client()

    create_knowledge_collection(client, "test_chunks")

    vectors_config = client.create_collection.call_args.kwargs["vectors_config"]
    assert client.create_collection.call_args.kwargs["collection_name"] == "test_chunks"
    assert vectors_config.size == 3072
    assert vectors_config.distance == Distance.COSINE
    client.delete_collection.assert_not_called()


def test_existing_collection_recreated():
    client = _client(exists=True)

    create_knowledge_collection(client, "test_chunks", vector_size=8)

    client.delete_collection.assert_called_once_with("test_chunks")
    assert client.create_collection.call_args.kwargs["vectors_config"].size == 8


def test_payload_indexes():
    client = _client()

    create_knowledge_collection(client, "test_chunks")

    indexes = {call.kwargs["field_name"]: call.kwargs["field_schema"] for call in client.create_payload_index.call_args_list}
    assert indexes["entity_type"] == PayloadSchemaType.KEYWORD
    assert indexes["document_id"] == PayloadSchemaType.KEYWORD
    assert indexes["text"].lowercase is True
