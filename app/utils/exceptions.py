# app/utils/exceptions.py
"""
Knowledge retrieval errors
"""


class KnowledgeError(Exception):
    """Base class for retrieval errors"""


class ReadOnlyQueryError(KnowledgeError):
    """A statement other than SELECT reached the catalogue store"""


class EmbeddingError(KnowledgeError):
    """The embedding provider could not produce a vector"""


class EmbeddingConfigurationError(EmbeddingError):
    """No embedding credential is configured"""
