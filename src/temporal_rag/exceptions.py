"""Custom exception hierarchy for the temporal RAG pipeline."""


class TemporalRAGError(Exception):
    """Base exception for all temporal RAG errors."""


class ConfigurationError(TemporalRAGError):
    """Error in system configuration."""


class EmbeddingError(TemporalRAGError):
    """Error generating embeddings."""


class GenerationError(TemporalRAGError):
    """Error calling the language model."""


class RetrievalError(TemporalRAGError):
    """Error during retrieval."""


class VectorIndexError(RetrievalError):
    """The vector index was unreachable or rejected a request."""


class EmbeddingDimensionMismatch(RetrievalError):
    """Query and candidate embeddings do not share a dimensionality."""


class IngestionError(TemporalRAGError):
    """Error during document ingestion."""
