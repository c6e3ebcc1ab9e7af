"""Error taxonomy for the retrieval-augmented answering pipeline.

Collaborator failures (embedding, retrieval, generation) are raised by the
clients that talk to remote services. The pipeline stages wrap them with
stage context before they reach the caller of ``RAGOrchestrator.answer``.
"""
from typing import Optional


class RAGError(Exception):
    """Base class for every pipeline failure; ``stage`` names where it happened."""

    stage = "unknown"

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause


class EmbeddingError(RAGError):
    """Embedding client failed or returned a vector of the wrong size."""

    stage = "embedding"


class RetrievalError(RAGError):
    """Vector index query failed or returned unusable matches."""

    stage = "retrieval"


class QueryTransformationError(RAGError):
    """Rewriting the follow-up question into a standalone question failed."""

    stage = "query_transformation"


class AnswerGenerationError(RAGError):
    """Generating the grounded answer failed."""

    stage = "answer_generation"


class EmptyHistoryError(RAGError):
    """Attempted to remove a turn from an empty history. Indicates a logic bug."""

    stage = "history"
