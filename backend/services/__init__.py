"""Services for the Pakistan History RAG Chatbot."""
from .errors import (
    RAGError,
    EmbeddingError,
    RetrievalError,
    QueryTransformationError,
    AnswerGenerationError,
    EmptyHistoryError,
)
from .document_loader import DocumentLoader
from .chunking_engine import ChunkingEngine
from .embedding_model import EmbeddingModel
from .vector_store import VectorStore
from .llm_client import LLMClient, LLMError, GenerationError
from .conversation_history import ConversationHistory
from .query_transformer import QueryTransformer
from .context_assembler import ContextAssembler
from .answer_generator import AnswerGenerator
from .rag_orchestrator import RAGOrchestrator, PipelineStage

__all__ = [
    'RAGError', 'EmbeddingError', 'RetrievalError', 'QueryTransformationError',
    'AnswerGenerationError', 'EmptyHistoryError', 'DocumentLoader', 'ChunkingEngine',
    'EmbeddingModel', 'VectorStore', 'LLMClient', 'LLMError', 'GenerationError',
    'ConversationHistory', 'QueryTransformer', 'ContextAssembler', 'AnswerGenerator',
    'RAGOrchestrator', 'PipelineStage',
]
