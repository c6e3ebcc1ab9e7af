"""Context assembler: turns a standalone question into retrieved evidence text."""
import logging
from typing import List

from config import TOP_K, CONTEXT_SEPARATOR, EMBEDDING_DIMENSION
from models.chunk import RetrievedPassage
from services.embedding_model import EmbeddingModel
from services.errors import EmbeddingError, RetrievalError
from services.vector_store import VectorStore, TEXT_METADATA_KEY

logger = logging.getLogger(__name__)


class ContextAssembler:
    """Orchestrate query embedding and passage retrieval into an evidence context."""

    def __init__(
        self,
        vector_store: VectorStore,
        embedding_model: EmbeddingModel,
        top_k: int = TOP_K,
        separator: str = CONTEXT_SEPARATOR,
        dimension: int = EMBEDDING_DIMENSION
    ):
        """
        Initialize the context assembler.

        Args:
            vector_store: Vector index queried for nearest passages
            embedding_model: Client used to embed the question
            top_k: Number of passages requested from the index
            separator: String placed between passages in the context
            dimension: Expected embedding length
        """
        self.vector_store = vector_store
        self.embedding_model = embedding_model
        self.top_k = top_k
        self.separator = separator
        self.dimension = dimension
        logger.info(f"Initialized ContextAssembler (top_k={top_k}, dimension={dimension})")

    def retrieve(self, question: str) -> List[RetrievedPassage]:
        """
        Embed the question and fetch the nearest passages.

        Passages come back in the order the vector index returned them,
        which is highest similarity first. No re-ranking or filtering.

        Raises:
            EmbeddingError: If embedding fails or has the wrong dimensionality
            RetrievalError: If the index query fails or a match has no text
        """
        logger.debug(f"Embedding query: {question[:100]!r}")
        try:
            vector = self.embedding_model.embed_text(question)
        except EmbeddingError:
            raise
        except Exception as e:
            raise EmbeddingError(f"Failed to embed query: {e}", cause=e) from e

        if len(vector) != self.dimension:
            raise EmbeddingError(
                f"Embedding has dimension {len(vector)}, expected {self.dimension}"
            )
        logger.info(f"Query vector generated successfully. Vector length: {len(vector)}")

        try:
            matches = self.vector_store.query(vector, top_k=self.top_k, include_metadata=True)
        except RetrievalError:
            raise
        except Exception as e:
            raise RetrievalError(f"Failed to query vector index: {e}", cause=e) from e

        logger.info(f"Vector index query successful. Retrieved {len(matches)} matches")

        passages = []
        for index, match in enumerate(matches, start=1):
            text = match.metadata.get(TEXT_METADATA_KEY)
            if text is None:
                raise RetrievalError(
                    f"Match {index} has no '{TEXT_METADATA_KEY}' in its metadata"
                )
            logger.debug(f"Match {index}: score={match.score:.4f}")
            passages.append(RetrievedPassage(text=text, score=match.score))

        return passages

    def assemble(self, question: str) -> str:
        """
        Build the evidence context for ``question``.

        Returns:
            Passage texts joined with the separator; empty string when the
            index returns no matches
        """
        passages = self.retrieve(question)
        context = self.separator.join(passage.text for passage in passages)
        logger.info(f"Context created successfully. Context length: {len(context)}")
        return context
