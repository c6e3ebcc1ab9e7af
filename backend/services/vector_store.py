"""Vector store implementation using Supabase pgvector."""
import logging
from typing import List, Optional
from supabase import create_client, Client
from models.chunk import Chunk, VectorMatch
from services.embedding_model import EmbeddingModel
from services.errors import RetrievalError
from config import SUPABASE_URL, SUPABASE_KEY, VECTOR_TABLE, MATCH_FUNCTION

logger = logging.getLogger(__name__)

# Key under which every stored row keeps the original chunk text.
TEXT_METADATA_KEY = "text"


class VectorStore:
    """Store chunk embeddings and run similarity search using Supabase pgvector."""

    def __init__(
        self,
        embedding_model: Optional[EmbeddingModel] = None,
        supabase_url: Optional[str] = SUPABASE_URL,
        supabase_key: Optional[str] = SUPABASE_KEY,
        table_name: str = VECTOR_TABLE,
        match_function: str = MATCH_FUNCTION
    ):
        """
        Initialize the vector store with Supabase client.

        Args:
            embedding_model: EmbeddingModel used to embed chunks on ingestion
                (not needed for querying)
            supabase_url: Supabase project URL
            supabase_key: Supabase API key
            table_name: Name of the table storing chunks
            match_function: Name of the similarity search RPC

        Raises:
            ValueError: If Supabase credentials are missing
        """
        if not supabase_url or not supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_KEY environment variables are required")

        self.embedding_model = embedding_model
        self.table_name = table_name
        self.match_function = match_function

        self.client: Client = create_client(supabase_url, supabase_key)

        logger.info(f"Initialized VectorStore with table: {table_name}")

    def add_chunks(self, chunks: List[Chunk]) -> None:
        """
        Embed chunks in one batch call and upsert them into the table.

        Args:
            chunks: List of Chunk objects to store

        Raises:
            ValueError: If chunks list is empty or no embedding model is set
            RetrievalError: If the database operation fails
        """
        if not chunks:
            raise ValueError("Chunks list cannot be empty")
        if self.embedding_model is None:
            raise ValueError("An embedding model is required to add chunks")

        logger.info(f"Adding {len(chunks)} chunks to vector store...")

        embeddings = self.embedding_model.embed_batch([chunk.text for chunk in chunks])

        records = [
            {
                "chunk_id": chunk.chunk_id,
                TEXT_METADATA_KEY: chunk.text,
                "document_name": chunk.document_name,
                "page_number": chunk.page_number,
                "token_count": chunk.token_count,
                "embedding": embedding
            }
            for chunk, embedding in zip(chunks, embeddings)
        ]

        try:
            # Upsert so re-running ingestion replaces rows with the same chunk_id
            self.client.table(self.table_name).upsert(records).execute()
        except Exception as e:
            error_msg = f"Failed to add chunks to vector store: {str(e)}"
            logger.error(error_msg)
            raise RetrievalError(error_msg, cause=e) from e

        logger.info(f"Successfully added {len(chunks)} chunks to vector store")

    def query(
        self,
        vector: List[float],
        top_k: int,
        include_metadata: bool = True
    ) -> List[VectorMatch]:
        """
        Find the ``top_k`` stored chunks nearest to ``vector``.

        The RPC should be created in Supabase with:
            CREATE OR REPLACE FUNCTION match_chunks(
              query_embedding vector(768),
              match_count int
            )
            RETURNS TABLE (
              chunk_id text, text text, document_name text,
              page_number int, token_count int, similarity float
            )
            LANGUAGE sql STABLE AS $$
              SELECT chunk_id, text, document_name, page_number, token_count,
                     1 - (embedding <=> query_embedding) AS similarity
              FROM document_chunks
              ORDER BY embedding <=> query_embedding
              LIMIT match_count;
            $$;

        Args:
            vector: Query embedding
            top_k: Number of matches to return
            include_metadata: Attach the stored row (including chunk text)

        Returns:
            Matches ordered by similarity, highest first

        Raises:
            ValueError: If vector is empty or top_k is invalid
            RetrievalError: If the database operation fails
        """
        if not vector:
            raise ValueError("Query vector cannot be empty")

        if top_k <= 0:
            raise ValueError("top_k must be positive")

        try:
            response = self.client.rpc(
                self.match_function,
                {
                    "query_embedding": vector,
                    "match_count": top_k
                }
            ).execute()
        except Exception as e:
            error_msg = f"Failed to query vector store: {str(e)}"
            logger.error(error_msg)
            raise RetrievalError(error_msg, cause=e) from e

        matches = []
        for index, row in enumerate(response.data or [], start=1):
            try:
                score = float(row["similarity"])
            except (KeyError, TypeError, ValueError) as e:
                error_msg = f"Match {index} has no usable similarity score: {row!r}"
                logger.error(error_msg)
                raise RetrievalError(error_msg, cause=e) from e
            metadata = {k: v for k, v in row.items() if k != "similarity"} if include_metadata else {}
            matches.append(VectorMatch(score=score, metadata=metadata))

        logger.debug(f"Vector store returned {len(matches)} matches")
        return matches

    def clear(self) -> None:
        """
        Delete every chunk from the table.

        Raises:
            RetrievalError: If the database operation fails
        """
        try:
            self.client.table(self.table_name).delete().neq("chunk_id", "").execute()
            logger.info("Cleared all chunks from vector store")
        except Exception as e:
            error_msg = f"Failed to clear vector store: {str(e)}"
            logger.error(error_msg)
            raise RetrievalError(error_msg, cause=e) from e

    def count(self) -> int:
        """
        Get the total number of chunks in the vector store.

        Raises:
            RetrievalError: If the database operation fails
        """
        try:
            response = self.client.table(self.table_name).select("chunk_id", count="exact").execute()
            return response.count if response.count is not None else 0
        except Exception as e:
            error_msg = f"Failed to count chunks in vector store: {str(e)}"
            logger.error(error_msg)
            raise RetrievalError(error_msg, cause=e) from e
