"""
Document Ingestion Script for the Pakistan History RAG Chatbot.

This script:
1. Loads the source PDF
2. Splits it into 1000-character chunks with 200 characters of overlap
3. Generates embeddings using the HuggingFace API
4. Stores everything in Supabase pgvector

Usage:
    python ingest_documents.py [--pdf pakistan.pdf] [--clear] [--batch-size 10]
"""
import sys
import logging
import argparse
from pathlib import Path
from typing import List

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent))

from services.document_loader import DocumentLoader
from services.chunking_engine import ChunkingEngine
from services.embedding_model import EmbeddingModel
from services.vector_store import VectorStore
from models.chunk import Chunk
from config import DOCUMENT_PATH

logger = logging.getLogger(__name__)


def store_chunks(vector_store: VectorStore, chunks: List[Chunk], batch_size: int) -> int:
    """
    Embed and upsert chunks in batches.

    Returns:
        Number of batches written
    """
    if batch_size <= 0:
        raise ValueError("batch_size must be positive")

    total_batches = (len(chunks) + batch_size - 1) // batch_size
    for i in range(0, len(chunks), batch_size):
        batch = chunks[i:i + batch_size]
        batch_num = (i // batch_size) + 1
        logger.info(f"Processing batch {batch_num}/{total_batches} ({len(batch)} chunks)...")
        vector_store.add_chunks(batch)

    return total_batches


def ingest(pdf_path: str, clear: bool = False, batch_size: int = 10) -> int:
    """
    Run the full ingestion job for one PDF.

    Returns:
        Number of chunks stored
    """
    logger.info("Starting PDF indexing process...")

    embedding_model = EmbeddingModel()
    vector_store = VectorStore(embedding_model=embedding_model)

    if clear:
        logger.info(f"Clearing {vector_store.count()} existing chunks...")
        vector_store.clear()

    document = DocumentLoader().load(pdf_path)
    chunks = ChunkingEngine().chunk_document(document)

    if not chunks:
        logger.warning(f"No text extracted from {pdf_path}; nothing to store")
        return 0

    logger.info(f"Sample chunk (first 100 characters): {chunks[0].text[:100]!r}")
    store_chunks(vector_store, chunks, batch_size)

    logger.info(f"Data stored successfully. Total chunks processed: {len(chunks)}")
    return len(chunks)


def main():
    """Main ingestion process."""
    parser = argparse.ArgumentParser(
        description="Index a PDF into the vector store for the RAG chatbot"
    )
    parser.add_argument(
        "--pdf",
        default=DOCUMENT_PATH,
        help=f"Path to the source PDF (default: {DOCUMENT_PATH})"
    )
    parser.add_argument(
        "--clear",
        action="store_true",
        help="Delete existing chunks before indexing"
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=10,
        help="Chunks embedded per API call (default: 10)"
    )
    args = parser.parse_args()

    try:
        ingest(args.pdf, clear=args.clear, batch_size=args.batch_size)
        logger.info("=== Indexing Process Completed Successfully ===")
    except KeyboardInterrupt:
        logger.warning("Ingestion interrupted by user")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Ingestion failed: {str(e)}", exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
