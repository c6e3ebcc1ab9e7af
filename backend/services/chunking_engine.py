"""Chunking engine: recursive character splitting with overlap."""
import logging
from typing import List

import tiktoken
from langchain_text_splitters import RecursiveCharacterTextSplitter

from models.document import Document
from models.chunk import Chunk
from config import CHUNK_SIZE, CHUNK_OVERLAP

logger = logging.getLogger(__name__)

class ChunkingEngine:
    """Segments documents into fixed-size, overlapping chunks."""

    def __init__(
        self,
        chunk_size: int = CHUNK_SIZE,
        chunk_overlap: int = CHUNK_OVERLAP,
        encoding_name: str = "o200k_base"
    ):
        """
        Initialize ChunkingEngine.

        Args:
            chunk_size: Maximum chunk length in characters
            chunk_overlap: Characters shared between consecutive chunks
            encoding_name: tiktoken encoding used to report chunk token counts
        """
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")

        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        self.encoder = tiktoken.get_encoding(encoding_name)
        self._splitter = RecursiveCharacterTextSplitter(
            chunk_size=chunk_size,
            chunk_overlap=chunk_overlap,
        )

    def chunk_document(self, document: Document) -> List[Chunk]:
        """
        Split every page of ``document`` into chunks.

        Returns:
            Chunks in page order with ids "{filename}_{page}_{index}"
        """
        chunks = []
        for page in document.pages:
            for index, text in enumerate(self.split_text(page.text)):
                chunks.append(Chunk(
                    chunk_id=f"{document.filename}_{page.page_number}_{index}",
                    text=text,
                    document_name=document.filename,
                    page_number=page.page_number,
                    token_count=len(self.encoder.encode(text))
                ))

        logger.info(f"Chunking completed. Total chunks created: {len(chunks)}")
        return chunks

    def split_text(self, text: str) -> List[str]:
        """Split ``text`` into chunks of at most ``chunk_size`` characters."""
        if not text.strip():
            return []
        return self._splitter.split_text(text)
