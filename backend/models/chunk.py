"""Chunk and retrieval data models."""
from dataclasses import dataclass, field
from typing import Any, Dict

@dataclass
class Chunk:
    """Represents a document chunk for indexing."""
    chunk_id: str  # Format: "{filename}_{page}_{chunk_index}"
    text: str
    document_name: str
    page_number: int
    token_count: int = 0

@dataclass
class VectorMatch:
    """Raw match returned by the vector index, most similar first."""
    score: float
    metadata: Dict[str, Any] = field(default_factory=dict)

@dataclass
class RetrievedPassage:
    """Passage text with its similarity score, consumed once per question."""
    text: str
    score: float
