"""Data models for the Pakistan History RAG Chatbot."""
from .document import Document, Page
from .chunk import Chunk, VectorMatch, RetrievedPassage
from .conversation import Role, Turn
from .api import AskRequest, AskResponse, ErrorResponse

__all__ = [
    "Document",
    "Page",
    "Chunk",
    "VectorMatch",
    "RetrievedPassage",
    "Role",
    "Turn",
    "AskRequest",
    "AskResponse",
    "ErrorResponse",
]
