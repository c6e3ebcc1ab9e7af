"""Request and response models for the HTTP API."""
from typing import Any, Optional
from pydantic import BaseModel


class AskRequest(BaseModel):
    """Body of POST /api/ask. ``question`` is type-checked by the endpoint."""
    question: Any = None


class AskResponse(BaseModel):
    """Successful answer returned by POST /api/ask."""
    response: str


class ErrorResponse(BaseModel):
    """Error body returned by POST /api/ask."""
    error: str
    stage: Optional[str] = None
