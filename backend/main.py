"""Main entry point for the Pakistan History RAG Chatbot API."""
import logging
from typing import Optional
from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import PORT, CORS_ORIGINS, LOG_FORMAT, LOG_LEVEL
from logger import setup_logging
from models.api import AskRequest, AskResponse, ErrorResponse
from services.answer_generator import AnswerGenerator
from services.context_assembler import ContextAssembler
from services.embedding_model import EmbeddingModel
from services.llm_client import LLMClient
from services.query_transformer import QueryTransformer
from services.rag_orchestrator import RAGOrchestrator
from services.vector_store import VectorStore

if LOG_FORMAT == "json":
    setup_logging(LOG_LEVEL)

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Pakistan History RAG Chatbot",
    description="Conversational question answering over an indexed Pakistan history document",
    version="1.0.0"
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

ASK_PATH = "/api/ask"
INVALID_QUESTION = "Invalid or missing question in request body"

# Single conversation for the process lifetime (set on startup)
orchestrator: Optional[RAGOrchestrator] = None


def create_orchestrator() -> RAGOrchestrator:
    """Wire the remote collaborators and pipeline stages around a fresh history."""
    embedding_model = EmbeddingModel()
    vector_store = VectorStore()
    llm_client = LLMClient()

    return RAGOrchestrator(
        query_transformer=QueryTransformer(llm_client),
        context_assembler=ContextAssembler(vector_store, embedding_model),
        answer_generator=AnswerGenerator(llm_client),
    )


@app.on_event("startup")
async def startup_event():
    """Initialize services on startup."""
    global orchestrator

    logger.info("Initializing Pakistan History RAG Chatbot services...")
    try:
        orchestrator = create_orchestrator()
        logger.info("All services initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize services: {e}", exc_info=True)
        raise


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer malformed /api/ask bodies with the same 400 as a missing question."""
    if request.url.path == ASK_PATH:
        logger.warning(f"Rejected malformed request body: {exc.errors()}")
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=INVALID_QUESTION).model_dump(exclude_none=True)
        )
    return await request_validation_exception_handler(request, exc)


@app.get("/")
async def root():
    """Health check endpoint."""
    return {"status": "ok", "message": "Pakistan History RAG Chatbot API"}


@app.get("/health")
async def health():
    """Detailed health check."""
    return {
        "status": "healthy",
        "service": "pakistan-history-rag",
        "version": "1.0.0",
        "history_length": len(orchestrator.history) if orchestrator else 0
    }


@app.post(
    ASK_PATH,
    response_model=AskResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}}
)
async def ask_endpoint(request: AskRequest):
    """
    Answer a question in the ongoing conversation.

    The pipeline calls block, so the event loop handles one question at a
    time and the shared history never sees interleaved appends.
    """
    question = request.question
    if not isinstance(question, str) or not question.strip():
        return JSONResponse(
            status_code=400,
            content=ErrorResponse(error=INVALID_QUESTION).model_dump(exclude_none=True)
        )

    logger.info(f"Received API request with question: {question[:100]!r}")

    try:
        answer = orchestrator.answer(question)
    except Exception as e:
        logger.error(f"Error processing API request: {e}", exc_info=True)
        return JSONResponse(
            status_code=500,
            content=ErrorResponse(
                error=f"Internal server error: {str(e)}",
                stage=getattr(e, "stage", None)
            ).model_dump(exclude_none=True)
        )

    return AskResponse(response=answer)


if __name__ == "__main__":
    import uvicorn
    logger.info(f"Starting Pakistan History RAG Chatbot API on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)
