"""Configuration management for the Pakistan History RAG Chatbot."""
import os
import logging
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# API Keys
GROQ_API_KEY = os.getenv("GROQ_API_KEY")
HUGGINGFACE_API_KEY = os.getenv("HUGGINGFACE_API_KEY")
SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# Server Configuration
PORT = int(os.getenv("PORT", "3000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_FORMAT = os.getenv("LOG_FORMAT", "text")  # "text" or "json"

# CORS Configuration
CORS_ORIGINS = os.getenv(
    "CORS_ORIGINS",
    "http://localhost:3000,http://localhost:3001"
).split(",")

# Model Configuration
EMBEDDING_MODEL = os.getenv("EMBEDDING_MODEL", "sentence-transformers/all-mpnet-base-v2")
EMBEDDING_DIMENSION = 768  # Fixed by the embedding model and the pgvector column
GENERATION_MODEL = os.getenv("GENERATION_MODEL", "llama-3.3-70b-versatile")
GENERATION_TEMPERATURE = float(os.getenv("GENERATION_TEMPERATURE", "0.7"))
MAX_OUTPUT_TOKENS = int(os.getenv("MAX_OUTPUT_TOKENS", "500"))

# Retrieval Configuration
TOP_K = 10
CONTEXT_SEPARATOR = "\n\n---\n\n"
VECTOR_TABLE = os.getenv("VECTOR_TABLE", "document_chunks")
MATCH_FUNCTION = os.getenv("MATCH_FUNCTION", "match_chunks")

# Ingestion Configuration
DOCUMENT_PATH = os.getenv("DOCUMENT_PATH", "pakistan.pdf")
CHUNK_SIZE = 1000  # characters
CHUNK_OVERLAP = 200  # characters

# Answer Configuration
ASSISTANT_PERSONA = os.getenv("ASSISTANT_PERSONA", "Pakistan History Expert")
ANSWER_LANGUAGE = os.getenv("ANSWER_LANGUAGE", "proper Roman Urdu")
FALLBACK_ANSWER = "I could not find the answer in the provided document."

# When true, a failed final generation also removes the standalone question
# it appended, so history keeps strict user/model alternation on failure.
ANSWER_ROLLBACK_ON_FAILURE = os.getenv("ANSWER_ROLLBACK_ON_FAILURE", "false").lower() == "true"

# Logging Configuration
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
