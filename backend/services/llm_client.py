"""LLM Client for Groq API integration."""
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence
from groq import Groq
from groq import RateLimitError, AuthenticationError, APIError, APITimeoutError
import logging

from config import GROQ_API_KEY, GENERATION_MODEL, GENERATION_TEMPERATURE, MAX_OUTPUT_TOKENS
from models.conversation import Role, Turn
from services.errors import RAGError

logger = logging.getLogger(__name__)

# Groq speaks the OpenAI chat roles; the conversation log says "model".
_GROQ_ROLES = {Role.USER: "user", Role.MODEL: "assistant"}


@dataclass
class LLMError:
    """Structured error details from LLM operations."""
    code: str
    message: str
    details: Dict[str, Any] = field(default_factory=dict)


class GenerationError(RAGError):
    """Generation client failure with structured error information."""

    stage = "generation"

    def __init__(self, error: LLMError, cause: Optional[BaseException] = None):
        super().__init__(error.message, cause=cause)
        self.error = error


class LLMClient:
    """Client for interfacing with Groq API for chat generation."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = GENERATION_MODEL,
        temperature: float = GENERATION_TEMPERATURE,
        max_tokens: int = MAX_OUTPUT_TOKENS
    ):
        """
        Initialize LLM client with Groq API key.

        Args:
            api_key: Groq API key (defaults to GROQ_API_KEY from environment)
            model: Groq model name used for every call
            temperature: Sampling temperature
            max_tokens: Maximum tokens to generate per call
        """
        self.api_key = api_key or GROQ_API_KEY
        if not self.api_key:
            raise ValueError("GROQ_API_KEY must be provided or set in environment")

        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = Groq(api_key=self.api_key)
        logger.info(f"LLMClient initialized with model: {model}")

    @staticmethod
    def build_messages(turns: Sequence[Turn], system_instruction: str) -> List[Dict[str, str]]:
        """Convert ordered turns plus a system instruction into Groq chat messages."""
        messages = [{"role": "system", "content": system_instruction}]
        messages.extend(
            {"role": _GROQ_ROLES[turn.role], "content": turn.text}
            for turn in turns
        )
        return messages

    def generate(self, turns: Sequence[Turn], system_instruction: str) -> str:
        """
        Generate the next model turn for a conversation.

        Args:
            turns: Ordered, role-tagged conversation
            system_instruction: Constraint placed ahead of the conversation

        Returns:
            Generated text

        Raises:
            GenerationError: Structured error with code, message, and details
        """
        start_time = time.time()

        try:
            logger.debug(f"Generating response with model={self.model}, turns={len(turns)}")

            response = self.client.chat.completions.create(
                model=self.model,
                messages=self.build_messages(turns, system_instruction),
                max_tokens=self.max_tokens,
                temperature=self.temperature
            )

            latency_ms = int((time.time() - start_time) * 1000)
            text = response.choices[0].message.content or ""

            logger.info(
                f"Generated response: model={self.model}, "
                f"input_tokens={response.usage.prompt_tokens}, "
                f"output_tokens={response.usage.completion_tokens}, "
                f"latency={latency_ms}ms"
            )

            return text.strip()

        except RateLimitError as e:
            raise self._failure(
                e, start_time, "RATE_LIMIT_ERROR",
                "Rate limit exceeded. Please try again in a few moments.",
                retry_after=60
            )

        except AuthenticationError as e:
            raise self._failure(
                e, start_time, "AUTHENTICATION_ERROR",
                "Authentication failed. Please check your API key."
            )

        except APITimeoutError as e:
            raise self._failure(
                e, start_time, "TIMEOUT_ERROR",
                "Request timed out. Please try again."
            )

        except APIError as e:
            raise self._failure(
                e, start_time, "API_ERROR",
                f"Groq API error: {str(e)}"
            )

        except Exception as e:
            raise self._failure(
                e, start_time, "UNKNOWN_ERROR",
                f"Unexpected error during generation: {str(e)}",
                error_type=type(e).__name__
            )

    def _failure(
        self,
        exc: Exception,
        start_time: float,
        code: str,
        message: str,
        **extra: Any
    ) -> GenerationError:
        """Log a failed call and build the GenerationError to raise."""
        latency_ms = int((time.time() - start_time) * 1000)
        error = LLMError(
            code=code,
            message=message,
            details={
                **extra,
                "model": self.model,
                "latency_ms": latency_ms,
                "original_error": str(exc)
            }
        )
        logger.error(
            f"{code}: model={self.model}, latency={latency_ms}ms, error={exc}",
            exc_info=True,
            extra={"error_code": error.code, "error_details": error.details}
        )
        generation_error = GenerationError(error, cause=exc)
        generation_error.__cause__ = exc
        return generation_error
