"""Query transformer: rewrites follow-up questions into standalone questions."""
import logging

from models.conversation import Turn
from services.conversation_history import ConversationHistory
from services.errors import QueryTransformationError
from services.llm_client import LLMClient

logger = logging.getLogger(__name__)

REWRITE_INSTRUCTION = (
    "You are a query rewriting expert. Based on the provided chat history, rephrase "
    'the "Follow Up user Question" into a complete, standalone question that can be '
    "understood without the chat history.\n"
    "Only output the rewritten question and nothing else."
)


class QueryTransformer:
    """Use prior turns to make the latest question self-contained."""

    def __init__(self, llm_client: LLMClient, instruction: str = REWRITE_INSTRUCTION):
        self.llm_client = llm_client
        self.instruction = instruction

    def transform(self, question: str, history: ConversationHistory) -> str:
        """
        Rewrite ``question`` into a standalone question.

        The question is appended to ``history`` only for the duration of the
        generation call, so history length is the same before and after,
        whether the call succeeds or fails.

        Args:
            question: Raw user question, possibly referring to earlier turns
            history: Conversation the question belongs to

        Returns:
            Standalone question text

        Raises:
            QueryTransformationError: If the generation call fails
        """
        logger.info(f"Starting query transformation for question: {question[:100]!r}")

        try:
            with history.transient_turn(Turn.user(question)) as turns:
                standalone = self.llm_client.generate(turns, self.instruction)
        except Exception as e:
            logger.error(f"Query transformation failed: {e}")
            raise QueryTransformationError(
                f"Query transformation failed: {e}", cause=e
            ) from e

        logger.info(f"Query transformation successful. Rewritten query: {standalone[:100]!r}")
        return standalone
