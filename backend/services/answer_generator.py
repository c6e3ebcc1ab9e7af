"""Answer generator: produces the grounded answer and commits the exchange."""
import logging

from config import (
    ASSISTANT_PERSONA,
    ANSWER_LANGUAGE,
    FALLBACK_ANSWER,
    ANSWER_ROLLBACK_ON_FAILURE,
)
from models.conversation import Turn
from services.conversation_history import ConversationHistory
from services.errors import AnswerGenerationError
from services.llm_client import LLMClient

logger = logging.getLogger(__name__)


class AnswerGenerator:
    """Answer a standalone question using only the retrieved evidence."""

    def __init__(
        self,
        llm_client: LLMClient,
        persona: str = ASSISTANT_PERSONA,
        language: str = ANSWER_LANGUAGE,
        fallback_answer: str = FALLBACK_ANSWER,
        rollback_on_failure: bool = ANSWER_ROLLBACK_ON_FAILURE
    ):
        """
        Args:
            llm_client: Generation client
            persona: Assistant persona and domain
            language: Output-language constraint
            fallback_answer: Sentence the model must give when the context
                does not contain the answer
            rollback_on_failure: Remove the appended question if generation
                fails, instead of leaving a trailing user turn
        """
        self.llm_client = llm_client
        self.persona = persona
        self.language = language
        self.fallback_answer = fallback_answer
        self.rollback_on_failure = rollback_on_failure

    def build_system_instruction(self, context: str) -> str:
        """Build the grounding instruction with the evidence context embedded verbatim."""
        return (
            f"You are a {self.persona}. You only have to speak in {self.language}.\n"
            "You will be given a context of relevant information and a user question.\n"
            "Your task is to answer the user's question based ONLY on the provided context.\n"
            f'If the answer is not in the context, you must say "{self.fallback_answer}"\n'
            "Keep your answers clear, concise, and educational.\n"
            "\n"
            f"Context: {context}"
        )

    def generate(self, question: str, context: str, history: ConversationHistory) -> str:
        """
        Answer ``question`` from ``context`` and record the exchange in ``history``.

        The question is appended durably before the call and the answer after
        it. On failure the question stays in history unless
        ``rollback_on_failure`` is set.

        Raises:
            AnswerGenerationError: If the generation call fails
        """
        history.append(Turn.user(question))
        logger.info("Sending standalone question for final response...")

        try:
            answer = self.llm_client.generate(
                history.snapshot(),
                self.build_system_instruction(context)
            )
        except Exception as e:
            if self.rollback_on_failure:
                history.remove_last()
                logger.warning("Rolled back standalone question after failed generation")
            logger.error(f"Answer generation failed: {e}")
            raise AnswerGenerationError(f"Answer generation failed: {e}", cause=e) from e

        history.append(Turn.model(answer))
        logger.info(f"Answer committed to history (history length {len(history)})")
        return answer
