"""RAG orchestrator: the single entry point for answering a question."""
import logging
import time
from enum import Enum
from typing import Optional

from services.answer_generator import AnswerGenerator
from services.context_assembler import ContextAssembler
from services.conversation_history import ConversationHistory
from services.query_transformer import QueryTransformer

logger = logging.getLogger(__name__)


class PipelineStage(str, Enum):
    """Progress of the question currently (or most recently) handled."""
    RECEIVED = "received"
    TRANSFORMING = "transforming"
    RETRIEVING = "retrieving"
    GENERATING = "generating"
    COMMITTED = "committed"
    FAILED = "failed"


class RAGOrchestrator:
    """
    Sequence query transformation, context assembly and answer generation.

    One orchestrator owns one conversation history. Callers must not run
    ``answer`` concurrently on the same instance; independent conversations
    need independent orchestrators.
    """

    def __init__(
        self,
        query_transformer: QueryTransformer,
        context_assembler: ContextAssembler,
        answer_generator: AnswerGenerator,
        history: Optional[ConversationHistory] = None
    ):
        self.query_transformer = query_transformer
        self.context_assembler = context_assembler
        self.answer_generator = answer_generator
        self.history = history if history is not None else ConversationHistory()
        self.stage = PipelineStage.RECEIVED
        self.failed_stage: Optional[PipelineStage] = None

    def answer(self, question: str) -> str:
        """
        Answer one question, all or nothing.

        Args:
            question: Raw user question

        Returns:
            Grounded answer text

        Raises:
            RAGError: The first failure, tagged with its stage. Nothing is
                retried and no partial answer is returned.
        """
        start_time = time.time()
        self._enter(PipelineStage.RECEIVED)
        self.failed_stage = None
        logger.info(f"Starting chat processing for question: {question[:100]!r}")

        try:
            self._enter(PipelineStage.TRANSFORMING)
            standalone = self.query_transformer.transform(question, self.history)

            self._enter(PipelineStage.RETRIEVING)
            context = self.context_assembler.assemble(standalone)

            self._enter(PipelineStage.GENERATING)
            answer = self.answer_generator.generate(standalone, context, self.history)
        except Exception as e:
            self.failed_stage = self.stage
            self._enter(PipelineStage.FAILED)
            logger.error(
                f"Question failed during {self.failed_stage.value}: {e}",
                extra={"stage": getattr(e, "stage", "unknown")}
            )
            raise

        self._enter(PipelineStage.COMMITTED)
        latency_ms = int((time.time() - start_time) * 1000)
        logger.info(f"Question answered in {latency_ms}ms (history length {len(self.history)})")
        return answer

    def _enter(self, stage: PipelineStage) -> None:
        logger.debug(f"Pipeline stage: {self.stage.value} -> {stage.value}")
        self.stage = stage
