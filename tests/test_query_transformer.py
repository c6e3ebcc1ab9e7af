"""Unit tests for QueryTransformer."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from unittest.mock import Mock
from models.conversation import Turn
from services.conversation_history import ConversationHistory
from services.errors import QueryTransformationError
from services.llm_client import GenerationError, LLMError
from services.query_transformer import QueryTransformer, REWRITE_INSTRUCTION


class TestQueryTransformer:
    """Test suite for QueryTransformer."""

    @pytest.fixture
    def mock_llm_client(self):
        return Mock()

    @pytest.fixture
    def history(self):
        history = ConversationHistory()
        history.append(Turn.user("When was Pakistan founded?"))
        history.append(Turn.model("Pakistan was founded in 1947."))
        return history

    def test_returns_rewritten_question(self, mock_llm_client, history):
        mock_llm_client.generate.return_value = "Who was the first leader of Pakistan?"
        transformer = QueryTransformer(mock_llm_client)

        result = transformer.transform("Who was its first leader?", history)

        assert result == "Who was the first leader of Pakistan?"

    def test_generation_sees_transient_question(self, mock_llm_client, history):
        seen = {}

        def fake_generate(turns, instruction):
            seen["turns"] = turns
            seen["instruction"] = instruction
            return "rewritten"

        mock_llm_client.generate.side_effect = fake_generate
        transformer = QueryTransformer(mock_llm_client)

        transformer.transform("Who was its first leader?", history)

        assert len(seen["turns"]) == 3
        assert seen["turns"][-1] == Turn.user("Who was its first leader?")
        assert seen["instruction"] == REWRITE_INSTRUCTION

    def test_history_unchanged_after_success(self, mock_llm_client, history):
        before = history.snapshot()
        mock_llm_client.generate.return_value = "rewritten"

        QueryTransformer(mock_llm_client).transform("follow up", history)

        assert history.snapshot() == before

    def test_history_unchanged_after_failure(self, mock_llm_client, history):
        before = history.snapshot()
        cause = GenerationError(LLMError(code="API_ERROR", message="Groq API error: down"))
        mock_llm_client.generate.side_effect = cause

        with pytest.raises(QueryTransformationError) as exc_info:
            QueryTransformer(mock_llm_client).transform("follow up", history)

        assert history.snapshot() == before
        assert exc_info.value.cause is cause
        assert exc_info.value.__cause__ is cause
        assert exc_info.value.stage == "query_transformation"

    def test_identity_rewrite_with_empty_history(self, mock_llm_client):
        """A self-contained question passes through unharmed."""
        mock_llm_client.generate.side_effect = lambda turns, instruction: turns[-1].text
        history = ConversationHistory()

        result = QueryTransformer(mock_llm_client).transform("When was Pakistan founded?", history)

        assert result == "When was Pakistan founded?"
        assert len(history) == 0
