"""Tests for the interactive chat loop and the ingestion job."""
import io
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from unittest.mock import Mock, patch
from chat_cli import run_chat
from ingest_documents import ingest, store_chunks
from models.chunk import Chunk
from services.errors import RetrievalError


def scripted_input(lines):
    lines = iter(lines)

    def read_line(prompt):
        try:
            return next(lines)
        except StopIteration:
            raise EOFError
    return read_line


class TestChatLoop:
    """Test suite for the interactive chat loop."""

    def test_answers_each_question_until_eof(self):
        orchestrator = Mock()
        orchestrator.answer.side_effect = ["Answer 1", "Answer 2"]
        out = io.StringIO()

        answered = run_chat(orchestrator, scripted_input(["Q1", "", "Q2"]), out)

        assert answered == 2
        assert "Answer 1" in out.getvalue()
        assert "Answer 2" in out.getvalue()
        assert orchestrator.answer.call_count == 2

    def test_failure_is_reported_and_loop_continues(self):
        orchestrator = Mock()
        orchestrator.answer.side_effect = [RetrievalError("index down"), "Answer 2"]
        out = io.StringIO()

        answered = run_chat(orchestrator, scripted_input(["Q1", "Q2"]), out)

        assert answered == 1
        assert "something went wrong (retrieval)" in out.getvalue()
        assert "Answer 2" in out.getvalue()

    def test_exit_command_stops_loop(self):
        orchestrator = Mock()
        answered = run_chat(orchestrator, scripted_input(["quit", "Q1"]), io.StringIO())

        assert answered == 0
        orchestrator.answer.assert_not_called()


class TestIngestion:
    """Test suite for the ingestion job."""

    def make_chunks(self, n):
        return [
            Chunk(chunk_id=f"doc_1_{i}", text=f"chunk {i}", document_name="doc.pdf", page_number=1)
            for i in range(n)
        ]

    def test_store_chunks_in_batches(self):
        vector_store = Mock()

        batches = store_chunks(vector_store, self.make_chunks(25), batch_size=10)

        assert batches == 3
        sizes = [len(call.args[0]) for call in vector_store.add_chunks.call_args_list]
        assert sizes == [10, 10, 5]

    def test_store_chunks_rejects_bad_batch_size(self):
        with pytest.raises(ValueError, match="batch_size"):
            store_chunks(Mock(), self.make_chunks(1), batch_size=0)

    @patch('ingest_documents.ChunkingEngine')
    @patch('ingest_documents.DocumentLoader')
    @patch('ingest_documents.VectorStore')
    @patch('ingest_documents.EmbeddingModel')
    def test_ingest_pipeline(self, mock_embedding_cls, mock_store_cls, mock_loader_cls, mock_chunker_cls):
        chunks = self.make_chunks(3)
        mock_chunker_cls.return_value.chunk_document.return_value = chunks
        vector_store = mock_store_cls.return_value
        vector_store.count.return_value = 7

        stored = ingest("pakistan.pdf", clear=True, batch_size=2)

        assert stored == 3
        mock_loader_cls.return_value.load.assert_called_once_with("pakistan.pdf")
        vector_store.clear.assert_called_once()
        assert vector_store.add_chunks.call_count == 2

    @patch('ingest_documents.ChunkingEngine')
    @patch('ingest_documents.DocumentLoader')
    @patch('ingest_documents.VectorStore')
    @patch('ingest_documents.EmbeddingModel')
    def test_ingest_nothing_extracted(self, mock_embedding_cls, mock_store_cls, mock_loader_cls, mock_chunker_cls):
        mock_chunker_cls.return_value.chunk_document.return_value = []

        assert ingest("empty.pdf") == 0
        mock_store_cls.return_value.add_chunks.assert_not_called()
        mock_store_cls.return_value.clear.assert_not_called()
