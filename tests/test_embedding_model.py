"""Unit tests for EmbeddingModel class."""
import sys
from pathlib import Path

# Add backend to path
sys.path.insert(0, str(Path(__file__).parent.parent / "backend"))

import pytest
from unittest.mock import Mock, patch, MagicMock
import httpx
from services.embedding_model import EmbeddingModel
from services.errors import EmbeddingError


def mock_http_client(mock_client_class, response=None, side_effect=None):
    mock_client = MagicMock()
    post = mock_client.__enter__.return_value.post
    if side_effect is not None:
        post.side_effect = side_effect
    else:
        post.return_value = response
    mock_client_class.return_value = mock_client
    return post


def make_response(status_code, payload=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.json.return_value = payload
    response.text = text
    return response


class TestEmbeddingModel:
    """Test suite for EmbeddingModel."""

    def test_initialization_success(self):
        model = EmbeddingModel(api_key="test_key")
        assert model.api_key == "test_key"
        assert model.model_name == "sentence-transformers/all-mpnet-base-v2"
        assert model.api_url.endswith("/models/sentence-transformers/all-mpnet-base-v2")

    def test_initialization_without_api_key(self):
        with pytest.raises(ValueError, match="HUGGINGFACE_API_KEY"):
            EmbeddingModel(api_key=None)

    def test_embed_text_empty_string(self):
        model = EmbeddingModel(api_key="test_key")

        with pytest.raises(ValueError, match="Text cannot be empty"):
            model.embed_text("")

        with pytest.raises(ValueError, match="Text cannot be empty"):
            model.embed_text("   ")

    def test_embed_batch_rejects_empty_input(self):
        model = EmbeddingModel(api_key="test_key")

        with pytest.raises(ValueError, match="Texts list cannot be empty"):
            model.embed_batch([])

        with pytest.raises(ValueError, match="cannot be empty"):
            model.embed_batch(["ok", "   "])

    @patch('httpx.Client')
    def test_embed_text_success(self, mock_client_class):
        post = mock_http_client(mock_client_class, make_response(200, [[0.1, 0.2, 0.3]]))

        model = EmbeddingModel(api_key="test_key")
        result = model.embed_text("test text")

        assert result == [0.1, 0.2, 0.3]
        payload = post.call_args.kwargs["json"]
        assert payload["inputs"] == ["test text"]
        assert payload["options"]["wait_for_model"] is True

    @patch('httpx.Client')
    def test_embed_batch_success(self, mock_client_class):
        mock_http_client(mock_client_class, make_response(200, [[0.1, 0.2], [0.3, 0.4]]))

        model = EmbeddingModel(api_key="test_key")

        assert model.embed_batch(["text1", "text2"]) == [[0.1, 0.2], [0.3, 0.4]]

    @patch('httpx.Client')
    def test_single_attempt_on_server_error(self, mock_client_class):
        """A failed round trip is terminal; there is no retry."""
        post = mock_http_client(mock_client_class, make_response(503, {}, "loading"))

        model = EmbeddingModel(api_key="test_key")

        with pytest.raises(EmbeddingError, match="status 503"):
            model.embed_text("test text")
        assert post.call_count == 1

    @patch('httpx.Client')
    def test_authentication_error(self, mock_client_class):
        mock_http_client(mock_client_class, make_response(401))

        model = EmbeddingModel(api_key="bad_key")

        with pytest.raises(EmbeddingError, match="Invalid API key"):
            model.embed_text("test text")

    @patch('httpx.Client')
    def test_rate_limit_error(self, mock_client_class):
        mock_http_client(mock_client_class, make_response(429))

        model = EmbeddingModel(api_key="test_key")

        with pytest.raises(EmbeddingError, match="Rate limit"):
            model.embed_text("test text")

    @patch('httpx.Client')
    def test_timeout_is_wrapped(self, mock_client_class):
        timeout = httpx.TimeoutException("timed out")
        mock_http_client(mock_client_class, side_effect=timeout)

        model = EmbeddingModel(api_key="test_key", timeout=5.0)

        with pytest.raises(EmbeddingError, match="timeout after 5.0s") as exc_info:
            model.embed_text("test text")
        assert exc_info.value.cause is timeout

    @patch('httpx.Client')
    def test_network_error_is_wrapped(self, mock_client_class):
        mock_http_client(mock_client_class, side_effect=httpx.ConnectError("refused"))

        model = EmbeddingModel(api_key="test_key")

        with pytest.raises(EmbeddingError, match="Network error"):
            model.embed_text("test text")

    @patch('httpx.Client')
    def test_mismatched_embedding_count(self, mock_client_class):
        mock_http_client(mock_client_class, make_response(200, [[0.1]]))

        model = EmbeddingModel(api_key="test_key")

        with pytest.raises(EmbeddingError, match="Expected 2 embeddings"):
            model.embed_batch(["a", "b"])

    @patch('httpx.Client')
    def test_invalid_json_body_is_wrapped(self, mock_client_class):
        response = make_response(200, text="<html>Service Unavailable</html>")
        response.json.side_effect = ValueError("Expecting value: line 1 column 1 (char 0)")
        mock_http_client(mock_client_class, response)

        model = EmbeddingModel(api_key="test_key")

        with pytest.raises(EmbeddingError, match="Invalid JSON") as exc_info:
            model.embed_text("test text")
        assert exc_info.value.stage == "embedding"
        assert isinstance(exc_info.value.cause, ValueError)
