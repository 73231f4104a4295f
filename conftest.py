"""Shared fixtures for git-commit-ai tests."""

import json
from unittest.mock import Mock

import pytest


@pytest.fixture
def make_response():
    """Build a fake streamed requests.Response."""

    def _make(status_code=200, chunks=(), error=None):
        response = Mock()
        response.status_code = status_code

        def iter_content(chunk_size=None):
            yield from chunks
            if error is not None:
                raise error

        response.iter_content.side_effect = iter_content
        return response

    return _make


@pytest.fixture
def completion_body():
    """Serialize a messages API reply whose first content block holds text."""

    def _body(text: str) -> bytes:
        return json.dumps(
            {
                "id": "msg_01",
                "type": "message",
                "role": "assistant",
                "model": "claude-3-7-sonnet-20250219",
                "content": [{"type": "text", "text": text}],
                "stop_reason": "end_turn",
                "usage": {"input_tokens": 10, "output_tokens": 20},
            }
        ).encode("utf-8")

    return _body
