"""Tests for the build -> send -> parse pipeline."""

import json
from unittest.mock import patch

import pytest
import requests

from _engine.claude.pipeline import generate_title_description
from _engine.claude.request import render_prompt
from _types.errors import HttpStatusError, ParseError, TransportError
from _types.model import CompletionResult


@patch("_engine.claude.transport.requests.post")
def test_end_to_end(mock_post, make_response, completion_body):
    body = completion_body("\n\nFix bug\nThis patch fixes X")
    mock_post.return_value = make_response(200, [body[:7], body[7:20], body[20:]])

    result = generate_title_description("sk-test", "my profile", "+fix")

    assert result == CompletionResult(title="Fix bug", description="This patch fixes X")
    sent = json.loads(mock_post.call_args[1]["data"])
    assert sent["messages"] == [
        {"role": "user", "content": render_prompt("my profile", "+fix")}
    ]
    assert mock_post.call_args[1]["headers"]["x-api-key"] == "sk-test"


@patch("_engine.claude.pipeline.parse_response")
@patch("_engine.claude.transport.requests.post")
def test_http_404_never_reaches_parser(mock_post, mock_parse, make_response):
    mock_post.return_value = make_response(404, [b'{"content": [{"text": "T\\nD"}]}'])

    with pytest.raises(HttpStatusError) as excinfo:
        generate_title_description("sk-test", "profile", "diff")

    assert excinfo.value.status_code == 404
    assert excinfo.value.body == '{"content": [{"text": "T\\nD"}]}'
    mock_parse.assert_not_called()


@patch("_engine.claude.transport.requests.post")
def test_transport_failure_propagates(mock_post):
    mock_post.side_effect = requests.ConnectionError("reset by peer")

    with pytest.raises(TransportError):
        generate_title_description("sk-test", "profile", "diff")

    assert mock_post.call_count == 1


@patch("_engine.claude.transport.requests.post")
def test_empty_content_array_is_parse_error(mock_post, make_response):
    mock_post.return_value = make_response(200, [b'{"content": []}'])

    with pytest.raises(ParseError, match="content array is empty"):
        generate_title_description("sk-test", "profile", "diff")


@patch("_engine.claude.transport.requests.post")
def test_invalid_json_is_parse_error(mock_post, make_response):
    mock_post.return_value = make_response(200, [b"<html>Bad gateway</html>"])

    with pytest.raises(ParseError, match="JSON parsing failed"):
        generate_title_description("sk-test", "profile", "diff")
