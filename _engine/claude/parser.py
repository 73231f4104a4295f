import json
from typing import Tuple

from _engine.debug import DISABLED, DebugPrinter
from _types.errors import ParseError
from _types.model import CompletionResult


def extract_completion_text(body: str) -> str:
    """
    Pull content[0].text out of a messages response body.

    Every other field of the response is ignored.

    Raises:
        ParseError: If the body is not JSON or lacks the expected fields.
    """
    try:
        data = json.loads(body)
    except json.JSONDecodeError as e:
        raise ParseError("JSON parsing failed", f"{e.msg} at position {e.pos}") from e
    except RecursionError as e:
        raise ParseError("JSON parsing failed", "document nested too deeply") from e

    content = data.get("content") if isinstance(data, dict) else None
    if not isinstance(content, list):
        raise ParseError("content field not found or not an array")
    if not content:
        raise ParseError("content array is empty")

    first = content[0]
    text = first.get("text") if isinstance(first, dict) else None
    if not isinstance(text, str):
        raise ParseError("text field not found or not a string")
    return text


def split_title_description(text: str) -> Tuple[str, str]:
    """
    Split completion text into (title, description).

    Leading blank lines are skipped. The first remaining line is the title;
    everything after its newline is the description, kept byte for byte.
    Text without a newline is all title.

    Raises:
        ParseError: If nothing is left once blank lines are skipped.
    """
    rest = text.lstrip("\r\n")
    if not rest:
        raise ParseError("completion text is empty")

    title, newline, description = rest.partition("\n")
    if not newline:
        return rest, ""
    return title, description


def parse_response(body: str, debug: DebugPrinter = DISABLED) -> CompletionResult:
    """Turn a raw 2xx response body into a CompletionResult."""
    debug("Parsing API response")
    text = extract_completion_text(body)
    debug(f"Response text length: {len(text)} characters")

    title, description = split_title_description(text)
    if "\n" not in text.lstrip("\r\n"):
        debug("No newline found, using entire response as title")
    else:
        debug(f'Title extracted: "{title}"')
        debug(f"Description extracted (length: {len(description)})")
    return CompletionResult(title=title, description=description)
