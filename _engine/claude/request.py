import json

from _data.claude import MAX_TOKENS, MODEL, TEMPERATURE, USER_PROMPT_TEMPLATE
from _engine.debug import DISABLED, DebugPrinter
from _types.errors import AllocationError
from _types.model import CompletionRequest, Message


def render_prompt(profile: str, diff: str) -> str:
    """
    Fill the user prompt template with the profile and diff.

    Both values are substituted verbatim; either may be empty.
    """
    return USER_PROMPT_TEMPLATE.format(profile=profile, diff=diff)


def build_request(
    profile: str, diff: str, debug: DebugPrinter = DISABLED
) -> CompletionRequest:
    """
    Compose the completion request for a profile and a diff.

    Args:
        profile (str): Contents of the user's profile file.
        diff (str): The git diff to describe.
        debug (DebugPrinter): Diagnostic output toggle.

    Returns:
        CompletionRequest: A single-user-message request.

    Raises:
        AllocationError: If the prompt could not be built.
    """
    debug("Preparing API request")
    try:
        content = render_prompt(profile, diff)
    except MemoryError as e:
        raise AllocationError("Memory allocation failed for content string") from e
    debug(f"Content length: {len(content)} characters")

    return CompletionRequest(
        model=MODEL,
        max_tokens=MAX_TOKENS,
        temperature=TEMPERATURE,
        messages=[Message(role="user", content=content)],
    )


def serialize_request(
    request: CompletionRequest, debug: DebugPrinter = DISABLED
) -> bytes:
    """Serialize a request to the UTF-8 JSON body sent over the wire."""
    try:
        payload = json.dumps(request.model_dump(), indent=2, ensure_ascii=False)
        # Lone surrogates cannot be encoded; they are sent as "?"
        body = payload.encode("utf-8", errors="replace")
    except MemoryError as e:
        raise AllocationError("Failed to convert JSON to string") from e
    debug(f"JSON request payload created (length: {len(body)})")
    return body
