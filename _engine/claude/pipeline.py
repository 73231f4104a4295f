from typing import Optional

from _engine.claude.parser import parse_response
from _engine.claude.request import build_request, serialize_request
from _engine.claude.transport import HttpTransport
from _engine.debug import DISABLED, DebugPrinter
from _types.model import CompletionResult


def generate_title_description(
    api_key: str,
    profile: str,
    diff: str,
    debug: DebugPrinter = DISABLED,
    transport: Optional[HttpTransport] = None,
) -> CompletionResult:
    """
    Build the request, send it and parse the reply, strictly in that order.

    Any failure propagates unchanged; a non-2xx body never reaches the parser.

    Args:
        api_key (str): Anthropic API key.
        profile (str): Contents of the profile file.
        diff (str): The git diff to describe.
        debug (DebugPrinter): Diagnostic output toggle.
        transport (HttpTransport, optional): Transport to use. A default one
            pointed at the messages endpoint is created when omitted.

    Returns:
        CompletionResult: The extracted title and description.
    """
    transport = transport or HttpTransport(debug=debug)

    request = build_request(profile, diff, debug=debug)
    body = serialize_request(request, debug=debug)
    response_text = transport.post(api_key, body)
    return parse_response(response_text, debug=debug)
