from typing import Optional


class CommitAIError(Exception):
    """
    Base error for every failure the pipeline or its collaborators report.

    Attributes:
        step (str): Name of the step that failed, shown to the user.
    """

    step: str = "unknown"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigError(CommitAIError):
    """Missing key/profile file or an unresolvable home directory."""

    step = "config"


class InputError(CommitAIError):
    """No diff was supplied, or an input file could not be read."""

    step = "input"


class AllocationError(CommitAIError):
    """Out of memory while building the request or accumulating the body."""

    step = "request"


class TransportError(CommitAIError):
    """DNS, TLS, connection or timeout failure. Never carries a partial body."""

    step = "transport"

    def __init__(self, message: str, timed_out: bool = False):
        super().__init__(message)
        self.timed_out = timed_out


class HttpStatusError(CommitAIError):
    """The endpoint answered with a non-2xx status."""

    step = "transport"

    def __init__(self, status_code: int, body: str):
        super().__init__(f"API request failed with HTTP code {status_code}")
        self.status_code = status_code
        self.body = body


class ParseError(CommitAIError):
    """The response body could not be turned into a title and description."""

    step = "response"

    def __init__(self, reason: str, detail: Optional[str] = None):
        message = f"{reason}: {detail}" if detail else reason
        super().__init__(message)
        self.reason = reason


class OutputError(CommitAIError):
    """The result could not be written to the requested output file."""

    step = "output"
