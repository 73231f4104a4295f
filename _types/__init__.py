from .errors import (
    CommitAIError,
    ConfigError,
    InputError,
    AllocationError,
    TransportError,
    HttpStatusError,
    ParseError,
    OutputError,
)
from .model import Message, CompletionRequest, CompletionResult
