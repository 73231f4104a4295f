from pydantic import BaseModel, ConfigDict
from typing import List


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str
    content: str


class CompletionRequest(BaseModel):
    """Request body for the messages endpoint. Always carries one user message."""

    model_config = ConfigDict(frozen=True)

    model: str
    max_tokens: int
    temperature: float
    messages: List[Message]


class CompletionResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    description: str

    def to_markdown(self) -> str:
        """Render the result the way it is saved to an output file."""
        return f"# {self.title}\n\n{self.description}"
