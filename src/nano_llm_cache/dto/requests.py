"""Request DTOs for chat completions."""

from typing import Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single role/content chat message."""

    role: Literal["system", "user", "assistant"] = Field(..., description="Author of the message")
    content: str = Field(..., description="Message text")


class ChatCompletionRequest(BaseModel):
    """Chat completion request.

    Extra fields (tools, stop sequences, ...) are kept and passed through
    to the wrapped generation function.
    """

    model: str = Field(..., description="Model identifier")
    messages: list[ChatMessage] = Field(..., description="Ordered conversation messages")
    temperature: float | None = Field(None, description="Sampling temperature")
    max_tokens: int | None = Field(None, description="Maximum tokens to generate", ge=1)

    model_config = {"extra": "allow"}

    @property
    def user_prompt(self) -> str:
        """Content of all user messages, joined by newlines."""
        return "\n".join(m.content for m in self.messages if m.role == "user")
