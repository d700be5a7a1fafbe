"""Response DTOs for chat completions."""

import time

from pydantic import BaseModel, Field

from .requests import ChatMessage


class ChatChoice(BaseModel):
    """One generated choice."""

    index: int = Field(..., description="Position of the choice", ge=0)
    message: ChatMessage = Field(..., description="The generated message")
    finish_reason: str = Field(..., description="Why generation stopped")


class ChatUsage(BaseModel):
    """Token accounting reported by the provider."""

    prompt_tokens: int = Field(..., ge=0)
    completion_tokens: int = Field(..., ge=0)
    total_tokens: int = Field(..., ge=0)


class ChatCompletionResponse(BaseModel):
    """Chat completion response."""

    id: str = Field(..., description="Completion identifier")
    object: str = Field("chat.completion", description="Object type")
    created: int = Field(..., description="Creation time (Unix timestamp, seconds)")
    model: str = Field(..., description="Model identifier")
    choices: list[ChatChoice] = Field(default_factory=list, description="Generated choices")
    usage: ChatUsage | None = Field(None, description="Token usage, absent for cached responses")

    model_config = {"extra": "allow"}

    @property
    def content(self) -> str | None:
        """Content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content

    @classmethod
    def from_cache(cls, model: str, content: str) -> "ChatCompletionResponse":
        """Build a response that replays cached content."""
        now = time.time()
        return cls(
            id=f"nano-cache-{int(now * 1000)}",
            object="chat.completion",
            created=int(now),
            model=model,
            choices=[
                ChatChoice(
                    index=0,
                    message=ChatMessage(role="assistant", content=content),
                    finish_reason="stop",
                )
            ],
        )
