"""Data Transfer Objects for the chat-completion wrapper.

These Pydantic models mirror a generic role/content chat-completion schema
(model, ordered messages, returned choices). They are pass-through shapes;
internal logic uses entities from the entities package.
"""

from .requests import ChatCompletionRequest, ChatMessage
from .responses import ChatChoice, ChatCompletionResponse, ChatUsage

__all__ = [
    "ChatMessage",
    "ChatCompletionRequest",
    "ChatChoice",
    "ChatUsage",
    "ChatCompletionResponse",
]
