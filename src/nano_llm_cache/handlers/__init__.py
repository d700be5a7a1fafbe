"""Handler layer for chat-completion calls.

Handlers reshape chat requests into cache service calls and cached results
back into chat responses. They depend on services, not on repositories.

Architecture:
    Handler -> Service -> Repository
    (Chat)  -> (Business) -> (Data Access)
"""

from .chat_handler import ChatCompletionHandler, create_chat_wrapper

__all__ = [
    "ChatCompletionHandler",
    "create_chat_wrapper",
]
