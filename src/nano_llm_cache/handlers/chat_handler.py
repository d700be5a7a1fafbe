"""Chat-completion wrapper around the cache service.

Wraps any async ``request -> response`` chat-completion function so that
semantically repeated user prompts are answered from the cache.
"""

import logging
from collections.abc import Awaitable, Callable

from nano_llm_cache.dto import ChatCompletionRequest, ChatCompletionResponse
from nano_llm_cache.services import CacheService

logger = logging.getLogger(__name__)

ChatCompletionFn = Callable[[ChatCompletionRequest], Awaitable[ChatCompletionResponse]]


class ChatCompletionHandler:
    """Cache-aware drop-in for a chat-completion function.

    - Requests without user content go straight to the wrapped function.
    - On a hit, a synthetic completion carrying the cached text is returned.
    - On a miss, the wrapped function is called and its first choice is saved
      with ``{"model", "timestamp"}`` metadata before the live response is
      returned. A failed save is logged; the caller still gets the response.

    Example:
        ```python
        cache = CacheService.create()
        create = ChatCompletionHandler(cache, client_create)
        response = await create(ChatCompletionRequest(model="gpt-4o", messages=[...]))
        ```
    """

    def __init__(self, cache_service: CacheService, original_fn: ChatCompletionFn) -> None:
        """Initialize the handler.

        Args:
            cache_service: The cache service for lookups and saves (required).
            original_fn: The generation function to call on a miss (required).
        """
        self._cache = cache_service
        self._original_fn = original_fn

    async def __call__(self, request: ChatCompletionRequest) -> ChatCompletionResponse:
        prompt = request.user_prompt
        if not prompt:
            return await self._original_fn(request)

        result = await self._cache.query(prompt)
        if result.hit and result.response:
            return ChatCompletionResponse.from_cache(model=request.model, content=result.response)

        response = await self._original_fn(request)

        content = response.content
        if content:
            try:
                await self._cache.save(
                    prompt,
                    content,
                    {"model": request.model, "timestamp": response.created},
                )
            except Exception:
                logger.warning("Failed to cache chat completion", exc_info=True)

        return response


def create_chat_wrapper(cache_service: CacheService, original_fn: ChatCompletionFn) -> ChatCompletionFn:
    """Wrap ``original_fn`` with the semantic cache.

    Args:
        cache_service: The cache service to consult
        original_fn: The async chat-completion function to wrap

    Returns:
        An async function with the same signature as ``original_fn``
    """
    return ChatCompletionHandler(cache_service, original_fn)
