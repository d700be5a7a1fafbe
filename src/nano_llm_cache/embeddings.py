import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from nano_llm_cache.errors import EmbeddingError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT")


class LazyModel(Generic[ModelT]):
    """Lazily initialized model handle owned by one embedding provider.

    The first ``get()`` starts the loader; callers arriving while it runs
    await the same in-flight future instead of starting a second load. A
    failed load is forgotten so the next call retries. ``unload()`` drops the
    model, and a load still in flight at that moment is not kept.
    """

    def __init__(
        self,
        name: str,
        loader: Callable[[], Awaitable[ModelT]],
        debug: bool = False,
    ) -> None:
        """
        Initialize the handle.

        Args:
            name: Model identifier, used in log and error messages.
            loader: Coroutine function producing the loaded model.
            debug: Log load/unload timings.
        """
        self._name = name
        self._loader = loader
        self._debug = debug
        self._model: ModelT | None = None
        self._loading: asyncio.Future[ModelT] | None = None

    def is_loaded(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> ModelT | None:
        """The loaded model, or None when not initialized."""
        return self._model

    async def _load(self) -> ModelT:
        if self._debug:
            logger.info("Loading embedding model: %s", self._name)
        start_time = time.time()
        model = await self._loader()
        if self._debug:
            logger.info("Model %s loaded in %.2fs", self._name, time.time() - start_time)
        return model

    async def get(self) -> ModelT:
        """Return the model, loading it on first use.

        Raises:
            EmbeddingError: If the loader fails
        """
        if self._model is not None:
            return self._model

        if self._loading is None:
            self._loading = asyncio.ensure_future(self._load())
        loading = self._loading

        try:
            # Shield so one cancelled waiter does not cancel the shared load
            model = await asyncio.shield(loading)
        except EmbeddingError:
            self._forget(loading)
            raise
        except Exception as e:
            self._forget(loading)
            raise EmbeddingError(f"Failed to load embedding model {self._name}: {e}") from e

        if self._loading is loading:
            self._model = model
        return model

    def _forget(self, loading: "asyncio.Future[ModelT]") -> None:
        if self._loading is loading:
            self._loading = None

    def unload(self) -> ModelT | None:
        """Drop the model and return it so the owner can release resources."""
        model = self._model
        self._model = None
        self._loading = None
        if self._debug:
            logger.info("Embedding model unloaded: %s", self._name)
        return model
