"""Ollama-based embedding provider.

Uses Ollama's local API to generate embeddings. Ollama serves models locally
without requiring models to be downloaded by this process.

Requirements:
    - Ollama installed: https://ollama.com
    - Model pulled: `ollama pull all-minilm`
    - Ollama running: `ollama serve` (usually runs automatically)

Models available:
- all-minilm (22M params, 384 dims)
- nomic-embed-text (137M params, 768 dims)
- mxbai-embed-large (335M params, 1024 dims)
- embeddinggemma (308M params, 768 dims)
"""

import logging

import httpx

from nano_llm_cache.config import settings
from nano_llm_cache.embeddings import LazyModel
from nano_llm_cache.errors import EmbeddingError

logger = logging.getLogger(__name__)


def _describe_http_error(error: httpx.HTTPError, model_name: str) -> str:
    message = f"Ollama API error: {error}"
    if "connection refused" in str(error).lower() or isinstance(error, httpx.ConnectError):
        message += "\n  → Is Ollama running? Try: ollama serve"
    elif isinstance(error, httpx.HTTPStatusError) and error.response.status_code == 404:
        message += f"\n  → Model not found. Try: ollama pull {model_name}"
    return message


class OllamaEmbeddingProvider:
    """Ollama-based implementation of EmbeddingProvider protocol.

    This class satisfies the EmbeddingProvider protocol through structural
    typing - no explicit inheritance needed.

    Initialization opens the HTTP client and checks that the model exists
    on the server (``/api/show``); embeddings come from ``/api/embed``.

    Example:
        ```python
        provider = OllamaEmbeddingProvider.create(model_name="all-minilm")
        embedding = await provider.generate("Hello, world!")
        print(len(embedding))  # 384
        ```
    """

    def __init__(
        self,
        model_name: str | None = None,
        base_url: str | None = None,
        timeout: float = 30.0,
        debug: bool = False,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the Ollama embedding provider.

        Args:
            model_name: Name of the Ollama model.
                       Defaults to settings.embedding_model.
            base_url: Ollama API base URL.
                     Defaults to settings.ollama_base_url.
            timeout: Request timeout in seconds.
            debug: Log model initialization.
            transport: Optional httpx transport (e.g. for testing).
        """
        self._model_name = model_name or settings.embedding_model
        self._base_url = (base_url or settings.ollama_base_url).rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client = LazyModel(self._model_name, self._connect, debug=debug)

    @classmethod
    def create(
        cls,
        model_name: str | None = None,
        base_url: str | None = None,
        debug: bool = False,
    ) -> "OllamaEmbeddingProvider":
        """Factory method to create OllamaEmbeddingProvider with defaults.

        Args:
            model_name: Model name. If None, uses settings.
            base_url: Ollama API URL. If None, uses settings.
            debug: Enable debug logging.

        Returns:
            Configured OllamaEmbeddingProvider
        """
        return cls(model_name=model_name, base_url=base_url, debug=debug)

    async def _connect(self) -> httpx.AsyncClient:
        client = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=self._timeout,
            limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
            transport=self._transport,
        )
        try:
            response = await client.post("/api/show", json={"model": self._model_name})
            response.raise_for_status()
        except httpx.HTTPError as e:
            await client.aclose()
            raise EmbeddingError(_describe_http_error(e, self._model_name)) from e
        return client

    @property
    def model_name(self) -> str:
        """Get the model name/identifier (e.g., "all-minilm")."""
        return self._model_name

    async def _embed(self, payload_input: str | list[str]) -> list[list[float]]:
        client = await self._client.get()
        try:
            response = await client.post(
                "/api/embed",
                json={"model": self._model_name, "input": payload_input},
            )
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPError as e:
            raise EmbeddingError(_describe_http_error(e, self._model_name)) from e
        except ValueError as e:
            raise EmbeddingError(f"Invalid JSON from Ollama: {e}") from e

        if not isinstance(data, dict):
            raise EmbeddingError(f"Unexpected response format: {data}")

        # Ollama returns {"embeddings": [[...], ...]}
        if data.get("embeddings"):
            return data["embeddings"]

        # Older servers: {"embedding": [...]}
        if "embedding" in data:
            return [data["embedding"]]

        raise EmbeddingError(f"Unexpected response format: {data}")

    async def generate(self, text: str) -> list[float]:
        """Generate embedding vector for a single text.

        Raises:
            EmbeddingError: If the Ollama API request fails or the response is malformed
        """
        embeddings = await self._embed(text)
        return [float(v) for v in embeddings[0]]

    async def generate_batch(self, texts: list[str]) -> list[list[float]]:
        """Generate embeddings for multiple texts in one request."""
        embeddings = await self._embed(texts)
        return [[float(v) for v in row] for row in embeddings]

    async def unload(self) -> None:
        """Close the HTTP client; the next call reconnects."""
        client = self._client.unload()
        if client is not None:
            await client.aclose()

    def is_loaded(self) -> bool:
        return self._client.is_loaded()
