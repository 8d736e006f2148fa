"""
Ollama HTTP Client
==================
Thin synchronous transport for the two Ollama endpoints the pipeline needs:

- POST /api/embed     {"model", "input": [...]}      -> {"embeddings": [[...], ...]}
- POST /api/generate  {"model", "prompt", "stream"}  -> {"response": "..."}

Transport failures are translated into ServiceConnectionError, error statuses
and malformed payloads into RemoteServiceError. No retries.
"""

from typing import Any, Dict, List, Optional, Sequence

import httpx

from rag_cli.core.config import settings
from rag_cli.core.errors import RemoteServiceError, ServiceConnectionError
from rag_cli.core.logger import get_logger

logger = get_logger(__name__)


class OllamaClient:
    """Posts JSON requests to an Ollama server."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http_client: Optional[httpx.Client] = None,
    ) -> None:
        """
        Args:
            base_url: Server address. Defaults to settings.OLLAMA_BASE_URL.
            timeout: Seconds per request. Defaults to settings.REQUEST_TIMEOUT.
            http_client: Pre-built httpx client (tests inject a MockTransport).
        """
        self.base_url = (base_url or settings.OLLAMA_BASE_URL).rstrip("/")
        self.timeout = settings.REQUEST_TIMEOUT if timeout is None else timeout
        self._http = http_client or httpx.Client(
            base_url=self.base_url, timeout=self.timeout
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "OllamaClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def embed(self, model: str, texts: Sequence[str]) -> List[List[float]]:
        """Return one embedding per input text, in input order."""
        data = self._post("/api/embed", {"model": model, "input": list(texts)})

        embeddings = data.get("embeddings")
        if not isinstance(embeddings, list) or len(embeddings) != len(texts):
            raise RemoteServiceError(
                f"Embedding response from '{model}' has "
                f"{len(embeddings) if isinstance(embeddings, list) else 'no'} "
                f"vectors for {len(texts)} inputs"
            )

        for index, emb in enumerate(embeddings):
            if not isinstance(emb, list) or not all(
                isinstance(x, (float, int)) for x in emb
            ):
                raise RemoteServiceError(
                    f"Invalid embedding vector at index {index}: must be a list of numbers"
                )

        return embeddings

    def generate(self, model: str, prompt: str) -> str:
        """Run a single non-streaming completion and return its text."""
        data = self._post(
            "/api/generate", {"model": model, "prompt": prompt, "stream": False}
        )

        text = data.get("response")
        if not isinstance(text, str):
            raise RemoteServiceError(
                f"Generation response from '{model}' is missing 'response'"
            )
        return text

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _post(self, path: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        try:
            response = self._http.post(path, json=payload)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            detail = exc.response.text[:200]
            logger.error(
                "Ollama %s returned %d: %s", path, exc.response.status_code, detail
            )
            raise RemoteServiceError(
                f"Ollama {path} failed with status {exc.response.status_code}: {detail}"
            ) from exc
        except httpx.TransportError as exc:
            logger.error(
                "Ollama request to %s%s failed (%s): %s",
                self.base_url, path, type(exc).__name__, exc,
            )
            raise ServiceConnectionError(
                f"Cannot reach Ollama at {self.base_url}: {type(exc).__name__}"
            ) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise RemoteServiceError(f"Ollama {path} returned invalid JSON") from exc

        if not isinstance(data, dict):
            raise RemoteServiceError(f"Ollama {path} returned unexpected payload")
        return data
