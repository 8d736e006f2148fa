"""
Embedding Generator Module
==========================
Converts text chunks and queries into vector embeddings using a model served
by Ollama.
"""

import time
from typing import List, Optional

import numpy as np

from rag_cli.core.config import settings
from rag_cli.core.errors import RemoteServiceError
from rag_cli.core.logger import get_logger
from rag_cli.rag.models import Chunk
from rag_cli.services.ollama_client import OllamaClient

logger = get_logger(__name__)


class EmbeddingGenerator:
    """Generates embeddings through the Ollama /api/embed endpoint"""

    def __init__(self, client: Optional[OllamaClient] = None,
                 model_name: Optional[str] = None,
                 batch_size: Optional[int] = None):
        """
        Initialize embedding generator

        Args:
            client: Ollama transport (a default one is built from settings)
            model_name: Embedding model served by Ollama
            batch_size: Number of texts sent per request
        """
        self.client = client or OllamaClient()
        self.model_name = model_name or settings.EMBEDDING_MODEL
        self.batch_size = batch_size or settings.EMBEDDING_BATCH_SIZE
        self.embedding_dim = None

        logger.debug(f"🤖 Embedding model: {self.model_name} (batch size {self.batch_size})")

    def embed_texts(self, texts: List[str]) -> np.ndarray:
        """
        Generate embeddings for multiple texts

        Args:
            texts: List of texts to embed

        Returns:
            Numpy array of shape (n_texts, embedding_dim)
        """
        if not texts:
            return np.empty((0, self.embedding_dim or 0), dtype=np.float32)

        logger.info(f"🔄 Generating embeddings for {len(texts)} texts...")
        start_time = time.time()

        vectors = []
        for i in range(0, len(texts), self.batch_size):
            batch = texts[i:i + self.batch_size]
            vectors.extend(self.client.embed(self.model_name, batch))

        try:
            embeddings = np.asarray(vectors, dtype=np.float32)
        except ValueError as exc:
            raise RemoteServiceError(
                f"Model '{self.model_name}' returned vectors of differing length"
            ) from exc
        if embeddings.ndim != 2:
            raise RemoteServiceError(
                f"Model '{self.model_name}' returned vectors of differing length"
            )
        self.embedding_dim = embeddings.shape[1]

        elapsed = time.time() - start_time
        logger.info(f"✅ Generated {len(texts)} embeddings in {elapsed:.2f}s "
                    f"(dim={self.embedding_dim})")

        return embeddings

    def embed_chunks(self, chunks: List[Chunk]) -> np.ndarray:
        """Embed chunk texts, one row per chunk in chunk order"""
        return self.embed_texts([chunk.text for chunk in chunks])

    def embed_query(self, query: str) -> np.ndarray:
        """Embed a single query string into a 1-D vector"""
        return self.embed_texts([query])[0]
