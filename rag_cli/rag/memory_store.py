"""In-process vector store used when the Chroma server is not available."""

from typing import List, Sequence

import numpy as np

from rag_cli.core.logger import get_logger
from rag_cli.rag.models import Chunk, SearchResult
from rag_cli.rag.vector_store import VectorStore

logger = get_logger(__name__)


class InMemoryVectorStore(VectorStore):
    """Keeps records in numpy arrays for the lifetime of the process.

    Similarity is cosine; equal scores keep insertion order.
    """

    persistent = False

    def __init__(self, collection_name: str):
        super().__init__(collection_name)
        self._chunks: List[Chunk] = []
        self._vectors = None

    def add(self, chunks: Sequence[Chunk], embeddings: np.ndarray) -> int:
        self._check_add_args(chunks, embeddings)
        if not chunks:
            return 0

        vectors = np.asarray(embeddings, dtype=np.float32)
        if self._vectors is None:
            self._vectors = vectors
        else:
            self._vectors = np.vstack([self._vectors, vectors])
        self._chunks.extend(chunks)

        logger.info(f"🔄 Stored {len(chunks)} chunks in memory "
                    f"(total {len(self._chunks)})")
        return len(chunks)

    def search(self, query_embedding: np.ndarray, n_results: int) -> List[SearchResult]:
        if n_results < 1 or not self._chunks:
            return []

        scores = self._cosine_similarity(np.asarray(query_embedding, dtype=np.float32))
        order = np.argsort(-scores, kind="stable")[:n_results]

        return [
            SearchResult(chunk=self._chunks[i], score=round(float(scores[i]), 4))
            for i in order
        ]

    def count(self) -> int:
        return len(self._chunks)

    def list_sources(self) -> List[str]:
        return list(dict.fromkeys(chunk.source for chunk in self._chunks))

    def clear(self) -> None:
        self._chunks = []
        self._vectors = None
        logger.info("✅ In-memory store cleared")

    def _cosine_similarity(self, query: np.ndarray) -> np.ndarray:
        norms = np.linalg.norm(self._vectors, axis=1) * np.linalg.norm(query)
        dots = self._vectors @ query
        with np.errstate(divide="ignore", invalid="ignore"):
            scores = np.where(norms > 0, dots / norms, 0.0)
        return scores
