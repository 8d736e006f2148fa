"""
Retriever Module
================
Embeds a user query and searches the vector store for the most similar chunks.
Returned chunks keep their metadata (source file, page, chunk id) for citations.
"""

from rag_cli.core.logger import get_logger
from rag_cli.rag.embedder import EmbeddingGenerator
from rag_cli.rag.models import SearchResult
from rag_cli.rag.vector_store import VectorStore
from typing import List

logger = get_logger(__name__)


class Retriever:
    """Retrieves relevant chunks from the vector store for a given query."""

    def __init__(self, embedder: EmbeddingGenerator, vector_store: VectorStore):
        self.embedder = embedder
        self.vector_store = vector_store

    def retrieve(self, query: str, top_k: int = 4) -> List[SearchResult]:
        """
        Retrieve the most relevant chunks for a query.

        Args:
            query: The user's question
            top_k: Maximum number of results to return

        Returns:
            At most top_k results, most similar first
        """
        logger.info(f"🔍 Searching for: \"{query[:80]}\" (top {top_k})")

        query_embedding = self.embedder.embed_query(query)
        results = self.vector_store.search(query_embedding, n_results=top_k)

        logger.info(f"✅ Retrieved {len(results)} chunks")
        return results[:top_k]

    def get_available_sources(self) -> List[str]:
        """Get list of unique source files in the vector store."""
        return self.vector_store.list_sources()
