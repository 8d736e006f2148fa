"""
RAG Query Engine
================
Thin coordinator that wires together the modular components.

Ingest pipeline:  PDF → Loader → Chunker → Embedder → VectorStore
Query pipeline:   Question → Retriever → Generator → Answer + Sources
"""

from pathlib import Path
from typing import Optional, Union

from rag_cli.core.config import settings
from rag_cli.core.errors import VectorStoreUnavailableError
from rag_cli.core.logger import get_logger
from rag_cli.rag.chunker import TextChunker
from rag_cli.rag.embedder import EmbeddingGenerator
from rag_cli.rag.loader import PDFLoader
from rag_cli.rag.models import Answer
from rag_cli.rag.retriever import Retriever
from rag_cli.rag.vector_store import VectorStore
from rag_cli.rag.vector_store_factory import connect_vector_store
from rag_cli.services.generator import OllamaGenerator
from rag_cli.services.ollama_client import OllamaClient

logger = get_logger(__name__)


class RAGQueryEngine:
    """
    Central coordinator for the RAG pipeline.
    All heavy lifting is delegated to the components in rag_cli.rag and
    rag_cli.services; any of them can be passed in to replace the default.
    """

    def __init__(self,
                 vector_store: Optional[VectorStore] = None,
                 embedder: Optional[EmbeddingGenerator] = None,
                 generator: Optional[OllamaGenerator] = None,
                 loader: Optional[PDFLoader] = None,
                 chunker: Optional[TextChunker] = None):
        # Closed by close() only when built here
        self._ollama = None
        if embedder is None or generator is None:
            self._ollama = OllamaClient()
        ollama = self._ollama

        self.loader = loader or PDFLoader()
        self.chunker = chunker or TextChunker()
        self.embedder = embedder or EmbeddingGenerator(client=ollama)
        self.generator = generator or OllamaGenerator(client=ollama)
        self.vector_store = vector_store or connect_vector_store()
        self.retriever = Retriever(
            embedder=self.embedder,
            vector_store=self.vector_store,
        )

    def close(self):
        """Release the Ollama HTTP connection pool, if this engine built it."""
        if self._ollama is not None:
            self._ollama.close()
            self._ollama = None

    def __enter__(self) -> "RAGQueryEngine":
        return self

    def __exit__(self, *exc_info):
        self.close()

    # ------------------------------------------------------------------
    # INGEST PIPELINE: PDF → Chunks → Embeddings → VectorStore
    # ------------------------------------------------------------------
    def add_document(self, file_path: Union[str, Path]) -> dict:
        """
        Ingest a single PDF. Re-ingesting a file adds its chunks again.

        Returns:
            dict with ingest stats (filename, num_pages, num_chunks, persistent)
        """
        document = self.loader.load(file_path)
        chunks = self.chunker.chunk_document(document)

        stats = {
            "filename": document.filename,
            "num_pages": document.total_pages,
            "num_chunks": 0,
            "persistent": self.vector_store.persistent,
        }

        if not chunks:
            logger.warning("⚠️ No text extracted; nothing to store")
            return stats

        embeddings = self.embedder.embed_chunks(chunks)
        stats["num_chunks"] = self.vector_store.add(chunks, embeddings)

        logger.info(f"✅ Ingested {document.filename}: {stats['num_chunks']} chunks stored")
        return stats

    # ------------------------------------------------------------------
    # QUERY PIPELINE: Question → Retriever → Generator → Answer
    # ------------------------------------------------------------------
    def query(self, question: str, top_k: Optional[int] = None) -> Answer:
        """
        Answer a question using the RAG pipeline.

        Args:
            question: User's question
            top_k: Number of chunks to retrieve (default settings.RETRIEVAL_TOP_K)

        Returns:
            Answer with the generated text and the chunks used as sources
        """
        k = settings.RETRIEVAL_TOP_K if top_k is None else top_k
        if k < 1:
            raise ValueError("top_k must be at least 1")

        results = self.retriever.retrieve(query=question, top_k=k)
        text = self.generator.generate(question, results)

        return Answer(question=question, text=text, sources=results)

    # ------------------------------------------------------------------
    # UTILITIES
    # ------------------------------------------------------------------
    def get_stats(self) -> dict:
        """Distinct sources and exact record count."""
        return {
            "sources": self.retriever.get_available_sources(),
            "total_chunks": self.vector_store.count(),
            "collection_name": self.vector_store.collection_name,
            "persistent": self.vector_store.persistent,
        }

    def clear_all(self):
        """Delete every record in the persistent collection."""
        if not self.vector_store.persistent:
            raise VectorStoreUnavailableError(
                f"Chroma collection '{self.vector_store.collection_name}' "
                f"is not reachable at {settings.chroma_url}"
            )

        logger.info("🗑️  Clearing Chroma collection...")
        try:
            self.vector_store.clear()
        except Exception as e:
            raise VectorStoreUnavailableError(
                f"Failed to clear collection '{self.vector_store.collection_name}': {e}"
            ) from e
        logger.info("✅ Chroma collection cleared successfully")
