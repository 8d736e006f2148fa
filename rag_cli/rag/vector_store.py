"""
Vector Store Module
===================
Common interface for the stores the pipeline writes to, and the persistent
variant backed by a Chroma server. The in-memory fallback lives in
memory_store.py; vector_store_factory.py picks one at connect time.
"""

import uuid
from abc import ABC, abstractmethod
from typing import List, Sequence

import numpy as np

from rag_cli.core.logger import get_logger
from rag_cli.rag.models import Chunk, SearchResult

logger = get_logger(__name__)

# Chroma collection settings used whenever this tool creates the collection
COLLECTION_METADATA = {"hnsw:space": "cosine"}


class VectorStore(ABC):
    """Stores (vector, text, metadata) records and searches them by similarity."""

    #: True when records outlive the process
    persistent = False

    def __init__(self, collection_name: str):
        self.collection_name = collection_name

    @abstractmethod
    def add(self, chunks: Sequence[Chunk], embeddings: np.ndarray) -> int:
        """Append one record per chunk. Never deduplicates. Returns records added."""

    @abstractmethod
    def search(self, query_embedding: np.ndarray, n_results: int) -> List[SearchResult]:
        """Return at most n_results records, most similar first."""

    @abstractmethod
    def count(self) -> int:
        """Total number of stored records."""

    @abstractmethod
    def list_sources(self) -> List[str]:
        """Distinct source filenames, in first-seen order."""

    @abstractmethod
    def clear(self) -> None:
        """Delete every record in the collection."""

    @staticmethod
    def _check_add_args(chunks: Sequence[Chunk], embeddings: np.ndarray):
        if len(chunks) != len(embeddings):
            raise ValueError(
                f"Got {len(chunks)} chunks but {len(embeddings)} embeddings"
            )


class ChromaVectorStore(VectorStore):
    """Stores and retrieves embeddings in a collection on a Chroma server"""

    persistent = True

    def __init__(self, client, collection, batch_size: int = 100):
        """
        Args:
            client: Connected chromadb client
            collection: The collection records are written to
            batch_size: Records per add() request
        """
        super().__init__(collection.name)
        self.client = client
        self.collection = collection
        self.batch_size = batch_size

    def add(self, chunks: Sequence[Chunk], embeddings: np.ndarray) -> int:
        self._check_add_args(chunks, embeddings)
        if not chunks:
            return 0

        logger.info(f"🔄 Storing {len(chunks)} chunks in Chroma "
                    f"collection '{self.collection_name}'...")

        ids = [str(uuid.uuid4()) for _ in chunks]
        documents = [chunk.text for chunk in chunks]
        metadatas = [chunk.to_metadata() for chunk in chunks]
        embedding_list = np.asarray(embeddings, dtype=np.float32).tolist()

        total_batches = (len(ids) + self.batch_size - 1) // self.batch_size
        for i in range(0, len(ids), self.batch_size):
            batch_end = min(i + self.batch_size, len(ids))

            self.collection.add(
                ids=ids[i:batch_end],
                embeddings=embedding_list[i:batch_end],
                documents=documents[i:batch_end],
                metadatas=metadatas[i:batch_end]
            )

            logger.debug(f"   ✅ Batch {(i // self.batch_size) + 1}/{total_batches} "
                         f"stored ({batch_end - i} chunks)")

        return len(ids)

    def search(self, query_embedding: np.ndarray, n_results: int) -> List[SearchResult]:
        if n_results < 1:
            return []

        total = self.collection.count()
        if total == 0:
            return []

        results = self.collection.query(
            query_embeddings=[np.asarray(query_embedding, dtype=np.float32).tolist()],
            n_results=min(n_results, total),
            include=["documents", "metadatas", "distances"],
        )

        space = self.distance_space()
        documents = results["documents"][0]
        metadatas = results["metadatas"][0]
        distances = results["distances"][0]

        return [
            SearchResult(
                chunk=Chunk.from_record(text, meta),
                score=round(self._similarity(float(distance), space), 4),
            )
            for text, meta, distance in zip(documents, metadatas, distances)
        ]

    def distance_space(self) -> str:
        """The collection's HNSW space: 'cosine', 'ip' or 'l2' (Chroma's default)."""
        metadata = self.collection.metadata or {}
        if "hnsw:space" in metadata:
            return metadata["hnsw:space"]
        configuration = getattr(self.collection, "configuration", None)
        if isinstance(configuration, dict):
            hnsw = configuration.get("hnsw") or {}
            if hnsw.get("space"):
                return hnsw["space"]
        return "l2"

    @staticmethod
    def _similarity(distance: float, space: str) -> float:
        """Turn a Chroma distance into a score where higher means closer.

        cosine and ip distances are 1 - similarity; l2 is squared euclidean
        and maps into (0, 1].
        """
        if space in ("cosine", "ip"):
            return 1 - distance
        return 1 / (1 + distance)

    def count(self) -> int:
        return self.collection.count()

    def list_sources(self, page_size: int = 1000) -> List[str]:
        sources = []
        seen = set()
        offset = 0
        while True:
            page = self.collection.get(include=["metadatas"],
                                       limit=page_size, offset=offset)
            metadatas = page.get("metadatas") or []
            for meta in metadatas:
                source = (meta or {}).get("source")
                if source and source not in seen:
                    seen.add(source)
                    sources.append(source)
            if len(metadatas) < page_size:
                return sources
            offset += page_size

    def clear(self) -> None:
        """Drop and recreate the collection"""
        logger.info(f"🗑️  Clearing collection: {self.collection_name}")
        self.client.delete_collection(self.collection_name)
        self.collection = self.client.get_or_create_collection(
            name=self.collection_name,
            metadata=COLLECTION_METADATA,
            embedding_function=None,
        )
        logger.info(f"✅ Collection cleared. Count: {self.collection.count()}")
