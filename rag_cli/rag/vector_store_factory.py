"""
Vector store selection.

connect_vector_store() attaches to the existing collection on the Chroma
server and falls back to an in-memory store when the server is unreachable
or the collection does not exist yet. Callers use either variant through the
VectorStore interface.
"""

from typing import Optional

import chromadb

from rag_cli.core.config import settings
from rag_cli.core.errors import ServiceConnectionError
from rag_cli.core.logger import get_logger
from rag_cli.rag.memory_store import InMemoryVectorStore
from rag_cli.rag.vector_store import COLLECTION_METADATA, ChromaVectorStore, VectorStore

logger = get_logger(__name__)


def _http_client(host: str, port: int):
    return chromadb.HttpClient(host=host, port=port)


def connect_vector_store(host: Optional[str] = None,
                         port: Optional[int] = None,
                         collection_name: Optional[str] = None) -> VectorStore:
    """
    Attach to the named collection, or degrade to an in-memory store.

    Returns:
        ChromaVectorStore on success, InMemoryVectorStore on any failure
    """
    host = host or settings.CHROMA_HOST
    port = port or settings.CHROMA_PORT
    collection_name = collection_name or settings.COLLECTION_NAME

    logger.info(f"🤖 Connecting to Chroma at {host}:{port}")
    try:
        client = _http_client(host, port)
        collection = client.get_collection(name=collection_name,
                                           embedding_function=None)
    except Exception as e:
        logger.warning(f"⚠️  Chroma collection '{collection_name}' unavailable "
                       f"({type(e).__name__}: {e})")
        logger.warning("📁 Using an in-memory vector store for this run; "
                       "nothing will be persisted")
        return InMemoryVectorStore(collection_name)

    logger.info(f"✅ Connected to existing Chroma collection '{collection_name}' "
                f"({collection.count()} records)")
    return ChromaVectorStore(client, collection)


def create_collection(host: Optional[str] = None,
                      port: Optional[int] = None,
                      collection_name: Optional[str] = None) -> ChromaVectorStore:
    """Create the named collection on the Chroma server if it is missing."""
    host = host or settings.CHROMA_HOST
    port = port or settings.CHROMA_PORT
    collection_name = collection_name or settings.COLLECTION_NAME

    try:
        client = _http_client(host, port)
        collection = client.get_or_create_collection(
            name=collection_name,
            metadata=COLLECTION_METADATA,
            embedding_function=None,
        )
    except Exception as e:
        raise ServiceConnectionError(
            f"Cannot reach Chroma at {host}:{port}: {e}"
        ) from e

    logger.info(f"✅ Collection '{collection_name}' ready "
                f"({collection.count()} records)")
    return ChromaVectorStore(client, collection)
