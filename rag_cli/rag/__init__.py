"""
RAG Module
==========
Modular components for the RAG pipeline:
  - loader: PDF document loading
  - chunker: Text splitting into chunks
  - embedder: Vector embedding generation
  - vector_store: Store interface and Chroma storage
  - memory_store: In-memory fallback store
  - vector_store_factory: Connect with fallback
  - retriever: Query → Embed → Search
"""

from rag_cli.rag.loader import PDFLoader
from rag_cli.rag.chunker import TextChunker
from rag_cli.rag.embedder import EmbeddingGenerator
from rag_cli.rag.vector_store import VectorStore, ChromaVectorStore
from rag_cli.rag.memory_store import InMemoryVectorStore
from rag_cli.rag.vector_store_factory import connect_vector_store
from rag_cli.rag.retriever import Retriever

__all__ = [
    "PDFLoader",
    "TextChunker",
    "EmbeddingGenerator",
    "VectorStore",
    "ChromaVectorStore",
    "InMemoryVectorStore",
    "connect_vector_store",
    "Retriever",
]
