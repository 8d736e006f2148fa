"""rag-cli: ingest PDFs into a vector database and ask questions about them."""

__version__ = "1.0.0"
