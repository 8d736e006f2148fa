"""
Application error taxonomy.

Every component raises one of these; the CLI catches them once at the command
boundary and turns them into a non-zero exit code.
"""


class RAGError(Exception):
    """Base class for all rag-cli errors."""


class DocumentNotFoundError(RAGError, FileNotFoundError):
    """Raised when the file given for ingestion does not exist."""


class ServiceConnectionError(RAGError):
    """Raised when a remote endpoint cannot be reached or times out."""


class RemoteServiceError(RAGError):
    """Raised when a remote service answers with an error or a malformed payload."""


class VectorStoreUnavailableError(ServiceConnectionError):
    """Raised when an operation needs the persistent vector database but only
    the in-memory fallback is attached."""
