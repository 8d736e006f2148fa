"""
Data models shared by the ingest and query pipelines.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Document(BaseModel):
    """A PDF file and the text of each of its pages, in page order."""

    path: Path
    pages: List[str] = Field(default_factory=list)

    @property
    def filename(self) -> str:
        return self.path.name

    @property
    def total_pages(self) -> int:
        return len(self.pages)

    @property
    def total_characters(self) -> int:
        return sum(len(p) for p in self.pages)


class Chunk(BaseModel):
    """A bounded text span cut from a document. Immutable once created."""

    model_config = ConfigDict(frozen=True)

    text: str
    source: str = Field(..., description="Base filename of the ingested document")
    chunk_id: int = Field(..., ge=0, description="0-based position within the document")
    ingested_at: str = Field(..., description="ISO-8601 timestamp of the ingestion run")
    page_number: Optional[int] = Field(default=None, description="1-based PDF page")

    def to_metadata(self) -> Dict[str, Any]:
        """Flatten to the scalar-only metadata map stored next to the vector."""
        meta = {
            "source": self.source,
            "chunk_id": self.chunk_id,
            "ingested_at": self.ingested_at,
        }
        if self.page_number is not None:
            meta["page_number"] = self.page_number
        return meta

    @classmethod
    def from_record(cls, text: str, metadata: Optional[Dict[str, Any]]) -> "Chunk":
        """Rebuild a chunk from a stored (text, metadata) pair."""
        metadata = metadata or {}
        return cls(
            text=text or "",
            source=metadata.get("source", "Unknown"),
            chunk_id=int(metadata.get("chunk_id", 0)),
            ingested_at=str(metadata.get("ingested_at", "")),
            page_number=metadata.get("page_number"),
        )


class SearchResult(BaseModel):
    """A stored chunk together with its similarity to the query."""

    chunk: Chunk
    score: float


class Answer(BaseModel):
    """Generated answer plus the chunks that were given to the model."""

    question: str
    text: str
    sources: List[SearchResult] = Field(default_factory=list)
