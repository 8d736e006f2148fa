"""Text Chunker Module"""

from datetime import datetime, timezone
from typing import List, Optional

from rag_cli.core.logger import get_logger
from rag_cli.rag.models import Chunk, Document

logger = get_logger(__name__)

CHUNK_SIZE = 1000
CHUNK_OVERLAP = 200


class TextChunker:
    """Chunks page text into overlapping, fixed-size pieces"""

    # Preferred break points, tried in order, within the back half of a window
    SEPARATORS = ['\n\n', '\n', '. ', '! ', '? ', ' ']

    def __init__(self, chunk_size=CHUNK_SIZE, chunk_overlap=CHUNK_OVERLAP):
        if chunk_overlap >= chunk_size:
            raise ValueError("chunk_overlap must be smaller than chunk_size")
        self.chunk_size = chunk_size
        self.chunk_overlap = chunk_overlap
        logger.debug(f"✂️ Chunker initialized: size={chunk_size}, overlap={chunk_overlap}")

    def split_text(self, text: str) -> List[str]:
        """Split text into windows of at most chunk_size characters.

        Each window starts chunk_overlap characters before the previous one
        ended. Windows end on a separator when one falls in their back half,
        otherwise mid-word.
        """
        if not text or not text.strip():
            return []

        text = text.strip()

        if len(text) <= self.chunk_size:
            return [text]

        pieces = []
        start = 0

        while start < len(text):
            end = min(start + self.chunk_size, len(text))

            if end < len(text):
                for sep in self.SEPARATORS:
                    pos = text.rfind(sep, start, end)
                    if pos != -1 and pos > start + self.chunk_size // 2:
                        end = pos + len(sep)
                        break

            piece = text[start:end].strip()
            if piece:
                pieces.append(piece)

            if end >= len(text):
                break

            next_start = end - self.chunk_overlap
            start = next_start if next_start > start else end

        return pieces

    def chunk_document(self, document: Document,
                       ingested_at: Optional[str] = None) -> List[Chunk]:
        """Chunk all pages of a document, numbering chunks across pages"""
        ingested_at = ingested_at or datetime.now(timezone.utc).isoformat()

        chunks = []
        for page_num, page_text in enumerate(document.pages, 1):
            pieces = self.split_text(page_text)
            for piece in pieces:
                chunks.append(Chunk(
                    text=piece,
                    source=document.filename,
                    chunk_id=len(chunks),
                    ingested_at=ingested_at,
                    page_number=page_num,
                ))
            if pieces:
                logger.debug(f"   ✓ Page {page_num}: {len(pieces)} chunk(s)")

        logger.info(f"✂️  Split into {len(chunks)} chunks")
        return chunks
