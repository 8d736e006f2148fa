"""PDF Loader Module"""

from pypdf import PdfReader
from pathlib import Path
from typing import Union

from rag_cli.core.errors import DocumentNotFoundError
from rag_cli.core.logger import get_logger
from rag_cli.rag.models import Document

logger = get_logger(__name__)


class PDFLoader:
    """Extracts per-page text from a PDF file"""

    def load(self, file_path: Union[str, Path]) -> Document:
        """Load a single PDF. Pages without text are kept as empty strings."""
        pdf_path = Path(file_path)
        if not pdf_path.is_file():
            raise DocumentNotFoundError(f"File not found: {file_path}")

        logger.info(f"📖 Loading PDF: {pdf_path}")

        reader = PdfReader(pdf_path)
        pages_text = []

        for page_num, page in enumerate(reader.pages, 1):
            text = page.extract_text()
            if text and text.strip():
                pages_text.append(text.strip())
                logger.debug(f"   ✓ Page {page_num}: {len(text)} chars")
            else:
                pages_text.append("")

        document = Document(path=pdf_path, pages=pages_text)
        logger.info(f"📄 Loaded {document.total_pages} pages from PDF")
        return document
