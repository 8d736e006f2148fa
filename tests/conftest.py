"""
Shared test fixtures.

Provides: a mocked Ollama server (httpx.MockTransport), PDF file factory,
vector store instances and a fully wired RAGQueryEngine. No test talks to a
real Ollama or Chroma server.
"""

import json
import os
import tempfile
import uuid

# Settings are read at import time, so configure them before importing rag_cli
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="rag-cli-tests-"))
os.environ["LOG_TO_FILE"] = "false"

import chromadb
import httpx
import pytest

from rag_cli.query_engine import RAGQueryEngine
from rag_cli.rag.chunker import TextChunker
from rag_cli.rag.embedder import EmbeddingGenerator
from rag_cli.rag.loader import PDFLoader
from rag_cli.rag.memory_store import InMemoryVectorStore
from rag_cli.rag.models import Document
from rag_cli.rag.vector_store import COLLECTION_METADATA, ChromaVectorStore
from rag_cli.services.generator import OllamaGenerator
from rag_cli.services.ollama_client import OllamaClient

OLLAMA_TEST_URL = "http://ollama.test"
STUB_ANSWER = "The answer is in the documents."


def letter_vector(text):
    """Deterministic 26-dim embedding: letter frequencies of the text."""
    vec = [0.0] * 26
    for ch in text.lower():
        if "a" <= ch <= "z":
            vec[ord(ch) - ord("a")] += 1.0
    return vec


class FakeOllama:
    """Records requests and answers like an Ollama server would."""

    def __init__(self):
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append((request.url.path, payload))

        if request.url.path == "/api/embed":
            return httpx.Response(
                200, json={"embeddings": [letter_vector(t) for t in payload["input"]]}
            )
        if request.url.path == "/api/generate":
            return httpx.Response(200, json={"response": STUB_ANSWER})
        return httpx.Response(404, json={"error": "not found"})

    def paths(self):
        return [path for path, _ in self.requests]


@pytest.fixture
def fake_ollama():
    return FakeOllama()


@pytest.fixture
def ollama_client(fake_ollama):
    http = httpx.Client(base_url=OLLAMA_TEST_URL, transport=httpx.MockTransport(fake_ollama))
    client = OllamaClient(base_url=OLLAMA_TEST_URL, http_client=http)
    yield client
    client.close()


@pytest.fixture
def embedder(ollama_client):
    return EmbeddingGenerator(client=ollama_client, model_name="nomic-embed-text", batch_size=8)


@pytest.fixture
def generator(ollama_client):
    return OllamaGenerator(client=ollama_client, model_name="llama3.1")


@pytest.fixture
def memory_store():
    return InMemoryVectorStore("rag-documents")


@pytest.fixture
def chroma_client():
    return chromadb.EphemeralClient()


@pytest.fixture
def chroma_store(chroma_client):
    """ChromaVectorStore on an in-process Chroma with a collection unique to the test."""
    name = f"test-{uuid.uuid4().hex[:12]}"
    collection = chroma_client.get_or_create_collection(
        name=name, metadata=COLLECTION_METADATA, embedding_function=None
    )
    yield ChromaVectorStore(chroma_client, collection)
    try:
        chroma_client.delete_collection(name)
    except Exception:
        pass


class StubLoader(PDFLoader):
    """Returns preset page texts instead of reading a PDF."""

    def __init__(self, pages):
        self.pages = pages

    def load(self, file_path):
        return Document(path=file_path, pages=list(self.pages))


def no_space_text(length, offset=0):
    """Text without separators, so chunk boundaries fall exactly on the window size."""
    letters = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ"
    return "".join(letters[(i + offset) % len(letters)] for i in range(length))


# Three pages that split into 2 + 2 + 1 = 5 chunks at size 1000 / overlap 200
FIVE_CHUNK_PAGES = [no_space_text(1800), no_space_text(1800, 7), no_space_text(500, 13)]


@pytest.fixture
def make_engine(embedder, generator, memory_store):
    """Build a RAGQueryEngine from the mocked components."""

    def _make(vector_store=None, pages=None):
        loader = StubLoader(pages) if pages is not None else PDFLoader()
        return RAGQueryEngine(
            vector_store=vector_store or memory_store,
            embedder=embedder,
            generator=generator,
            loader=loader,
            chunker=TextChunker(),
        )

    return _make


def _pdf_escape(text):
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages):
    """Assemble a minimal PDF with one line of Helvetica text per page."""
    n = len(pages)
    font_id = 3 + 2 * n
    objects = [
        "<< /Type /Catalog /Pages 2 0 R >>",
        "<< /Type /Pages /Kids [{}] /Count {} >>".format(
            " ".join(f"{3 + 2 * i} 0 R" for i in range(n)), n
        ),
    ]
    for i, text in enumerate(pages):
        content = f"BT /F1 12 Tf 72 720 Td ({_pdf_escape(text)}) Tj ET" if text else ""
        objects.append(
            f"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            f"/Contents {4 + 2 * i} 0 R /Resources << /Font << /F1 {font_id} 0 R >> >> >>"
        )
        objects.append(
            f"<< /Length {len(content.encode('latin-1'))} >>\nstream\n{content}\nendstream"
        )
    objects.append("<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>")

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, 1):
        offsets.append(len(out))
        out += f"{number} 0 obj\n{body}\nendobj\n".encode("latin-1")

    xref_offset = len(out)
    out += f"xref\n0 {len(objects) + 1}\n0000000000 65535 f \n".encode("latin-1")
    for offset in offsets:
        out += f"{offset:010d} 00000 n \n".encode("latin-1")
    out += (
        f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\n"
        f"startxref\n{xref_offset}\n%%EOF\n"
    ).encode("latin-1")
    return bytes(out)


@pytest.fixture
def make_pdf(tmp_path):
    """Write a PDF with the given page texts and return its path."""

    def _make(pages, name="document.pdf"):
        path = tmp_path / name
        path.write_bytes(build_pdf(pages))
        return path

    return _make
