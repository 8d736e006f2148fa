"""Tests for TextChunker: window size, overlap, page tagging and numbering."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from conftest import FIVE_CHUNK_PAGES, no_space_text
from rag_cli.rag.chunker import CHUNK_OVERLAP, CHUNK_SIZE, TextChunker
from rag_cli.rag.models import Document


@pytest.fixture
def chunker():
    return TextChunker()


class TestSplitText:
    def test_defaults_are_fixed_constants(self, chunker):
        assert chunker.chunk_size == CHUNK_SIZE == 1000
        assert chunker.chunk_overlap == CHUNK_OVERLAP == 200

    def test_empty_and_blank_text_yield_nothing(self, chunker):
        assert chunker.split_text("") == []
        assert chunker.split_text("   \n\t ") == []

    def test_short_text_is_single_stripped_chunk(self, chunker):
        assert chunker.split_text("  hello world  ") == ["hello world"]

    def test_text_of_exactly_chunk_size_is_one_chunk(self, chunker):
        assert len(chunker.split_text(no_space_text(1000))) == 1

    def test_consecutive_chunks_overlap_by_configured_amount(self, chunker):
        text = no_space_text(2600)
        pieces = chunker.split_text(text)

        assert pieces == [text[0:1000], text[800:1800], text[1600:2600]]
        for previous, current in zip(pieces, pieces[1:]):
            assert previous[-CHUNK_OVERLAP:] == current[:CHUNK_OVERLAP]

    def test_no_trailing_chunk_contained_in_previous(self, chunker):
        pieces = chunker.split_text(no_space_text(1800))
        assert len(pieces) == 2
        assert pieces[-1].endswith(no_space_text(1800)[-10:])

    def test_chunks_never_exceed_size(self, chunker):
        text = ("The quick brown fox jumps over the lazy dog. " * 200).strip()
        pieces = chunker.split_text(text)

        assert len(pieces) > 1
        assert all(len(p) <= CHUNK_SIZE for p in pieces)

    def test_prefers_sentence_boundaries(self, chunker):
        text = ("Sentence number one is here. " * 60).strip()
        pieces = chunker.split_text(text)

        assert all(p.endswith(".") for p in pieces)

    def test_preserves_text_order(self, chunker):
        words = [f"w{i}" for i in range(800)]
        pieces = chunker.split_text(" ".join(words))

        text = " ".join(words)
        positions = [text.find(p) for p in pieces]
        assert -1 not in positions
        assert positions == sorted(positions)
        assert text.endswith(pieces[-1])

    def test_overlap_must_be_smaller_than_size(self):
        with pytest.raises(ValueError):
            TextChunker(chunk_size=100, chunk_overlap=100)


class TestChunkDocument:
    def test_three_pages_into_five_chunks(self, chunker):
        document = Document(path=Path("/tmp/report.pdf"), pages=FIVE_CHUNK_PAGES)
        chunks = chunker.chunk_document(document, ingested_at="2024-01-01T00:00:00+00:00")

        assert len(chunks) == 5
        assert [c.chunk_id for c in chunks] == [0, 1, 2, 3, 4]
        assert [c.page_number for c in chunks] == [1, 1, 2, 2, 3]
        assert {c.source for c in chunks} == {"report.pdf"}
        assert {c.ingested_at for c in chunks} == {"2024-01-01T00:00:00+00:00"}

    def test_empty_pages_are_skipped_but_keep_page_numbers(self, chunker):
        document = Document(path=Path("a/b/notes.pdf"), pages=["", "second page", "", "fourth"])
        chunks = chunker.chunk_document(document)

        assert [(c.chunk_id, c.page_number, c.text) for c in chunks] == [
            (0, 2, "second page"),
            (1, 4, "fourth"),
        ]

    def test_one_timestamp_per_run(self, chunker):
        document = Document(path=Path("x.pdf"), pages=["one", "two", "three"])
        chunks = chunker.chunk_document(document)

        assert len({c.ingested_at for c in chunks}) == 1
        assert chunks[0].ingested_at

    def test_chunks_are_immutable(self, chunker):
        chunk = chunker.chunk_document(Document(path=Path("x.pdf"), pages=["text"]))[0]

        with pytest.raises(ValidationError):
            chunk.text = "changed"

    def test_metadata_round_trip(self, chunker):
        chunk = chunker.chunk_document(Document(path=Path("x.pdf"), pages=["", "text"]))[0]
        meta = chunk.to_metadata()

        assert meta == {
            "source": "x.pdf",
            "chunk_id": 0,
            "ingested_at": chunk.ingested_at,
            "page_number": 2,
        }
        assert type(chunk).from_record(chunk.text, meta) == chunk
