"""Tests for TextChunker window placement and coverage."""

import pytest

from docquery.core.services.chunker import PAGE_SEPARATOR, TextChunker

pytestmark = pytest.mark.unit

SAMPLE_TEXT = (
    "Section 1. Definitions.\n\nThe insured person means the person named in the schedule. "
    "A hospital is any institution established for in-patient care! Is day care covered? "
    "Yes, day care procedures are covered as listed in Annexure II.\n"
    "Section 2. Exclusions; cosmetic surgery, self-inflicted injury and war are excluded. "
) * 6


def assert_covers(text, windows, chunk_size, chunk_overlap):
    """Every window is a verbatim slice, windows are contiguous, and all text is covered."""
    assert windows[0][0] == 0
    for start, window in windows:
        assert len(window) <= chunk_size
        assert text[start : start + len(window)] == window
    for (start, window), (next_start, next_window) in zip(windows, windows[1:]):
        end = start + len(window)
        assert next_start == end - chunk_overlap
        # Overlap region copied into both neighbours
        assert window[len(window) - chunk_overlap :] == next_window[:chunk_overlap]
    last_start, last_window = windows[-1]
    assert last_start + len(last_window) == len(text)


class TestCoverage:
    @pytest.mark.parametrize(
        "chunk_size,chunk_overlap",
        [(800, 200), (100, 0), (100, 99), (50, 10), (7, 3), (1, 0), (300, 150)],
    )
    def test_windows_cover_every_offset(self, chunk_size, chunk_overlap):
        chunker = TextChunker(chunk_size, chunk_overlap)
        windows = chunker.split_text(SAMPLE_TEXT)
        assert_covers(SAMPLE_TEXT, windows, chunk_size, chunk_overlap)

    @pytest.mark.parametrize("text", ["a", "short text", "x" * 250, " " * 40, "a\n\nb\n\nc" * 30])
    def test_coverage_on_edge_texts(self, text):
        chunker = TextChunker(20, 5)
        windows = chunker.split_text(text)
        assert_covers(text, windows, 20, 5)

    def test_text_shorter_than_chunk_is_single_window(self):
        chunker = TextChunker(100, 10)
        assert chunker.split_text("A short clause.") == [(0, "A short clause.")]

    def test_empty_text_has_no_windows(self):
        assert TextChunker(100, 10).split_text("") == []


class TestBoundaries:
    def test_prefers_paragraph_break(self):
        text = "A" * 60 + "\n\n" + "B" * 60
        windows = TextChunker(100, 10).split_text(text)
        assert windows[0][1] == "A" * 60 + "\n\n"

    def test_prefers_sentence_end_over_hard_cut(self):
        text = "word " * 5 + "End of sentence. " + "z" * 100
        windows = TextChunker(60, 10).split_text(text)
        assert windows[0][1].endswith("End of sentence. ")

    def test_hard_cut_without_separators(self):
        windows = TextChunker(100, 20).split_text("x" * 250)
        assert [(start, len(w)) for start, w in windows] == [(0, 100), (80, 100), (160, 90)]

    def test_ignores_boundaries_in_first_half(self):
        text = "Hi. " + "y" * 200
        windows = TextChunker(100, 10).split_text(text)
        assert len(windows[0][1]) == 100


class TestSplitDocument:
    def test_chunks_carry_source_and_sequence(self):
        pages = ["Page one text.", "Page two text."]
        chunks = TextChunker(10, 2).split_document(pages, source="https://x/doc.pdf")

        assert [c.sequence for c in chunks] == list(range(len(chunks)))
        assert all(c.source == "https://x/doc.pdf" for c in chunks)
        joined = PAGE_SEPARATOR.join(pages)
        assert all(joined[c.start : c.end] == c.text for c in chunks)

    def test_chunks_are_immutable(self):
        chunk = TextChunker(50, 0).split_document(["text"], source="s")[0]
        with pytest.raises(AttributeError):
            chunk.text = "changed"


class TestValidation:
    @pytest.mark.parametrize(
        "chunk_size,chunk_overlap", [(0, 0), (-5, 0), (10, 10), (10, 11), (10, -1)]
    )
    def test_invalid_parameters_raise(self, chunk_size, chunk_overlap):
        with pytest.raises(ValueError):
            TextChunker(chunk_size, chunk_overlap)
