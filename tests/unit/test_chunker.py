"""Unit tests for text reduction."""

import pytest

from referent.services.chunker import (
    CHUNK_SIZE,
    ELISION_MARKER,
    MAX_TEXT_LENGTH,
    SHORTENED_NOTE,
    reduce_text,
)


def _long_text(length: int) -> str:
    alphabet = "abcdefghijklmnopqrstuvwxyz"
    return "".join(alphabet[i % len(alphabet)] for i in range(length))


class TestReduceText:
    """Tests for reduce_text."""

    @pytest.mark.parametrize("length", [0, 1, 1000, MAX_TEXT_LENGTH])
    def test_short_text_unchanged(self, length: int) -> None:
        """Should return texts up to the limit unchanged."""
        text = _long_text(length)
        assert reduce_text(text) == text

    def test_reduction_is_idempotent_for_short_text(self) -> None:
        """Reducing a short text twice should equal reducing it once."""
        text = "A short article body."
        assert reduce_text(reduce_text(text)) == reduce_text(text)

    def test_long_text_keeps_head_and_tail(self) -> None:
        """Should keep the exact first and last chunks around the elision marker."""
        text = "HEAD" + _long_text(90000) + "TAIL"

        reduced = reduce_text(text)

        head = text[:CHUNK_SIZE]
        tail = text[-CHUNK_SIZE:]
        assert reduced.startswith(head)
        assert tail in reduced
        assert reduced.index(ELISION_MARKER) == len(head) + 2
        assert reduced.index(ELISION_MARKER) < reduced.rindex(tail)
        assert reduced.endswith(SHORTENED_NOTE)

    def test_just_over_limit_overlaps(self) -> None:
        """Should still keep full chunks when head and tail overlap."""
        text = _long_text(MAX_TEXT_LENGTH + 1)

        reduced = reduce_text(text)

        assert text[:CHUNK_SIZE] in reduced
        assert text[-CHUNK_SIZE:] in reduced
        assert ELISION_MARKER in reduced

    def test_custom_sizes(self) -> None:
        """Should honour explicit limits."""
        reduced = reduce_text("0123456789", max_length=5, chunk_size=2)
        assert reduced == f"01\n\n{ELISION_MARKER}\n\n89\n\n{SHORTENED_NOTE}"

    def test_rejects_non_positive_sizes(self) -> None:
        """Should raise ValueError for zero or negative limits."""
        with pytest.raises(ValueError):
            reduce_text("text", max_length=0)
        with pytest.raises(ValueError):
            reduce_text("text", chunk_size=-1)
