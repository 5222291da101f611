"""Reduction of oversized article text to a representative excerpt."""

MAX_TEXT_LENGTH = 40000
CHUNK_SIZE = 35000

ELISION_MARKER = "[... the middle part of the article was omitted ...]"
SHORTENED_NOTE = "[Note: the article was shortened for processing because of its length]"


def reduce_text(text: str, max_length: int = MAX_TEXT_LENGTH, chunk_size: int = CHUNK_SIZE) -> str:
    """Keep the head and tail of a long text and elide the middle.

    Introductions and conclusions carry most of an article's argument, so the
    first and last ``chunk_size`` characters are kept verbatim. Texts of at most
    ``max_length`` characters are returned unchanged.
    """
    if max_length <= 0 or chunk_size <= 0:
        raise ValueError("max_length and chunk_size must be positive")
    if len(text) <= max_length:
        return text

    head = text[:chunk_size]
    tail = text[-chunk_size:]
    return f"{head}\n\n{ELISION_MARKER}\n\n{tail}\n\n{SHORTENED_NOTE}"
