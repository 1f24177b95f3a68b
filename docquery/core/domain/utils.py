"""Text helpers shared across the domain."""

import unicodedata


def normalize_text(text: str | None) -> str:
    """Strip BOM and replacement characters and apply NFKC normalization.

    PDF text layers regularly carry BOMs and ligatures; normalizing before
    embedding keeps query and document vectors comparable.
    """
    if not text:
        return ""
    cleaned = text.replace("\ufeff", "").replace("\ufffd", "")
    return unicodedata.normalize("NFKC", cleaned)
