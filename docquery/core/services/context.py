"""Builds the bounded context passed to the answer model."""

from ..domain import SearchMatch

CONTEXT_SEPARATOR = "\n\n---\n\n"


def select_context_chunks(matches: list[SearchMatch], max_context_chars: int) -> list[str]:
    """Greedy rank-order prefix of trimmed match texts within the budget.

    The running total includes each candidate before the check, so the chunk
    that pushes the total over ``max_context_chars`` is excluded and selection
    stops there.
    """
    selected: list[str] = []
    total = 0
    for match in matches:
        if not match.text:
            continue
        text = match.text.strip()
        total += len(text)
        if total > max_context_chars:
            break
        selected.append(text)
    return selected


def assemble_context(
    matches: list[SearchMatch],
    max_context_chars: int,
    separator: str = CONTEXT_SEPARATOR,
) -> str:
    """Join the selected chunk texts with an explicit passage separator."""
    return separator.join(select_context_chunks(matches, max_context_chars))
