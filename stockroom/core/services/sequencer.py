"""Human-readable identifier sequences (SKUs, PO numbers)."""

import re
from collections.abc import Iterable


def parse_sequence_number(prefix: str, identifier: str) -> int | None:
    """Return the numeric suffix of ``PREFIX-NNNN``, or None if it does not match."""
    match = re.fullmatch(rf"{re.escape(prefix)}-(\d+)", identifier or "")
    if match is None:
        return None
    return int(match.group(1))


def next_id(prefix: str, existing_ids: Iterable[str], width: int = 4) -> str:
    """Next identifier after the highest existing ``PREFIX-NNNN``.

    Gaps are not reused: ``PRD-0001, PRD-0003`` yields ``PRD-0004``. Numbers
    wider than ``width`` keep all their digits.

    This is best-effort. A concurrent writer can claim the same number, so
    callers rely on the store's unique constraint and retry on conflict.
    """
    highest = 0
    for identifier in existing_ids:
        number = parse_sequence_number(prefix, identifier)
        if number is not None and number > highest:
            highest = number
    return f"{prefix}-{highest + 1:0{width}d}"
