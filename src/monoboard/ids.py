"""Identifier and creation-order generation."""

import uuid


def new_id() -> str:
    """Return a fresh, globally unique identifier."""
    return str(uuid.uuid4())


def max_seq(values) -> int | None:
    """Find the highest creation sequence number, or None if empty."""
    highest = None
    for value in values:
        if highest is None or value > highest:
            highest = value
    return highest


def next_seq(current_max: int | None) -> int:
    """Return the sequence number after current_max.

    - If None, returns 1
    - Otherwise current_max + 1
    """
    if current_max is None:
        return 1
    return current_max + 1
