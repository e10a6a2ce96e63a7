"""Shared validation helpers for frozen dataclass models.

Private module. Used by ``__post_init__`` methods in sibling model modules.
"""

from __future__ import annotations

from typing import Any


def validate_instance(value: Any, expected: type, name: str) -> None:
    """Raise ``TypeError`` if *value* is not an instance of *expected*."""
    if not isinstance(value, expected):
        article = "an" if expected.__name__[0] in "AEIOUaeiou" else "a"
        raise TypeError(f"{name} must be {article} {expected.__name__}, got {type(value).__name__}")


def validate_timestamp(value: Any, name: str) -> None:
    """Raise if *value* is not a non-negative ``int`` (``bool`` excluded)."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative")


def validate_str_not_empty(value: Any, name: str) -> None:
    """Raise if *value* is not a non-empty ``str``."""
    validate_instance(value, str, name)
    if not value:
        raise ValueError(f"{name} must not be empty")


def freeze_tags(tags: Any, name: str) -> tuple[tuple[str, ...], ...]:
    """Convert a list of tag lists into a tuple of string tuples.

    Raises:
        TypeError: If *tags* is not a list/tuple of lists/tuples of ``str``.
    """
    if not isinstance(tags, list | tuple):
        raise TypeError(f"{name} must be a list, got {type(tags).__name__}")
    frozen = []
    for tag in tags:
        if not isinstance(tag, list | tuple):
            raise TypeError(f"{name} entries must be lists, got {type(tag).__name__}")
        for value in tag:
            validate_instance(value, str, name)
        frozen.append(tuple(tag))
    return tuple(frozen)
