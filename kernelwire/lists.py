"""Search helpers over sequences."""

from __future__ import annotations

from typing import Callable, Iterable, TypeVar

T = TypeVar("T")
P = TypeVar("P")


def find_with_param(
    items: Iterable[T], compare: Callable[[T, P], bool], param: P
) -> T | None:
    """Return the first item for which ``compare(item, param)`` holds, else ``None``."""
    return next((item for item in items if compare(item, param)), None)