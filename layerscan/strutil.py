"""Helpers for comparing lists of strings."""

from __future__ import annotations

from collections.abc import Iterable


def compare_string_lists(x: Iterable[str], y: Iterable[str]) -> list[str]:
    """Return the distinct strings of ``x`` absent from ``y``, in ``x`` order."""
    seen = set(y)
    diff = []
    for item in x:
        if item in seen:
            continue
        diff.append(item)
        seen.add(item)
    return diff


def compare_string_lists_in_both(x: Iterable[str], y: Iterable[str]) -> list[str]:
    """Return the distinct strings present in both lists, in ``x`` order."""
    remaining = set(y)
    both = []
    for item in x:
        if item in remaining:
            both.append(item)
            remaining.discard(item)
    return both