from __future__ import annotations

from typing import Sequence, TypeVar

A = TypeVar("A")
B = TypeVar("B")


def round_robin(items: Sequence[A], targets: Sequence[B]) -> list[tuple[A, B]]:
    """Assign items to targets cyclically, in input order, starting at targets[0]."""
    if not targets:
        return []
    return [(item, targets[idx % len(targets)]) for idx, item in enumerate(items)]
