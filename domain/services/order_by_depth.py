from __future__ import annotations

from collections.abc import Iterable
from typing import List, Tuple, TypeVar

ChildId = TypeVar("ChildId")


def order_by_depth(entries: Iterable[Tuple[ChildId, float]]) -> List[ChildId]:
    """Back-to-front paint order.

    Ascending by depth. ``sorted`` is stable, so children sharing a depth keep their input order
    and none of them is dropped. Later ids are painted over earlier ones.
    """
    return [child_id for child_id, _ in sorted(entries, key=lambda entry: entry[1])]
