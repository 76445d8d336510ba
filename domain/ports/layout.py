from __future__ import annotations

from typing import List, Protocol

from domain.models import Constraint, LayoutInstruction, MeasureResult


class LayoutEngine(Protocol):
    def measure(self, width_constraint: Constraint, height_constraint: Constraint) -> MeasureResult:
        ...

    def layout(self, left: int, top: int, right: int, bottom: int) -> List[LayoutInstruction]:
        ...
