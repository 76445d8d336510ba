from __future__ import annotations

from collections.abc import Sequence

from domain.models import Constraint, LayoutReport
from domain.ports.layout import LayoutEngine


def build_layout_report(
    engine: LayoutEngine,
    width_constraint: Constraint,
    height_constraint: Constraint,
    skipped: Sequence[str] = (),
) -> LayoutReport:
    """Run one full pass (measure, then layout at the measured size) and collect the result."""
    measured = engine.measure(width_constraint, height_constraint)
    placements = engine.layout(0, 0, measured.size.width, measured.size.height)
    return LayoutReport(
        width_constraint=width_constraint,
        height_constraint=height_constraint,
        size=measured.size,
        scales=measured.scales,
        placements=placements,
        skipped=list(skipped),
    )
