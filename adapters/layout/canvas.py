from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from domain.errors import InvalidConfiguration
from domain.models import (
    ChildSpec,
    Constraint,
    DesignSize,
    LayoutInstruction,
    MeasureResult,
    PlacedRect,
    ScaleSet,
    SceneDocument,
    Size,
)
from domain.ports.layout import LayoutEngine
from domain.services.order_by_depth import order_by_depth
from domain.services.place_children import aggregate_extent, participants, place_child
from domain.services.resolve_scales import resolve_scales

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Pass:
    scales: ScaleSet
    size: Size
    rects: Dict[str, PlacedRect]
    depths: List[Tuple[str, float]]


class CanvasLayoutEngine(LayoutEngine):
    """Container that maps design geometry of its children onto a concrete pixel box.

    Children are attached with an id and arbitrary layout data. Only children whose layout data is
    a :class:`ChildSpec` take part in measurement and layout.
    """

    def __init__(self, design: DesignSize | None = None) -> None:
        self.design = design or DesignSize()
        self._children: List[Tuple[str, object]] = []
        self._last_pass: Optional[_Pass] = None

    @classmethod
    def from_scene(cls, scene: SceneDocument) -> CanvasLayoutEngine:
        engine = cls(scene.design)
        for child in scene.children:
            engine.add_child(child.id, child.layout)
        return engine

    @property
    def children(self) -> List[str]:
        return [child_id for child_id, _ in self._children]

    @property
    def last_scales(self) -> ScaleSet | None:
        return self._last_pass.scales if self._last_pass else None

    def add_child(self, child_id: str, layout_data: object = None) -> None:
        if any(existing == child_id for existing, _ in self._children):
            msg = f"Duplicate child id: {child_id}"
            raise InvalidConfiguration(msg)
        self._children.append((child_id, layout_data))
        self._last_pass = None

    def remove_child(self, child_id: str) -> None:
        self._children = [entry for entry in self._children if entry[0] != child_id]
        self._last_pass = None

    def child_spec(self, child_id: str) -> ChildSpec | None:
        for existing, layout_data in self._children:
            if existing == child_id:
                return layout_data if isinstance(layout_data, ChildSpec) else None
        raise KeyError(child_id)

    def skipped_children(self) -> List[str]:
        placed = {child_id for child_id, _ in participants(self._children)}
        return [child_id for child_id in self.children if child_id not in placed]

    def measure(self, width_constraint: Constraint, height_constraint: Constraint) -> MeasureResult:
        layout_pass = self._run_pass(width_constraint, height_constraint)
        return MeasureResult(
            size=layout_pass.size,
            scales=layout_pass.scales,
            child_sizes={child_id: rect.size for child_id, rect in layout_pass.rects.items()},
        )

    def layout(self, left: int, top: int, right: int, bottom: int) -> List[LayoutInstruction]:
        layout_pass = self._last_pass
        if layout_pass is None:
            layout_pass = self._run_pass(
                Constraint.exact(max(0, right - left)), Constraint.exact(max(0, bottom - top))
            )
        depth_by_id = dict(layout_pass.depths)
        instructions = [
            LayoutInstruction(
                child_id=child_id,
                rect=layout_pass.rects[child_id],
                z_depth=depth_by_id[child_id],
            )
            for child_id in order_by_depth(layout_pass.depths)
        ]
        logger.debug("Laid out %d children in depth order", len(instructions))
        return instructions

    def _run_pass(self, width_constraint: Constraint, height_constraint: Constraint) -> _Pass:
        # Every pass starts from scratch; nothing carries over from the previous one.
        resolution = resolve_scales(width_constraint, height_constraint, self.design)
        scales = resolution.scales
        active = participants(self._children)
        rects = {child_id: place_child(spec, scales) for child_id, spec in active}
        size = resolution.container_size(aggregate_extent(rects.values()))
        layout_pass = _Pass(
            scales=scales,
            size=size,
            rects=rects,
            depths=[(child_id, spec.z_depth) for child_id, spec in active],
        )
        self._last_pass = layout_pass
        logger.debug(
            "Measured %s x %s for design %sx%s: size=%s scales=%s children=%d",
            width_constraint,
            height_constraint,
            self.design.design_width,
            self.design.design_height,
            size,
            scales,
            len(rects),
        )
        return layout_pass
