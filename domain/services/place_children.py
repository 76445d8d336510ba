from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import List, Optional, Tuple, TypeVar

from domain.models import ChildSpec, PlacedRect, ScaleSet, ScalingMode, Size

ChildId = TypeVar("ChildId")


def _length(mode: ScalingMode, stretch: float, virtual: float, design: int) -> int:
    if mode is ScalingMode.STRETCH_DESIGN:
        return round(stretch * design)
    return round(virtual * design)


def _offset(mode: ScalingMode, stretch: float, virtual: float, padding: int, design: int) -> int:
    # Stretch placement ignores the virtual window centering.
    if mode is ScalingMode.STRETCH_DESIGN:
        return round(stretch * design)
    return round(virtual * design) + padding


def place_child(spec: ChildSpec, scales: ScaleSet) -> PlacedRect:
    width = _length(spec.width_scaling_mode, scales.stretch_x, scales.virtual_x, spec.design_width)
    height = _length(
        spec.height_scaling_mode, scales.stretch_y, scales.virtual_y, spec.design_height
    )
    left = _offset(
        spec.x_scaling_mode, scales.stretch_x, scales.virtual_x, scales.padding_x, spec.design_x
    )
    top = _offset(
        spec.y_scaling_mode, scales.stretch_y, scales.virtual_y, scales.padding_y, spec.design_y
    )
    return PlacedRect(left=left, top=top, right=left + width, bottom=top + height)


def aggregate_extent(rects: Iterable[PlacedRect]) -> Size:
    """Bounding extent of placed children, measured from the container origin."""
    right = 0
    bottom = 0
    for rect in rects:
        right = max(right, rect.right)
        bottom = max(bottom, rect.bottom)
    return Size(right, bottom)


def participants(
    children: Sequence[Tuple[ChildId, object]],
) -> List[Tuple[ChildId, ChildSpec]]:
    """Children that carry a ChildSpec, in insertion order. Anything else sits the pass out."""
    selected: List[Tuple[ChildId, ChildSpec]] = []
    for child_id, layout_data in children:
        spec = _as_child_spec(layout_data)
        if spec is None:
            continue
        selected.append((child_id, spec))
    return selected


def _as_child_spec(layout_data: object) -> Optional[ChildSpec]:
    return layout_data if isinstance(layout_data, ChildSpec) else None
