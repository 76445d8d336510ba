from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from domain.models import Constraint, ConstraintMode, DesignSize, ScaleSet, Size


@dataclass(frozen=True)
class SizeRule:
    """Container size on one axis.

    ``value`` is used when set, otherwise the children's bounding extent is taken. ``cap`` clamps
    the result when set.
    """

    value: Optional[int] = None
    cap: Optional[int] = None

    def resolve(self, extent: int) -> int:
        size = self.value if self.value is not None else extent
        if self.cap is not None:
            size = min(self.cap, size)
        return size

    @property
    def uses_extent(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class ScaleResolution:
    scales: ScaleSet
    width_rule: SizeRule
    height_rule: SizeRule

    @property
    def needs_extent(self) -> bool:
        return self.width_rule.uses_extent or self.height_rule.uses_extent

    def container_size(self, extent: Size) -> Size:
        return Size(self.width_rule.resolve(extent.width), self.height_rule.resolve(extent.height))


Resolver = Callable[[int, int, int, int], ScaleResolution]


def _scale(pixels: int, design: int) -> float:
    return pixels / float(design) if design != 0 else 0.0


def _project(pixels: int, from_design: int, to_design: int) -> int:
    # Length on the other axis that keeps the design aspect ratio.
    if from_design == 0 or to_design == 0:
        return 0
    return int(pixels / float(from_design) * to_design)


def _pad(box: int, scale: float, design: int) -> int:
    return int((box - scale * design) / 2)


def _force_zero(stretch_x: float, stretch_y: float) -> Tuple[float, float]:
    if stretch_x == 0 or stretch_y == 0:
        return 0.0, 0.0
    return stretch_x, stretch_y


def _two_axis(
    box_w: int,
    box_h: int,
    stretch_x: float,
    stretch_y: float,
    design_w: int,
    design_h: int,
    pad_x: bool = True,
    pad_y: bool = True,
) -> ScaleSet:
    stretch_x, stretch_y = _force_zero(stretch_x, stretch_y)
    virtual = min(stretch_x, stretch_y)
    return ScaleSet(
        stretch_x=stretch_x,
        stretch_y=stretch_y,
        virtual_x=virtual,
        virtual_y=virtual,
        padding_x=_pad(box_w, virtual, design_w) if pad_x else 0,
        padding_y=_pad(box_h, virtual, design_h) if pad_y else 0,
    )


def _uniform(scale: float, padding_x: int, padding_y: int) -> ScaleSet:
    return ScaleSet(
        stretch_x=scale,
        stretch_y=scale,
        virtual_x=scale,
        virtual_y=scale,
        padding_x=padding_x,
        padding_y=padding_y,
    )


def _exact_exact(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    scales = _two_axis(p_w, p_h, _scale(p_w, d_w), _scale(p_h, d_h), d_w, d_h)
    return ScaleResolution(scales, SizeRule(value=p_w), SizeRule(value=p_h))


def _exact_at_most(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    temp_h = _project(p_w, d_w, d_h)
    box_h = min(temp_h, p_h)
    scales = _two_axis(
        p_w, box_h, _scale(p_w, d_w), _scale(box_h, d_h), d_w, d_h, pad_y=temp_h != 0
    )
    return ScaleResolution(
        scales, SizeRule(value=p_w), SizeRule(value=temp_h or None, cap=p_h)
    )


def _at_most_exact(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    temp_w = _project(p_h, d_h, d_w)
    box_w = min(temp_w, p_w)
    scales = _two_axis(
        box_w, p_h, _scale(box_w, d_w), _scale(p_h, d_h), d_w, d_h, pad_x=temp_w != 0
    )
    return ScaleResolution(
        scales, SizeRule(value=temp_w or None, cap=p_w), SizeRule(value=p_h)
    )


def _exact_unspecified(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    scale = _scale(p_w, d_w)
    scales = _uniform(scale, _pad(p_w, scale, d_w), 0)
    return ScaleResolution(
        scales, SizeRule(value=p_w), SizeRule(value=_project(p_w, d_w, d_h) or None)
    )


def _unspecified_exact(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    scale = _scale(p_h, d_h)
    scales = _uniform(scale, 0, _pad(p_h, scale, d_h))
    return ScaleResolution(
        scales, SizeRule(value=_project(p_h, d_h, d_w) or None), SizeRule(value=p_h)
    )


def _at_most_at_most(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    # Never grows past the design size on either axis.
    box_w = min(p_w, d_w)
    box_h = min(p_h, d_h)
    scales = _two_axis(box_w, box_h, _scale(box_w, d_w), _scale(box_h, d_h), d_w, d_h)
    return ScaleResolution(scales, SizeRule(value=box_w), SizeRule(value=box_h))


def _at_most_unspecified(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    box_w = min(p_w, d_w)
    scale = _scale(box_w, d_w)
    scales = _uniform(scale, _pad(box_w, scale, d_w), 0)
    return ScaleResolution(
        scales, SizeRule(value=box_w), SizeRule(value=_project(box_w, d_w, d_h) or None)
    )


def _unspecified_at_most(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    box_h = min(p_h, d_h)
    scale = _scale(box_h, d_h)
    scales = _uniform(scale, 0, _pad(box_h, scale, d_h))
    return ScaleResolution(
        scales, SizeRule(value=_project(box_h, d_h, d_w) or None), SizeRule(value=box_h)
    )


def _unspecified_unspecified(p_w: int, p_h: int, d_w: int, d_h: int) -> ScaleResolution:
    # Children keep their raw design coordinates.
    return ScaleResolution(_uniform(1.0, 0, 0), SizeRule(value=d_w), SizeRule(value=d_h))


RESOLVERS: Dict[Tuple[ConstraintMode, ConstraintMode], Resolver] = {
    (ConstraintMode.EXACT, ConstraintMode.EXACT): _exact_exact,
    (ConstraintMode.EXACT, ConstraintMode.AT_MOST): _exact_at_most,
    (ConstraintMode.EXACT, ConstraintMode.UNSPECIFIED): _exact_unspecified,
    (ConstraintMode.AT_MOST, ConstraintMode.EXACT): _at_most_exact,
    (ConstraintMode.AT_MOST, ConstraintMode.AT_MOST): _at_most_at_most,
    (ConstraintMode.AT_MOST, ConstraintMode.UNSPECIFIED): _at_most_unspecified,
    (ConstraintMode.UNSPECIFIED, ConstraintMode.EXACT): _unspecified_exact,
    (ConstraintMode.UNSPECIFIED, ConstraintMode.AT_MOST): _unspecified_at_most,
    (ConstraintMode.UNSPECIFIED, ConstraintMode.UNSPECIFIED): _unspecified_unspecified,
}


def resolve_scales(
    width_constraint: Constraint, height_constraint: Constraint, design: DesignSize
) -> ScaleResolution:
    resolver = RESOLVERS[(width_constraint.mode, height_constraint.mode)]
    return resolver(
        width_constraint.pixels,
        height_constraint.pixels,
        design.design_width,
        design.design_height,
    )
