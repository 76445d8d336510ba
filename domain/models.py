from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Set

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)

from domain.errors import InvalidConfiguration

REPORT_SCHEMA_VERSION = "1.0"


class ScalingMode(IntEnum):
    # Scale and place inside the letterboxed virtual window.
    VIRTUAL_DESIGN = 0
    # Scale and place against the raw container box.
    STRETCH_DESIGN = 1


class ConstraintMode(str, Enum):
    EXACT = "exact"
    AT_MOST = "at_most"
    UNSPECIFIED = "unspecified"


@dataclass(frozen=True)
class Constraint:
    mode: ConstraintMode
    pixels: int = 0

    def __post_init__(self) -> None:
        if self.pixels < 0:
            msg = f"Constraint pixels must be non-negative, got {self.pixels}"
            raise InvalidConfiguration(msg)

    @classmethod
    def exact(cls, pixels: int) -> Constraint:
        return cls(ConstraintMode.EXACT, pixels)

    @classmethod
    def at_most(cls, pixels: int) -> Constraint:
        return cls(ConstraintMode.AT_MOST, pixels)

    @classmethod
    def unspecified(cls) -> Constraint:
        return cls(ConstraintMode.UNSPECIFIED, 0)

    @classmethod
    def parse(cls, raw: str) -> Constraint:
        """Parse the text form used by config files and the CLI.

        Accepted forms are ``exact:<px>``, ``at_most:<px>`` (or ``at-most:<px>``) and
        ``unspecified``.
        """
        text = str(raw or "").strip().lower()
        if not text:
            msg = "Constraint must not be empty"
            raise InvalidConfiguration(msg)
        name, _, value = text.partition(":")
        try:
            mode = ConstraintMode(name.strip().replace("-", "_"))
        except ValueError as exc:
            msg = f"Unknown constraint mode in {raw!r}"
            raise InvalidConfiguration(msg) from exc
        if mode is ConstraintMode.UNSPECIFIED:
            if value.strip():
                msg = f"Unspecified constraint takes no pixel value: {raw!r}"
                raise InvalidConfiguration(msg)
            return cls.unspecified()
        try:
            pixels = int(value.strip())
        except ValueError as exc:
            msg = f"Constraint {raw!r} needs an integer pixel value"
            raise InvalidConfiguration(msg) from exc
        return cls(mode, pixels)

    def __str__(self) -> str:
        if self.mode is ConstraintMode.UNSPECIFIED:
            return self.mode.value
        return f"{self.mode.value}:{self.pixels}"


def _coerce_scaling_mode(value: object) -> object:
    if isinstance(value, str):
        key = value.strip().lower().replace("-", "_")
        if key.isdigit():
            return int(key)
        for mode in ScalingMode:
            if mode.name.lower() == key:
                return mode
        msg = f"Unknown scaling mode: {value!r}"
        raise ValueError(msg)
    return value


class _ConfigModel(BaseModel):
    """Configuration model that reports validation failures as InvalidConfiguration."""

    model_config = ConfigDict(validate_assignment=True, extra="forbid")

    def __init__(self, **data: Any) -> None:
        try:
            super().__init__(**data)
        except ValidationError as exc:
            raise InvalidConfiguration(str(exc)) from exc

    def __setattr__(self, name: str, value: Any) -> None:
        try:
            super().__setattr__(name, value)
        except ValidationError as exc:
            raise InvalidConfiguration(str(exc)) from exc

    @classmethod
    def model_validate(cls, obj: Any, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().model_validate(obj, *args, **kwargs)
        except ValidationError as exc:
            raise InvalidConfiguration(str(exc)) from exc


class DesignSize(_ConfigModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    design_width: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("design_width", "designWidth")
    )
    design_height: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("design_height", "designHeight")
    )


class ChildSpec(_ConfigModel):
    design_x: int = Field(default=0, validation_alias=AliasChoices("design_x", "designX"))
    design_y: int = Field(default=0, validation_alias=AliasChoices("design_y", "designY"))
    design_width: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("design_width", "designWidth")
    )
    design_height: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("design_height", "designHeight")
    )
    z_depth: float = Field(
        default=0.0, allow_inf_nan=False, validation_alias=AliasChoices("z_depth", "zDepth")
    )
    width_scaling_mode: ScalingMode = Field(
        default=ScalingMode.VIRTUAL_DESIGN,
        validation_alias=AliasChoices("width_scaling_mode", "widthScalingMode"),
    )
    height_scaling_mode: ScalingMode = Field(
        default=ScalingMode.VIRTUAL_DESIGN,
        validation_alias=AliasChoices("height_scaling_mode", "heightScalingMode"),
    )
    x_scaling_mode: ScalingMode = Field(
        default=ScalingMode.VIRTUAL_DESIGN,
        validation_alias=AliasChoices("x_scaling_mode", "xScalingMode"),
    )
    y_scaling_mode: ScalingMode = Field(
        default=ScalingMode.VIRTUAL_DESIGN,
        validation_alias=AliasChoices("y_scaling_mode", "yScalingMode"),
    )

    @field_validator(
        "width_scaling_mode",
        "height_scaling_mode",
        "x_scaling_mode",
        "y_scaling_mode",
        mode="before",
    )
    @classmethod
    def coerce_scaling_mode(cls, value: object) -> object:
        return _coerce_scaling_mode(value)


class SceneChild(_ConfigModel):
    id: str = Field(..., min_length=1)
    layout: Optional[ChildSpec] = None


class SceneDocument(_ConfigModel):
    design_width: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("design_width", "designWidth")
    )
    design_height: int = Field(
        default=0, ge=0, validation_alias=AliasChoices("design_height", "designHeight")
    )
    children: List[SceneChild] = Field(default_factory=list)

    @field_validator("children", mode="after")
    @classmethod
    def ensure_unique_child_ids(cls, children: List[SceneChild]) -> List[SceneChild]:
        seen: Set[str] = set()
        for child in children:
            if child.id in seen:
                msg = f"Duplicate child id found: {child.id}"
                raise ValueError(msg)
            seen.add(child.id)
        return children

    @property
    def design(self) -> DesignSize:
        return DesignSize(design_width=self.design_width, design_height=self.design_height)


@dataclass(frozen=True)
class Size:
    width: int
    height: int


@dataclass(frozen=True)
class ScaleSet:
    stretch_x: float
    stretch_y: float
    virtual_x: float
    virtual_y: float
    padding_x: int
    padding_y: int

    def to_dict(self) -> dict:
        return {
            "stretch_x": self.stretch_x,
            "stretch_y": self.stretch_y,
            "virtual_x": self.virtual_x,
            "virtual_y": self.virtual_y,
            "padding_x": self.padding_x,
            "padding_y": self.padding_y,
        }


@dataclass(frozen=True)
class PlacedRect:
    left: int
    top: int
    right: int
    bottom: int

    @property
    def width(self) -> int:
        return self.right - self.left

    @property
    def height(self) -> int:
        return self.bottom - self.top

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)


@dataclass(frozen=True)
class MeasureResult:
    size: Size
    scales: ScaleSet
    child_sizes: Dict[str, Size]


@dataclass(frozen=True)
class LayoutInstruction:
    child_id: str
    rect: PlacedRect
    z_depth: float
    bring_to_front: bool = True


@dataclass(frozen=True)
class LayoutReport:
    width_constraint: Constraint
    height_constraint: Constraint
    size: Size
    scales: ScaleSet
    placements: List[LayoutInstruction]
    skipped: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "schema_version": REPORT_SCHEMA_VERSION,
            "constraints": {
                "width": str(self.width_constraint),
                "height": str(self.height_constraint),
            },
            "size": {"width": self.size.width, "height": self.size.height},
            "scales": self.scales.to_dict(),
            "placements": [
                {
                    "id": placement.child_id,
                    "z_depth": placement.z_depth,
                    "left": placement.rect.left,
                    "top": placement.rect.top,
                    "right": placement.rect.right,
                    "bottom": placement.rect.bottom,
                }
                for placement in self.placements
            ],
            "skipped": list(self.skipped),
        }
