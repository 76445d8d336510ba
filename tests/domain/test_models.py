from __future__ import annotations

import pytest

from domain.errors import InvalidConfiguration
from domain.models import (
    ChildSpec,
    Constraint,
    ConstraintMode,
    DesignSize,
    LayoutInstruction,
    LayoutReport,
    PlacedRect,
    ScaleSet,
    ScalingMode,
    SceneDocument,
    Size,
)


def test_child_spec_defaults() -> None:
    spec = ChildSpec()

    assert (spec.design_x, spec.design_y, spec.design_width, spec.design_height) == (0, 0, 0, 0)
    assert spec.z_depth == 0.0
    assert spec.width_scaling_mode is ScalingMode.VIRTUAL_DESIGN
    assert spec.height_scaling_mode is ScalingMode.VIRTUAL_DESIGN
    assert spec.x_scaling_mode is ScalingMode.VIRTUAL_DESIGN
    assert spec.y_scaling_mode is ScalingMode.VIRTUAL_DESIGN


def test_child_spec_accepts_mode_numbers_and_names() -> None:
    spec = ChildSpec(
        width_scaling_mode=1,
        height_scaling_mode="stretch_design",
        x_scaling_mode="Virtual-Design",
        y_scaling_mode="1",
    )

    assert spec.width_scaling_mode is ScalingMode.STRETCH_DESIGN
    assert spec.height_scaling_mode is ScalingMode.STRETCH_DESIGN
    assert spec.x_scaling_mode is ScalingMode.VIRTUAL_DESIGN
    assert spec.y_scaling_mode is ScalingMode.STRETCH_DESIGN


def test_child_spec_accepts_camel_case_attribute_names() -> None:
    spec = ChildSpec.model_validate(
        {"designX": 3, "designY": 4, "designWidth": 5, "designHeight": 6, "zDepth": 2.5}
    )

    assert (spec.design_x, spec.design_y, spec.design_width, spec.design_height) == (3, 4, 5, 6)
    assert spec.z_depth == 2.5


@pytest.mark.parametrize(
    "overrides",
    [
        {"design_width": -1},
        {"design_height": -5},
        {"width_scaling_mode": 2},
        {"x_scaling_mode": "sideways"},
        {"z_depth": float("nan")},
        {"unknown_field": 1},
    ],
)
def test_child_spec_rejects_invalid_configuration(overrides: dict) -> None:
    with pytest.raises(InvalidConfiguration):
        ChildSpec(**overrides)


def test_child_spec_setters_are_validated() -> None:
    spec = ChildSpec(design_width=10)
    spec.design_width = 20
    spec.y_scaling_mode = "stretch_design"

    assert spec.design_width == 20
    assert spec.y_scaling_mode is ScalingMode.STRETCH_DESIGN
    with pytest.raises(InvalidConfiguration):
        spec.design_height = -1
    with pytest.raises(InvalidConfiguration):
        spec.height_scaling_mode = 5


def test_design_size_rejects_negative_dimensions() -> None:
    with pytest.raises(InvalidConfiguration):
        DesignSize(design_width=-1, design_height=10)


def test_design_size_is_immutable() -> None:
    design = DesignSize(design_width=100, design_height=100)

    with pytest.raises(InvalidConfiguration):
        design.design_width = 50


def test_invalid_configuration_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        DesignSize(design_width=-1)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("exact:200", Constraint.exact(200)),
        ("EXACT: 12", Constraint.exact(12)),
        ("at_most:300", Constraint.at_most(300)),
        ("at-most:0", Constraint.at_most(0)),
        ("unspecified", Constraint.unspecified()),
        (" Unspecified ", Constraint.unspecified()),
    ],
)
def test_constraint_parse(raw: str, expected: Constraint) -> None:
    assert Constraint.parse(raw) == expected


@pytest.mark.parametrize(
    "raw", ["", "exact", "exact:", "exact:abc", "wrap:10", "unspecified:5", "at_most:-3"]
)
def test_constraint_parse_rejects_malformed_text(raw: str) -> None:
    with pytest.raises(InvalidConfiguration):
        Constraint.parse(raw)


def test_constraint_rejects_negative_pixels() -> None:
    with pytest.raises(InvalidConfiguration):
        Constraint.exact(-1)


def test_constraint_text_form() -> None:
    assert str(Constraint.exact(200)) == "exact:200"
    assert str(Constraint.at_most(5)) == "at_most:5"
    assert str(Constraint.unspecified()) == "unspecified"
    assert Constraint.unspecified().mode is ConstraintMode.UNSPECIFIED


def test_scene_document_rejects_duplicate_child_ids() -> None:
    payload = {
        "design_width": 10,
        "design_height": 10,
        "children": [{"id": "a"}, {"id": "a", "layout": {"design_width": 1}}],
    }

    with pytest.raises(InvalidConfiguration, match="Duplicate child id"):
        SceneDocument.model_validate(payload)


def test_scene_document_rejects_invalid_child_layout() -> None:
    payload = {"children": [{"id": "a", "layout": {"width_scaling_mode": 9}}]}

    with pytest.raises(InvalidConfiguration):
        SceneDocument.model_validate(payload)


def test_scene_document_design_size() -> None:
    scene = SceneDocument.model_validate({"designWidth": 320, "designHeight": 180})

    assert scene.design == DesignSize(design_width=320, design_height=180)
    assert scene.children == []


def test_placed_rect_dimensions() -> None:
    rect = PlacedRect(left=80, top=30, right=130, bottom=90)

    assert (rect.width, rect.height) == (50, 60)
    assert rect.size == Size(50, 60)


def test_layout_report_to_dict() -> None:
    report = LayoutReport(
        width_constraint=Constraint.exact(200),
        height_constraint=Constraint.unspecified(),
        size=Size(200, 100),
        scales=ScaleSet(2.0, 2.0, 2.0, 2.0, 0, 0),
        placements=[LayoutInstruction("a", PlacedRect(0, 0, 10, 10), z_depth=1.0)],
        skipped=["b"],
    )

    payload = report.to_dict()

    assert payload["constraints"] == {"width": "exact:200", "height": "unspecified"}
    assert payload["size"] == {"width": 200, "height": 100}
    assert payload["scales"]["virtual_x"] == 2.0
    assert payload["placements"] == [
        {"id": "a", "z_depth": 1.0, "left": 0, "top": 0, "right": 10, "bottom": 10}
    ]
    assert payload["skipped"] == ["b"]
