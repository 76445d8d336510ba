from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

from adapters.layout.canvas import CanvasLayoutEngine
from domain.models import ChildSpec, DesignSize


def _clear_canvas_env() -> None:
    for key in list(os.environ):
        if key.startswith("CANVAS_"):
            os.environ.pop(key, None)


_clear_canvas_env()


@pytest.fixture(autouse=True)
def clear_canvas_env() -> Generator[None, None, None]:
    _clear_canvas_env()
    yield
    _clear_canvas_env()


@pytest.fixture
def child_spec_factory() -> Callable[..., ChildSpec]:
    def _factory(**overrides: object) -> ChildSpec:
        return ChildSpec(**overrides)

    return _factory


@pytest.fixture
def engine_factory() -> Callable[..., CanvasLayoutEngine]:
    def _factory(design_width: int = 100, design_height: int = 100) -> CanvasLayoutEngine:
        return CanvasLayoutEngine(
            DesignSize(design_width=design_width, design_height=design_height)
        )

    return _factory
