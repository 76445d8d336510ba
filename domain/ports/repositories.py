from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from domain.models import LayoutReport, SceneDocument


class SceneRepository(Protocol):
    def load_all(self, directory: Path) -> Sequence[SceneDocument]: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, SceneDocument]]: ...

    def load_by_path(self, path: Path) -> SceneDocument: ...


class ReportRepository(Protocol):
    def save(self, report: LayoutReport, path: Path) -> None: ...
