from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import List

from adapters.filesystem.document_utils import SCENE_SUFFIXES, load_document
from domain.models import SceneDocument
from domain.ports.repositories import SceneRepository


class FileSystemSceneRepository(SceneRepository):
    def load_all(self, directory: Path) -> List[SceneDocument]:
        return [document for _, document in self.load_all_with_paths(directory)]

    def load_all_with_paths(self, directory: Path) -> List[tuple[Path, SceneDocument]]:
        return [(path, self.load_by_path(path)) for path in sorted(self._iter_paths(directory))]

    def load_by_path(self, path: Path) -> SceneDocument:
        return SceneDocument.model_validate(load_document(path))

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        if not directory.is_dir():
            return
        for path in directory.iterdir():
            if path.is_file() and path.suffix.lower() in SCENE_SUFFIXES:
                yield path
