from __future__ import annotations

from pathlib import Path

from filelock import FileLock

from adapters.filesystem.document_utils import write_json_atomic
from domain.models import LayoutReport
from domain.ports.repositories import ReportRepository


class FileSystemReportRepository(ReportRepository):
    def save(self, report: LayoutReport, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        lock_path = path.with_suffix(f"{path.suffix}.lock")
        with FileLock(str(lock_path)):
            write_json_atomic(path, report.to_dict())
