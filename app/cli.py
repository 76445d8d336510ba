from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from adapters.filesystem.report_repository import FileSystemReportRepository
from adapters.filesystem.scene_repository import FileSystemSceneRepository
from adapters.layout.canvas import CanvasLayoutEngine
from app.config import AppSettings, load_settings
from domain.errors import LayoutError
from domain.models import Constraint, LayoutReport
from domain.services.build_layout_report import build_layout_report

app = typer.Typer(no_args_is_help=True)
console = Console()
logger = logging.getLogger(__name__)


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _settings(config_path: Optional[Path]) -> AppSettings:
    settings = load_settings(config_path)
    configure_logging(settings.layout.log_level)
    return settings


def _constraints(
    settings: AppSettings, width: Optional[str], height: Optional[str]
) -> tuple[Constraint, Constraint]:
    width_constraint = Constraint.parse(width) if width else settings.layout.width_constraint()
    height_constraint = Constraint.parse(height) if height else settings.layout.height_constraint()
    return width_constraint, height_constraint


def _run_scene(path: Path, width: Constraint, height: Constraint) -> LayoutReport:
    scene = FileSystemSceneRepository().load_by_path(path)
    engine = CanvasLayoutEngine.from_scene(scene)
    report = build_layout_report(engine, width, height, skipped=engine.skipped_children())
    logger.info("Laid out %s: %sx%s", path.name, report.size.width, report.size.height)
    return report


def _print_report(title: str, report: LayoutReport) -> None:
    scales = report.scales
    console.print(
        f"[bold]{title}[/] {report.width_constraint} x {report.height_constraint} -> "
        f"{report.size.width}x{report.size.height}"
    )
    console.print(
        f"stretch=({scales.stretch_x:g}, {scales.stretch_y:g}) virtual={scales.virtual_x:g} "
        f"padding=({scales.padding_x}, {scales.padding_y})"
    )
    table = Table("id", "z", "left", "top", "right", "bottom", "width", "height")
    for placement in report.placements:
        rect = placement.rect
        table.add_row(
            placement.child_id,
            f"{placement.z_depth:g}",
            str(rect.left),
            str(rect.top),
            str(rect.right),
            str(rect.bottom),
            str(rect.width),
            str(rect.height),
        )
    console.print(table)
    if report.skipped:
        console.print(f"[yellow]Skipped without layout data:[/] {', '.join(report.skipped)}")


@app.command("measure")
def measure(
    scene_path: Path = typer.Argument(..., help="Scene file (.json, .yaml or .yml)."),
    width: Optional[str] = typer.Option(
        None, "--width", "-w", help="Width constraint, e.g. exact:200, at_most:300, unspecified.",
    ),
    height: Optional[str] = typer.Option(
        None, "--height", "-h", help="Height constraint, e.g. exact:200, at_most:300, unspecified.",
    ),
    output: Optional[Path] = typer.Option(None, help="Write the layout report as JSON."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    try:
        settings = _settings(config)
        width_constraint, height_constraint = _constraints(settings, width, height)
        report = _run_scene(scene_path, width_constraint, height_constraint)
    except (LayoutError, ValidationError, FileNotFoundError) as exc:
        console.print(f"[red]Layout failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    _print_report(scene_path.name, report)
    if output is not None:
        FileSystemReportRepository().save(report, output)
        console.print(f"[green]Wrote[/] {output}")


@app.command("batch")
def batch(
    input_dir: Optional[Path] = typer.Option(None, help="Directory with scene files."),
    output_dir: Optional[Path] = typer.Option(None, help="Directory to write layout reports."),
    width: Optional[str] = typer.Option(None, "--width", "-w", help="Width constraint."),
    height: Optional[str] = typer.Option(None, "--height", "-h", help="Height constraint."),
    config: Optional[Path] = typer.Option(None, help="YAML settings file."),
) -> None:
    try:
        settings = _settings(config)
        width_constraint, height_constraint = _constraints(settings, width, height)
    except (LayoutError, ValidationError, FileNotFoundError) as exc:
        console.print(f"[red]Invalid configuration:[/] {exc}")
        raise typer.Exit(code=1) from exc

    source_dir = input_dir or settings.layout.scene_dir
    target_dir = output_dir or settings.layout.report_dir
    scene_repo = FileSystemSceneRepository()
    report_repo = FileSystemReportRepository()

    try:
        pairs = scene_repo.load_all_with_paths(source_dir)
    except LayoutError as exc:
        console.print(f"[red]Invalid scene:[/] {exc}")
        raise typer.Exit(code=1) from exc
    if not pairs:
        console.print(f"[yellow]No scene files found in {source_dir}[/]")
        raise typer.Exit(code=0)

    target_dir.mkdir(parents=True, exist_ok=True)
    for path, scene in pairs:
        engine = CanvasLayoutEngine.from_scene(scene)
        report = build_layout_report(
            engine, width_constraint, height_constraint, skipped=engine.skipped_children()
        )
        target_path = target_dir / f"{path.stem}.layout.json"
        report_repo.save(report, target_path)
        console.print(f"[green]Wrote[/] {target_path}")


@app.command("validate")
def validate(scene_path: Path = typer.Argument(..., help="Scene file to validate.")) -> None:
    try:
        scene = FileSystemSceneRepository().load_by_path(scene_path)
    except LayoutError as exc:
        console.print(f"[red]Validation failed:[/] {exc}")
        raise typer.Exit(code=1) from exc
    participating = sum(1 for child in scene.children if child.layout is not None)
    console.print(
        f"[green]Valid scene:[/] {scene_path} "
        f"({scene.design_width}x{scene.design_height}, {participating}/{len(scene.children)} "
        "children with layout data)"
    )


if __name__ == "__main__":
    app()
