"""Typer CLI entrypoint for oozie-sync."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.table import Table

from .config import ConfigLoader, SyncConfig, require_source_url
from .engine import HttpRecordSource, SnapshotRecordSource
from .engine.records import format_rfc3339
from .errors import SyncError
from .infra import prepare_output_dir
from .logging_conf import configure_logging
from .orchestrator import PassResult, run_pass

USAGE = "usage: oozie-sync [SNAPSHOT_FILE] OUTPUT_DIR"
EXIT_FAILURE = 1
EXIT_USAGE = 2

app = typer.Typer(
    help="Incrementally dump Oozie workflow records into timestamped CSV files.",
    add_completion=False,
    rich_markup_mode=None,
)

console = Console()
err_console = Console(stderr=True)


def _fail(message: str, code: int) -> typer.Exit:
    err_console.print(message, style="red", markup=False, highlight=False)
    return typer.Exit(code=code)


def build_source(
    paths: List[Path], config: SyncConfig
) -> tuple[HttpRecordSource | SnapshotRecordSource, Path]:
    """Map the positional arguments onto a record source and an output dir."""

    if len(paths) == 2:
        snapshot, output_dir = paths
        return SnapshotRecordSource(snapshot), output_dir
    base_url = require_source_url(config)
    return (
        HttpRecordSource(
            base_url, jobs_path=config.jobs_path, timeout=config.request_timeout
        ),
        paths[0],
    )


def _render_result_table(result: PassResult) -> Table:
    table = Table(title="Sync result", box=box.SIMPLE_HEAD, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", overflow="fold")
    table.add_row("artifact", str(result.artifact))
    table.add_row("fetched", str(result.fetched))
    table.add_row("written", str(result.written))
    table.add_row("name mismatch", str(result.stats.name_mismatch))
    table.add_row("no last-modified", str(result.stats.missing_last_modified))
    table.add_row("not newer", str(result.stats.not_newer))
    table.add_row("previous watermark", format_rfc3339(result.previous_watermark))
    table.add_row("watermark", format_rfc3339(result.watermark))
    return table


@app.command()
def sync(
    paths: Optional[List[Path]] = typer.Argument(
        None,
        metavar="[SNAPSHOT_FILE] OUTPUT_DIR",
        help="Output directory, optionally preceded by a saved /v1/jobs snapshot.",
        show_default=False,
    ),
    config_path: Optional[Path] = typer.Option(
        None,
        "--config",
        help="YAML or JSON configuration file.",
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging."),
) -> None:
    """Run one incremental sync pass."""

    if not paths or len(paths) > 2:
        raise _fail(USAGE, EXIT_USAGE)
    try:
        config = ConfigLoader().load(config_path)
        configure_logging(verbose=verbose, log_file=config.log_file)
        source, output_dir = build_source(paths, config)
        with source:
            prepare_output_dir(output_dir)
            result = run_pass(
                source,
                output_dir,
                name_pattern=config.name_pattern,
                marker_name=config.marker_name,
            )
    except SyncError as exc:
        raise _fail(f"oozie-sync: {exc}", EXIT_FAILURE) from exc
    console.print(_render_result_table(result))


def cli() -> None:
    app()


if __name__ == "__main__":  # pragma: no cover
    cli()
