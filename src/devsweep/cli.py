"""CLI interface for devsweep."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Any

import click

from devsweep import __version__
from devsweep.catalogue import SCAN_CATEGORIES
from devsweep.config import DEFAULT_MAX_DEPTH, DEFAULT_MIN_SIZE_MB, ConfigError, ScanConfig, SortKey
from devsweep.core.cleanup import CleanupMode
from devsweep.core.engine import SweepEngine
from devsweep.core.walker import ScanError
from devsweep.models.clean_result import CleanupResult
from devsweep.models.scan_result import Finding, ScanReport
from devsweep.settings import Settings
from devsweep.utils import bytes_to_human

_PROGRESS_WIDTH = 80


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _resolve(value: Any, saved: Any, default: Any) -> Any:
    """Pick the command-line value, else the saved setting, else the default."""
    if value is not None:
        return value
    return default if saved is None else saved


def _build_config(
    path: Path | None,
    max_depth: int | None,
    min_size: float | None,
    category: str | None,
    profile: str | None,
    ide: bool,
    sort: str | None,
) -> ScanConfig:
    settings = Settings.instance()
    return ScanConfig(
        root=path or Path.cwd(),
        max_depth=_resolve(max_depth, settings.get_int("scan.max_depth"), DEFAULT_MAX_DEPTH),
        min_size_mb=_resolve(min_size, settings.get_float("scan.min_size"), DEFAULT_MIN_SIZE_MB),
        category=category,
        profile=_resolve(profile, settings.get_str("scan.profile"), None),
        include_ide=ide,
        sort=_resolve(sort, settings.get_str("scan.sort"), SortKey.SIZE.value),
    )


def _cleanup_mode(clean: bool, yes: bool, dry_run: bool) -> CleanupMode | None:
    if dry_run:
        return CleanupMode.DRY_RUN
    if clean:
        return CleanupMode.NON_INTERACTIVE if yes else CleanupMode.INTERACTIVE
    return None


# ── progress ─────────────────────────────────────────────────────────────

def _show_progress(path: Path) -> None:
    text = f"Scanning: {str(path)[:_PROGRESS_WIDTH]}"
    click.echo(f"\r{text:<{_PROGRESS_WIDTH + 10}}", nl=False, err=True)


def _clear_progress() -> None:
    click.echo("\r" + " " * (_PROGRESS_WIDTH + 10) + "\r", nl=False, err=True)


# ── rendering ────────────────────────────────────────────────────────────

def _print_report(report: ScanReport) -> None:
    if not report.findings:
        click.echo("Nothing found above the size threshold. Your disk is clean!")
        return

    total = click.style(bytes_to_human(report.total_bytes), fg="green", bold=True)
    click.echo(f"Found {report.total_count} artifacts totaling {total}:\n")
    click.echo(f"  {'SIZE':>10}  {'CATEGORY':8s}  {'TYPE':28s}  PATH")
    click.echo("  " + "-" * 76)
    for f in report.findings:
        size_str = click.style(f"{bytes_to_human(f.size_bytes):>10}", fg="green")
        category = click.style(f"{f.category.value:8s}", fg="yellow" if f.is_ide else "cyan")
        click.echo(f"  {size_str}  {category}  {f.description:28s}  {f.path}")
    click.echo(
        f"\n  Total: {click.style(bytes_to_human(report.total_bytes), fg='green', bold=True)} "
        f"across {report.total_count} items"
    )


def _print_event(finding: Finding, status: str, detail: str) -> None:
    size = bytes_to_human(finding.size_bytes)
    match status:
        case "would_delete":
            click.echo(f"  Would delete: {finding.path} ({size})")
        case "skip_ide":
            click.echo(f"  {click.style('SKIP (IDE)', fg='yellow')}: {finding.path} — delete IDE caches manually")
        case "skipped":
            click.echo(f"    {click.style('·', fg='bright_black')} Skipped")
        case "deleted":
            click.echo(f"    {click.style('✓', fg='green')} Deleted {finding.path}")
        case "failed":
            click.echo(f"    {click.style('✗', fg='red')} Failed: {finding.path}: {detail}")


def _confirm_delete(finding: Finding) -> bool:
    answer = click.prompt(
        f"  Delete {finding.path} ({bytes_to_human(finding.size_bytes)})? [y/N]",
        default="",
        show_default=False,
        prompt_suffix=" ",
    )
    return answer.strip().lower() in ("y", "yes")


def _print_cleanup_summary(result: CleanupResult) -> None:
    if result.mode == CleanupMode.DRY_RUN.value:
        click.echo("\n(dry run — no files were deleted)")
        return
    freed = click.style(bytes_to_human(result.deleted_bytes), fg="green", bold=True)
    click.echo(f"\nFreed {freed} from {result.deleted_count} items")
    if result.failed:
        click.echo(click.style(f"{len(result.failed)} item(s) could not be deleted", fg="yellow"))


# ── main ─────────────────────────────────────────────────────────────────

@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("path", required=False, type=click.Path(file_okay=False, path_type=Path))
@click.option("--clean", "-c", is_flag=True, help="Delete found artifacts (asks for each one)")
@click.option("--yes", "-y", is_flag=True, help="With --clean, delete without asking")
@click.option("--dry-run", "-n", is_flag=True, help="Show what would be deleted without deleting")
@click.option("--max-depth", "-d", type=click.IntRange(min=0), default=None,
              help=f"Max directory depth to scan (default: {DEFAULT_MAX_DEPTH})")
@click.option("--min-size", "-s", type=click.FloatRange(min=0), default=None,
              help=f"Min size in MB to report (default: {DEFAULT_MIN_SIZE_MB:g})")
@click.option("--ide", "-i", is_flag=True, help="Also scan IDE caches in home directory")
@click.option("--category", type=click.Choice([c.value for c in SCAN_CATEGORIES], case_sensitive=False),
              default=None, help="Only report one category")
@click.option("--profile", "-p", default=None, help="Category preset: safe or aggressive")
@click.option("--sort", type=click.Choice([k.value for k in SortKey], case_sensitive=False),
              default=None, help="Sort by size (default), name or type")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.option("-v", "--verbose", count=True, help="Increase verbosity (-v info, -vv debug)")
@click.version_option(__version__, prog_name="devsweep")
def main(
    path: Path | None,
    clean: bool,
    yes: bool,
    dry_run: bool,
    max_depth: int | None,
    min_size: float | None,
    ide: bool,
    category: str | None,
    profile: str | None,
    sort: str | None,
    as_json: bool,
    verbose: int,
) -> None:
    """devsweep — find and clean dev artifacts eating your disk.

    Scans PATH (default: current directory) for dependency trees, build
    output, caches, coverage reports and logs.
    """
    _setup_logging(verbose)

    try:
        config = _build_config(path, max_depth, min_size, category, profile, ide, sort)
    except ConfigError as e:
        raise click.UsageError(str(e)) from e

    mode = _cleanup_mode(clean, yes, dry_run)
    if as_json and mode is CleanupMode.INTERACTIVE:
        raise click.UsageError("--json cannot ask for confirmation; add --yes or --dry-run")

    engine = SweepEngine()
    show_progress = not as_json and sys.stderr.isatty()

    if not as_json:
        click.echo(f"\n{click.style(f'devsweep v{__version__}', bold=True)}")
        click.echo(f"Scanning: {config.root} (max depth: {config.max_depth})\n")

    try:
        report = engine.scan(config, on_progress=_show_progress if show_progress else None)
    except ScanError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    finally:
        if show_progress:
            _clear_progress()

    if not as_json:
        _print_report(report)

    result: CleanupResult | None = None
    if mode is not None and report.findings:
        if not as_json:
            click.echo()
            if mode is CleanupMode.DRY_RUN:
                click.echo("Dry run — nothing will be deleted.")
        result = engine.clean(
            report.findings,
            mode,
            confirm=_confirm_delete,
            on_event=None if as_json else _print_event,
        )
        if not as_json:
            _print_cleanup_summary(result)

    if as_json:
        data = report.to_dict()
        if result is not None:
            data["cleanup"] = result.to_dict()
        click.echo(json.dumps(data, indent=2))
