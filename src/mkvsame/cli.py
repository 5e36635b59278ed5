"""Command-line interface for mkvsame."""

import sys
from pathlib import Path
from typing import Optional, Sequence

import click

from mkvsame import __version__
from mkvsame.config import Config, load_config
from mkvsame.core.errors import MkvSameError
from mkvsame.core.pipeline import BatchProcessor
from mkvsame.core.report import describe_file, dump_results
from mkvsame.core.scanner import FileScanner
from mkvsame.models.file import MediaFile
from mkvsame.models.track import Identity
from mkvsame.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (defaults to built-in defaults)",
)
@click.pass_context
def cli(ctx, config):
    """mkvsame - set the same default audio and subtitle track across MKV files."""
    try:
        cfg = load_config(config)
        ctx.ensure_object(dict)
        ctx.obj["config"] = cfg

        setup_logging(cfg.logging)

    except Exception as e:
        click.echo(f"Error loading configuration: {e}", err=True)
        sys.exit(1)


def _processor(ctx) -> BatchProcessor:
    """Build a processor, using injected collaborators when present."""
    return BatchProcessor(
        ctx.obj["config"],
        provider=ctx.obj.get("provider"),
        executor=ctx.obj.get("executor"),
    )


def _discover(config: Config, path: Path, recursive: bool) -> list[Path]:
    scanner = FileScanner(config.scan.extensions)
    try:
        return scanner.scan(path, recursive=recursive or config.scan.recursive)
    except (FileNotFoundError, ValueError) as e:
        click.secho(f"✗ Error scanning: {e}", fg="red", err=True)
        sys.exit(1)


def _load(processor: BatchProcessor, paths: Sequence[Path]) -> list[MediaFile]:
    try:
        return processor.load(paths)
    except MkvSameError as e:
        logger.error("Batch aborted", error=str(e))
        click.secho(f"✗ {e}", fg="red", err=True)
        sys.exit(1)


def choose_identity(
    kind: str,
    candidates: Sequence[Identity],
    index: Optional[int] = None,
    disabled: bool = False,
) -> Optional[Identity]:
    """Let the operator pick one identity.

    Args:
        kind: Track kind shown in the prompt ("audio" or "subtitle")
        candidates: Selectable identities in display order
        index: Preselected zero-based index (skips the prompt)
        disabled: Select nothing without prompting

    Returns:
        Chosen identity, or None for no selection
    """
    if disabled:
        return None

    if not candidates:
        click.secho(f"⊘ No {kind} track is common to all files", fg="yellow")
        return None

    if index is not None:
        if index >= len(candidates):
            raise click.BadParameter(
                f"{kind} index {index} out of range (0-{len(candidates) - 1})"
            )
        return candidates[index]

    click.echo(f"> Please choose the {kind} track:")
    for idx, identity in enumerate(candidates):
        click.echo(f"  [{idx}] {identity.label}")

    choice = click.prompt(
        "Index (blank for none)",
        default="",
        show_default=False,
        show_choices=False,
        type=click.Choice([str(idx) for idx in range(len(candidates))] + [""]),
    )
    if choice == "":
        return None
    return candidates[int(choice)]


def _print_listing(files: Sequence[MediaFile]) -> None:
    for media_file in files:
        click.secho(str(media_file.path), bold=True)
        for line in describe_file(media_file):
            click.echo(line)


@cli.command()
@click.argument(
    "path", type=click.Path(exists=True, path_type=Path), default=Path("."), required=False
)
@click.option("--recursive", "-r", is_flag=True, default=False, help="Scan subdirectories")
@click.option("--dry-run", is_flag=True, default=False, help="Print commands without running them")
@click.option("--audio", type=click.IntRange(min=0), default=None, help="Audio choice index")
@click.option("--subtitle", type=click.IntRange(min=0), default=None, help="Subtitle choice index")
@click.option("--no-audio", is_flag=True, default=False, help="Leave audio flags untouched")
@click.option("--no-subtitle", is_flag=True, default=False, help="Leave subtitle flags untouched")
@click.option(
    "--report",
    type=click.Path(dir_okay=False, writable=True, path_type=Path),
    default=None,
    help="Write a JSON report of the results",
)
@click.option(
    "--show/--no-show",
    default=True,
    help="List the tracks of every file after editing (default: True)",
)
@click.pass_context
def run(ctx, path, recursive, dry_run, audio, subtitle, no_audio, no_subtitle, report, show):
    """Pick common tracks and set them as default in every file of PATH."""
    config = ctx.obj["config"]
    if dry_run:
        config.execution.dry_run = True

    files = _discover(config, path, recursive)
    if not files:
        click.secho("⊘ No Matroska files found", fg="yellow")
        sys.exit(0)

    click.echo(f"Found {len(files)} file(s)")

    processor = _processor(ctx)
    media_files = _load(processor, files)
    common = processor.candidates(media_files)

    chosen_subtitle = choose_identity("subtitle", common.subtitles, subtitle, no_subtitle)
    chosen_audio = choose_identity("audio", common.audio, audio, no_audio)

    if chosen_audio is None and chosen_subtitle is None:
        click.secho("⊘ Nothing selected", fg="yellow")
        sys.exit(0)

    results = processor.apply(media_files, chosen_audio, chosen_subtitle)

    counts = {"success": 0, "dry_run": 0, "skipped": 0, "failed": 0}
    colors = {"success": "green", "dry_run": "cyan", "skipped": "yellow", "failed": "red"}
    click.echo("")
    for result in results:
        counts[result.status] += 1
        click.secho(f"  {result}", fg=colors[result.status])

    click.echo("")
    click.echo("=" * 60)
    click.echo("Summary:")
    click.secho(f"  ✓ Success:  {counts['success']}", fg="green")
    click.secho(f"  ⊙ Dry run:  {counts['dry_run']}", fg="cyan")
    click.secho(f"  ⊘ Skipped:  {counts['skipped']}", fg="yellow")
    click.secho(f"  ✗ Failed:   {counts['failed']}", fg="red")
    click.echo(f"  Total:      {len(results)}")

    if report is not None:
        try:
            report.write_text(dump_results(results), encoding="utf-8")
        except (MkvSameError, OSError) as e:
            click.secho(f"✗ Could not write report: {e}", fg="red", err=True)
            sys.exit(1)

    if show:
        click.echo("")
        _print_listing(_load(processor, files))

    if counts["failed"] > 0:
        sys.exit(1)


@cli.command()
@click.argument(
    "path", type=click.Path(exists=True, path_type=Path), default=Path("."), required=False
)
@click.option("--recursive", "-r", is_flag=True, default=False, help="Scan subdirectories")
@click.pass_context
def show(ctx, path, recursive):
    """List audio and subtitle tracks of every file in PATH."""
    config = ctx.obj["config"]
    files = _discover(config, path, recursive)
    _print_listing(_load(_processor(ctx), files))


@cli.command()
@click.argument(
    "path", type=click.Path(exists=True, path_type=Path), default=Path("."), required=False
)
@click.option("--recursive", "-r", is_flag=True, default=False, help="Scan subdirectories")
@click.pass_context
def candidates(ctx, path, recursive):
    """List the tracks common to every file in PATH."""
    config = ctx.obj["config"]
    files = _discover(config, path, recursive)
    processor = _processor(ctx)
    found = processor.candidates(_load(processor, files))

    for title, identities in (("Audio", found.audio), ("Subtitles", found.subtitles)):
        click.echo(f"{title}:")
        if not identities:
            click.echo("  (none)")
        for idx, identity in enumerate(identities):
            click.echo(f"  [{idx}] {identity.label}")


@cli.command()
def version():
    """Show version information."""
    click.echo(f"mkvsame v{__version__}")


def main():
    """Entry point for the CLI."""
    cli(obj={})


if __name__ == "__main__":
    main()
