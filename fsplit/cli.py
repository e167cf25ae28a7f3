#!/usr/bin/env python3
"""
fsplit CLI

Command-line interface for splitting a file into chunks and merging them back.

Usage:
    fsplit split FILE DIR -c 4       # Split FILE into 4 chunks inside DIR
    fsplit merge DIR FILE            # Rebuild FILE from the chunks in DIR
    fsplit list DIR                  # Show the chunk files in DIR
    fsplit -b 4096 s FILE DIR -c 4   # Commands may be abbreviated
"""

import logging
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.progress import Progress, SpinnerColumn, TextColumn, BarColumn
from rich.panel import Panel
from rich.logging import RichHandler

from . import __version__
from .config import Config, load_config
from .errors import FSplitError
from .file import find_missing_indices, list_chunk_files, merge_chunks, split_file

console = Console()


def setup_logging(level: str = 'INFO', verbose: bool = False):
    """Configure logging with rich output."""
    level = logging.DEBUG if verbose else getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)]
    )


class PrefixGroup(click.Group):
    """Group that accepts any unique prefix of a command name."""

    def get_command(self, ctx, cmd_name):
        command = super().get_command(ctx, cmd_name)
        if command is not None:
            return command
        matches = [name for name in self.list_commands(ctx) if name.startswith(cmd_name)]
        if not matches:
            return None
        if len(matches) == 1:
            return super().get_command(ctx, matches[0])
        ctx.fail(f"Ambiguous command '{cmd_name}': {', '.join(sorted(matches))}")

    def resolve_command(self, ctx, args):
        _, command, args = super().resolve_command(ctx, args)
        return (command.name if command else None), command, args


@click.group(cls=PrefixGroup)
@click.version_option(__version__, prog_name='fsplit')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose output')
@click.option('-b', '--block-size', type=int, default=None,
              help='Bytes to read/write at a time (non-positive values are ignored)')
@click.option('--config', 'config_path', type=click.Path(dir_okay=False, path_type=Path),
              default=None, help='JSON config file')
@click.pass_context
def cli(ctx, verbose, block_size, config_path):
    """fsplit - split a file into chunks and merge them back."""
    config = load_config(config_path)
    if block_size is not None:
        config.set_block_size(block_size)
    setup_logging(config.log_level, verbose)
    ctx.ensure_object(dict)
    ctx.obj['config'] = config


def _fail(ctx, error: FSplitError):
    console.print(f"[red]✗ {error}[/red]", soft_wrap=True)
    ctx.exit(1)


@cli.command()
@click.argument('source', type=click.Path(path_type=Path))
@click.argument('dest', type=click.Path(path_type=Path))
@click.option('--chunks', '-c', type=int, required=True, help='Number of chunks to create')
@click.pass_context
def split(ctx, source, dest, chunks):
    """Split SOURCE into chunk files inside DEST."""
    config: Config = ctx.obj['config']

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        console=console,
    ) as progress:
        task = progress.add_task("Splitting...", total=chunks)

        def update_progress(p):
            progress.update(
                task,
                completed=p.chunk_index + 1,
                description=f"Splitting... ({p.chunk_index + 1}/{p.chunk_count} chunks)"
            )

        try:
            result = split_file(source, chunks, dest, config.block_size, update_progress)
        except FSplitError as e:
            progress.stop()
            _fail(ctx, e)
            return

    note = ""
    if result.chunks_written < result.spec.chunk_count:
        note = (f"\n[yellow]Source ran out after {result.chunks_written} "
                f"of {result.spec.chunk_count} chunks[/yellow]")

    console.print(Panel.fit(
        f"[bold green]File Split Successfully[/bold green]\n\n"
        f"Source: [cyan]{source}[/cyan]\n"
        f"Size: [yellow]{result.spec.total_size:,} bytes[/yellow]\n"
        f"Chunks: [yellow]{result.chunks_written}[/yellow]\n"
        f"Chunk size: [yellow]{format_size(result.spec.chunk_size)}[/yellow]\n"
        f"Block size: [yellow]{result.block_size}[/yellow]\n"
        f"Output: [blue]{dest}[/blue]"
        f"{note}",
        title="Split"
    ))


@cli.command()
@click.argument('source', type=click.Path(path_type=Path))
@click.argument('dest', type=click.Path(path_type=Path))
@click.pass_context
def merge(ctx, source, dest):
    """Merge the chunk files in SOURCE into the file DEST."""
    config: Config = ctx.obj['config']

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TextColumn("[progress.percentage]{task.percentage:>3.0f}%"),
        console=console,
    ) as progress:
        task = progress.add_task("Merging...", total=None)

        def update_progress(p):
            progress.update(
                task,
                total=p.chunk_count,
                completed=p.chunk_index + 1,
                description=f"Merging... ({p.chunk_index + 1}/{p.chunk_count} chunks)"
            )

        try:
            result = merge_chunks(source, dest, config.block_size, update_progress)
        except FSplitError as e:
            progress.stop()
            _fail(ctx, e)
            return

    if result.chunk_count == 0:
        console.print(f"[yellow]No chunk files found in {source}[/yellow]")

    console.print(Panel.fit(
        f"[bold green]Chunks Merged Successfully[/bold green]\n\n"
        f"Chunks: [yellow]{result.chunk_count}[/yellow]\n"
        f"Size: [yellow]{result.bytes_written:,} bytes[/yellow]\n"
        f"Output: [blue]{result.output_path}[/blue]",
        title="Merge"
    ))


@cli.command('list')
@click.argument('directory', type=click.Path(exists=True, file_okay=False, path_type=Path))
def list_chunks(directory):
    """List the chunk files in DIRECTORY."""
    names = list_chunk_files(directory)

    if not names:
        console.print("[yellow]No chunk files[/yellow]")
        return

    table = Table(title=f"Chunks in {directory}")
    table.add_column("Name", style="cyan")
    table.add_column("Size", justify="right", style="yellow")

    total = 0
    for name in names:
        size = (directory / name).stat().st_size
        total += size
        table.add_row(name, format_size(size))

    console.print(table)
    console.print(f"[dim]{len(names)} chunk files, {format_size(total)}[/dim]")

    missing = find_missing_indices(names)
    if missing:
        console.print(f"[red]Missing indices: {', '.join(str(i) for i in missing)}[/red]")


def format_size(bytes_count: float) -> str:
    """Format bytes as human-readable size."""
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if bytes_count < 1024:
            return f"{bytes_count:.1f} {unit}"
        bytes_count /= 1024
    return f"{bytes_count:.1f} PB"
