"""Command-line interface for inspecting Duet's memory heuristics."""

import asyncio
import sys
from pathlib import Path
from typing import Optional

import click
from loguru import logger
from rich.console import Console
from rich.table import Table

from duet.config.settings import Settings
from duet.core.engine import MemoryEngine
from duet.memory.corrections import detect_correction, extract_subjects
from duet.memory.models import SessionContext, Visibility
from duet.memory.triggers import calculate_memory_limit, should_retrieve_memories
from duet.storage.local_store import LocalMemoryStore
from duet.utils.exceptions import ConfigurationError, DuetError
from duet.utils.logging import configure_logging


def _memories_path(settings: Settings, memories: Optional[str]) -> Path:
    """Resolve the memories file from the CLI option or settings."""
    path = memories or settings.storage.memories_file
    if not path:
        raise ConfigurationError(
            "No memories file given. Use --memories or set DUET_STORAGE_MEMORIES_FILE"
        )
    return Path(path)


def _load_engine(settings: Settings, path: Path) -> MemoryEngine:
    store = LocalMemoryStore.load(path, settings=settings.storage)
    return MemoryEngine(store=store, settings=settings)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def main(ctx: click.Context, debug: bool) -> None:
    """Duet - memory retrieval and correction for a couple's assistant."""
    settings = Settings()
    if debug:
        settings.logging.level = "DEBUG"

    try:
        configure_logging(settings.logging)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e
    ctx.obj = settings


@main.command()
@click.argument("message")
def inspect(message: str) -> None:
    """Show how MESSAGE is classified, without touching any store."""
    console = Console()
    signal = detect_correction(message)
    subjects = list(extract_subjects(message))

    table = Table(title="Message analysis", show_header=False)
    table.add_column("Check", style="cyan")
    table.add_column("Result")
    table.add_row("Retrieve memories", str(should_retrieve_memories(message)))
    table.add_row("Memory limit", str(calculate_memory_limit(message)))
    table.add_row("Correction", str(signal.is_correction))
    table.add_row("Correction strength", signal.strength.value)
    table.add_row("Candidate subjects", ", ".join(subjects) or "-")
    console.print(table)


@main.command()
@click.argument("message")
@click.option("--memories", default=None, help="JSON memories file", type=click.Path(dir_okay=False))
@click.option("--couple", "couple_id", required=True, help="Couple ID")
@click.option("--user", "user_id", required=True, help="Requesting user ID")
@click.option(
    "--visibility",
    type=click.Choice([v.value for v in Visibility]),
    default=Visibility.SHARED.value,
    show_default=True,
    help="Visibility of the thread the message came from",
)
@click.pass_obj
def context(
    settings: Settings,
    message: str,
    memories: Optional[str],
    couple_id: str,
    user_id: str,
    visibility: str,
) -> None:
    """Print the memory context block the assistant would see for MESSAGE."""
    console = Console()
    try:
        engine = _load_engine(settings, _memories_path(settings, memories))
        session = SessionContext(
            couple_id=couple_id,
            user_id=user_id,
            visibility=Visibility(visibility),
        )
        text = asyncio.run(engine.retrieve_context(session, message))
    except DuetError as e:
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)

    if not text:
        console.print("[dim]No memories retrieved[/dim]")
        return

    click.echo(text)


@main.command()
@click.argument("message")
@click.option("--memories", default=None, help="JSON memories file", type=click.Path(dir_okay=False))
@click.option("--couple", "couple_id", required=True, help="Couple ID")
@click.option("--user", "user_id", required=True, help="ID of the user making the correction")
@click.option("--replace", "new_content", default=None, help="Replace the target's content")
@click.option("--delete", is_flag=True, help="Delete the target memory")
@click.pass_obj
def correct(
    settings: Settings,
    message: str,
    memories: Optional[str],
    couple_id: str,
    user_id: str,
    new_content: Optional[str],
    delete: bool,
) -> None:
    """Resolve which memory MESSAGE corrects and optionally apply the fix."""
    console = Console()
    if delete and new_content is not None:
        raise click.UsageError("--replace and --delete are mutually exclusive")

    try:
        path = _memories_path(settings, memories)
        engine = _load_engine(settings, path)
        session = SessionContext(couple_id=couple_id, user_id=user_id)
        check = asyncio.run(engine.check_correction(session, message))

        if not check.signal.is_correction:
            console.print("[dim]Not a correction[/dim]")
            return

        console.print(f"Correction strength: {check.signal.strength.value}")
        if check.target is None:
            console.print("[yellow]No matching memory found[/yellow]")
            return

        console.print(f"Target {check.target.id}: {check.target.content}")
        if not delete and new_content is None:
            return

        result = asyncio.run(engine.apply_correction(check.target.id, None if delete else new_content))
        if result.success:
            engine.store.save(path)
            console.print(f"[green]Memory {result.action.value}[/green]")
        else:
            console.print(f"[yellow]Memory not found, nothing {result.action.value}[/yellow]")
    except DuetError as e:
        logger.error(f"Correction failed: {e}")
        console.print(f"[red]Error: {e}[/red]")
        sys.exit(1)


if __name__ == "__main__":
    main()
