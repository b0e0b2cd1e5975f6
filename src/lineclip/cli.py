"""Command-line interface for lineclip."""

import argparse
import asyncio
import sys
import time
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from . import __version__
from .conversion.frontmatter import assemble
from .core.resolver import resolve
from .core.sync import MessageSync
from .exceptions import ClipError
from .logging_config import setup_logging
from .models.config import ClipConfig
from .models.events import SyncEventType
from .models.message import MessageMetadata


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser for CLI."""
    parser = argparse.ArgumentParser(
        prog="lineclip",
        description="Turn chat messages into Markdown documents",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a single web page to Markdown
  lineclip resolve https://example.com/article

  # Same, with the front-matter a synced document would get
  lineclip resolve https://github.com/acme/widget --frontmatter --message-id 4711

  # Pull pending messages into a directory
  lineclip sync --endpoint https://bot.example.com/messages -o ./vault/inbox

  # Use a YAML config file
  lineclip --config lineclip.yaml sync
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--config",
        "-c",
        type=Path,
        default=None,
        help="YAML configuration file",
    )

    output_group = parser.add_mutually_exclusive_group()
    output_group.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )
    output_group.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only report errors",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser("resolve", help="Resolve one message and print it")
    resolve_parser.add_argument("text", help="Message text: plain text, a web URL or a GitHub URL")
    resolve_parser.add_argument(
        "--frontmatter",
        action="store_true",
        help="Print the assembled document including front-matter",
    )
    resolve_parser.add_argument(
        "--message-id",
        default="cli",
        help="Message identifier for the front-matter (default: cli)",
    )
    resolve_parser.add_argument(
        "--timestamp",
        default=None,
        help="Message timestamp, epoch milliseconds or ISO-8601 (default: now)",
    )

    sync_parser = subparsers.add_parser("sync", help="Store pending messages as documents")
    sync_parser.add_argument(
        "--endpoint",
        "-e",
        default=None,
        help="Message endpoint URL",
    )
    sync_parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Document directory (default: ./clips)",
    )
    sync_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve messages without writing files",
    )

    return parser


def build_config(args: argparse.Namespace) -> ClipConfig:
    """Load the config file (if any) and apply command-line overrides."""
    data: dict[str, Any] = {}
    if args.config:
        data = ClipConfig.from_yaml_file(args.config).model_dump(exclude_none=True)

    if getattr(args, "endpoint", None):
        data["message_endpoint"] = args.endpoint
    if getattr(args, "output_dir", None):
        data["document_directory"] = args.output_dir
    if getattr(args, "dry_run", False):
        data["dry_run"] = True

    if args.verbose:
        data["log_level"] = "DEBUG"
    elif args.quiet:
        data["log_level"] = "ERROR"

    return ClipConfig.model_validate(data)


def run_resolve(args: argparse.Namespace, config: ClipConfig, console: Console) -> int:
    """Resolve a single message and write it to stdout."""
    try:
        content = asyncio.run(resolve(args.text, config))
    except ClipError as e:
        console.print(f"[red]Error:[/red] {e}")
        return 1

    if args.frontmatter:
        timestamp = args.timestamp
        if timestamp is None:
            timestamp = int(time.time() * 1000)
        try:
            metadata = MessageMetadata(timestamp=timestamp, message_id=args.message_id)
        except ValidationError as e:
            console.print(f"[red]Invalid timestamp:[/red] {args.timestamp}")
            if args.verbose:
                console.print(str(e))
            return 1
        output = assemble(content, metadata)
    else:
        output = content.content

    sys.stdout.write(output if output.endswith("\n") else output + "\n")
    return 0


def run_sync(args: argparse.Namespace, config: ClipConfig, console: Console) -> int:
    """Run the sync with a progress display."""
    if not config.message_endpoint:
        console.print("[red]Error:[/red] Please provide a message endpoint (--endpoint or config file)")
        return 1

    async def run() -> int:
        if not args.quiet:
            console.print(f"[bold blue]lineclip[/bold blue] v{__version__}")
            console.print(f"Endpoint: {config.message_endpoint}")
            console.print(f"Directory: {config.document_directory}")
            console.print()

        failed = False
        async with MessageSync(config) as sync:
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
                transient=True,
                disable=args.quiet,
            ) as progress:
                task = progress.add_task("Starting...", total=None)

                async for event in sync.run():
                    if event.type == SyncEventType.STARTED:
                        progress.update(task, description="[cyan]Fetching messages...")
                    elif event.type == SyncEventType.MESSAGES_RECEIVED:
                        progress.update(task, description=f"[green]Received {event.total} messages")
                    elif event.type == SyncEventType.MESSAGE_SAVED:
                        if not args.quiet:
                            console.print(f"[green]Saved:[/green] {event.path}")
                    elif event.type == SyncEventType.MESSAGE_FAILED:
                        failed = True
                        console.print(f"[red]Failed:[/red] {event.message_id} - {event.error}")
                    elif event.type == SyncEventType.FAILED:
                        failed = True
                        console.print(f"[red]Error:[/red] {event.error}")
                    elif event.type == SyncEventType.COMPLETED:
                        progress.update(task, description=f"[green]{event.message}")

        stats = sync.stats
        if not args.quiet:
            console.print()
            console.print("[bold]Results:[/bold]")
            console.print(f"  Messages received: {stats.messages_received}")
            console.print(f"  Saved: {stats.messages_saved}")
            console.print(f"  Skipped: {stats.messages_skipped}")
            console.print(f"  Failed: {stats.messages_failed}")
            console.print(f"  Duration: {stats.duration_seconds:.1f}s")

        return 1 if failed else 0

    return asyncio.run(run())


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = create_parser()
    args = parser.parse_args(argv)
    console = Console(stderr=True)

    try:
        config = build_config(args)
    except (ValidationError, yaml.YAMLError, OSError) as e:
        console.print(f"[red]Configuration error:[/red] {e}")
        return 1

    setup_logging(
        level=config.log_level,
        log_file=config.log_file,
    )

    if args.command == "resolve":
        return run_resolve(args, config, console)
    return run_sync(args, config, console)


if __name__ == "__main__":
    sys.exit(main())
