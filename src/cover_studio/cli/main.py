"""
Cover Studio CLI: `cover-studio` command.

Commands:
  cover-studio generate           One-shot cover generation (+ optional edits)
  cover-studio studio             Interactive refine/restore REPL
  cover-studio config <cmd>       API key and model settings
"""

import asyncio
import logging
from typing import Callable, Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install cover-studio[cli]")

from cover_studio.client import AsyncCoverStudio
from cover_studio.errors import ConfigError
from cover_studio.models.session import Phase, Session

console = Console()

PHASE_LABELS = {
    Phase.DESCRIBING: "Reading the blog context...",
    Phase.GENERATING: "Rendering 16:9 artwork...",
    Phase.EDITING: "Editing image...",
}


def _get_client(on_change: Optional[Callable[[Session], None]] = None) -> AsyncCoverStudio:
    try:
        return AsyncCoverStudio(on_change=on_change)
    except ConfigError as e:
        console.print(f"[red]{e.message}[/red]")
        raise SystemExit(1)


def _run(coro):
    return asyncio.run(coro)


def _status_updater(status) -> Callable[[Session], None]:
    def _update(session: Session) -> None:
        label = PHASE_LABELS.get(session.phase)
        if label:
            status.update(label)
    return _update


def _setup_logging(verbose: bool) -> None:
    """Route cover_studio logs to stderr so stdout stays clean for --json."""
    pkg_logger = logging.getLogger("cover_studio")
    pkg_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not any(isinstance(h, RichHandler) for h in pkg_logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False, log_time_format="[%X]")
        handler.setFormatter(logging.Formatter("%(message)s"))
        pkg_logger.addHandler(handler)


@click.group()
@click.version_option("0.1.0")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """Cover Studio CLI: 16:9 blog covers from Gemini."""
    _setup_logging(verbose)


# Register subcommands from separate modules
from cover_studio.cli.config import config
from cover_studio.cli.generate import generate_cmd
from cover_studio.cli.studio import studio_cmd

main.add_command(config)
main.add_command(generate_cmd)
main.add_command(studio_cmd)


if __name__ == "__main__":
    main()
