"""CLI: cover-studio generate"""

import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from cover_studio.errors import CoverStudioError
from cover_studio.models.session import Phase

console = Console()


def _get_client(on_change=None):
    from cover_studio.cli.main import _get_client
    return _get_client(on_change)


def _run(coro):
    from cover_studio.cli.main import _run
    return _run(coro)


def _status_updater(status):
    from cover_studio.cli.main import _status_updater
    return _status_updater(status)


@click.command("generate")
@click.option("-t", "--title", default="", help="Blog post title")
@click.option("-b", "--body", default=None, help="Blog post body text")
@click.option("--body-file", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None)
@click.option("-e", "--edit", "edits", multiple=True, help="Edit command, applied in order (repeatable)")
@click.option("-o", "--out", "out_dir", default=".", type=click.Path(file_okay=False, path_type=Path))
@click.option("--filename", default=None, help="Output filename (default: blog-visual-16x9.<ext>)")
@click.option("--json-output", "--json", is_flag=True)
def generate_cmd(
    title: str,
    body: Optional[str],
    body_file: Optional[Path],
    edits: tuple,
    out_dir: Path,
    filename: Optional[str],
    json_output: bool,
):
    """Generate a cover image, apply edits, and save the result."""
    if body_file is not None:
        body = body_file.read_text(encoding="utf-8")

    async def _generate() -> int:
        with console.status("Starting...") as status:
            client = _get_client(_status_updater(status))
            client.set_input(title=title, body=body or "")
            try:
                session = await client.produce()
                for command in edits:
                    if session.phase == Phase.FAILED:
                        break
                    session = await client.refine(command)
            except CoverStudioError as e:
                console.print(f"[red]{e.message}[/red]")
                return 1

        if session.phase == Phase.FAILED:
            console.print(f"[red]{session.error_message}[/red]")
            return 1

        try:
            path = client.save(out_dir, filename)
        except OSError as e:
            console.print(f"[red]{e}[/red]")
            return 1
        current = client.current()
        if json_output:
            click.echo(json.dumps({
                "path": str(path),
                "prompt": session.last_prompt,
                "media_type": current.media_type if current else None,
                "versions": len(session.history),
            }))
        else:
            console.print(f"[dim]Prompt: {session.last_prompt}[/dim]")
            console.print(f"[green]Saved {path}[/green] ({len(session.history)} version(s))")
        return 0

    code = _run(_generate())
    if code:
        raise SystemExit(code)
