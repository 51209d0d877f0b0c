"""CLI: cover-studio studio"""

from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from cover_studio.errors import CoverStudioError
from cover_studio.models.session import Phase, Session

console = Console()

HELP_TEXT = """[cyan]Type an edit command to refine the current image, or:[/cyan]
  /generate        generate a new cover from the title and body
  /title TEXT      set the blog title
  /body PATH       load the blog body from a file
  /history         list produced versions
  /restore N       select version N
  /prompt          show the last generated prompt
  /save [NAME]     save the current image
  /reset           clear everything
  /quit            exit"""


def _get_client(on_change=None):
    from cover_studio.cli.main import _get_client
    return _get_client(on_change)


def _run(coro):
    from cover_studio.cli.main import _run
    return _run(coro)


def _print_history(session: Session) -> None:
    if not len(session.history):
        console.print("[dim]No versions yet.[/dim]")
        return
    table = Table(title=f"History ({len(session.history)} versions)")
    table.add_column("#", style="bold")
    table.add_column("Type")
    table.add_column("Size")
    table.add_column("")
    for index, artifact in session.history.newest_first():
        marker = "[green]● current[/green]" if index == session.history.selected else ""
        table.add_row(str(index), artifact.media_type, f"{len(artifact.to_bytes()):,} B", marker)
    console.print(table)


def _print_outcome(session: Session) -> None:
    if session.phase == Phase.FAILED:
        console.print(f"[red]{session.error_message}[/red]")
    elif session.phase == Phase.READY:
        console.print(f"[green]Version {session.history.selected} ready.[/green]")


@click.command("studio")
@click.option("-t", "--title", default="", help="Blog post title")
@click.option("--body-file", type=click.Path(exists=True, dir_okay=False, path_type=Path), default=None)
@click.option("-o", "--out", "out_dir", default=".", type=click.Path(file_okay=False, path_type=Path))
def studio_cmd(title: str, body_file: Optional[Path], out_dir: Path):
    """Interactive cover generation and refinement."""

    async def _studio():
        client = _get_client()
        client.set_input(title=title, body=body_file.read_text(encoding="utf-8") if body_file else "")
        console.print(HELP_TEXT + "\n")
        try:
            while True:
                line = click.prompt("Edit", prompt_suffix=": ").strip()
                if not line:
                    continue
                cmd, _, arg = line.partition(" ")
                arg = arg.strip()
                try:
                    if cmd in ("/quit", "/exit"):
                        break
                    elif cmd == "/help":
                        console.print(HELP_TEXT)
                    elif cmd == "/title":
                        client.set_input(title=arg)
                    elif cmd == "/body":
                        client.set_input(body=Path(arg).expanduser().read_text(encoding="utf-8"))
                        console.print(f"[dim]Body: {len(client.session.body)} chars[/dim]")
                    elif cmd == "/generate":
                        with console.status("Generating..."):
                            session = await client.produce()
                        _print_outcome(session)
                    elif cmd == "/history":
                        _print_history(client.session)
                    elif cmd == "/restore":
                        client.restore(int(arg))
                        console.print(f"[green]Selected version {arg}.[/green]")
                    elif cmd == "/prompt":
                        console.print(client.session.last_prompt or "[dim]No prompt yet.[/dim]")
                    elif cmd == "/save":
                        path = client.save(out_dir, arg or None)
                        console.print(f"[green]Saved {path}[/green]")
                    elif cmd == "/reset":
                        if client.session.has_input and not click.confirm(
                            "This clears the title, body and all generated images. Continue?"
                        ):
                            continue
                        client.reset()
                        console.print("[dim]Session cleared.[/dim]")
                    elif cmd.startswith("/"):
                        console.print(f"[yellow]Unknown command {cmd}. Type /help.[/yellow]")
                    else:
                        with console.status("Editing image..."):
                            session = await client.refine(line)
                        _print_outcome(session)
                except CoverStudioError as e:
                    console.print(f"[red]{e.message}[/red]")
                except (ValueError, OSError) as e:
                    console.print(f"[red]{e}[/red]")
        except (KeyboardInterrupt, EOFError, click.Abort):
            pass

    _run(_studio())
