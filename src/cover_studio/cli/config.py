"""CLI: cover-studio config set-key|set-model|show"""

from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from cover_studio.config import load_config, load_settings, save_config

console = Console()


@click.group()
def config():
    """API key and model settings."""


@config.command("set-key")
@click.option("--api-key", prompt="Gemini API key", hide_input=True)
def config_set_key(api_key: str):
    """Store the Gemini API key in the config file."""
    cfg = load_config()
    cfg["api_key"] = api_key.strip()
    path = save_config(cfg)
    console.print(f"[green]API key saved to {path}[/green]")


@config.command("set-model")
@click.option("--text", "text_model", default=None, help="Model used to describe the blog post")
@click.option("--image", "image_model", default=None, help="Model used to generate and edit images")
def config_set_model(text_model: Optional[str], image_model: Optional[str]):
    """Override the default models."""
    cfg = load_config()
    if text_model:
        cfg["text_model"] = text_model
    if image_model:
        cfg["image_model"] = image_model
    save_config(cfg)
    console.print("[green]Models updated.[/green]")


@config.command("show")
def config_show():
    """Show the effective settings."""
    settings = load_settings()
    key = settings.api_key
    table = Table(title="Settings")
    table.add_column("Key", style="bold")
    table.add_column("Value")
    table.add_row("api_key", f"{key[:4]}...{key[-4:]}" if key and len(key) > 8 else ("set" if key else "[red]missing[/red]"))
    table.add_row("text_model", settings.text_model)
    table.add_row("image_model", settings.image_model)
    table.add_row("aspect_ratio", settings.aspect_ratio)
    table.add_row("body_prefix_limit", str(settings.body_prefix_limit))
    console.print(table)
