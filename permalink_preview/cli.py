"""CLI entry point for Permalink Preview."""

from __future__ import annotations

import asyncio
import sys
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.syntax import Syntax
from rich.table import Table

from permalink_preview.config import PreviewConfig, load_config
from permalink_preview.config.loader import DEFAULT_CONFIG_TEMPLATE
from permalink_preview.fetcher import create_fetcher
from permalink_preview.log_setup import configure_logging
from permalink_preview.permalinks import (
    PermalinkRewriter,
    build_permalink_regex,
    is_inside_link,
    iter_permalinks,
)

app = typer.Typer(
    name="permalink-preview",
    help="Expand GitLab permalinks in chat messages into inline code previews.",
)

config_app = typer.Typer(help="Manage Permalink Preview configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: PreviewConfig | None = None


def _get_config() -> PreviewConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to permalink-preview.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    configure_logging(_config.log_level, _config.log_format)


def _read_message(message: str | None, file: str | None) -> str:
    """Message text from the argument, a file, or stdin, in that order."""
    if message is not None:
        return message
    if file is not None:
        path = Path(file)
        if not path.is_file():
            raise ValueError(f"File not found: {file}")
        return path.read_text(encoding="utf-8")
    return sys.stdin.read()


@app.command()
def rewrite(
    message: str | None = typer.Argument(None, help="Message text (reads stdin if omitted)"),
    file: str | None = typer.Option(None, "--file", "-f", help="Read the message from a file"),
) -> None:
    """Rewrite a message, replacing permalinks with code previews."""
    cfg = _get_config()
    try:
        text = _read_message(message, file)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    try:
        fetcher = create_fetcher(cfg.gitlab)
        rewriter = PermalinkRewriter.from_config(cfg, fetcher)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    result = asyncio.run(rewriter.rewrite(text))
    typer.echo(result, nl=False)


@app.command()
def scan(
    message: str | None = typer.Argument(None, help="Message text (reads stdin if omitted)"),
    file: str | None = typer.Option(None, "--file", "-f", help="Read the message from a file"),
) -> None:
    """List the permalinks found in a message without fetching anything."""
    cfg = _get_config()
    try:
        text = _read_message(message, file)
        pattern = build_permalink_regex(cfg.gitlab.base_url)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    found = list(iter_permalinks(text, pattern))
    if not found:
        rprint("[yellow]No permalinks found.[/yellow]")
        return

    limit = cfg.permalinks.max_replacements
    table = Table(title=f"Permalinks ({len(found)})")
    table.add_column("Offset", justify="right")
    table.add_column("Project", style="cyan")
    table.add_column("Commit", style="magenta")
    table.add_column("Path", style="green")
    table.add_column("Anchor")
    table.add_column("Status", style="yellow")
    for i, r in enumerate(found):
        if i >= limit:
            status = "over limit"
        elif is_inside_link(text, r.index):
            status = "inside link"
        else:
            status = "candidate"
        table.add_row(
            str(r.index),
            r.info.project_path,
            r.info.commit[:8],
            r.info.path,
            r.info.line or "-",
            status,
        )
    rprint(table)


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default permalink-preview.yaml in current directory."""
    target = Path("permalink-preview.yaml")
    if target.exists() and not force:
        rprint("[yellow]permalink-preview.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


if __name__ == "__main__":
    app()
