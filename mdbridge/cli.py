"""CLI entry point for mdbridge."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from mdbridge.config import MdBridgeConfig, load_config
from mdbridge.config.loader import DEFAULT_CONFIG_TEMPLATE
from mdbridge.converter import DOCUMENT_EXTENSIONS, DocumentConverter
from mdbridge.errors import MdBridgeError
from mdbridge.export import to_markdown, to_notion_blocks, to_obsidian
from mdbridge.notion import NotionClient, to_notion_blocks as notion_payload
from mdbridge.obsidian import EnrichOptions
from mdbridge.output import MarkdownWriter

app = typer.Typer(
    name="mdbridge",
    help="Clean up AI-generated markdown and export it to Obsidian or Notion.",
)

config_app = typer.Typer(help="Manage mdbridge configuration.")
app.add_typer(config_app, name="config")

obsidian_app = typer.Typer(help="Obsidian vault export.")
app.add_typer(obsidian_app, name="obsidian")

notion_app = typer.Typer(help="Notion page export.")
app.add_typer(notion_app, name="notion")

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}

# Global state
_config: MdBridgeConfig | None = None


def _get_config() -> MdBridgeConfig:
    if _config is None:
        return load_config()
    return _config


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=_LOG_LEVELS[level],
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to mdbridge.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _setup_logging(_config.log_level)


def _read_source(file: Path) -> str:
    """Text of ``file``; office and HTML documents go through the converter first."""
    if not file.is_file():
        rprint(f"[red]Error:[/red] File not found: {file}")
        raise typer.Exit(1)

    if file.suffix.lower() in DOCUMENT_EXTENSIONS:
        converter = DocumentConverter(_get_config().document_conversion)
        try:
            return converter.convert(file).markdown
        except MdBridgeError as e:
            rprint(f"[red]Error:[/red] {e}")
            raise typer.Exit(1)

    return file.read_text(encoding="utf-8")


def _emit(content: str, output: Path | None) -> None:
    if output is None:
        typer.echo(content)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(content + "\n", encoding="utf-8")
    rprint(f"[green]Wrote[/green] {output}")


def _parse_meta(pairs: list[str]) -> dict[str, str | list[str]]:
    """``key=value`` pairs; a repeated key collects its values into a list."""
    meta: dict[str, str | list[str]] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise ValueError(f"Invalid --meta '{pair}': expected key=value")
        value = value.strip()
        if key in meta:
            prev = meta[key]
            meta[key] = [*prev, value] if isinstance(prev, list) else [prev, value]
        else:
            meta[key] = value
    return meta


# ---------------------------------------------------------------------------
# Markdown commands
# ---------------------------------------------------------------------------


@app.command()
def clean(
    file: Annotated[Path, typer.Argument(help="Markdown file to normalize")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write here instead of stdout")] = None,
) -> None:
    """Normalize AI-generated markdown."""
    _emit(to_markdown(_read_source(file)), output)


@app.command()
def chat(
    file: Annotated[Path, typer.Argument(help="Chat transcript to format")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write here instead of stdout")] = None,
) -> None:
    """Format a role-labelled chat transcript as markdown."""
    _emit(to_markdown(_read_source(file), chat=True), output)


@app.command()
def convert(
    file: Annotated[Path, typer.Argument(help="Document to convert (docx, html, pdf, pptx)")],
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Write here instead of stdout")] = None,
) -> None:
    """Convert a document to clean markdown."""
    cfg = _get_config()
    if not cfg.document_conversion.enabled:
        rprint("[red]Error:[/red] document conversion is disabled in config")
        raise typer.Exit(1)

    converter = DocumentConverter(cfg.document_conversion)
    try:
        result = converter.convert(file)
    except MdBridgeError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _emit(result.markdown, output)


# ---------------------------------------------------------------------------
# Obsidian
# ---------------------------------------------------------------------------


@obsidian_app.command()
def export(
    file: Annotated[Path, typer.Argument(help="Markdown or document to export")],
    vault: Annotated[str, typer.Option("--vault", "-v", help="Path to Obsidian vault")] = "",
    name: Annotated[str, typer.Option("--name", "-n", help="Note name (defaults to the file stem)")] = "",
    is_chat: Annotated[bool, typer.Option("--chat", help="Treat input as a chat transcript")] = False,
    headings: Annotated[
        bool | None, typer.Option("--headings/--no-headings", help="Wikilink heading mentions")
    ] = None,
    tags: Annotated[bool | None, typer.Option("--tags/--no-tags", help="Append derived tags")] = None,
    keywords: Annotated[
        bool | None, typer.Option("--keywords/--no-keywords", help="Wikilink bold and heading terms")
    ] = None,
    meta: Annotated[list[str] | None, typer.Option("--meta", "-m", help="Frontmatter key=value")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Print the note instead of writing it")] = False,
) -> None:
    """Export a document as an Obsidian note."""
    cfg = _get_config()
    vault_path = vault or cfg.obsidian.vault_path

    try:
        extra = _parse_meta(meta or [])
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    options = EnrichOptions(
        convert_headings_to_links=cfg.obsidian.convert_headings_to_links if headings is None else headings,
        auto_generate_tags=cfg.obsidian.auto_generate_tags if tags is None else tags,
        auto_link_keywords=cfg.obsidian.auto_link_keywords if keywords is None else keywords,
        metadata={**cfg.obsidian.metadata, **extra},
    )
    note = to_obsidian(_read_source(file), options, chat=is_chat)

    if not vault_path:
        if not dry_run:
            rprint("[red]Error:[/red] --vault is required or set obsidian.vault_path in config")
            raise typer.Exit(1)
        typer.echo(note)
        return

    writer = MarkdownWriter(vault_path)
    try:
        dest = writer.write(note, name or file.stem, dry_run=dry_run)
    except MdBridgeError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if dry_run:
        typer.echo(note)
        rprint(Panel(f"Would write {dest}", title="dry-run", border_style="blue"))
    else:
        rprint(f"[green]Exported[/green] {dest}")


# ---------------------------------------------------------------------------
# Notion
# ---------------------------------------------------------------------------


@notion_app.command()
def blocks(
    file: Annotated[Path, typer.Argument(help="Markdown or document to serialize")],
    as_json: Annotated[bool, typer.Option("--json", help="Print Notion API block JSON")] = False,
    is_chat: Annotated[bool, typer.Option("--chat", help="Treat input as a chat transcript")] = False,
) -> None:
    """Show the Notion blocks a document serializes to."""
    records = to_notion_blocks(_read_source(file), chat=is_chat)

    if as_json:
        typer.echo(json.dumps(notion_payload(records), indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Blocks ({len(records)})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Detail", style="green")
    table.add_column("Text")
    for i, block in enumerate(records, 1):
        detail = ""
        if block.kind == "heading":
            detail = f"h{block.level}"
        elif block.kind == "code":
            detail = block.language
        preview = block.text if len(block.text) <= 60 else block.text[:57] + "..."
        table.add_row(str(i), block.kind, detail, Text(preview))
    rprint(table)


@notion_app.command()
def push(
    file: Annotated[Path, typer.Argument(help="Markdown or document to publish")],
    title: Annotated[str, typer.Option("--title", "-t", help="Page title")],
    is_chat: Annotated[bool, typer.Option("--chat", help="Treat input as a chat transcript")] = False,
) -> None:
    """Create a Notion page from a document."""
    cfg = _get_config()
    records = to_notion_blocks(_read_source(file), chat=is_chat)
    client = NotionClient(cfg.notion)

    try:
        page_id = asyncio.run(client.create_page(title, records))
    except (MdBridgeError, ValueError) as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    rprint(f"[green]Created[/green] Notion page {page_id} ({len(records)} blocks)")


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


@config_app.command("show")
def config_show() -> None:
    """Show current resolved configuration."""
    cfg = _get_config()
    rprint(Syntax(yaml.dump(cfg.model_dump(), default_flow_style=False, sort_keys=False), "yaml"))


@config_app.command("init")
def config_init(
    force: bool = typer.Option(False, "--force", help="Overwrite existing config"),
) -> None:
    """Create default mdbridge.yaml in current directory."""
    target = Path("mdbridge.yaml")
    if target.exists() and not force:
        rprint("[yellow]mdbridge.yaml already exists.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")
