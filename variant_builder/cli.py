"""variant-builder CLI: emit bundler configs and inspect discovered entries.

Commands:
- emit {dev|prod|online} [--theme T] [--plugin] [--out FILE]
- entries [--plugins] (table of page or plugin entries)
- port (the dev-server port this process resolves)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import NoReturn

import typer
from jsonschema import ValidationError
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from variant_builder.core import BuildContext, derive
from variant_builder.discover.entries import discover_page_entries, discover_plugin_entries
from variant_builder.errors import VariantBuilderError
from variant_builder.progress import null_progress
from variant_builder.validator import to_bundler_dict, validate_config, write_config

app = typer.Typer(add_completion=False, help="Derive bundler configs for dev, prod and online builds")
console = Console()


def _context(root: str | None) -> BuildContext:
    return BuildContext.create(root, progress=null_progress)


def _fail(exc: Exception) -> NoReturn:
    msg = exc.message if isinstance(exc, ValidationError) else str(exc)
    rprint(f"[red]Error:[/red] {escape(msg)}")
    raise typer.Exit(code=1)


@app.command()
def emit(
    variant: str = typer.Argument(..., help='"dev" | "prod" | "online"'),
    theme: str | None = typer.Option(None, "--theme", help="Bundle name for a themed build"),
    plugin: bool = typer.Option(False, "--plugin", help="One bundle per plugin directory"),
    root: str | None = typer.Option(None, "--root", help="Project root (default: cwd)"),
    out: str | None = typer.Option(None, "--out", help="Write to file instead of stdout"),
) -> None:
    try:
        ctx = _context(root)
        cfg = derive(variant, ctx, theme_name=theme, is_plugin=plugin)
        if out:
            write_config(cfg, Path(out))
            rprint(f"[green]Config written:[/green] {out}")
            return
        data = to_bundler_dict(cfg)
        validate_config(data)
    except (VariantBuilderError, ValidationError) as exc:
        _fail(exc)
    print(json.dumps(data, indent=2))


@app.command()
def entries(
    root: str | None = typer.Option(None, "--root", help="Project root (default: cwd)"),
    plugins: bool = typer.Option(False, "--plugins", help="List plugin bundles instead of pages"),
) -> None:
    try:
        ctx = _context(root)
        s = ctx.settings
        if plugins:
            found = discover_plugin_entries(s.plugin_dir)
        else:
            found = {
                **discover_page_entries(s.demo_dir, ctx.port),
                **discover_page_entries(s.src_dir, ctx.port),
            }
    except VariantBuilderError as exc:
        _fail(exc)

    table = Table(title="Plugin entries" if plugins else "Page entries")
    table.add_column("Bundle", style="cyan")
    table.add_column("Modules")
    for name in sorted(found):
        table.add_row(name, "\n".join(found[name]))
    console.print(table)


@app.command()
def port(
    root: str | None = typer.Option(None, "--root", help="Project root (default: cwd)"),
) -> None:
    try:
        ctx = _context(root)
    except VariantBuilderError as exc:
        _fail(exc)
    print(ctx.port)


if __name__ == "__main__":
    app()
