"""CLI output formatters for Rich tables and JSON.

Provides human-readable Rich output (default) and machine-parseable JSON
output (--json flag). All formatting goes through these functions so the
CLI commands stay clean.
"""

import json

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from docquery.compiler import CompiledQuery
from docquery.config import DocQueryConfig
from docquery.models.filter_expr import SortSpec

console = Console()

DIRECTION_LABELS = {1: "[green]asc[/green]", -1: "[yellow]desc[/yellow]"}


def _render(renderable: object) -> str:
    with console.capture() as capture:
        console.print(renderable)
    return capture.get()


def format_compiled_query(compiled: CompiledQuery, as_json: bool = False) -> str:
    """Format a compiled query as a Rich panel or JSON.

    Args:
        compiled: Compiled query document and explanation.
        as_json: If True, return JSON string instead of Rich panel.

    Returns:
        Formatted string output.
    """
    if as_json:
        return json.dumps(compiled.model_dump(), indent=2)

    fields = ", ".join(compiled.fields_used) or "—"
    body = "\n".join(
        [
            f"[bold]Explanation:[/bold] {escape(compiled.explanation)}",
            f"[bold]Fields:[/bold]      {escape(fields)}",
            "",
            escape(json.dumps(compiled.document, indent=2)),
        ]
    )
    return _render(Panel(body, title="Query", expand=False))


def format_sort(spec: SortSpec, as_json: bool = False) -> str:
    """Format a sort spec as a Rich table or JSON."""
    if as_json:
        return json.dumps(spec.directions, indent=2)

    if not spec.directions:
        return "No sort fields."

    table = Table(title="Sort")
    table.add_column("#", justify="right")
    table.add_column("Field", style="cyan")
    table.add_column("Direction")
    for position, (name, direction) in enumerate(spec.pairs(), 1):
        table.add_row(str(position), name, DIRECTION_LABELS[direction])
    return _render(table)


def format_config(cfg: DocQueryConfig) -> str:
    lines = [
        "[bold]Search:[/bold]",
        f"  no_regex: {cfg.search.no_regex}",
        f"  match_from_start: {cfg.search.match_from_start}",
        "",
        "[bold]Sort:[/bold]",
        f"  locale: {cfg.sort.locale}",
    ]
    multi_language = [n for n, meta in cfg.sort.fields.items() if meta.is_multi_language]
    lines.append(f"  multi-language fields: {', '.join(multi_language) or '—'}")
    lines.append("")
    lines.append("[bold]Text search:[/bold]")
    lines.append(f"  fields: {', '.join(cfg.text_search.fields) or '—'}")
    lines.append("")
    lines.append(f"[bold]Log level:[/bold] {cfg.logging.level}")
    return "\n".join(lines)
