"""docquery CLI — normalize query strings into store filters.

Usage:
    docquery search "age=18-25,30-40&status=true"   Normalize search parameters
    docquery sort "-price,name" --locale de          Normalize a sort string
    docquery config show                             Show resolved configuration
"""

import logging
from typing import Optional
from urllib.parse import parse_qsl

import typer
from pydantic import ValidationError
from rich.console import Console

from docquery.compiler import compile_filter
from docquery.config import DocQueryConfig, load_config
from docquery.cli.output import format_compiled_query, format_config, format_sort
from docquery.errors import DocQueryError, format_error, from_normalization_error
from docquery.models.filter_expr import NormalizeOptions, QueryNormalizationError
from docquery.normalizer import add_text_search_to_query, normalize_search, normalize_sort

_log = logging.getLogger(__name__)

app = typer.Typer(
    name="docquery",
    help="Normalize HTTP search parameters into document-store filters",
    no_args_is_help=True,
)
config_app = typer.Typer(help="Configuration management")
app.add_typer(config_app, name="config")

console = Console()

# --- Global state ---
_config_path: str | None = None


@app.callback()
def main(
    config: Optional[str] = typer.Option(
        None, "--config", help="Path to docquery.yaml config file"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """docquery CLI — query-string normalization."""
    global _config_path
    _config_path = config
    level = "DEBUG" if verbose else _configured_level()
    logging.basicConfig(
        level=level,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def _configured_level() -> str:
    try:
        return load_config(config_path=_config_path).logging.level.upper()
    except (FileNotFoundError, ValidationError):
        # Reported by the command that loads the config.
        return "WARNING"


def _load_config_or_exit() -> DocQueryConfig:
    try:
        return load_config(config_path=_config_path)
    except FileNotFoundError:
        _fail(DocQueryError.from_code("E-4001", path=_config_path))
    except ValidationError as e:
        _fail(DocQueryError.from_code("E-4002", details=str(e)))


def _fail(error: DocQueryError) -> None:
    console.print(f"[red]{format_error(error)}[/red]")
    raise typer.Exit(1)


# --- Search ---


@app.command()
def search(
    query_string: str = typer.Argument(..., help="URL query string, e.g. 'age=18-25&tag=a|b'"),
    q: Optional[str] = typer.Option(None, "--q", help="Free-text search query"),
    field: Optional[list[str]] = typer.Option(
        None, "--field", "-f", help="Text-search field (repeatable)"
    ),
    no_regex: Optional[bool] = typer.Option(
        None, "--no-regex/--regex", help="Keep unmatched text as literal values"
    ),
    match_from_start: Optional[bool] = typer.Option(
        None, "--match-from-start/--match-anywhere", help="Anchor partial matches"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Normalize search parameters and print the query document."""
    cfg = _load_config_or_exit()
    options = NormalizeOptions(
        no_regex=cfg.search.no_regex if no_regex is None else no_regex,
        match_from_start=(
            cfg.search.match_from_start if match_from_start is None else match_from_start
        ),
    )

    raw: dict[str, str] = {}
    if query_string:
        try:
            raw = dict(
                parse_qsl(query_string, keep_blank_values=True, strict_parsing=True)
            )
        except ValueError as e:
            _fail(DocQueryError.from_code("E-1002", details=str(e)))

    try:
        expr = normalize_search(raw, options)
    except QueryNormalizationError as e:
        _fail(from_normalization_error(e))

    if q:
        add_text_search_to_query(expr, q, field or cfg.text_search.fields)

    _log.debug("Normalized %r", query_string)
    typer.echo(format_compiled_query(compile_filter(expr), as_json=json_output))


# --- Sort ---


# "-price" is a sort key, not an option.
@app.command(context_settings={"ignore_unknown_options": True})
def sort(
    sort_string: str = typer.Argument(..., help="Sort string, e.g. '-price,name'"),
    locale: Optional[str] = typer.Option(None, "--locale", help="Locale for multi-language fields"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
):
    """Normalize a sort string."""
    cfg = _load_config_or_exit()
    spec = normalize_sort(sort_string, cfg.sort.fields, locale or cfg.sort.locale)
    typer.echo(format_sort(spec, as_json=json_output))


# --- Config commands ---


@config_app.command("show")
def config_show():
    """Display resolved configuration."""
    cfg = _load_config_or_exit()
    console.print(format_config(cfg))


if __name__ == "__main__":
    app()
