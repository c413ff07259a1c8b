"""
Ember CLI - entry point.

Commands:
    ember run FILE      interpret a program and print its result
    ember eval EXPR     evaluate a single expression
    ember tokens FILE   show the token stream
    ember ast FILE      show the parsed syntax tree
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from ember._version import get_version
from ember.core.config import EmberConfig, find_config, load_config
from ember.core.errors import EmberError
from ember.core.ir.nodes import dump
from ember.core.lang.interpreter import Interpreter, evaluate_expression
from ember.core.lang.parser import parse
from ember.core.lang.tokenizer import Lexer, format_number

logger = logging.getLogger(__name__)

app = typer.Typer(
    help="Ember - tokenize, parse and interpret Ember programs",
    no_args_is_help=True,
)

console = Console()

ConfigOption = Annotated[
    Path | None,
    typer.Option("--config", "-c", help="Path to ember.toml (default: next to FILE, then cwd)"),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-V", help="Log at DEBUG level"),
]


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"Ember version {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Ember CLI main callback for global options."""
    pass


def _load_settings(config_path: Path | None, source: Path | None) -> EmberConfig:
    if config_path is None:
        if source is not None:
            config_path = find_config(source)
        if config_path is None:
            config_path = find_config(Path.cwd())
    return load_config(config_path)


def _setup_logging(config: EmberConfig, verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, config.logging.level)
    logging.basicConfig(level=level, stream=sys.stderr, format=config.logging.format, force=True)


def _read_source(file: Path) -> str:
    try:
        return file.read_text(encoding="utf-8")
    except OSError as e:
        typer.echo(f"Cannot read {file}: {e.strerror or e}", err=True)
        raise typer.Exit(code=1)


def _format_value(value: float | None) -> str:
    return "null" if value is None else format_number(value)


@app.command("run")
def run_command(
    file: Annotated[Path, typer.Argument(help="Program to interpret")],
    config: ConfigOption = None,
    show_ast: Annotated[bool, typer.Option("--show-ast", help="Print the syntax tree first")] = False,
    verbose: VerboseOption = False,
) -> None:
    """Interpret a program and print the final value of its result variable."""
    try:
        settings = _load_settings(config, file)
        _setup_logging(settings, verbose)
        source = _read_source(file)
        logger.info("reading file: %s", file)
        logger.debug("interpreting:\n%s", source)

        root = parse(source, str(file))
        if show_ast:
            typer.echo(dump(root))

        value = Interpreter(settings.interpreter.result_variable).run(root)
    except EmberError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(f"{settings.interpreter.result_variable} = {_format_value(value)}")


@app.command("eval")
def eval_command(
    expression: Annotated[str, typer.Argument(help='Expression, e.g. "2 + 7 * 3"')],
    verbose: VerboseOption = False,
) -> None:
    """Evaluate a single arithmetic expression."""
    try:
        _setup_logging(_load_settings(None, None), verbose)
        value = evaluate_expression(expression)
    except EmberError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(format_number(value))


@app.command("tokens")
def tokens_command(
    file: Annotated[Path, typer.Argument(help="Program to tokenize")],
) -> None:
    """Print the token stream of a program."""
    source = _read_source(file)

    table = Table(title=str(file))
    table.add_column("#", justify="right", style="dim")
    table.add_column("Kind", style="cyan")
    table.add_column("Value")
    table.add_column("Offset", justify="right", style="dim")

    try:
        for index, tok in enumerate(Lexer(source, str(file))):
            if isinstance(tok.value, float):
                value = format_number(tok.value)
            else:
                value = tok.value or ""
            table.add_row(str(index), str(tok.kind), value, str(tok.pos))
    except EmberError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    console.print(table)


@app.command("ast")
def ast_command(
    file: Annotated[Path, typer.Argument(help="Program to parse")],
) -> None:
    """Print the syntax tree of a program."""
    source = _read_source(file)
    try:
        root = parse(source, str(file))
    except EmberError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(dump(root))


def main(argv: list[str] | None = None) -> None:
    app(args=argv)


if __name__ == "__main__":
    main(sys.argv[1:])
