"""gwn command-line front end."""

from __future__ import annotations

from pathlib import Path

import click

from gwn import __version__
from gwn.ast_nodes import Decl, Expr
from gwn.config import GwnConfig, discover_config
from gwn.formatter import GwnFormatter
from gwn.parser import Parser
from gwn.tokens import Token
from gwn.typ import type_name


def run(source: str, *, tree: bool = False, color: bool = True) -> bool:
    """Parse one source unit and echo every form. Returns True if no errors."""
    parser = Parser(source, color=color)
    decls = parser.parse()
    _echo_decls(decls, tree=tree)
    return not parser.diagnostics


def run_file(path: Path, config: GwnConfig, *, tree: bool) -> bool:
    source = path.read_text()
    return run(source, tree=tree, color=config.diagnostics.color)


def run_repl(config: GwnConfig, *, tree: bool) -> None:
    """Read one line at a time; each line is parsed on its own."""
    stdin = click.get_text_stream("stdin")
    while True:
        click.echo(config.repl.prompt, nl=False)
        line = stdin.readline()
        if not line:
            click.echo()
            return
        run(line, tree=tree, color=config.diagnostics.color)


@click.command()
@click.argument("files", nargs=-1, type=click.Path(exists=True, dir_okay=False))
@click.option("--tree", is_flag=True, help="Echo the AST tree instead of source.")
@click.option("--no-color", is_flag=True, help="Disable colored diagnostics.")
@click.version_option(__version__, prog_name="gwn")
def main(files: tuple[str, ...], tree: bool, no_color: bool) -> None:
    """The gwn language front end.

    With no FILE, start an interactive session. With one FILE, parse it
    and echo every top-level form.
    """
    if len(files) > 1:
        raise click.UsageError("expected at most one FILE")

    path = Path(files[0]) if files else None
    try:
        config = discover_config(path)
    except ValueError as e:
        click.echo(f"error: {e}", err=True)
        raise SystemExit(1)

    if no_color:
        config.diagnostics.color = False
    tree = tree or config.output.format == "tree"

    if path is None:
        run_repl(config, tree=tree)
    elif not run_file(path, config, tree=tree):
        raise SystemExit(1)


def _echo_decls(decls: list[Decl], *, tree: bool) -> None:
    if not tree:
        formatter = GwnFormatter()
        for decl in decls:
            click.echo(formatter.format_decl(decl))
        return
    for decl in decls:
        _dump_ast(decl, 0)


def _dump_ast(node: object, depth: int, label: str = "") -> None:
    """Print a readable AST dump."""
    indent = "  " * depth

    if isinstance(node, Expr):
        _dump_ast(node.node, depth, f" : {type_name(node.typ)}")
        return

    name = type(node).__name__
    if hasattr(node, "__dataclass_fields__"):
        fields = node.__dataclass_fields__  # type: ignore[union-attr]
        click.echo(f"{indent}{name}{label}")
        for field_name in fields:
            value = getattr(node, field_name)
            if isinstance(value, list):
                if value:
                    click.echo(f"{indent}  {field_name}:")
                    for item in value:
                        _dump_ast(item, depth + 2)
                else:
                    click.echo(f"{indent}  {field_name}: []")
            elif isinstance(value, Token):
                click.echo(f"{indent}  {field_name}: {value.lexeme!r}")
            elif isinstance(value, Expr):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value.node, depth + 2, f" : {type_name(value.typ)}")
            elif hasattr(value, "__dataclass_fields__"):
                click.echo(f"{indent}  {field_name}:")
                _dump_ast(value, depth + 2)
            elif value is not None:
                click.echo(f"{indent}  {field_name}: {value!r}")
    else:
        click.echo(f"{indent}{name}: {node!r}")
