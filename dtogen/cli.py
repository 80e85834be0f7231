"""Command line interface for the JSON to DTO generator."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import rich.traceback
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

from . import io as io_module
from . import overrides as overrides_module
from .errors import DtoGenError
from .render import RenderConfig
from .session import Session

rich.traceback.install(show_locals=False)

app = typer.Typer(help="Generate annotated Java DTO classes from an example TRANRQ/TRANRS JSON document.")
console = Console()


def _resolve_path(path: Path | str) -> Path:
    """Resolve a string or path to an absolute Path."""
    resolved = Path(path).expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"Path does not exist: {resolved}")
    return resolved


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _fail(error: DtoGenError) -> None:
    console.print(f"[red]Error generating DTO classes:[/red] {escape(str(error))}", highlight=False)
    raise typer.Exit(code=1)


def _build_session(
    source: Path,
    program_name: str,
    java_version: str,
    overrides_path: Optional[Path],
) -> tuple[Session, str]:
    session = Session(config=RenderConfig(java_version))
    document = io_module.load_document(_resolve_path(source))
    output = session.generate(document, program_name)
    if overrides_path is not None:
        entries = overrides_module.load_override_file(_resolve_path(overrides_path))
        output = session.apply_entries(entries)
    return session, output


@app.command()
def generate(
    source: Path = typer.Argument(..., help="Example JSON document with a TRANRQ or TRANRS root."),
    program_name: str = typer.Option(..., "--program-name", "-p", help="Program name prefixing the root class."),
    java_version: str = typer.Option(
        "17", "--java-version", help="Target Java version: 17 (jakarta) or 8 (javax)."
    ),
    overrides_path: Optional[Path] = typer.Option(
        None, "--overrides", help="Optional YAML file with per-field overrides."
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write generated source here instead of the console."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Generate DTO classes for every record type found in the document."""

    _configure_logging(verbose)
    try:
        _, code = _build_session(source, program_name, java_version, overrides_path)
    except DtoGenError as error:
        _fail(error)
        return

    if output is None:
        console.print(Syntax(code, "java", theme="monokai", word_wrap=False))
        return
    destination = io_module.write_output(output, code)
    console.print(f"DTO classes written to [green]{destination}[/green]")


@app.command()
def structure(
    source: Path = typer.Argument(..., help="Example JSON document with a TRANRQ or TRANRS root."),
    program_name: str = typer.Option(..., "--program-name", "-p", help="Program name prefixing the root class."),
    overrides_path: Optional[Path] = typer.Option(
        None, "--overrides", help="Optional YAML file with per-field overrides."
    ),
) -> None:
    """Show the inferred record types and their resolved field types."""

    _configure_logging(False)
    try:
        session, _ = _build_session(source, program_name, "17", overrides_path)
    except DtoGenError as error:
        _fail(error)
        return

    table = Table(title=session.root_class_name)
    table.add_column("Class", style="bold")
    table.add_column("Field")
    table.add_column("Type", style="green")
    for type_name, field_name, declared in session.field_rows():
        table.add_row(type_name, field_name, declared)
    console.print(table)


@app.command("init-overrides")
def init_overrides(
    source: Path = typer.Argument(..., help="Example JSON document with a TRANRQ or TRANRS root."),
    program_name: str = typer.Option(..., "--program-name", "-p", help="Program name prefixing the root class."),
    output: Path = typer.Option(
        Path("overrides.yaml"), "--output", "-o", help="Destination path for the override file."
    ),
) -> None:
    """Write an override file pre-filled with every field's defaults."""

    _configure_logging(False)
    try:
        session, _ = _build_session(source, program_name, "17", None)
    except DtoGenError as error:
        _fail(error)
        return

    destination = io_module.write_output(output, overrides_module.dump_overrides(session.overrides))
    console.print(f"Overrides written to [green]{destination}[/green]")


def main() -> None:
    """Entrypoint for the ``dtogen`` console script."""

    app()


if __name__ == "__main__":  # pragma: no cover
    main()
