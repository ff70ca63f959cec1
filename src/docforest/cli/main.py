"""Primary Typer application wiring the docforest CLI."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable, List, Optional

import typer
from rich.table import Table

from docforest.pipeline.hierarchy import assemble_documentation

from .common import CLIError, configure_state, console, get_state, parse_override


class DocforestTyper(typer.Typer):
    """Typer subclass that supports registering exception handlers."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._exception_handlers: list[tuple[type[BaseException], Callable[[BaseException], Any]]] = []

    def exception_handler(
        self, exception_type: type[BaseException]
    ) -> Callable[[Callable[[BaseException], Any]], Callable[[BaseException], Any]]:
        def decorator(handler: Callable[[BaseException], Any]) -> Callable[[BaseException], Any]:
            self._exception_handlers.append((exception_type, handler))
            return handler

        return decorator

    def _resolve_handler(self, exception: BaseException) -> Callable[[BaseException], Any] | None:
        for registered_type, handler in self._exception_handlers:
            if isinstance(exception, registered_type):
                return handler
        return None

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        try:
            return super().__call__(*args, **kwargs)
        except BaseException as exc:
            handler = self._resolve_handler(exc)
            if handler is None:
                raise
            result = handler(exc)
            if isinstance(result, BaseException):
                raise result
            return result


app = DocforestTyper(
    add_completion=False,
    help="Resolve documentation comment records into a navigable hierarchy.",
    no_args_is_help=True,
)


@app.exception_handler(CLIError)
def handle_cli_error(exception: CLIError) -> typer.Exit:
    """Render ``CLIError`` messages without stack traces."""

    console.print(f"[bold red]Error:[/bold red] {exception}")
    return typer.Exit(code=2)


@app.callback()
def main(
    ctx: typer.Context,
    environment: Optional[str] = typer.Option(
        None,
        "--environment",
        "-e",
        help="Active configuration environment (development, testing, production).",
        show_default=False,
    ),
    override: List[str] = typer.Option(  # noqa: B008 - Typer callback signature
        [],
        "--override",
        "-o",
        metavar="KEY=VALUE",
        help="Configuration override in dotted.key=value notation (repeatable).",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Emit debug logging.",
    ),
) -> None:
    """Configure shared CLI state prior to executing subcommands."""

    overrides = [parse_override(item) for item in override]
    configure_state(ctx, environment=environment, overrides=overrides, verbose=verbose)


def _check_inputs(inputs: List[Path]) -> None:
    missing = [str(path) for path in inputs if not path.exists()]
    if missing:
        raise CLIError(f"Input file(s) not found: {', '.join(missing)}")


@app.command("build")
def build_command(
    ctx: typer.Context,
    inputs: List[Path] = typer.Argument(..., help="JSON Lines files of parsed comment records."),
    output: Path = typer.Option(..., "--output", help="Destination path for the forest JSON."),
    manifest: Optional[Path] = typer.Option(None, "--manifest", help="Optional run manifest output."),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with status 1 when any diagnostic or violation is reported."
    ),
) -> None:
    """Enrich comment records and write the resolved documentation forest."""

    state = get_state(ctx)
    _check_inputs(inputs)
    try:
        result = assemble_documentation(
            inputs, output, settings=state.settings, manifest_path=manifest
        )
    except ValueError as exc:
        raise CLIError(str(exc)) from exc

    stats = result.validation_report.forest_stats
    console.print(
        f"[green]Wrote[/green] {output} "
        f"({stats.get('root_count', len(result.forest))} roots, "
        f"{result.validation_report.diagnostic_summary.get('total', 0)} diagnostics)"
    )
    if strict and not result.validation_report.passed:
        raise typer.Exit(code=1)


@app.command("lint")
def lint_command(
    ctx: typer.Context,
    inputs: List[Path] = typer.Argument(..., help="JSON Lines files of parsed comment records."),
    findings: Optional[Path] = typer.Option(None, "--findings", help="Optional JSON findings output."),
) -> None:
    """Report non-standard or unresolvable documentation."""

    state = get_state(ctx)
    _check_inputs(inputs)
    try:
        result = assemble_documentation(
            inputs, settings=state.settings, lint=True, findings_path=findings
        )
    except ValueError as exc:
        raise CLIError(str(exc)) from exc

    if not result.findings:
        console.print("[green]No lint findings.[/green]")
        return

    table = Table(title="Lint findings")
    table.add_column("File")
    table.add_column("Line", justify="right")
    table.add_column("Message")
    for finding in result.findings:
        table.add_row(
            finding.file or "<unknown>",
            "" if finding.line is None else str(finding.line),
            finding.message,
        )
    console.print(table)
    raise typer.Exit(code=1)
