"""Command-line interface for dialog-lint."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from dialoglint.linter.catalog import RuleCatalog
from dialoglint.linter.errors import ParseError
from dialoglint.linter.models import Severity
from dialoglint.linter.pipeline import validate
from dialoglint.linter.report import format_finding, summarize, to_records
from dialoglint.options import LintOptions, configure_logging, load_options

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_UNREADABLE = 2

app = typer.Typer(
    name="dialog-lint",
    help="Lint low-code bot dialog YAML against the authoring guide.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

_SEVERITY_STYLE = {Severity.error: "red", Severity.warning: "yellow"}


def _resolve_catalog(profile: Optional[str], disable: Optional[list[str]]) -> RuleCatalog:
    try:
        options = load_options()
        if profile is not None or disable:
            options = LintOptions(
                profile=profile if profile is not None else options.profile,
                disabled_rules=list(disable) if disable else options.disabled_rules,
            )
        return options.catalog()
    except ValueError as e:
        err_console.print(f"[bold red]Invalid options:[/] {escape(str(e))}", soft_wrap=True)
        raise typer.Exit(code=EXIT_UNREADABLE)


# ---------------------------------------------------------------------------
# dialog-lint check
# ---------------------------------------------------------------------------


@app.command()
def check(
    files: Annotated[list[Path], typer.Argument(help="Dialog YAML file(s) to lint")],
    profile: Annotated[
        Optional[str],
        typer.Option("--profile", "-p", help="Convention profile: core, init-prefix, plain-variable"),
    ] = None,
    disable: Annotated[
        Optional[list[str]],
        typer.Option("--disable", "-d", help="Rule id to skip (repeatable)"),
    ] = None,
    output_format: Annotated[
        str, typer.Option("--format", "-f", help="Output format: text or json")
    ] = "text",
) -> None:
    """Lint dialog files. Exit 1 if any file has errors, 2 if any file cannot be read or parsed."""
    if output_format not in ("text", "json"):
        err_console.print(f"[bold red]Unknown format:[/] {escape(output_format)}")
        raise typer.Exit(code=EXIT_UNREADABLE)

    configure_logging()
    catalog = _resolve_catalog(profile, disable)

    exit_code = EXIT_OK
    reports: list[dict] = []
    for path in files:
        try:
            text = path.read_text(encoding="utf-8")
            result = validate(text, catalog)
        except (OSError, UnicodeDecodeError) as e:
            err_console.print(f"[bold red]Cannot read[/] {escape(str(path))}: {escape(str(e))}", soft_wrap=True)
            reports.append({"file": str(path), "error": {"kind": "Unreadable", "message": str(e)}})
            exit_code = EXIT_UNREADABLE
            continue
        except ParseError as e:
            err_console.print(f"[bold red]{escape(str(path))}:{e.line}:{e.column}[/] {escape(str(e))}", soft_wrap=True)
            reports.append({"file": str(path), "error": e.to_dict()})
            exit_code = EXIT_UNREADABLE
            continue

        if not result.passed and exit_code == EXIT_OK:
            exit_code = EXIT_FINDINGS

        if output_format == "json":
            reports.append(
                {
                    "file": str(path),
                    "passed": result.passed,
                    "error_count": result.error_count,
                    "warning_count": result.warning_count,
                    "profile": result.profile,
                    "findings": to_records(result),
                }
            )
            continue

        console.print(f"[bold]{escape(str(path))}[/]", soft_wrap=True)
        for finding in result.findings:
            style = _SEVERITY_STYLE.get(finding.severity, "")
            line = f"{path}:{finding.line}:{finding.column}: {format_finding(finding)}"
            console.print(line, style=style, markup=False, highlight=False, soft_wrap=True)
        console.print(summarize(result), markup=False, highlight=False, soft_wrap=True)

    if output_format == "json":
        typer.echo(json.dumps(reports, indent=2))

    raise typer.Exit(code=exit_code)


# ---------------------------------------------------------------------------
# dialog-lint rules
# ---------------------------------------------------------------------------


@app.command()
def rules(
    profile: Annotated[
        Optional[str],
        typer.Option("--profile", "-p", help="Convention profile: core, init-prefix, plain-variable"),
    ] = None,
) -> None:
    """List the rules of the active catalog."""
    catalog = _resolve_catalog(profile, None)

    table = Table(title=f"Rules (profile: {catalog.profile})", show_header=True)
    table.add_column("Rule", style="cyan", no_wrap=True)
    table.add_column("Severity")
    table.add_column("Description")
    for rule in catalog:
        style = _SEVERITY_STYLE.get(rule.severity, "")
        table.add_row(rule.id, f"[{style}]{rule.severity.value}[/]", rule.description)
    console.print(table)


# ---------------------------------------------------------------------------
# dialog-lint serve
# ---------------------------------------------------------------------------


@app.command()
def serve(
    host: Annotated[str, typer.Option(help="Bind address")] = "127.0.0.1",
    port: Annotated[int, typer.Option(help="Bind port")] = 8099,
) -> None:
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run("dialoglint.main:app", host=host, port=port)


if __name__ == "__main__":
    app()
