"""Rich terminal reporter: per-file findings, icons, summary."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.text import Text

from rulekit.findings.models import Finding, ValidationResult

_SEVERITY_STYLE = {
    "error": "red",
    "warning": "yellow",
}

_SEVERITY_ICON = {
    "error": "❌",
    "warning": "⚠️ ",
}


def _finding_line(finding: Finding) -> Text:
    style = _SEVERITY_STYLE.get(finding.severity, "")
    icon = _SEVERITY_ICON.get(finding.severity, "")
    line = Text(f"{icon} {finding.message}", style=style)
    if finding.line_no > 0:
        line.append(f"  (line {finding.line_no}, {finding.check_id})", style="dim")
    else:
        line.append(f"  ({finding.check_id})", style="dim")
    return line


def print_header(console: Console, file_count: int) -> None:
    console.print("[bold blue]🔍 Cursor Rules Validation[/bold blue]")
    console.print("[blue]=========================[/blue]")
    console.print()
    console.print(f"Found [magenta]{file_count}[/magenta] rule file(s) to validate")
    console.print()


def render(
    result: ValidationResult,
    *,
    show_summary: bool = True,
    console: Optional[Console] = None,
    file_count: Optional[int] = None,
) -> None:
    """Print validation results to the terminal using Rich.

    *file_count* is the number of rule files found, including ignored and
    unreadable ones; it defaults to the checked plus skipped files.
    """
    console = console or Console(stderr=True)

    if file_count is None:
        file_count = result.files_checked + len(result.skipped_files)
    print_header(console, file_count)

    reported = set()
    for file in result.checked_files:
        reported.add(file)
        _print_file(console, file, result)

    # findings for files that never loaded (unreadable / missing)
    for finding in result.findings:
        if finding.file not in reported:
            reported.add(finding.file)
            _print_file(console, finding.file, result)

    if show_summary:
        _print_summary(console, result)


def _print_file(console: Console, file: str, result: ValidationResult) -> None:
    console.print(f"[magenta]📄 Validating: {escape(file)}[/magenta]")
    console.print("----------------------------------------")
    findings = result.findings_for(file)
    if not findings:
        console.print("[green]✅ All checks passed[/green]")
    for finding in findings:
        console.print(_finding_line(finding))
    console.print()


def _print_summary(console: Console, result: ValidationResult) -> None:
    errors = result.errors
    warnings = result.warnings

    console.print()
    console.print("[bold blue]📊 Validation Summary[/bold blue]")
    console.print("[blue]===================[/blue]")
    console.print(f"Total files checked: [magenta]{result.files_checked}[/magenta]")
    console.print(f"Errors found: [red]{errors}[/red]")
    console.print(f"Warnings found: [yellow]{warnings}[/yellow]")
    if result.skipped_files:
        console.print(f"[dim]Skipped:[/dim] {len(result.skipped_files)}")
    console.print(f"[dim]Duration:[/dim] {result.duration_ms:.0f}ms")

    if errors == 0 and warnings == 0:
        console.print("[green]✅ All rules are valid![/green]")
    elif errors == 0:
        console.print("[yellow]⚠️  All rules are syntactically valid but have warnings[/yellow]")
    else:
        console.print("[red]❌ Some rules have errors that need fixing[/red]")
