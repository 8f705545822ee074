"""rulekit CLI: Typer application with validate, copy, install, list, install-cli, and init."""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional, Set

import typer
from rich.console import Console
from rich.markup import escape

from rulekit import __version__
from rulekit.config.schema import RulekitConfig

app = typer.Typer(
    name="rulekit",
    help="Validate, copy, and install editor rule documents.",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console(stderr=True)
stdout_console = Console()


def _detect_ci() -> bool:
    """Auto-detect CI environment."""
    return os.environ.get("CI", "").lower() in ("true", "1", "yes")


def _load_config(config: Optional[str]) -> RulekitConfig:
    """Load config from the working directory, exit 2 on failure."""
    from rulekit.config.loader import ConfigError, load_config

    try:
        return load_config(Path.cwd(), config)
    except ConfigError as exc:
        console.print(f"[bold red]Config error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc


# Log helpers mirror the icons of the shell tools these commands replace.


def _info(message: str, quiet: bool = False) -> None:
    if not quiet:
        console.print(f"[green]ℹ️  {escape(message)}[/green]")


def _warn(message: str, quiet: bool = False) -> None:
    if not quiet:
        console.print(f"[yellow]⚠️  {escape(message)}[/yellow]")


def _error(message: str) -> None:
    console.print(f"[red]❌ {escape(message)}[/red]")


def _success(message: str, quiet: bool = False) -> None:
    if not quiet:
        console.print(f"[green]✅ {escape(message)}[/green]")


# ── validate ──────────────────────────────────────────────────────────────────


@app.command()
def validate(
    paths: Optional[List[Path]] = typer.Argument(
        None, help="Rule files to validate (default: every .mdc in the rules directory)"
    ),
    rules_dir: Optional[str] = typer.Option(None, "--rules-dir", "-r", help="Rules directory to validate"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulekit.toml"),
    strict: bool = typer.Option(False, "--strict", help="Treat warnings as errors"),
    format: Optional[str] = typer.Option(None, "--format", "-f", help="Output format: terminal | json | sarif"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write report to file"),
    ci: bool = typer.Option(False, "--ci", help="Enable CI mode (GitHub annotations)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Validate rule documents: frontmatter, naming, structure, and content quality."""
    from rulekit.checks.registry import CheckLoadError, build_registry
    from rulekit.documents.discovery import find_rules_dir, iter_rule_files
    from rulekit.findings.models import ValidationResult
    from rulekit.output import json_report, sarif, terminal
    from rulekit.validator.engine import ValidationError, validate as run_validate

    cfg = _load_config(config)
    ci_mode = ci or _detect_ci()

    # --- CLI overrides ---
    if format:
        if format not in ("terminal", "json", "sarif"):
            console.print(f"[bold red]Invalid format:[/bold red] {escape(format)}")
            raise typer.Exit(code=2)
        cfg.output.format = format  # type: ignore[assignment]
    if strict:
        cfg.validate.fail_on = "warning"
    if ci_mode and os.environ.get("GITHUB_ACTIONS") == "true" and cfg.ci.annotation_format == "none":
        cfg.ci.annotation_format = "github"

    # --- Locate files ---
    root: Optional[Path]
    if rules_dir:
        root = Path(rules_dir).expanduser()
    else:
        root = find_rules_dir(Path.cwd(), cfg.rules.dir)

    if paths:
        files = list(paths)
        if root is not None and not root.is_dir():
            root = None
    else:
        if root is None or not root.is_dir():
            _error(f"Rules directory not found: {root or cfg.rules.dir}")
            raise typer.Exit(code=1)
        files = iter_rule_files(root)
        if not files:
            _warn(f"No .mdc files found in {root}")
            empty = ValidationResult(strict=cfg.strict)
            if cfg.output.format == "json":
                print(json_report.render(empty))
            elif cfg.output.format == "sarif":
                print(sarif.render(empty, uri_base=_uri_base(root)))
            raise typer.Exit(code=0)

    # --- Build checks ---
    try:
        registry = build_registry(cfg, Path.cwd())
    except CheckLoadError as exc:
        console.print(f"[bold red]Check error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    if verbose:
        console.print(f"[dim]Checks enabled: {len(registry.enabled_checks())}[/dim]")
        console.print(f"[dim]Rules directory: {escape(str(root))}[/dim]")
        console.print(f"[dim]Fail on: {cfg.validate.fail_on}[/dim]")

    # --- Run ---
    try:
        result = run_validate(files, cfg, registry, root)
    except ValidationError as exc:
        console.print(f"[bold red]Validator error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=2) from exc

    # --- Output ---
    report_text: Optional[str] = None

    if cfg.output.format == "terminal":
        terminal.render(
            result,
            show_summary=cfg.output.show_summary,
            console=console,
            file_count=len(files),
        )
    elif cfg.output.format == "json":
        report_text = json_report.render(result)
        print(report_text)
    elif cfg.output.format == "sarif":
        report_text = sarif.render(result, uri_base=_uri_base(root))
        print(report_text)

    if output:
        if report_text is None:
            report_text = json_report.render(result)
        Path(output).write_text(report_text, encoding="utf-8")
        if verbose:
            console.print(f"[dim]Report written to {escape(output)}[/dim]")

    if cfg.ci.annotation_format == "github" and result.findings:
        _emit_ci_annotations(result, _uri_base(root))

    # --- Exit code ---
    if result.blocked:
        if cfg.strict and result.warnings and cfg.output.format == "terminal":
            _error("Strict mode: treating warnings as errors")
        raise typer.Exit(code=1)

    raise typer.Exit(code=0)


def _uri_base(root: Optional[Path]) -> str:
    """Rules directory relative to the working directory, with a trailing slash."""
    if root is None:
        return ""
    try:
        rel = root.resolve().relative_to(Path.cwd().resolve())
    except ValueError:
        return ""
    text = rel.as_posix()
    return "" if text == "." else f"{text}/"


def _emit_ci_annotations(result, uri_base: str) -> None:
    """Emit GitHub Actions workflow commands, one per finding."""
    for f in result.findings:
        level = "error" if f.is_blocking else "warning"
        location = f"file={uri_base}{f.file}"
        if f.line_no > 0:
            location += f",line={f.line_no}"
        print(f"::{level} {location}::{f.check_id}: {f.message}")


# ── copy ──────────────────────────────────────────────────────────────────────


@app.command("copy")
def copy_rules(
    target: Optional[Path] = typer.Argument(None, help="Target directory (default: current directory)"),
    flatten: bool = typer.Option(False, "--flatten", "-f", help="Copy all rules into the target root"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Suppress output messages"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be copied without copying"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Rules directory to copy from"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulekit.toml"),
) -> None:
    """Copy every rule from the nearest .cursor/rules to another directory.

    Exit codes: 0 success, 1 copy failed, 2 invalid arguments,
    3 source not found, 4 permission denied.
    """
    from rulekit.install.copier import (
        CopyError,
        PermissionDeniedError,
        SourceNotFoundError,
        check_permissions,
        copy_file,
        plan_flattened,
        plan_structured,
        prepare_target,
        resolve_source,
    )

    cfg = _load_config(config)

    _info(f"Looking for {cfg.rules.dir} directory...", quiet)
    try:
        source_dir = resolve_source(source, Path.cwd(), cfg.rules.dir)
    except SourceNotFoundError as exc:
        _error(str(exc))
        _error("Make sure you're in a project with cursor rules or run from a subdirectory")
        raise typer.Exit(code=3) from exc
    _success(f"Found rules directory: {source_dir}", quiet)

    target_dir = (target or Path.cwd()).expanduser()
    try:
        if prepare_target(target_dir, dry_run=dry_run):
            verb = "Would create" if dry_run else "Created"
            _info(f"{verb} target directory: {target_dir}", quiet)
        target_dir = target_dir.resolve()
        check_permissions(source_dir, target_dir, dry_run=dry_run)
    except PermissionDeniedError as exc:
        _error(str(exc))
        raise typer.Exit(code=4) from exc

    if target_dir == source_dir:
        _error("Target directory is the source rules directory")
        raise typer.Exit(code=2)

    _info(f"Source: {source_dir}", quiet)
    _info(f"Target: {target_dir}", quiet)
    if dry_run:
        _warn("DRY RUN MODE - No files will actually be copied", quiet)

    if flatten:
        _info("Copying rules with flattened structure...", quiet)
        actions = plan_flattened(source_dir, target_dir)
    else:
        _info("Copying rules with directory structure preserved...", quiet)
        actions = plan_structured(source_dir, target_dir)

    for action in actions:
        if action.renamed_from:
            _warn(f"File conflict resolved: {action.renamed_from} -> {action.label}", quiet)
        if dry_run:
            if flatten:
                print(f"Would copy: {action.source.name} -> {action.label}")
            else:
                print(f"Would copy: {action.label}")
            continue
        try:
            copy_file(action)
        except CopyError as exc:
            _error(str(exc))
            raise typer.Exit(code=1) from exc
        _info(f"Copied: {action.label}", quiet)

    if dry_run:
        _info("Dry run completed", quiet)
    else:
        _success(f"Rules copied successfully to: {target_dir}", quiet)


# ── install ───────────────────────────────────────────────────────────────────


@app.command()
def install(
    target: Optional[Path] = typer.Argument(None, help="Target rules directory (default: .cursor/rules)"),
    category: Optional[List[str]] = typer.Option(
        None, "--category", "-C", help="Install only this category (repeatable)"
    ),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be installed"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Rules collection to install from"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulekit.toml"),
) -> None:
    """Install rule categories (default: all) into a project's rules directory."""
    from rulekit.install.categories import CategoryNotFoundError, plan_all, plan_category, rule_count
    from rulekit.install.copier import CopyError, SourceNotFoundError, copy_file, resolve_source

    cfg = _load_config(config)

    try:
        rules_dir = resolve_source(source, Path.cwd(), cfg.rules.dir)
    except SourceNotFoundError as exc:
        _error(str(exc))
        raise typer.Exit(code=3) from exc

    target_dir = (target or Path(cfg.install.target)).expanduser().resolve()
    if target_dir == rules_dir:
        _error("Target is the source rules directory; pass --source or a different target")
        raise typer.Exit(code=2)

    categories_dir = cfg.rules.categories_dir
    batches = []
    claimed: Set[str] = set()
    try:
        if category:
            for name in dict.fromkeys(category):
                batches.append(
                    (name, plan_category(rules_dir, target_dir, name, categories_dir, claimed))
                )
        else:
            batches.append((None, plan_all(rules_dir, target_dir, categories_dir)))
    except CategoryNotFoundError as exc:
        _error(str(exc))
        raise typer.Exit(code=1) from exc

    for name, actions in batches:
        scope = f"{name} rules" if name else "all rules"
        console.print(f"[blue]Installing {escape(scope)} to {escape(str(target_dir))}...[/blue]")
        for action in actions:
            if action.renamed_from:
                _warn(f"File conflict resolved: {action.renamed_from} -> {action.label}")
            if dry_run:
                print(f"Would copy: {action.label}")
                continue
            try:
                copy_file(action)
            except CopyError as exc:
                _error(str(exc))
                raise typer.Exit(code=1) from exc

        count = rule_count(actions)
        if name:
            console.print(f"[green]✓ Installed {count} rules from {escape(name)} category[/green]")
        else:
            console.print(f"[green]✓ Installed {count} rules total[/green]")

    if dry_run:
        _info("Dry run completed")
        return
    console.print("[green]Installation complete! 🎉[/green]")
    console.print("[blue]Don't forget to restart Cursor to load the new rules.[/blue]")


# ── list ──────────────────────────────────────────────────────────────────────


@app.command("list")
def list_rules(
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Rules collection to list"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulekit.toml"),
) -> None:
    """List available rules grouped by category."""
    from rulekit.install.categories import available_rules
    from rulekit.install.copier import SourceNotFoundError, resolve_source

    cfg = _load_config(config)

    try:
        rules_dir = resolve_source(source, Path.cwd(), cfg.rules.dir)
    except SourceNotFoundError as exc:
        _error(str(exc))
        raise typer.Exit(code=3) from exc

    stdout_console.print("[blue]Available Rules:[/blue]")
    for _name, label, files in available_rules(rules_dir, cfg.install.labels, cfg.rules.categories_dir):
        stdout_console.print()
        stdout_console.print(f"[yellow]{escape(label)}:[/yellow]")
        if not files:
            stdout_console.print("  (none found)")
        for filename in files:
            stdout_console.print(f"  - {escape(filename)}")


# ── install-cli ───────────────────────────────────────────────────────────────


@app.command("install-cli")
def install_cli(
    install_path: Optional[str] = typer.Argument(None, help="Install directory (default: ~/.local/bin)"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing launcher"),
    uninstall: bool = typer.Option(False, "--uninstall", "-u", help="Remove the launcher and its PATH entry"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Show what would be done"),
    no_shell_config: bool = typer.Option(False, "--no-shell-config", help="Do not modify the shell config"),
    config: Optional[str] = typer.Option(None, "--config", "-c", help="Path to .rulekit.toml"),
) -> None:
    """Install a copy-cursor-rules launcher on PATH (or remove it with --uninstall)."""
    from rulekit.install.launcher import install_launcher, uninstall_launcher

    cfg = _load_config(config)
    install_dir = Path(install_path or cfg.cli.install_dir).expanduser()
    shell_config = Path(cfg.cli.shell_config).expanduser()
    tool = cfg.cli.tool_name

    if uninstall:
        ok, messages = uninstall_launcher(install_dir, tool, shell_config, dry_run=dry_run)
        _print_outcome(ok, messages)
        if not ok:
            raise typer.Exit(code=1)
        if not dry_run:
            _success("Uninstallation complete")
            _warn(f"Restart your terminal or run: source {shell_config}")
        return

    _info(f"Install path: {install_dir}")
    if no_shell_config:
        _warn("Skipping shell configuration modification")
    else:
        _info(f"Shell config: {shell_config}")

    ok, messages = install_launcher(
        install_dir,
        tool,
        shell_config,
        force=force,
        dry_run=dry_run,
        modify_shell_config=not no_shell_config,
    )
    _print_outcome(ok, messages)
    if not ok:
        raise typer.Exit(code=1)
    if dry_run:
        return

    if no_shell_config:
        _info(f"You can now use: {tool} --help (if {install_dir} is in PATH)")
    else:
        _info(f"You can now use: {tool} --help")
        _warn(f"Restart your terminal or run: source {shell_config}")


def _print_outcome(ok: bool, messages: List[str]) -> None:
    for msg in messages:
        if ok:
            console.print(f"[green]✓[/green] {escape(msg)}")
        else:
            console.print(f"[red]✗[/red] {escape(msg)}")


# ── init ──────────────────────────────────────────────────────────────────────


@app.command()
def init() -> None:
    """Generate a starter .rulekit.toml in the current directory."""
    from rulekit.config.defaults import DEFAULT_TOML
    from rulekit.config.loader import CONFIG_FILENAME

    config_path = Path.cwd() / CONFIG_FILENAME

    if config_path.exists():
        console.print(f"[yellow]⚠[/yellow]  {CONFIG_FILENAME} already exists at {escape(str(config_path))}")
        raise typer.Exit(code=1)

    config_path.write_text(DEFAULT_TOML, encoding="utf-8")
    console.print(f"[green]✓[/green] Created {escape(str(config_path))}")


# ── version ───────────────────────────────────────────────────────────────────


def _version_callback(value: bool) -> None:
    if value:
        print(f"rulekit {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", "-V", callback=_version_callback,
        is_eager=True, help="Show version and exit",
    ),
) -> None:
    """rulekit: Validate, copy, and install editor rule documents."""
