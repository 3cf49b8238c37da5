"""
Command line interface for the theme resolver.

Commands:
    resolve  Resolve a stylesheet and print (or write) the themes as JSON
    check    Report conflicts, unresolved references and deprecations
    init     Write a starter themeresolver.yaml
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from . import __version__
from .analysis.conflicts import filter_resolvable_conflicts
from .config import ResolverConfig, config_exists, get_config_path, load_config, load_config_file, save_config
from .errors import ThemeResolverError
from .pipeline import ResolutionResult, resolve_file

console = Console()

app = typer.Typer(
    help="Resolve CSS custom-property design tokens into per-variant themes.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print the version and exit."""
    if value:
        typer.echo(f"theme-resolver {__version__}")
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
    """Theme resolver global options."""
    pass


def _configure_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load(config_file: Path | None, project_dir: Path) -> ResolverConfig:
    if config_file is not None:
        return load_config_file(config_file)
    return load_config(project_dir)


def _run(css_file: Path, config: ResolverConfig) -> ResolutionResult:
    if not css_file.exists():
        typer.echo(f"Error: File not found: {css_file}", err=True)
        raise typer.Exit(code=1)
    _configure_logging(config.debug)
    return resolve_file(css_file, config)


# =============================================================================
# Commands
# =============================================================================


@app.command("resolve")
def resolve_command(
    css_file: Path = typer.Argument(..., help="Stylesheet to resolve"),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Config file path"),
    project_dir: Path = typer.Option(".", "--project-dir", "-p", help="Project directory"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Write JSON here instead of stdout"),
    no_defaults: bool = typer.Option(False, "--no-defaults", help="Skip the baseline theme"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
) -> None:
    """Resolve a stylesheet into themes and print them as JSON."""
    try:
        config = _load(config_file, project_dir)
        updates: dict[str, object] = {}
        if no_defaults:
            updates["include_defaults"] = False
        if debug:
            updates["debug"] = True
        if updates:
            config = config.model_copy(update=updates)
        result = _run(css_file, config)
    except ThemeResolverError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    payload = json.dumps(result.to_dict(), indent=2)
    if output is None:
        typer.echo(payload)
        return

    output.write_text(payload + "\n", encoding="utf-8")
    typer.echo(f"Wrote {len(result.themes)} themes to {output}")


@app.command("check")
def check_command(
    css_file: Path = typer.Argument(..., help="Stylesheet to check"),
    config_file: Path | None = typer.Option(None, "--config", "-c", help="Config file path"),
    project_dir: Path = typer.Option(".", "--project-dir", "-p", help="Project directory"),
    strict: bool = typer.Option(
        False, "--strict", help="Exit non-zero on unresolved references or unapplied conflicts"
    ),
) -> None:
    """Report conflicts, unresolved references and deprecated variables."""
    try:
        result = _run(css_file, _load(config_file, project_dir))
    except ThemeResolverError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(code=1)

    applied = filter_resolvable_conflicts(result.conflicts)
    if result.conflicts:
        table = Table(title="Conflicts")
        table.add_column("Variant")
        table.add_column("Token")
        table.add_column("Variable")
        table.add_column("Rule")
        table.add_column("Confidence")
        table.add_column("Applied")
        for conflict in result.conflicts:
            table.add_row(
                escape(conflict.variant_name),
                f"{conflict.theme_property}.{conflict.theme_key}",
                escape(conflict.variable_value),
                escape(f"{conflict.rule_selector} = {conflict.rule_value}"),
                str(conflict.confidence),
                "[green]yes[/green]" if conflict in applied else "[yellow]no[/yellow]",
            )
        console.print(table)

    if result.unresolved:
        table = Table(title="Unresolved references")
        table.add_column("Variable")
        table.add_column("Reference")
        table.add_column("Source")
        table.add_column("Likely cause")
        for ref in result.unresolved:
            table.add_row(
                ref.variable_name, escape(ref.referenced_variable), str(ref.source), str(ref.likely_cause)
            )
        console.print(table)

    for notice in result.deprecations:
        console.print(f"[yellow]Deprecated:[/yellow] {notice.variable} - {escape(notice.message)}")

    unapplied = [c for c in result.conflicts if c not in applied]
    if not (result.conflicts or result.unresolved or result.deprecations):
        console.print("[green]No issues found[/green]")
    else:
        console.print(
            f"\n[dim]{len(result.conflicts)} conflict(s), {len(result.unresolved)} unresolved, "
            f"{len(result.deprecations)} deprecated[/dim]"
        )

    if strict and (result.unresolved or unapplied):
        raise typer.Exit(code=1)


@app.command("init")
def init_command(
    project_dir: Path = typer.Option(".", "--project-dir", "-p", help="Project directory"),
    baseline: Path | None = typer.Option(None, "--baseline", "-b", help="Baseline stylesheet"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
) -> None:
    """Write a themeresolver.yaml with default settings."""
    if config_exists(project_dir) and not force:
        typer.echo(f"Error: {get_config_path(project_dir)} already exists (use --force)", err=True)
        raise typer.Exit(code=1)

    path = save_config(project_dir, ResolverConfig(baseline=baseline))
    typer.echo(f"Created {path}")


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
