"""
CLI for docset-lint.

Usage:
    docset-lint check
    docset-lint check -p docs-repo -k links -k fences --format json
    docset-lint checks
    docset-lint stats --json
    docset-lint inspect .claude/commands/fix-form.md
    docset-lint config
"""

import json
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docset_lint import __version__
from docset_lint.checks import CHECKS
from docset_lint.config import LintConfig
from docset_lint.errors import ConfigError, DocsetError, FrontMatterError
from docset_lint.logging import configure_logging, get_logger
from docset_lint.orchestrator import LintOrchestrator
from docset_lint.report import REPORTERS, get_reporter
from docset_lint.walker import DocumentWalker

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

project_root_option = click.option(
    "--project-root", "-p",
    type=click.Path(exists=True, file_okay=False),
    default=".",
    help="Root directory of the documentation set.",
)
config_option = click.option(
    "--config", "-c", "config_path",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file (defaults to .docset-lint.yaml in the project root).",
)


def _load_config(project_root: str, config_path: str | None) -> LintConfig:
    if config_path:
        return LintConfig.from_yaml(Path(config_path), project_root=Path(project_root))
    return LintConfig.discover(Path(project_root))


def _fail(error: DocsetError) -> None:
    """Print a configuration/usage error and exit with status 2."""
    err_console.print(f"[bold red]Error:[/bold red] {escape(str(error))}")
    sys.exit(2)


LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.group()
@click.version_option(version=__version__, prog_name="docset-lint")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for diagnostics written to stderr.",
)
@click.option("--json-logs", is_flag=True, help="Emit diagnostics as JSON lines.")
@click.pass_context
def cli(ctx: click.Context, log_level: str, json_logs: bool):
    """Validate a Markdown documentation set.

    Checks slash-command front-matter, relative links, code fence
    languages, document titles and code template headers.
    """
    ctx.ensure_object(dict)
    ctx.obj["log_level"] = log_level
    ctx.obj["json_logs"] = json_logs
    configure_logging(level=log_level, json_format=json_logs)


@cli.command()
@project_root_option
@config_option
@click.option(
    "--check", "-k", "check_names",
    multiple=True,
    help="Run only these checks (repeatable). Runs all if not specified.",
)
@click.option(
    "--format", "-f", "output_format",
    type=click.Choice(sorted(REPORTERS)),
    default="console",
    show_default=True,
    help="Report format.",
)
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False),
    help="Write the report to a file instead of stdout.",
)
@click.option("--strict", is_flag=True, help="Exit non-zero on warnings too.")
@click.option(
    "--log-level", "check_log_level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    help="Override the group log level for this run.",
)
@click.option("--json-logs", "check_json_logs", is_flag=True, help="Emit diagnostics as JSON lines.")
@click.pass_context
def check(
    ctx: click.Context,
    project_root: str,
    config_path: str | None,
    check_names: tuple,
    output_format: str,
    output: str | None,
    strict: bool,
    check_log_level: str | None,
    check_json_logs: bool,
):
    """Lint the documentation set and print a report.

    Exit status is 0 when clean, 1 when errors (or, with --strict,
    warnings) were found, and 2 on configuration errors.

    Examples:
        docset-lint check
        docset-lint check -k links -k fences
        docset-lint check --format markdown -o lint-report.md
    """
    if check_log_level or check_json_logs:
        settings = ctx.obj or {}
        configure_logging(
            level=check_log_level or settings.get("log_level", "WARNING"),
            json_format=check_json_logs or settings.get("json_logs", False),
        )

    try:
        config = _load_config(project_root, config_path)
        orchestrator = LintOrchestrator(
            Path(project_root), config=config, checks=list(check_names) or None
        )
        report = orchestrator.run()
        reporter = get_reporter(output_format)
    except ConfigError as e:
        _fail(e)

    if output:
        output_path = Path(output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(reporter.render(report), encoding="utf-8")
        console.print(f"✅ Report written to {escape(str(output_path))}")
        counts = report.counts
        console.print(f"   {counts['error']} errors, {counts['warning']} warnings")
    else:
        reporter.write(report, console)

    sys.exit(report.exit_code(strict=strict))


@cli.command(name="checks")
def list_checks():
    """List available checks and the rules they report."""
    table = Table(title="Checks")
    table.add_column("Check", style="cyan")
    table.add_column("Rule")
    table.add_column("Default", justify="center")
    table.add_column("Description")

    for name, check_class in CHECKS.items():
        first = True
        for rule, severity in check_class.rules.items():
            table.add_row(
                name if first else "",
                rule,
                severity.value,
                check_class.description if first else "",
            )
            first = False

    console.print(table)


@cli.command()
@project_root_option
@config_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
def stats(project_root: str, config_path: str | None, as_json: bool):
    """Show statistics about the documentation set."""
    try:
        config = _load_config(project_root, config_path)
    except ConfigError as e:
        _fail(e)

    orchestrator = LintOrchestrator(Path(project_root), config=config)
    data = orchestrator.get_stats()

    if as_json:
        click.echo(json.dumps(data, indent=2))
        return

    console.print("\n[bold blue]📊 Documentation Set Statistics[/bold blue]\n")

    table = Table()
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right")

    table.add_row("Documents", str(data["documents"]))
    for kind, count in data["by_kind"].items():
        table.add_row(f"  {kind}", str(count))
    table.add_row("Slash commands", str(data["commands"]))
    table.add_row("Unreadable files", str(data["unreadable"]))
    table.add_row("Links", str(data["links"]["total"]))
    table.add_row("  relative", str(data["links"]["relative"]))
    table.add_row("  external", str(data["links"]["external"]))
    table.add_row("Code fences", str(data["fences"]["total"]))
    table.add_row("  untagged", str(data["fences"]["untagged"]))
    table.add_row("Headings", str(data["headings"]))

    console.print(table)


@cli.command()
@click.argument("file_path", type=click.Path(exists=True, dir_okay=False))
@project_root_option
def inspect(file_path: str, project_root: str):
    """Show what the parser extracts from a single file.

    Useful for checking why a link or fence is (or is not) reported.
    """
    try:
        walker = DocumentWalker(LintConfig.discover(Path(project_root)))
        document = walker.walk_file(Path(file_path).resolve())
    except DocsetError as e:
        _fail(e)

    console.print(f"\n[bold blue]📄 {escape(str(document.rel_path))}[/bold blue] ({document.kind})\n")

    if not document.is_markdown:
        console.print(f"Lines: {len(document.lines)}")
        return

    console.print(f"Slash command: {'✅' if document.is_command else 'no'}")
    try:
        front_matter = document.front_matter
    except FrontMatterError as e:
        console.print(f"Front-matter: [red]invalid[/red] ({escape(str(e))})")
    else:
        if front_matter.present:
            keys = ", ".join(str(k) for k in front_matter.data) or "(empty)"
            console.print(f"Front-matter keys: {escape(keys)}")
        else:
            console.print("Front-matter: none")

    parsed = document.markdown

    console.print(f"\n[bold]Headings ({len(parsed.headings)}):[/bold]")
    for heading in parsed.headings:
        console.print(
            f"  {heading.line:>4}  {'#' * heading.level} {escape(heading.text)}  "
            f"[dim]#{escape(heading.anchor)}[/dim]"
        )

    console.print(f"\n[bold]Links ({len(parsed.links)}):[/bold]")
    for link in parsed.links:
        kind = "image" if link.is_image else "ref" if link.is_reference else "link"
        console.print(f"  {link.line:>4}  {kind:<5} {escape(link.target)}")

    console.print(f"\n[bold]Code fences ({len(parsed.fences)}):[/bold]")
    for fence in parsed.fences:
        language = escape(fence.language) if fence.language else "[yellow](none)[/yellow]"
        status = "" if fence.closed else "  [red]unclosed[/red]"
        console.print(f"  {fence.line:>4}  {language}{status}")
    console.print()


@cli.command(name="config")
@project_root_option
@config_option
def show_config(project_root: str, config_path: str | None):
    """Print the effective configuration as YAML."""
    try:
        config = _load_config(project_root, config_path)
    except ConfigError as e:
        _fail(e)
    click.echo(config.to_yaml(), nl=False)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
