"""
Report printers.

Turns a ``LintReport`` into console output (rich), JSON, or a Markdown
document rendered from a Jinja2 template.

Example:
    >>> reporter = get_reporter("json")
    >>> print(reporter.render(report))
"""

import io
import json
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from docset_lint import __version__
from docset_lint.errors import ConfigError
from docset_lint.findings import LintReport, Severity

SEVERITY_STYLES = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
    Severity.INFO: "cyan",
}


class BaseReporter(ABC):
    """Base class for report printers."""

    format: str = ""

    @abstractmethod
    def render(self, report: LintReport) -> str:
        """Render the report as text."""

    def write(self, report: LintReport, console: Console | None = None) -> None:
        """Print the rendered report to the console (stdout by default)."""
        console = console or Console()
        console.print(self.render(report), markup=False, highlight=False, emoji=False, soft_wrap=True)


class JsonReporter(BaseReporter):
    format = "json"

    def render(self, report: LintReport) -> str:
        return json.dumps(report.to_dict(), indent=2)


class MarkdownReporter(BaseReporter):
    """Render the report through ``report.md.j2``."""

    format = "markdown"
    template_name = "report.md.j2"

    def __init__(self, template_dir: Path | None = None):
        if template_dir is None:
            template_dir = Path(__file__).parent / "templates"
        self.template_dir = Path(template_dir)

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.env.filters["cell"] = self._cell_filter

    def render(self, report: LintReport) -> str:
        template = self.env.get_template(self.template_name)
        return template.render(
            report=report,
            version=__version__,
            generated_at=datetime.now(),
        )

    @staticmethod
    def _cell_filter(value: str) -> str:
        """Make text safe inside a Markdown table cell."""
        return str(value).replace("|", "\\|").replace("\n", " ")


class ConsoleReporter(BaseReporter):
    """Rich table per file plus a summary line."""

    format = "console"

    def write(self, report: LintReport, console: Console | None = None) -> None:
        console = console or Console()

        for path, findings in report.by_path().items():
            table = Table(title=escape(path), title_justify="left", show_edge=False)
            table.add_column("Line", justify="right", style="dim")
            table.add_column("Severity")
            table.add_column("Rule", style="cyan")
            table.add_column("Message")

            for finding in findings:
                message = escape(finding.message)
                if finding.hint:
                    message += f"\n[dim]{escape(finding.hint)}[/dim]"
                table.add_row(
                    str(finding.line) if finding.line is not None else "-",
                    f"[{SEVERITY_STYLES[finding.severity]}]{finding.severity.value}[/]",
                    finding.rule,
                    message,
                )

            console.print(table)
            console.print()

        console.print(self._summary_markup(report))

    def render(self, report: LintReport) -> str:
        buffer = io.StringIO()
        self.write(report, Console(file=buffer, width=120, color_system=None))
        return buffer.getvalue()

    def _summary_markup(self, report: LintReport) -> str:
        counts = report.counts
        summary = (
            f"{report.documents_scanned} documents checked: "
            f"{counts['error']} errors, {counts['warning']} warnings, {counts['info']} info"
        )
        if report.has_errors:
            return f"[bold red]❌ {summary}[/bold red]"
        if report.warnings:
            return f"[bold yellow]⚠️  {summary}[/bold yellow]"
        return f"[bold green]✅ {summary}[/bold green]"


REPORTERS: dict[str, type[BaseReporter]] = {
    "console": ConsoleReporter,
    "json": JsonReporter,
    "markdown": MarkdownReporter,
}


def get_reporter(format: str) -> BaseReporter:
    """Reporter for an output format name.

    Raises:
        ConfigError: If the format is unknown
    """
    try:
        return REPORTERS[format]()
    except KeyError:
        raise ConfigError(
            f"Unknown report format '{format}'; expected one of {', '.join(REPORTERS)}"
        ) from None
