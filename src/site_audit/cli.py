"""CLI interface for site-audit."""

import json
import logging
import random
import sys

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text
from rich import box

from . import __version__
from .config import STRATEGIES, Settings
from .errors import SynthesisError
from .models import AuditReport, Severity
from .recommendations import build_recommendations, quick_wins
from .scoring import score_label
from .synthesizer import synthesize


console = Console()


# Rich style and icon per severity.
SEVERITY_MARKS = {
    Severity.PASS: ("green", "✓"),
    Severity.INFO: ("blue", "ℹ"),
    Severity.WARNING: ("yellow", "⚠"),
    Severity.ERROR: ("red", "✗"),
}


def score_color(score: int) -> str:
    """Get color for a score value."""
    if score >= 90:
        return "green"
    elif score >= 70:
        return "yellow"
    else:
        return "red"


def print_score_bar(score: int, width: int = 20) -> Text:
    """Create a visual score bar."""
    filled = int((score / 100) * width)
    empty = width - filled
    color = score_color(score)

    bar = Text()
    bar.append("█" * filled, style=color)
    bar.append("░" * empty, style="dim")
    bar.append(f" {score}/100", style=f"bold {color}")
    return bar


def _category_rows(report: AuditReport) -> list[tuple[str, int, str]]:
    security = report.security
    performance = report.performance
    seo = report.seo
    accessibility = report.accessibility
    return [
        (
            "Security",
            security.score,
            f"SSL {'yes' if security.ssl else 'no'}, {security.headers}/10 headers, "
            f"{security.vulnerabilities} vulnerabilities",
        ),
        (
            "Performance",
            performance.score,
            f"{performance.load_time:.1f}s load, {performance.page_size:.0f} KB, "
            f"{performance.requests} requests",
        ),
        (
            "SEO",
            seo.score,
            f"{seo.meta_tags}/12 meta tags, headings {'ok' if seo.headings else 'missing'}, "
            f"sitemap {'yes' if seo.sitemap else 'no'}",
        ),
        (
            "Accessibility",
            accessibility.score,
            f"{accessibility.issues} issues, WCAG {accessibility.compliance}",
        ),
    ]


def print_report(report: AuditReport, verbose: bool = False) -> None:
    """Print an audit report to console."""

    subtitle = "[dim]Powered by Google Lighthouse[/dim]"
    if report.source == "fallback":
        subtitle = "[yellow]Provider unavailable: estimated results[/yellow]"

    console.print()
    console.print(Panel(
        f"[bold]{report.url}[/bold]\n"
        f"[dim]{report.timestamp}[/dim]\n"
        f"{subtitle}",
        title="🔍 Site Audit",
        border_style="blue"
    ))

    console.print()
    score = report.overall_score
    console.print("  Overall Score: ", end="")
    console.print(print_score_bar(score, width=25))
    console.print(f"  [{score_color(score)}]{score_label(score)}[/]")
    console.print()

    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Category", style="cyan")
    table.add_column("Score", justify="right")
    table.add_column("Rating")
    table.add_column("Signals", style="dim")

    for name, cat_score, signals in _category_rows(report):
        color = score_color(cat_score)
        table.add_row(
            name,
            f"[{color}]{cat_score}/100[/]",
            f"[{color}]{score_label(cat_score)}[/]",
            signals,
        )

    console.print(table)

    metrics = report.performance.metrics
    console.print(
        f"  [dim]FCP {metrics.first_contentful_paint / 1000:.1f}s • "
        f"LCP {metrics.largest_contentful_paint / 1000:.1f}s • "
        f"CLS {metrics.cumulative_layout_shift:.3f} • "
        f"TBT {metrics.total_blocking_time:.0f}ms[/dim]"
    )

    findings = build_recommendations(report)
    if verbose:
        shown = findings
        heading = "All Findings"
    else:
        shown = [f for f in findings if f.severity in (Severity.ERROR, Severity.WARNING)]
        heading = "Issues Found"

    if shown:
        console.print(f"\n[bold]{heading}:[/bold]\n")
        for finding in shown:
            style, icon = SEVERITY_MARKS[finding.severity]
            console.print(f"  [{style}]{icon}[/] {finding.message}")
            if verbose and finding.details:
                console.print(f"    [dim]{finding.details}[/dim]")
            if finding.fix_hint:
                console.print(f"    [cyan]→ {finding.fix_hint}[/cyan]")

    wins = quick_wins(findings)
    if wins:
        console.print("\n[bold]🎯 Top Quick Wins:[/bold]\n")
        for i, finding in enumerate(wins[:3], 1):
            console.print(f"  {i}. [bold]{finding.message}[/bold]")
            console.print(f"     [cyan]{finding.fix_hint}[/cyan]")
            console.print()

    console.print("[dim]─" * 50 + "[/dim]")
    console.print(f"[dim]site-audit v{__version__}[/dim]")
    console.print()


@click.group(invoke_without_command=True)
@click.pass_context
@click.version_option(version=__version__)
def cli(ctx):
    """Site Audit - security, performance, SEO and accessibility scores.

    \b
    Quick start:
        site-audit scan example.com
        site-audit example.com --json
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@cli.command()
@click.argument("url")
@click.option("-v", "--verbose", is_flag=True, help="Show all findings, not just issues")
@click.option("-t", "--timeout", type=float, default=None, help="Provider timeout in seconds")
@click.option("-s", "--strategy", type=click.Choice(STRATEGIES), default=None,
              help="Lighthouse analysis strategy")
@click.option("--seed", type=int, default=None, help="Seed for estimated fields")
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
@click.option("--debug", is_flag=True, help="Log provider traffic to stderr")
def scan(url: str, verbose: bool, timeout: float | None, strategy: str | None,
         seed: int | None, json_output: bool, debug: bool):
    """Audit a URL.

    \b
    Examples:
        site-audit scan stripe.com
        site-audit scan example.com --verbose
        site-audit scan example.com --json --seed 7
    """
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.ERROR,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        settings = Settings.from_env().override(timeout=timeout, strategy=strategy)
    except ValueError as e:
        raise click.BadParameter(str(e))

    rng = random.Random(seed) if seed is not None else None

    try:
        if json_output:
            report = synthesize(url, settings=settings, rng=rng)
        else:
            with console.status(f"[bold blue]Auditing {url}...[/bold blue]"):
                report = synthesize(url, settings=settings, rng=rng)
    except SynthesisError as e:
        console.print(f"\n[red]Internal error:[/red] {e}")
        sys.exit(2)

    if json_output:
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        print_report(report, verbose=verbose)


def with_default_command(args: list[str]) -> list[str]:
    """Route a bare URL to `scan`, so `site-audit example.com` works."""
    if not args or args[0].startswith("-") or args[0] in cli.commands:
        return args
    return ["scan", *args]


def main():
    cli(args=with_default_command(sys.argv[1:]), prog_name="site-audit")


if __name__ == "__main__":
    main()
