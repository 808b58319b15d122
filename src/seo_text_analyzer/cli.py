"""
Command-line interface for the SEO Text Analyzer.

Provides commands to analyze text (with optional keyword insertion and
exports) and to run the keyword insertion engine on its own.
"""

import json
import logging
import sys
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .analyzer import AnalysisValidationError, SEOAnalyzer
from .config import AnalyzerConfig
from .docx_writer import write_analysis_report
from .highlighting import mark_keywords, parse_marker_segments
from .keyword_export import KeywordExportError, export_keywords_csv
from .keyword_inserter import insert_keyword
from .llm_client import ProviderUnavailableError
from .models import Analysis, ContentType

console = Console()

CONTENT_TYPES = [ct.value for ct in ContentType]


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_text(text: Optional[str], file: Optional[Path]) -> str:
    """Resolve the --text/--file pair into the text to work on."""
    if not text and not file:
        console.print("[red]Error:[/red] Must provide either --text or --file")
        sys.exit(1)
    if text and file:
        console.print("[red]Error:[/red] Provide only one of --text or --file")
        sys.exit(1)
    return text if text else file.read_text(encoding="utf-8")


@click.group()
def main() -> None:
    """SEO Text Analyzer - score content and insert recommended keywords."""


@main.command()
@click.option("--text", "-t", type=str, help="Text to analyze.")
@click.option(
    "--file",
    "-f",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a UTF-8 text file to analyze.",
)
@click.option(
    "--content-type",
    type=click.Choice(CONTENT_TYPES),
    default=ContentType.BLOG_POST.value,
    show_default=True,
    help="Kind of content being analyzed.",
)
@click.option(
    "--provider",
    type=click.Choice(["anthropic", "gemini"]),
    default=None,
    help="Language-analysis provider. Defaults to SEO_ANALYZER_PROVIDER or anthropic.",
)
@click.option("--api-key", type=str, default=None, help="Provider API key (overrides the env var).")
@click.option(
    "--insert",
    "-i",
    "insert_keywords",
    multiple=True,
    help="Keyword phrase to insert after analysis. Repeatable.",
)
@click.option(
    "--keywords-csv",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the recommended keywords to this CSV file.",
)
@click.option(
    "--report",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write a Word (.docx) analysis report to this path.",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the analysis as JSON.")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Enable verbose output.")
def analyze(
    text: Optional[str],
    file: Optional[Path],
    content_type: str,
    provider: Optional[str],
    api_key: Optional[str],
    insert_keywords: tuple[str, ...],
    keywords_csv: Optional[Path],
    report: Optional[Path],
    as_json: bool,
    verbose: bool,
) -> None:
    """
    Analyze content for SEO quality.

    Examples:

        seo-analyze analyze --file post.txt

        seo-analyze analyze -t "Your text here..." -i "machine learning" --report out.docx
    """
    _configure_logging(verbose)
    source_text = _read_text(text, file)

    try:
        config = AnalyzerConfig.from_env(provider=provider, api_key=api_key)
        analyzer = SEOAnalyzer(config=config)

        with console.status("[bold green]Analyzing content..."):
            analysis = analyzer.analyze(source_text, content_type)

        current_text = analysis.optimized_text
        for phrase in insert_keywords:
            result = analyzer.insert_keyword(analysis.id, phrase, current_text)
            current_text = result.optimized_text
            analysis = result.analysis

        if keywords_csv:
            export_keywords_csv(analysis.keywords, keywords_csv)
        if report:
            report = write_analysis_report(analysis, report)

    except AnalysisValidationError as e:
        console.print(f"[red]Invalid input:[/red] {escape(str(e))}")
        sys.exit(1)
    except ProviderUnavailableError as e:
        console.print(f"[red]Provider error:[/red] {escape(str(e))}")
        sys.exit(1)
    except KeywordExportError as e:
        console.print(f"[red]Export error:[/red] {escape(str(e))}")
        sys.exit(1)
    except ValueError as e:
        console.print(f"[red]Configuration error:[/red] {escape(str(e))}")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(analysis.to_dict(), indent=2))
        return

    _display_analysis(analysis)
    if insert_keywords:
        progress = analyzer.progress(analysis.id)
        _display_optimized_text(analysis)
        console.print(
            f"\n[green]+{progress.seo_score_gain}[/green] projected SEO score, "
            f"[blue]{progress.keywords_added}[/blue] keywords added, "
            f"[yellow]+{progress.density_boost:.1f}%[/yellow] density"
        )
    if keywords_csv:
        console.print(f"\n[dim]Keywords written to: {keywords_csv}[/dim]")
    if report:
        console.print(f"[dim]Report written to: {report}[/dim]")


@main.command()
@click.option("--text", "-t", type=str, help="Text to insert the keyword into.")
@click.option(
    "--file",
    "-f",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to a UTF-8 text file.",
)
@click.option("--keyword", "-k", required=True, help="Keyword phrase to insert.")
def insert(text: Optional[str], file: Optional[Path], keyword: str) -> None:
    """Insert a keyword phrase into text without calling a provider."""
    source_text = _read_text(text, file)
    click.echo(insert_keyword(source_text, keyword))


def _display_analysis(analysis: Analysis) -> None:
    """Display metrics, recommendations and keywords."""
    console.print(Panel.fit(
        f"[bold blue]SEO Score:[/bold blue] {analysis.seo_score}/100   "
        f"[bold green]Readability:[/bold green] {analysis.readability_score.value}   "
        f"[bold yellow]Density:[/bold yellow] {analysis.keyword_density:.1f}%   "
        f"[bold]Words:[/bold] {analysis.word_count}",
        title=f"Analysis #{analysis.id}",
        border_style="blue",
    ))

    for rec in analysis.recommendations:
        console.print(f"[cyan]• {rec.title}[/cyan] - {rec.description}")

    if not analysis.keywords:
        console.print("\n[yellow]No keywords were extracted.[/yellow]")
        return

    kw_table = Table(title="Recommended Keywords", show_header=True)
    kw_table.add_column("Keyword", style="green")
    kw_table.add_column("Difficulty", style="cyan")
    kw_table.add_column("Volume", justify="right")
    kw_table.add_column("Context", style="dim")

    for kw in analysis.keywords:
        kw_table.add_row(escape(kw.text), escape(kw.difficulty), escape(kw.volume), escape(kw.context))

    console.print(kw_table)


def _display_optimized_text(analysis: Analysis) -> None:
    """Display the optimized text with keyword occurrences highlighted."""
    rendered = Text()
    for segment, highlighted in parse_marker_segments(
        mark_keywords(analysis.optimized_text, analysis.keywords)
    ):
        rendered.append(segment, style="bold black on green" if highlighted else None)

    console.print(Panel(rendered, title="Optimized Preview", border_style="green"))


def run_cli() -> None:
    """Entry point for the CLI."""
    main()


if __name__ == "__main__":
    run_cli()
