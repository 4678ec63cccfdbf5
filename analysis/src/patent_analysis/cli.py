"""Typer-based CLI for analysing J-PlatPat exports locally."""

from __future__ import annotations

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from patent_analysis.columns import resolve_columns
from patent_analysis.errors import PatentAnalysisError
from patent_analysis.pipeline import AnalysisConfig, AnalysisPipeline
from patent_analysis.reader import read_csv_table
from patent_analysis.report import DashboardReport, RankedEntry

app = typer.Typer(help="Patent filing statistics from J-PlatPat CSV exports")
console = Console()


def _read_file(path: Path) -> bytes:
    if not path.exists() or not path.is_file():
        typer.secho(f"File not found: {path}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if path.suffix.lower() != ".csv":
        typer.secho("Only CSV files can be analysed.", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    return path.read_bytes()


def _ranking_table(title: str, entries: list[RankedEntry]) -> Table:
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("#", justify="right")
    table.add_column("Name")
    table.add_column("Filings", justify="right")
    for position, entry in enumerate(entries, start=1):
        table.add_row(str(position), entry.original_name, str(entry.value))
    return table


def _print_report(report: DashboardReport) -> None:
    summary = report.summary
    console.rule("[bold cyan]Analysis summary[/]")
    console.print(f"Total records: {summary.total_records}")
    console.print(f"Period: {summary.period or 'N/A'}")
    console.print(f"Companies: {summary.company_count if summary.company_count is not None else 'N/A'}")
    console.print(
        "Classification codes: "
        f"{summary.classification_count if summary.classification_count is not None else 'N/A'}"
    )

    trend = Table(title="Filings per year", show_header=True, header_style="bold magenta")
    trend.add_column("Year")
    trend.add_column("Filings", justify="right")
    for point in report.year_trend:
        trend.add_row(str(point.year), str(point.count))
    console.print(trend)

    if summary.company_count is not None:
        console.print(_ranking_table("Leading applicants", report.leading_companies))
        console.print(_ranking_table("All applicants", report.all_companies))
    if summary.classification_count is not None:
        console.print(_ranking_table("Leading classification codes", report.leading_fis))
        console.print(_ranking_table("All classification codes", report.all_fis))


@app.command()
def analyze(
    path: Path = typer.Argument(..., help="J-PlatPat CSV export."),
    top: int = typer.Option(10, "--top", "-n", min=1, help="Entries per ranking."),
    timeline_top: int = typer.Option(5, "--timeline-top", min=1, help="Entities per time series."),
    json_output: bool = typer.Option(False, "--json", help="Print the raw aggregates as JSON."),
) -> None:
    """Aggregate filings per year, applicant and classification code."""

    content = _read_file(path)
    pipeline = AnalysisPipeline(config=AnalysisConfig(top_n=top, timeline_top_n=timeline_top))

    try:
        outcome = pipeline.run(content, file_name=path.name)
    except PatentAnalysisError as exc:
        typer.secho(exc.message, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    if json_output:
        typer.echo(json.dumps(outcome.result.model_dump(mode="json", by_alias=True), ensure_ascii=False, indent=2))
        return

    _print_report(outcome.report)


@app.command()
def columns(
    path: Path = typer.Argument(..., help="J-PlatPat CSV export."),
) -> None:
    """Show which headers are used for date, applicant and classification."""

    content = _read_file(path)

    try:
        table = read_csv_table(content)
        roles = resolve_columns(table.headers)
    except PatentAnalysisError as exc:
        typer.secho(exc.message, fg=typer.colors.RED)
        raise typer.Exit(code=1) from exc

    for role, header in roles.as_headers().items():
        typer.echo(f"{role}: {header if header is not None else '-'}")


if __name__ == "__main__":  # pragma: no cover
    app()
