"""Command-line interface for featuresplit."""

import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from featuresplit import __version__
from featuresplit.config import SplitOptions
from featuresplit.errors import ConfigurationError
from featuresplit.logging_config import setup_logging
from featuresplit.orchestrator import perform_setup

app = typer.Typer(
    name="featuresplit",
    help="Split Gherkin feature files into one file per scenario.",
)
console = Console()


@app.command()
def split(
    source: str | None = typer.Argument(
        None,
        help="Directory (or glob root) containing *.feature files",
    ),
    destination: str | None = typer.Argument(
        None,
        help="Directory receiving the generated feature files",
    ),
    tags: str | None = typer.Option(
        None,
        "--tags",
        "-t",
        help='Tag expression, e.g. "@smoke and not @slow" (default: all scenarios)',
    ),
    ff: str | None = typer.Option(
        None,
        "--ff",
        help="Process only this feature file (base name without .feature)",
    ),
    lang: str | None = typer.Option(
        None,
        "--lang",
        "-l",
        help="Gherkin language of the source files (default: en)",
    ),
    clean: bool = typer.Option(
        False,
        "--clean",
        help="Remove the destination directory before writing",
    ),
    split_examples: bool = typer.Option(
        False,
        "--split-examples",
        help="Write one file per Scenario Outline example row",
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit with status 1 when any source file fails",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with options; command-line values take precedence",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Log every file and scenario decision",
    ),
) -> None:
    """Split feature files into one feature file per scenario."""
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    overrides = {
        "source_spec_directory": source,
        "tmp_spec_directory": destination,
        "tag_expression": tags,
        "ff": ff,
        "lang": lang,
        "clean_tmp_spec_directory": clean or None,
        "split_scenario_outline_multiple_examples": split_examples or None,
        "strict": strict or None,
    }

    try:
        if config is not None:
            options = SplitOptions.from_yaml_file(config, **overrides)
        else:
            options = SplitOptions.from_mapping(overrides)
        report = perform_setup(options)
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(2) from e

    console.print()
    console.print(f"[bold green]Written:[/bold green] {len(report.written)} feature file(s)")
    for outcome in report.failed:
        console.print(f"[bold red]Failed:[/bold red] {escape(str(outcome.source))} ({outcome.status.value})")
        for error in outcome.errors:
            console.print(f"  [dim]{escape(error)}[/dim]")
    if report.no_match:
        console.print(
            f"[bold magenta]No Feature File found for the Tag Expression: "
            f"{escape(report.tag_expression)}[/bold magenta]"
        )

    if options.strict and not report.ok:
        raise typer.Exit(1)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"featuresplit {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
