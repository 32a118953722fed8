"""towelie CLI - duplication checks for text files."""

import logging
from pathlib import Path

import click

from towelie.config import ScanConfig, config_to_yaml, find_config, load_config
from towelie.errors import TowelieError
from towelie.logging.run_logger import RunLogger
from towelie.report.scan_report import (
    render_records,
    render_summary,
    render_verdict,
    save_json_report,
    save_markdown_report,
)
from towelie.scan import run_scan


def _resolve_config(root: Path, config_path: str | None, **overrides) -> ScanConfig:
    path = Path(config_path) if config_path else find_config(root)
    config = load_config(path) if path else ScanConfig()
    return config.merge_overrides(**overrides)


@click.group()
@click.version_option(package_name="towelie")
def main() -> None:
    """towelie: find duplicated files and paragraphs."""
    pass


@main.command()
@click.argument("pattern", required=False)
@click.option("--root", "-r", default=".", type=click.Path(exists=True, file_okay=False), help="Directory to scan")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False), help="Config file (YAML or JSON)")
@click.option("--min-lines", type=int, help="Newlines a block needs to be compared")
@click.option("--min-chars", type=int, help="Characters a block must exceed to be compared")
@click.option("--threshold", "-t", type=float, help="Minimum passing uniqueness percentage")
@click.option("--workers", "-w", type=int, help="Concurrent file readers")
@click.option("--json-report", type=click.Path(dir_okay=False), help="Write a JSON report")
@click.option("--markdown-report", type=click.Path(dir_okay=False), help="Write a markdown report")
@click.option("--log-dir", type=click.Path(file_okay=False), help="Directory for structured run logs")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def scan(
    ctx: click.Context,
    pattern: str | None,
    root: str,
    config_path: str | None,
    min_lines: int | None,
    min_chars: int | None,
    threshold: float | None,
    workers: int | None,
    json_report: str | None,
    markdown_report: str | None,
    log_dir: str | None,
    verbose: bool,
    no_color: bool,
) -> None:
    """Scan files matching PATTERN for duplicated content."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    color = not no_color

    try:
        config = _resolve_config(
            Path(root),
            config_path,
            pattern=pattern,
            min_lines=min_lines,
            min_chars=min_chars,
            failure_threshold=threshold,
            workers=workers,
        )
        run_logger = RunLogger(log_dir) if log_dir else None
        outcome = run_scan(config, root=root, run_logger=run_logger)
    except (TowelieError, OSError) as e:
        raise click.ClickException(str(e)) from e

    records = outcome.classification.ordered_records()
    state = outcome.classification.state

    if state.total_lines == 0:
        click.echo(f"Warning: no lines analyzed for pattern {config.pattern!r}", err=True)
    if records:
        click.echo(render_records(records, color=color))
        click.echo()
    click.echo(render_summary(state))
    click.echo()
    click.echo(render_verdict(outcome.score, color=color))

    try:
        if json_report:
            save_json_report(outcome.classification, outcome.score, json_report)
        if markdown_report:
            save_markdown_report(outcome.classification, outcome.score, markdown_report)
    except OSError as e:
        raise click.ClickException(f"Cannot write report: {e}") from e

    if not outcome.passed:
        ctx.exit(1)


@main.command("show-config")
@click.option("--root", "-r", default=".", type=click.Path(exists=True, file_okay=False), help="Directory to look for config in")
@click.option("--config", "-c", "config_path", type=click.Path(dir_okay=False), help="Config file (YAML or JSON)")
def show_config(root: str, config_path: str | None) -> None:
    """Print the effective configuration as YAML."""
    try:
        config = _resolve_config(Path(root), config_path)
    except TowelieError as e:
        raise click.ClickException(str(e)) from e
    click.echo(config_to_yaml(config), nl=False)


if __name__ == "__main__":
    main()
