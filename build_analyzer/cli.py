"""CLI entry point for standalone usage: build-analyze.

Subcommands:
    build-analyze parse-invocation "csc.exe /out:a.dll a.cs"   # Show parsed records
    build-analyze replay events.jsonl                          # Summarize a build event log
"""

from __future__ import annotations

import json
import os
import sys

import click

from build_analyzer.build.invocation_parser import InvocationParser
from build_analyzer.core.logging import setup_logging
from build_analyzer.exceptions import AnalyzerError
from build_analyzer.processor import DEFAULT_COMPILER_TASK, BuildEventProcessor, load_events
from build_analyzer.result import BuildResult

# Defaults overridable via env vars
_DEFAULT_MARKER = os.environ.get("BUILD_ANALYZER_COMPILER_MARKER", "csc.")


def _summarize(result: BuildResult) -> dict:
    return {
        "project_file": result.project_file_path,
        "project_guid": str(result.project_guid),
        "target_framework": result.target_framework,
        "succeeded": result.succeeded,
        "source_files": result.source_files,
        "references": result.references,
        "project_references": result.project_references,
        "package_references": result.package_references,
    }


@click.group()
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging")
def main(verbose: bool) -> None:
    """Build-Analyzer: inspect compiler invocations and build results."""
    setup_logging("DEBUG" if verbose else None)


@main.command("parse-invocation")
@click.argument("command_line")
@click.option("--marker", default=_DEFAULT_MARKER, show_default=True, help="Compiler executable marker")
@click.option("--json", "as_json", is_flag=True, help="Print records as JSON")
def parse_invocation_cmd(command_line: str, marker: str, as_json: bool) -> None:
    """Parse a compiler command line and print its records."""
    records = InvocationParser(executable_marker=marker).parse(command_line)
    if as_json:
        click.echo(json.dumps([{"switch": r.switch, "value": r.value} for r in records], indent=2))
        return
    if not records:
        click.echo("No arguments found.")
        return
    for index, record in enumerate(records):
        if index == 0:
            click.echo(f"  executable: {record.value}")
        elif record.switch is None:
            click.echo(f"  (positional) {record.value}")
        elif record.value is None:
            click.echo(f"  /{record.switch}")
        else:
            click.echo(f"  /{record.switch} = {record.value}")


@main.command("replay")
@click.argument("events_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--marker", default=_DEFAULT_MARKER, show_default=True, help="Compiler executable marker")
@click.option("--compiler-task", default=DEFAULT_COMPILER_TASK, show_default=True, help="Compiler task name")
@click.option("--strict", is_flag=True, help="Fail on events for unknown project contexts")
def replay(events_file: str, marker: str, compiler_task: str, strict: bool) -> None:
    """Replay a JSON-lines build event log and print one summary per project."""
    processor = BuildEventProcessor(
        compiler_task=compiler_task,
        parser=InvocationParser(executable_marker=marker),
        strict=strict,
    )
    try:
        results = processor.process_all(load_events(events_file))
    except AnalyzerError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    click.echo(json.dumps([_summarize(r) for r in results], indent=2))


if __name__ == "__main__":
    main()
