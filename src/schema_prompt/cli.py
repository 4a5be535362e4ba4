"""Command line interface entry point."""

from __future__ import annotations

import json
import logging
import sys
from typing import Any

import click

from schema_prompt.configuration import (
    DEFAULT_SPEC_FILENAME,
    ConfigurationError,
    load_spec_document,
    write_placeholder_spec_document,
)
from schema_prompt.data_validation import ValidationReport, validate
from schema_prompt.response_decoding import decode, serialize
from schema_prompt.schema_rendering import render_spec
from schema_prompt.spec_modeling import SpecError

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="schema-prompt")
@click.option(
    "--log-level",
    type=click.Choice(_LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Level for diagnostics written to stderr.",
)
def cli(log_level: str) -> None:
    """Render structured-output specs and decode model responses."""
    logging.basicConfig(level=log_level.upper(), format="%(levelname)s %(name)s: %(message)s")


@cli.command(name="generate-spec")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_SPEC_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML spec document template to write",
)
def generate_spec(output_path: str) -> None:
    """Generate a placeholder YAML spec document with guidance comments."""
    try:
        resolved_output = write_placeholder_spec_document(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="render")
@click.option(
    "--spec",
    "spec_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON spec document",
)
def render(spec_path: str) -> None:
    """Print the schema block to embed in a prompt."""
    try:
        document = load_spec_document(spec_path)
        click.echo(render_spec(document.spec))
    except (ConfigurationError, SpecError) as exc:
        raise CliError(str(exc)) from exc


@cli.command(name="decode")
@click.option(
    "--spec",
    "spec_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON spec document",
)
@click.option(
    "--input",
    "response_file",
    required=False,
    default="-",
    show_default=True,
    type=click.File("r", encoding="utf-8"),
    help="Model response to decode ('-' reads stdin)",
)
def decode_response(spec_path: str, response_file: Any) -> None:
    """Decode a model response and print it as JSON."""
    try:
        document = load_spec_document(spec_path)
        data = decode(response_file.read(), document.spec)
    except (ConfigurationError, SpecError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(serialize(data))


@cli.command(name="validate")
@click.option(
    "--spec",
    "spec_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to YAML/JSON spec document",
)
@click.option(
    "--input",
    "response_file",
    required=False,
    default="-",
    show_default=True,
    type=click.File("r", encoding="utf-8"),
    help="Model response to decode and validate ('-' reads stdin)",
)
def validate_response(spec_path: str, response_file: Any) -> None:
    """Decode a model response and report every spec violation."""
    try:
        document = load_spec_document(spec_path)
        report = validate(document.spec, decode(response_file.read(), document.spec))
    except (ConfigurationError, SpecError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(json.dumps(_report_payload(report), ensure_ascii=False, indent=2, default=str))
    if not report.valid:
        raise CliError(f"Validation failed with {len(report.errors)} error(s).")


def _report_payload(report: ValidationReport) -> dict[str, Any]:
    return {
        "valid": report.valid,
        "errors": [
            {
                "kind": issue.kind.value,
                "identifier": issue.identifier,
                "path": issue.path,
                **issue.context,
            }
            for issue in report.errors
        ],
    }


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
