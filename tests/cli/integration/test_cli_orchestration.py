"""CLI orchestration integration tests."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner
from schema_prompt.cli import cli, main


def _write_spec(tmp_path: Path) -> Path:
    spec = {
        "spec": {
            "name": "Task",
            "fields": [
                {
                    "identifier": "title",
                    "type": "string",
                    "cardinality": "one",
                    "description": "Task title",
                },
                {
                    "identifier": "done?",
                    "type": "bool",
                    "cardinality": "one",
                    "description": "Whether the task is finished",
                },
                {
                    "identifier": "status",
                    "type": "keyword",
                    "cardinality": "one",
                    "description": "Workflow status",
                    "enum": {"open": "Not started", "closed": "Finished"},
                },
            ],
        }
    }
    path = tmp_path / "spec.json"
    path.write_text(json.dumps(spec), encoding="utf-8")
    return path


def test_generate_spec_command_writes_scaffold(tmp_path: Path) -> None:
    runner = CliRunner()
    output_path = tmp_path / "spec.yaml"

    result = runner.invoke(cli, ["generate-spec", "--output", str(output_path)])

    assert result.exit_code == 0
    assert output_path.exists()
    assert str(output_path.resolve()) in result.output


def test_render_command_prints_schema_block(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(cli, ["render", "--spec", str(_write_spec(tmp_path))])

    assert result.exit_code == 0
    assert result.output.startswith("Task {\n")
    assert "  done: bool,\n" in result.output
    assert '  status: "closed" or "open",\n' in result.output


def test_decode_command_reads_stdin_and_restores_identifiers(tmp_path: Path) -> None:
    runner = CliRunner()

    result = runner.invoke(
        cli,
        ["decode", "--spec", str(_write_spec(tmp_path))],
        input="{title: 'Write docs', done: false, status: 'open',}",
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {"title": "Write docs", "done?": False, "status": "open"}


def test_validate_command_prints_report_for_valid_response(tmp_path: Path) -> None:
    runner = CliRunner()
    response_path = tmp_path / "response.json"
    response_path.write_text(
        '{"title": "Write docs", "done": true, "status": "closed"}', encoding="utf-8"
    )

    result = runner.invoke(
        cli,
        ["validate", "--spec", str(_write_spec(tmp_path)), "--input", str(response_path)],
    )

    assert result.exit_code == 0
    assert json.loads(result.output) == {"valid": True, "errors": []}


def test_validate_command_fails_with_error_report(tmp_path: Path, capsys) -> None:
    response_path = tmp_path / "response.json"
    response_path.write_text('{"title": "Write docs", "status": "blocked"}', encoding="utf-8")

    exit_code = main(
        ["validate", "--spec", str(_write_spec(tmp_path)), "--input", str(response_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    report = json.loads(captured.out)
    assert report["valid"] is False
    assert [error["kind"] for error in report["errors"]] == [
        "missing_required_field",
        "invalid_enum_value",
    ]
    assert report["errors"][1]["allowed_values"] == ["closed", "open"]
    assert "Validation failed with 2 error(s)." in captured.err


def test_decode_command_reports_unparsable_response(tmp_path: Path, capsys) -> None:
    response_path = tmp_path / "response.txt"
    response_path.write_text("   ", encoding="utf-8")

    exit_code = main(
        ["decode", "--spec", str(_write_spec(tmp_path)), "--input", str(response_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "Response text cannot be empty." in captured.err
