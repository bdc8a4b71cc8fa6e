import json
from importlib.metadata import PackageNotFoundError, version as package_version
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from diffpack.diff import (
    DiffConfig,
    DiffConfigError,
    DiffLimitExceededError,
    build_message,
    compare_values,
    diff_text,
    edit_distance,
    render_diff_lines,
    render_diff_summary,
    summarize_ops,
)
from diffpack.plugins import PluginError

app = typer.Typer(help="DiffKit CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()


def _resolve_cli_version() -> str:
    try:
        return package_version("diffkit")
    except PackageNotFoundError:
        from diffpack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show DiffKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err, color=False)


def _fail(
    command: str,
    error: Exception,
    *,
    json_output: bool,
    exit_code: int,
    extra: dict[str, Any] | None = None,
) -> typer.Exit:
    message = f"{command} failed: {error}"
    if json_output:
        _echo_json(
            {
                "status": "error",
                "exit_code": exit_code,
                "message": message,
                **(extra or {}),
            }
        )
    else:
        _echo(message, err=True)
    return typer.Exit(code=exit_code)


def _build_config(max_edit_distance: int | None, *, word_diff: bool = True) -> DiffConfig:
    if max_edit_distance is None:
        env_config = DiffConfig.from_env()
        return DiffConfig(max_edit_distance=env_config.max_edit_distance, word_diff=word_diff)
    return DiffConfig(max_edit_distance=max_edit_distance, word_diff=word_diff)


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as error:
        raise ValueError(f"{path} is not UTF-8 text (binary input is not supported)") from error


@app.command()
def diff(
    left: Path = typer.Argument(..., help="Path to the left (actual) text file."),
    right: Path = typer.Argument(..., help="Path to the right (expected) text file."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable diff output.",
    ),
    word_diff: bool = typer.Option(
        True,
        "--word-diff/--no-word-diff",
        help="Refine paired changed lines with a word-level diff.",
    ),
    max_edit_distance: int | None = typer.Option(
        None,
        "--max-edit-distance",
        min=0,
        help="Abort when the edit distance exceeds this value.",
    ),
) -> None:
    """Diff two text files line by line."""
    paths = {"left_path": str(left), "right_path": str(right)}
    try:
        config = _build_config(max_edit_distance, word_diff=word_diff)
    except DiffConfigError as error:
        raise _fail("diff", error, json_output=json_output, exit_code=2, extra=paths) from error

    try:
        left_text = _read_text(left)
        right_text = _read_text(right)
        ops = diff_text(left_text, right_text, config=config)
    except (OSError, ValueError, DiffLimitExceededError, PluginError) as error:
        raise _fail("diff", error, json_output=json_output, exit_code=1, extra=paths) from error

    identical = edit_distance(ops) == 0
    if json_output:
        _echo_json(
            {
                "status": "ok",
                "exit_code": 0,
                "message": "diff completed",
                "identical": identical,
                "edit_distance": edit_distance(ops),
                "summary": summarize_ops(ops),
                "ops": [op.to_dict() for op in ops],
                **paths,
            }
        )
        return

    _echo(render_diff_summary(ops))
    if identical:
        _echo("no differences")
        return
    color = not _OUTPUT_OPTIONS.no_color
    for line in render_diff_lines(ops, color=color):
        _echo(line)


@app.command(name="assert")
def assert_files(
    actual: Path = typer.Argument(..., help="Path to the actual text file."),
    expected: Path = typer.Argument(..., help="Path to the expected text file."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable assertion output.",
    ),
    max_edit_distance: int | None = typer.Option(
        None,
        "--max-edit-distance",
        min=0,
        help="Abort when the edit distance exceeds this value.",
    ),
) -> None:
    """Assert that ACTUAL matches EXPECTED; exit 1 with a diff report if not."""
    paths = {"actual_path": str(actual), "expected_path": str(expected)}
    try:
        config = _build_config(max_edit_distance)
    except DiffConfigError as error:
        raise _fail("assert", error, json_output=json_output, exit_code=2, extra=paths) from error

    try:
        result = compare_values(_read_text(actual), _read_text(expected), config=config)
    except (OSError, ValueError, DiffLimitExceededError, PluginError) as error:
        raise _fail("assert", error, json_output=json_output, exit_code=1, extra=paths) from error

    if json_output:
        _echo_json({**result.to_dict(), **paths})
    elif result.passed:
        _echo(f"assert passed: actual={actual} expected={expected}")
    else:
        _echo(
            f"assert failed: values are not equal (actual={actual} expected={expected})",
            force=True,
        )
        color = not _OUTPUT_OPTIONS.no_color
        for line in build_message(result.ops, color=color):
            _echo(line, force=True)

    if not result.passed:
        raise typer.Exit(code=result.exit_code)


def main() -> None:
    app()
