"""Typer CLI entrypoint for wscheck."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click
import typer
import yaml
from pydantic import ValidationError

from wscheck.config import AppSettings, load_settings
from wscheck.errors import FixWriteError, SourceUnavailableError
from wscheck.logging_utils import configure_logging
from wscheck.models import ExtensionSets, RunOptions
from wscheck.pipeline import EXIT_FATAL, EXIT_ISSUES, run_batch
from wscheck.sources.resolve import resolve_paths
from wscheck.sources.vcs import VcsClient, build_vcs_client

USAGE_EXIT_CODE = 1

app = typer.Typer(
    add_completion=False,
    help="Check source files for tabs, trailing blanks, carriage returns and stray executable bits.",
    no_args_is_help=False,
)


def _load_and_configure_logger(config_file: Path | None, debug: bool) -> tuple[AppSettings, logging.Logger]:
    try:
        settings = load_settings(config_file=config_file)
    except ValidationError as exc:
        raise typer.BadParameter(f"invalid settings: {exc}", param_hint="--config-file") from exc
    level = logging.DEBUG if debug else settings.logging.level_number()
    logger = configure_logging(level=level, log_file=settings.logging.log_file)
    return settings, logger


def _vcs_for(settings: AppSettings, logger: logging.Logger) -> VcsClient:
    """Hook for tests to substitute an in-memory VCS."""

    return build_vcs_client(settings.vcs, logger=logger)


@app.callback(invoke_without_command=True)
def scan(
    ctx: typer.Context,
    all_files: bool = typer.Option(False, "-a", "--all", help="Check every file in the repository manifest."),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Also report clean and unchanged files."),
    debug: bool = typer.Option(False, "-V", "--debug", help="Very verbose: debug logging, implies -v."),
    from_stdin: bool = typer.Option(False, "-S", "--stdin", help="Read the file list from stdin, one path per line."),
    extended: bool = typer.Option(False, "-E", "--extended", help="Check the extended extension list."),
    fix: bool = typer.Option(False, "-F", "--fix", help="Repair files in place instead of reporting."),
    revision: str | None = typer.Option(None, "-r", "--rev", help="Check files touched by this revision range."),
    check_executable: bool = typer.Option(False, "-x", "--executable", help="Flag files with an executable bit."),
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Check (or with -F, fix) whitespace hygiene for a set of files."""

    if ctx.invoked_subcommand is not None:
        return

    options = RunOptions(
        verbose=verbose,
        debug=debug,
        fix=fix,
        check_executable=check_executable,
        extended_extensions=extended,
        all_files=all_files,
        from_stdin=from_stdin,
        revision=revision,
    )
    settings, logger = _load_and_configure_logger(config_file, debug)
    logger.debug("cli.options %s", options)

    paths = resolve_paths(
        options,
        _vcs_for(settings, logger),
        stdin=typer.get_text_stream("stdin") if from_stdin else None,
        logger=logger,
    )
    try:
        result = run_batch(
            paths,
            options,
            extensions=ExtensionSets.from_config(settings.extensions),
            echo=typer.echo,
            logger=logger,
        )
    except FixWriteError as exc:
        typer.echo(f"{exc.path}: fix failed: {exc}", err=True)
        raise typer.Exit(EXIT_FATAL) from exc
    except SourceUnavailableError as exc:
        typer.echo(f"error: {exc}", err=True)
        raise typer.Exit(EXIT_ISSUES) from exc

    if result.summary is not None:
        typer.echo(result.summary)
    raise typer.Exit(result.exit_code)


@app.command("show-config")
def show_config(
    config_file: Path | None = typer.Option(
        None,
        "--config-file",
        help="Optional settings YAML path.",
        exists=False,
        file_okay=True,
        dir_okay=False,
        readable=True,
    ),
) -> None:
    """Print the effective configuration after env overrides."""

    settings = load_settings(config_file=config_file)
    rendered = yaml.safe_dump(settings.as_dict(), sort_keys=False)
    typer.echo(rendered)


def main(argv: list[str] | None = None) -> None:
    """Console entrypoint; usage errors exit with status 1."""

    try:
        exit_code = app(args=argv, prog_name="wscheck", standalone_mode=False)
    except click.UsageError as exc:
        exc.show()
        sys.exit(USAGE_EXIT_CODE)
    except click.Abort:
        typer.echo("Aborted!", err=True)
        sys.exit(USAGE_EXIT_CODE)
    sys.exit(exit_code if isinstance(exit_code, int) else 0)


if __name__ == "__main__":
    main()
