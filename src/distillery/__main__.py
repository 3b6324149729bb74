"""CLI entry point for Distillery."""

from __future__ import annotations

import os
import sys
from pathlib import Path

import click
from dotenv import load_dotenv
from pydantic import ValidationError

from distillery import __version__
from distillery.config import AppConfig, DistilleryConfig, GeneralConfig
from distillery.core.startup import resolve_startup_mode
from distillery.debug_log import export_logs_to_file
from distillery.paths import get_config_path


def _load_file_config() -> DistilleryConfig:
    path = get_config_path()
    try:
        return DistilleryConfig.load(path)
    except (OSError, ValueError) as exc:
        # tomllib.TOMLDecodeError and pydantic.ValidationError are ValueErrors
        click.secho(f"Ignoring invalid config file {path}: {exc}", fg="yellow", err=True)
        return DistilleryConfig()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("pr_ref", required=False)
@click.option("-R", "--repo", help="Repository for the PR picker (owner/repo).")
@click.option("-m", "--model", help="OpenAI model used to generate the story.")
@click.option(
    "--cache", "use_cache", is_flag=True, help="Use the cached story (skip the LLM call)."
)
@click.option("--cache-file", help="Path to the story cache file.")
@click.option(
    "--remember",
    is_flag=True,
    help="Save --model and --cache-file as defaults in the config file.",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write the debug log to this file on exit.",
)
@click.version_option(__version__, "--version", prog_name="dstl")
def main(
    pr_ref: str | None,
    repo: str | None,
    model: str | None,
    use_cache: bool,
    cache_file: str | None,
    remember: bool,
    log_file: Path | None,
) -> None:
    """Distill a PR diff into a reviewable narrative.

    PR_REF is owner/repo#123, a GitHub pull request URL, or owner/repo to pick
    from its open PRs. Without arguments a repository selector opens.
    """
    load_dotenv()

    try:
        startup = resolve_startup_mode(pr_ref, repo)
    except ValueError as exc:
        raise click.UsageError(str(exc)) from exc

    file_config = _load_file_config()
    try:
        general = GeneralConfig(
            model=model or file_config.general.model,
            cache_file=cache_file or file_config.general.cache_file,
        )
    except ValidationError as exc:
        raise click.UsageError(str(exc)) from exc

    if remember:
        file_config.general = general
        file_config.save()
        click.echo(f"Saved defaults to {get_config_path()}")

    api_key = os.environ.get("OPENAI_API_KEY", "").strip()
    if not api_key:
        click.secho("Error: OPENAI_API_KEY environment variable not set", fg="red", err=True)
        sys.exit(1)

    config = AppConfig(
        api_key=api_key,
        model=general.model,
        use_cache=use_cache,
        cache_file=general.cache_file,
    )

    from distillery.tui.app import DistilleryApp

    app = DistilleryApp(config, startup, log_file=log_file)
    try:
        app.run()
    finally:
        if log_file is not None:
            count = export_logs_to_file(log_file)
            click.echo(f"Wrote {count} log entries to {log_file}")


if __name__ == "__main__":
    main()
