"""CLI handlers for the launch commands."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from coderlm.commands._helpers import configure_logging, translate_errors
from coderlm.config import init_config, load_config
from coderlm.infra.launcher import exec_command, write_dry_run
from coderlm.models.agent import AgentFamily, LaunchMode
from coderlm.models.task import TaskPrompt
from coderlm.services.launch_service import LaunchRequest, build_launch

logger = logging.getLogger(__name__)


def launch_options(func):
    """Options shared by both launch modes."""
    options = [
        click.option("--prompt", default=None, help="Task text passed to the agent"),
        click.option(
            "--prompt-file",
            type=click.Path(dir_okay=False, path_type=str),
            default=None,
            help="File holding the task; the agent is told to read it",
        ),
        click.option(
            "--max-depth",
            type=click.IntRange(min=1),
            default=None,
            help="Directory depth for file patterns, also the agent's recursion limit [default: 3]",
        ),
        click.option(
            "--allowedTools",
            "allowed_tools",
            default=None,
            help="Tool permissions for claude agents [default: Bash]",
        ),
        click.option(
            "--family",
            type=click.Choice([f.value for f in AgentFamily]),
            default=None,
            help="Agent CLI contract to use instead of detecting it from COMMAND",
        ),
        click.option("--dry-run", is_flag=True, help="Print the NUL-delimited argv instead of running it"),
        click.option(
            "--config",
            "config_path",
            type=click.Path(dir_okay=False, path_type=Path),
            default=None,
            help="Config file [default: ~/.config/coderlm/config.toml]",
        ),
        click.option("--init-config", "init_config_flag", is_flag=True, help="Write the default config file and exit"),
        click.option("--debug", is_flag=True, help="Enable debug logging"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def run_launch(
    ctx: click.Context,
    mode: LaunchMode,
    command: str | None,
    patterns: tuple[str, ...],
    *,
    prompt: str | None,
    prompt_file: str | None,
    max_depth: int | None,
    allowed_tools: str | None,
    family: str | None,
    dry_run: bool,
    config_path: Path | None,
    init_config_flag: bool,
    debug: bool,
) -> None:
    """Resolve defaults, assemble the agent command and launch or print it."""
    configure_logging(debug)

    if init_config_flag:
        path = init_config(config_path)
        click.echo(f"Configuration created at: {path}")
        return

    if command is None and prompt is None and prompt_file is None:
        click.echo(ctx.get_help())
        ctx.exit(0)

    if not command:
        raise click.UsageError("agent command is required", ctx=ctx)
    if mode == LaunchMode.SCOPED and not patterns:
        raise click.UsageError("at least one file pattern is required", ctx=ctx)

    try:
        config = load_config(config_path)
    except ValueError as e:
        raise click.ClickException(f"invalid configuration: {e}") from e
    logger.debug("Loaded config from %s", config.config_path)

    with translate_errors(ctx):
        request = LaunchRequest(
            command=command,
            task=TaskPrompt(text=prompt or "", path=prompt_file or ""),
            patterns=patterns,
            max_depth=max_depth or config.defaults.max_depth,
            allowed_tools=allowed_tools or config.defaults.allowed_tools,
            family=AgentFamily(family) if family else None,
        )
        spec = build_launch(request)

        if dry_run:
            write_dry_run(spec, sys.stdout.buffer)
            return

        exec_command(spec)


@click.command("coderlm")
@click.argument("command", required=False)
@launch_options
@click.pass_context
def launch_command(ctx: click.Context, command: str | None, **options) -> None:
    """Launch a coding agent on a task.

    COMMAND is the agent invocation as one string, e.g. "claude --model
    claude-haiku-4-5", "codex -m o4-mini" or "bunx --bun @google/gemini-cli".
    Unknown agents get the prompt as their only argument.
    """
    run_launch(ctx, LaunchMode.INLINE, command, (), **options)


@click.command("coderlm-scoped")
@click.argument("command", required=False)
@click.argument("patterns", nargs=-1)
@launch_options
@click.pass_context
def scoped_launch_command(
    ctx: click.Context, command: str | None, patterns: tuple[str, ...], **options
) -> None:
    """Launch a coding agent on a task scoped to files matching PATTERNS.

    At least one glob pattern is required. Matches are listed in the agent's
    system prompt; patterns that match nothing are reported and skipped.
    """
    run_launch(ctx, LaunchMode.SCOPED, command, patterns, **options)
