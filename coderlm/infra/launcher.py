"""Launch driver: print the final argv or hand the process over to the agent."""

from __future__ import annotations

import logging
import os
from typing import BinaryIO, NoReturn

from coderlm.errors import LaunchError
from coderlm.models.agent import CommandSpec

logger = logging.getLogger(__name__)

EXIT_NOT_FOUND = 127
EXIT_NOT_EXECUTABLE = 126


def format_dry_run(command: CommandSpec) -> bytes:
    """Serialize argv with a NUL after every token.

    Prompts routinely contain spaces and newlines, so NUL is the only
    separator a downstream parser can split on unambiguously. Tokens are
    encoded the way os.execvp would pass them, so undecodable argv bytes
    round-trip unchanged.
    """
    return b"".join(os.fsencode(token) + b"\0" for token in command.argv)


def write_dry_run(command: CommandSpec, stream: BinaryIO) -> None:
    stream.write(format_dry_run(command))
    stream.flush()


def exec_command(command: CommandSpec) -> NoReturn:
    """Replace the current process with the agent.

    The agent inherits stdio and the environment, and its exit code becomes
    ours. Only returns by raising when the program cannot be started.
    """
    logger.debug("Executing: %s", command.full_command)
    try:
        os.execvp(command.program, list(command.argv))
    except FileNotFoundError as e:
        raise LaunchError(
            f"agent command not found: {command.program}", exit_code=EXIT_NOT_FOUND
        ) from e
    except OSError as e:
        raise LaunchError(
            f"cannot execute {command.program}: {e.strerror or e}",
            exit_code=EXIT_NOT_EXECUTABLE,
        ) from e
