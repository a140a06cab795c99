"""Shell-style splitting of the agent command string."""

from __future__ import annotations

import shlex

from coderlm.errors import CommandSyntaxError
from coderlm.models.agent import AgentCommand


def split_command(command: str) -> list[str]:
    """Split a command string into tokens the way a POSIX shell would.

    Quoted spans stay together with their quotes removed. Nothing is expanded:
    ``*``, ``$VAR`` and ``#`` are kept literally.
    """
    try:
        return shlex.split(command)
    except ValueError as e:
        raise CommandSyntaxError(f"malformed agent command {command!r}: {e}") from e


def parse_agent_command(command: str) -> AgentCommand:
    return AgentCommand(tokens=tuple(split_command(command)))
