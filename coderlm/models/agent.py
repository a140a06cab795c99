"""Agent command domain models."""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from enum import Enum

from coderlm.errors import CommandSyntaxError


class AgentFamily(str, Enum):
    CLAUDE = "claude"
    CODEX = "codex"
    GEMINI = "gemini"
    GENERIC = "generic"


class LaunchMode(str, Enum):
    INLINE = "inline"  # no file patterns accepted
    SCOPED = "scoped"  # at least one file pattern required


@dataclass(frozen=True)
class AgentCommand:
    """The agent executable plus any user flags that precede task arguments."""

    tokens: tuple[str, ...]

    def __post_init__(self) -> None:
        if not self.tokens:
            raise CommandSyntaxError("agent command is empty")

    @property
    def program(self) -> str:
        return self.tokens[0]


@dataclass(frozen=True)
class CommandSpec:
    """Final argv handed to the launch driver."""

    program: str
    args: tuple[str, ...] = ()

    @property
    def argv(self) -> tuple[str, ...]:
        return (self.program, *self.args)

    @property
    def full_command(self) -> str:
        """Return the full command string for shell execution."""
        return " ".join(shlex.quote(p) for p in self.argv)


@dataclass(frozen=True)
class ExecutionContext:
    """Environment metadata embedded in the system prompt."""

    files: tuple[str, ...] = ()
    max_depth: int = 3
    allowed_tools: str = "Bash"
    files_requested: bool = False


@dataclass(frozen=True)
class PromptLayout:
    """How one agent family expects its prompt to be passed.

    ``leading_args`` go right after the user's command prefix. With
    ``separate_system`` the system prompt follows ``system_flag`` and the task
    is the final token; otherwise system and task are combined into a single
    argument placed after ``prompt_flag`` (if any) and before ``trailing_args``.
    """

    leading_args: tuple[str, ...] = ()
    prompt_flag: str = ""
    trailing_args: tuple[str, ...] = ()
    separate_system: bool = False
    system_flag: str = ""
    tools_flag: str = ""
