"""Launch service: one forward pass from user intent to final argv."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from coderlm.config import DEFAULT_ALLOWED_TOOLS, DEFAULT_MAX_DEPTH
from coderlm.infra.agents.registry import detect_family, get_backend
from coderlm.infra.files import list_files
from coderlm.infra.shell import parse_agent_command
from coderlm.models.agent import AgentFamily, CommandSpec, ExecutionContext
from coderlm.models.task import TaskPrompt
from coderlm.prompts import build_system_prompt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaunchRequest:
    """Everything the user asked for, before any processing."""

    command: str
    task: TaskPrompt
    patterns: tuple[str, ...] = ()
    max_depth: int = DEFAULT_MAX_DEPTH
    allowed_tools: str = DEFAULT_ALLOWED_TOOLS
    # Skips detection when set
    family: AgentFamily | None = None


def build_launch(request: LaunchRequest, root: str | Path | None = None) -> CommandSpec:
    """Assemble the agent invocation for a request.

    Splits the command, checks the task file, expands file patterns under
    ``root`` (default: cwd), renders the system prompt and lets the agent
    family (detected unless the request names one) lay out the final argv.
    """
    agent = parse_agent_command(request.command)
    request.task.validate()

    files = list_files(request.patterns, request.max_depth, root=root)
    context = ExecutionContext(
        files=tuple(files),
        max_depth=request.max_depth,
        allowed_tools=request.allowed_tools,
        files_requested=bool(request.patterns),
    )
    system_prompt = build_system_prompt(context)

    backend = get_backend(request.family or detect_family(agent))
    command = backend.build_command(agent, system_prompt, request.task.render(), context)
    logger.debug(
        "Prepared %s launch: %d file(s), max-depth=%d",
        backend.family.value,
        len(files),
        request.max_depth,
    )
    return command
