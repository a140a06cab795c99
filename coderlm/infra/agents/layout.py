"""Table-driven agent backend."""

from __future__ import annotations

import logging

from coderlm.models.agent import (
    AgentCommand,
    AgentFamily,
    CommandSpec,
    ExecutionContext,
    PromptLayout,
)
from coderlm.prompts import combine_prompts

logger = logging.getLogger(__name__)


class LayoutBackend:
    """Backend whose argv shape is fully described by a PromptLayout.

    Generates commands like:
        <prefix...> <leading_args...> [system_flag SYSTEM] [tools_flag TOOLS] TASK
        <prefix...> <leading_args...> [prompt_flag] COMBINED <trailing_args...>
    """

    def __init__(
        self,
        family: AgentFamily,
        layout: PromptLayout,
        names: tuple[str, ...] = (),
    ) -> None:
        self.family = family
        self.layout = layout
        self.names = names

    def matches_identifier(self, identifier: str) -> bool:
        """Check if a resolved agent identifier is one of this family's names."""
        return identifier in self.names

    def build_command(
        self,
        agent: AgentCommand,
        system_prompt: str,
        task: str,
        context: ExecutionContext,
    ) -> CommandSpec:
        """Generate the final command from the user's prefix and both prompts."""
        layout = self.layout
        args: list[str] = list(agent.tokens[1:])
        args.extend(layout.leading_args)

        if layout.separate_system:
            if layout.system_flag:
                args.extend([layout.system_flag, system_prompt])
            if layout.tools_flag:
                args.extend([layout.tools_flag, context.allowed_tools])
            if layout.prompt_flag:
                args.append(layout.prompt_flag)
            args.append(task)
        else:
            if layout.prompt_flag:
                args.append(layout.prompt_flag)
            args.append(combine_prompts(system_prompt, task))

        args.extend(layout.trailing_args)

        logger.debug("Built %s command for %s", self.family.value, agent.program)
        return CommandSpec(program=agent.program, args=tuple(args))

    def __repr__(self) -> str:
        return f"LayoutBackend(family={self.family.value!r})"
