"""Agent backend protocol definition."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from coderlm.models.agent import AgentCommand, AgentFamily, CommandSpec, ExecutionContext


@runtime_checkable
class AgentBackend(Protocol):
    """Protocol for agent families.

    Each backend knows whether a resolved agent identifier belongs to it and
    how to turn the user's command prefix plus prompts into a CommandSpec.
    """

    family: AgentFamily

    def matches_identifier(self, identifier: str) -> bool:
        """Check if a resolved agent identifier belongs to this family."""
        ...

    def build_command(
        self,
        agent: AgentCommand,
        system_prompt: str,
        task: str,
        context: ExecutionContext,
    ) -> CommandSpec:
        """Generate the final command for this family."""
        ...
