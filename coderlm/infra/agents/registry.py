"""Agent family registry: ordered matchers and per-family prompt layouts."""

from __future__ import annotations

import logging

from coderlm.infra.agents.base import AgentBackend
from coderlm.infra.agents.detect import candidate_identifiers
from coderlm.infra.agents.layout import LayoutBackend
from coderlm.models.agent import AgentCommand, AgentFamily, PromptLayout

logger = logging.getLogger(__name__)

# Checked in order; the first family whose names contain a candidate wins.
_BACKENDS: list[AgentBackend] = [
    LayoutBackend(
        AgentFamily.CLAUDE,
        PromptLayout(
            leading_args=("-p",),
            separate_system=True,
            system_flag="--append-system-prompt",
            tools_flag="--allowedTools",
        ),
        names=("claude", "claude-code", "@anthropic-ai/claude-code"),
    ),
    LayoutBackend(
        AgentFamily.CODEX,
        PromptLayout(leading_args=("exec", "--full-auto")),
        names=("codex", "@openai/codex"),
    ),
    LayoutBackend(
        AgentFamily.GEMINI,
        PromptLayout(prompt_flag="-p", trailing_args=("--yolo",)),
        names=("gemini", "gemini-cli", "@google/gemini-cli"),
    ),
]

_GENERIC = LayoutBackend(AgentFamily.GENERIC, PromptLayout())


def detect_family(agent: AgentCommand) -> AgentFamily:
    """Classify an agent command, falling back to the generic family."""
    for identifier in candidate_identifiers(agent.tokens):
        for backend in _BACKENDS:
            if backend.matches_identifier(identifier):
                logger.debug("Detected %s agent from %r", backend.family.value, identifier)
                return backend.family
    logger.debug("No known agent in %r, using generic backend", agent.tokens)
    return AgentFamily.GENERIC


def get_backend(family: AgentFamily | str) -> AgentBackend:
    """Get the backend for a family by enum or value."""
    if isinstance(family, str):
        family = AgentFamily(family)

    if family == AgentFamily.GENERIC:
        return _GENERIC
    for backend in _BACKENDS:
        if backend.family == family:
            return backend
    raise ValueError(f"Unknown agent family: {family}")
