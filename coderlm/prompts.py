"""System prompt template for launched agents.

The system prompt is a pure function of the execution context. It never sees
the task, so families that take system and task prompts as separate
arguments keep the two apart.
"""

from __future__ import annotations

from coderlm.models.agent import ExecutionContext

IDENTITY = """\
You are an RLM, a recursive language model agent. You work inside a shell on \
the user's machine and may split large work into smaller sub-problems. When a \
sub-problem is self-contained, you may delegate it by launching a fresh agent \
on it with `coderlm`, passing a max-depth one lower than your own. When your \
max-depth is 1 you must not launch further agents and must do the work \
yourself."""

OUTPUT_GUARDS = """\
Follow these output guards:
- Never print whole large files or unbounded command output; use head, tail, \
wc, grep or similar to keep tool output small.
- Keep outputs returned to a parent agent short and self-contained, since the \
parent reads them in full.
- Do not reveal secrets, credentials or tokens you come across.
- If you are unsure whether an action is safe, stop and report instead of \
guessing."""

NO_FILES_NOTE = "No files were requested; discover what you need yourself."
NO_MATCHES_NOTE = "File patterns were given but no files matched them."


def _render_files(context: ExecutionContext) -> str:
    if context.files:
        return "Files in scope:\n" + "\n".join(f"- {path}" for path in context.files)
    if context.files_requested:
        return NO_MATCHES_NOTE
    return NO_FILES_NOTE


def build_system_prompt(context: ExecutionContext) -> str:
    """Render the system prompt for a launch."""
    environment = "\n".join(
        [
            "<execution_environment>",
            _render_files(context),
            f"max-depth={context.max_depth}",
            "</execution_environment>",
        ]
    )
    return f"{IDENTITY}\n\n{environment}\n\n{OUTPUT_GUARDS}"


def combine_prompts(system_prompt: str, task: str) -> str:
    """Join system instructions and task for agents with a single prompt slot."""
    return f"{system_prompt}\n\n{task}"
