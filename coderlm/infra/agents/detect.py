"""Agent identifier resolution from a command prefix.

The agent may be invoked directly (``claude``, ``/usr/local/bin/codex``) or
through a package runner (``bunx --bun @google/gemini-cli``, ``npx -y
@openai/codex@latest``, ``pnpm dlx ...``). Resolution skips the runner and its
flags and yields the tokens that could name the agent, normalized so that
paths, executable suffixes and version pins do not matter.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence

# Runners whose first positional argument is the package to run
RUNNERS: set[str] = {"npx", "bunx", "pnpx", "uvx"}

# Runners that need a subcommand before the package
RUNNER_SUBCOMMANDS: dict[str, set[str]] = {
    "bun": {"x"},
    "npm": {"exec", "x"},
    "pnpm": {"dlx", "exec"},
    "yarn": {"dlx", "exec"},
    "pipx": {"run"},
}

_EXECUTABLE_SUFFIXES = (".exe", ".cmd", ".bat")

# Flags (of agents and common wrappers like nice, sudo, env, timeout) whose
# next token is a value, never the agent
VALUE_FLAGS: set[str] = {
    "-m", "--model",
    "-c", "--config",
    "--profile",
    "-n", "--adjustment",
    "-u", "--user", "--unset",
    "-g", "--group",
    "-C", "--chdir", "--cd",
    "-s", "--signal",
    "-k", "--kill-after",
    "-S", "--split-string",
}


def normalize_identifier(token: str) -> str:
    """Reduce a binary path or package specifier to a bare lowercase name.

    ``/usr/local/bin/claude`` -> ``claude``, ``codex.exe`` -> ``codex``,
    ``@google/gemini-cli@0.1.5`` -> ``@google/gemini-cli``.
    """
    name = token.strip().lower()
    if name.startswith("@"):
        scope, _, package = name.partition("/")
        return f"{scope}/{package.split('@', 1)[0]}"
    name = name.replace("\\", "/").rsplit("/", 1)[-1]
    name = name.split("@", 1)[0]
    for suffix in _EXECUTABLE_SUFFIXES:
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return name


def _runner_offset(tokens: Sequence[str]) -> int:
    """Return the index just past a package-runner prefix, or 0 if there is none."""
    head = normalize_identifier(tokens[0])
    if head in RUNNERS:
        start = 1
    elif len(tokens) > 1 and tokens[1] in RUNNER_SUBCOMMANDS.get(head, ()):
        start = 2
    else:
        return 0
    while start < len(tokens) and tokens[start].startswith("-"):
        start += 1
    return start


def candidate_identifiers(tokens: Sequence[str]) -> Iterator[str]:
    """Yield normalized tokens that may name the agent, in priority order.

    Flags are skipped rather than ending the scan, so wrappers such as
    ``nice -n 10 codex`` or ``sudo -E claude`` still expose the agent. The
    value of a known value-taking flag is skipped too, so
    ``my-agent --model claude`` never decides the family.
    """
    if not tokens:
        return
    skip_value = False
    for token in tokens[_runner_offset(tokens):]:
        if skip_value:
            skip_value = False
            continue
        if token.startswith("-"):
            # --flag=value never matches, its value is inline
            skip_value = token in VALUE_FLAGS
            continue
        yield normalize_identifier(token)
