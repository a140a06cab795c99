"""Launcher error taxonomy."""

from __future__ import annotations


class CoderlmError(RuntimeError):
    pass


class UsageError(CoderlmError):
    """Bad or missing launcher input."""


class CommandSyntaxError(UsageError):
    """The agent command string could not be split into tokens."""


class ResourceError(CoderlmError):
    """A file or directory the launcher needs is unavailable."""


class PromptFileError(ResourceError):
    pass


class WorkingDirectoryError(ResourceError):
    pass


class LaunchError(CoderlmError):
    """The agent executable could not be started."""

    def __init__(self, message: str, exit_code: int = 126) -> None:
        super().__init__(message)
        self.exit_code = exit_code
