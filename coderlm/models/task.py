"""Task prompt domain models."""

from __future__ import annotations

import os
from dataclasses import dataclass

from coderlm.errors import PromptFileError, UsageError

TASK_POINTER_TEMPLATE = "Your task is stored in this file: {path}"


@dataclass(frozen=True)
class TaskPrompt:
    """Task given either inline or as a reference to a file on disk.

    File contents are never read into argv; the agent is pointed at the
    path and reads it itself.
    """

    text: str = ""
    path: str = ""

    def __post_init__(self) -> None:
        if self.text and self.path:
            raise UsageError("--prompt and --prompt-file are mutually exclusive")
        if not self.text and not self.path:
            raise UsageError("--prompt is required")

    @property
    def is_file(self) -> bool:
        return bool(self.path)

    def validate(self) -> None:
        """Fail fast if a referenced task file cannot be read."""
        if not self.path:
            return
        if not os.path.isfile(self.path):
            raise PromptFileError(f"prompt file not found: {self.path}")
        try:
            with open(self.path, "rb"):
                pass
        except OSError as e:
            raise PromptFileError(f"prompt file not readable: {self.path} ({e.strerror})") from e

    def render(self) -> str:
        """Return the task portion of the agent prompt."""
        if self.path:
            return TASK_POINTER_TEMPLATE.format(path=self.path)
        return self.text
