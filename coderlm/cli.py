"""Click CLI definitions - main entry points.

``coderlm`` launches an agent on an inline or file-referenced task.
``coderlm-scoped`` additionally requires file patterns that scope the task.
"""

from __future__ import annotations

from coderlm.commands.launch_cmd import launch_command, scoped_launch_command

cli = launch_command
scoped_cli = scoped_launch_command


if __name__ == "__main__":
    cli()
