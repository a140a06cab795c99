"""End-to-end tests for the launch commands."""

from __future__ import annotations

import logging

import pytest
from click.testing import CliRunner

from coderlm.cli import cli, scoped_cli
from coderlm.infra import launcher


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    monkeypatch.setenv("CODERLM_CONFIG", str(tmp_path / "no-config.toml"))
    monkeypatch.delenv("CODERLM_MAX_DEPTH", raising=False)
    monkeypatch.delenv("CODERLM_ALLOWED_TOOLS", raising=False)


@pytest.fixture
def project(tmp_path, monkeypatch):
    root = tmp_path / "project"
    root.mkdir()
    (root / "pyproject.toml").write_text("[project]")
    (root / "main.py").write_text("print('hi')")
    monkeypatch.chdir(root)
    return root


def _run(command, args):
    return CliRunner().invoke(command, args)


def _dry_run(args, command=cli):
    result = _run(command, [*args, "--dry-run"])
    tokens = [t.decode() for t in result.stdout_bytes.split(b"\0") if t]
    return result, tokens


class TestUsage:
    def test_help(self):
        result = _run(cli, ["--help"])
        assert result.exit_code == 0
        assert "Usage: coderlm" in result.output

    def test_no_args_shows_usage(self):
        result = _run(cli, [])
        assert result.exit_code == 0
        assert "Usage: coderlm" in result.output

    def test_scoped_no_args_shows_usage(self):
        result = _run(scoped_cli, [])
        assert result.exit_code == 0
        assert "Usage: coderlm-scoped" in result.output

    def test_missing_prompt(self):
        result = _run(cli, ["claude"])
        assert result.exit_code != 0
        assert "--prompt is required" in result.stderr

    def test_prompt_and_prompt_file_conflict(self, project):
        (project / "task.md").write_text("x")
        result = _run(cli, ["claude", "--prompt", "x", "--prompt-file", "task.md"])
        assert result.exit_code == 2
        assert "mutually exclusive" in result.stderr

    def test_unexpected_positional(self):
        result = _run(cli, ["claude", "*.ts", "--prompt", "test"])
        assert result.exit_code != 0
        assert "unexpected extra argument" in result.stderr

    def test_unknown_option(self):
        result = _run(cli, ["claude", "--bogus", "--prompt", "test"])
        assert result.exit_code != 0
        assert "--bogus" in result.stderr

    def test_malformed_command(self):
        result = _run(cli, ['claude --model "oops', "--prompt", "test"])
        assert result.exit_code == 2
        assert "malformed agent command" in result.stderr
        assert result.stdout_bytes == b""

    def test_empty_command(self):
        result = _run(cli, ["   ", "--prompt", "test"])
        assert result.exit_code == 2
        assert "agent command is empty" in result.stderr

    def test_bad_max_depth(self):
        result = _run(cli, ["claude", "--prompt", "test", "--max-depth", "0"])
        assert result.exit_code == 2

    def test_missing_prompt_file(self, project):
        result = _run(cli, ["claude", "--prompt-file", "nope.md", "--dry-run"])
        assert result.exit_code == 1
        assert "prompt file not found: nope.md" in result.stderr
        assert result.stdout_bytes == b""

    def test_scoped_requires_patterns(self):
        result = _run(scoped_cli, ["claude", "--prompt", "test"])
        assert result.exit_code == 2
        assert "at least one file pattern is required" in result.stderr


class TestClaude:
    def test_argv_shape(self):
        result, args = _dry_run(["claude", "--prompt", "find bugs"])
        assert result.exit_code == 0
        assert args[0] == "claude"
        assert args[1] == "-p"
        assert args[2] == "--append-system-prompt"
        assert "You are an RLM" in args[3]
        assert args[4] == "--allowedTools"
        assert args[5] == "Bash"
        assert args[6] == "find bugs"

    def test_system_prompt_blocks(self):
        _, args = _dry_run(["claude", "--prompt", "test"])
        assert "<execution_environment>" in args[3]
        assert "output guards" in args[3]

    def test_max_depth(self):
        _, args = _dry_run(["claude", "--prompt", "test", "--max-depth", "5"])
        assert "max-depth=5" in args[3]

    def test_allowed_tools_override(self):
        _, args = _dry_run(["claude", "--prompt", "test", "--allowedTools", "Bash,Edit"])
        assert args[4] == "--allowedTools"
        assert args[5] == "Bash,Edit"

    def test_prompt_not_in_system_prompt(self):
        _, args = _dry_run(["claude", "--prompt", "find all secrets"])
        assert "find all secrets" not in args[3]

    def test_model_flag_word_split(self):
        _, args = _dry_run(["claude --model claude-haiku-4-5", "--prompt", "test"])
        assert args[:5] == ["claude", "--model", "claude-haiku-4-5", "-p", "--append-system-prompt"]
        assert args[6:] == ["--allowedTools", "Bash", "test"]

    def test_prompt_file_pointer(self, project):
        (project / "task.md").write_text("secret details")
        _, args = _dry_run(["claude", "--prompt-file", "task.md"])
        assert args[-1] == "Your task is stored in this file: task.md"
        assert "task.md" not in args[3]


class TestCodex:
    def test_exec_full_auto(self):
        result, args = _dry_run(["codex", "--prompt", "review code"])
        assert result.exit_code == 0
        assert args[:3] == ["codex", "exec", "--full-auto"]
        assert "You are an RLM" in args[3]
        assert "review code" in args[3]

    def test_model_flag_word_split(self):
        _, args = _dry_run(["codex -m gpt-5.2-mini", "--prompt", "test"])
        assert args[:4] == ["codex", "-m", "gpt-5.2-mini", "exec"]


class TestGemini:
    def test_runner_prefix_and_yolo(self):
        result, args = _dry_run(["bunx --bun @google/gemini-cli", "--prompt", "analyze deps"])
        assert result.exit_code == 0
        assert args[:4] == ["bunx", "--bun", "@google/gemini-cli", "-p"]
        assert "You are an RLM" in args[4]
        assert "analyze deps" in args[4]
        assert args[5] == "--yolo"

    def test_model_flag_word_split(self):
        _, args = _dry_run(
            ["bunx --bun @google/gemini-cli -m gemini-2.5-flash", "--prompt", "test"]
        )
        assert args[:6] == ["bunx", "--bun", "@google/gemini-cli", "-m", "gemini-2.5-flash", "-p"]


class TestGeneric:
    def test_combined_prompt_single_arg(self):
        result, args = _dry_run(["my-agent", "--prompt", "do stuff"])
        assert result.exit_code == 0
        assert len(args) == 2
        assert args[0] == "my-agent"
        assert "You are an RLM" in args[1]
        assert "do stuff" in args[1]

    def test_family_override(self):
        result, args = _dry_run(["my-claude-wrapper", "--family", "claude", "--prompt", "x"])
        assert result.exit_code == 0
        assert args[:3] == ["my-claude-wrapper", "-p", "--append-system-prompt"]
        assert args[-1] == "x"

    def test_unknown_family(self):
        result = _run(cli, ["my-agent", "--family", "aider", "--prompt", "x"])
        assert result.exit_code == 2
        assert "--family" in result.stderr


class TestScoped:
    def test_matched_files_in_system_prompt(self, project):
        result, args = _dry_run(["claude", "*.toml", "--prompt", "find bugs"], command=scoped_cli)
        assert result.exit_code == 0
        assert "pyproject.toml" in args[3]
        assert "main.py" not in args[3]
        assert args[-1] == "find bugs"

    def test_unmatched_pattern_is_not_fatal(self, project, caplog):
        with caplog.at_level(logging.WARNING):
            result, args = _dry_run(
                ["claude", "*.nonexistent", "--prompt", "test"], command=scoped_cli
            )
        assert result.exit_code == 0
        assert "no files matched" in caplog.text
        assert args[0] == "claude"
        assert args[-1] == "test"

    def test_multiple_patterns(self, project):
        _, args = _dry_run(["codex", "*.toml", "*.py", "--prompt", "x"], command=scoped_cli)
        assert "- main.py\n- pyproject.toml" in args[3]


class TestDryRunOutput:
    def test_idempotent(self, project):
        argv = ["claude", "*.toml", "--prompt", "line one\nline two", "--dry-run"]
        first = _run(scoped_cli, argv)
        second = _run(scoped_cli, argv)
        assert first.exit_code == second.exit_code == 0
        assert first.stdout_bytes == second.stdout_bytes
        assert first.stdout_bytes.endswith(b"line one\nline two\0")


class TestConfig:
    def test_init_config(self, tmp_path):
        path = tmp_path / "conf" / "config.toml"
        result = _run(cli, ["--init-config", "--config", str(path)])
        assert result.exit_code == 0
        assert path.exists()
        assert str(path) in result.output

    def test_config_defaults_apply(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[defaults]\nmax_depth = 6\nallowed_tools = "Read"\n')
        _, args = _dry_run(["claude", "--prompt", "x", "--config", str(path)])
        assert "max-depth=6" in args[3]
        assert args[5] == "Read"

    def test_flags_override_config(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[defaults]\nmax_depth = 6\nallowed_tools = "Read"\n')
        _, args = _dry_run(
            ["claude", "--prompt", "x", "--config", str(path), "--max-depth", "2", "--allowedTools", "Bash"]
        )
        assert "max-depth=2" in args[3]
        assert args[5] == "Bash"

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("[defaults\n")
        result = _run(cli, ["claude", "--prompt", "x", "--config", str(path), "--dry-run"])
        assert result.exit_code == 1
        assert "invalid configuration" in result.stderr

    @pytest.mark.parametrize(
        "body",
        ['max_depth = "5"', "max_depth = 2.5", "max_depth = true", "allowed_tools = 3"],
    )
    def test_wrongly_typed_config(self, tmp_path, body):
        path = tmp_path / "config.toml"
        path.write_text(f"[defaults]\n{body}\n")
        result = _run(cli, ["claude", "--prompt", "x", "--config", str(path), "--dry-run"])
        assert result.exit_code == 1
        assert "invalid configuration" in result.stderr


class TestRealRun:
    def test_execs_agent(self, monkeypatch):
        calls = []

        def fake_execvp(program, argv):
            calls.append(argv)
            # A replaced process exits with the agent's own status
            raise SystemExit(3)

        monkeypatch.setattr(launcher.os, "execvp", fake_execvp)
        result = _run(cli, ["codex", "--prompt", "x"])
        assert result.exit_code == 3
        assert calls[0][:3] == ["codex", "exec", "--full-auto"]

    def test_agent_not_found(self, monkeypatch):
        def fake_execvp(program, argv):
            raise FileNotFoundError(2, "No such file or directory")

        monkeypatch.setattr(launcher.os, "execvp", fake_execvp)
        result = _run(cli, ["no-such-agent", "--prompt", "x"])
        assert result.exit_code == 127
        assert "agent command not found: no-such-agent" in result.stderr
