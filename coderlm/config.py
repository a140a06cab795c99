"""Configuration loading: TOML file + environment variable overlay."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]


DEFAULT_CONFIG_DIR = Path.home() / ".config" / "coderlm"
DEFAULT_CONFIG_PATH = DEFAULT_CONFIG_DIR / "config.toml"

DEFAULT_MAX_DEPTH = 3
DEFAULT_ALLOWED_TOOLS = "Bash"

DEFAULT_CONFIG_TOML = """\
[defaults]
# Bounds file globbing and is echoed into the agent's system prompt
max_depth = 3
# Tool permissions passed to claude via --allowedTools
allowed_tools = "Bash"
"""


@dataclass
class LaunchDefaults:
    max_depth: int = DEFAULT_MAX_DEPTH
    allowed_tools: str = DEFAULT_ALLOWED_TOOLS


@dataclass
class AppConfig:
    defaults: LaunchDefaults = field(default_factory=LaunchDefaults)
    config_path: Path = DEFAULT_CONFIG_PATH


def default_config_path() -> Path:
    """Return the config path, honoring CODERLM_CONFIG."""
    if env_path := os.environ.get("CODERLM_CONFIG"):
        return Path(env_path).expanduser()
    return DEFAULT_CONFIG_PATH


def _env_overlay(config: AppConfig) -> None:
    """Override config values with environment variables where applicable."""
    if depth := os.environ.get("CODERLM_MAX_DEPTH"):
        try:
            config.defaults.max_depth = int(depth)
        except ValueError as e:
            raise ValueError(f"CODERLM_MAX_DEPTH must be an integer, got {depth!r}") from e
    if tools := os.environ.get("CODERLM_ALLOWED_TOOLS"):
        config.defaults.allowed_tools = tools


def _parse_defaults(data: object) -> LaunchDefaults:
    if not isinstance(data, dict):
        raise ValueError(f"[defaults] must be a table, got {type(data).__name__}")

    max_depth = data.get("max_depth", DEFAULT_MAX_DEPTH)
    # bool is an int subclass
    if not isinstance(max_depth, int) or isinstance(max_depth, bool):
        raise ValueError(f"max_depth must be an integer, got {max_depth!r}")

    allowed_tools = data.get("allowed_tools", DEFAULT_ALLOWED_TOOLS)
    if not isinstance(allowed_tools, str):
        raise ValueError(f"allowed_tools must be a string, got {allowed_tools!r}")

    return LaunchDefaults(max_depth=max_depth, allowed_tools=allowed_tools)


def load_config(config_path: Path | None = None) -> AppConfig:
    """Load configuration from TOML file with env var overlay."""
    path = config_path or default_config_path()

    if path.exists():
        with open(path, "rb") as f:
            raw = tomllib.load(f)
    else:
        raw = tomllib.loads(DEFAULT_CONFIG_TOML)

    config = AppConfig(
        defaults=_parse_defaults(raw.get("defaults", {})),
        config_path=path,
    )

    _env_overlay(config)

    if config.defaults.max_depth < 1:
        raise ValueError(f"max_depth must be at least 1, got {config.defaults.max_depth}")
    return config


def init_config(config_path: Path | None = None) -> Path:
    """Create default config file."""
    path = config_path or default_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(DEFAULT_CONFIG_TOML)
    return path
