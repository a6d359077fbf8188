#!/usr/bin/env python3
"""
config.py
-------------------
Runtime configuration for Journalist.

Configuration is resolved in three layers, later layers winning:
    1. Defaults from journalist.core.paths
    2. Environment variables (JOURNAL_DIR, EDITOR, JOURNAL_BACKEND)
    3. An optional config.yaml inside the journal directory

Example config.yaml:

    backend: files
    editor: vim
    hooks:
      simple_logger: true
      database_sync: false
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from .exceptions import ConfigError
from .paths import (
    CONFIG_FILENAME,
    DATA_DIRNAME,
    DB_FILENAME,
    INDEXES_DIRNAME,
    LOG_DIRNAME,
    default_journal_dir,
)

BACKENDS = ("database", "files")
DEFAULT_EDITOR = "nano"


@dataclass
class JournalConfig:
    """
    Resolved configuration for one journal.

    Attributes:
        journal_dir: Root directory of the journal
        editor: Command used to edit entries
        backend: Storage backend ('database' or 'files')
        hooks: Hook key -> enabled flag overrides (files backend only)
    """

    journal_dir: Path
    editor: str = DEFAULT_EDITOR
    backend: str = "database"
    hooks: Dict[str, bool] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.journal_dir = Path(self.journal_dir).expanduser()
        if self.backend not in BACKENDS:
            raise ConfigError(
                f"Unknown backend '{self.backend}'; expected one of: {', '.join(BACKENDS)}"
            )

    @property
    def data_dir(self) -> Path:
        return self.journal_dir / DATA_DIRNAME

    @property
    def indexes_dir(self) -> Path:
        return self.journal_dir / INDEXES_DIRNAME

    @property
    def log_dir(self) -> Path:
        return self.journal_dir / LOG_DIRNAME

    @property
    def db_path(self) -> Path:
        return self.journal_dir / DB_FILENAME

    @property
    def config_path(self) -> Path:
        return self.journal_dir / CONFIG_FILENAME

    def hook_enabled(self, key: str) -> Optional[bool]:
        """Return the configured flag for a hook, or None to use its default."""
        return self.hooks.get(key)

    @classmethod
    def from_env(
        cls,
        environ: Optional[Mapping[str, str]] = None,
        journal_dir: Optional[Path] = None,
    ) -> "JournalConfig":
        """
        Build configuration from the environment and config.yaml.

        Args:
            environ: Environment mapping (defaults to os.environ)
            journal_dir: Explicit journal directory, overriding JOURNAL_DIR

        Returns:
            Resolved JournalConfig

        Raises:
            ConfigError: If config.yaml is unreadable or holds invalid values
        """
        environ = os.environ if environ is None else environ

        if journal_dir is None:
            env_dir = environ.get("JOURNAL_DIR")
            journal_dir = Path(env_dir) if env_dir else default_journal_dir()
        journal_dir = Path(journal_dir).expanduser()

        settings: Dict[str, Any] = {
            "editor": environ.get("EDITOR") or DEFAULT_EDITOR,
            "backend": environ.get("JOURNAL_BACKEND") or "database",
            "hooks": {},
        }
        settings.update(load_config_file(journal_dir / CONFIG_FILENAME))

        return cls(journal_dir=journal_dir, **settings)


def load_config_file(config_path: Path) -> Dict[str, Any]:
    """
    Read recognized keys from a YAML config file.

    Args:
        config_path: Path to config.yaml

    Returns:
        Dictionary with any of 'backend', 'editor', 'hooks'; empty if the
        file does not exist

    Raises:
        ConfigError: If the file cannot be parsed or has the wrong shape
    """
    if not config_path.is_file():
        return {}

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read {config_path.name}: {e}") from e

    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path.name} must contain a mapping at top level")

    settings: Dict[str, Any] = {}
    for key in ("backend", "editor"):
        if key in raw:
            settings[key] = str(raw[key])

    hooks = raw.get("hooks", {})
    if hooks:
        if not isinstance(hooks, dict):
            raise ConfigError("'hooks' must map hook names to true/false")
        settings["hooks"] = {str(name): bool(flag) for name, flag in hooks.items()}

    return settings
