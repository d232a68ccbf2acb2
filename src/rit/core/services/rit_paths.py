from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml

from rit.core.services.error_codes import ErrorCode, RitError
from rit.core.services.observability import log_debug

DEFAULT_WORKSPACE_NAME = "Default"
DEFAULT_WORKSPACE_DIR = "ritchie-formulas-local"
DEFAULT_RESERVED_ENTRIES = ("docs",)
SETTINGS_FILE = "cli.config.yaml"


@dataclass(frozen=True)
class RitPaths:
    user_home: Path
    rit_home: Path
    workspace_dir: Optional[Path] = None

    @property
    def default_workspace_dir(self) -> Path:
        return self.workspace_dir or self.user_home / DEFAULT_WORKSPACE_DIR

    @property
    def repos_dir(self) -> Path:
        return self.rit_home / "repos"

    @property
    def local_repo_dir(self) -> Path:
        return self.repos_dir / "local"

    @property
    def tree_file(self) -> Path:
        return self.local_repo_dir / "tree.json"

    @property
    def workspaces_file(self) -> Path:
        return self.rit_home / "formula_workspaces.json"

    @property
    def settings_file(self) -> Path:
        return self.rit_home / SETTINGS_FILE


@dataclass(frozen=True)
class RitSettings:
    reserved_entries: tuple[str, ...] = DEFAULT_RESERVED_ENTRIES
    default_workspace_dir: Optional[str] = None


def get_rit_paths(env: Optional[Mapping[str, str]] = None, home: Optional[Path] = None) -> RitPaths:
    """
    Resolve the directories rit works with.

    Defaults:
    - RIT_HOME: ~/.rit
    - default workspace: ~/ritchie-formulas-local (overridable in cli.config.yaml)
    """

    env = env if env is not None else os.environ
    home = home or Path.home()

    rit_home = Path(env.get("RIT_HOME") or (home / ".rit")).expanduser()
    paths = RitPaths(user_home=home, rit_home=rit_home)

    settings = load_settings(paths)
    if settings.default_workspace_dir:
        workspace = Path(settings.default_workspace_dir).expanduser()
        if not workspace.is_absolute():
            workspace = home / workspace
        paths = RitPaths(user_home=home, rit_home=rit_home, workspace_dir=workspace)
    return paths


def _normalize_reserved(raw: Any) -> tuple[str, ...]:
    if raw is None:
        return DEFAULT_RESERVED_ENTRIES
    if not isinstance(raw, list):
        raise RitError(
            code=ErrorCode.CONFIG_INVALID,
            message="reserved_entries must be a list of directory names",
            details={"value": raw},
        )
    return tuple(str(item).strip() for item in raw if str(item).strip())


def load_settings(paths: RitPaths) -> RitSettings:
    """Load optional CLI settings from <rit home>/cli.config.yaml."""
    settings_file = paths.settings_file
    if not settings_file.is_file():
        return RitSettings()

    try:
        data = yaml.safe_load(settings_file.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise RitError(
            code=ErrorCode.CONFIG_INVALID,
            message=f"Unable to parse {settings_file.name}",
            details={"path": str(settings_file), "reason": str(exc)},
        ) from exc
    if not isinstance(data, dict):
        raise RitError(
            code=ErrorCode.CONFIG_INVALID,
            message=f"{settings_file.name} must contain a YAML mapping",
            details={"path": str(settings_file)},
        )

    default_workspace = data.get("default_workspace_dir")
    if default_workspace is not None and not isinstance(default_workspace, str):
        raise RitError(
            code=ErrorCode.CONFIG_INVALID,
            message="default_workspace_dir must be a string",
            details={"value": default_workspace},
        )

    settings = RitSettings(
        reserved_entries=_normalize_reserved(data.get("reserved_entries")),
        default_workspace_dir=default_workspace.strip() if default_workspace else None,
    )
    log_debug("settings_loaded", details={"path": str(settings_file)})
    return settings
