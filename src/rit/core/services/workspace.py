from __future__ import annotations

import json
from pathlib import Path
from typing import Dict

from rit.core.domain.entities import Workspace
from rit.core.services.error_codes import ErrorCode, RitError, io_error
from rit.core.services.observability import log_debug

NEW_WORKSPACE_OPTION = "Type new formula workspace?"


class WorkspaceRegistry:
    """Named formula workspaces persisted as a JSON object {name: dir}."""

    def __init__(self, workspaces_file: Path):
        self._file = Path(workspaces_file)

    def list(self) -> Dict[str, str]:
        if not self._file.exists():
            return {}
        try:
            data = json.loads(self._file.read_text(encoding="utf-8") or "{}")
        except OSError as exc:
            raise io_error(exc, "workspace_list") from exc
        except json.JSONDecodeError as exc:
            raise RitError(
                code=ErrorCode.WORKSPACE_ERROR,
                message=f"Invalid workspace registry: {self._file.name}",
                details={"path": str(self._file), "reason": str(exc)},
            ) from exc
        if not isinstance(data, dict):
            raise RitError(
                code=ErrorCode.WORKSPACE_ERROR,
                message=f"Invalid workspace registry: {self._file.name} must hold an object",
                details={"path": str(self._file)},
            )
        return {str(name): str(path) for name, path in data.items()}

    def validate(self, workspace: Workspace) -> None:
        if not workspace.name.strip():
            raise RitError(
                code=ErrorCode.VALIDATION_ERROR,
                message="Workspace name must not be empty",
            )
        if not workspace.dir.strip():
            raise RitError(
                code=ErrorCode.VALIDATION_ERROR,
                message="Workspace path must not be empty",
                details={"workspace": workspace.name},
            )
        if not Path(workspace.dir).is_dir():
            raise RitError(
                code=ErrorCode.WORKSPACE_ERROR,
                message="The formula workspace does not exist, please enter a valid workspace",
                details={"workspace": workspace.name, "dir": workspace.dir},
            )

    def add(self, workspace: Workspace) -> None:
        workspaces = self.list()
        existing = workspaces.get(workspace.name)
        if existing is not None:
            if Path(existing) == Path(workspace.dir):
                return
            raise RitError(
                code=ErrorCode.WORKSPACE_ERROR,
                message=f"Workspace '{workspace.name}' is already registered with another path",
                details={"workspace": workspace.name, "dir": existing},
            )

        workspaces[workspace.name] = workspace.dir
        try:
            self._file.parent.mkdir(parents=True, exist_ok=True)
            self._file.write_text(json.dumps(workspaces, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise io_error(exc, "workspace_add") from exc
        log_debug("workspace_added", details={"workspace": workspace.name, "dir": workspace.dir})
