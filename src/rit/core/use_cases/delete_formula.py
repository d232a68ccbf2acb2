from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rit.core.domain.entities import DeleteReport
from rit.core.services.error_codes import ErrorCode, RitError, io_error
from rit.core.services.group_deletion import delete_group
from rit.core.services.observability import log_operation
from rit.core.services.rit_paths import RitPaths
from rit.core.services.safe_fs import ensure_within_root, validate_segments
from rit.core.use_cases.regenerate_tree import RegenerateTreeUseCase


class DeleteFormulaUseCase:
    """Deletes a formula from a workspace and from the local repo, then reindexes.

    The two deletions are not atomic. If the local repo deletion fails, the
    workspace deletion has already happened and is kept; tree.json is only
    rewritten once both trees have been updated.
    """

    def __init__(self, paths: RitPaths, regenerate_tree: RegenerateTreeUseCase | None = None):
        self._paths = paths
        self._regenerate_tree = regenerate_tree or RegenerateTreeUseCase(paths)

    def execute(self, workspace_dir: str | Path, groups: Sequence[str]) -> DeleteReport:
        groups = validate_segments(groups)
        workspace_dir = Path(workspace_dir)
        local_repo = self._paths.local_repo_dir

        for root in (workspace_dir, local_repo):
            target = ensure_within_root(root_dir=root, segments=groups)
            if target.exists() and not target.is_dir():
                raise RitError(
                    code=ErrorCode.VALIDATION_ERROR,
                    message=f"Not a formula or group directory: {target}",
                    details={"path": str(target)},
                )

        with log_operation(
            "formula_delete",
            details={"groups": groups, "workspace": str(workspace_dir)},
        ) as ctx:
            self._delete(workspace_dir, groups, "workspace_delete")
            ctx["workspace_deleted"] = True
            self._delete(local_repo, groups, "local_repo_delete")
            ctx["local_repo_deleted"] = True

        report = self._regenerate_tree.execute()
        return DeleteReport(
            groups=groups,
            workspace_dir=workspace_dir,
            local_repo_dir=local_repo,
            tree_file=report.tree_file,
            command_count=report.command_count,
        )

    @staticmethod
    def _delete(root_dir: Path, groups: list[str], operation: str) -> None:
        try:
            delete_group(root_dir, groups)
        except OSError as exc:
            raise io_error(exc, operation) from exc
