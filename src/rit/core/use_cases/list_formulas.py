from __future__ import annotations

import json
from dataclasses import dataclass
from typing import List

from rit.core.domain.entities import CommandTree
from rit.core.services.error_codes import ErrorCode, RitError, io_error
from rit.core.services.rit_paths import RitPaths


@dataclass(frozen=True)
class FormulaEntry:
    groups: List[str]
    help: str

    @property
    def command_line(self) -> str:
        return "rit " + " ".join(self.groups)


class ListFormulasUseCase:
    def __init__(self, paths: RitPaths):
        self._paths = paths

    def execute(self) -> List[FormulaEntry]:
        tree_file = self._paths.tree_file
        if not tree_file.exists():
            return []
        try:
            raw = json.loads(tree_file.read_text(encoding="utf-8"))
        except OSError as exc:
            raise io_error(exc, "tree_read") from exc
        except json.JSONDecodeError as exc:
            raise RitError(
                code=ErrorCode.TREE_ERROR,
                message=f"Invalid command tree: {tree_file}",
                details={"path": str(tree_file), "reason": str(exc)},
            ) from exc
        if not isinstance(raw, dict):
            raise RitError(
                code=ErrorCode.TREE_ERROR,
                message=f"Invalid command tree: {tree_file}",
                details={"path": str(tree_file)},
            )

        tree = CommandTree.from_dict(raw)
        entries = [
            FormulaEntry(groups=tree.command_path(cid), help=command.help)
            for cid, command in tree.commands.items()
            if command.formula
        ]
        return sorted(entries, key=lambda e: e.groups)
