from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from rit.core.services.error_codes import io_error
from rit.core.services.observability import log_operation
from rit.core.services.rit_paths import RitPaths
from rit.core.services.tree_generator import TreeGenerator


@dataclass(frozen=True)
class TreeBuildReport:
    tree_file: Path
    command_count: int
    formula_count: int


class RegenerateTreeUseCase:
    """Rebuilds tree.json from what is currently on disk in the local repo."""

    def __init__(self, paths: RitPaths, tree_generator: TreeGenerator | None = None):
        self._paths = paths
        self._tree_generator = tree_generator or TreeGenerator()

    def execute(self) -> TreeBuildReport:
        local_repo = self._paths.local_repo_dir
        tree_file = self._paths.tree_file

        with log_operation("tree_regenerate", details={"local_repo": str(local_repo)}) as ctx:
            try:
                tree = self._tree_generator.generate(local_repo)
            except OSError as exc:
                raise io_error(exc, "tree_generate") from exc

            payload = json.dumps(tree.to_dict(), indent="\t", ensure_ascii=False)
            try:
                tree_file.parent.mkdir(parents=True, exist_ok=True)
                # Always a full rewrite; the index is never patched in place.
                tree_file.write_text(payload + "\n", encoding="utf-8")
            except OSError as exc:
                raise io_error(exc, "tree_write") from exc

            formula_count = sum(1 for command in tree.commands.values() if command.formula)
            ctx["commands"] = len(tree.commands)
            ctx["formulas"] = formula_count

        return TreeBuildReport(
            tree_file=tree_file,
            command_count=len(tree.commands),
            formula_count=formula_count,
        )
