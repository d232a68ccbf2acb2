from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable, Sequence

from rit.core.domain.entities import ROOT_COMMAND_ID, Command, CommandTree
from rit.core.services.dir_lister import DirLister
from rit.core.services.error_codes import ErrorCode, RitError
from rit.core.services.rit_paths import DEFAULT_RESERVED_ENTRIES

HELP_FILE = "help.json"


def is_formula(dirs: Sequence[str]) -> bool:
    """A directory whose listing holds no child directories is a formula."""
    return len(dirs) == 0


class TreeGenerator:
    """Builds the command tree for everything installed under a root directory."""

    def __init__(
        self,
        dir_lister: DirLister | None = None,
        reserved_entries: Iterable[str] = DEFAULT_RESERVED_ENTRIES,
    ):
        self._dirs = dir_lister or DirLister()
        self._reserved = frozenset(reserved_entries)

    def generate(self, root_dir: str | Path) -> CommandTree:
        root_dir = Path(root_dir)
        if not root_dir.is_dir():
            raise RitError(
                code=ErrorCode.TREE_ERROR,
                message=f"Cannot generate command tree, not a directory: {root_dir}",
                details={"path": str(root_dir)},
            )
        tree = CommandTree()
        for name in self._children(root_dir):
            self._walk(root_dir / name, ROOT_COMMAND_ID, tree)
        return tree

    def _children(self, path: Path) -> list[str]:
        return [name for name in self._dirs.list(path, False) if name not in self._reserved]

    def _walk(self, path: Path, parent_id: str, tree: CommandTree) -> None:
        usage = path.name
        command_id = f"{parent_id}_{usage}"
        children = self._children(path)
        formula = is_formula(children)

        short, long = self._read_help(path)
        tree.commands[command_id] = Command(
            id=command_id,
            parent=parent_id,
            usage=usage,
            help=short or (f"{usage} formula" if formula else f"{usage} commands"),
            long_help=long,
            formula=formula,
        )
        for name in children:
            self._walk(path / name, command_id, tree)

    def _read_help(self, path: Path) -> tuple[str | None, str | None]:
        help_file = path / HELP_FILE
        if not help_file.is_file():
            return None, None
        try:
            data = json.loads(help_file.read_text(encoding="utf-8"))
        except json.JSONDecodeError as exc:
            raise RitError(
                code=ErrorCode.TREE_ERROR,
                message=f"Invalid {HELP_FILE} in {path}",
                details={"path": str(help_file), "reason": str(exc)},
            ) from exc
        if not isinstance(data, dict):
            return None, None
        short = data.get("short")
        long = data.get("long")
        return (
            short if isinstance(short, str) and short.strip() else None,
            long if isinstance(long, str) and long.strip() else None,
        )
