from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from rit.core.services.dir_lister import DirLister
from rit.core.services.prompt import Prompter
from rit.core.services.rit_paths import DEFAULT_RESERVED_ENTRIES
from rit.core.services.tree_generator import is_formula

SELECT_PROMPT = "Select a formula or group: "


class ResolveFormulaUseCase:
    """Walks a workspace one group at a time until the user reaches a formula."""

    def __init__(
        self,
        prompter: Prompter,
        dir_lister: DirLister | None = None,
        reserved_entries: Iterable[str] = DEFAULT_RESERVED_ENTRIES,
    ):
        self._prompter = prompter
        self._dirs = dir_lister or DirLister()
        self._reserved = frozenset(reserved_entries)

    def execute(self, start_dir: str | Path) -> List[str]:
        """Return the command path selected below ``start_dir``.

        An empty list means ``start_dir`` itself has no groups to descend into.
        Listing failures surface as ``OSError``; prompt failures are re-raised
        untouched.
        """
        current = Path(start_dir)
        groups: List[str] = []
        while True:
            dirs = [name for name in self._dirs.list(current, False) if name not in self._reserved]
            if is_formula(dirs):
                return groups
            selected = self._prompter.choose(SELECT_PROMPT, dirs)
            groups.append(selected)
            current = current / selected
