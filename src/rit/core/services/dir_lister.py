from __future__ import annotations

from pathlib import Path


class DirLister:
    """Lists the child directories of a path, sorted by name.

    Only directories are returned: a formula or group is a directory, and any
    file sitting next to them is not part of the command namespace.
    """

    def list(self, path: str | Path, include_hidden: bool = False) -> list[str]:
        names = []
        for entry in Path(path).iterdir():
            if not entry.is_dir():
                continue
            if not include_hidden and entry.name.startswith("."):
                continue
            names.append(entry.name)
        return sorted(names)
