from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

TREE_VERSION = "v2"
ROOT_COMMAND_ID = "root"


@dataclass(frozen=True)
class Workspace:
    """A named root directory holding one formula namespace tree."""

    name: str
    dir: str

    def label(self) -> str:
        return f"{self.name} ({self.dir})"


@dataclass(frozen=True)
class DeleteFormulaRequest:
    """Non-interactive deletion request, as read from stdin.

    Attributes:
        workspace: Root directory of the workspace the formula lives in.
        groups: Ordered command path segments, e.g. ["docker", "build"].
    """

    workspace: str
    groups: List[str]


@dataclass
class Command:
    """One node of the serialized command tree (a group or a formula)."""

    id: str
    parent: str
    usage: str
    help: str = ""
    long_help: Optional[str] = None
    formula: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "parent": self.parent,
            "usage": self.usage,
            "help": self.help,
            "formula": self.formula,
        }
        if self.long_help:
            data["longHelp"] = self.long_help
        return data

    @classmethod
    def from_dict(cls, command_id: str, raw: Dict[str, Any]) -> "Command":
        return cls(
            id=command_id,
            parent=str(raw.get("parent", "")),
            usage=str(raw.get("usage", "")),
            help=str(raw.get("help") or ""),
            long_help=raw.get("longHelp"),
            formula=bool(raw.get("formula", False)),
        )


@dataclass
class CommandTree:
    """Serialized index of every command installed under a root."""

    version: str = TREE_VERSION
    commands: Dict[str, Command] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "commands": {cid: self.commands[cid].to_dict() for cid in sorted(self.commands)},
        }

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "CommandTree":
        commands = raw.get("commands") or {}
        return cls(
            version=str(raw.get("version", TREE_VERSION)),
            commands={cid: Command.from_dict(cid, value) for cid, value in commands.items()},
        )

    def command_path(self, command_id: str) -> List[str]:
        """Walk parents back to the root and return the usage tokens in order."""
        path: List[str] = []
        current = self.commands.get(command_id)
        while current is not None:
            path.insert(0, current.usage)
            current = self.commands.get(current.parent)
        return path


@dataclass(frozen=True)
class DeleteReport:
    groups: List[str]
    workspace_dir: Path
    local_repo_dir: Path
    tree_file: Path
    command_count: int

    @property
    def command_line(self) -> str:
        return "rit " + " ".join(self.groups)
