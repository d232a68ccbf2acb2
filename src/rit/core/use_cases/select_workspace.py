from __future__ import annotations

from pathlib import Path

from rit.core.domain.entities import Workspace
from rit.core.services.prompt import Prompter
from rit.core.services.rit_paths import DEFAULT_WORKSPACE_NAME, RitPaths
from rit.core.services.workspace import NEW_WORKSPACE_OPTION, WorkspaceRegistry

SELECT_WORKSPACE_PROMPT = "Select a formula workspace: "


class SelectWorkspaceUseCase:
    """Asks which workspace to work in, registering a newly typed one."""

    def __init__(self, paths: RitPaths, registry: WorkspaceRegistry, prompter: Prompter):
        self._paths = paths
        self._registry = registry
        self._prompter = prompter

    def execute(self) -> Workspace:
        workspaces = self._registry.list()
        default_dir = str(self._paths.default_workspace_dir)
        workspaces[DEFAULT_WORKSPACE_NAME] = default_dir

        by_label = {}
        for name, path in sorted(workspaces.items()):
            workspace = Workspace(name=name, dir=path)
            by_label[workspace.label()] = workspace
        options = [*by_label, NEW_WORKSPACE_OPTION]
        selected = self._prompter.choose(SELECT_WORKSPACE_PROMPT, options)

        if selected == NEW_WORKSPACE_OPTION:
            name = self._prompter.text("Enter the name of workspace", required=True)
            path = self._prompter.text(
                "Enter the path of workspace (e.g.: /home/user/github)", required=True
            )
            workspace = Workspace(name=name.title(), dir=path)
        else:
            workspace = by_label[selected]

        if Path(workspace.dir) != Path(default_dir):
            self._registry.validate(workspace)
            self._registry.add(workspace)
        return workspace
