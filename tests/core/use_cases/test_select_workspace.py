from unittest.mock import MagicMock

import pytest

from rit.core.domain.entities import Workspace
from rit.core.services.error_codes import ErrorCode, RitError
from rit.core.services.workspace import NEW_WORKSPACE_OPTION, WorkspaceRegistry
from rit.core.use_cases.select_workspace import SELECT_WORKSPACE_PROMPT, SelectWorkspaceUseCase


@pytest.fixture
def registry(rit_paths):
    return WorkspaceRegistry(rit_paths.workspaces_file)


def test_default_workspace_is_not_registered(rit_paths, registry):
    default_label = f"Default ({rit_paths.default_workspace_dir})"
    prompter = MagicMock()
    prompter.choose.return_value = default_label

    workspace = SelectWorkspaceUseCase(rit_paths, registry, prompter).execute()

    assert workspace == Workspace(name="Default", dir=str(rit_paths.default_workspace_dir))
    prompter.choose.assert_called_once_with(
        SELECT_WORKSPACE_PROMPT, [default_label, NEW_WORKSPACE_OPTION]
    )
    assert not rit_paths.workspaces_file.exists()


def test_registered_workspaces_are_offered(rit_paths, registry, tmp_path):
    (tmp_path / "team").mkdir()
    registry.add(Workspace(name="Team", dir=str(tmp_path / "team")))
    prompter = MagicMock()
    prompter.choose.return_value = f"Team ({tmp_path / 'team'})"

    workspace = SelectWorkspaceUseCase(rit_paths, registry, prompter).execute()

    options = prompter.choose.call_args.args[1]
    assert options == [
        f"Default ({rit_paths.default_workspace_dir})",
        f"Team ({tmp_path / 'team'})",
        NEW_WORKSPACE_OPTION,
    ]
    assert workspace.name == "Team"


def test_new_workspace_is_validated_and_added(rit_paths, registry, tmp_path):
    (tmp_path / "mine").mkdir()
    prompter = MagicMock()
    prompter.choose.return_value = NEW_WORKSPACE_OPTION
    prompter.text.side_effect = ["my formulas", str(tmp_path / "mine")]

    workspace = SelectWorkspaceUseCase(rit_paths, registry, prompter).execute()

    assert workspace == Workspace(name="My Formulas", dir=str(tmp_path / "mine"))
    assert registry.list() == {"My Formulas": str(tmp_path / "mine")}


def test_new_workspace_must_exist(rit_paths, registry, tmp_path):
    prompter = MagicMock()
    prompter.choose.return_value = NEW_WORKSPACE_OPTION
    prompter.text.side_effect = ["ghost", str(tmp_path / "ghost")]

    with pytest.raises(RitError) as exc_info:
        SelectWorkspaceUseCase(rit_paths, registry, prompter).execute()

    assert exc_info.value.code == ErrorCode.WORKSPACE_ERROR
    assert registry.list() == {}


def test_empty_workspace_name_is_rejected(rit_paths, registry, tmp_path):
    prompter = MagicMock()
    prompter.choose.return_value = NEW_WORKSPACE_OPTION
    prompter.text.side_effect = ["", str(tmp_path)]

    with pytest.raises(RitError) as exc_info:
        SelectWorkspaceUseCase(rit_paths, registry, prompter).execute()

    assert exc_info.value.code == ErrorCode.VALIDATION_ERROR


def test_registered_workspace_with_parentheses_in_name(rit_paths, registry, tmp_path):
    work = tmp_path / "work (shared)"
    work.mkdir()
    registry.add(Workspace(name="My (Work)", dir=str(work)))
    prompter = MagicMock()
    prompter.choose.return_value = f"My (Work) ({work})"

    workspace = SelectWorkspaceUseCase(rit_paths, registry, prompter).execute()

    assert workspace == Workspace(name="My (Work)", dir=str(work))
    assert registry.list() == {"My (Work)": str(work)}
