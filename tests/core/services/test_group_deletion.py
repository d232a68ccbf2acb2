import pytest

import rit.core.services.group_deletion as group_deletion
from rit.core.services.group_deletion import delete_group, is_prunable


def test_deletes_single_level_formula_but_keeps_root(tmp_path, make_formula):
    make_formula(tmp_path, "hello")

    delete_group(tmp_path, ["hello"])

    assert not (tmp_path / "hello").exists()
    assert tmp_path.is_dir()


def test_root_is_kept_even_when_left_empty(tmp_path, make_formula):
    root = tmp_path / "workspace"
    make_formula(root, "a", "b", "c")

    delete_group(root, ["a", "b", "c"])

    assert root.is_dir()
    assert list(root.iterdir()) == []


def test_sibling_group_keeps_parent(tmp_path, make_formula):
    make_formula(tmp_path, "a", "x")
    make_formula(tmp_path, "a", "y")

    delete_group(tmp_path, ["a", "x"])

    assert not (tmp_path / "a" / "x").exists()
    assert (tmp_path / "a").is_dir()
    assert (tmp_path / "a" / "y" / "config.json").is_file()


def test_full_ancestor_chain_is_pruned(tmp_path, make_formula):
    make_formula(tmp_path, "a", "b", "c")

    delete_group(tmp_path, ["a", "b", "c"])

    assert not (tmp_path / "a").exists()
    assert tmp_path.is_dir()


def test_pruning_stops_at_ancestor_with_other_groups(tmp_path, make_formula):
    make_formula(tmp_path, "a", "b", "c")
    make_formula(tmp_path, "a", "z")

    delete_group(tmp_path, ["a", "b", "c"])

    assert not (tmp_path / "a" / "b").exists()
    assert (tmp_path / "a" / "z").is_dir()


def test_stray_files_do_not_block_pruning(tmp_path, make_formula):
    make_formula(tmp_path, "a", "b")
    (tmp_path / "a" / "README.md").write_text("group notes\n", encoding="utf-8")

    delete_group(tmp_path, ["a", "b"])

    assert not (tmp_path / "a").exists()


def test_directory_blocks_pruning_regardless_of_files(tmp_path, make_formula):
    make_formula(tmp_path, "a", "b")
    make_formula(tmp_path, "a", "docs", files=())
    (tmp_path / "a" / "README.md").write_text("group notes\n", encoding="utf-8")

    delete_group(tmp_path, ["a", "b"])

    assert (tmp_path / "a" / "README.md").is_file()
    assert (tmp_path / "a" / "docs").is_dir()


def test_symlinked_directory_does_not_block_pruning(tmp_path, make_formula):
    root = tmp_path / "workspace"
    outside = tmp_path / "shared"
    outside.mkdir()
    make_formula(root, "a", "b")
    (root / "a" / "link").symlink_to(outside, target_is_directory=True)

    delete_group(root, ["a", "b"])

    assert not (root / "a").exists()
    assert outside.is_dir()


def test_deleting_a_group_removes_everything_below_it(tmp_path, make_formula):
    make_formula(tmp_path, "docker", "build")
    make_formula(tmp_path, "docker", "push")
    make_formula(tmp_path, "http", "get")

    delete_group(tmp_path, ["docker"])

    assert not (tmp_path / "docker").exists()
    assert (tmp_path / "http" / "get").is_dir()


def test_scenario_docker_build_keeps_docker_push(tmp_path, make_formula):
    make_formula(tmp_path, "docker", "build")
    make_formula(tmp_path, "docker", "push")

    delete_group(tmp_path, ["docker", "build"])

    assert not (tmp_path / "docker" / "build").exists()
    assert (tmp_path / "docker" / "push").is_dir()


def test_scenario_http_generate_config_prunes_to_root(tmp_path, make_formula):
    make_formula(tmp_path, "http", "generate", "http-config")

    delete_group(tmp_path, ["http", "generate", "http-config"])

    assert not (tmp_path / "http").exists()
    assert tmp_path.is_dir()


def test_second_deletion_fails_when_parent_was_pruned(tmp_path, make_formula):
    make_formula(tmp_path, "a", "b")
    delete_group(tmp_path, ["a", "b"])

    with pytest.raises(FileNotFoundError):
        delete_group(tmp_path, ["a", "b"])


def test_second_deletion_fails_when_parent_survives(tmp_path, make_formula):
    make_formula(tmp_path, "docker", "build")
    make_formula(tmp_path, "docker", "push")
    delete_group(tmp_path, ["docker", "build"])

    with pytest.raises(FileNotFoundError):
        delete_group(tmp_path, ["docker", "build"])

    assert (tmp_path / "docker" / "push").is_dir()


def test_failed_prune_keeps_deeper_deletions(tmp_path, make_formula, monkeypatch):
    make_formula(tmp_path, "a", "b", "c")

    def _broken(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(group_deletion, "is_prunable", _broken)

    with pytest.raises(PermissionError):
        delete_group(tmp_path, ["a", "b", "c"])

    assert not (tmp_path / "a" / "b" / "c").exists()
    assert (tmp_path / "a" / "b").is_dir()


class TestIsPrunable:
    def test_empty_directory(self, tmp_path):
        assert is_prunable(tmp_path) is True

    def test_only_files(self, tmp_path):
        (tmp_path / "help.json").write_text("{}", encoding="utf-8")
        assert is_prunable(tmp_path) is True

    def test_hidden_directory_blocks(self, tmp_path):
        (tmp_path / ".git").mkdir()
        assert is_prunable(tmp_path) is False

    def test_symlink_to_directory_does_not_block(self, tmp_path):
        target = tmp_path / "target"
        target.mkdir()
        group = tmp_path / "group"
        group.mkdir()
        (group / "link").symlink_to(target, target_is_directory=True)
        assert is_prunable(group) is True

    def test_missing_directory_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            is_prunable(tmp_path / "missing")
