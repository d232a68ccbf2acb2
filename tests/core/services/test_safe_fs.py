import pytest

from rit.core.services.error_codes import ErrorCode, RitError
from rit.core.services.safe_fs import (
    RitPathEscapeError,
    ensure_within_root,
    validate_segments,
)


def test_validate_segments_accepts_command_path():
    assert validate_segments(["docker", "build"]) == ["docker", "build"]


@pytest.mark.parametrize(
    "segments",
    [[], ["docker", ""], ["  "], [".."], ["docker", "."], ["a/b"], "docker"],
)
def test_validate_segments_rejects_invalid_paths(segments):
    with pytest.raises(RitError) as exc_info:
        validate_segments(segments)

    assert exc_info.value.code == ErrorCode.VALIDATION_ERROR


def test_ensure_within_root_returns_joined_path(tmp_path):
    target = ensure_within_root(root_dir=tmp_path, segments=["docker", "build"])
    assert target == tmp_path / "docker" / "build"


def test_symlinked_group_is_refused(tmp_path):
    outside = tmp_path / "outside"
    (outside / "build").mkdir(parents=True)
    root = tmp_path / "workspace"
    root.mkdir()
    (root / "docker").symlink_to(outside, target_is_directory=True)

    with pytest.raises(RitPathEscapeError) as exc_info:
        ensure_within_root(root_dir=root, segments=["docker", "build"])

    assert exc_info.value.code == ErrorCode.PATH_ESCAPE
    assert (outside / "build").is_dir()


def test_symlink_inside_root_is_refused_too(tmp_path):
    root = tmp_path / "workspace"
    (root / "real" / "build").mkdir(parents=True)
    (root / "alias").symlink_to(root / "real", target_is_directory=True)

    with pytest.raises(RitError) as exc_info:
        ensure_within_root(root_dir=root, segments=["alias", "build"])

    assert exc_info.value.details["symlink_component"] == str(root / "alias")
