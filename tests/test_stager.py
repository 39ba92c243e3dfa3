from pathlib import Path

import pytest

from packfetch.exceptions import PackResourceError
from packfetch.models import TransferMode
from packfetch.services import CacheStager


@pytest.fixture
def temp_file(tmp_path: Path) -> Path:
    temp = tmp_path / "temp" / "core.jar"
    temp.parent.mkdir()
    temp.write_bytes(b"new pack")
    return temp


@pytest.mark.parametrize("mode", list(TransferMode))
def test_stage_replaces_existing(tmp_path: Path, temp_file: Path, mode: TransferMode):
    install = tmp_path / "install"
    install.mkdir()
    (install / "core.jar").write_bytes(b"old pack")

    staged = CacheStager(install).stage(temp_file, "core.jar", mode)

    assert staged == (install / "core.jar").absolute()
    assert staged.read_bytes() == b"new pack"
    assert not temp_file.exists()


def test_stage_creates_install_root(tmp_path: Path, temp_file: Path):
    install = tmp_path / "missing" / "install"

    staged = CacheStager(install).stage(temp_file, "core.jar", TransferMode.MOVE_REPLACE)

    assert staged.read_bytes() == b"new pack"


@pytest.mark.parametrize("mode", list(TransferMode))
def test_stage_missing_source(tmp_path: Path, mode: TransferMode):
    install = tmp_path / "install"

    with pytest.raises(PackResourceError) as exc_info:
        CacheStager(install).stage(tmp_path / "gone.jar", "core.jar", mode)

    assert exc_info.value.context["mode"] == mode.value
    assert not (install / "core.jar").exists()


def test_virtual_path_windows():
    stager = CacheStager("C:\\install", windows=True)
    assert (
        stager.virtual_path("C:\\install\\p.jar", "p")
        == "jar:file:/C:\\install\\p.jar!/packs/pack-p"
    )


def test_virtual_path_posix():
    stager = CacheStager("/install", windows=False)
    assert (
        stager.virtual_path("/install/p.jar", "p")
        == "jar:file:/install/p.jar!/packs/pack-p"
    )


def test_virtual_path_keeps_spaces():
    stager = CacheStager("/install")
    assert (
        stager.virtual_path("/install/My Pack.jar", "My Pack")
        == "jar:file:/install/My Pack.jar!/packs/pack-My Pack"
    )
