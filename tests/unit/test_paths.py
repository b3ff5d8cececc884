from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from poli_qa.utils import (
    find_project_root,
    get_poli_cli_log_file,
    get_poli_dir,
    get_poli_log_dir,
    get_poli_state_db,
    get_project_config_path,
    get_user_config_path,
)

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem


class TestFindProjectRoot:
    @pytest.mark.parametrize("marker", ["poli.toml", "package.json", ".git"])
    def test_finds_marker_in_parent(self, fs: "FakeFilesystem", marker: str) -> None:
        if marker == ".git":
            fs.create_dir("/project/.git")
        else:
            fs.create_file(f"/project/{marker}")
        fs.create_dir("/project/src/pages")

        assert find_project_root(Path("/project/src/pages")) == Path("/project")

    def test_nearest_marker_wins(self, fs: "FakeFilesystem") -> None:
        fs.create_dir("/repo/.git")
        fs.create_file("/repo/apps/web/package.json")

        assert find_project_root(Path("/repo/apps/web")) == Path("/repo/apps/web")

    def test_falls_back_to_start(self, fs: "FakeFilesystem") -> None:
        fs.create_dir("/some/path")

        assert find_project_root(Path("/some/path")) == Path("/some/path")

    def test_uses_cwd_when_start_is_none(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/cwd/package.json")
        fs.cwd = "/cwd"

        assert find_project_root(None) == Path("/cwd")


class TestPoliPaths:
    def test_layout(self) -> None:
        root = Path("/project")

        assert get_poli_dir(root) == Path("/project/.poli")
        assert get_poli_log_dir(root) == Path("/project/.poli/logs")
        assert get_poli_cli_log_file(root) == Path("/project/.poli/logs/cli.log")
        assert get_poli_state_db(root) == Path("/project/.poli/state.db")
        assert get_project_config_path(root) == Path("/project/poli.toml")

    def test_defaults_to_detected_root(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/app/package.json")
        fs.cwd = "/app"

        assert get_poli_state_db() == Path("/app/.poli/state.db")


class TestGetUserConfigPath:
    def test_returns_config_toml_in_app_dir(self) -> None:
        result = get_user_config_path()

        assert result.name == "config.toml"
        assert result.parent.name == "poli-qa"
