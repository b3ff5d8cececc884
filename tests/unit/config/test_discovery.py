from pathlib import Path
from typing import TYPE_CHECKING

from poli_qa.config import DEFAULT_CONFIG, ConfigSourceName, discover_sources

if TYPE_CHECKING:
    from pyfakefs.fake_filesystem import FakeFilesystem
    from pytest_mock import MockerFixture


class TestDiscoverSources:
    def test_full_source_list(self, fs: "FakeFilesystem", mocker: "MockerFixture") -> None:
        fs.create_file("/project/poli.toml")
        _ = mocker.patch(
            "poli_qa.config._discovery.get_user_config_path",
            return_value=Path("/home/user/.config/poli-qa/config.toml"),
        )

        sources = discover_sources(Path("/project"), cli_overrides={"a": 1})

        assert [s.name for s in sources] == [
            ConfigSourceName.CLI,
            ConfigSourceName.ENV,
            ConfigSourceName.PROJECT,
            ConfigSourceName.USER,
            ConfigSourceName.DEFAULT,
        ]
        assert sources[0].values == {"a": 1}
        assert sources[2].path == Path("/project/poli.toml")
        assert sources[2].exists is True
        assert sources[3].exists is False
        assert sources[4].values == DEFAULT_CONFIG

    def test_empty_cli_overrides_are_marked_absent(self, fs: "FakeFilesystem") -> None:
        fs.create_dir("/project")

        sources = discover_sources(Path("/project"), cli_overrides={})

        assert sources[0].name == ConfigSourceName.CLI
        assert sources[0].exists is False

    def test_without_env(self, fs: "FakeFilesystem") -> None:
        fs.create_dir("/project")

        sources = discover_sources(Path("/project"), include_env=False)

        assert ConfigSourceName.ENV not in [s.name for s in sources]

    def test_detects_project_root(self, fs: "FakeFilesystem") -> None:
        fs.create_file("/project/package.json")
        fs.create_dir("/project/src/pages")
        fs.cwd = "/project/src/pages"

        sources = discover_sources()

        project = next(s for s in sources if s.name == ConfigSourceName.PROJECT)
        assert project.path == Path("/project/poli.toml")
