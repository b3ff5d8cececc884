from pathlib import Path

import pytest


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep user config and POLI_ variables from leaking into CLI runs."""
    for name in ("POLI_DEBUG", "POLI_STRICT_CONFIG"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(
        "poli_qa.utils._paths.get_user_config_path",
        lambda: tmp_path / "user-config" / "config.toml",
    )
    monkeypatch.setattr(
        "poli_qa.config._discovery.get_user_config_path",
        lambda: tmp_path / "user-config" / "config.toml",
    )
