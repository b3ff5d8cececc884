"""Integration tests for the add command."""

from typing import TYPE_CHECKING

import pytest

from poli_qa.cli._commands import ExitCode
from poli_qa.scan import declared_screens

if TYPE_CHECKING:
    from pathlib import Path

    from tests.conftest import WriteSourceFunc
    from tests.integration.commands.conftest import RunCliFunc


def _squash(text: str) -> str:
    return " ".join(text.split())


@pytest.fixture
def checklist_file(
    project_root: "Path", write_source: "WriteSourceFunc", poli_cli: "RunCliFunc"
) -> "Path":
    _ = write_source("src/screens/CartScreen.tsx", "<button>Pay</button>")
    assert poli_cli("init") == ExitCode.SUCCESS
    return project_root / "src" / "poli.checklists.ts"


class TestAdd:
    def test_appends_screen(
        self,
        checklist_file: "Path",
        capsys: pytest.CaptureFixture[str],
        poli_cli: "RunCliFunc",
    ) -> None:
        _ = capsys.readouterr()

        exit_code = poli_cli("add", "user-profile")

        assert exit_code == ExitCode.SUCCESS
        output = _squash(capsys.readouterr().out)
        assert "Adding screen: USER_PROFILE" in output
        assert "Added USER_PROFILE" in output

        content = checklist_file.read_text(encoding="utf-8")
        assert declared_screens(content) == ["CART", "USER_PROFILE"]
        assert "id: 'user_profile_001'" in content
        assert "// Source: added manually" in content

    def test_already_declared_screen_is_unchanged(
        self,
        checklist_file: "Path",
        capsys: pytest.CaptureFixture[str],
        poli_cli: "RunCliFunc",
    ) -> None:
        before = checklist_file.read_text(encoding="utf-8")
        _ = capsys.readouterr()

        exit_code = poli_cli("add", "cart")

        assert exit_code == ExitCode.SUCCESS
        assert "CART is already declared" in _squash(capsys.readouterr().out)
        assert checklist_file.read_text(encoding="utf-8") == before

    def test_missing_checklist_file(
        self,
        project_root: "Path",
        capsys: pytest.CaptureFixture[str],
        poli_cli: "RunCliFunc",
    ) -> None:
        exit_code = poli_cli("add", "Dashboard")

        assert exit_code == ExitCode.SUCCESS
        output = _squash(capsys.readouterr().out)
        assert "nothing changed" in output
        assert "Run 'poli-qa init' first." in output
        assert not (project_root / "src" / "poli.checklists.ts").exists()

    def test_blank_name_is_rejected(
        self,
        checklist_file: "Path",
        capsys: pytest.CaptureFixture[str],
        poli_cli: "RunCliFunc",
    ) -> None:
        exit_code = poli_cli("add", "   ")

        assert exit_code == ExitCode.VALIDATION_ERROR
        assert "Screen name must not be empty" in capsys.readouterr().err

    def test_unrecognized_file_is_an_io_error(
        self,
        project_root: "Path",
        write_source: "WriteSourceFunc",
        capsys: pytest.CaptureFixture[str],
        poli_cli: "RunCliFunc",
    ) -> None:
        _ = write_source("src/poli.checklists.ts", "export const nothing = 1;\n")

        exit_code = poli_cli("add", "Dashboard")

        assert exit_code == ExitCode.IO_ERROR
        assert "AppScreen union not found" in capsys.readouterr().err
