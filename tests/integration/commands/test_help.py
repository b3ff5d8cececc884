"""Integration tests for help output and global options."""

from typing import TYPE_CHECKING

import pytest

from poli_qa.cli._commands import ExitCode

if TYPE_CHECKING:
    from tests.integration.commands.conftest import RunCliFunc


class TestHelp:
    @pytest.mark.parametrize("args", [("--help",), ("help",)], ids=["flag", "command"])
    def test_lists_commands(
        self,
        args: tuple[str, ...],
        capsys: pytest.CaptureFixture[str],
        poli_cli: "RunCliFunc",
    ) -> None:
        exit_code = poli_cli(*args)

        assert exit_code == ExitCode.SUCCESS
        output = capsys.readouterr().out
        for command in ("init", "scan", "add", "report"):
            assert command in output

    def test_command_help(
        self, capsys: pytest.CaptureFixture[str], poli_cli: "RunCliFunc"
    ) -> None:
        exit_code = poli_cli("report", "--help")

        assert exit_code == ExitCode.SUCCESS
        assert "--output" in capsys.readouterr().out
