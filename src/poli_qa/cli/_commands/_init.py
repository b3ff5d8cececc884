# pyright: reportUnusedCallResult=false
# ruff: noqa: D415, TC003
"""Init command: scan the project and write the checklist file."""

from pathlib import Path
from typing import Annotated

from cyclopts import Parameter
from rich.console import Console
from rich.markup import escape

from poli_qa.exceptions import ChecklistFileError
from poli_qa.scan import write_checklist_file

from ._context import CLIContext
from ._scan import run_discovery
from ._shared import ExitCode, exit_with_error, print_screens

_NO_SCREENS_HELP = """\
No screens detected. Make sure your screen components follow naming conventions:
  - *Page.tsx, *Screen.tsx, *View.tsx
  - Or are in pages/, screens/, views/, routes/ directories

You can manually create a checklist file or use: poli-qa add <ScreenName>"""

_USAGE_HELP = """\
Next steps:
  1. Review and customize the generated tests in {output}
  2. Import and use in your app:

     import {{ QAProvider, QAPanel }} from "poli-qa";
     import {{ checklists }} from "./poli.checklists";

     <QAProvider defaultChecklists={{checklists}}>
       <App />
       <QAPanel />
     </QAProvider>"""


def init(
    *,
    output: Annotated[
        Path | None,
        Parameter(name=["--output", "-o"], help="Path of the generated checklist file"),
    ] = None,
) -> None:
    """Scan project and generate test checklists

    Args:
        output: Path of the generated checklist file. Defaults to the
            configured scan.output, relative to the project root.
    """
    ctx = CLIContext.get_current()
    console = Console()
    project_root = ctx.resolved_project_root

    discovery = run_discovery(ctx, console)
    if not discovery.screens:
        console.print(escape(_NO_SCREENS_HELP))
        return

    if not ctx.quiet:
        print_screens(console, discovery.screens)

    target = output if output is not None else project_root / ctx.config.scan.output
    try:
        write_checklist_file(target, discovery.screens, logger=ctx.logger)
    except ChecklistFileError as e:
        exit_with_error(str(e), ExitCode.IO_ERROR)

    console.print(
        f"[green]Created[/green] {escape(str(target))} with "
        f"{len(discovery.screens)} screens and {discovery.test_count} tests"
    )
    if not ctx.quiet:
        console.print()
        console.print(escape(_USAGE_HELP.format(output=target)))
