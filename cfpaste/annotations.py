import pathlib
import re

import typer
import typer.core
from typing_extensions import Annotated

SourceFile = Annotated[
    pathlib.Path,
    typer.Argument(
        help='Solution file to submit.',
        dir_okay=False,
    ),
]
ProblemUrl = Annotated[
    str,
    typer.Argument(help='URL of the problem page being solved.'),
]
Automation = Annotated[
    bool,
    typer.Option(
        '--automation/--no-automation',
        help='Paste and submit through keystroke automation after opening the browser.',
    ),
]
Verbose = Annotated[
    bool,
    typer.Option('--verbose', '-v', help='Show debug logs.'),
]


class AliasGroup(typer.core.TyperGroup):
    _CMD_SPLIT_P = re.compile(r', ?')

    def get_command(self, ctx, cmd_name):
        cmd_name = self._group_cmd_name(cmd_name)
        return super().get_command(ctx, cmd_name)

    def _group_cmd_name(self, default_name):
        for cmd in self.commands.values():
            if cmd.name and default_name in self._CMD_SPLIT_P.split(cmd.name):
                return cmd.name
        return default_name
