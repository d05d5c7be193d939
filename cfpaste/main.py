import logging

import typer
from rich.logging import RichHandler

from cfpaste import annotations, config, providers
from cfpaste import submit as submit_pkg
from cfpaste.console import console, stderr_console
from cfpaste.errors import UrlParseMismatch

app = typer.Typer(no_args_is_help=True, cls=annotations.AliasGroup)
app.add_typer(
    config.app,
    name='config, cfg',
    cls=annotations.AliasGroup,
    help='Manage the configuration of the tool.',
)


@app.command('submit, s')
def submit(
    file: annotations.SourceFile,
    url: annotations.ProblemUrl,
    automation: annotations.Automation = True,
):
    """
    Copy a solution, open its submit page and paste it through automation.
    """
    submit_pkg.main(file, url, automation=automation)


@app.command('url, u')
def show_url(url: annotations.ProblemUrl):
    """
    Show the problem identified by a URL and its submit page.
    """
    try:
        ref = providers.get_problem_reference(url)
    except UrlParseMismatch as e:
        console.print(f'[warning]{e}[/warning]')
        ref = None
    else:
        console.print(f'Problem: [item]{ref}[/item] ({ref.title()})')
    target = providers.get_submit_target(url, ref)
    console.print(f'Submit page: [item]{target.canonicalUrl}[/item]')


@app.callback()
def callback(verbose: annotations.Verbose = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(message)s',
        handlers=[RichHandler(console=stderr_console, show_path=False)],
    )
