import functools
import importlib
import importlib.resources
import os
import pathlib
import subprocess
from typing import Optional

import typer
from pydantic import BaseModel, Field

from cfpaste import utils
from cfpaste.console import console

app = typer.Typer(no_args_is_help=True)

_CONFIG_FILE_NAME = 'default_config.json'


class AutomationConfig(BaseModel):
    enabled: bool = True
    # Run automation even if the submit page has no pre-selected problem.
    skipWhenDegraded: bool = False
    # Seconds to wait for the automation process. None waits forever.
    timeout: Optional[float] = Field(default=60.0, gt=0)

    settleDelay: float = Field(default=2.5, ge=0)
    selectDelay: float = Field(default=0.3, ge=0)
    pasteDelay: float = Field(default=0.6, ge=0)
    tabDelay: float = Field(default=0.15, ge=0)


class Config(BaseModel):
    showToastMessages: bool = True
    editor: Optional[str] = None
    automation: AutomationConfig = AutomationConfig()


def get_app_path() -> pathlib.Path:
    return utils.get_app_path()


def get_default_config_path() -> pathlib.Path:
    with importlib.resources.as_file(
        importlib.resources.files('cfpaste') / 'resources' / _CONFIG_FILE_NAME
    ) as file:
        return file


def get_default_config() -> Config:
    return Config.model_validate_json(get_default_config_path().read_text())


def get_config_path() -> pathlib.Path:
    return get_app_path() / 'config.json'


def get_editor():
    return get_config().editor or os.environ.get('EDITOR', None)


def open_editor(path: pathlib.Path, *args):
    editor = get_editor()
    if editor is None:
        raise Exception('No editor found. Please set the EDITOR environment variable.')
    subprocess.run([editor, str(path), *[str(arg) for arg in args]])


@functools.cache
def get_config() -> Config:
    config_path = get_config_path()
    if not config_path.is_file():
        utils.create_and_write(config_path, utils.model_json(get_default_config()))
    return Config.model_validate_json(config_path.read_text())


@app.command()
def path():
    """
    Show the absolute path of the config file.
    """
    get_config()  # Ensure config is created.
    console.print(get_config_path())


@app.command('list, ls')
def list():
    """
    Pretty print the config file.
    """
    console.print_json(utils.model_json(get_config()))


@app.command()
def reset():
    """
    Reset the config file to the default one.
    """
    if not typer.confirm('Do you really want to reset your config to the default one?'):
        return
    cfg_path = get_config_path()
    cfg_path.unlink(missing_ok=True)
    get_config.cache_clear()
    get_config()  # Reset the config.


@app.command('edit, e')
def edit():
    """
    Open the config in an editor.
    """
    open_editor(get_config_path())
    get_config.cache_clear()
