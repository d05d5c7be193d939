import os
import pathlib
import tempfile
from collections.abc import Iterator

import pytest

from cfpaste import config, utils


@pytest.fixture
def cleandir() -> Iterator[pathlib.Path]:
    with tempfile.TemporaryDirectory() as newpath:
        abspath = pathlib.Path(newpath).absolute()
        old_cwd = pathlib.Path.cwd()
        os.chdir(newpath)
        try:
            yield abspath
        finally:
            os.chdir(str(old_cwd))


@pytest.fixture
def app_path(
    monkeypatch: pytest.MonkeyPatch, cleandir: pathlib.Path
) -> Iterator[pathlib.Path]:
    path = cleandir / '.app'
    monkeypatch.setattr(utils, 'get_app_path', lambda: path)
    config.get_config.cache_clear()
    yield path
    config.get_config.cache_clear()
