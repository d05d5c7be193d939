"""Adapters for the host services a submission relies on.

The orchestrator only talks to the `Clipboard`, `Browser` and `Notifier`
protocols; the classes below are the default implementations used by the CLI.
"""

import logging
import webbrowser
from typing import Protocol

import pyperclip

from cfpaste.console import console
from cfpaste.errors import ClipboardError

logger = logging.getLogger(__name__)

INFO = 'info'
WARNING = 'warning'
ERROR = 'error'


class Clipboard(Protocol):
    def set_text(self, text: str) -> None: ...


class Browser(Protocol):
    def open_url(self, url: str) -> bool: ...


class Notifier(Protocol):
    def notify(self, title: str, body: str, level: str = INFO) -> None: ...


class PyperclipClipboard:
    def set_text(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e


class SystemBrowser:
    def open_url(self, url: str) -> bool:
        try:
            opened = webbrowser.open(url)
        except webbrowser.Error:
            logger.warning('Could not launch a browser for %s', url, exc_info=True)
            return False
        if not opened:
            logger.warning('No browser accepted %s', url)
        return opened


class ConsoleNotifier:
    _STYLES = {INFO: 'success', WARNING: 'warning', ERROR: 'error'}

    def notify(self, title: str, body: str, level: str = INFO) -> None:
        style = self._STYLES.get(level, 'status')
        console.print(f'[item]{title}[/item]: [{style}]{body}[/{style}]')
