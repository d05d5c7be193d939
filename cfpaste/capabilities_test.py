import webbrowser

import pyperclip
import pytest

from cfpaste import capabilities
from cfpaste.capabilities import PyperclipClipboard, SystemBrowser
from cfpaste.errors import ClipboardError


def test_clipboard_copies_text(monkeypatch: pytest.MonkeyPatch):
    copied = []
    monkeypatch.setattr(pyperclip, 'copy', copied.append)

    PyperclipClipboard().set_text('int main() {}\n')

    assert copied == ['int main() {}\n']


def test_clipboard_without_mechanism_raises(monkeypatch: pytest.MonkeyPatch):
    def no_mechanism(text):
        raise pyperclip.PyperclipException('could not find a copy/paste mechanism')

    monkeypatch.setattr(pyperclip, 'copy', no_mechanism)

    with pytest.raises(ClipboardError, match='copy/paste mechanism'):
        PyperclipClipboard().set_text('int main() {}\n')


def test_browser_reports_launch(monkeypatch: pytest.MonkeyPatch):
    opened = []

    def fake_open(url, *args, **kwargs):
        opened.append(url)
        return True

    monkeypatch.setattr(capabilities.webbrowser, 'open', fake_open)

    assert SystemBrowser().open_url('https://codeforces.com/contest/4/submit/A')
    assert opened == ['https://codeforces.com/contest/4/submit/A']


def test_browser_without_launcher_reports_failure(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(capabilities.webbrowser, 'open', lambda url, *a, **kw: False)

    assert SystemBrowser().open_url('https://codeforces.com/contest/4/submit/A') is False


def test_browser_error_reports_failure(monkeypatch: pytest.MonkeyPatch):
    def broken_open(url, *args, **kwargs):
        raise webbrowser.Error('could not locate runnable browser')

    monkeypatch.setattr(capabilities.webbrowser, 'open', broken_open)

    assert SystemBrowser().open_url('https://codeforces.com/contest/4/submit/A') is False
