import pathlib
import shutil
import subprocess

import pytest

from cfpaste.automation.strategies import (
    AutomationPlatform,
    Timings,
    detect_platform,
    select_strategy,
)
from cfpaste.config import AutomationConfig


@pytest.mark.parametrize(
    'sys_platform, expected',
    [
        ('darwin', AutomationPlatform.MACOS),
        ('linux', AutomationPlatform.LINUX),
        ('linux2', AutomationPlatform.LINUX),
        ('win32', AutomationPlatform.WINDOWS),
        ('cygwin', AutomationPlatform.WINDOWS),
        ('freebsd13', AutomationPlatform.UNSUPPORTED),
        ('emscripten', AutomationPlatform.UNSUPPORTED),
    ],
)
def test_detect_platform(sys_platform, expected):
    assert detect_platform(sys_platform) == expected


def test_unsupported_platform_has_no_strategy():
    assert select_strategy(AutomationPlatform.UNSUPPORTED) is None


def test_macos_strategy():
    strategy = select_strategy(AutomationPlatform.MACOS)

    assert strategy is not None
    assert strategy.argv()[:2] == ['osascript', '-e']
    assert strategy.argv()[-1] == strategy.script
    assert 'delay 2.5' in strategy.script
    assert 'keystroke "a" using command down' in strategy.script
    assert 'keystroke "v" using command down' in strategy.script
    assert strategy.script.count('key code 48') == 2
    assert strategy.script.rstrip().endswith('end tell')


def test_linux_strategy_probes_for_xdotool():
    strategy = select_strategy(AutomationPlatform.LINUX)

    assert strategy is not None
    assert strategy.command == ['sh', '-c']
    assert 'command -v xdotool' in strategy.script
    assert 'ctrl+a' in strategy.script
    assert 'ctrl+v' in strategy.script
    assert strategy.script.count('xdotool key Tab') == 2
    assert 'xdotool key Return' in strategy.script
    # No keystrokes and a clean exit without the tool.
    fallback = strategy.script.split('else', 1)[1]
    assert 'xdotool key' not in fallback
    assert 'exit 1' not in strategy.script


def test_windows_strategy_uses_send_keys():
    strategy = select_strategy(AutomationPlatform.WINDOWS)

    assert strategy is not None
    assert strategy.command[0] == 'powershell'
    assert 'WScript.Shell' in strategy.script
    assert "SendKeys('^a')" in strategy.script
    assert "SendKeys('^v')" in strategy.script
    assert strategy.script.count("SendKeys('{TAB}')") == 2
    assert "SendKeys('{ENTER}')" in strategy.script
    assert 'Start-Sleep -Milliseconds 2500' in strategy.script


def test_timings_come_from_config():
    cfg = AutomationConfig(settleDelay=4, tabDelay=0.5)
    timings = Timings.from_config(cfg)

    strategy = select_strategy(AutomationPlatform.LINUX, timings)

    assert strategy is not None
    assert strategy.timings == timings
    assert 'sleep 4' in strategy.script
    assert 'sleep 0.5' in strategy.script
    assert timings.ms()['settle'] == 4000


@pytest.mark.skipif(
    shutil.which('sh') is None or shutil.which('sleep') is None,
    reason='needs a POSIX shell',
)
def test_linux_script_without_xdotool_exits_cleanly(tmp_path: pathlib.Path):
    # A PATH holding only `sleep`, so xdotool can not be found.
    bindir = tmp_path / 'bin'
    bindir.mkdir()
    (bindir / 'sleep').symlink_to(shutil.which('sleep'))
    strategy = select_strategy(AutomationPlatform.LINUX, Timings(0, 0, 0, 0))
    assert strategy is not None
    argv = strategy.argv()
    argv[0] = shutil.which('sh')

    result = subprocess.run(
        argv,
        env={'PATH': str(bindir)},
        capture_output=True,
        text=True,
        timeout=30,
    )

    assert result.returncode == 0
    assert 'xdotool not found' in result.stderr
