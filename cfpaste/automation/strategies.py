import dataclasses
import enum
import sys
from typing import Dict, List, Optional

import jinja2

from cfpaste.config import AutomationConfig


class AutomationPlatform(enum.Enum):
    MACOS = 'macos'
    LINUX = 'linux'
    WINDOWS = 'windows'
    UNSUPPORTED = 'unsupported'


@dataclasses.dataclass(frozen=True)
class Timings:
    settle: float = 2.5
    select: float = 0.3
    paste: float = 0.6
    tab: float = 0.15

    @staticmethod
    def from_config(cfg: AutomationConfig) -> 'Timings':
        return Timings(
            settle=cfg.settleDelay,
            select=cfg.selectDelay,
            paste=cfg.pasteDelay,
            tab=cfg.tabDelay,
        )

    def ms(self) -> Dict[str, int]:
        return {
            name: int(round(value * 1000))
            for name, value in dataclasses.asdict(self).items()
        }


@dataclasses.dataclass(frozen=True)
class Strategy:
    """A keystroke automation recipe for one platform.

    The script selects everything in the focused editor, pastes the
    clipboard, and then presses Tab, Tab, Enter to reach the submit button.
    That last sequence depends on the judge's page layout and is only a
    best-effort heuristic.
    """

    platform: AutomationPlatform
    command: List[str]
    script: str
    timings: Timings

    def argv(self) -> List[str]:
        return [*self.command, self.script]


_MACOS_SCRIPT = """\
delay {{ t.settle }}
tell application "System Events"
    set frontApp to first application process whose frontmost is true
    set frontmost of frontApp to true
    keystroke "a" using command down
    delay {{ t.select }}
    keystroke "v" using command down
    delay {{ t.paste }}
    key code 48
    delay {{ t.tab }}
    key code 48
    delay {{ t.tab }}
    key code 36
end tell
"""

_LINUX_SCRIPT = """\
sleep {{ t.settle }}
if command -v xdotool >/dev/null 2>&1; then
    xdotool key --clearmodifiers ctrl+a
    sleep {{ t.select }}
    xdotool key --clearmodifiers ctrl+v
    sleep {{ t.paste }}
    xdotool key Tab
    sleep {{ t.tab }}
    xdotool key Tab
    sleep {{ t.tab }}
    xdotool key Return
else
    echo "xdotool not found, paste and submit manually." >&2
fi
"""

_WINDOWS_SCRIPT = """\
$wshell = New-Object -ComObject WScript.Shell
Start-Sleep -Milliseconds {{ ms.settle }}
$wshell.SendKeys('^a')
Start-Sleep -Milliseconds {{ ms.select }}
$wshell.SendKeys('^v')
Start-Sleep -Milliseconds {{ ms.paste }}
$wshell.SendKeys('{TAB}')
Start-Sleep -Milliseconds {{ ms.tab }}
$wshell.SendKeys('{TAB}')
Start-Sleep -Milliseconds {{ ms.tab }}
$wshell.SendKeys('{ENTER}')
"""

_COMMANDS = {
    AutomationPlatform.MACOS: ['osascript', '-e'],
    AutomationPlatform.LINUX: ['sh', '-c'],
    AutomationPlatform.WINDOWS: [
        'powershell',
        '-NoProfile',
        '-NonInteractive',
        '-Command',
    ],
}

_TEMPLATES = {
    AutomationPlatform.MACOS: _MACOS_SCRIPT,
    AutomationPlatform.LINUX: _LINUX_SCRIPT,
    AutomationPlatform.WINDOWS: _WINDOWS_SCRIPT,
}


def detect_platform(sys_platform: Optional[str] = None) -> AutomationPlatform:
    sys_platform = sys_platform or sys.platform
    if sys_platform == 'darwin':
        return AutomationPlatform.MACOS
    if sys_platform.startswith('linux'):
        return AutomationPlatform.LINUX
    if sys_platform in ('win32', 'cygwin'):
        return AutomationPlatform.WINDOWS
    return AutomationPlatform.UNSUPPORTED


def render_script(platform: AutomationPlatform, timings: Timings) -> str:
    template = jinja2.Template(_TEMPLATES[platform], keep_trailing_newline=True)
    return template.render(t=timings, ms=timings.ms())


def select_strategy(
    platform: AutomationPlatform, timings: Optional[Timings] = None
) -> Optional[Strategy]:
    if platform not in _TEMPLATES:
        return None
    timings = timings or Timings()
    return Strategy(
        platform=platform,
        command=list(_COMMANDS[platform]),
        script=render_script(platform, timings),
        timings=timings,
    )
