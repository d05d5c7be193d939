import dataclasses
import logging
import pathlib
from typing import Optional

import typer

from cfpaste import providers, utils
from cfpaste.automation.dispatcher import AutomationDispatcher, AutomationJob, JobState
from cfpaste.automation.strategies import (
    AutomationPlatform,
    Timings,
    detect_platform,
    select_strategy,
)
from cfpaste.capabilities import (
    ERROR,
    INFO,
    WARNING,
    Browser,
    Clipboard,
    ConsoleNotifier,
    Notifier,
    PyperclipClipboard,
    SystemBrowser,
)
from cfpaste.config import Config, get_config
from cfpaste.console import console
from cfpaste.errors import (
    BrowserLaunchError,
    ClipboardError,
    EmptySourceError,
    FileReadError,
    SubmissionError,
)
from cfpaste.schema import ProblemReference, SubmissionRequest, SubmitTarget

logger = logging.getLogger(__name__)

OPENED_MESSAGE = 'Copied & Opened Browser'
CLIPBOARD_MESSAGE = 'Failed to copy to clipboard'


@dataclasses.dataclass
class SubmissionReport:
    request: SubmissionRequest
    reference: Optional[ProblemReference] = None
    target: Optional[SubmitTarget] = None
    error: Optional[SubmissionError] = None
    job: Optional[AutomationJob] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class SubmissionOrchestrator:
    """Copies a solution, opens the judge's submit page and hands over to
    keystroke automation.

    Nothing is copied or opened unless the source file could be read and has
    content. Once the browser is open, automation problems only produce
    warnings: the user can always finish the submission by hand.
    """

    def __init__(
        self,
        clipboard: Optional[Clipboard] = None,
        browser: Optional[Browser] = None,
        notifier: Optional[Notifier] = None,
        config: Optional[Config] = None,
        platform: Optional[AutomationPlatform] = None,
        dispatcher: Optional[AutomationDispatcher] = None,
    ):
        self.config = config or get_config()
        self.clipboard = clipboard or PyperclipClipboard()
        self.browser = browser or SystemBrowser()
        self.notifier = notifier or ConsoleNotifier()
        self.platform = platform or detect_platform()
        self.dispatcher = dispatcher or AutomationDispatcher(
            self._notify, timeout=self.config.automation.timeout
        )

    def __enter__(self) -> 'SubmissionOrchestrator':
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self.dispatcher.shutdown()

    def submit(self, request: SubmissionRequest) -> SubmissionReport:
        report = SubmissionReport(request=request)
        report.reference = providers.parse_problem_url(request.problemUrl)
        if report.reference is None:
            logger.info('Could not identify a problem in %s.', request.problemUrl)
        title = request.get_title(report.reference)

        try:
            self._submit(request, report, title)
        except SubmissionError as e:
            logger.error('%s', e)
            self._notify(title, e.toast, ERROR)
            report.error = e
        return report

    def _submit(self, request: SubmissionRequest, report: SubmissionReport, title: str):
        source = self._read_source(request.sourceFile)

        try:
            self.clipboard.set_text(source)
        except ClipboardError as e:
            logger.warning('Failed to copy code to clipboard: %s', e)
            self._notify(title, CLIPBOARD_MESSAGE, WARNING)
        else:
            logger.info('Code copied to clipboard.')

        report.target = providers.get_submit_target(
            request.problemUrl, report.reference
        )
        url = report.target.canonicalUrl
        if not self.browser.open_url(url):
            raise BrowserLaunchError(url)
        logger.info('Browser opened to %s', url)
        self._notify(title, OPENED_MESSAGE, INFO)

        report.job = self._start_automation(report.target, title)

    def _read_source(self, path: pathlib.Path) -> str:
        try:
            source = utils.read_source_text(path)
        except (OSError, UnicodeDecodeError) as e:
            raise FileReadError(path, str(e)) from e
        if not source.strip():
            raise EmptySourceError(path)
        return source

    def _start_automation(
        self, target: SubmitTarget, title: str
    ) -> Optional[AutomationJob]:
        cfg = self.config.automation
        if not cfg.enabled:
            logger.info('Automation is disabled.')
            return None
        if target.degraded and cfg.skipWhenDegraded:
            logger.info('Skipping automation, no problem is pre-selected.')
            return None
        strategy = select_strategy(self.platform, Timings.from_config(cfg))
        return self.dispatcher.start(strategy, title)

    def _notify(self, title: str, body: str, level: str = INFO):
        if not self.config.showToastMessages:
            return
        self.notifier.notify(title, body, level)


def main(
    file: pathlib.Path,
    url: str,
    automation: bool = True,
):
    cfg = get_config()
    if not automation:
        cfg = cfg.model_copy(
            update={'automation': cfg.automation.model_copy(update={'enabled': False})}
        )

    console.print(f'Submission file: {file.absolute()}')
    # Leaving the block terminates the automation job, so wait for it inside.
    with SubmissionOrchestrator(config=cfg) as orchestrator:
        report = orchestrator.submit(
            SubmissionRequest(sourceFile=file, problemUrl=url)
        )
        if not report.ok:
            raise typer.Exit(1)

        if report.reference is not None:
            console.print(f'Problem: [item]{report.reference}[/item]')
        if report.target is not None:
            console.print(f'Submit page: [item]{report.target.canonicalUrl}[/item]')

        if report.job is None:
            return
        with console.status('Waiting for the browser automation to finish...'):
            outcome = orchestrator.dispatcher.wait()
    if outcome != JobState.SUCCEEDED:
        console.print(
            '[warning]Automation may have failed, finish the submission in the browser.[/warning]'
        )
