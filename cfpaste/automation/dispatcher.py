from __future__ import annotations

import dataclasses
import enum
import itertools
import logging
import os
import signal
import subprocess
import threading
from typing import Callable, List, Optional

from cfpaste.automation.strategies import AutomationPlatform, Strategy
from cfpaste.capabilities import INFO, WARNING
from cfpaste.errors import (
    AutomationError,
    AutomationExitNonZero,
    AutomationSpawnError,
    AutomationTimeout,
)

logger = logging.getLogger(__name__)

# Seconds a terminated job gets before it is killed.
_TERMINATE_GRACE = 2.0

SUCCESS_MESSAGE = 'Submitted! Check verdict'
WARNING_MESSAGE = 'Check browser'
UNSUPPORTED_MESSAGE = 'Paste & Submit manually'

# (title, body, level)
Reporter = Callable[[str, str, str], None]
Spawner = Callable[..., subprocess.Popen]


class JobState(enum.Enum):
    IDLE = 'idle'
    SPAWNING = 'spawning'
    RUNNING = 'running'
    SUCCEEDED = 'succeeded'
    WARNED = 'warned'
    UNSUPPORTED = 'unsupported'
    # Superseded by a newer job, or torn down with the dispatcher.
    TERMINATED = 'terminated'


@dataclasses.dataclass
class AutomationJob:
    id: int
    platform: AutomationPlatform
    title: str
    state: JobState = JobState.SPAWNING
    process: Optional[subprocess.Popen] = None
    watcher: Optional[threading.Thread] = None
    error: Optional[AutomationError] = None

    def is_live(self) -> bool:
        return self.state in (JobState.SPAWNING, JobState.RUNNING)


class AutomationDispatcher:
    """Runs at most one automation process at a time.

    `start` never blocks on the process: a watcher thread waits for it and
    reports the outcome. Every outcome is tagged with the job it belongs to,
    so a job that was superseded in the meantime can not overwrite the state
    of the current one.
    """

    state: JobState
    last_outcome: Optional[JobState]

    def __init__(
        self,
        report: Reporter,
        timeout: Optional[float] = None,
        spawn: Spawner = subprocess.Popen,
    ):
        self._report = report
        self._timeout = timeout
        self._spawn = spawn
        self._lock = threading.Lock()
        self._job: Optional[AutomationJob] = None
        self._ids = itertools.count(1)
        self.state = JobState.IDLE
        self.last_outcome = None

    def __enter__(self) -> AutomationDispatcher:
        return self

    def __exit__(self, *args):
        self.shutdown()

    @property
    def current_job(self) -> Optional[AutomationJob]:
        return self._job

    def start(
        self, strategy: Optional[Strategy], title: str
    ) -> Optional[AutomationJob]:
        with self._lock:
            self._terminate_locked()
            if strategy is None:
                self.state = JobState.UNSUPPORTED
                self.last_outcome = JobState.UNSUPPORTED
            else:
                job = self._spawn_locked(strategy, title)

        if strategy is None:
            logger.info('No automation strategy for this platform.')
            self._report(title, UNSUPPORTED_MESSAGE, WARNING)
            self._back_to_idle(JobState.UNSUPPORTED)
            return None

        if job.error is not None:
            self._conclude(job, JobState.WARNED, job.error)
        return job

    def wait(self, timeout: Optional[float] = None) -> Optional[JobState]:
        """Block until the current job, if any, has been reported."""
        job = self._job
        if job is not None and job.watcher is not None:
            job.watcher.join(timeout)
        return self.last_outcome

    def shutdown(self):
        with self._lock:
            self._terminate_locked()
            self.state = JobState.IDLE

    def _spawn_locked(self, strategy: Strategy, title: str) -> AutomationJob:
        job = AutomationJob(
            id=next(self._ids), platform=strategy.platform, title=title
        )
        self._job = job
        self.state = JobState.SPAWNING

        argv = strategy.argv()
        logger.debug('Starting automation job %d: %s', job.id, argv[:-1])
        try:
            job.process = self._spawn(
                argv,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                start_new_session=os.name == 'posix',
            )
        except OSError as e:
            logger.warning(
                'Failed to start automation with command `%s`.',
                ' '.join(argv[:-1]),
                exc_info=True,
            )
            job.error = AutomationSpawnError(str(e))
            return job

        job.state = JobState.RUNNING
        self.state = JobState.RUNNING
        job.watcher = threading.Thread(
            target=self._watch, args=(job,), name=f'automation-{job.id}', daemon=True
        )
        job.watcher.start()
        return job

    def _watch(self, job: AutomationJob):
        process = job.process
        assert process is not None
        try:
            _, stderr = process.communicate(timeout=self._timeout)
        except subprocess.TimeoutExpired:
            assert self._timeout is not None
            _kill(process)
            process.communicate()
            self._conclude(job, JobState.WARNED, AutomationTimeout(self._timeout))
            return

        for line in _lines(stderr):
            logger.warning('[automation %d] %s', job.id, line)
        if process.returncode == 0:
            self._conclude(job, JobState.SUCCEEDED)
        else:
            self._conclude(
                job, JobState.WARNED, AutomationExitNonZero(process.returncode)
            )

    def _conclude(
        self,
        job: AutomationJob,
        outcome: JobState,
        error: Optional[AutomationError] = None,
    ):
        with self._lock:
            if self._job is not job:
                logger.debug('Ignoring outcome of superseded automation job %d.', job.id)
                return
            self._job = None
            job.state = outcome
            job.error = error
            self.state = outcome
            self.last_outcome = outcome

        if outcome == JobState.SUCCEEDED:
            logger.info('Automation job %d finished.', job.id)
            self._report(job.title, SUCCESS_MESSAGE, INFO)
        else:
            logger.warning('Automation job %d may have failed: %s', job.id, error)
            self._report(job.title, WARNING_MESSAGE, WARNING)
        self._back_to_idle(outcome)

    def _back_to_idle(self, outcome: JobState):
        with self._lock:
            if self._job is None and self.state == outcome:
                self.state = JobState.IDLE

    def _terminate_locked(self):
        job = self._job
        if job is None:
            return
        self._job = None
        job.state = JobState.TERMINATED
        process = job.process
        if process is None or process.poll() is not None:
            return
        logger.info('Terminating automation job %d.', job.id)
        _terminate(process)
        try:
            process.wait(timeout=_TERMINATE_GRACE)
        except subprocess.TimeoutExpired:
            _kill(process)
            process.wait()


def _signal_group(process: subprocess.Popen, sig: int) -> bool:
    # The scripts sleep in child processes, so signal the whole session.
    if os.name != 'posix':
        return False
    try:
        os.killpg(process.pid, sig)
    except (ProcessLookupError, PermissionError):
        return False
    return True


def _terminate(process: subprocess.Popen):
    if not _signal_group(process, signal.SIGTERM):
        process.terminate()


def _kill(process: subprocess.Popen):
    if os.name == 'posix':
        if _signal_group(process, signal.SIGKILL):
            return
    process.kill()


def _lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    return [line for line in text.splitlines() if line.strip()]
