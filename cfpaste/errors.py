import pathlib


class SubmissionError(Exception):
    """Failure that ends the current submission request."""

    # Short text sent to the notifier.
    toast = 'Submission failed'


class FileReadError(SubmissionError):
    toast = 'Failed to read source file'

    def __init__(self, path: pathlib.Path, reason: str):
        super().__init__(f'Failed to read source file {path}: {reason}')
        self.path = path


class EmptySourceError(SubmissionError):
    toast = 'Source file is empty'

    def __init__(self, path: pathlib.Path):
        super().__init__(f'Source file {path} is empty.')
        self.path = path


class BrowserLaunchError(SubmissionError):
    toast = 'Failed to open browser'

    def __init__(self, url: str):
        super().__init__(f'Failed to open browser at {url}.')
        self.url = url


class ClipboardError(Exception):
    """The clipboard could not be written. Reported, never fatal."""


class UrlParseMismatch(Exception):
    """The problem URL did not match any known shape."""


class AutomationError(Exception):
    """Automation did not complete cleanly. Always downgraded to a warning."""


class AutomationSpawnError(AutomationError):
    pass


class AutomationExitNonZero(AutomationError):
    def __init__(self, returncode: int):
        super().__init__(f'Automation process exited with code {returncode}.')
        self.returncode = returncode


class AutomationTimeout(AutomationError):
    def __init__(self, timeout: float):
        super().__init__(f'Automation process did not finish in {timeout}s.')
        self.timeout = timeout
