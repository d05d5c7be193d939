import abc
from typing import Optional

from cfpaste.schema import ProblemReference


class ProviderInterface(abc.ABC):
    @abc.abstractmethod
    def should_handle(self, url: str) -> bool:
        pass

    @abc.abstractmethod
    def parse(self, url: str) -> Optional[ProblemReference]:
        pass

    @abc.abstractmethod
    def build_submit_url(self, url: str, ref: ProblemReference) -> Optional[str]:
        """Returns the submit page for `ref`, or None if `url` does not
        actually carry `ref`."""
        pass
