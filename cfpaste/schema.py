import pathlib
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProblemKind(str, Enum):
    CONTEST = 'contest'
    GYM = 'gym'
    PROBLEMSET = 'problemset'
    GROUP = 'group'


class ProblemReference(BaseModel):
    """Structured reference to a judge problem, extracted from its URL.

    For group problems `contestId` is the id of the contest inside the group;
    the group token itself is not kept.
    """

    model_config = ConfigDict(frozen=True)

    kind: ProblemKind
    contestId: str = Field(pattern=r'^[0-9]+$')
    problemIndex: str = Field(pattern=r'^[A-Za-z0-9]+$')

    def title(self) -> str:
        return f'Contest {self.contestId} Problem {self.problemIndex}'

    def __str__(self) -> str:
        return f'{self.kind.value}/{self.contestId}/{self.problemIndex}'


class SubmitTarget(BaseModel):
    model_config = ConfigDict(frozen=True)

    canonicalUrl: str
    # Built without a problem reference, so no problem is pre-selected.
    degraded: bool = False


class SubmissionRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    sourceFile: pathlib.Path
    problemUrl: str

    def get_title(self, reference: Optional[ProblemReference]) -> str:
        if reference is None:
            return 'Codeforces'
        return reference.title()
