import re
import urllib.parse
from typing import Optional

from cfpaste.providers.provider import ProviderInterface
from cfpaste.schema import ProblemKind, ProblemReference

_ORIGIN = r'[A-Za-z][A-Za-z0-9+.-]*://[^/?#]+'
_INDEX = r'(?P<index>[A-Za-z0-9]+)(?=[/?#]|$)'

# Order matters: first match wins.
_PATTERNS = [
    (
        None,
        re.compile(
            rf'^(?P<prefix>{_ORIGIN}/(?P<kind>contest|gym)/(?P<id>\d+))/problem/{_INDEX}'
        ),
    ),
    (
        ProblemKind.PROBLEMSET,
        re.compile(rf'^(?P<prefix>{_ORIGIN})/problemset/problem/(?P<id>\d+)/{_INDEX}'),
    ),
    (
        ProblemKind.GROUP,
        re.compile(
            rf'^(?P<prefix>{_ORIGIN}/group/[^/?#]+/contest/(?P<id>\d+))/problem/{_INDEX}'
        ),
    ),
]


def _match(url: str) -> Optional[ProblemReference]:
    for kind, pattern in _PATTERNS:
        if match := pattern.match(url):
            return ProblemReference(
                kind=kind or ProblemKind(match.group('kind')),
                contestId=match.group('id'),
                problemIndex=match.group('index'),
            )
    return None


def _prefix_for(url: str, kind: ProblemKind) -> Optional[str]:
    for pattern_kind, pattern in _PATTERNS:
        match = pattern.match(url)
        if match is None:
            continue
        matched_kind = pattern_kind or ProblemKind(match.group('kind'))
        if matched_kind == kind:
            return match.group('prefix')
    return None


class CodeforcesProvider(ProviderInterface):
    def should_handle(self, url: str) -> bool:
        return _match(url) is not None

    def parse(self, url: str) -> Optional[ProblemReference]:
        return _match(url)

    def build_submit_url(self, url: str, ref: ProblemReference) -> Optional[str]:
        if ref.kind == ProblemKind.PROBLEMSET:
            # Problemset problems are submitted through the contest endpoint.
            host = urllib.parse.urlsplit(url).netloc
            if not host:
                return None
            return f'https://{host}/contest/{ref.contestId}/submit/{ref.problemIndex}'

        prefix = _prefix_for(url, ref.kind)
        if prefix is None or not prefix.endswith(f'/{ref.contestId}'):
            return None
        return f'{prefix}/submit/{ref.problemIndex}'
