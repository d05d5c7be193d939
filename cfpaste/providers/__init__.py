import logging
from typing import List, Optional

from cfpaste.errors import UrlParseMismatch
from cfpaste.providers.codeforces import CodeforcesProvider
from cfpaste.providers.provider import ProviderInterface
from cfpaste.schema import ProblemReference, SubmitTarget

logger = logging.getLogger(__name__)

ALL_PROVIDERS: List[ProviderInterface] = [
    CodeforcesProvider(),
]

_PROBLEM_SEGMENT = '/problem/'


def parse_problem_url(url: str) -> Optional[ProblemReference]:
    for provider in ALL_PROVIDERS:
        if provider.should_handle(url):
            return provider.parse(url)
    return None


def get_problem_reference(url: str) -> ProblemReference:
    ref = parse_problem_url(url)
    if ref is None:
        raise UrlParseMismatch(f'Could not identify a problem in {url}.')
    return ref


def _degraded_submit_url(url: str) -> str:
    if _PROBLEM_SEGMENT not in url:
        return url
    head = url.split(_PROBLEM_SEGMENT, 1)[0]
    for sep in ('?', '#'):
        head = head.split(sep, 1)[0]
    return f'{head}/submit'


def get_submit_target(
    url: str, ref: Optional[ProblemReference] = None
) -> SubmitTarget:
    """Build the canonical submit page for `url`.

    Never fails: without a usable reference the URL is rewritten on a best
    effort basis and the target is flagged as degraded.
    """
    if ref is not None:
        for provider in ALL_PROVIDERS:
            submit_url = provider.build_submit_url(url, ref)
            if submit_url is not None:
                return SubmitTarget(canonicalUrl=submit_url)
        logger.debug('Reference %s does not fit %s, rewriting as text.', ref, url)
    return SubmitTarget(canonicalUrl=_degraded_submit_url(url), degraded=True)
