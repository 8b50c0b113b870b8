"""Resolve contribution eligibility across the repository catalogue."""

from __future__ import annotations

import asyncio
import collections
import dataclasses
import typing as typ

from contribgate.github import ContributorQueryResult, QueryError

from .errors import CallerContractViolation
from .models import EligibilityVerdict, ResolverConfig
from .observability import EligibilityEventLogger

if typ.TYPE_CHECKING:
    from contribgate.catalogue import RepositoryCatalogue, RepositoryTarget
    from contribgate.github import ContributorQueryClient

    _PendingQuery = tuple[RepositoryTarget, asyncio.Task[ContributorQueryResult]]


@dataclasses.dataclass(slots=True)
class _ScanTally:
    """Counters for one resolution, used only for logging."""

    issued: int = 0
    failed: int = 0


def _require_non_empty(field: str, value: str) -> None:
    if not isinstance(value, str) or not value.strip():
        raise CallerContractViolation(field)


def _require_header_safe(field: str, value: str) -> None:
    # The credential is sent verbatim in an HTTP header.
    if not (value.isascii() and value.isprintable()):
        raise CallerContractViolation(field, "must be printable ASCII")


class EligibilityResolver:
    """Decide whether a GitHub user contributed to any catalogued repository.

    Targets are taken lazily from :meth:`RepositoryCatalogue.iter_targets`.
    Up to ``config.max_concurrency`` queries run at once, but results are
    always consumed in scan order, so the verdict cites the earliest matching
    pair no matter which query finishes first. Once a match is committed the
    remaining in-flight queries are cancelled and no new ones start.

    Failed queries count as empty contributor lists. ``resolve`` therefore
    only ever returns a verdict.
    """

    def __init__(
        self,
        catalogue: RepositoryCatalogue,
        client: ContributorQueryClient,
        *,
        config: ResolverConfig | None = None,
        event_logger: EligibilityEventLogger | None = None,
    ) -> None:
        """Bind the resolver to an immutable catalogue and a query client."""
        self._catalogue = catalogue
        self._client = client
        self._config = config or ResolverConfig()
        self._events = event_logger or EligibilityEventLogger()

    @property
    def catalogue(self) -> RepositoryCatalogue:
        """Return the catalogue scanned by this resolver."""
        return self._catalogue

    async def resolve(self, identity: str, credential: str) -> EligibilityVerdict:
        """Return the eligibility verdict for ``identity``.

        Parameters
        ----------
        identity
            Verified GitHub login, compared case-sensitively.
        credential
            Bearer token passed unchanged to every contributor query.

        Raises
        ------
        CallerContractViolation
            If ``identity`` or ``credential`` is empty, or ``credential``
            is not printable ASCII.

        """
        _require_non_empty("identity", identity)
        _require_non_empty("credential", credential)
        _require_header_safe("credential", credential)

        self._events.log_resolution_started(
            identity=identity, target_count=len(self._catalogue)
        )
        tally = _ScanTally()
        targets = self._catalogue.iter_targets()
        pending: collections.deque[_PendingQuery] = collections.deque()
        try:
            while True:
                self._fill(pending, targets, credential, tally)
                if not pending:
                    break
                target, task = pending.popleft()
                result = await _settle(task)
                if self._is_match(identity, target, result, tally):
                    self._events.log_resolution_matched(
                        identity=identity,
                        target=target,
                        queries_issued=tally.issued,
                    )
                    return EligibilityVerdict.matched(target)
        finally:
            await _cancel_all(pending)

        self._events.log_resolution_exhausted(
            identity=identity,
            queries_issued=tally.issued,
            queries_failed=tally.failed,
        )
        return EligibilityVerdict.ineligible()

    def _fill(
        self,
        pending: collections.deque[_PendingQuery],
        targets: typ.Iterator[RepositoryTarget],
        credential: str,
        tally: _ScanTally,
    ) -> None:
        """Start queries in scan order until the concurrency window is full."""
        while len(pending) < self._config.max_concurrency:
            target = next(targets, None)
            if target is None:
                return
            task = asyncio.ensure_future(
                self._client.list_contributors(
                    credential, target.organization, target.repository
                )
            )
            tally.issued += 1
            pending.append((target, task))

    def _is_match(
        self,
        identity: str,
        target: RepositoryTarget,
        result: ContributorQueryResult,
        tally: _ScanTally,
    ) -> bool:
        if result.error is not None:
            tally.failed += 1
            self._events.log_query_failed(target=target, error=result.error)
            return False
        return any(contributor.login == identity for contributor in result.contributors)


async def _settle(
    task: asyncio.Task[ContributorQueryResult],
) -> ContributorQueryResult:
    """Await a query, folding a raised ``QueryError`` into a failed result."""
    try:
        return await task
    except QueryError as exc:
        return ContributorQueryResult.failure(exc)


async def _cancel_all(pending: collections.deque[_PendingQuery]) -> None:
    """Cancel queries made unnecessary by a committed match."""
    if not pending:
        return
    tasks = [task for _, task in pending]
    for task in tasks:
        task.cancel()
    await asyncio.gather(*tasks, return_exceptions=True)
    pending.clear()
