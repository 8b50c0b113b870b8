"""Data structures exchanged with the GitHub contributors endpoint."""

from __future__ import annotations

import dataclasses

import msgspec

from .errors import QueryError


class Contributor(msgspec.Struct, frozen=True):
    """One entry of ``GET /repos/{owner}/{repo}/contributors``.

    Only ``login`` takes part in eligibility decisions; the remaining fields
    are decoded when present so log lines and tests can refer to them.
    """

    login: str
    id: int | None = None
    type: str | None = None
    contributions: int = 0


@dataclasses.dataclass(frozen=True, slots=True)
class ContributorQueryResult:
    """Outcome of a single contributor listing.

    Exactly one of ``contributors`` (possibly empty) or ``error`` is
    meaningful: a failed query always has empty ``contributors``.
    """

    contributors: tuple[Contributor, ...] = ()
    error: QueryError | None = None

    @classmethod
    def success(cls, contributors: list[Contributor]) -> ContributorQueryResult:
        """Wrap a decoded contributor page."""
        return cls(contributors=tuple(contributors))

    @classmethod
    def failure(cls, error: QueryError) -> ContributorQueryResult:
        """Wrap a query failure."""
        return cls(error=error)

    @property
    def ok(self) -> bool:
        """Return True when the listing was obtained."""
        return self.error is None

    def logins(self) -> tuple[str, ...]:
        """Return contributor logins in API order."""
        return tuple(contributor.login for contributor in self.contributors)
