"""Eligibility verdict and resolver configuration."""

from __future__ import annotations

import dataclasses
import os
import typing as typ

from .errors import ResolverConfigError

if typ.TYPE_CHECKING:
    from contribgate.catalogue import RepositoryTarget


@dataclasses.dataclass(frozen=True, slots=True)
class EligibilityVerdict:
    """Outcome of one resolution.

    An eligible verdict names the first ``(organization, repository)`` pair in
    scan order whose contributors include the user; an ineligible verdict
    names nothing.

    Attributes
    ----------
    eligible
        Whether contribution evidence was found.
    matched_organization
        Organization of the matching repository, when eligible.
    matched_repository
        Name of the matching repository, when eligible.

    """

    eligible: bool
    matched_organization: str | None = None
    matched_repository: str | None = None

    def __post_init__(self) -> None:
        """Enforce that evidence is present exactly when eligible."""
        if self.eligible:
            if not self.matched_organization or not self.matched_repository:
                msg = "eligible verdicts require a matched organization and repository"
                raise ValueError(msg)
        elif (
            self.matched_organization is not None
            or self.matched_repository is not None
        ):
            msg = "ineligible verdicts must not carry match evidence"
            raise ValueError(msg)

    @classmethod
    def matched(cls, target: RepositoryTarget) -> EligibilityVerdict:
        """Return an eligible verdict citing ``target``."""
        return cls(
            eligible=True,
            matched_organization=target.organization,
            matched_repository=target.repository,
        )

    @classmethod
    def ineligible(cls) -> EligibilityVerdict:
        """Return a verdict with no contribution evidence."""
        return cls(eligible=False)

    @property
    def matched_slug(self) -> str | None:
        """Return ``organization/repository`` for eligible verdicts."""
        if not self.eligible:
            return None
        return f"{self.matched_organization}/{self.matched_repository}"


_DEFAULT_MAX_CONCURRENCY = 1


@dataclasses.dataclass(frozen=True, slots=True)
class ResolverConfig:
    """Tuning for :class:`~contribgate.eligibility.EligibilityResolver`.

    Attributes
    ----------
    max_concurrency
        Upper bound on contributor queries in flight for one resolution.
        ``1`` scans strictly one repository at a time.

    """

    max_concurrency: int = _DEFAULT_MAX_CONCURRENCY

    def __post_init__(self) -> None:
        """Reject a concurrency below one."""
        if self.max_concurrency < 1:
            raise ResolverConfigError.invalid_concurrency(str(self.max_concurrency))

    @classmethod
    def from_env(cls) -> ResolverConfig:
        """Build configuration from ``CONTRIBGATE_SCAN_CONCURRENCY``."""
        raw = os.environ.get("CONTRIBGATE_SCAN_CONCURRENCY")
        if raw is None:
            return cls()
        try:
            value = int(raw)
        except ValueError as exc:
            raise ResolverConfigError.invalid_concurrency(raw) from exc
        if value < 1:
            raise ResolverConfigError.invalid_concurrency(raw)
        return cls(max_concurrency=value)
