"""Emit structured observability events for eligibility resolution.

Usage
-----
>>> event_logger = EligibilityEventLogger()
>>> event_logger.log_resolution_started(identity="alice", target_count=3)

Credentials are never passed to this module.
"""

from __future__ import annotations

import enum
import typing as typ

from contribgate.logging import get_logger, log_info, log_warning

if typ.TYPE_CHECKING:
    from contribgate.catalogue import RepositoryTarget
    from contribgate.github import QueryError

logger = get_logger(__name__)


class EligibilityEventType(enum.StrEnum):
    """Structured log event types for eligibility resolution."""

    RESOLUTION_STARTED = "eligibility.resolution.started"
    RESOLUTION_MATCHED = "eligibility.resolution.matched"
    RESOLUTION_EXHAUSTED = "eligibility.resolution.exhausted"
    QUERY_FAILED = "eligibility.query.failed"


class EligibilityEventLogger:
    """Emit eligibility events via femtologging."""

    def log_resolution_started(self, *, identity: str, target_count: int) -> None:
        """Log the start of a scan over ``target_count`` repositories."""
        log_info(
            logger,
            "[%s] identity=%s target_count=%d",
            EligibilityEventType.RESOLUTION_STARTED,
            identity,
            target_count,
        )

    def log_resolution_matched(
        self,
        *,
        identity: str,
        target: RepositoryTarget,
        queries_issued: int,
    ) -> None:
        """Log the pair that made ``identity`` eligible."""
        log_info(
            logger,
            "[%s] identity=%s repo_slug=%s queries_issued=%d",
            EligibilityEventType.RESOLUTION_MATCHED,
            identity,
            target.slug,
            queries_issued,
        )

    def log_resolution_exhausted(
        self,
        *,
        identity: str,
        queries_issued: int,
        queries_failed: int,
    ) -> None:
        """Log a scan that ended without contribution evidence."""
        log_info(
            logger,
            "[%s] identity=%s queries_issued=%d queries_failed=%d",
            EligibilityEventType.RESOLUTION_EXHAUSTED,
            identity,
            queries_issued,
            queries_failed,
        )

    def log_query_failed(self, *, target: RepositoryTarget, error: QueryError) -> None:
        """Log a repository that contributed no evidence because its query failed.

        A failure on the only repository a user contributed to still ends in
        an ineligible verdict, so these are emitted at WARNING.
        """
        log_warning(
            logger,
            "[%s] repo_slug=%s error_kind=%s status_code=%s error_message=%s",
            EligibilityEventType.QUERY_FAILED,
            target.slug,
            error.kind,
            error.status_code,
            str(error),
        )
