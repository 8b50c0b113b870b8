"""GitHub contributor listing client."""

from __future__ import annotations

from .client import (
    ContributorQueryClient,
    GitHubContributorsClient,
    GitHubContributorsConfig,
)
from .errors import (
    ContractViolationError,
    GitHubConfigError,
    QueryError,
    QueryErrorKind,
)
from .models import Contributor, ContributorQueryResult

__all__ = [
    "ContractViolationError",
    "Contributor",
    "ContributorQueryClient",
    "ContributorQueryResult",
    "GitHubConfigError",
    "GitHubContributorsClient",
    "GitHubContributorsConfig",
    "QueryError",
    "QueryErrorKind",
]
