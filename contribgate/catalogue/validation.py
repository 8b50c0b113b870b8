"""Structural validation for repository catalogues."""

from __future__ import annotations

import re
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

# GitHub logins: alphanumerics and single hyphens, no leading/trailing hyphen.
ORGANIZATION_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,37}[A-Za-z0-9])?$")
REPOSITORY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


class CatalogueValidationError(ValueError):
    """Raised when a catalogue fails structural validation."""

    def __init__(self, issues: list[str]) -> None:
        """Capture validation issues whilst preserving the aggregated message."""
        message = "\n".join(issues)
        super().__init__(message)
        self.issues = issues


def _organization_issues(organization: str) -> list[str]:
    if not organization:
        return ["organization names must be non-empty"]
    if not ORGANIZATION_PATTERN.fullmatch(organization):
        return [f"organization {organization!r} is not a valid GitHub login"]
    return []


def _repository_issues(
    organization: str, repositories: cabc.Sequence[str]
) -> list[str]:
    issues: list[str] = []
    seen: set[str] = set()
    for repository in repositories:
        if not repository:
            issues.append(f"{organization}: repository names must be non-empty")
            continue
        if not REPOSITORY_PATTERN.fullmatch(repository) or repository in {".", ".."}:
            issues.append(f"{organization}: invalid repository name {repository!r}")
            continue
        if repository in seen:
            issues.append(f"{organization}: duplicate repository {repository!r}")
        seen.add(repository)
    return issues


def validate_organizations(
    organizations: cabc.Mapping[str, cabc.Sequence[str]],
) -> cabc.Mapping[str, cabc.Sequence[str]]:
    """Validate an organization mapping, returning it when all checks pass.

    Raises
    ------
    CatalogueValidationError
        Listing every issue found, not just the first.

    """
    issues: list[str] = []
    for organization, repositories in organizations.items():
        issues.extend(_organization_issues(organization))
        issues.extend(_repository_issues(organization, repositories))

    if issues:
        raise CatalogueValidationError(issues)
    return organizations
