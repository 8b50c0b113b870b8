"""Eligibility resolution errors."""

from __future__ import annotations


class CallerContractViolation(ValueError):  # noqa: N818 - domain term
    """Raised when ``resolve`` receives an empty identity or a bad credential.

    This signals a bug in the calling layer, not an eligibility outcome, so
    it is raised before any query is issued.
    """

    def __init__(
        self, field: str, reason: str = "must be a non-empty string"
    ) -> None:
        """Initialise with the offending argument and what is wrong with it."""
        self.field = field
        super().__init__(f"{field} {reason}")


class ResolverConfigError(RuntimeError):
    """Raised when resolver configuration is invalid."""

    @classmethod
    def invalid_concurrency(cls, value: str) -> ResolverConfigError:
        """Return an error for a non-positive or unparsable concurrency."""
        return cls(
            f"CONTRIBGATE_SCAN_CONCURRENCY must be a positive integer, got {value!r}"
        )
