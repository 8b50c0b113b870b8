"""GitHub contributor query errors."""

from __future__ import annotations

import enum


class QueryErrorKind(enum.StrEnum):
    """Why a contributor listing could not be obtained."""

    UNAUTHORIZED = "unauthorized"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    TRANSPORT = "transport"
    MALFORMED = "malformed"


class QueryError(RuntimeError):
    """A failed contributor listing for one repository.

    Query errors are returned to callers inside a result object rather than
    raised past the client boundary.
    """

    def __init__(
        self,
        kind: QueryErrorKind,
        message: str,
        *,
        status_code: int | None = None,
    ) -> None:
        """Initialise with a failure kind, message and optional HTTP status."""
        self.kind = kind
        self.status_code = status_code
        super().__init__(message)

    @classmethod
    def unauthorized(cls, status_code: int) -> QueryError:
        """Return an error for a rejected or insufficient credential."""
        return cls(
            QueryErrorKind.UNAUTHORIZED,
            f"GitHub rejected the credential (HTTP {status_code})",
            status_code=status_code,
        )

    @classmethod
    def not_found(cls, slug: str) -> QueryError:
        """Return an error for a repository GitHub does not know about."""
        return cls(
            QueryErrorKind.NOT_FOUND,
            f"GitHub repository {slug} not found",
            status_code=404,
        )

    @classmethod
    def rate_limited(cls, status_code: int) -> QueryError:
        """Return an error for an exhausted API rate limit."""
        return cls(
            QueryErrorKind.RATE_LIMITED,
            f"GitHub rate limit exceeded (HTTP {status_code})",
            status_code=status_code,
        )

    @classmethod
    def http_error(cls, status_code: int) -> QueryError:
        """Return an error for any other non-2xx HTTP response."""
        return cls(
            QueryErrorKind.TRANSPORT,
            f"GitHub REST HTTP {status_code}",
            status_code=status_code,
        )

    @classmethod
    def transport(cls, exc: BaseException) -> QueryError:
        """Return an error for a network failure or exceeded deadline."""
        return cls(
            QueryErrorKind.TRANSPORT,
            f"GitHub request failed: {type(exc).__name__}: {exc}",
        )

    @classmethod
    def malformed(cls, detail: object) -> QueryError:
        """Return an error for a response body that is not a contributor list."""
        return cls(
            QueryErrorKind.MALFORMED,
            f"GitHub contributors response malformed: {detail}",
        )


class ContractViolationError(ValueError):
    """Raised when the client is called with empty or unusable arguments."""

    @classmethod
    def empty_argument(cls, name: str) -> ContractViolationError:
        """Return an error naming the empty argument."""
        return cls(f"{name} must be a non-empty string")

    @classmethod
    def invalid_credential(cls) -> ContractViolationError:
        """Return an error for a credential that cannot be sent as a header."""
        return cls("credential must be printable ASCII")


class GitHubConfigError(RuntimeError):
    """Raised when GitHub client configuration is invalid."""

    @classmethod
    def invalid_value(cls, variable: str, value: str) -> GitHubConfigError:
        """Return an error for an unparsable environment value."""
        return cls(f"Invalid {variable} value: {value!r}")

    @classmethod
    def invalid_page_size(cls, page_size: int) -> GitHubConfigError:
        """Return an error for a page size outside GitHub's accepted range."""
        return cls(f"GitHub page size must be between 1 and 100, got {page_size}")

    @classmethod
    def invalid_timeout(cls, timeout_s: float) -> GitHubConfigError:
        """Return an error for a non-positive request timeout."""
        return cls(f"GitHub request timeout must be positive, got {timeout_s}")
