"""GitHub REST client for listing repository contributors."""

from __future__ import annotations

import dataclasses
import os
import typing as typ
from http import HTTPStatus

import httpx
import msgspec

from .errors import ContractViolationError, GitHubConfigError, QueryError
from .models import Contributor, ContributorQueryResult

_DEFAULT_API_URL = "https://api.github.com"
_DEFAULT_TIMEOUT_S = 10.0
_DEFAULT_PAGE_SIZE = 100
_DEFAULT_API_VERSION = "2022-11-28"
_MAX_PAGE_SIZE = 100
_HTTP_REDIRECT_THRESHOLD = 300
_HTTP_ERROR_STATUS_THRESHOLD = 400

_contributors_decoder = msgspec.json.Decoder(list[Contributor])


class ContributorQueryClient(typ.Protocol):
    """Interface for listing the contributors of one repository."""

    async def list_contributors(
        self,
        credential: str,
        organization: str,
        repository: str,
    ) -> ContributorQueryResult:
        """Return the first page of contributors, or the reason it failed."""
        ...


@dataclasses.dataclass(frozen=True, slots=True)
class GitHubContributorsConfig:
    """Configuration for the GitHub contributors client.

    Attributes
    ----------
    api_url
        Base URL of the GitHub REST API.
    timeout_s
        Deadline for each request; exceeding it is a transport failure.
    page_size
        ``per_page`` value. Only the first page is ever read.
    user_agent
        ``User-Agent`` header GitHub requires on every request.
    api_version
        Value for the ``X-GitHub-Api-Version`` header.

    """

    api_url: str = _DEFAULT_API_URL
    timeout_s: float = _DEFAULT_TIMEOUT_S
    page_size: int = _DEFAULT_PAGE_SIZE
    user_agent: str = "contribgate/0.1"
    api_version: str = _DEFAULT_API_VERSION

    def __post_init__(self) -> None:
        """Reject values GitHub or httpx would not accept."""
        if not 1 <= self.page_size <= _MAX_PAGE_SIZE:
            raise GitHubConfigError.invalid_page_size(self.page_size)
        if self.timeout_s <= 0:
            raise GitHubConfigError.invalid_timeout(self.timeout_s)

    @classmethod
    def from_env(cls) -> GitHubContributorsConfig:
        """Build configuration from environment variables.

        Reads ``CONTRIBGATE_GITHUB_API_URL``, ``CONTRIBGATE_GITHUB_TIMEOUT_S``
        and ``CONTRIBGATE_GITHUB_PAGE_SIZE``; unset variables keep defaults.

        Raises
        ------
        GitHubConfigError
            If a numeric variable cannot be parsed or is out of range.

        """
        api_url = os.environ.get("CONTRIBGATE_GITHUB_API_URL", _DEFAULT_API_URL)

        raw_timeout = os.environ.get("CONTRIBGATE_GITHUB_TIMEOUT_S")
        timeout_s = _DEFAULT_TIMEOUT_S
        if raw_timeout is not None:
            try:
                timeout_s = float(raw_timeout)
            except ValueError as exc:
                raise GitHubConfigError.invalid_value(
                    "CONTRIBGATE_GITHUB_TIMEOUT_S", raw_timeout
                ) from exc

        raw_page_size = os.environ.get("CONTRIBGATE_GITHUB_PAGE_SIZE")
        page_size = _DEFAULT_PAGE_SIZE
        if raw_page_size is not None:
            try:
                page_size = int(raw_page_size)
            except ValueError as exc:
                raise GitHubConfigError.invalid_value(
                    "CONTRIBGATE_GITHUB_PAGE_SIZE", raw_page_size
                ) from exc

        return cls(
            api_url=api_url.rstrip("/"),
            timeout_s=timeout_s,
            page_size=page_size,
        )


def _require_non_empty(name: str, value: str) -> None:
    if not value or not value.strip():
        raise ContractViolationError.empty_argument(name)


def _require_header_safe_credential(credential: str) -> None:
    if not (credential.isascii() and credential.isprintable()):
        raise ContractViolationError.invalid_credential()


def _is_rate_limited(response: httpx.Response) -> bool:
    """Return True when a 403 carries GitHub's rate limit markers."""
    if response.headers.get("x-ratelimit-remaining") == "0":
        return True
    return "retry-after" in response.headers


def _error_for_status(response: httpx.Response, slug: str) -> QueryError:
    status = response.status_code
    if status == HTTPStatus.UNAUTHORIZED:
        return QueryError.unauthorized(status)
    if status == HTTPStatus.FORBIDDEN:
        if _is_rate_limited(response):
            return QueryError.rate_limited(status)
        return QueryError.unauthorized(status)
    if status == HTTPStatus.NOT_FOUND:
        return QueryError.not_found(slug)
    if status == HTTPStatus.TOO_MANY_REQUESTS:
        return QueryError.rate_limited(status)
    return QueryError.http_error(status)


class GitHubContributorsClient:
    """GitHub REST implementation of :class:`ContributorQueryClient`.

    Each call issues exactly one ``GET /repos/{owner}/{repo}/contributors``
    with the caller's bearer token. Nothing is retried or cached.
    """

    def __init__(
        self,
        config: GitHubContributorsConfig | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialise the client, creating an HTTP client unless one is given."""
        self._config = config or GitHubContributorsConfig()
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=self._config.timeout_s,
        )

    async def aclose(self) -> None:
        """Close any owned HTTP resources."""
        if self._owns_client:
            await self._client.aclose()

    def _headers(self, credential: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {credential}",
            "Accept": "application/vnd.github+json",
            "User-Agent": self._config.user_agent,
            "X-GitHub-Api-Version": self._config.api_version,
        }

    async def list_contributors(
        self,
        credential: str,
        organization: str,
        repository: str,
    ) -> ContributorQueryResult:
        """List contributors of ``organization/repository``.

        Raises
        ------
        ContractViolationError
            If any argument is empty or the credential is not printable
            ASCII. Remote failures are returned as
            :class:`ContributorQueryResult` failures instead.

        """
        _require_non_empty("credential", credential)
        _require_header_safe_credential(credential)
        _require_non_empty("organization", organization)
        _require_non_empty("repository", repository)

        try:
            contributors = await self._fetch(credential, organization, repository)
        except QueryError as exc:
            return ContributorQueryResult.failure(exc)
        return ContributorQueryResult.success(contributors)

    async def _fetch(
        self,
        credential: str,
        organization: str,
        repository: str,
    ) -> list[Contributor]:
        """Perform the request and decode the body, raising ``QueryError``."""
        slug = f"{organization}/{repository}"
        url = f"{self._config.api_url}/repos/{organization}/{repository}/contributors"
        try:
            response = await self._client.get(
                url,
                params={"per_page": self._config.page_size},
                headers=self._headers(credential),
                timeout=self._config.timeout_s,
            )
        except httpx.HTTPError as exc:
            raise QueryError.transport(exc) from exc

        if response.status_code >= _HTTP_ERROR_STATUS_THRESHOLD:
            raise _error_for_status(response, slug)
        # Redirects are not followed; renamed repositories answer 301.
        if response.status_code >= _HTTP_REDIRECT_THRESHOLD:
            raise QueryError.http_error(response.status_code)
        # GitHub answers 204 for repositories without any commits.
        if response.status_code == HTTPStatus.NO_CONTENT or not response.content:
            return []

        try:
            return _contributors_decoder.decode(response.content)
        except msgspec.DecodeError as exc:
            raise QueryError.malformed(exc) from exc
