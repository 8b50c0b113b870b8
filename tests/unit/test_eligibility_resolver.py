"""Unit tests for EligibilityResolver."""

from __future__ import annotations

import httpx
import pytest

from contribgate.catalogue import RepositoryCatalogue
from contribgate.eligibility import (
    CallerContractViolation,
    EligibilityResolver,
    EligibilityVerdict,
    ResolverConfig,
)
from contribgate.github import ContributorQueryResult, QueryError, QueryErrorKind
from tests.unit.contributor_test_helpers import (
    FakeContributorClient,
    failing,
    listing,
)

_TOKEN = "gho_test-token"


def _resolver(
    organizations: dict[str, list[str]],
    client: FakeContributorClient,
    *,
    max_concurrency: int = 1,
) -> EligibilityResolver:
    return EligibilityResolver(
        RepositoryCatalogue.from_mapping(organizations),
        client,
        config=ResolverConfig(max_concurrency=max_concurrency),
    )


@pytest.mark.asyncio
async def test_empty_catalogue_is_ineligible() -> None:
    """An empty catalogue never issues queries and returns ineligible."""
    client = FakeContributorClient()
    resolver = _resolver({}, client)

    verdict = await resolver.resolve("alice", _TOKEN)

    assert verdict == EligibilityVerdict.ineligible()
    assert client.calls == []


@pytest.mark.asyncio
async def test_matches_later_repository() -> None:
    """A contributor of acme/site is eligible via that repository."""
    client = FakeContributorClient(
        {"acme/core": listing(), "acme/site": listing("alice", "bob")}
    )
    resolver = _resolver({"acme": ["core", "site"]}, client)

    verdict = await resolver.resolve("alice", _TOKEN)

    assert verdict.eligible is True
    assert verdict.matched_organization == "acme"
    assert verdict.matched_repository == "site"
    assert client.queried_slugs == ["acme/core", "acme/site"]


@pytest.mark.asyncio
async def test_non_contributor_is_ineligible() -> None:
    """A user absent from every listing is ineligible after a full scan."""
    client = FakeContributorClient(
        {"acme/core": listing("alice", "bob"), "acme/site": listing("alice", "bob")}
    )
    resolver = _resolver({"acme": ["core", "site"]}, client)

    verdict = await resolver.resolve("carol", _TOKEN)

    assert verdict == EligibilityVerdict(eligible=False)
    assert verdict.matched_organization is None
    assert verdict.matched_repository is None
    assert client.queried_slugs == ["acme/core", "acme/site"]


@pytest.mark.asyncio
async def test_transport_failure_does_not_abort_scan() -> None:
    """A failing repository is skipped and a later match still counts."""
    error = QueryError.transport(httpx.ConnectError("connection refused"))
    client = FakeContributorClient(
        {"acme/core": failing(error), "beta/widgets": listing("dave")}
    )
    resolver = _resolver({"acme": ["core"], "beta": ["widgets"]}, client)

    verdict = await resolver.resolve("dave", _TOKEN)

    assert verdict == EligibilityVerdict(
        eligible=True, matched_organization="beta", matched_repository="widgets"
    )


@pytest.mark.asyncio
async def test_all_queries_failing_is_ineligible() -> None:
    """Failures everywhere yield an ineligible verdict rather than an error."""
    client = FakeContributorClient(
        {
            "acme/core": failing(QueryError.unauthorized(401)),
            "acme/site": failing(QueryError.rate_limited(429)),
            "beta/widgets": failing(QueryError.malformed("not a list")),
        }
    )
    resolver = _resolver({"acme": ["core", "site"], "beta": ["widgets"]}, client)

    verdict = await resolver.resolve("alice", _TOKEN)

    assert verdict == EligibilityVerdict.ineligible()
    assert len(client.calls) == 3


@pytest.mark.asyncio
async def test_short_circuits_after_first_match() -> None:
    """No repository after the first match is queried."""
    client = FakeContributorClient(
        {"acme/core": listing("alice"), "acme/site": listing("alice")}
    )
    resolver = _resolver({"acme": ["core", "site"], "beta": ["widgets"]}, client)

    verdict = await resolver.resolve("alice", _TOKEN)

    assert verdict.matched_slug == "acme/core"
    assert client.queried_slugs == ["acme/core"]


@pytest.mark.asyncio
async def test_login_comparison_is_case_sensitive() -> None:
    """Logins differing only in case do not match."""
    client = FakeContributorClient({"acme/core": listing("Alice")})
    resolver = _resolver({"acme": ["core"]}, client)

    verdict = await resolver.resolve("alice", _TOKEN)

    assert verdict.eligible is False


@pytest.mark.asyncio
async def test_credential_is_passed_to_every_query() -> None:
    """The caller's credential reaches the client unchanged."""
    client = FakeContributorClient()
    resolver = _resolver({"acme": ["core", "site"]}, client)

    await resolver.resolve("alice", _TOKEN)

    assert [credential for credential, _, _ in client.calls] == [_TOKEN, _TOKEN]


@pytest.mark.asyncio
async def test_resolve_is_idempotent() -> None:
    """Repeated resolutions against unchanged data agree."""
    client = FakeContributorClient(
        {
            "acme/core": failing(QueryError.not_found("acme/core")),
            "acme/site": listing("alice"),
        }
    )
    resolver = _resolver({"acme": ["core", "site"]}, client)

    first = await resolver.resolve("alice", _TOKEN)
    second = await resolver.resolve("alice", _TOKEN)

    assert first == second


@pytest.mark.parametrize(
    ("identity", "credential", "field"),
    [
        ("", _TOKEN, "identity"),
        ("   ", _TOKEN, "identity"),
        ("alice", "", "credential"),
    ],
)
@pytest.mark.asyncio
async def test_empty_inputs_are_contract_violations(
    identity: str, credential: str, field: str
) -> None:
    """Empty identity or credential is rejected before any query."""
    client = FakeContributorClient()
    resolver = _resolver({"acme": ["core"]}, client)

    with pytest.raises(CallerContractViolation) as exc:
        await resolver.resolve(identity, credential)

    assert exc.value.field == field
    assert client.calls == []


@pytest.mark.parametrize("credential", ["tok\u00e9n", "gho_abc\r\nX-Injected: 1"])
@pytest.mark.asyncio
async def test_unsendable_credential_is_contract_violation(credential: str) -> None:
    """A credential that is not printable ASCII is rejected before any query."""
    client = FakeContributorClient()
    resolver = _resolver({"acme": ["core"]}, client)

    with pytest.raises(CallerContractViolation, match="printable ASCII") as exc:
        await resolver.resolve("alice", credential)

    assert exc.value.field == "credential"
    assert client.calls == []


@pytest.mark.asyncio
async def test_raised_query_error_is_absorbed() -> None:
    """A client that raises QueryError is treated like a failed result."""

    class _RaisingClient(FakeContributorClient):
        async def list_contributors(
            self, credential: str, organization: str, repository: str
        ) -> ContributorQueryResult:
            if repository == "core":
                raise QueryError.http_error(502)
            return await super().list_contributors(credential, organization, repository)

    client = _RaisingClient({"acme/site": listing("alice")})
    resolver = _resolver({"acme": ["core", "site"]}, client)

    verdict = await resolver.resolve("alice", _TOKEN)

    assert verdict.matched_slug == "acme/site"


class TestConcurrentScan:
    """Resolution with several queries in flight."""

    @pytest.mark.asyncio
    async def test_earliest_match_wins_over_first_completed(self) -> None:
        """A slower, earlier match beats a faster, later one."""
        client = FakeContributorClient(
            {
                "acme/core": listing("alice", delay_s=0.05),
                "acme/site": listing("alice"),
            }
        )
        resolver = _resolver({"acme": ["core", "site"]}, client, max_concurrency=4)

        verdict = await resolver.resolve("alice", _TOKEN)

        assert verdict.matched_slug == "acme/core"
        assert client.completed.index("acme/site") < client.completed.index(
            "acme/core"
        )

    @pytest.mark.asyncio
    async def test_window_limits_queries_in_flight(self) -> None:
        """Only ``max_concurrency`` queries are started before the first result."""
        client = FakeContributorClient(
            {
                "acme/a": listing("alice", delay_s=0.01),
                "acme/b": listing(),
                "acme/c": listing(),
                "acme/d": listing(),
            }
        )
        resolver = _resolver(
            {"acme": ["a", "b", "c", "d"]}, client, max_concurrency=2
        )

        verdict = await resolver.resolve("alice", _TOKEN)

        assert verdict.matched_slug == "acme/a"
        assert client.queried_slugs == ["acme/a", "acme/b"]

    @pytest.mark.asyncio
    async def test_pending_queries_are_cancelled_after_match(self) -> None:
        """In-flight queries behind a committed match are cancelled."""
        client = FakeContributorClient(
            {
                "acme/core": listing("alice"),
                "acme/site": listing("alice", delay_s=1.0),
                "beta/widgets": listing(delay_s=1.0),
            }
        )
        resolver = _resolver(
            {"acme": ["core", "site"], "beta": ["widgets"]}, client, max_concurrency=3
        )

        verdict = await resolver.resolve("alice", _TOKEN)

        assert verdict.matched_slug == "acme/core"
        assert sorted(client.cancelled) == ["acme/site", "beta/widgets"]

    @pytest.mark.asyncio
    async def test_failures_before_match_keep_scan_order(self) -> None:
        """Earlier failures do not displace the earliest successful match."""
        client = FakeContributorClient(
            {
                "acme/core": failing(
                    QueryError(QueryErrorKind.TRANSPORT, "timeout"), delay_s=0.02
                ),
                "acme/site": listing("alice", delay_s=0.01),
                "beta/widgets": listing("alice"),
            }
        )
        resolver = _resolver(
            {"acme": ["core", "site"], "beta": ["widgets"]}, client, max_concurrency=3
        )

        verdict = await resolver.resolve("alice", _TOKEN)

        assert verdict.matched_slug == "acme/site"
