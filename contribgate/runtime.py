"""contribgate runtime entrypoint.

This module provides the ASGI application factory used by Granian. The
catalogue, GitHub client and resolver are built once per process from the
environment:

- ``CONTRIBGATE_HOST``: Bind address (default ``0.0.0.0``)
- ``CONTRIBGATE_PORT``: Listen port (default ``8080``)
- ``CONTRIBGATE_LOG_LEVEL``: Log level (default ``INFO``)
- ``CONTRIBGATE_CATALOGUE_PATH`` / ``CONTRIBGATE_REPOSITORIES``: catalogue
- ``CONTRIBGATE_GITHUB_*``: GitHub client settings
- ``CONTRIBGATE_SCAN_CONCURRENCY``: queries in flight per resolution

Run the service directly with ``python -m contribgate.runtime``.
"""

from __future__ import annotations

import os
import typing as typ

from contribgate.api.app import AppDependencies
from contribgate.api.app import create_app as _create_api_app
from contribgate.catalogue import catalogue_from_env
from contribgate.eligibility import EligibilityResolver, ResolverConfig
from contribgate.github import GitHubContributorsClient, GitHubContributorsConfig
from contribgate.logging import (
    configure_logging,
    get_logger,
    log_error,
    log_info,
    log_warning,
)

if typ.TYPE_CHECKING:
    import falcon.asgi

__all__ = ["build_resolver", "create_app", "main"]

logger = get_logger(__name__)

_MIN_PORT = 1
_MAX_PORT = 65535


def _parse_port(port_str: str) -> int:
    """Parse and validate a port number string.

    Raises
    ------
    SystemExit
        If port_str is not a valid integer in range 1-65535.

    """
    try:
        port = int(port_str)
        if not (_MIN_PORT <= port <= _MAX_PORT):
            msg = f"port {port} outside valid range {_MIN_PORT}-{_MAX_PORT}"
            raise ValueError(msg)  # noqa: TRY301 - unify conversion and range errors
    except ValueError as exc:
        log_error(
            logger,
            "Invalid CONTRIBGATE_PORT value: %r (must be %d-%d): %s",
            port_str,
            _MIN_PORT,
            _MAX_PORT,
            exc,
        )
        raise SystemExit(1) from exc
    return port


def build_resolver() -> EligibilityResolver:
    """Build the process-wide resolver from environment configuration."""
    catalogue = catalogue_from_env()
    config = ResolverConfig.from_env()
    client = GitHubContributorsClient(GitHubContributorsConfig.from_env())
    if not catalogue:
        log_warning(
            logger,
            "Repository catalogue is empty; every user will be ineligible",
        )
    log_info(
        logger,
        "Loaded catalogue with %d organizations and %d repositories "
        "(scan_concurrency=%d)",
        len(catalogue.organizations()),
        len(catalogue),
        config.max_concurrency,
    )
    return EligibilityResolver(catalogue, client, config=config)


def create_app() -> falcon.asgi.App:
    """Create the Falcon ASGI application with the eligibility endpoint."""
    return _create_api_app(AppDependencies(resolver=build_resolver()))


def main() -> None:
    """Start the contribgate server using Granian."""
    from granian import Granian
    from granian.constants import Interfaces

    host = os.environ.get("CONTRIBGATE_HOST", "0.0.0.0")  # noqa: S104 - bind all interfaces for container
    port = _parse_port(os.environ.get("CONTRIBGATE_PORT", "8080"))
    log_level_str = os.environ.get("CONTRIBGATE_LOG_LEVEL", "INFO")

    normalized_level, invalid_level = configure_logging(log_level_str)
    if invalid_level:
        log_warning(
            logger,
            "Invalid CONTRIBGATE_LOG_LEVEL %r, falling back to %s",
            log_level_str,
            normalized_level,
        )

    log_info(
        logger,
        "Starting contribgate on %s:%d (log_level=%s)",
        host,
        port,
        normalized_level,
    )

    server = Granian(
        "contribgate.runtime:create_app",
        address=host,
        port=port,
        interface=Interfaces.ASGI,
        factory=True,
    )
    server.serve()


if __name__ == "__main__":
    main()
