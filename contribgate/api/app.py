"""Application factory for the contribgate Falcon ASGI application.

Usage
-----
Create a health-only app (no resolver)::

    app = create_app()

Create a full app with the eligibility endpoint::

    from contribgate.api.app import AppDependencies, create_app

    app = create_app(AppDependencies(resolver=resolver))

"""

from __future__ import annotations

import dataclasses as dc
import typing as typ

import falcon.asgi

from contribgate.api.errors import (
    InvalidInputError,
    handle_contract_violation,
    handle_invalid_input,
)
from contribgate.api.health.resources import HealthResource, ReadyResource
from contribgate.eligibility import CallerContractViolation

if typ.TYPE_CHECKING:
    from contribgate.eligibility import EligibilityResolver

__all__ = ["AppDependencies", "create_app"]


@dc.dataclass(frozen=True, slots=True)
class AppDependencies:
    """Dependencies for the Falcon ASGI application.

    Attributes
    ----------
    resolver
        Eligibility resolver backing ``POST /eligibility``. When ``None``
        only the health endpoints are registered.

    """

    resolver: EligibilityResolver | None = None


def create_app(
    dependencies: AppDependencies | None = None,
) -> falcon.asgi.App:
    """Create and configure the Falcon ASGI application.

    Parameters
    ----------
    dependencies
        Optional application dependencies. Without a resolver only
        ``/health`` and ``/ready`` are available.

    Returns
    -------
    falcon.asgi.App
        Configured Falcon ASGI application.

    """
    app = falcon.asgi.App()

    app.add_route("/health", HealthResource())
    app.add_route("/ready", ReadyResource())

    if dependencies is not None and dependencies.resolver is not None:
        from contribgate.api.eligibility.resources import EligibilityResource

        app.add_route("/eligibility", EligibilityResource(dependencies.resolver))

    app.add_error_handler(InvalidInputError, handle_invalid_input)
    app.add_error_handler(CallerContractViolation, handle_contract_violation)

    return app
