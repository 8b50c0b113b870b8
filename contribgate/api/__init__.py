"""contribgate HTTP API layer.

This package provides the Falcon Asynchronous Server Gateway Interface
(ASGI) application exposing health probes and the eligibility check.

Usage
-----
Create and run the application::

    from contribgate.api import create_app

    app = create_app()              # health-only mode
    app = create_app(dependencies)  # with POST /eligibility

"""

from contribgate.api.app import create_app

__all__ = ["create_app"]
