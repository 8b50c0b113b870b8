"""Validation errors and Falcon error handlers for the API layer.

Usage
-----
Register error handlers on the Falcon app::

    app.add_error_handler(InvalidInputError, handle_invalid_input)
    app.add_error_handler(CallerContractViolation, handle_contract_violation)

"""

from __future__ import annotations

import typing as typ

import falcon

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from contribgate.eligibility import CallerContractViolation

__all__ = [
    "InvalidInputError",
    "handle_contract_violation",
    "handle_invalid_input",
]


class InvalidInputError(Exception):
    """Raised for client validation errors that should map to HTTP 400.

    Attributes
    ----------
    reason
        Human-readable description of the validation failure.
    field
        Optional name of the input field that failed validation.

    """

    def __init__(self, reason: str, *, field: str | None = None) -> None:
        """Initialize with a validation reason and optional field name."""
        self.reason = reason
        self.field = field
        message = f"{field}: {reason}" if field is not None else reason
        super().__init__(message)


def _bad_request(resp: Response, reason: str, field: str | None) -> None:
    resp.status = falcon.HTTP_400
    media: dict[str, str] = {
        "title": "Invalid input",
        "description": reason,
    }
    if field is not None:
        media["field"] = field
    resp.media = media


async def handle_invalid_input(
    _req: Request,
    resp: Response,
    ex: InvalidInputError,
    _params: dict[str, typ.Any],
) -> None:
    """Map ``InvalidInputError`` to an HTTP 400 JSON response."""
    _bad_request(resp, ex.reason, ex.field)


async def handle_contract_violation(
    _req: Request,
    resp: Response,
    ex: CallerContractViolation,
    _params: dict[str, typ.Any],
) -> None:
    """Map a ``CallerContractViolation`` from the resolver to HTTP 400."""
    _bad_request(resp, str(ex), ex.field)
