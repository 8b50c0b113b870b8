"""Eligibility check resource.

``POST /eligibility`` runs one resolution for the login in the JSON body,
using the bearer token from the ``Authorization`` header as the GitHub
credential. The session layer in front of this service is trusted to have
verified the login through GitHub OAuth.

Usage
-----
Register the resource on the Falcon app::

    app.add_route("/eligibility", EligibilityResource(resolver))

"""

from __future__ import annotations

import typing as typ

import falcon

from contribgate.api.errors import InvalidInputError

if typ.TYPE_CHECKING:
    from falcon.asgi import Request, Response

    from contribgate.eligibility import EligibilityResolver, EligibilityVerdict

__all__ = ["EligibilityResource"]

_BEARER_SCHEMES = frozenset({"bearer", "token"})


def _serialize_verdict(verdict: EligibilityVerdict) -> dict[str, typ.Any]:
    """Serialize a verdict to a JSON-compatible dict."""
    return {
        "eligible": verdict.eligible,
        "organization": verdict.matched_organization,
        "repository": verdict.matched_repository,
    }


def _bearer_token(req: Request) -> str:
    """Extract the bearer credential from the ``Authorization`` header.

    Raises
    ------
    InvalidInputError
        If the header is missing, uses another scheme, or has no token.

    """
    header = req.get_header("Authorization") or ""
    scheme, _, token = header.strip().partition(" ")
    if scheme.lower() not in _BEARER_SCHEMES or not token.strip():
        msg = "a bearer token is required"
        raise InvalidInputError(msg, field="Authorization")
    return token.strip()


async def _login_from_body(req: Request) -> str:
    media = await req.get_media()
    if not isinstance(media, dict):
        msg = "request body must be a JSON object"
        raise InvalidInputError(msg)
    login = media.get("login")
    if not isinstance(login, str) or not login.strip():
        msg = "must be a non-empty string"
        raise InvalidInputError(msg, field="login")
    return login


class EligibilityResource:
    """Resource answering whether a GitHub user is eligible."""

    def __init__(self, resolver: EligibilityResolver) -> None:
        """Configure the resource with the process-wide resolver."""
        self._resolver = resolver

    async def on_post(self, req: Request, resp: Response) -> None:
        """Handle POST /eligibility.

        Parameters
        ----------
        req
            Falcon request carrying ``{"login": ...}`` and a bearer token.
        resp
            Falcon response populated with the serialized verdict.

        """
        credential = _bearer_token(req)
        login = await _login_from_body(req)

        verdict = await self._resolver.resolve(login, credential)

        resp.media = _serialize_verdict(verdict)
        resp.status = falcon.HTTP_200
