"""Authorization request dispatch.

``dispatch`` turns a decoded AuthorizationRequest plus freshly issued
token material into either a redirect (code mode) or a token body (token
mode).  It is a pure function of its inputs: no logging, no metrics, no
module state.  The HTTP layer in authz_service/api/authorize.py owns all
of that.

Code mode appends to the client's redirect_uri, in this order:

    access_token, token_type=code, [scope], [refresh_token]

``token_type=code`` names the grant the redirect target is receiving; it
is not a bearer-type marker.
"""

from __future__ import annotations

import ipaddress
import re
from urllib.parse import SplitResult, quote, urlencode, urlsplit, urlunsplit

from authz_service.models.authorization import (
    AuthorizationOutcome,
    AuthorizationRequest,
    IssuedTokenMaterial,
    RedirectOutcome,
    ResponseMode,
    TokenBody,
)
from authz_service.models.errors import InvalidInput, TokenIssuanceFailed
from authz_service.services.token_issuer import TokenIssuer

CODE_GRANT_TOKEN_TYPE = "code"
BEARER_TOKEN_TYPE = "Bearer"

MISSING_REDIRECT_URI = "redirect_uri is required when code is requested"
MALFORMED_REDIRECT_URI = "redirect_uri must be an absolute URL"

# Schemes whose URLs are meaningless without a host
_HIERARCHICAL_SCHEMES = frozenset({"http", "https"})

# RFC 3986 reg-name after IDNA encoding: unreserved, sub-delims, pct-encoded
_REG_NAME = re.compile(r"[A-Za-z0-9\-._~!$&'()*+,;=%]+")

# Characters left as-is when re-encoding; "%" keeps existing escapes intact
_USERINFO_SAFE = "!$&'()*+,;=:%-._~"
_PATH_SAFE = _USERINFO_SAFE + "/@"
_QUERY_SAFE = _PATH_SAFE + "?"


def dispatch(request: AuthorizationRequest, issuer: TokenIssuer) -> AuthorizationOutcome:
    """Build the response for one authorization request.

    Raises:
        InvalidInput: code mode without a usable redirect_uri.
        TokenIssuanceFailed: the issuer raised.
    """
    try:
        material = issuer.issue(request.scope)
    except Exception as e:
        raise TokenIssuanceFailed(f"token issuer failed ({type(e).__name__})") from e

    if request.response_mode is ResponseMode.CODE:
        return _redirect_with_tokens(request, material)
    return _token_body(request, material)


def _redirect_with_tokens(
    request: AuthorizationRequest, material: IssuedTokenMaterial
) -> RedirectOutcome:
    if request.redirect_uri is None:
        raise InvalidInput(MISSING_REDIRECT_URI)

    base = parse_absolute_url(request.redirect_uri)

    params = [
        ("access_token", material.access_token),
        ("token_type", CODE_GRANT_TOKEN_TYPE),
    ]
    if request.scope is not None:
        params.append(("scope", request.scope))
    if material.refresh_token is not None:
        params.append(("refresh_token", material.refresh_token))

    # form encoding; "*" stays literal as in application/x-www-form-urlencoded
    encoded = urlencode(params, safe="*")
    query = f"{base.query}&{encoded}" if base.query else encoded
    return RedirectOutcome(location=urlunsplit(base._replace(query=query)))


def _token_body(request: AuthorizationRequest, material: IssuedTokenMaterial) -> TokenBody:
    return TokenBody(
        token_type=BEARER_TOKEN_TYPE,
        access_token=material.access_token,
        refresh_token=material.refresh_token,
        scope=request.scope,
    )


def parse_absolute_url(raw: str) -> SplitResult:
    """Split ``raw`` into URL components, rejecting relative or broken URLs.

    The result is plain ASCII and safe to put in a Location header:

    - a non-ASCII hostname is IDNA-encoded and the host is lowercased;
    - path, query and fragment are percent-encoded as UTF-8, leaving
      reserved characters and existing ``%XX`` escapes alone;
    - http(s) URLs with an empty path get path "/".

    Raises:
        InvalidInput: no scheme, http(s) without a host, a host with
            characters a host cannot carry, or otherwise unparsable.
    """
    try:
        parts = urlsplit(raw.strip())
        # .port raises ValueError for a non-numeric or out-of-range port
        port = parts.port
    except ValueError:
        raise InvalidInput(MALFORMED_REDIRECT_URI) from None

    scheme = parts.scheme.lower()
    if not scheme:
        raise InvalidInput(MALFORMED_REDIRECT_URI)

    if scheme in _HIERARCHICAL_SCHEMES:
        if not parts.hostname:
            raise InvalidInput(MALFORMED_REDIRECT_URI)
        if not parts.path:
            parts = parts._replace(path="/")
    elif not (parts.netloc or parts.path):
        raise InvalidInput(MALFORMED_REDIRECT_URI)

    return SplitResult(
        scheme=scheme,
        netloc=_normalize_netloc(parts, port) if parts.netloc else "",
        path=quote(parts.path, safe=_PATH_SAFE),
        query=quote(parts.query, safe=_QUERY_SAFE),
        fragment=quote(parts.fragment, safe=_QUERY_SAFE),
    )


def _normalize_netloc(parts: SplitResult, port: int | None) -> str:
    userinfo, _, _ = parts.netloc.rpartition("@")
    host = _normalize_host(parts.hostname or "")

    netloc = f"{quote(userinfo, safe=_USERINFO_SAFE)}@" if userinfo else ""
    netloc += f"[{host}]" if ":" in host else host
    if port is not None:
        netloc += f":{port}"
    return netloc


def _normalize_host(host: str) -> str:
    if ":" in host:
        # bracketed IPv6 literal; urlsplit drops the brackets
        try:
            return str(ipaddress.IPv6Address(host))
        except ValueError:
            raise InvalidInput(MALFORMED_REDIRECT_URI) from None

    if not host.isascii():
        try:
            host = host.encode("idna").decode("ascii")
        except UnicodeError:
            raise InvalidInput(MALFORMED_REDIRECT_URI) from None

    if not _REG_NAME.fullmatch(host):
        raise InvalidInput(MALFORMED_REDIRECT_URI)
    return host.lower()
