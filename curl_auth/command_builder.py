"""curl command fragments for API method security schemes.

Each supported authentication family has a strategy that turns a
security scheme into a list of AuthFragment objects. ``for_method``
picks the strategy for every scheme a method is secured by and collects
the results in declaration order.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from curl_auth.fragments import AuthFragment, flatten_fragments
from curl_auth.schemes import SchemeKind, SchemeParameter, SecurityScheme

logger = logging.getLogger(__name__)

DEFAULT_SIGNATURE_METHOD = "RSA-SHA1"
OAUTH1_REALM = "API"

CREDENTIALS_OPTION = "--user username:password"
DIGEST_OPTION = "--digest"

# Shell line continuation used inside the OAuth 1.0 Authorization header
CONTINUATION = "\\\n\t"


def format_header(name: str, value: str) -> str:
    """Build a double-quoted curl header flag."""
    return f'-H "{name}: {value}"'


def format_param(name: str, value: str) -> str:
    """Build an unencoded ``key=value`` query parameter."""
    return f"{name}={value}"


def _header_flags(headers: Sequence[SchemeParameter], prefix: str = "") -> Tuple[str, ...]:
    return tuple(format_header(header.name, f"{prefix}{header.type}") for header in headers)


def _param_strings(parameters: Sequence[SchemeParameter]) -> Tuple[str, ...]:
    return tuple(format_param(param.name, param.type) for param in parameters)


def oauth1_parameters(signature_method: str) -> List[Tuple[str, str]]:
    """Return the OAuth 1.0 protocol parameters with placeholder values."""
    return [
        ("oauth_consumer_key", "consumer_key"),
        ("oauth_token", "token"),
        ("oauth_signature_method", signature_method),
        ("oauth_signature", "computed_signature"),
        ("oauth_timestamp", "timestamp"),
        ("oauth_nonce", "nonce"),
        ("oauth_version", "1.0"),
    ]


def curl_oauth1(scheme: SecurityScheme) -> List[AuthFragment]:
    """Build fragments for an OAuth 1.0 scheme.

    Returns an Authorization header fragment followed by a query string
    fragment carrying the same protocol parameters. The signature method
    is the first entry of ``settings.signatures``, RSA-SHA1 if none.
    """
    signatures = scheme.settings.signatures
    signature_method = signatures[0] if signatures else DEFAULT_SIGNATURE_METHOD
    parameters = oauth1_parameters(signature_method)

    pairs = [f'realm="{OAUTH1_REALM}"'] + [f'{key}="{value}"' for key, value in parameters]
    separator = "," + CONTINUATION
    authorization = f"-H 'Authorization: OAuth {separator.join(pairs)}'"

    return [
        AuthFragment(headers=(authorization,)),
        AuthFragment(params=tuple(format_param(key, value) for key, value in parameters)),
    ]


def curl_oauth2(scheme: SecurityScheme) -> List[AuthFragment]:
    """Build fragments for an OAuth 2.0 scheme.

    Headers carry a Bearer placeholder. Headers and query parameters are
    alternative usages, so each gets its own fragment. A scheme with no
    ``describedBy`` contributes nothing.
    """
    fragments = []
    if scheme.headers:
        fragments.append(AuthFragment(headers=_header_flags(scheme.headers, prefix="Bearer ")))
    if scheme.query_parameters:
        fragments.append(AuthFragment(params=_param_strings(scheme.query_parameters)))
    return fragments


def curl_basic_auth(scheme: SecurityScheme) -> List[AuthFragment]:
    return [AuthFragment(options=(CREDENTIALS_OPTION,))]


def curl_digest_auth(scheme: SecurityScheme) -> List[AuthFragment]:
    return [AuthFragment(options=(CREDENTIALS_OPTION, DIGEST_OPTION))]


def curl_pass_through_auth(scheme: SecurityScheme) -> List[AuthFragment]:
    """Forward every declared header and query parameter in one fragment."""
    return [
        AuthFragment(
            headers=_header_flags(scheme.headers),
            params=_param_strings(scheme.query_parameters),
        )
    ]


def curl_x_custom_auth(scheme: SecurityScheme) -> List[AuthFragment]:
    """Build the header fragment for an ``x-`` custom scheme.

    Custom schemes are header-only; declared query parameters are ignored.
    """
    return [AuthFragment(headers=_header_flags(scheme.headers))]


def curl_null_auth() -> List[AuthFragment]:
    return [AuthFragment()]


STRATEGIES: Dict[SchemeKind, Callable[[SecurityScheme], List[AuthFragment]]] = {
    SchemeKind.OAUTH1: curl_oauth1,
    SchemeKind.OAUTH2: curl_oauth2,
    SchemeKind.BASIC: curl_basic_auth,
    SchemeKind.DIGEST: curl_digest_auth,
    SchemeKind.PASS_THROUGH: curl_pass_through_auth,
    SchemeKind.CUSTOM: curl_x_custom_auth,
}


def _secured_by(method: Any) -> List[Any]:
    if method is None:
        return []
    if isinstance(method, Mapping):
        secured_by = method.get("securedBy")
    else:
        secured_by = getattr(method, "secured_by", None)
    if secured_by is None:
        return []
    if isinstance(secured_by, (str, Mapping, SecurityScheme)):
        return [secured_by]
    return list(secured_by)


def _as_scheme(entry: Any) -> SecurityScheme:
    if isinstance(entry, SecurityScheme):
        return entry
    if isinstance(entry, str):
        return SecurityScheme(name=entry)
    return SecurityScheme.from_dict(entry)


def fragments_for_scheme(scheme: Optional[SecurityScheme]) -> List[AuthFragment]:
    """Run the strategy matching a single scheme's kind."""
    if scheme is None:
        return curl_null_auth()

    kind = scheme.kind
    strategy = STRATEGIES.get(kind)
    if strategy is None:
        if kind is SchemeKind.UNRECOGNIZED:
            logger.warning(
                "Unrecognized security scheme type %r for scheme %s, using no auth",
                scheme.type,
                scheme.name,
            )
        return curl_null_auth()

    logger.debug("Building %s fragments for scheme %s", kind.value, scheme.name)
    return strategy(scheme)


def for_method(method: Any) -> List[AuthFragment]:
    """Build the auth fragments for every scheme a method is secured by.

    Args:
        method: Mapping with a ``securedBy`` list, or an object with a
            ``secured_by`` attribute. Entries may be raw scheme mappings,
            SecurityScheme objects, or None for "no authentication".

    Returns:
        Fragments in scheme declaration order. Never empty: methods without
        any contributing scheme get a single empty fragment.
    """
    schemes = [_as_scheme(entry) for entry in _secured_by(method)]
    fragments = flatten_fragments(fragments_for_scheme(scheme) for scheme in schemes)
    if not fragments:
        return curl_null_auth()
    return fragments
