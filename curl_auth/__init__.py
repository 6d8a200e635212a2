"""Authentication fragments for curl examples.

This package turns API method security schemes into curl command line
fragments:
- Security scheme parsing and classification
- Per-scheme fragment strategies (OAuth 1.0, OAuth 2.0, Basic, Digest,
  Pass Through, custom ``x-`` schemes)
- Method-level dispatch and fragment merging
"""

from curl_auth.command_builder import (
    curl_basic_auth,
    curl_digest_auth,
    curl_null_auth,
    curl_oauth1,
    curl_oauth2,
    curl_pass_through_auth,
    curl_x_custom_auth,
    for_method,
    fragments_for_scheme,
)
from curl_auth.fragments import AuthFragment, flatten_fragments, merge_fragments
from curl_auth.schemes import (
    SchemeKind,
    SchemeParameter,
    SchemeSettings,
    SecurityScheme,
    classify_scheme,
)

__all__ = [
    # Schemes
    "SchemeKind",
    "SchemeParameter",
    "SchemeSettings",
    "SecurityScheme",
    "classify_scheme",
    # Fragments
    "AuthFragment",
    "flatten_fragments",
    "merge_fragments",
    # Command builder
    "curl_basic_auth",
    "curl_digest_auth",
    "curl_null_auth",
    "curl_oauth1",
    "curl_oauth2",
    "curl_pass_through_auth",
    "curl_x_custom_auth",
    "for_method",
    "fragments_for_scheme",
]
