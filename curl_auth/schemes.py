"""Security scheme dataclasses and classification.

Converts raw security scheme mappings (as found in an API description's
``securitySchemes`` section) into typed objects and classifies each one
into a closed set of scheme kinds.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

DEFAULT_PARAMETER_TYPE = "string"

OAUTH1_NAMES = ("oauth1", "oauth_1_0")
OAUTH2_NAMES = ("oauth2", "oauth_2_0")

# Checked in order; substring match against the scheme type
TYPE_PATTERNS = (
    ("OAuth 1.0", "oauth1"),
    ("OAuth 2.0", "oauth2"),
    ("Basic Authentication", "basic"),
    ("Digest Authentication", "digest"),
    ("Pass Through", "pass_through"),
)

CUSTOM_TYPE_PREFIX = "x-"


class SchemeKind(enum.Enum):
    """Authentication families a security scheme can belong to."""

    OAUTH1 = "oauth1"
    OAUTH2 = "oauth2"
    BASIC = "basic"
    DIGEST = "digest"
    PASS_THROUGH = "pass_through"
    CUSTOM = "custom"
    UNRECOGNIZED = "unrecognized"
    NONE = "none"


@dataclass(frozen=True)
class SchemeParameter:
    """A header or query parameter declared in ``describedBy``.

    Attributes:
        name: Header or query parameter name
        type: Declared type, rendered verbatim as the placeholder value
    """

    name: str
    type: str = DEFAULT_PARAMETER_TYPE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SchemeParameter":
        """Create from a ``{name, type}`` mapping."""
        return cls(
            name=str(data.get("name", "")),
            type=str(data.get("type") or DEFAULT_PARAMETER_TYPE),
        )


@dataclass(frozen=True)
class SchemeSettings:
    """Scheme settings. Only OAuth 1.0 signature methods are used."""

    signatures: Tuple[str, ...] = ()


@dataclass(frozen=True)
class SecurityScheme:
    """One authentication mechanism declared for a method.

    Attributes:
        name: Scheme label (e.g. "oauth_2_0", "basicAuth")
        type: Classifying string (e.g. "OAuth 1.0", "x-custom"), None if unsecured
        headers: Headers from ``describedBy.headers``, in declaration order
        query_parameters: Parameters from ``describedBy.queryParameters``
        settings: Scheme settings
    """

    name: Optional[str] = None
    type: Optional[str] = None
    headers: Tuple[SchemeParameter, ...] = ()
    query_parameters: Tuple[SchemeParameter, ...] = ()
    settings: SchemeSettings = field(default_factory=SchemeSettings)

    @property
    def kind(self) -> SchemeKind:
        return classify_scheme(self)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "SecurityScheme":
        """Create from a raw scheme mapping.

        A ``None`` value stands for an explicitly unsecured method.
        """
        if not data:
            return cls()

        described_by = data.get("describedBy") or {}
        settings = data.get("settings") or {}
        signatures = settings.get("signatures") or ()
        if isinstance(signatures, str):
            signatures = (signatures,)

        return cls(
            name=data.get("name"),
            type=data.get("type"),
            headers=_parse_parameters(described_by.get("headers")),
            query_parameters=_parse_parameters(described_by.get("queryParameters")),
            settings=SchemeSettings(signatures=tuple(str(s) for s in signatures)),
        )


def _parse_parameters(section: Any) -> Tuple[SchemeParameter, ...]:
    """Parse a ``describedBy`` headers/queryParameters section.

    Parsed descriptions give an ordered list of ``{name, type}`` entries,
    raw description files give an ordered ``name -> {type}`` mapping.
    """
    if not section:
        return ()

    if isinstance(section, Mapping):
        result = []
        for name, definition in section.items():
            if isinstance(definition, Mapping):
                result.append(SchemeParameter.from_dict({"name": name, **definition}))
            elif isinstance(definition, str):
                # Shorthand, e.g. "X-Count: integer"
                result.append(SchemeParameter(name=str(name), type=definition))
            else:
                result.append(SchemeParameter(name=str(name)))
        return tuple(result)

    result = []
    for entry in section:
        if isinstance(entry, Mapping):
            result.append(SchemeParameter.from_dict(entry))
        else:
            logger.warning("Skipping malformed describedBy entry: %r", entry)
    return tuple(result)


def classify_scheme(scheme: Optional[SecurityScheme]) -> SchemeKind:
    """Determine which authentication family a scheme belongs to.

    Canonical OAuth names win over the type string. Type strings are
    matched case-sensitively by substring, ``x-`` prefixed types are
    custom header schemes.
    """
    if scheme is None or (scheme.name is None and scheme.type is None):
        return SchemeKind.NONE

    if scheme.name in OAUTH1_NAMES:
        return SchemeKind.OAUTH1
    if scheme.name in OAUTH2_NAMES:
        return SchemeKind.OAUTH2

    scheme_type = scheme.type or ""
    for pattern, kind in TYPE_PATTERNS:
        if pattern in scheme_type:
            return SchemeKind(kind)

    if scheme_type.startswith(CUSTOM_TYPE_PREFIX):
        return SchemeKind.CUSTOM

    if not scheme_type:
        return SchemeKind.NONE

    return SchemeKind.UNRECOGNIZED
