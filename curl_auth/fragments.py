"""Command-line fragments contributed by authentication schemes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple


@dataclass(frozen=True)
class AuthFragment:
    """A composable piece of a curl command line.

    Attributes:
        headers: Header flags (e.g. '-H "X-API-Key: string"')
        params: Query parameters as unencoded ``key=value`` strings
        options: Other command line flags (e.g. "--digest")
    """

    headers: Tuple[str, ...] = ()
    params: Tuple[str, ...] = ()
    options: Tuple[str, ...] = ()

    def merge(self, other: "AuthFragment") -> "AuthFragment":
        """Combine with another fragment, keeping this one's entries first."""
        return AuthFragment(
            headers=self.headers + other.headers,
            params=self.params + other.params,
            options=self.options + other.options,
        )

    def to_dict(self) -> Dict[str, List[str]]:
        """Convert to a dictionary, leaving out empty fields."""
        result = {}
        if self.headers:
            result["headers"] = list(self.headers)
        if self.params:
            result["params"] = list(self.params)
        if self.options:
            result["options"] = list(self.options)
        return result


def merge_fragments(fragments: Iterable[AuthFragment]) -> AuthFragment:
    """Fold fragments into one, preserving order. Empty input gives an empty fragment."""
    merged = AuthFragment()
    for fragment in fragments:
        merged = merged.merge(fragment)
    return merged


def flatten_fragments(groups: Iterable[Sequence[AuthFragment]]) -> List[AuthFragment]:
    """Concatenate per-scheme fragment lists into a single list."""
    return [fragment for group in groups for fragment in group]
