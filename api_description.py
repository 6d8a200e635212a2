"""Loading API descriptions and resolving method security.

Reads an API description (YAML or JSON, local or remote), normalizes its
``securitySchemes`` section and walks its resources to find every method
together with the security schemes it is secured by.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

import requests
import yaml

logger = logging.getLogger(__name__)

YAML_EXTENSIONS = (".yaml", ".yml", ".raml")
HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options", "trace", "connect")

DEFAULT_TIMEOUT = 10


@dataclass
class ApiMethod:
    """A single method of a resource.

    Attributes:
        path: Full resource path (e.g. "/users/{id}")
        method: Upper-case HTTP method
        secured_by: Resolved scheme definitions, None for "no authentication"
    """

    path: str
    method: str
    secured_by: List[Optional[Dict[str, Any]]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "method": self.method, "securedBy": self.secured_by}


def load_api_description(file_path: str) -> Optional[Dict[str, Any]]:
    """Load an API description file.

    Args:
        file_path: Path to a YAML (.yaml, .yml, .raml) or JSON file

    Returns:
        The parsed document, or None if it could not be loaded
    """
    try:
        if file_path.endswith(YAML_EXTENSIONS):
            with open(file_path, "r") as file:
                return yaml.safe_load(file)
        elif file_path.endswith(".json"):
            with open(file_path, "r") as file:
                return json.load(file)
        else:
            logger.error("Unsupported API description format: %s", file_path)
            return None
    except (OSError, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.error("Error loading API description %s: %s", file_path, exc)
        return None


def fetch_api_description(
    url: str, timeout: float = DEFAULT_TIMEOUT
) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    """Download and parse an API description.

    Returns:
        Tuple of (document, error). Exactly one of them is None.
    """
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "")
        if "json" in content_type or url.endswith(".json"):
            return json.loads(response.text), None
        return yaml.safe_load(response.text), None
    except (requests.RequestException, json.JSONDecodeError, yaml.YAMLError) as exc:
        logger.error("Error fetching API description %s: %s", url, exc)
        return None, f"{url}: {exc}"


def normalize_security_schemes(document: Mapping[str, Any]) -> Dict[str, Dict[str, Any]]:
    """Return the document's security schemes keyed by name.

    Accepts both a mapping and a list of single-entry mappings. The scheme
    name is injected into each definition.
    """
    raw = document.get("securitySchemes") or {}
    if isinstance(raw, Mapping):
        entries = list(raw.items())
    else:
        entries = [item for entry in raw if isinstance(entry, Mapping) for item in entry.items()]

    result: Dict[str, Dict[str, Any]] = {}
    for name, definition in entries:
        if not isinstance(definition, Mapping):
            logger.warning("Skipping security scheme %s: definition is not a mapping", name)
            continue
        result[name] = {**definition, "name": name}
    return result


def _resolve_entry(schemes: Mapping[str, Dict[str, Any]], entry: Any) -> Optional[Dict[str, Any]]:
    if entry is None:
        return None

    if isinstance(entry, str):
        if entry in schemes:
            return schemes[entry]
        logger.warning("Unknown security scheme reference: %s", entry)
        return {"name": entry}

    if isinstance(entry, Mapping):
        # Inline definition
        if "type" in entry or "describedBy" in entry:
            return dict(entry)
        # Parameterized reference, e.g. {oauth_2_0: {scopes: [...]}}
        if len(entry) == 1:
            return _resolve_entry(schemes, next(iter(entry)))

    logger.warning("Ignoring malformed securedBy entry: %r", entry)
    return None


def resolve_secured_by(
    document: Mapping[str, Any], secured_by: Any
) -> List[Optional[Dict[str, Any]]]:
    """Replace scheme references in a ``securedBy`` list with definitions.

    ``null`` entries stay None. Unknown names become name-only schemes.
    """
    if secured_by is None:
        return []
    if isinstance(secured_by, (str, Mapping)):
        secured_by = [secured_by]

    schemes = normalize_security_schemes(document)
    return [_resolve_entry(schemes, entry) for entry in secured_by]


def _walk_resource(
    document: Mapping[str, Any], path: str, resource: Mapping[str, Any], inherited: Any
) -> Iterator[ApiMethod]:
    secured_by = resource.get("securedBy", inherited)

    # Parsed form: methods and nested resources as lists
    for method in resource.get("methods") or []:
        yield ApiMethod(
            path=path or "/",
            method=str(method.get("method", "get")).upper(),
            secured_by=resolve_secured_by(document, method.get("securedBy", secured_by)),
        )
    for child in resource.get("resources") or []:
        child_path = path + str(child.get("relativeUri", ""))
        yield from _walk_resource(document, child_path, child, secured_by)

    # Raw form: methods and nested resources as keys
    for key, value in resource.items():
        if not isinstance(key, str):
            continue
        if key.lower() in HTTP_METHODS:
            definition = value if isinstance(value, Mapping) else {}
            yield ApiMethod(
                path=path or "/",
                method=key.upper(),
                secured_by=resolve_secured_by(
                    document, definition.get("securedBy", secured_by)
                ),
            )
        elif key.startswith("/") and isinstance(value, Mapping):
            yield from _walk_resource(document, path + key, value, secured_by)


def iter_methods(document: Mapping[str, Any]) -> Iterator[ApiMethod]:
    """Yield every method in the document, in declaration order.

    ``securedBy`` is inherited from the resource, then from the document
    root, when a method does not declare its own.
    """
    yield from _walk_resource(document, "", document, document.get("securedBy"))
