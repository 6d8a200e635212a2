"""Assemble complete curl commands from auth fragments.

Can also be run as a script to print example commands for every method
of an API description:

    curl-incantation api.raml --base-uri https://api.example.com
"""

import argparse
import logging
import os
import sys
from typing import Any, Dict, List, Mapping, Optional, Sequence

import yaml

from api_description import fetch_api_description, iter_methods, load_api_description
from curl_auth import AuthFragment, for_method, merge_fragments

logger = logging.getLogger(__name__)

CONFIG_FILE = os.environ.get("CURL_INCANTATION_CONFIG", "config/settings.yaml")


def load_config(file_path: str = CONFIG_FILE) -> Dict[str, Any]:
    """Load settings from a YAML file, applying environment overrides."""
    config: Dict[str, Any] = {}
    if os.path.exists(file_path):
        try:
            with open(file_path, "r") as file:
                config = yaml.safe_load(file) or {}
        except (OSError, yaml.YAMLError) as exc:
            logger.error("Error loading config file %s: %s", file_path, exc)

    base_uri = os.environ.get("CURL_INCANTATION_BASE_URI")
    if base_uri:
        config["base_uri"] = base_uri
    return config


def append_params(url: str, params: Sequence[str]) -> str:
    """Append unencoded ``key=value`` strings to a URL's query string."""
    if not params:
        return url
    separator = "&" if "?" in url else "?"
    return url + separator + "&".join(params)


def build_curl_command(http_method: str, url: str, *fragments: AuthFragment) -> str:
    """Build a curl command line for one request.

    Args:
        http_method: HTTP method, any case
        url: Request URL without auth parameters
        fragments: Fragments to combine into this request, in order; none
            for an unauthenticated request

    Returns:
        The command, with headers and then options following the quoted URL
    """
    fragment = merge_fragments(fragments)
    parts = ["curl", f"-X {http_method.upper()}", f'"{append_params(url, fragment.params)}"']
    parts.extend(fragment.headers)
    parts.extend(fragment.options)
    return " ".join(parts)


def build_curl_commands(method: Any, url: str) -> List[str]:
    """Build one command per auth fragment of a method.

    Fragments are alternative ways of authenticating, so each one gets a
    command of its own.
    """
    if isinstance(method, Mapping):
        http_method = method.get("method", "get")
    else:
        http_method = getattr(method, "method", "get")
    return [build_curl_command(http_method, url, fragment) for fragment in for_method(method)]


def build_document_commands(
    document: Mapping[str, Any], base_uri: Optional[str] = None
) -> Dict[str, List[str]]:
    """Build example commands for every method in an API description.

    Returns:
        Dictionary mapping "METHOD /path" to that method's commands
    """
    base = (base_uri or document.get("baseUri") or "").rstrip("/")
    result: Dict[str, List[str]] = {}
    for api_method in iter_methods(document):
        key = f"{api_method.method} {api_method.path}"
        result[key] = build_curl_commands(api_method, base + api_method.path)
    return result


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Print example curl commands for an API description."
    )
    parser.add_argument("source", help="Path or URL of the API description (YAML or JSON)")
    parser.add_argument("--base-uri", help="Override the description's baseUri")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_arguments(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    config = load_config()

    if args.source.startswith(("http://", "https://")):
        document, error = fetch_api_description(
            args.source, timeout=config.get("request_timeout", 10)
        )
    else:
        document = load_api_description(args.source)
        error = None if document else f"Could not load {args.source}"

    if not isinstance(document, Mapping):
        print(error or f"{args.source}: not an API description", file=sys.stderr)
        return 1

    commands = build_document_commands(document, args.base_uri or config.get("base_uri"))
    for key, method_commands in commands.items():
        print(f"# {key}")
        for command in method_commands:
            print(command)
        print()
    return 0


if __name__ == "__main__":
    sys.exit(main())
