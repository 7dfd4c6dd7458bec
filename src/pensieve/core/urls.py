"""Schema location handling: development origin substitution and relative resource resolution"""

import logging


logger = logging.getLogger(__name__)

CANONICAL_BASE_URL = "https://raw.githubusercontent.com/LobsterMan/pensieve/main"
SCHEMA_FILE = "schema.json"
ABSOLUTE_PREFIXES = ("http://", "https://")


def effective_schema_base(
    declared_url: str,
    development: bool,
    local_base_url: str,
    canonical_base_url: str = CANONICAL_BASE_URL,
    ) -> str:
    """Return declared_url with the canonical origin swapped for local_base_url in development mode."""
    if development and declared_url.startswith(canonical_base_url):
        base = local_base_url + declared_url[len(canonical_base_url):]
        logger.debug("Development mode: replaced URL %s -> %s", declared_url, base)
        return base
    return declared_url


def _join(base: str, path: str) -> str:
    return base + path if base.endswith('/') else f"{base}/{path}"


def schema_fetch_url(
    declared_url: str,
    development: bool = False,
    local_base_url: str = "",
    canonical_base_url: str = CANONICAL_BASE_URL,
    ) -> str:
    """URL of the schema document: the effective base plus `schema.json`."""
    base = effective_schema_base(declared_url, development, local_base_url, canonical_base_url)
    return _join(base, SCHEMA_FILE)


def resolve_relative(
    declared_url: str,
    relative_path: str,
    development: bool = False,
    local_base_url: str = "",
    canonical_base_url: str = CANONICAL_BASE_URL,
    ) -> str:
    """Resolve a schema-relative resource path; http(s) URLs are returned unchanged."""
    if relative_path.startswith(ABSOLUTE_PREFIXES):
        return relative_path

    base = effective_schema_base(declared_url, development, local_base_url, canonical_base_url)
    if relative_path.startswith('./'):
        relative_path = relative_path[2:]
    resolved = _join(base, relative_path)
    logger.debug("Resolved schema resource %s -> %s", relative_path, resolved)
    return resolved
