import importlib.metadata
import re

from storeversion.consts import DEFAULT_VERSION

PYPI_PACKAGE_NAME = "storeversion"

_CLEAN_VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+", re.ASCII)


def get_version() -> str:
    try:
        # First try package metadata (installed package).
        return importlib.metadata.version(PYPI_PACKAGE_NAME)
    except importlib.metadata.PackageNotFoundError:
        # Fallback to local development version.
        try:
            from storeversion import __version__

            return __version__
        except ImportError:
            return "version not found"


def normalize_version(raw: str | None) -> str:
    """Extract the first MAJOR.MINOR.PATCH run from raw, or "0.0.0"."""
    if not raw:
        return DEFAULT_VERSION
    match = _CLEAN_VERSION_PATTERN.search(str(raw))
    return match.group(0) if match else DEFAULT_VERSION


def parse_version(version_str: str) -> tuple[int, ...]:
    """Parse a dotted version string into a tuple of ints."""
    parts = []
    for part in version_str.split("."):
        parts.append(int(part) if part.isdigit() else 0)
    return tuple(parts)


def can_update(
    local: str, store: str, prefer_newer_local_shows_changelog: bool
) -> bool:
    """Decide whether the store version should be offered over the local one.

    Fields are compared most significant first and the first differing
    field decides. Store ahead yields True. Local ahead, or every field
    equal, yields the policy flag: equal versions still report True when
    prefer_newer_local_shows_changelog is set.
    """
    local_fields = parse_version(local)
    store_fields = parse_version(store)
    width = max(len(local_fields), len(store_fields))
    local_fields += (0,) * (width - len(local_fields))
    store_fields += (0,) * (width - len(store_fields))

    for local_field, store_field in zip(local_fields, store_fields):
        if store_field > local_field:
            return True
        if local_field > store_field:
            return prefer_newer_local_shows_changelog

    return prefer_newer_local_shows_changelog
