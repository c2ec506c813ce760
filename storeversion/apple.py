import json

from storeversion.models import StoreListing
from storeversion.utils import getLogger
from storeversion.versioning import normalize_version

log = getLogger(__name__)


def parse_apple_response(
    body: str, force_app_version: str | None = None
) -> StoreListing | None:
    """Read the first result of an iTunes lookup response."""
    try:
        payload = json.loads(body)
    except ValueError as e:
        log.warning(f"Invalid JSON in App Store lookup response: {e}")
        return None

    results = payload.get("results") if isinstance(payload, dict) else None
    if not isinstance(results, list):
        log.warning("App Store lookup response has no results list")
        return None
    if not results:
        log.info("Can't find an app in the App Store for this bundle id")
        return None

    app = results[0]
    if not isinstance(app, dict):
        return None

    return StoreListing(
        store_version=normalize_version(force_app_version or app.get("version")),
        release_notes=app.get("releaseNotes"),
        app_store_link=app.get("trackViewUrl"),
    )
