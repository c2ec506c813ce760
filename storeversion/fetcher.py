from urllib.parse import urlencode

import requests

from storeversion.consts import (
    APPLE_LOOKUP_URL,
    DEFAULT_REQUEST_TIMEOUT,
    PLAY_DETAILS_URL,
)
from storeversion.models import FetchError
from storeversion.utils import getLogger

log = getLogger(__name__)


def build_apple_lookup_uri(bundle_id: str, country: str | None = None) -> str:
    params = {"bundleId": bundle_id}
    if country:
        params["country"] = country
    return f"{APPLE_LOOKUP_URL}?{urlencode(params)}"


def build_play_details_uri(package_id: str, locale: str) -> str:
    return f"{PLAY_DETAILS_URL}?{urlencode({'id': package_id, 'hl': locale})}"


class StoreFetcher:
    """Issue a single bounded GET against a store endpoint."""

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
    ):
        self.session = session
        self.timeout = timeout

    def fetch(self, uri: str) -> str:
        session = self.session or requests.Session()
        try:
            response = session.get(uri, timeout=self.timeout)
        except requests.Timeout as e:
            log.warning(f"Request timed out after {self.timeout}s: {uri} ({e})")
            raise FetchError(uri, "timeout") from e
        except requests.ConnectionError as e:
            log.warning(f"Connection error: {e}, uri: {uri}")
            raise FetchError(uri, "connection error") from e
        except requests.RequestException as e:
            log.warning(f"Unexpected exception when doing GET request: {e}, uri: {uri}")
            raise FetchError(uri, str(e)) from e
        finally:
            if self.session is None:
                session.close()

        if response.status_code != 200:
            log.warning(f"Request failed: {uri} Status code: {response.status_code}")
            raise FetchError(
                uri,
                f"status code {response.status_code}",
                status_code=response.status_code,
            )
        return response.text
