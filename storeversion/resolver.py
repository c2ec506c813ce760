import locale

from storeversion.apple import parse_apple_response
from storeversion.consts import DEFAULT_PLAY_LOCALE
from storeversion.fetcher import (
    StoreFetcher,
    build_apple_lookup_uri,
    build_play_details_uri,
)
from storeversion.identity import IdentityProvider
from storeversion.models import (
    CheckConfiguration,
    FetchError,
    StorePlatform,
    VersionStatus,
)
from storeversion.play import parse_play_response
from storeversion.utils import getLogger

log = getLogger(__name__)


def default_play_locale() -> str:
    language, _ = locale.getlocale()
    return language or DEFAULT_PLAY_LOCALE


class VersionStatusResolver:
    """
    Compare the installed app against its store listing.

    resolve() never raises for network or parsing problems; any failure is
    logged and reported as None ("cannot determine, do not prompt").
    """

    def __init__(
        self,
        config: CheckConfiguration,
        identity_provider: IdentityProvider,
        fetcher: StoreFetcher | None = None,
    ):
        self.config = config
        self.identity_provider = identity_provider
        self.fetcher = fetcher or StoreFetcher(timeout=config.timeout)

    def _build_request(self, platform, package_name):
        if platform == StorePlatform.APPLE:
            bundle_id = self.config.ios_id or package_name
            uri = build_apple_lookup_uri(bundle_id, self.config.ios_app_store_country)
            return uri, parse_apple_response
        if platform == StorePlatform.PLAY:
            package_id = self.config.android_id or package_name
            uri = build_play_details_uri(
                package_id, self.config.play_locale or default_play_locale()
            )
            return uri, parse_play_response
        return None, None

    def resolve(self) -> VersionStatus | None:
        local = self.identity_provider.get_local_app_info()
        uri, parse = self._build_request(local.platform, local.package_name)
        if uri is None:
            log.info(
                f'The target platform "{local.platform.value}" is not yet supported.'
            )
            return None

        try:
            body = self.fetcher.fetch(uri)
        except FetchError as e:
            log.info(f"No version status available: {e}")
            return None

        try:
            listing = parse(body, self.config.force_app_version)
        except Exception:
            log.exception(f"Unexpected error parsing store response from {uri}")
            return None
        if listing is None:
            log.info(f"No version data in store response from {uri}")
            return None

        return VersionStatus(
            local_version=local.version,
            store_version=listing.store_version,
            app_store_link=listing.app_store_link or uri,
            release_notes=listing.release_notes,
            prefer_newer_local_shows_changelog=(
                self.config.prefer_newer_local_shows_changelog
            ),
        )


def get_version_status(
    config: CheckConfiguration,
    identity_provider: IdentityProvider,
    fetcher: StoreFetcher | None = None,
) -> VersionStatus | None:
    return VersionStatusResolver(config, identity_provider, fetcher).resolve()
