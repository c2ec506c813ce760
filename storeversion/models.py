from dataclasses import asdict, dataclass, field
from enum import Enum

from storeversion.consts import DEFAULT_REQUEST_TIMEOUT
from storeversion.versioning import can_update, normalize_version


class StorePlatform(str, Enum):
    APPLE = "apple"
    PLAY = "play"
    UNSUPPORTED = "unsupported"


class LaunchMode(str, Enum):
    PLATFORM_DEFAULT = "platform_default"
    EXTERNAL_APPLICATION = "external_application"


class StoreVersionError(Exception):
    """Base class for storeversion errors."""


class FetchError(StoreVersionError):
    """A store request failed: connectivity, timeout or a non-200 status."""

    def __init__(self, uri: str, reason: str, status_code: int | None = None):
        self.uri = uri
        self.reason = reason
        self.status_code = status_code
        super().__init__(f"Request failed: {uri} ({reason})")


class LaunchError(StoreVersionError):
    """The app store link could not be opened."""


class ConfigError(StoreVersionError):
    """The check configuration is missing or invalid."""


@dataclass(frozen=True)
class LocalAppInfo:
    package_name: str
    version: str
    platform: StorePlatform


@dataclass(frozen=True)
class CheckConfiguration:
    """
    Caller-supplied settings for a version check.

    - ios_id/android_id: store identifier overrides, default to the local
      package name
    - ios_app_store_country: two-letter App Store region
    - play_locale: hl parameter for the Play details page
    - force_app_version: always report this as the store version
    - prefer_newer_local_shows_changelog: report an update when local is
      ahead of or equal to the store
    """

    prefer_newer_local_shows_changelog: bool
    ios_id: str | None = None
    android_id: str | None = None
    ios_app_store_country: str | None = None
    play_locale: str | None = None
    force_app_version: str | None = None
    timeout: float = DEFAULT_REQUEST_TIMEOUT


@dataclass(frozen=True)
class StoreListing:
    """What a store parser could read from a response."""

    store_version: str
    release_notes: str | None = None
    app_store_link: str | None = None


@dataclass(frozen=True)
class VersionStatus:
    """The installed version next to the most recent store version."""

    local_version: str
    store_version: str
    app_store_link: str
    prefer_newer_local_shows_changelog: bool
    release_notes: str | None = field(default=None)

    def __post_init__(self):
        object.__setattr__(
            self, "local_version", normalize_version(self.local_version)
        )
        object.__setattr__(
            self, "store_version", normalize_version(self.store_version)
        )

    @property
    def can_update(self) -> bool:
        return can_update(
            self.local_version,
            self.store_version,
            self.prefer_newer_local_shows_changelog,
        )

    def as_dict(self) -> dict[str, str | bool | None]:
        data = asdict(self)
        data["can_update"] = self.can_update
        return data
