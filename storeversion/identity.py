import importlib.metadata
from typing import Protocol

from storeversion.models import LocalAppInfo, StorePlatform
from storeversion.utils import getLogger

log = getLogger(__name__)

_PLATFORM_ALIASES = {
    "ios": StorePlatform.APPLE,
    "ipados": StorePlatform.APPLE,
    "iphone": StorePlatform.APPLE,
    "apple": StorePlatform.APPLE,
    "android": StorePlatform.PLAY,
    "play": StorePlatform.PLAY,
}


def detect_platform(name: str | None) -> StorePlatform:
    if not name:
        return StorePlatform.UNSUPPORTED
    return _PLATFORM_ALIASES.get(name.strip().lower(), StorePlatform.UNSUPPORTED)


class IdentityProvider(Protocol):
    def get_local_app_info(self) -> LocalAppInfo: ...


class StaticIdentityProvider:
    """Identity supplied by the caller, e.g. from CLI options."""

    def __init__(self, package_name: str, version: str, platform: StorePlatform):
        self._info = LocalAppInfo(
            package_name=package_name, version=version, platform=platform
        )

    def get_local_app_info(self) -> LocalAppInfo:
        return self._info


class InstalledPackageIdentityProvider:
    """Read the local version from an installed distribution's metadata."""

    def __init__(
        self,
        distribution: str,
        platform: StorePlatform,
        package_name: str | None = None,
    ):
        self.distribution = distribution
        self.platform = platform
        self.package_name = package_name or distribution

    def get_local_app_info(self) -> LocalAppInfo:
        try:
            version = importlib.metadata.version(self.distribution)
        except importlib.metadata.PackageNotFoundError:
            log.warning(f"Distribution {self.distribution} is not installed")
            version = ""
        return LocalAppInfo(
            package_name=self.package_name, version=version, platform=self.platform
        )
