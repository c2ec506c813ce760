__version__ = "0.1.0"

from storeversion.models import (  # noqa: E402
    CheckConfiguration,
    FetchError,
    LaunchError,
    LaunchMode,
    LocalAppInfo,
    StorePlatform,
    VersionStatus,
)
from storeversion.resolver import (  # noqa: E402
    VersionStatusResolver,
    get_version_status,
)
from storeversion.versioning import can_update, normalize_version  # noqa: E402
