import os

# Brand color used by the CLI.
STOREVERSION_COLOR = "#4F8CF7"

DEFAULT_REQUEST_TIMEOUT = float(os.getenv("STOREVERSION_TIMEOUT", "10"))
DEFAULT_PLAY_LOCALE = "en_US"
DEFAULT_VERSION = "0.0.0"

APPLE_LOOKUP_HOST = "itunes.apple.com"
APPLE_LOOKUP_URL = f"https://{APPLE_LOOKUP_HOST}/lookup"
PLAY_DETAILS_HOST = "play.google.com"
PLAY_DETAILS_URL = f"https://{PLAY_DETAILS_HOST}/store/apps/details"

# Class markers of the legacy Play details page layout.
PLAY_ADDITIONAL_INFO_CLASS = "hAyfc"
PLAY_INFO_LABEL_CLASS = "BgcNfc"
PLAY_INFO_VALUE_CLASS = "htlgb"
PLAY_SECTION_CLASS = "W4P4ne"
PLAY_SECTION_HEADER_CLASS = "wSaTQd"
PLAY_SECTION_BODY_CLASS = "PHBdkd"
PLAY_SECTION_TEXT_CLASS = "DWPxHb"
PLAY_CURRENT_VERSION_LABEL = "Current Version"
PLAY_WHATS_NEW_LABEL = "What's New"

# Embedded data script emitted by the current Play details page.
PLAY_EMBEDDED_MARKER = "key: 'ds:5'"
PLAY_EMBEDDED_PREFIX_LEN = 20
PLAY_EMBEDDED_SUFFIX_LEN = 2

# Index paths into the "data" array of the ds:5 payload. Update these when
# the Play page layout shifts.
PLAY_EMBEDDED_PATHS = {
    "version": (1, 2, 140, 0, 0, 0),
    "release_notes": (1, 2, 144, 1, 1),
}
