"""
Google Play details page parsing.

The details page has shipped two layouts over time:

1. Structured markup, where "Current Version" and "What's New" live in
   labelled blocks identified by obfuscated class names.
2. An embedded data script (``AF_initDataCallback({key: 'ds:5', ...})``)
   holding a JS object literal whose ``data`` array carries the version and
   release notes at fixed index paths.

The first layout that matches wins.
"""

import json
import re
from typing import Any

from storeversion.consts import (
    PLAY_ADDITIONAL_INFO_CLASS,
    PLAY_CURRENT_VERSION_LABEL,
    PLAY_EMBEDDED_MARKER,
    PLAY_EMBEDDED_PATHS,
    PLAY_EMBEDDED_PREFIX_LEN,
    PLAY_EMBEDDED_SUFFIX_LEN,
    PLAY_INFO_LABEL_CLASS,
    PLAY_INFO_VALUE_CLASS,
    PLAY_SECTION_BODY_CLASS,
    PLAY_SECTION_CLASS,
    PLAY_SECTION_HEADER_CLASS,
    PLAY_SECTION_TEXT_CLASS,
    PLAY_WHATS_NEW_LABEL,
)
from storeversion.html_document import Element, first_matching, parse_html
from storeversion.models import StoreListing
from storeversion.utils import getLogger, replace_all
from storeversion.versioning import normalize_version

log = getLogger(__name__)

# Order matters: bare keys first, then apostrophes, then remaining quotes.
_SCRIPT_REPAIRS = (
    ("key:", '"key":'),
    ("hash:", '"hash":'),
    ("data:", '"data":'),
    ("sideChannel:", '"sideChannel":'),
    ("d'", "d’"),
    ("s'", "s’"),
    ("l'", "l’"),
    ("#39;", ""),
    ("'", '"'),
)

_RELEASE_NOTES_REPAIRS = (
    ("d&", "d’"),
    ("s&", "s’"),
    ("l&", "l’"),
    ("<br>", "\n"),
    ("& ", "&"),
    ("&amp;", "&"),
)

_STRUCTURED_NOTES_STRIP = re.compile(r"[a-zA-Z:s]")


def _child_text(element: Element, class_name: str) -> str | None:
    child = element.query_class(class_name)
    return child.text if child is not None else None


def _parse_structured_markup(
    document: Element, info_elements: list[Element]
) -> tuple[str, str | None] | None:
    version_element = first_matching(
        lambda el: _child_text(el, PLAY_INFO_LABEL_CLASS)
        == PLAY_CURRENT_VERSION_LABEL,
        info_elements,
    )
    if version_element is None:
        log.info("No 'Current Version' block found in Play details page")
        return None
    raw_version = _child_text(version_element, PLAY_INFO_VALUE_CLASS)
    if raw_version is None:
        log.info("'Current Version' block has no value")
        return None

    release_notes = None
    section = first_matching(
        lambda el: _child_text(el, PLAY_SECTION_HEADER_CLASS)
        == PLAY_WHATS_NEW_LABEL,
        document.find_by_class(PLAY_SECTION_CLASS),
    )
    if section is not None:
        body = section.query_class(PLAY_SECTION_BODY_CLASS)
        text = None
        if body is not None:
            text = body.query_class(PLAY_SECTION_TEXT_CLASS)
        if text is not None:
            # Known quirk: this also strips letters from the notes themselves.
            release_notes = _STRUCTURED_NOTES_STRIP.sub("", text.text).strip()

    return raw_version, release_notes


def _read_path(data: Any, path: tuple[int, ...]) -> Any | None:
    node = data
    for index in path:
        if not isinstance(node, list) or not 0 <= index < len(node):
            return None
        node = node[index]
    return node


def extract_embedded_leaves(data: Any) -> tuple[str | None, str | None]:
    """Read (version, release notes) from the ds:5 data array.

    Shape drift in the upstream payload yields None for the affected leaf
    instead of raising.
    """
    version = _read_path(data, PLAY_EMBEDDED_PATHS["version"])
    notes = _read_path(data, PLAY_EMBEDDED_PATHS["release_notes"])
    return (
        version if isinstance(version, str) else None,
        notes if isinstance(notes, str) else None,
    )


def _repair_embedded_script(script_text: str) -> str:
    end = len(script_text) - PLAY_EMBEDDED_SUFFIX_LEN
    body = script_text[PLAY_EMBEDDED_PREFIX_LEN:end]
    return replace_all(body, _SCRIPT_REPAIRS)


def _parse_embedded_data(document: Element) -> tuple[str, str | None] | None:
    script = first_matching(
        lambda el: PLAY_EMBEDDED_MARKER in el.text, document.find_by_tag("script")
    )
    if script is None:
        log.info("No embedded ds:5 data script found in Play details page")
        return None

    try:
        payload = json.loads(_repair_embedded_script(script.text))
    except ValueError as e:
        log.warning(f"Could not decode embedded Play data: {e}")
        return None

    data = payload.get("data") if isinstance(payload, dict) else None
    if not data:
        log.info("Embedded Play data is empty")
        return None

    version, notes = extract_embedded_leaves(data)
    if version is None:
        log.warning("Embedded Play data has no version at the expected path")
        return None
    if notes is not None:
        notes = replace_all(notes, _RELEASE_NOTES_REPAIRS)
    return version, notes


def parse_play_response(
    body: str, force_app_version: str | None = None
) -> StoreListing | None:
    document = parse_html(body)

    info_elements = document.find_by_class(PLAY_ADDITIONAL_INFO_CLASS)
    if info_elements:
        extracted = _parse_structured_markup(document, info_elements)
    else:
        extracted = _parse_embedded_data(document)

    if extracted is None:
        return None

    raw_version, release_notes = extracted
    return StoreListing(
        store_version=normalize_version(force_app_version or raw_version),
        release_notes=release_notes,
    )
