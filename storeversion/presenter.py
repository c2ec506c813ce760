import webbrowser
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

import click
from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from storeversion.consts import STOREVERSION_COLOR
from storeversion.models import LaunchError, LaunchMode, VersionStatus
from storeversion.utils import getLogger

log = getLogger(__name__)

# webbrowser "new" argument per launch mode.
_BROWSER_TARGET = {
    LaunchMode.PLATFORM_DEFAULT: 0,
    LaunchMode.EXTERNAL_APPLICATION: 2,
}


class DialogResult(str, Enum):
    SHOWN = "shown"
    UPDATED = "updated"
    DISMISSED = "dismissed"


@dataclass(frozen=True)
class DialogOptions:
    """
    Appearance and behavior of the update dialog.

    - dialog_text: defaults to "You can now update this app from X to Y"
    - dismiss_action: called when the user dismisses; defaults to closing
    """

    dialog_title: str = "Update Available"
    dialog_text: str | None = None
    update_button_text: str = "Update"
    allow_dismissal: bool = True
    dismiss_button_text: str = "Maybe Later"
    dismiss_action: Callable[[], None] | None = None
    launch_mode: LaunchMode = LaunchMode.EXTERNAL_APPLICATION


def launch_app_store(
    app_store_link: str,
    launch_mode: LaunchMode = LaunchMode.PLATFORM_DEFAULT,
    opener: Callable[..., bool] = webbrowser.open,
) -> None:
    """Open the store page for the app.

    Raises LaunchError when no handler can open the link.
    """
    log.info(f"Launching app store link: {app_store_link}")
    try:
        launched = opener(app_store_link, new=_BROWSER_TARGET[launch_mode])
    except webbrowser.Error as e:
        raise LaunchError(f"Could not launch app store link: {app_store_link}") from e
    if not launched:
        raise LaunchError(f"Could not launch app store link: {app_store_link}")


def _dialog_body(version_status: VersionStatus, options: DialogOptions) -> Text:
    body = Text(
        options.dialog_text
        or f"You can now update this app from {version_status.local_version} "
        f"to {version_status.store_version}"
    )
    if version_status.release_notes:
        body.append("\n\nWhat's New:\n", style="bold")
        body.append(version_status.release_notes)
    return body


def show_update_dialog(
    version_status: VersionStatus,
    options: DialogOptions | None = None,
    console: Console | None = None,
    launcher: Callable[..., None] | None = None,
    confirm: Callable[..., bool] | None = None,
) -> DialogResult:
    """Render the update dialog and run the chosen action.

    When the status was resolved with the changelog policy the dialog is
    informational only and offers no actions.
    """
    options = options or DialogOptions()
    console = console or Console()
    launcher = launcher or launch_app_store
    confirm = confirm or click.confirm

    console.print(
        Panel(
            _dialog_body(version_status, options),
            title=options.dialog_title,
            border_style=STOREVERSION_COLOR,
            title_align="left",
        )
    )

    if version_status.prefer_newer_local_shows_changelog:
        return DialogResult.SHOWN

    if not options.allow_dismissal:
        # Update is the only action; it still waits for the user.
        if not confirm(f"{options.update_button_text}?", default=True):
            return DialogResult.SHOWN
    elif not confirm(
        f"{options.update_button_text}? (no = {options.dismiss_button_text})",
        default=True,
    ):
        if options.dismiss_action is not None:
            options.dismiss_action()
        return DialogResult.DISMISSED

    launcher(version_status.app_store_link, launch_mode=options.launch_mode)
    return DialogResult.UPDATED


def show_alert_if_necessary(
    resolver,
    options: DialogOptions | None = None,
    is_still_relevant: Callable[[], bool] | None = None,
    **dialog_kwargs,
) -> VersionStatus | None:
    """Check the version status and show the update dialog when one applies."""
    version_status = resolver.resolve()
    if version_status is None or not version_status.can_update:
        return version_status
    if is_still_relevant is not None and not is_still_relevant():
        log.info("Caller is no longer interested in the update dialog, skipping")
        return version_status
    show_update_dialog(version_status, options, **dialog_kwargs)
    return version_status
