import dataclasses
import json
import sys

import rich_click as click
from rich.console import Console
from rich.table import Table

from storeversion.config import build_check_configuration, load_check_configuration
from storeversion.consts import DEFAULT_REQUEST_TIMEOUT, STOREVERSION_COLOR
from storeversion.identity import StaticIdentityProvider, detect_platform
from storeversion.models import (
    CheckConfiguration,
    ConfigError,
    LaunchError,
    LaunchMode,
)
from storeversion.presenter import (
    DialogOptions,
    launch_app_store,
    show_alert_if_necessary,
)
from storeversion.resolver import VersionStatusResolver
from storeversion.rich_click_config import configure_rich_click
from storeversion.utils import getLogger
from storeversion.versioning import get_version

log = getLogger(__name__)

configure_rich_click(STOREVERSION_COLOR)


_STORE_OPTIONS = [
    click.option(
        "--platform",
        required=True,
        help="Target platform of the app: ios or android.",
    ),
    click.option("--app-id", required=True, help="Local bundle id / package name."),
    click.option(
        "--local-version", required=True, help="Version of the installed app."
    ),
    click.option(
        "--config",
        "config_path",
        type=click.Path(exists=True, dir_okay=False),
        default=None,
        help="YAML check configuration file.",
    ),
    click.option("--ios-id", default=None, help="App Store bundle id override."),
    click.option("--android-id", default=None, help="Play Store package override."),
    click.option("--country", default=None, help="Two-letter App Store country."),
    click.option("--locale", "play_locale", default=None, help="Play Store locale."),
    click.option(
        "--force-version",
        default=None,
        help="Always report this as the store version.",
    ),
    click.option(
        "--show-changelog/--no-show-changelog",
        default=None,
        help="Report an update even when the local version is newer or equal.",
    ),
    click.option(
        "--timeout",
        type=float,
        default=None,
        help=f"Request timeout in seconds. Default is {DEFAULT_REQUEST_TIMEOUT}",
    ),
]


def store_options(func):
    """Options shared by every command that performs a store lookup."""
    for option in reversed(_STORE_OPTIONS):
        func = option(func)
    return func


def _build_config(
    config_path,
    ios_id,
    android_id,
    country,
    play_locale,
    force_version,
    show_changelog,
    timeout,
) -> CheckConfiguration:
    if config_path:
        try:
            config = load_check_configuration(config_path)
        except ConfigError as e:
            raise click.ClickException(str(e))
    else:
        config = build_check_configuration(
            {"prefer_newer_local_shows_changelog": False}
        )

    overrides = {
        "ios_id": ios_id,
        "android_id": android_id,
        "ios_app_store_country": country,
        "play_locale": play_locale,
        "force_app_version": force_version,
        "prefer_newer_local_shows_changelog": show_changelog,
        "timeout": timeout,
    }
    # command line values take precedence over the config file
    overrides = {k: v for k, v in overrides.items() if v is not None}
    return dataclasses.replace(config, **overrides)


def _build_resolver(platform, app_id, local_version, **config_kwargs):
    config = _build_config(**config_kwargs)
    identity = StaticIdentityProvider(
        package_name=app_id,
        version=local_version,
        platform=detect_platform(platform),
    )
    return VersionStatusResolver(config, identity)


def _launch_mode(external: bool) -> LaunchMode:
    if external:
        return LaunchMode.EXTERNAL_APPLICATION
    return LaunchMode.PLATFORM_DEFAULT


@click.group(invoke_without_command=True)
@click.option(
    "--version", is_flag=True, help="Show the storeversion version and exit."
)
@click.pass_context
def main(ctx, version):
    """Check an installed app against the App Store or Google Play."""
    if version:
        click.echo(f"storeversion version: {get_version()}")
        ctx.exit()

    log.info(f"Starting storeversion cli version: {get_version()}")

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@click.command()
@store_options
@click.option("--json", "as_json", is_flag=True, help="Print the status as JSON.")
def status(platform, app_id, local_version, as_json, **config_kwargs):
    """Print the version status of the app."""
    resolver = _build_resolver(platform, app_id, local_version, **config_kwargs)
    version_status = resolver.resolve()

    if version_status is None:
        if as_json:
            click.echo(json.dumps(None))
        else:
            click.echo("Could not determine the store version status.")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(version_status.as_dict(), indent=2))
        return

    table = Table(title="Version Status", title_justify="left")
    table.add_column("Field", style=f"bold {STOREVERSION_COLOR}")
    table.add_column("Value")
    table.add_row("Local version", version_status.local_version)
    table.add_row("Store version", version_status.store_version)
    table.add_row("Can update", str(version_status.can_update))
    table.add_row("App store link", version_status.app_store_link)
    table.add_row("Release notes", version_status.release_notes or "-")
    Console().print(table)


@click.command()
@store_options
@click.option("--title", default="Update Available", help="Dialog title.")
@click.option("--text", "dialog_text", default=None, help="Dialog body text.")
@click.option("--update-label", default="Update", help="Update button label.")
@click.option("--dismiss-label", default="Maybe Later", help="Dismiss label.")
@click.option(
    "--no-dismiss",
    is_flag=True,
    help="Do not allow dismissing the dialog; update is the only action.",
)
@click.option(
    "--external/--default",
    default=True,
    help="Open the store link in an external browser or the platform default.",
)
def prompt(
    platform,
    app_id,
    local_version,
    title,
    dialog_text,
    update_label,
    dismiss_label,
    no_dismiss,
    external,
    **config_kwargs,
):
    """Show an update dialog when a newer store version exists."""
    resolver = _build_resolver(platform, app_id, local_version, **config_kwargs)
    options = DialogOptions(
        dialog_title=title,
        dialog_text=dialog_text,
        update_button_text=update_label,
        allow_dismissal=not no_dismiss,
        dismiss_button_text=dismiss_label,
        launch_mode=_launch_mode(external),
    )
    try:
        version_status = show_alert_if_necessary(resolver, options)
    except LaunchError as e:
        raise click.ClickException(str(e))

    if version_status is None:
        click.echo("Could not determine the store version status.")
        sys.exit(1)
    if not version_status.can_update:
        click.echo(f"App is up to date ({version_status.local_version}).")


@click.command(name="open")
@click.argument("link")
@click.option(
    "--external/--default",
    default=False,
    help="Open the link in an external browser or the platform default.",
)
def open_store(link, external):
    """Open an app store link."""
    try:
        launch_app_store(link, launch_mode=_launch_mode(external))
    except LaunchError as e:
        raise click.ClickException(str(e))


main.add_command(status)
main.add_command(prompt)
main.add_command(open_store)

if __name__ == "__main__":
    main()
