import os
from importlib import resources

import yaml
from jsonschema import ValidationError, validate

from storeversion.consts import DEFAULT_REQUEST_TIMEOUT
from storeversion.models import CheckConfiguration, ConfigError
from storeversion.utils import getLogger

log = getLogger(__name__)

_SCHEMA_PACKAGE = "storeversion.schemas"
_SCHEMA_FILE = "check_config_schema.yaml"


def _load_schema() -> dict:
    schema_text = resources.files(_SCHEMA_PACKAGE).joinpath(_SCHEMA_FILE).read_text(
        "utf-8"
    )
    return yaml.safe_load(schema_text)


def validate_config(config_dict: dict) -> None:
    try:
        validate(config_dict, _load_schema())
    except ValidationError as e:
        location = ".".join(str(p) for p in e.absolute_path) or "<root>"
        raise ConfigError(f"Invalid check configuration at {location}: {e.message}")


def build_check_configuration(config_dict: dict) -> CheckConfiguration:
    validate_config(config_dict)
    return CheckConfiguration(
        prefer_newer_local_shows_changelog=config_dict[
            "prefer_newer_local_shows_changelog"
        ],
        ios_id=config_dict.get("ios_id"),
        android_id=config_dict.get("android_id"),
        ios_app_store_country=config_dict.get("ios_app_store_country"),
        play_locale=config_dict.get("play_locale"),
        force_app_version=config_dict.get(
            "force_app_version", os.getenv("STOREVERSION_FORCE_APP_VERSION")
        ),
        timeout=float(config_dict.get("timeout", DEFAULT_REQUEST_TIMEOUT)),
    )


def load_check_configuration(path: str) -> CheckConfiguration:
    """Load and validate a check configuration YAML file."""
    try:
        with open(path, "r") as f:
            config_dict = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigError(f"Config file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigError(f"Error reading config file {path}: {e}")

    if config_dict is None:
        config_dict = {}
    if not isinstance(config_dict, dict):
        raise ConfigError(f"Config file {path} must contain a mapping")

    log.info(f"Loaded check configuration from {path}")
    return build_check_configuration(config_dict)
