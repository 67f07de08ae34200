import logging
from dataclasses import replace
from pathlib import Path
from typing import cast

import yaml
from dacite import Config, DaciteError, from_dict

from nettraffic.data.traffic import TrafficSettings
from nettraffic.util import conversion, system

CONFIG_FILENAME = "network-traffic.yaml"
MINIMUM_INTERVAL = 100

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    pass


def default_config_file() -> Path:
    return system.get_config_directory() / CONFIG_FILENAME


def validate(settings: TrafficSettings) -> TrafficSettings:
    if settings.autohide_threshold < 0:
        raise ConfigError(
            f"autohide_threshold must not be negative, got {settings.autohide_threshold}"
        )
    if settings.interval < MINIMUM_INTERVAL:
        raise ConfigError(
            f"interval must be at least {MINIMUM_INTERVAL} ms, got {settings.interval}"
        )
    if settings.unit not in conversion.valid_storage_units():
        raise ConfigError(f'unknown unit "{settings.unit}"')
    return settings


def load_settings(path: Path) -> TrafficSettings:
    """
    Read the YAML settings file, falling back to defaults when it doesn't exist.
    """
    if not path.exists():
        logger.debug(f'"{path}" doesn\'t exist, using defaults')
        return TrafficSettings()

    try:
        with open(path, "r") as f:
            yaml_data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f'Failed to read "{path}": {e}') from e

    if not isinstance(yaml_data, dict):
        raise ConfigError(f'"{path}" must contain a mapping')

    try:
        settings = from_dict(
            data_class=TrafficSettings,
            data=cast(dict[str, object], yaml_data),
            config=Config(strict=True),
        )
    except DaciteError as e:
        raise ConfigError(f'Failed to parse "{path}": {e}') from e

    logger.debug(f'loaded settings from "{path}": {settings}')
    return validate(settings)


def apply_overrides(settings: TrafficSettings, **overrides: object) -> TrafficSettings:
    """
    Overlay command line values on top of the file settings; None means "not given".
    """
    given = {key: value for key, value in overrides.items() if value is not None}
    if "interfaces" in given and not given["interfaces"]:
        del given["interfaces"]
    return validate(replace(settings, **given))
