"""
Runtime configuration for datum resolution.

Settings are read from a YAML file with a ``geodatum`` section:

    geodatum:
      reference_datum: WGS84
      cache_reverse: true
      log_level: WARNING

Apply them with :func:`geodatum.catalog.configure`.
"""

from dataclasses import dataclass
from pathlib import Path
import logging

import yaml

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
CONFIG_SECTION = "geodatum"


@dataclass
class GeodatumConfig:
    """Settings for datum resolution.

    Attributes:
        reference_datum: Code or short name of the pivot datum.
        cache_reverse: Cache the inverse of derived operations on the target datum.
        log_level: Level of the ``geodatum`` logger.
    """
    reference_datum: str = "WGS84"
    cache_reverse: bool = True
    log_level: str = "WARNING"

    @classmethod
    def from_yaml(cls, path: str) -> 'GeodatumConfig':
        """Load configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            GeodatumConfig instance loaded from file

        Raises:
            FileNotFoundError: If configuration file does not exist
            ValueError: If configuration file is malformed or contains invalid values
        """
        config_path = Path(path)

        if not config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {path}\n"
                f"Please create a configuration file or use get_default_config()"
            )

        try:
            with open(config_path, 'r') as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse YAML configuration file: {e}") from e

        if not data:
            raise ValueError(
                f"Configuration file is empty: {path}\n"
                f"Expected a '{CONFIG_SECTION}' section"
            )

        if not isinstance(data, dict) or CONFIG_SECTION not in data:
            raise ValueError(
                f"Configuration file missing '{CONFIG_SECTION}' section: {path}\n"
                f"Expected structure: {CONFIG_SECTION}:\n  reference_datum: ...\n  ..."
            )

        return cls.from_dict(data[CONFIG_SECTION])

    @classmethod
    def from_dict(cls, config: dict) -> 'GeodatumConfig':
        """Create configuration from dictionary.

        Unknown keys are ignored with a warning.

        Raises:
            ValueError: If a value has the wrong type or is out of range
        """
        if not isinstance(config, dict):
            raise ValueError(f"Configuration must be a dictionary, got {type(config)}")

        known = {'reference_datum', 'cache_reverse', 'log_level'}
        for key in config:
            if key not in known:
                logger.warning(f"Ignoring unknown configuration key '{key}'")

        defaults = cls()

        reference_datum = config.get('reference_datum', defaults.reference_datum)
        if not isinstance(reference_datum, str) or not reference_datum:
            raise ValueError(
                f"'reference_datum' must be a non-empty string, got {reference_datum!r}"
            )

        cache_reverse = config.get('cache_reverse', defaults.cache_reverse)
        if not isinstance(cache_reverse, bool):
            raise ValueError(f"'cache_reverse' must be a boolean, got {type(cache_reverse)}")

        log_level = str(config.get('log_level', defaults.log_level)).upper()
        if log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level '{log_level}'. "
                f"Must be one of: {', '.join(VALID_LOG_LEVELS)}"
            )

        return cls(
            reference_datum=reference_datum,
            cache_reverse=cache_reverse,
            log_level=log_level,
        )

    def to_dict(self) -> dict:
        return {
            'reference_datum': self.reference_datum,
            'cache_reverse': self.cache_reverse,
            'log_level': self.log_level,
        }

    def save_to_yaml(self, path: str) -> None:
        """Save configuration to YAML file, creating parent directories.

        Raises:
            IOError: If file cannot be written
        """
        config_path = Path(path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        output = {CONFIG_SECTION: self.to_dict()}

        try:
            with open(config_path, 'w') as f:
                yaml.safe_dump(output, f, default_flow_style=False, sort_keys=False)
        except IOError as e:
            raise IOError(f"Failed to write configuration file: {e}") from e


def get_default_config() -> GeodatumConfig:
    """Return default configuration: WGS84 pivot with reverse caching."""
    return GeodatumConfig()
