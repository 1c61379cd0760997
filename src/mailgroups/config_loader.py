"""
Configuration Loader

Loads the groups YAML file, applies environment variable overrides and
validates the result against GroupsConfigSchema.

Environment Variable Overrides:
    Naming convention: MAILGROUPS_<SECTION>_<KEY> (uppercase, underscores)

    Examples:
        MAILGROUPS_LOGGING_LEVEL=DEBUG
        MAILGROUPS_LOGGING_FORMAT=json
        MAILGROUPS_MATCHING_IGNORE_CASE=false
"""
import os
import logging
from typing import Dict, Any
from pathlib import Path

from mailgroups.config import ConfigError, load_yaml_config
from mailgroups.config_schema import GroupsConfigSchema

logger = logging.getLogger(__name__)

ENV_PREFIX = "MAILGROUPS_"

# Read by the CLI itself, never config overrides
RESERVED_ENV = frozenset({"MAILGROUPS_CONFIG"})


class ConfigLoader:
    """
    Loader for groups configuration files.

    Args:
        config_path: Path to the YAML configuration file

    Raises:
        ConfigError: If the config file is missing

    Example:
        >>> config = ConfigLoader('config/groups.yaml').load()
        >>> config.matching.ignore_case
        True
    """

    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise ConfigError(f"Configuration file not found: {config_path}")

    @staticmethod
    def _apply_env_overrides(config_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply MAILGROUPS_<SECTION>_<KEY> environment variables to the config.

        Only the `logging` and `matching` sections can be overridden.
        """
        overrides_applied = []
        section_map = {
            'LOGGING': 'logging',
            'MATCHING': 'matching',
        }

        for env_key, env_value in os.environ.items():
            if not env_key.startswith(ENV_PREFIX) or env_key in RESERVED_ENV:
                continue

            parts = env_key[len(ENV_PREFIX):].split('_', 1)
            if len(parts) != 2:
                logger.warning(f"Invalid environment variable format: {env_key} (expected {ENV_PREFIX}<SECTION>_<KEY>)")
                continue

            section_env, key_env = parts
            section = section_map.get(section_env)
            if not section:
                logger.warning(f"Unknown configuration section in environment variable: {env_key}")
                continue

            if not isinstance(config_dict.get(section), dict):
                config_dict[section] = {}

            converted_value = ConfigLoader._convert_env_value(key_env, env_value, section)
            config_dict[section][key_env.lower()] = converted_value
            overrides_applied.append(f"{section}.{key_env.lower()}={converted_value}")

        if overrides_applied:
            logger.info(f"Applied {len(overrides_applied)} environment variable overrides: {', '.join(overrides_applied)}")

        return config_dict

    @staticmethod
    def _convert_env_value(key: str, value: str, section: str) -> Any:
        bool_fields = {
            'matching': ['ignore_case']
        }

        key_lower = key.lower()
        if section in bool_fields and key_lower in bool_fields[section]:
            lowered = value.lower().strip()
            if lowered in ('true', '1', 'yes', 'on'):
                return True
            if lowered in ('false', '0', 'no', 'off'):
                return False
            raise ConfigError(f"Environment variable value for {key} must be a boolean, got: {value}")

        return value

    def load(self) -> GroupsConfigSchema:
        """
        Load and validate the configuration file.

        Returns:
            Validated GroupsConfigSchema instance

        Raises:
            ConfigError: If YAML parsing or schema validation fails
        """
        logger.info(f"Loading configuration from {self.config_path}")

        raw_config = load_yaml_config(str(self.config_path))
        if raw_config is None:
            raise ConfigError(f"Configuration file {self.config_path} is empty")
        if not isinstance(raw_config, dict):
            raise ConfigError(
                f"Unexpected YAML structure in {self.config_path}: expected a mapping, "
                f"got {type(raw_config).__name__}"
            )

        raw_config = self._apply_env_overrides(raw_config)
        return self.load_from_dict(raw_config)

    @staticmethod
    def load_from_dict(config_dict: Dict[str, Any]) -> GroupsConfigSchema:
        """
        Validate configuration from a dictionary.

        Raises:
            ConfigError: If schema validation fails
        """
        try:
            validated_config = GroupsConfigSchema(**config_dict)
            logger.info(f"Configuration validated: {len(validated_config.statements)} statement(s)")
            return validated_config
        except Exception as e:
            error_msg = f"Configuration validation failed: {e}"
            logger.error(error_msg)
            raise ConfigError(error_msg) from e
