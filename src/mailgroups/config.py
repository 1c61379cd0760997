"""
Low-level configuration helpers: the ConfigError type, reading the YAML
groups file, and loading an optional .env file.
"""
from pathlib import Path
from typing import Any, Union

import yaml
from dotenv import load_dotenv

PathLike = Union[str, Path]


class ConfigError(Exception):
    """The groups configuration could not be read, parsed or validated."""
    pass


def load_yaml_config(path: PathLike) -> Any:
    """
    Read and parse a YAML file.

    Returns:
        Whatever the document contains; None for an empty file

    Raises:
        ConfigError: If the file is missing, unreadable or not valid YAML
    """
    config_file = Path(path)
    if not config_file.is_file():
        raise ConfigError(f"Config file not found: {config_file}")

    try:
        text = config_file.read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(f"Error reading {config_file}: {e}") from e

    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"YAML parse error in {config_file}: {e}") from e


def load_env_vars(env_path: PathLike) -> bool:
    """
    Load variables from a .env file into os.environ, if the file exists.

    Variables already set in the environment win over the file.

    Returns:
        True if a file was loaded
    """
    env_file = Path(env_path)
    if not env_file.is_file():
        return False
    load_dotenv(env_file, override=False)
    return True
