"""
Configuration utilities

Loads the optional TOML configuration file for the replay command:

    [replay]
    encoding = "utf-8"

    [output]
    path = "~/logs/dcf77-report.txt"

    [logging]
    level = "INFO"

Paths support environment variable and ~ expansion.
"""

import codecs
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

import toml

logger = logging.getLogger(__name__)

LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')


def expand_path(value: str) -> Path:
    """Resolve environment variables and ~ in a configured path"""
    value = os.path.expandvars(value)
    value = os.path.expanduser(value)
    return Path(value)


@dataclass
class ReplayConfig:
    """Settings for one replay run; command-line arguments override these"""
    encoding: str = 'utf-8'
    output_path: Optional[Path] = None
    log_level: str = 'INFO'

    @classmethod
    def from_dict(cls, config: Dict) -> 'ReplayConfig':
        """
        Build from a parsed TOML document.

        Raises:
            ValueError: If a value is of the wrong kind or unknown
        """
        replay_config = config.get('replay', {})
        output_config = config.get('output', {})
        logging_config = config.get('logging', {})

        encoding = replay_config.get('encoding', cls.encoding)
        try:
            codecs.lookup(encoding)
        except (LookupError, TypeError):
            raise ValueError(f"Unknown text encoding: {encoding!r}") from None

        output_path = None
        if output_config.get('path'):
            output_path = expand_path(str(output_config['path']))

        log_level = str(logging_config.get('level', cls.log_level)).upper()
        if log_level not in LOG_LEVELS:
            raise ValueError(f"Logging level must be one of {', '.join(LOG_LEVELS)}, got {log_level!r}")

        return cls(encoding=encoding, output_path=output_path, log_level=log_level)


def load_config(config_file: Optional[Union[str, Path]] = None) -> ReplayConfig:
    """
    Load the replay configuration.

    Args:
        config_file: Path to a TOML file, None for the defaults

    Returns:
        Parsed configuration

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file is not valid TOML or holds invalid values
    """
    if config_file is None:
        return ReplayConfig()

    config_file = expand_path(str(config_file))
    try:
        with open(config_file, 'r') as f:
            config = toml.load(f)
    except toml.TomlDecodeError as e:
        raise ValueError(f"Invalid TOML in {config_file}: {e}") from e

    logger.debug(f"Loaded configuration from {config_file}")
    return ReplayConfig.from_dict(config)
