#!/usr/bin/env python3
"""
Runtime configuration for dhlease.

Settings are layered, later sources overriding earlier ones:
    1. Built-in defaults
    2. YAML config file (--config or DHLEASE_CONFIG)
    3. Environment variables
    4. Command-line flags (applied by dhlease.py)

Environment variables:
    DHLEASE_CONFIG - Path to a YAML config file
    DHLEASE_LEASE_FILE - Path to the dhcpd lease file
    DHLEASE_LOG_LEVEL - DEBUG, INFO, WARNING or ERROR
    DHLEASE_UTC - Treat lease times as UTC (true/1/yes)

Example config file:
    lease_file: /var/lib/dhcp/dhcpd.leases
    log_level: INFO
    utc: true
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Mapping, Optional

import yaml

from lease_errors import LeaseIOError, UsageError


logger = logging.getLogger(__name__)

DEFAULT_LEASE_FILE = Path('/var/db/dhcpd.leases')
LOG_LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR')


@dataclass
class DhleaseConfig:
    lease_file: Path = DEFAULT_LEASE_FILE
    log_level: str = 'WARNING'
    utc: bool = False
    syslog: bool = False

    def validate(self) -> None:
        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise UsageError(f"invalid log level '{self.log_level}', expected one of {', '.join(LOG_LEVELS)}")


def env_flag(value: str) -> bool:
    return value.lower() in ('true', '1', 'yes')


def _file_value(config_file: Path, key: str, value):
    if key in ('lease_file', 'log_level'):
        if not isinstance(value, str) or not value:
            raise UsageError(f"setting '{key}' in {config_file} must be a non-empty string")
        return value
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return env_flag(value)
    raise UsageError(f"setting '{key}' in {config_file} must be a boolean")


def load_config_file(config_file: Path) -> dict:
    """
    Read a YAML config file into a plain dict.

    String and boolean settings are type-checked; boolean settings also
    accept the strings understood by env_flag().
    """
    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise LeaseIOError(f"couldn't read config file {config_file}: {e.strerror or e}") from e
    except yaml.YAMLError as e:
        raise UsageError(f"invalid YAML in config file {config_file}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise UsageError(f"config file {config_file} must contain a mapping")

    known = {f.name for f in fields(DhleaseConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        raise UsageError(f"unknown setting(s) in {config_file}: {', '.join(map(str, unknown))}")

    logger.debug(f"Loaded config file {config_file}")
    return {key: _file_value(config_file, key, value) for key, value in data.items()}


def load_config(config_file: Optional[Path] = None,
                environ: Optional[Mapping[str, str]] = None) -> DhleaseConfig:
    """
    Build the configuration from defaults, config file and environment.

    Raises:
        UsageError: If the config file or environment holds invalid values
        LeaseIOError: If an explicitly given config file cannot be read
    """
    environ = os.environ if environ is None else environ
    config = DhleaseConfig()

    if config_file is None and environ.get('DHLEASE_CONFIG'):
        config_file = Path(environ['DHLEASE_CONFIG'])

    if config_file is not None:
        data = load_config_file(Path(config_file))
        if 'lease_file' in data:
            config.lease_file = Path(data['lease_file'])
        if 'log_level' in data:
            config.log_level = data['log_level']
        if 'utc' in data:
            config.utc = data['utc']
        if 'syslog' in data:
            config.syslog = data['syslog']

    if environ.get('DHLEASE_LEASE_FILE'):
        config.lease_file = Path(environ['DHLEASE_LEASE_FILE'])
    if environ.get('DHLEASE_LOG_LEVEL'):
        config.log_level = environ['DHLEASE_LOG_LEVEL']
    if environ.get('DHLEASE_UTC'):
        config.utc = env_flag(environ['DHLEASE_UTC'])

    config.validate()
    return config
