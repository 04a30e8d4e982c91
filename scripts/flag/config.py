"""
Configuration for the ServiceNow flag daemon.

Settings come from command line arguments, then SNF_* environment variables
(a .env file is loaded first), then defaults.
"""

import logging
import os
from argparse import Namespace
from dataclasses import dataclass, field
from typing import List, Mapping, Optional, Tuple

from dotenv import load_dotenv

from luxafor.api.luxafor_api import DEFAULT_BASE_URL as LUXAFOR_BASE_URL
from servicenow.api.servicenow_api import DEFAULT_BASE_URL as SERVICENOW_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_LOW = 1
DEFAULT_HIGH = 2
DEFAULT_INTERVAL = 300

_TRUE_VALUES = {"1", "t", "true", "y", "yes", "on"}
_FALSE_VALUES = {"0", "f", "false", "n", "no", "off", ""}


class ConfigurationError(Exception):
    """Raised when a required setting is missing or out of range."""
    pass


@dataclass(frozen=True)
class FlagConfig:
    device_ids: Tuple[str, ...]
    username: str
    password: str
    assignment_group: str
    servicenow_url: str = SERVICENOW_BASE_URL
    luxafor_url: str = LUXAFOR_BASE_URL
    low: int = DEFAULT_LOW
    high: int = DEFAULT_HIGH
    verbose: bool = False
    interval: int = DEFAULT_INTERVAL
    hold_on_error: bool = False
    log_path: Optional[str] = None
    # Problems found while reading the environment, logged once logging is set up
    load_warnings: Tuple[str, ...] = field(default=(), compare=False)

    @property
    def custom_url(self) -> bool:
        return self.servicenow_url != SERVICENOW_BASE_URL

    def validate(self) -> None:
        """
        Checks that every required setting is present and the interval is usable.

        Raises:
            ConfigurationError: Naming the first missing or invalid setting.
        """
        if not self.device_ids:
            raise ConfigurationError("Luxafor API ID is NOT set!")
        if not self.username:
            raise ConfigurationError("ServiceNow username is NOT set!")
        if not self.password:
            raise ConfigurationError("ServiceNow password is NOT set!")
        if not self.assignment_group:
            raise ConfigurationError("ServiceNow assignment group is NOT set!")
        if self.interval < 1:
            raise ConfigurationError(
                f"Polling interval must be at least 1 second, got {self.interval}"
            )

    def log_load_warnings(self) -> None:
        for message in self.load_warnings:
            logger.warning(message)

    def log_settings(self) -> None:
        """Logs the effective settings at debug level. The password is never logged."""
        logger.debug(f"Luxafor API ID is set ({', '.join(self.device_ids)})")
        logger.debug("ServiceNow username is set")
        logger.debug("ServiceNow password is set")
        logger.debug(f"ServiceNow assignment group is set ({self.assignment_group})")
        if self.custom_url:
            logger.debug(f"Custom ServiceNow base-url is set ({self.servicenow_url})")
        logger.debug(f"Low value is set to ({self.low})")
        logger.debug(f"High value is set to ({self.high})")
        if self.low > self.high:
            logger.warning(f"Low value ({self.low}) is greater than high value ({self.high})")
        logger.debug(f"Polling interval is set to ({self.interval}s)")
        if self.hold_on_error:
            logger.debug("Holding flag color on ServiceNow errors")


def split_device_ids(value: Optional[str]) -> Tuple[str, ...]:
    """Splits a comma separated ID list, dropping blank entries."""
    if not value:
        return ()
    return tuple(part.strip() for part in value.split(",") if part.strip())


def _env_int(environ: Mapping[str, str], name: str, default: int, problems: List[str]) -> int:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        problems.append(f"Ignoring invalid integer for {name}: {raw!r}")
        return default


def _env_bool(
    environ: Mapping[str, str], name: str, problems: List[str], default: bool = False
) -> bool:
    raw = environ.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    problems.append(f"Ignoring invalid boolean for {name}: {raw!r}")
    return default


def _pick(arg_value, env_value):
    """Command line wins when it was given."""
    return arg_value if arg_value not in (None, "") else env_value


def load_config(args: Namespace, environ: Optional[Mapping[str, str]] = None) -> FlagConfig:
    """
    Builds the daemon configuration.

    Args:
        args: Parsed command line arguments; unset options are None.
        environ: Environment mapping. Defaults to os.environ after loading .env.

    Returns:
        FlagConfig: Unvalidated configuration, see FlagConfig.validate.
    """
    if environ is None:
        load_dotenv()
        environ = os.environ

    problems: List[str] = []
    device_ids = _pick(getattr(args, "luxaforapiid", None), environ.get("SNF_LUXID"))
    servicenow_url = _pick(getattr(args, "customurl", None), environ.get("SNF_SNBASEURL"))

    return FlagConfig(
        device_ids=split_device_ids(device_ids),
        username=_pick(getattr(args, "username", None), environ.get("SNF_SNUSER", "")),
        password=_pick(getattr(args, "password", None), environ.get("SNF_SNPASS", "")),
        assignment_group=_pick(
            getattr(args, "assignmentgroup", None), environ.get("SNF_SNASSIGNGROUP", "")
        ),
        servicenow_url=(servicenow_url or SERVICENOW_BASE_URL).rstrip("/"),
        low=_pick(getattr(args, "low", None), _env_int(environ, "SNF_LOW", DEFAULT_LOW, problems)),
        high=_pick(getattr(args, "high", None), _env_int(environ, "SNF_HIGH", DEFAULT_HIGH, problems)),
        verbose=bool(getattr(args, "verbose", False)) or _env_bool(environ, "SNF_VERBOSE", problems),
        interval=_pick(
            getattr(args, "interval", None),
            _env_int(environ, "SNF_INTERVAL", DEFAULT_INTERVAL, problems),
        ),
        hold_on_error=bool(getattr(args, "hold_on_error", False))
        or _env_bool(environ, "SNF_HOLD_ON_ERROR", problems),
        log_path=getattr(args, "log", None),
        load_warnings=tuple(problems),
    )
