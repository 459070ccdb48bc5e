"""Configuration file loading for the AdGuard Home HomeKit bridge."""

from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from pathlib import Path
import re
from typing import Any

import voluptuous as vol

from .const import (
    CONF_HOMEKIT_PIN,
    CONF_PASSWORD,
    CONF_STORAGE_PATH,
    CONF_URL,
    CONF_USERNAME,
    DEFAULT_HOMEKIT_PIN,
    DEFAULT_STORAGE_DIR,
    PERSIST_FILE_NAME,
)

_LOGGER = logging.getLogger(__name__)

_PIN_RE = re.compile(r"^(\d{3})-?(\d{2})-?(\d{3})$")


class ConfigError(Exception):
    """Raised when the configuration file cannot be used."""


def _default_storage_path() -> str:
    return str(Path.home() / DEFAULT_STORAGE_DIR)


def _required_text(message: str) -> vol.All:
    """Validator for a non-empty string, failing with the given message."""
    return vol.All(str, vol.Length(min=1, msg=message))


def format_pincode(pin: str) -> str:
    """Normalize an 8 digit HomeKit PIN to the XXX-XX-XXX form."""
    match = _PIN_RE.match(pin.strip())
    if match is None:
        raise vol.Invalid(f"{CONF_HOMEKIT_PIN} must be 8 digits")
    return "-".join(match.groups())


CONFIG_SCHEMA = vol.Schema(
    {
        vol.Optional(CONF_STORAGE_PATH, default=_default_storage_path): vol.All(
            str, vol.Length(min=1, msg=f"empty {CONF_STORAGE_PATH}")
        ),
        vol.Optional(CONF_HOMEKIT_PIN, default=DEFAULT_HOMEKIT_PIN): vol.All(str, format_pincode),
        vol.Required(CONF_URL, msg="missing url"): _required_text("missing url"),
        vol.Required(CONF_USERNAME, msg="missing username"): vol.All(
            _required_text("missing username"),
            vol.Match(r"^[^:]*$", msg=f"{CONF_USERNAME} must not contain ':'"),
        ),
        vol.Required(CONF_PASSWORD, msg="missing password"): _required_text("missing password"),
    },
    extra=vol.REMOVE_EXTRA,
)


@dataclass(frozen=True, slots=True)
class BridgeConfig:
    """Validated bridge configuration."""

    storage_path: Path
    homekit_pin: str
    url: str
    username: str
    password: str

    @property
    def persist_file(self) -> Path:
        """Return the file HAP-python keeps pairing state in."""
        return self.storage_path / PERSIST_FILE_NAME


def parse_config(data: Any) -> BridgeConfig:
    """Validate decoded config data and build a BridgeConfig."""
    try:
        validated: dict[str, Any] = CONFIG_SCHEMA(data)
    except vol.Invalid as err:
        raise ConfigError(str(err)) from err

    return BridgeConfig(
        storage_path=Path(validated[CONF_STORAGE_PATH]).expanduser(),
        homekit_pin=validated[CONF_HOMEKIT_PIN],
        url=validated[CONF_URL],
        username=validated[CONF_USERNAME],
        password=validated[CONF_PASSWORD],
    )


def load_config(path: str | Path) -> BridgeConfig:
    """Read and validate a JSON configuration file."""
    config_path = Path(path)
    _LOGGER.debug("Loading configuration from %s", config_path)

    try:
        with config_path.open(encoding="utf-8") as handle:
            data = json.load(handle)
    except OSError as err:
        raise ConfigError(f"Cannot read config file {config_path}: {err}") from err
    except json.JSONDecodeError as err:
        raise ConfigError(f"Invalid JSON in config file {config_path}: {err}") from err

    return parse_config(data)
