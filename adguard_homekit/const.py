"""Constants for the AdGuard Home HomeKit bridge."""

from __future__ import annotations

STATUS_PATH = "/control/status"
DNS_CONFIG_PATH = "/control/dns_config"

ATTR_PROTECTION_ENABLED = "protection_enabled"
ATTR_VERSION = "version"
ATTR_RUNNING = "running"

CONF_STORAGE_PATH = "storage_path"
CONF_HOMEKIT_PIN = "homekit_pin"
CONF_URL = "url"
CONF_USERNAME = "username"
CONF_PASSWORD = "password"

DEFAULT_CONFIG_FILE = "config.json"
DEFAULT_STORAGE_DIR = ".homecontrol"
DEFAULT_HOMEKIT_PIN = "00102003"
PERSIST_FILE_NAME = "accessory.state"

# Fixed poll period for the remote protection flag.
DEFAULT_SCAN_INTERVAL = 15

ACCESSORY_NAME = "AdGuard Home"
HAP_PORT = 51826

ENV_HAP_DEBUG = "HAP_DEBUG"
