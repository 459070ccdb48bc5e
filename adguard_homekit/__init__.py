"""The AdGuard Home HomeKit bridge."""
from __future__ import annotations

import logging

from pyhap.accessory_driver import AccessoryDriver

from .accessory import ProtectionSwitch
from .api import AdGuardApiClient, AdGuardError
from .config import BridgeConfig
from .const import ACCESSORY_NAME, HAP_PORT
from .coordinator import ProtectionCoordinator

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "async_setup",
    "create_driver",
    "register_switch",
]


def create_driver(config: BridgeConfig) -> AccessoryDriver:
    """Create the HAP driver that owns the event loop for the bridge.

    The driver creates its own loop and executor so that stopping it also
    stops the loop. The storage directory is created when missing; OSError
    from the filesystem or the driver propagates to the caller.
    """
    config.storage_path.mkdir(parents=True, exist_ok=True)

    return AccessoryDriver(
        port=HAP_PORT,
        persist_file=str(config.persist_file),
        pincode=config.homekit_pin.encode("utf-8"),
    )


async def async_setup(config: BridgeConfig) -> ProtectionCoordinator:
    """Create the API client and coordinator and fetch the initial state.

    Raises AdGuardError when AdGuard Home cannot be queried; the client is
    closed before the error propagates.
    """
    client = AdGuardApiClient(
        url=config.url,
        username=config.username,
        password=config.password,
    )
    coordinator = ProtectionCoordinator(client=client)

    try:
        enabled = await coordinator.async_first_refresh()
    except AdGuardError:
        await client.async_close()
        raise

    _LOGGER.info(
        "Connected to AdGuard Home, protection enabled: %s",
        str(enabled).lower(),
    )
    return coordinator


def register_switch(
    driver: AccessoryDriver,
    coordinator: ProtectionCoordinator,
) -> ProtectionSwitch:
    """Create the protection switch and register it on the driver."""
    switch = ProtectionSwitch(driver, ACCESSORY_NAME, coordinator=coordinator)
    driver.add_accessory(accessory=switch)
    _LOGGER.debug("Registered %s switch, on=%s", ACCESSORY_NAME, switch.is_on)
    return switch
