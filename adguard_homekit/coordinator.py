"""Coordinator keeping the HomeKit switch in sync with AdGuard Home."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import timedelta
import logging

from .api import AdGuardApiClient, AdGuardError
from .const import DEFAULT_SCAN_INTERVAL

_LOGGER = logging.getLogger(__name__)


class ProtectionCoordinator:
    """Coordinates reading and writing the AdGuard Home protection flag.

    ``data`` holds the last protection state observed on the remote service.
    Listeners are called after every successful poll so the accessory can
    mirror the value; a failed poll leaves both untouched.
    """

    def __init__(
        self,
        *,
        client: AdGuardApiClient,
        update_interval: timedelta = timedelta(seconds=DEFAULT_SCAN_INTERVAL),
    ) -> None:
        self.client = client
        self.update_interval = update_interval
        self.data: bool | None = None
        self.last_update_success = True
        self._listeners: list[Callable[[], None]] = []

    def async_add_listener(self, update_callback: Callable[[], None]) -> Callable[[], None]:
        """Listen for data updates, returning a function that removes the listener."""
        self._listeners.append(update_callback)

        def remove_listener() -> None:
            if update_callback in self._listeners:
                self._listeners.remove(update_callback)

        return remove_listener

    def async_update_listeners(self) -> None:
        """Notify all listeners of the current data."""
        for update_callback in list(self._listeners):
            update_callback()

    async def async_first_refresh(self) -> bool:
        """Fetch the initial state; errors propagate to the caller."""
        self.data = await self.client.async_get_protection_enabled()
        self.last_update_success = True
        return self.data

    async def async_refresh(self) -> None:
        """Run one poll cycle and push the observed state to listeners."""
        try:
            enabled = await self.client.async_get_protection_enabled()
        except AdGuardError as err:
            self.last_update_success = False
            _LOGGER.error("Error checking protection enabled: %s", err)
            return

        if not self.last_update_success:
            _LOGGER.info("Fetching AdGuard Home status recovered")
        self.last_update_success = True

        if enabled != self.data:
            _LOGGER.debug("Protection enabled changed remotely: %s", enabled)
        self.data = enabled
        self.async_update_listeners()

    async def async_run(self, stop_event: asyncio.Event) -> None:
        """Poll every ``update_interval`` until ``stop_event`` is set."""
        interval = self.update_interval.total_seconds()
        _LOGGER.debug("Polling AdGuard Home every %s", self.update_interval)

        while not stop_event.is_set():
            try:
                await asyncio.wait_for(stop_event.wait(), timeout=interval)
            except asyncio.TimeoutError:
                await self.async_refresh()

        _LOGGER.debug("Stopped polling AdGuard Home")

    async def async_set_protection_enabled(self, enabled: bool) -> None:
        """Push a HomeKit toggle to AdGuard Home.

        Failures are logged only; the switch keeps the value the user chose
        until the next successful poll.
        """
        _LOGGER.info("Setting protection enabled: %s", str(enabled).lower())
        try:
            await self.client.async_set_protection_enabled(enabled)
        except AdGuardError as err:
            _LOGGER.error("Error setting protection enabled to %s: %s", str(enabled).lower(), err)
