"""HomeKit switch accessory mirroring AdGuard Home protection."""

from __future__ import annotations

import asyncio
import logging

from pyhap.accessory import Accessory
from pyhap.accessory_driver import AccessoryDriver
from pyhap.const import CATEGORY_SWITCH

from .const import ACCESSORY_NAME
from .coordinator import ProtectionCoordinator

_LOGGER = logging.getLogger(__name__)


class ProtectionSwitch(Accessory):
    """Single HomeKit switch bound to the AdGuard Home protection flag."""

    category = CATEGORY_SWITCH

    def __init__(
        self,
        driver: AccessoryDriver,
        display_name: str = ACCESSORY_NAME,
        *,
        coordinator: ProtectionCoordinator,
    ) -> None:
        """Initialize the switch with the coordinator's first observed state."""
        super().__init__(driver, display_name)
        self.coordinator = coordinator
        self._poll_task: asyncio.Future[None] | None = None
        self.set_info_service(manufacturer="AdGuard", model=ACCESSORY_NAME)

        serv_switch = self.add_preload_service("Switch")
        self.char_on = serv_switch.configure_char(
            "On",
            value=bool(coordinator.data),
            setter_callback=self._set_on,
        )
        self._remove_listener = coordinator.async_add_listener(self._handle_coordinator_update)

    @property
    def is_on(self) -> bool:
        """Return the mirrored protection state."""
        return bool(self.char_on.value)

    def _set_on(self, value: bool) -> None:
        """Handle a toggle coming from a HomeKit controller."""
        _LOGGER.debug("HomeKit set %s to %s", self.display_name, value)
        self.driver.add_job(self.coordinator.async_set_protection_enabled, bool(value))

    def _handle_coordinator_update(self) -> None:
        """Mirror a newly polled remote state onto the characteristic."""
        if self.coordinator.data is None:
            return
        self.char_on.set_value(self.coordinator.data)

    async def run(self) -> None:
        """Poll AdGuard Home until the driver stops."""
        self._poll_task = asyncio.ensure_future(
            self.coordinator.async_run(self.driver.aio_stop_event)
        )
        await self._poll_task

    async def stop(self) -> None:
        """Wait for the poll loop to exit, then release the HTTP session.

        The driver sets its stop event before calling this, so the loop ends
        after any poll already in flight.
        """
        self._remove_listener()
        if self._poll_task is not None:
            await self._poll_task
        await self.coordinator.client.async_close()
        await super().stop()
