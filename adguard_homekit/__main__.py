"""Command line entry point for the AdGuard Home HomeKit bridge."""
from __future__ import annotations

import argparse
from collections.abc import Sequence
import logging
import os
import signal

from pyhap.accessory_driver import AccessoryDriver

from . import async_setup, create_driver, register_switch
from .api import AdGuardError
from .config import ConfigError, load_config
from .const import DEFAULT_CONFIG_FILE, ENV_HAP_DEBUG

_LOGGER = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="adguard-homekit",
        description="Expose AdGuard Home protection as a HomeKit switch.",
    )
    parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_FILE,
        help="config file (default: %(default)s)",
    )
    return parser.parse_args(argv)


def _setup_logging() -> None:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
    if os.environ.get(ENV_HAP_DEBUG):
        logging.getLogger("pyhap").setLevel(logging.DEBUG)


def _close_driver(driver: AccessoryDriver) -> None:
    """Release a driver that was never started."""
    if driver.executor is not None:
        driver.executor.shutdown()
    driver.loop.close()


def main(argv: Sequence[str] | None = None) -> int:
    """Run the bridge until the HAP driver is stopped."""
    args = _parse_args(argv)
    _setup_logging()

    try:
        config = load_config(args.config)
    except ConfigError as err:
        _LOGGER.critical("%s", err)
        return 1

    try:
        driver = create_driver(config)
    except (OSError, ValueError) as err:
        _LOGGER.critical("Unable to start HomeKit transport: %s", err)
        return 1

    try:
        coordinator = driver.loop.run_until_complete(async_setup(config))
    except AdGuardError as err:
        _LOGGER.critical("Unable to connect to AdGuard Home: %s", err)
        _close_driver(driver)
        return 1

    register_switch(driver, coordinator)
    signal.signal(signal.SIGTERM, driver.signal_handler)

    _LOGGER.info("Starting transport...")
    # Returns once the driver has stopped the accessory and closed its loop
    driver.start()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
