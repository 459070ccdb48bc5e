"""Test setup of the AdGuard Home HomeKit bridge."""
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

from pyhap.loader import get_loader
import pytest

from adguard_homekit import async_setup, create_driver, register_switch
from adguard_homekit.accessory import ProtectionSwitch
from adguard_homekit.api import AdGuardApiError
from adguard_homekit.config import BridgeConfig
from adguard_homekit.coordinator import ProtectionCoordinator


@pytest.fixture
def bridge_config(tmp_path):
    """Validated bridge configuration."""
    return BridgeConfig(
        storage_path=tmp_path / "homecontrol",
        homekit_pin="001-02-003",
        url="http://x",
        username="u",
        password="p",
    )


@pytest.fixture
def mock_api_client():
    """Mock API client."""
    with patch("adguard_homekit.AdGuardApiClient") as mock_client:
        client = mock_client.return_value
        client.async_get_protection_enabled = AsyncMock(return_value=True)
        client.async_close = AsyncMock()
        yield mock_client


@pytest.mark.asyncio
async def test_setup(bridge_config, mock_api_client, caplog):
    """Test setup fetches the initial state and logs it."""
    caplog.set_level("INFO")

    coordinator = await async_setup(bridge_config)

    mock_api_client.assert_called_once_with(url="http://x", username="u", password="p")
    assert coordinator.data is True
    assert "protection enabled: true" in caplog.text
    mock_api_client.return_value.async_close.assert_not_awaited()


@pytest.mark.asyncio
async def test_setup_failure_closes_client(bridge_config, mock_api_client):
    """Test a failed first refresh closes the client and propagates."""
    client = mock_api_client.return_value
    client.async_get_protection_enabled.side_effect = AdGuardApiError("HTTP 500")

    with pytest.raises(AdGuardApiError):
        await async_setup(bridge_config)

    client.async_close.assert_awaited_once()


def test_create_driver(bridge_config):
    """Test the driver owns its loop and persists under the storage path."""
    with patch("adguard_homekit.AccessoryDriver") as mock_driver_cls:
        result = create_driver(bridge_config)

    assert result is mock_driver_cls.return_value
    assert Path(bridge_config.storage_path).is_dir()
    mock_driver_cls.assert_called_once_with(
        port=51826,
        persist_file=str(bridge_config.storage_path / "accessory.state"),
        pincode=b"001-02-003",
    )


def test_register_switch():
    """Test the switch is registered with the coordinator's state."""
    coordinator = ProtectionCoordinator(client=MagicMock())
    coordinator.data = True
    driver = MagicMock()
    driver.loader = get_loader()

    switch = register_switch(driver, coordinator)

    assert isinstance(switch, ProtectionSwitch)
    driver.add_accessory.assert_called_once_with(accessory=switch)
    assert switch.is_on is True
