"""Tests for AdGuard Home status parsing."""

from __future__ import annotations

import pytest

from adguard_homekit.models import AdGuardStatus, parse_status


def test_parse_status_full_payload() -> None:
    """A real status payload should map flag, version and running."""
    payload = {
        "dns_addresses": ["192.168.1.2"],
        "dns_port": 53,
        "http_port": 80,
        "protection_enabled": False,
        "dhcp_available": True,
        "running": True,
        "version": "v0.107.43",
        "language": "en",
    }

    assert parse_status(payload) == AdGuardStatus(
        protection_enabled=False,
        version="v0.107.43",
        running=True,
    )


def test_parse_status_minimal_payload() -> None:
    """Only the protection flag is required."""
    status = parse_status({"protection_enabled": True})

    assert status.protection_enabled is True
    assert status.version is None
    assert status.running is None


@pytest.mark.parametrize(
    "payload",
    [{"protection_enabled": 0}, {"protection_enabled": "false"}, {"running": True}, "ok", 42],
)
def test_parse_status_rejects_non_boolean_flag(payload) -> None:
    """Anything but a JSON boolean flag is a protocol error."""
    with pytest.raises(ValueError):
        parse_status(payload)
