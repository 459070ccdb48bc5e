"""Domain models for the AdGuard Home control API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .const import ATTR_PROTECTION_ENABLED, ATTR_RUNNING, ATTR_VERSION


@dataclass(frozen=True, slots=True)
class AdGuardStatus:
    """Subset of the /control/status payload used by the bridge."""

    protection_enabled: bool
    version: str | None = None
    running: bool | None = None


def parse_status(payload: Any) -> AdGuardStatus:
    """Map a decoded /control/status payload into an AdGuardStatus.

    Raises ValueError when the payload is not an object or does not carry a
    boolean protection flag.
    """
    if not isinstance(payload, dict):
        raise ValueError(f"expected a JSON object, got {type(payload).__name__}")

    enabled = payload.get(ATTR_PROTECTION_ENABLED)
    # bool is checked exactly so 0/1 are not accepted as flags
    if type(enabled) is not bool:
        raise ValueError(f"{ATTR_PROTECTION_ENABLED} is not a boolean: {enabled!r}")

    version = payload.get(ATTR_VERSION)
    running = payload.get(ATTR_RUNNING)
    return AdGuardStatus(
        protection_enabled=enabled,
        version=str(version) if version else None,
        running=running if isinstance(running, bool) else None,
    )
