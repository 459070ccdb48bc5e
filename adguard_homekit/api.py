"""Async API client for the AdGuard Home control endpoints."""

from __future__ import annotations

import asyncio
from http import HTTPStatus
import logging
from typing import Any

import aiohttp
from aiohttp import hdrs

from .const import ATTR_PROTECTION_ENABLED, DNS_CONFIG_PATH, STATUS_PATH
from .models import AdGuardStatus, parse_status

_LOGGER = logging.getLogger(__name__)


class AdGuardError(Exception):
    """Base error for the AdGuard Home client."""


class AdGuardConnectionError(AdGuardError):
    """Raised when the remote endpoint cannot be reached."""


class AdGuardAuthError(AdGuardError):
    """Raised when AdGuard Home rejects the credentials."""


class AdGuardApiError(AdGuardError):
    """Raised when AdGuard Home answers with an unexpected status or body."""


class AdGuardApiClient:
    """Async client for the AdGuard Home status and DNS config endpoints.

    Every call opens an independent request, so one client can be shared by
    the poll loop and the HomeKit toggle handler.
    """

    def __init__(
        self,
        *,
        url: str,
        username: str,
        password: str,
        session: aiohttp.ClientSession | None = None,
    ) -> None:
        self._url = url.rstrip("/")
        self._headers = {hdrs.AUTHORIZATION: aiohttp.encode_basic_auth(username, password)}
        self._session = session
        self._owns_session = session is None

    @property
    def url(self) -> str:
        """Return the base url requests are sent to."""
        return self._url

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None:
            self._session = aiohttp.ClientSession()
        return self._session

    async def async_close(self) -> None:
        """Close the HTTP session when this client created it."""
        if self._owns_session and self._session is not None:
            await self._session.close()
            self._session = None

    async def _async_raw_request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        decode: bool = False,
    ) -> tuple[int, Any]:
        """Run a raw HTTP request and return status + decoded payload."""
        session = self._get_session()

        try:
            async with session.request(
                method,
                f"{self._url}{path}",
                headers=self._headers,
                json=json_body,
            ) as response:
                status = response.status
                if not decode or status != HTTPStatus.OK:
                    return status, None

                try:
                    payload = await response.json(content_type=None)
                except ValueError as err:
                    raise AdGuardApiError(f"AdGuard Home returned malformed JSON for {path}") from err

                return status, payload

        except (asyncio.TimeoutError, aiohttp.ClientError) as err:
            raise AdGuardConnectionError(f"Request to AdGuard Home failed: {err}") from err

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_body: dict[str, Any] | None = None,
        decode: bool = False,
    ) -> Any:
        """Run a request and validate the HTTP status."""
        _LOGGER.debug("%s %s%s", method, self._url, path)
        status, payload = await self._async_raw_request(
            method,
            path,
            json_body=json_body,
            decode=decode,
        )

        if status in (HTTPStatus.UNAUTHORIZED, HTTPStatus.FORBIDDEN):
            raise AdGuardAuthError(f"AdGuard Home rejected credentials for {path} (HTTP {status})")

        if status != HTTPStatus.OK:
            raise AdGuardApiError(f"Unexpected status code from {path}: {status}")

        return payload

    async def async_get_status(self) -> AdGuardStatus:
        """Fetch /control/status."""
        payload = await self._request("GET", STATUS_PATH, decode=True)
        try:
            return parse_status(payload)
        except ValueError as err:
            raise AdGuardApiError(f"Invalid status payload from {STATUS_PATH}: {err}") from err

    async def async_get_protection_enabled(self) -> bool:
        """Return whether DNS protection is currently enabled."""
        status = await self.async_get_status()
        return status.protection_enabled

    async def async_set_protection_enabled(self, enabled: bool) -> None:
        """Enable or disable DNS protection."""
        await self._request(
            "POST",
            DNS_CONFIG_PATH,
            json_body={ATTR_PROTECTION_ENABLED: bool(enabled)},
        )
