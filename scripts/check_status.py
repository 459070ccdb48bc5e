#!/usr/bin/env python3
"""Helper to query an AdGuard Home instance locally using .env.

Usage:
  python scripts/check_status.py [--set on|off]

It will load `.env` from the repo root (if present), print the status
reported by /control/status and optionally change the protection flag.
"""
from __future__ import annotations

import argparse
import asyncio
import os
import pathlib
import sys

from adguard_homekit.api import AdGuardApiClient, AdGuardError

ENV_FILE = pathlib.Path(__file__).resolve().parents[1] / ".env"
ENV_KEYS = ("ADGUARD_URL", "ADGUARD_USERNAME", "ADGUARD_PASSWORD")


def read_credentials() -> tuple[str | None, ...]:
    """Return the ADGUARD_* values, preferring the environment over .env."""
    values = dict.fromkeys(ENV_KEYS)
    if ENV_FILE.exists():
        for line in ENV_FILE.read_text().splitlines():
            key, sep, val = line.partition("=")
            if sep and key.strip() in values:
                values[key.strip()] = val.strip().strip("\"'")
    return tuple(os.environ.get(key) or values[key] for key in ENV_KEYS)


async def main(set_to: str | None) -> int:
    url, username, password = read_credentials()

    if not url or not username or not password:
        print("ADGUARD_URL, ADGUARD_USERNAME and ADGUARD_PASSWORD must be set in .env or environment.", file=sys.stderr)
        return 2

    client = AdGuardApiClient(url=url, username=username, password=password)
    try:
        if set_to is not None:
            print(f"Setting protection enabled to {set_to}...")
            await client.async_set_protection_enabled(set_to == 'on')

        status = await client.async_get_status()
        print(f"version:            {status.version or 'unknown'}")
        print(f"running:            {status.running}")
        print(f"protection enabled: {str(status.protection_enabled).lower()}")
    except AdGuardError as exc:
        print("\nRequest failed:", exc, file=sys.stderr)
        return 1
    finally:
        await client.async_close()
    return 0


if __name__ == '__main__':
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--set', choices=('on', 'off'), dest='set_to')
    raise SystemExit(asyncio.run(main(parser.parse_args().set_to)))
