"""Trusted network time.

``NtpTimeSource`` asks an NTP server for the offset between the local
clock and the server clock and returns the corrected current time.  The
blocking ``ntplib`` request runs in a worker thread so the event loop is
never blocked.

There is no retry: a failed request is reported once as
``Failure(NetworkTimeError)`` and the caller decides what to do.

Usage
-----
::

    import asyncio
    from chronomaster.ntp import NtpTimeSource

    result = asyncio.run(NtpTimeSource("time.google.com").fetch())
"""
from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timedelta, timezone
from typing import Protocol, runtime_checkable

import ntplib

from chronomaster.errors import NetworkTimeError
from chronomaster.result import Failure, Result, Success

logger = logging.getLogger(__name__)

DEFAULT_NTP_HOST = "pool.ntp.org"


@runtime_checkable
class TrustedTimeSource(Protocol):
    """Anything that can produce an absolute instant or fail."""

    async def fetch(self) -> Result[datetime]:
        """Return the trusted current time as an aware UTC ``datetime``."""
        ...


class NtpTimeSource:
    """Trusted time from an NTP server.

    Parameters
    ----------
    host:
        NTP server host name.
    timeout:
        Seconds to wait for the server's reply.
    version:
        NTP protocol version sent in the request.
    """

    def __init__(
        self,
        host: str = DEFAULT_NTP_HOST,
        timeout: float = 10.0,
        version: int = 3,
    ) -> None:
        self.host = host
        self.timeout = timeout
        self.version = version
        self._client = ntplib.NTPClient()

    def __repr__(self) -> str:
        return f"NtpTimeSource(host={self.host!r}, timeout={self.timeout!r})"

    def _request_offset(self) -> float:
        stats = self._client.request(self.host, version=self.version, timeout=self.timeout)
        return float(stats.offset)

    async def fetch(self) -> Result[datetime]:
        """Query the server once and return the corrected current time."""
        try:
            offset = await asyncio.to_thread(self._request_offset)
        except (ntplib.NTPException, OSError) as exc:
            logger.warning("NTP request to %s failed: %s", self.host, exc)
            return Failure(
                NetworkTimeError(
                    message=f"Could not fetch network time from {self.host!r}: {exc}",
                    cause=exc,
                    host=self.host,
                )
            )
        logger.debug("NTP offset from %s: %.6f s", self.host, offset)
        return Success(datetime.now(timezone.utc) + timedelta(seconds=offset))
