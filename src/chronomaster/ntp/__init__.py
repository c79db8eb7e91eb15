"""Trusted-time module.

Exports the ``TrustedTimeSource`` protocol and the ntplib-backed
``NtpTimeSource``.
"""
from __future__ import annotations

from chronomaster.ntp.client import DEFAULT_NTP_HOST, NtpTimeSource, TrustedTimeSource

__all__ = ["DEFAULT_NTP_HOST", "NtpTimeSource", "TrustedTimeSource"]
