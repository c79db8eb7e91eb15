"""CLI package.

The ``cli`` sub-package contains the Click application and its
commands.  Commands go through ``ChronoMaster`` rather than calling the
parser or formatter directly.
"""
from __future__ import annotations
