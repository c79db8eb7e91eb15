"""Immutable configuration for a ``ChronoMaster`` instance.

A ``ChronoConfig`` bundles the default input zone, the default output
zone, the locale and the format registry.  It is built once and passed
by reference; changing a setting means building a new config with
``dataclasses.replace``.

Configuration can also be loaded from a YAML document::

    input_zone: UTC
    output_zone: Asia/Kolkata
    locale: en_GB
    custom_parsers:
      - dd.MM.yyyy
      - yyyyMMdd'T'HHmm

Invalid zones or locales in the document are logged as warnings and the
defaults are kept, the same way ``ChronoMaster.initialize`` treats them.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Any

import yaml
from babel import UnknownLocaleError

from chronomaster.errors import ConfigurationError
from chronomaster.pattern.names import DEFAULT_LOCALE, babel_locale
from chronomaster.registry import BUILTIN_PATTERNS, FormatRegistry
from chronomaster.result import Failure
from chronomaster.zones import UTC, resolve_zone, system_zone, zone_id

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChronoConfig:
    """Default zones, locale and registry shared by parse/format calls.

    Parameters
    ----------
    input_zone:
        Zone assumed for input strings that carry no zone or offset.
    output_zone:
        Zone used for rendering when a call does not override it.
    locale:
        CLDR locale identifier for text fields and predefined styles.
    registry:
        Candidate patterns for the parser's registry scan.
    """

    input_zone: tzinfo = UTC
    output_zone: tzinfo = field(default_factory=system_zone)
    locale: str = DEFAULT_LOCALE
    registry: FormatRegistry = field(default_factory=FormatRegistry, compare=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ChronoConfig":
        """Build a config from a parsed YAML/JSON mapping.

        Unknown keys are ignored with a warning.
        """
        known = {"input_zone", "output_zone", "locale", "custom_parsers"}
        for key in sorted(set(data) - known):
            logger.warning("Ignoring unknown configuration key %r", key)

        defaults = cls()
        locale = _locale_or_default(data.get("locale"), defaults.locale)
        registry = FormatRegistry(locale=locale)
        registry.register(data.get("custom_parsers") or [])

        return cls(
            input_zone=_zone_or_default(data.get("input_zone"), defaults.input_zone),
            output_zone=_zone_or_default(data.get("output_zone"), defaults.output_zone),
            locale=locale,
            registry=registry,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the config as a plain mapping ``from_mapping`` accepts."""
        return {
            "input_zone": zone_id(self.input_zone),
            "output_zone": zone_id(self.output_zone),
            "locale": self.locale,
            "custom_parsers": [
                spec for spec in self.registry.specs() if spec not in BUILTIN_PATTERNS
            ],
        }


def _zone_or_default(value: object, default: tzinfo) -> tzinfo:
    if value is None:
        return default
    resolved = resolve_zone(str(value))
    if isinstance(resolved, Failure):
        logger.warning("%s Keeping %s.", resolved.message, zone_id(default))
        return default
    return resolved.value


def _locale_or_default(value: object, default: str) -> str:
    if value is None:
        return default
    try:
        babel_locale(str(value))
    except (UnknownLocaleError, ValueError) as exc:
        logger.warning("Invalid locale %r: %s. Keeping %s.", value, exc, default)
        return default
    return str(value)


def load_config(path: str | Path) -> ChronoConfig:
    """Load a ``ChronoConfig`` from a YAML file.

    An empty file yields the default configuration.

    Raises
    ------
    OSError
        If the file cannot be read.
    yaml.YAMLError
        If the file is not valid YAML.
    ConfigurationError
        If the document is not a mapping.
    """
    text = Path(path).read_text(encoding="utf-8")
    data = yaml.safe_load(text)
    if data is None:
        return ChronoConfig()
    if not isinstance(data, Mapping):
        raise ConfigurationError(
            message=f"Configuration file {str(path)!r} must contain a mapping, "
            f"got {type(data).__name__}."
        )
    return ChronoConfig.from_mapping(data)
