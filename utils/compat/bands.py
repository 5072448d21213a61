"""
Band string normalization.

Turns the free-text band lists published by carriers and device spec sheets
into ordered lists of band tokens.
"""

from __future__ import annotations

import json
import re
from typing import Any

from utils.logging import get_logger

logger = get_logger('checkphone.bands')

BAND_SEPARATOR_RE = re.compile(r'[/,;]+')

PLACEHOLDER_BAND = 'Unknown'

# Specification keys that hold radio information, in display order
DEVICE_BAND_KEYS = ('2G bands', '3G bands', '4G bands', '5G bands', 'Technology')


def parse_bands(raw: str | None) -> list[str]:
    """
    Split a raw band string into band tokens.

    Runs of '/', ',' and ';' act as one separator. Tokens are trimmed and
    empty or placeholder tokens are dropped. Input order is kept.
    """
    if not raw:
        return []
    tokens = (part.strip() for part in BAND_SEPARATOR_RE.split(str(raw)))
    return [t for t in tokens if t and t != PLACEHOLDER_BAND]


def parse_specifications(payload: Any) -> dict[str, str]:
    """
    Parse a device specification payload into a key/value mapping.

    Accepts the JSON-encoded string found in device catalogs or an already
    decoded mapping. Anything unparseable yields an empty mapping.
    """
    if isinstance(payload, dict):
        data = payload
    elif not payload:
        return {}
    else:
        try:
            data = json.loads(payload)
        except (TypeError, ValueError) as e:
            logger.debug(f"Unparseable specification payload: {e}")
            return {}

    if not isinstance(data, dict):
        logger.debug(f"Specification payload is {type(data).__name__}, not an object")
        return {}

    return {str(k): '' if v is None else str(v) for k, v in data.items()}


def combine_device_bands(specs: dict[str, str]) -> str:
    """Join every radio-related specification field into one band string."""
    return ' '.join(specs.get(key) or '' for key in DEVICE_BAND_KEYS)


def device_band_tokens(specifications: Any) -> list[str]:
    """Get the band tokens a device supports from its specification payload."""
    return parse_bands(combine_device_bands(parse_specifications(specifications)))
