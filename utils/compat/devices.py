"""
Device catalog records and search.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import config
from utils.compat.bands import device_band_tokens, parse_specifications

_WHITESPACE_RE = re.compile(r'\s+')

# Capability filters over the lowercase specification text
CAPABILITY_FILTERS = ('all', 'esim', 'esim_only', 'satellite')


def normalize_name(name: str) -> str:
    """Lowercase a device name and remove all whitespace."""
    return _WHITESPACE_RE.sub('', name.lower())


@dataclass(frozen=True)
class Device:
    """A device record from the catalog."""
    id: str
    brand_id: str
    name: str
    specifications: str = ''
    normalized_name: str = ''
    curated: bool = False  # From the hand-curated local catalog

    @classmethod
    def from_record(cls, record: dict[str, Any], curated: bool = False) -> Device:
        """Build a device from a raw catalog record."""
        name = str(record.get('name') or '')
        specs = record.get('specifications') or ''
        if not isinstance(specs, str):
            # Some mirrors ship the specification object already decoded
            specs = _dump_specs(specs)
        return cls(
            id=str(record.get('id') or ''),
            brand_id=str(record.get('brand_id') or ''),
            name=name,
            specifications=specs,
            normalized_name=record.get('normalizedName') or normalize_name(name),
            curated=curated,
        )

    @property
    def specs(self) -> dict[str, str]:
        """Parsed specification mapping (empty if unparseable)."""
        return parse_specifications(self.specifications)

    @property
    def band_tokens(self) -> list[str]:
        """All band tokens the device supports."""
        return device_band_tokens(self.specifications)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'id': self.id,
            'brand_id': self.brand_id,
            'name': self.name,
            'curated': self.curated,
            'specs': self.specs,
            'sim': sim_info(self),
        }


def _dump_specs(specs: Any) -> str:
    try:
        return json.dumps(specs)
    except (TypeError, ValueError):
        return ''


def sim_info(device: Device) -> dict[str, bool]:
    """SIM capabilities advertised in a device's specifications."""
    specs = device.specifications.lower()
    return {
        'has_esim': 'esim' in specs or 'embedded-sim' in specs,
        'is_esim_only': 'esim only' in specs,
    }


def sim_label(device: Device) -> str:
    """Human readable SIM type."""
    info = sim_info(device)
    if info['is_esim_only']:
        return 'eSIM Only'
    if info['has_esim']:
        return 'eSIM Ready'
    return 'Physical SIM'


def _matches_capability(device: Device, capability: str) -> bool:
    specs = device.specifications.lower()
    if capability == 'esim':
        return ('esim' in specs or 'embedded-sim' in specs) and 'esim only' not in specs
    if capability == 'esim_only':
        return 'esim only' in specs
    if capability == 'satellite':
        return 'satellite' in specs
    return True


def search_devices(
    devices: Iterable[Device],
    query: str = '',
    brand: str = '',
    capability: str = 'all',
) -> list[Device]:
    """
    Search the device catalog.

    Args:
        devices: Catalog to search
        query: Free text, matched against names with whitespace removed
        brand: Only devices whose name starts with this brand
        capability: One of CAPABILITY_FILTERS

    Returns:
        Matching devices, curated ones first. Empty when no filter is active
        and the query is shorter than DEVICE_SEARCH_MIN_CHARS.

    Raises:
        ValueError: Unknown capability filter
    """
    if capability not in CAPABILITY_FILTERS:
        raise ValueError(f'Unknown capability filter: {capability}')

    query = query or ''
    if capability == 'all' and not brand and len(query) < config.DEVICE_SEARCH_MIN_CHARS:
        return []

    matches: Iterable[Device] = devices
    if brand:
        prefix = brand.lower()
        matches = [d for d in matches if d.name.lower().startswith(prefix)]
    if capability != 'all':
        matches = [d for d in matches if _matches_capability(d, capability)]
    if query:
        needle = normalize_name(query)
        matches = [d for d in matches if needle in (d.normalized_name or normalize_name(d.name))]

    limit = config.DEVICE_FILTERED_LIMIT if (capability != 'all' or brand) else config.DEVICE_SEARCH_LIMIT

    # sorted() is stable, so catalog order is kept inside each group
    return sorted(matches, key=lambda d: not d.curated)[:limit]


def get_brands(devices: Iterable[Device]) -> list[str]:
    """Sorted unique brands, taken as the first word of each device name."""
    return sorted({d.name.split(' ')[0] for d in devices if d.name})


def find_device(devices: Sequence[Device], device_id: str) -> Device | None:
    """Find a device by id."""
    for device in devices:
        if device.id == device_id:
            return device
    return None
