"""
Band compatibility matching.

Decides which of a carrier's bands a device supports. Band names from the
two sides rarely agree exactly ("LTE 800" vs "Band 20" vs "B20"), so the
match is a permissive substring test in both directions, widened with the
aliases from the band equivalence table. Expect the odd false positive.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Sequence

from data.band_equivalence import get_equivalents
from utils.compat.bands import parse_bands
from utils.compat.devices import Device
from utils.compat.operators import Operator

STATUS_FULL = 'full'
STATUS_PARTIAL = 'partial'
STATUS_INCOMPATIBLE = 'incompatible'
STATUS_UNKNOWN = 'unknown'

STATUS_LABELS = {
    STATUS_FULL: '100% Match',
    STATUS_PARTIAL: 'Partial',
    STATUS_INCOMPATIBLE: 'Incompatible',
    STATUS_UNKNOWN: 'Unknown',
}


@dataclass
class CompatibilityResult:
    """Operator bands split into the ones a device supports and the rest."""
    supported: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)

    @property
    def status(self) -> str:
        if not self.supported and not self.missing:
            return STATUS_UNKNOWN
        if not self.missing:
            return STATUS_FULL
        if self.supported:
            return STATUS_PARTIAL
        return STATUS_INCOMPATIBLE

    @property
    def label(self) -> str:
        return STATUS_LABELS[self.status]

    @property
    def services(self) -> dict[str, bool]:
        """Services the supported bands are expected to carry."""
        return {
            'voice': True,
            'sms': True,
            'mobile_data': any('LTE' in b or 'UMTS' in b for b in self.supported),
            'high_speed': any('LTE' in b or '5G' in b for b in self.supported),
        }

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'supported': list(self.supported),
            'missing': list(self.missing),
            'status': self.status,
            'label': self.label,
            'services': self.services,
        }


def band_matches(device_bands: Sequence[str], operator_band: str) -> bool:
    """Check whether any device band covers one operator band."""
    ob = operator_band.lower()
    aliases = [a.lower() for a in get_equivalents(operator_band)]

    for device_band in device_bands:
        db = device_band.lower()
        if not db:
            continue
        if db in ob or ob in db:
            return True
        if any(alias in db for alias in aliases):
            return True
    return False


def check_compatibility(
    device_bands: Sequence[str],
    operator_bands: Iterable[str],
) -> CompatibilityResult:
    """
    Classify each operator band as supported or missing.

    Every operator band lands in exactly one of the two lists, in the order
    the operator lists them.
    """
    result = CompatibilityResult()
    for operator_band in operator_bands:
        if band_matches(device_bands, operator_band):
            result.supported.append(operator_band)
        else:
            result.missing.append(operator_band)
    return result


def check_device_operator(device: Device, operator: Operator) -> CompatibilityResult:
    """Match a catalog device against a carrier's published bands."""
    return check_compatibility(device.band_tokens, parse_bands(operator.bands))


def rank_operators(device: Device, operators: Iterable[Operator]) -> list[tuple[Operator, CompatibilityResult]]:
    """Compatibility of one device with each operator, in input order."""
    device_bands = device.band_tokens
    return [
        (op, check_compatibility(device_bands, parse_bands(op.bands)))
        for op in operators
    ]
