"""
IMEI validation and device identification.

Resolves the TAC (first 8 digits of an IMEI) to a catalog device:

1. Curated TAC table -> device id -> catalog lookup
2. Bulk TAC database -> generic "<brand> <model>" name, matched to the
   catalog by name containment, then by token overlap
3. Unknown TAC -> IMEI checksum status

Nothing here raises for malformed input; every path returns a
DeviceResolution.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Mapping, Sequence

from utils.compat.devices import Device, find_device
from utils.logging import get_logger

logger = get_logger('checkphone.imei')

IMEI_LENGTH = 15
TAC_LENGTH = 8

# Too common in generic names to tell models apart
IGNORED_NAME_TOKENS = frozenset({'apple', 'samsung', 'google'})
MIN_TOKEN_LENGTH = 3

_NON_DIGIT_RE = re.compile(r'\D')
_NON_WORD_RE = re.compile(r'[^a-z0-9\s]')


class ResolutionStatus(Enum):
    """Outcome of resolving an IMEI/TAC to a device."""
    EXACT = "exact"                        # Curated TAC table hit
    DETECTED = "detected"                  # Bulk name matched to a catalog device
    RECOGNIZED = "recognized"              # Bulk name known, no catalog device
    VALID_UNKNOWN = "valid_unknown"        # Unknown TAC, checksum OK
    INVALID_CHECKSUM = "invalid_checksum"  # Unknown TAC, checksum failed
    INCOMPLETE = "incomplete"              # Unknown TAC, fewer than 15 digits


@dataclass(frozen=True)
class DeviceResolution:
    """Result of a device lookup."""
    status: ResolutionStatus
    tac: str
    device: Device | None = None
    generic_name: str | None = None

    @property
    def found(self) -> bool:
        return self.device is not None

    @property
    def message(self) -> str:
        """User-facing description of the outcome."""
        if self.status is ResolutionStatus.EXACT:
            return ''
        if self.status is ResolutionStatus.DETECTED:
            return f'Detected: {self.generic_name}'
        if self.status is ResolutionStatus.RECOGNIZED:
            return f'Recognized: {self.generic_name}. Specs not found in current database.'
        if self.status is ResolutionStatus.VALID_UNKNOWN:
            return 'Valid IMEI, but device model not in our database.'
        if self.status is ResolutionStatus.INVALID_CHECKSUM:
            return 'Invalid IMEI checksum. Please check the digits.'
        return 'Device not recognized. Enter full IMEI for verification.'

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'status': self.status.value,
            'tac': self.tac,
            'device': self.device.to_dict() if self.device else None,
            'generic_name': self.generic_name,
            'message': self.message,
        }


def clean_imei(raw: str | None) -> str:
    """Strip everything except digits."""
    return _NON_DIGIT_RE.sub('', raw or '')


def validate_imei(raw: str | None) -> bool:
    """
    Validate an IMEI with the Luhn checksum.

    Non-digits are ignored; exactly 15 digits must remain.
    """
    digits = clean_imei(raw)
    if len(digits) != IMEI_LENGTH:
        return False

    total = 0
    for i, ch in enumerate(digits):
        n = int(ch)
        if i % 2 == 1:
            n *= 2
            if n > 9:
                n -= 9
        total += n
    return total % 10 == 0


def extract_tac(raw: str | None) -> str:
    """First 8 digits of an IMEI (shorter if fewer digits were given)."""
    return clean_imei(raw)[:TAC_LENGTH]


def name_tokens(generic_name: str) -> list[str]:
    """Discriminating lowercase tokens of a generic device name."""
    cleaned = _NON_WORD_RE.sub(' ', generic_name.lower())
    return [
        w for w in cleaned.split()
        if len(w) >= MIN_TOKEN_LENGTH and w not in IGNORED_NAME_TOKENS
    ]


def match_generic_name(generic_name: str, devices: Sequence[Device]) -> Device | None:
    """
    Find the catalog device a generic TAC database name refers to.

    Strict pass: equal names, or either name containing the other
    (case-insensitive). Token pass: among devices whose name contains the
    brand (first word of the generic name), pick the one containing the
    most name tokens. Ties go to the device listed first.
    """
    gn = generic_name.lower().strip()
    if not gn:
        return None

    for device in devices:
        name = device.name.lower()
        if name and (name == gn or name in gn or gn in name):
            return device

    tokens = name_tokens(gn)
    if not tokens:
        return None

    brand = gn.split()[0]
    candidates = []
    for device in devices:
        name = device.name.lower()
        if brand not in name:
            continue
        score = sum(1 for t in tokens if t in name)
        if score > 0:
            candidates.append((score, device))

    if not candidates:
        return None

    # sort is stable: equal scores keep catalog order
    candidates.sort(key=lambda c: c[0], reverse=True)
    best_score, best = candidates[0]
    logger.debug(
        f"Token match for '{generic_name}': {best.name} "
        f"(score {best_score}, {len(candidates)} candidates)"
    )
    return best


def resolve_device(
    tac: str,
    curated_index: Mapping[str, str],
    bulk_index: Mapping[str, str],
    devices: Sequence[Device],
    imei: str | None = None,
) -> DeviceResolution:
    """
    Resolve a TAC to a catalog device.

    Args:
        tac: 8-digit Type Allocation Code
        curated_index: TAC -> curated device id
        bulk_index: TAC -> generic "<brand> <model>" name
        devices: Device catalog currently loaded
        imei: Full input, used for checksum reporting when the TAC is unknown

    Returns:
        DeviceResolution describing the outcome
    """
    device_id = curated_index.get(tac)
    if device_id:
        device = find_device(devices, device_id)
        if device:
            return DeviceResolution(ResolutionStatus.EXACT, tac, device=device)
        logger.debug(f"Curated TAC {tac} -> {device_id} not in loaded catalog")

    generic_name = bulk_index.get(tac)
    if generic_name:
        device = match_generic_name(generic_name, devices)
        if device:
            return DeviceResolution(ResolutionStatus.DETECTED, tac, device=device, generic_name=generic_name)
        return DeviceResolution(ResolutionStatus.RECOGNIZED, tac, generic_name=generic_name)

    digits = clean_imei(imei) if imei is not None else tac
    if len(digits) >= IMEI_LENGTH:
        if validate_imei(digits):
            return DeviceResolution(ResolutionStatus.VALID_UNKNOWN, tac)
        return DeviceResolution(ResolutionStatus.INVALID_CHECKSUM, tac)
    return DeviceResolution(ResolutionStatus.INCOMPLETE, tac)


def resolve_imei(
    raw: str | None,
    curated_index: Mapping[str, str],
    bulk_index: Mapping[str, str],
    devices: Sequence[Device],
) -> DeviceResolution:
    """Resolve raw user input (IMEI or partial IMEI) to a device."""
    digits = clean_imei(raw)
    tac = digits[:TAC_LENGTH]
    if len(tac) < TAC_LENGTH:
        return DeviceResolution(ResolutionStatus.INCOMPLETE, tac)
    return resolve_device(tac, curated_index, bulk_index, devices, imei=digits)
