"""
Band equivalence table.

Maps legacy carrier band names ("<TECH> <FREQUENCY>") to the aliases device
spec sheets use for the same spectrum: 3GPP band numbers in long and short
form, or a bare frequency.
"""

from __future__ import annotations

BAND_EQUIVALENTS: dict[str, tuple[str, ...]] = {
    # 2G
    'GSM 850': ('Band 5', 'B5', '850 MHz'),
    'GSM 900': ('Band 8', 'B8', '900 MHz'),
    'GSM 1800': ('Band 3', 'B3', '1800 MHz'),
    'GSM 1900': ('Band 2', 'B2', '1900 MHz'),
    # 3G
    'UMTS 2100': ('Band 1', 'B1', '2100 MHz'),
    'UMTS 1900': ('Band 2', 'B2', '1900 MHz'),
    'UMTS 850': ('Band 5', 'B5', '850 MHz'),
    'UMTS 900': ('Band 8', 'B8', '900 MHz'),
    # 4G
    'LTE 2100': ('Band 1', 'B1', '2100'),
    'LTE 1900': ('Band 2', 'B2', '1900'),
    'LTE 1800': ('Band 3', 'B3', '1800'),
    'LTE 1700': ('Band 4', 'B4', '1700'),
    'LTE 850': ('Band 5', 'B5', '850'),
    'LTE 2600': ('Band 7', 'B7', '2600'),
    'LTE 900': ('Band 8', 'B8', '900'),
    'LTE 800': ('Band 20', 'B20', '800'),
    'LTE 700': (
        'Band 12', 'Band 13', 'Band 17', 'Band 28',
        'B12', 'B13', 'B17', 'B28', '700',
    ),
    'LTE 2300': ('Band 40', 'B40', '2300'),
    # 5G NR
    '5G 3500': ('n78', '3500'),
    '5G 700': ('n28', '700'),
    '5G 2100': ('n1', '2100'),
}


def get_equivalents(band: str) -> tuple[str, ...]:
    """Get the aliases for a carrier band name, empty if it has none."""
    return BAND_EQUIVALENTS.get(band.strip(), ())
