"""
Carrier name corrections and virtual sub-brands.

The public MCC/MNC list carries inconsistent brand and operator strings for
some countries. BRAND_CORRECTIONS rewrites them to one canonical operator
name; VIRTUAL_OPERATORS adds MVNO brands that ride on a parent network and
are missing from the list.
"""

from __future__ import annotations

# country -> ordered (fragments, canonical operator name); first hit wins
BRAND_CORRECTIONS: dict[str, list[tuple[tuple[str, ...], str]]] = {
    'Canada': [
        (('videotron', 'vidéotron'), 'Videotron'),
        (('freedom',), 'Freedom Mobile'),
        (('rogers',), 'Rogers'),
        (('bell',), 'Bell'),
        (('telus',), 'Telus'),
    ],
}

# country -> (parent operator, sub-brand name, unique id)
VIRTUAL_OPERATORS: dict[str, list[tuple[str, str, str]]] = {
    'Canada': [
        ('Rogers', 'Fido', 'fido'),
        ('Telus', 'Koodo', 'koodo'),
        ('Telus', 'Public Mobile', 'public-mobile'),
        ('Bell', 'Virgin Plus', 'virgin-plus'),
    ],
}


def correct_carrier_name(country: str, brand: str, operator: str) -> tuple[str, str]:
    """
    Apply known-brand correction to a (brand, operator) pair.

    Returns:
        (brand, operator). On a match the brand is cleared and the operator
        is set to the canonical name; otherwise the input is returned.
    """
    b = brand.lower()
    n = operator.lower()
    for fragments, canonical in BRAND_CORRECTIONS.get(country, []):
        if any(f in b or f in n for f in fragments):
            return '', canonical
    return brand, operator
