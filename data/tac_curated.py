"""
Curated TAC table.

Hand-verified Type Allocation Codes mapped straight to device ids in the
curated device catalog. Checked before the bulk TAC database.
"""

from __future__ import annotations

CURATED_TACS: dict[str, str] = {
    # Apple
    '35732479': 'ip16p-us',       # iPhone 16 Pro (USA)
    '35762631': 'ip16p',          # iPhone 16 Pro (Global)
    '35637100': 'ip15-us',        # iPhone 15 (USA)
    '35437977': 'ip15',           # iPhone 15 (Global)
    '35442511': 'ip14-us',        # iPhone 14 (USA)
    '35313310': 'ip14',           # iPhone 14 (Global)
    '35442811': 'ip13-us',        # iPhone 13 (USA)
    '35443211': 'ip13',           # iPhone 13 (Global)
    '35384611': 'ip12',           # iPhone 12
    '35392110': 'ip11',           # iPhone 11
    '35674310': 'ipx',            # iPhone X
    '35616909': 'ipxs',           # iPhone XS
    '35723209': 'ipxsmax',        # iPhone XS Max
    '35304709': 'ipxr',           # iPhone XR

    # Samsung
    '35799425': 's24u',           # Galaxy S24 Ultra
    '35314725': 's23u',           # Galaxy S23 Ultra
    '35246221': 's22u',           # Galaxy S22 Ultra
    '35165821': 's21u',           # Galaxy S21 Ultra
    '35930510': 's20u',           # Galaxy S20 Ultra
    '35185011': 's20p',           # Galaxy S20+
    '35719629': 'a12',            # Galaxy A12 slot 1
    '35677091': 'a12',            # Galaxy A12 slot 2

    # Google
    '35158285': 'p9p',            # Pixel 9 Pro
    '35220782': 'p9p',            # Pixel 9 (mapped to Pro)
    '35635011': 'p8p',            # Pixel 8 Pro
    '35111111': 'p7p',            # Pixel 7 Pro (placeholder TAC)

    # OnePlus
    '35114781': 'op12',           # OnePlus 12
    '35221444': 'op11',           # OnePlus 11

    # Satellite
    '35412588': 'thu-x5t',        # Thuraya X5-Touch
}
