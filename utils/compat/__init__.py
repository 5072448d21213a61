"""
Device / carrier compatibility utilities.

Provides band normalization, band matching, carrier normalization,
IMEI-based device identification and catalog loading.
"""

from .bands import (
    parse_bands,
    parse_specifications,
    device_band_tokens,
)
from .devices import (
    Device,
    search_devices,
    get_brands,
    sim_info,
)
from .operators import (
    Operator,
    get_operators_by_country,
    get_countries,
    search_countries,
)
from .matcher import (
    CompatibilityResult,
    check_compatibility,
    check_device_operator,
    rank_operators,
)
from .imei import (
    ResolutionStatus,
    DeviceResolution,
    validate_imei,
    extract_tac,
    resolve_device,
    resolve_imei,
)
from .catalog import (
    CatalogLoader,
    CatalogSnapshot,
    CatalogCache,
    get_catalog,
)

__all__ = [
    # Bands
    'parse_bands',
    'parse_specifications',
    'device_band_tokens',
    # Devices
    'Device',
    'search_devices',
    'get_brands',
    'sim_info',
    # Operators
    'Operator',
    'get_operators_by_country',
    'get_countries',
    'search_countries',
    # Matcher
    'CompatibilityResult',
    'check_compatibility',
    'check_device_operator',
    'rank_operators',
    # IMEI
    'ResolutionStatus',
    'DeviceResolution',
    'validate_imei',
    'extract_tac',
    'resolve_device',
    'resolve_imei',
    # Catalog
    'CatalogLoader',
    'CatalogSnapshot',
    'CatalogCache',
    'get_catalog',
]
