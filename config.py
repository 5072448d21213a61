"""Configuration settings for checkphone application."""

from __future__ import annotations

import logging
import os
import sys

# Application version
VERSION = "1.3.0"

# Changelog - latest release notes
CHANGELOG = [
    {
        "version": "1.3.0",
        "date": "October 2026",
        "highlights": [
            "IMEI lookup falls back to the bulk TAC database with token-overlap matching",
            "Explicit curated flag on device records for search ranking",
            "Shareable plain-text compatibility report",
        ]
    },
    {
        "version": "1.2.0",
        "date": "September 2026",
        "highlights": [
            "Canadian carrier name corrections and MVNO sub-brands",
            "Carrier recommendation status per country",
            "Background fetch of the full device catalog",
        ]
    },
    {
        "version": "1.1.0",
        "date": "August 2026",
        "highlights": [
            "Band equivalence table for legacy GSM/UMTS/LTE names",
            "eSIM and satellite device filters",
        ]
    },
]


def _get_env(key: str, default: str) -> str:
    """Get environment variable with default."""
    return os.environ.get(f'CHECKPHONE_{key}', default)


def _get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer with default."""
    try:
        return int(os.environ.get(f'CHECKPHONE_{key}', str(default)))
    except ValueError:
        return default


def _get_env_float(key: str, default: float) -> float:
    """Get environment variable as float with default."""
    try:
        return float(os.environ.get(f'CHECKPHONE_{key}', str(default)))
    except ValueError:
        return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get environment variable as boolean with default."""
    val = os.environ.get(f'CHECKPHONE_{key}', '').lower()
    if val in ('true', '1', 'yes', 'on'):
        return True
    if val in ('false', '0', 'no', 'off'):
        return False
    return default


_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), 'data')

# Logging configuration
_log_level_str = _get_env('LOG_LEVEL', 'WARNING').upper()
LOG_LEVEL = getattr(logging, _log_level_str, logging.WARNING)
LOG_FORMAT = _get_env('LOG_FORMAT', '%(asctime)s - %(levelname)s - %(message)s')

# Server settings
HOST = _get_env('HOST', '0.0.0.0')
PORT = _get_env_int('PORT', 5060)
DEBUG = _get_env_bool('DEBUG', False)

# Catalog sources
OPERATORS_URL = _get_env(
    'OPERATORS_URL',
    'https://raw.githubusercontent.com/pbakondy/mcc-mnc-list/master/mcc-mnc-list.json',
)
DEVICES_URL = _get_env(
    'DEVICES_URL',
    'https://raw.githubusercontent.com/ilyasozkurt/mobilephone-brands-and-models/master/devices.json',
)
LOCAL_DEVICES_PATH = _get_env('LOCAL_DEVICES_PATH', os.path.join(_DATA_DIR, 'devices.json'))
TAC_LITE_PATH = _get_env('TAC_LITE_PATH', os.path.join(_DATA_DIR, 'tac_lite.json'))
DEVICE_RECORDS_KEY = _get_env('DEVICE_RECORDS_KEY', 'RECORDS')

# Catalog loading
CATALOG_REQUEST_TIMEOUT = _get_env_float('CATALOG_REQUEST_TIMEOUT', 30.0)
CATALOG_BACKGROUND_FETCH = _get_env_bool('CATALOG_BACKGROUND_FETCH', True)

# Search limits
DEVICE_SEARCH_LIMIT = _get_env_int('DEVICE_SEARCH_LIMIT', 15)
DEVICE_FILTERED_LIMIT = _get_env_int('DEVICE_FILTERED_LIMIT', 100)
DEVICE_SEARCH_MIN_CHARS = _get_env_int('DEVICE_SEARCH_MIN_CHARS', 2)
COUNTRY_SEARCH_LIMIT = _get_env_int('COUNTRY_SEARCH_LIMIT', 50)


def configure_logging() -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=LOG_LEVEL,
        format=LOG_FORMAT,
        stream=sys.stderr
    )
    # Keep the Flask development server in step with our level
    logging.getLogger('werkzeug').setLevel(LOG_LEVEL)
