"""Tests for band string normalization."""

import json

import pytest

from utils.compat.bands import (
    combine_device_bands,
    device_band_tokens,
    parse_bands,
    parse_specifications,
)


# ============================================
# parse_bands tests
# ============================================

def test_parse_bands_slash_separated():
    """Should split a carrier band list on slashes."""
    assert parse_bands('GSM 900 / GSM 1800 / UMTS 2100') == ['GSM 900', 'GSM 1800', 'UMTS 2100']


def test_parse_bands_mixed_separators():
    """Runs of '/', ',' and ';' should act as a single separator."""
    assert parse_bands('LTE 800//, ;LTE 1800;n78') == ['LTE 800', 'LTE 1800', 'n78']


def test_parse_bands_drops_unknown_and_empty():
    """Should drop empty tokens and the 'Unknown' placeholder."""
    assert parse_bands('Unknown /  / LTE 800 / ') == ['LTE 800']


def test_parse_bands_preserves_order():
    """Tokens should come back in input order."""
    assert parse_bands('n78, B20, GSM 900') == ['n78', 'B20', 'GSM 900']


@pytest.mark.parametrize('raw', ['', None, '///', ' ; , '])
def test_parse_bands_empty_input(raw):
    """Empty or separator-only input should yield no tokens."""
    assert parse_bands(raw) == []


@pytest.mark.parametrize('raw', [
    'GSM 900 / GSM 1800 / UMTS 2100 / LTE 800',
    ' LTE 700;;LTE 1800 ,Unknown, n78 ',
    'Band 1, Band 3 / B20',
])
def test_parse_bands_idempotent(raw):
    """Re-parsing joined tokens should give the same tokens."""
    tokens = parse_bands(raw)
    assert parse_bands('/'.join(tokens)) == tokens


# ============================================
# Specification parsing tests
# ============================================

def test_parse_specifications_json_string():
    """Should decode a JSON-encoded specification object."""
    payload = json.dumps({'2G bands': 'GSM 900', 'Technology': 'GSM / LTE'})
    assert parse_specifications(payload) == {'2G bands': 'GSM 900', 'Technology': 'GSM / LTE'}


def test_parse_specifications_invalid_json():
    """Unparseable payload should yield an empty mapping."""
    assert parse_specifications('{not json') == {}


def test_parse_specifications_non_object():
    """A JSON array is not a specification object."""
    assert parse_specifications('["GSM 900"]') == {}


def test_parse_specifications_decoded_mapping():
    """An already decoded mapping is accepted, None values become empty strings."""
    assert parse_specifications({'5G bands': None, 'Year': 2024}) == {'5G bands': '', 'Year': '2024'}


def test_combine_device_bands_missing_keys():
    """Missing band fields contribute empty strings."""
    assert combine_device_bands({'4G bands': 'B20'}) == '  B20  '


def test_device_band_tokens_fuses_fields():
    """Fields are joined with a space, so neighbouring fields share a token."""
    payload = json.dumps({
        '2G bands': 'GSM 900 / GSM 1800',
        '4G bands': 'Band 3 / Band 20',
        '5G bands': 'n78',
    })
    assert device_band_tokens(payload) == ['GSM 900', 'GSM 1800  Band 3', 'Band 20 n78']


def test_device_band_tokens_bad_payload():
    """Bad specification payload should yield no bands."""
    assert device_band_tokens('{oops') == []
    assert device_band_tokens(None) == []
