"""Tests for IMEI validation and device identification."""

from unittest.mock import patch

import pytest

from tests.conftest import make_device
from utils.compat.imei import (
    DeviceResolution,
    ResolutionStatus,
    extract_tac,
    match_generic_name,
    name_tokens,
    resolve_device,
    resolve_imei,
    validate_imei,
)

VALID_IMEI = '490154203237518'
BAD_CHECKSUM_IMEI = '490154203237519'


# ============================================
# validate_imei / extract_tac tests
# ============================================

def test_validate_imei_known_vector():
    """Known Luhn-valid IMEI should pass."""
    assert validate_imei(VALID_IMEI) is True


def test_validate_imei_bad_checksum():
    """Changing the check digit should fail."""
    assert validate_imei(BAD_CHECKSUM_IMEI) is False


def test_validate_imei_ignores_separators():
    """Non-digit characters are stripped before validation."""
    assert validate_imei('49-015420-323751-8') is True


@pytest.mark.parametrize('raw', ['', None, '49015420323751', '4901542032375180', 'abcdefghijklmno'])
def test_validate_imei_wrong_length(raw):
    """Anything but 15 digits should be rejected."""
    assert validate_imei(raw) is False


def test_extract_tac():
    """TAC is the first 8 digits."""
    assert extract_tac(VALID_IMEI) == '49015420'


def test_extract_tac_short_input():
    """Short input gives a short TAC."""
    assert extract_tac('35-91') == '3591'


# ============================================
# Generic name matching tests
# ============================================

def test_name_tokens_drops_short_and_brand_tokens():
    """Short tokens and common brand names are not discriminating."""
    assert name_tokens('Samsung SM-G998B Galaxy S21') == ['g998b', 'galaxy', 's21']


def test_match_generic_name_strict(sample_devices):
    """Exact name should match in the strict pass."""
    assert match_generic_name('Samsung Galaxy A12', sample_devices).id == 'samsung-galaxy-a12-10699'


def test_match_generic_name_contained(sample_devices):
    """Generic name contained in a device name should match."""
    assert match_generic_name('Thuraya X5', sample_devices).id == 'thu-x5t'


def test_match_generic_name_token_overlap(sample_devices):
    """Token pass should prefer the device sharing most tokens."""
    device = match_generic_name('Samsung SM-G998B Galaxy S21 Ultra', sample_devices)
    assert device.id == 'samsung-galaxy-s21-ultra-5g-10682'


def test_match_generic_name_tie_keeps_catalog_order():
    """Equal scores should resolve to the first device in the catalog."""
    devices = [
        make_device('one', 'Acme Max One', {}),
        make_device('two', 'Acme Max Two', {}),
    ]
    assert match_generic_name('Acme Phone Max', devices).id == 'one'


def test_match_generic_name_brand_filter():
    """Candidates must contain the brand word."""
    devices = [make_device('nokia-edge', 'Nokia Edge Plus', {})]
    assert match_generic_name('Motorola Edge Plus 2023', devices) is None


def test_match_generic_name_blank():
    """Blank generic name matches nothing."""
    assert match_generic_name('   ', [make_device('x', 'X', {})]) is None


def test_match_generic_name_skips_unnamed_devices():
    """A device without a name must not match by containment."""
    devices = [make_device('blank', '', {}), make_device('ip15', 'Apple iPhone 15', {})]
    assert match_generic_name('Apple iPhone 15', devices).id == 'ip15'


# ============================================
# resolve_device tests
# ============================================

def test_resolve_device_exact_short_circuits(sample_devices):
    """Curated TAC hit returns the device without trying the bulk database."""
    with patch('utils.compat.imei.match_generic_name') as matcher:
        result = resolve_device(
            '49015420',
            {'49015420': 'ip15'},
            {'49015420': 'Samsung Galaxy A12'},
            sample_devices,
        )
    assert result.status is ResolutionStatus.EXACT
    assert result.device.id == 'ip15'
    assert result.message == ''
    matcher.assert_not_called()


def test_resolve_device_curated_id_not_loaded(sample_devices):
    """Curated id missing from the catalog falls through to the bulk database."""
    result = resolve_device(
        '35111111',
        {'35111111': 'p7p'},
        {'35111111': 'Samsung Galaxy A12'},
        sample_devices,
    )
    assert result.status is ResolutionStatus.DETECTED
    assert result.device.name == 'Samsung Galaxy A12'


def test_resolve_device_detected(sample_devices):
    """Bulk name resolved to a device is reported as detected."""
    result = resolve_device('35332811', {}, {'35332811': 'Samsung SM-G998B Galaxy S21 Ultra'}, sample_devices)
    assert result.status is ResolutionStatus.DETECTED
    assert result.generic_name == 'Samsung SM-G998B Galaxy S21 Ultra'
    assert result.message == 'Detected: Samsung SM-G998B Galaxy S21 Ultra'


def test_resolve_device_recognized(sample_devices):
    """Bulk name without catalog device is recognized only."""
    result = resolve_device('35000002', {}, {'35000002': 'Nokia 3310'}, sample_devices)
    assert result.status is ResolutionStatus.RECOGNIZED
    assert result.device is None
    assert result.message.startswith('Recognized: Nokia 3310')


def test_resolve_device_unknown_valid_checksum(sample_devices):
    """Unknown TAC of a full valid IMEI reports a valid checksum."""
    result = resolve_device('49015420', {}, {}, sample_devices, imei=VALID_IMEI)
    assert result.status is ResolutionStatus.VALID_UNKNOWN


def test_resolve_device_unknown_invalid_checksum(sample_devices):
    """Unknown TAC of a full IMEI with bad check digit reports it."""
    result = resolve_device('49015420', {}, {}, sample_devices, imei=BAD_CHECKSUM_IMEI)
    assert result.status is ResolutionStatus.INVALID_CHECKSUM


def test_resolve_device_unknown_incomplete(sample_devices):
    """Unknown TAC of a partial IMEI waits for more digits."""
    result = resolve_device('49015420', {}, {}, sample_devices, imei='4901542032')
    assert result.status is ResolutionStatus.INCOMPLETE
    assert result.found is False


# ============================================
# resolve_imei tests
# ============================================

def test_resolve_imei_short_input():
    """Fewer than 8 digits is incomplete without any lookup."""
    result = resolve_imei('3591', {'3591': 'ip15'}, {}, [])
    assert result.status is ResolutionStatus.INCOMPLETE
    assert result.tac == '3591'


def test_resolve_imei_strips_formatting(sample_devices):
    """Formatted IMEI should resolve like the bare digits."""
    result = resolve_imei('49 015420 323751 8', {'49015420': 'ip15'}, {}, sample_devices)
    assert result.status is ResolutionStatus.EXACT


def test_resolve_imei_empty_catalog():
    """Empty catalogs degrade to checksum reporting."""
    result = resolve_imei(VALID_IMEI, {}, {}, [])
    assert result.status is ResolutionStatus.VALID_UNKNOWN


def test_resolution_to_dict(sample_devices):
    """Serialized resolution carries status value and device."""
    data = resolve_imei(VALID_IMEI, {'49015420': 'ip15'}, {}, sample_devices).to_dict()
    assert data['status'] == 'exact'
    assert data['tac'] == '49015420'
    assert data['device']['id'] == 'ip15'


def test_resolution_not_found_to_dict():
    """Serialized unknown outcome has no device."""
    data = DeviceResolution(ResolutionStatus.INVALID_CHECKSUM, '49015420').to_dict()
    assert data['device'] is None
    assert data['message'] == 'Invalid IMEI checksum. Please check the digits.'
