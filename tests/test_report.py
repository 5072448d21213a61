"""Tests for the shareable compatibility report."""

from utils.compat.matcher import check_compatibility, check_device_operator
from utils.compat.operators import get_operators_by_country
from utils.compat.report import build_report


def test_report_partial(sample_devices, operator_records):
    """Partial support lists supported and missing bands."""
    alpha = get_operators_by_country(operator_records, 'Testland')[0]
    result = check_device_operator(sample_devices[0], alpha)
    lines = build_report(sample_devices[0], alpha, 'Testland', result).split('\n')

    assert lines[0] == 'Check My Phone Report'
    assert lines[2] == 'Device: Apple iPhone 15'
    assert lines[3] == 'SIM Type: eSIM Ready'
    assert lines[4] == 'Carrier: Alpha (001-01)'
    assert lines[5] == 'Country: Testland'
    assert lines[7] == 'Partial Support'
    assert lines[8] == 'Bands: 4 Supported / 1 Missing'
    assert lines[9] == 'Supported: GSM 900, GSM 1800, LTE 800, LTE 1800'
    assert lines[10] == 'Missing: UMTS 2100'


def test_report_full_support(sample_devices, operator_records):
    """No missing bands gives the full support wording."""
    rogers = get_operators_by_country(operator_records, 'Canada')[5]
    result = check_compatibility(['GSM 850'], ['GSM 850'])
    text = build_report(sample_devices[1], rogers, 'Canada', result)

    assert 'Full Support' in text
    assert 'Carrier: Rogers (302-720)' in text
    assert 'SIM Type: Physical SIM' in text
    assert text.endswith('All operator bands supported!')


def test_report_nothing_supported(sample_devices, operator_records):
    """Empty supported list is shown as None."""
    beta = get_operators_by_country(operator_records, 'Testland')[1]
    result = check_device_operator(sample_devices[3], beta)
    assert 'Supported: None' in build_report(sample_devices[3], beta, 'Testland', result)
