"""Pytest configuration and fixtures."""

import json

import pytest

import app as app_module
from app import app as flask_app
from routes import register_blueprints
from routes.compat import init_compat_state
from utils.compat.catalog import CatalogCache, CatalogSnapshot
from utils.compat.devices import Device
from utils.compat.operators import Operator


def make_device(device_id, name, specs, curated=False, brand_id='1'):
    """Build a catalog device from a specification mapping (or raw string)."""
    payload = specs if isinstance(specs, str) else json.dumps(specs)
    return Device.from_record(
        {'id': device_id, 'brand_id': brand_id, 'name': name, 'specifications': payload},
        curated=curated,
    )


def make_operator_record(country, mcc, mnc, brand, operator, bands, status='Operational'):
    """Build a raw MCC/MNC list record."""
    return {
        'countryName': country,
        'countryCode': 'xx',
        'mcc': mcc,
        'mnc': mnc,
        'brand': brand,
        'operator': operator,
        'status': status,
        'bands': bands,
        'notes': None,
    }


@pytest.fixture
def sample_devices():
    """Small device catalog: two curated, two external."""
    return [
        make_device('ip15', 'Apple iPhone 15', {
            '2G bands': 'GSM 900 / GSM 1800',
            '4G bands': 'Band 3 / Band 20',
            '5G bands': 'n78',
            'SIM': 'Nano-SIM, eSIM',
        }, curated=True),
        make_device('thu-x5t', 'Thuraya X5-Touch', {
            '2G bands': 'GSM 900',
            'Technology': 'GSM / Satellite',
        }, curated=True),
        make_device('samsung-galaxy-s21-ultra-5g-10682', 'Samsung Galaxy S21 Ultra 5G', {
            '4G bands': 'Band 1 / Band 3 / Band 7 / Band 20',
            'SIM': 'eSIM only',
        }),
        make_device('samsung-galaxy-a12-10699', 'Samsung Galaxy A12', '{not json'),
    ]


@pytest.fixture
def operator_records():
    """Raw carrier records for a test country and Canada."""
    return [
        make_operator_record('Testland', '001', '01', 'Alpha', 'Alpha Telecom',
                             'GSM 900 / GSM 1800 / UMTS 2100 / LTE 800 / LTE 1800'),
        make_operator_record('Testland', '001', '02', 'Alpha', 'Alpha Telecom',
                             'GSM 900 / GSM 1800 / UMTS 2100 / LTE 800 / LTE 1800'),
        make_operator_record('Testland', '001', '03', 'Beta', 'Beta Mobile',
                             'UMTS 2100 / LTE 2600'),
        make_operator_record('Testland', '001', '04', 'Gamma', 'Gamma',
                             'LTE 800', status='Not operational'),
        make_operator_record('Canada', '302', '720', 'Rogers Wireless', 'Rogers Communications',
                             'GSM 850 / GSM 1900 / UMTS 850 / LTE 1700'),
        make_operator_record('Canada', '302', '610', 'Bell', 'Bell Mobility',
                             'UMTS 850 / LTE 1700'),
        make_operator_record('Canada', '302', '220', 'Telus', 'Telus Mobility',
                             'UMTS 850 / LTE 1700'),
        make_operator_record('Canada', '302', '490', 'Freedom Mobile', 'Freedom Mobile Inc.',
                             'LTE 1700 / LTE 2600'),
    ]


@pytest.fixture
def sample_snapshot(sample_devices, operator_records):
    """Complete catalog snapshot built from the sample data."""
    return CatalogSnapshot(
        operators=tuple(Operator.from_record(r) for r in operator_records),
        devices=tuple(sample_devices),
        curated_tacs={'49015420': 'ip15', '35111111': 'missing-id'},
        bulk_tacs={
            '35332811': 'Samsung SM-G998B Galaxy S21 Ultra',
            '35000001': 'Samsung Galaxy A12',
            '35000002': 'Nokia 3310',
        },
        complete=True,
    )


@pytest.fixture(scope='session')
def app():
    """Create application for testing."""
    flask_app.config['TESTING'] = True
    # Register blueprints only if not already registered
    if 'compat' not in flask_app.blueprints:
        register_blueprints(flask_app)
    return flask_app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def catalog(sample_snapshot):
    """Isolated catalog cache serving the routes, holding the sample data."""
    cache = CatalogCache()
    cache.set_snapshot(sample_snapshot)
    init_compat_state(cache)
    yield cache
    init_compat_state(app_module.catalog_cache)
