"""Device / carrier compatibility routes."""

from __future__ import annotations

from flask import Blueprint, jsonify, request

from utils.compat.catalog import CatalogCache, get_catalog
from utils.compat.devices import CAPABILITY_FILTERS, get_brands, search_devices, sim_info
from utils.compat.matcher import check_device_operator, rank_operators
from utils.compat.operators import country_initials, get_countries, search_countries
from utils.compat.report import build_report
from utils.logging import get_logger

logger = get_logger('checkphone.routes')

compat_bp = Blueprint('compat', __name__, url_prefix='/compat')

# Catalog cache serving this blueprint; replaced by init_compat_state()
catalog_cache: CatalogCache | None = None


def init_compat_state(cache: CatalogCache) -> None:
    """Install the catalog cache the routes read from."""
    global catalog_cache
    catalog_cache = cache


def _snapshot():
    cache = catalog_cache or get_catalog()
    return cache.snapshot


def _error(message: str, code: int = 400):
    return jsonify({'status': 'error', 'message': message}), code


def _lookup_pair(snapshot):
    """Resolve device_id / operator_id / country query args."""
    device_id = request.args.get('device_id', '').strip()
    operator_id = request.args.get('operator_id', '').strip()
    country = request.args.get('country', '').strip()

    if not device_id or not operator_id or not country:
        return None, None, country, _error('device_id, operator_id and country are required')

    device = snapshot.find_device(device_id)
    if device is None:
        return None, None, country, _error(f'Unknown device: {device_id}', 404)

    operator = snapshot.find_operator(country, operator_id)
    if operator is None:
        return None, None, country, _error(f'Unknown operator: {operator_id}', 404)

    return device, operator, country, None


@compat_bp.route('/status', methods=['GET'])
def get_status():
    """Catalog load status."""
    return jsonify({'status': 'success', 'catalog': _snapshot().to_dict()})


@compat_bp.route('/countries', methods=['GET'])
def list_countries():
    """All countries, or the ones matching ?q=."""
    countries = get_countries(_snapshot().operators)
    query = request.args.get('q', '')
    return jsonify({
        'status': 'success',
        'countries': search_countries(countries, query) if query else countries,
        'initials': country_initials(countries),
    })


@compat_bp.route('/operators', methods=['GET'])
def list_operators():
    """Normalized operators for ?country=."""
    country = request.args.get('country', '').strip()
    if not country:
        return _error('country is required')

    operators = _snapshot().operators_for(country)
    return jsonify({
        'status': 'success',
        'country': country,
        'operators': [op.to_dict() for op in operators],
    })


@compat_bp.route('/brands', methods=['GET'])
def list_brands():
    """Device brands in the catalog."""
    return jsonify({'status': 'success', 'brands': get_brands(_snapshot().devices)})


@compat_bp.route('/devices', methods=['GET'])
def find_devices():
    """Search devices by ?q=, ?brand= and ?filter=."""
    capability = request.args.get('filter', 'all')
    if capability not in CAPABILITY_FILTERS:
        return _error(f'Unknown filter: {capability}')

    devices = search_devices(
        _snapshot().devices,
        query=request.args.get('q', ''),
        brand=request.args.get('brand', ''),
        capability=capability,
    )
    return jsonify({
        'status': 'success',
        'devices': [{'id': d.id, 'name': d.name, 'curated': d.curated} for d in devices],
    })


@compat_bp.route('/imei/<imei>', methods=['GET'])
def lookup_imei(imei: str):
    """Identify a device from an IMEI or its first digits."""
    resolution = _snapshot().resolve_imei(imei)
    logger.debug(f"IMEI lookup {resolution.tac}: {resolution.status.value}")
    return jsonify({'status': 'success', 'resolution': resolution.to_dict()})


@compat_bp.route('/check', methods=['GET'])
def check():
    """Compatibility of one device with one operator."""
    snapshot = _snapshot()
    device, operator, country, error = _lookup_pair(snapshot)
    if error:
        return error

    result = check_device_operator(device, operator)
    return jsonify({
        'status': 'success',
        'device': {'id': device.id, 'name': device.name},
        'operator': operator.to_dict(),
        'sim': sim_info(device),
        'result': result.to_dict(),
    })


@compat_bp.route('/recommend', methods=['GET'])
def recommend():
    """Compatibility status of a device with every operator in a country."""
    device_id = request.args.get('device_id', '').strip()
    country = request.args.get('country', '').strip()
    if not device_id or not country:
        return _error('device_id and country are required')

    snapshot = _snapshot()
    device = snapshot.find_device(device_id)
    if device is None:
        return _error(f'Unknown device: {device_id}', 404)

    ranked = rank_operators(device, snapshot.operators_for(country))
    return jsonify({
        'status': 'success',
        'operators': [
            {
                'unique_id': op.unique_id,
                'display_name': op.display_name,
                'plmn': op.plmn,
                'compatibility': result.status,
                'label': result.label,
            }
            for op, result in ranked
        ],
    })


@compat_bp.route('/report', methods=['GET'])
def report():
    """Shareable text report for a device / operator pair."""
    snapshot = _snapshot()
    device, operator, country, error = _lookup_pair(snapshot)
    if error:
        return error

    result = check_device_operator(device, operator)
    return jsonify({
        'status': 'success',
        'report': build_report(device, operator, country, result),
    })
