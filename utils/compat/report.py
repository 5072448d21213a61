"""Plain-text compatibility report for sharing."""

from __future__ import annotations

from utils.compat.devices import Device, sim_label
from utils.compat.matcher import CompatibilityResult
from utils.compat.operators import Operator


def build_report(
    device: Device,
    operator: Operator,
    country: str,
    result: CompatibilityResult,
) -> str:
    """Render a compatibility result as a short shareable text."""
    overall = 'Full Support' if not result.missing else 'Partial Support'
    lines = [
        'Check My Phone Report',
        '-----------------------',
        f'Device: {device.name}',
        f'SIM Type: {sim_label(device)}',
        f'Carrier: {operator.brand or operator.operator} ({operator.plmn})',
        f'Country: {country}',
        '',
        overall,
        f'Bands: {len(result.supported)} Supported / {len(result.missing)} Missing',
        f"Supported: {', '.join(result.supported) or 'None'}",
    ]
    if result.missing:
        lines.append(f"Missing: {', '.join(result.missing)}")
    else:
        lines.append('All operator bands supported!')
    return '\n'.join(lines)
