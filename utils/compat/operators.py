"""
Carrier records and per-country normalization.

Raw MCC/MNC list entries are filtered to operational networks in one
country, carrier names are corrected, duplicates collapsed, and known MVNO
sub-brands added on top of their parent network.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from typing import Any, Iterable, Sequence

import config
from data.carrier_corrections import VIRTUAL_OPERATORS, correct_carrier_name
from utils.logging import get_logger

logger = get_logger('checkphone.operators')

OPERATIONAL_STATUS = 'Operational'

_WHITESPACE_RE = re.compile(r'\s+')


def _squash(value: str) -> str:
    """Lowercase and strip all whitespace, for keys."""
    return _WHITESPACE_RE.sub('', value.lower())


def _text(value: Any) -> str:
    return '' if value is None else str(value)


@dataclass(frozen=True)
class Operator:
    """A mobile network operator in one country."""
    unique_id: str
    country_name: str
    country_code: str
    mcc: str
    mnc: str
    brand: str
    operator: str
    status: str
    bands: str
    notes: str | None = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Operator:
        """Build an operator from a raw MCC/MNC list record."""
        brand = _text(record.get('brand'))
        name = _text(record.get('operator'))
        mcc = _text(record.get('mcc'))
        mnc = _text(record.get('mnc'))
        notes = record.get('notes')
        return cls(
            unique_id=make_unique_id(mcc, mnc, brand, name),
            country_name=_text(record.get('countryName')),
            country_code=_text(record.get('countryCode')),
            mcc=mcc,
            mnc=mnc,
            brand=brand,
            operator=name,
            status=_text(record.get('status')),
            bands=_text(record.get('bands')),
            notes=None if notes is None else str(notes),
        )

    @property
    def plmn(self) -> str:
        """MCC-MNC pair."""
        return f'{self.mcc}-{self.mnc}'

    @property
    def sort_name(self) -> str:
        return (self.brand or self.operator).lower()

    @property
    def display_name(self) -> str:
        """Brand with operator in parentheses when they differ."""
        brand = self.brand.strip()
        if brand and brand != self.operator.strip() and brand not in self.operator:
            return f'{self.brand} ({self.operator})'
        return self.operator or self.brand

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            'unique_id': self.unique_id,
            'country_name': self.country_name,
            'country_code': self.country_code,
            'mcc': self.mcc,
            'mnc': self.mnc,
            'plmn': self.plmn,
            'brand': self.brand,
            'operator': self.operator,
            'display_name': self.display_name,
            'status': self.status,
            'bands': self.bands,
            'notes': self.notes,
        }


def make_unique_id(mcc: str, mnc: str, brand: str, operator: str) -> str:
    """Stable id for a carrier, derived from its MCC-MNC and names."""
    return _squash(f'{mcc}-{mnc}-{brand}-{operator}')


def make_merge_key(brand: str, operator: str, bands: str) -> str:
    """Key under which carrier records count as duplicates."""
    return _squash(f'{brand}-{operator}-{bands}')


def _coerce(records: Iterable[Operator | dict]) -> list[Operator]:
    return [r if isinstance(r, Operator) else Operator.from_record(r) for r in records]


def get_operators_by_country(
    operators: Iterable[Operator | dict],
    country: str,
) -> list[Operator]:
    """
    Get the normalized operator list for a country.

    Only operational records are kept. For records sharing a merge key the
    first one seen wins. Virtual sub-brands copy their parent's bands and are
    only added when the parent is present.

    Args:
        operators: Raw records or Operator instances
        country: Exact country name

    Returns:
        Operators sorted by brand (or operator name when brand is empty),
        case-insensitive. Empty if the country has no operational carrier.
    """
    unique: dict[str, Operator] = {}

    for op in _coerce(operators):
        if op.country_name != country or op.status != OPERATIONAL_STATUS:
            continue

        brand, name = correct_carrier_name(op.country_name, op.brand, op.operator)

        key = make_merge_key(brand, name, op.bands)
        if key in unique:
            logger.debug(f"Dropping duplicate carrier {op.plmn} ({brand or name})")
            continue

        unique[key] = replace(
            op,
            unique_id=make_unique_id(op.mcc, op.mnc, brand, name),
            brand=brand,
            operator=name,
        )

    for parent_name, sub_brand, sub_id in VIRTUAL_OPERATORS.get(country, []):
        parent = next((o for o in unique.values() if o.operator == parent_name), None)
        if parent and sub_id not in unique:
            unique[sub_id] = replace(parent, unique_id=sub_id, operator=sub_brand, brand=sub_brand)

    return sorted(unique.values(), key=lambda o: o.sort_name)


def find_operator(operators: Sequence[Operator], unique_id: str) -> Operator | None:
    """Find an operator by unique id."""
    for op in operators:
        if op.unique_id == unique_id:
            return op
    return None


def get_countries(operators: Iterable[Operator | dict]) -> list[str]:
    """Sorted unique country names."""
    return sorted({op.country_name for op in _coerce(operators) if op.country_name})


def search_countries(countries: Sequence[str], query: str) -> list[str]:
    """
    Filter countries by a search query.

    A single character matches country names that start with it (used for
    alphabet chips); longer queries match anywhere in the name.
    """
    q = (query or '').lower().strip()
    if not q:
        return []
    if len(q) == 1:
        return [c for c in countries if c and c.lower().startswith(q)]
    return [c for c in countries if c and q in c.lower()][:config.COUNTRY_SEARCH_LIMIT]


def country_initials(countries: Iterable[str]) -> list[str]:
    """Sorted unique first letters of the country names."""
    return sorted({c[0].upper() for c in countries if c})
