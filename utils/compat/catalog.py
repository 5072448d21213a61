"""
Device and carrier catalog loading.

The catalogs (carriers, devices, TAC tables) are fetched once and held in
an immutable CatalogSnapshot. CatalogCache owns the current snapshot and
replaces it wholesale on every load, so readers always see one consistent
set of catalogs.

Loading is progressive: the small curated device list is usable right
away and the large external device catalog is merged in later, on a
background thread.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any, Mapping

import requests

import config
from data.tac_curated import CURATED_TACS
from utils.compat.devices import Device, find_device
from utils.compat.imei import DeviceResolution, resolve_imei
from utils.compat.operators import Operator, find_operator, get_operators_by_country
from utils.logging import get_logger

logger = get_logger('checkphone.catalog')

USER_AGENT = f'checkphone/{config.VERSION}'


def merge_devices(local: list[Device], external: list[Device]) -> list[Device]:
    """Curated devices first, then external ones with a name not already present."""
    merged = list(local)
    names = {d.name.lower() for d in merged}
    for device in external:
        if device.name.lower() not in names:
            merged.append(device)
            names.add(device.name.lower())
    return merged


class CatalogLoader:
    """Fetches raw catalogs from their sources. Failures yield empty data."""

    def __init__(
        self,
        operators_url: str | None = None,
        devices_url: str | None = None,
        local_devices_path: str | None = None,
        tac_lite_path: str | None = None,
        timeout: float | None = None,
    ):
        self.operators_url = operators_url or config.OPERATORS_URL
        self.devices_url = devices_url or config.DEVICES_URL
        self.local_devices_path = local_devices_path or config.LOCAL_DEVICES_PATH
        self.tac_lite_path = tac_lite_path or config.TAC_LITE_PATH
        self.timeout = timeout if timeout is not None else config.CATALOG_REQUEST_TIMEOUT

    def _fetch_json(self, url: str) -> Any:
        try:
            response = requests.get(url, headers={'User-Agent': USER_AGENT}, timeout=self.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as e:
            logger.error(f"Error fetching {url}: {e}")
            return None

    def _read_json(self, path: str) -> Any:
        p = Path(path)
        if not p.exists():
            logger.warning(f"Catalog file not available: {p}")
            return None
        try:
            return json.loads(p.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.error(f"Error reading {p}: {e}")
            return None

    @staticmethod
    def _device_records(data: Any) -> list[dict]:
        if isinstance(data, dict):
            data = data.get(config.DEVICE_RECORDS_KEY) or []
        if not isinstance(data, list):
            return []
        return [r for r in data if isinstance(r, dict)]

    def fetch_operators(self) -> list[Operator]:
        """Fetch the MCC/MNC carrier list."""
        data = self._fetch_json(self.operators_url)
        if not isinstance(data, list):
            return []
        operators = [Operator.from_record(r) for r in data if isinstance(r, dict)]
        logger.info(f"Loaded {len(operators)} operator records")
        return operators

    def fetch_local_devices(self) -> list[Device]:
        """Read the hand-curated device list."""
        records = self._device_records(self._read_json(self.local_devices_path))
        return [Device.from_record(r, curated=True) for r in records]

    def fetch_external_devices(self) -> list[Device]:
        """Fetch the large external device catalog."""
        records = self._device_records(self._fetch_json(self.devices_url))
        devices = [Device.from_record(r) for r in records]
        logger.info(f"Loaded {len(devices)} external device records")
        return devices

    def fetch_bulk_tacs(self) -> dict[str, str]:
        """Read the bulk TAC -> generic name database."""
        data = self._read_json(self.tac_lite_path)
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items() if v}


@dataclass(frozen=True)
class CatalogSnapshot:
    """One consistent set of loaded catalogs. Never mutated."""
    operators: tuple[Operator, ...] = ()
    devices: tuple[Device, ...] = ()
    curated_tacs: Mapping[str, str] = field(default_factory=dict)
    bulk_tacs: Mapping[str, str] = field(default_factory=dict)
    complete: bool = False  # Full external device catalog merged in
    loaded_at: datetime | None = None

    def operators_for(self, country: str) -> list[Operator]:
        return get_operators_by_country(self.operators, country)

    def find_operator(self, country: str, unique_id: str) -> Operator | None:
        return find_operator(self.operators_for(country), unique_id)

    def find_device(self, device_id: str) -> Device | None:
        return find_device(self.devices, device_id)

    def resolve_imei(self, raw: str | None) -> DeviceResolution:
        return resolve_imei(raw, self.curated_tacs, self.bulk_tacs, self.devices)

    def to_dict(self) -> dict:
        """Summary counts for status reporting."""
        return {
            'operators': len(self.operators),
            'devices': len(self.devices),
            'curated_devices': sum(1 for d in self.devices if d.curated),
            'curated_tacs': len(self.curated_tacs),
            'bulk_tacs': len(self.bulk_tacs),
            'complete': self.complete,
            'loaded_at': self.loaded_at.isoformat() if self.loaded_at else None,
        }


class CatalogCache:
    """Owner of the current CatalogSnapshot."""

    def __init__(self, loader: CatalogLoader | None = None):
        self._loader = loader or CatalogLoader()
        self._snapshot = CatalogSnapshot()
        self._lock = threading.Lock()
        self._generation = 0
        self._background: threading.Thread | None = None

    @property
    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    def set_snapshot(self, snapshot: CatalogSnapshot) -> None:
        """Install a snapshot, discarding any load still in flight."""
        with self._lock:
            self._generation += 1
            self._snapshot = snapshot

    def init(self, background: bool | None = None) -> CatalogSnapshot:
        """
        Load the catalogs.

        Carriers, curated devices and TAC tables are loaded before this
        returns. The external device catalog is merged in afterwards, on a
        background thread when `background` is true.
        """
        if background is None:
            background = config.CATALOG_BACKGROUND_FETCH

        local = self._loader.fetch_local_devices()
        snapshot = CatalogSnapshot(
            operators=tuple(self._loader.fetch_operators()),
            devices=tuple(local),
            curated_tacs=dict(CURATED_TACS),
            bulk_tacs=self._loader.fetch_bulk_tacs(),
            loaded_at=datetime.now(),
        )
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._snapshot = snapshot

        logger.info(
            f"Initial catalog ready: {len(snapshot.operators)} operators, "
            f"{len(snapshot.devices)} curated devices, {len(snapshot.bulk_tacs)} bulk TACs"
        )

        if background:
            self._background = threading.Thread(
                target=self._load_full_devices,
                args=(local, generation),
                name='catalog-devices',
                daemon=True,
            )
            self._background.start()
        else:
            self._load_full_devices(local, generation)

        return self._snapshot

    def _load_full_devices(self, local: list[Device], generation: int) -> None:
        external = self._loader.fetch_external_devices()
        merged = merge_devices(local, external)
        with self._lock:
            if generation != self._generation:
                logger.debug("Catalog reloaded meanwhile, dropping stale device fetch")
                return
            self._snapshot = replace(self._snapshot, devices=tuple(merged), complete=True)
        logger.info(f"Full device catalog ready: {len(merged)} devices")

    def refresh(self) -> CatalogSnapshot:
        """Reload every catalog synchronously."""
        return self.init(background=False)

    def clear(self) -> None:
        """Drop all loaded data."""
        self.set_snapshot(CatalogSnapshot())

    def wait(self, timeout: float | None = None) -> bool:
        """Wait for a background device fetch. True once none is running."""
        thread = self._background
        if thread is not None:
            thread.join(timeout)
            return not thread.is_alive()
        return True


_default_cache: CatalogCache | None = None


def get_catalog() -> CatalogCache:
    """Get the process-wide catalog cache."""
    global _default_cache
    if _default_cache is None:
        _default_cache = CatalogCache()
    return _default_cache
