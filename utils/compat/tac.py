"""
Bulk TAC database preprocessing.

Flattens the community TAC registry (brand -> models -> TAC list) into the
TAC -> "<brand> <model>" map the IMEI resolver reads.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from utils.logging import get_logger

logger = get_logger('checkphone.tac')


def build_tac_lite(master: dict[str, Any]) -> dict[str, str]:
    """
    Flatten a brand/model/TAC tree.

    Expected shape::

        {"brands": {"Samsung": {"models": [{"Galaxy S21": {"tacs": ["35..."]}}]}}}

    A TAC listed under more than one model keeps the last one seen.
    """
    lite: dict[str, str] = {}
    brands = master.get('brands') or {}

    for brand_name, brand in brands.items():
        for model_obj in (brand or {}).get('models') or []:
            if not model_obj:
                continue
            model_name = next(iter(model_obj))
            tacs = (model_obj[model_name] or {}).get('tacs') or []
            for tac in tacs:
                lite[str(tac)] = f'{brand_name} {model_name}'

    return lite


def convert_tac_file(src: str | Path, dst: str | Path) -> int:
    """
    Read a TAC master file and write the flattened TAC-lite file.

    Returns:
        Number of TACs written
    """
    master = json.loads(Path(src).read_text(encoding='utf-8'))
    lite = build_tac_lite(master)
    Path(dst).write_text(json.dumps(lite), encoding='utf-8')
    logger.info(f"Processed {len(lite)} TACs into {dst}")
    return len(lite)
