"""Serialization of render results for the terminal."""

from __future__ import annotations

import json
from typing import Any

import yaml


def format_result(result: Any, as_json: bool = False) -> str:
    """Serialize a render result as YAML, or as JSON if ``as_json``.

    Scalars are printed bare in YAML mode, without the document end marker
    that ``yaml.safe_dump`` appends to them.
    """
    if as_json:
        return json.dumps(result, indent=2, ensure_ascii=False)
    if isinstance(result, str):
        return result
    dumped = yaml.safe_dump(
        result, sort_keys=False, allow_unicode=True, default_flow_style=False
    )
    if dumped.endswith("\n...\n"):
        dumped = dumped[: -len("\n...\n")]
    return dumped.rstrip("\n")
