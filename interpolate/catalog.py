"""Message catalogs: YAML mappings of message keys to templates."""

from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path
from threading import RLock
from typing import Any

import yaml

from interpolate.parser import Interpolation

KEY_SEPARATOR = "."

_CATALOG_CACHE: dict[Path, tuple[float, dict[str, str]]] = {}
_CATALOG_LOCK = RLock()


def flatten_catalog(content: Mapping[str, Any], *, prefix: str = "") -> dict[str, str]:
    """Flatten nested mappings into dotted keys.

    Raises:
        ValueError: If a leaf is not a string
    """
    flat: dict[str, str] = {}
    for key, value in content.items():
        full_key = f"{prefix}{KEY_SEPARATOR}{key}" if prefix else str(key)
        if isinstance(value, Mapping):
            flat.update(flatten_catalog(value, prefix=full_key))
        elif isinstance(value, str):
            flat[full_key] = value
        else:
            raise ValueError(
                f"Catalog entry {full_key!r} must be a string or mapping, got {type(value).__name__}"
            )
    return flat


def load_catalog(path: Path, *, use_cache: bool = True) -> dict[str, str]:
    resolved = path.resolve()
    try:
        mtime = resolved.stat().st_mtime
    except FileNotFoundError as exc:
        raise FileNotFoundError(f"Catalog file {resolved} not found") from exc

    if use_cache:
        with _CATALOG_LOCK:
            cached = _CATALOG_CACHE.get(resolved)
            if cached and cached[0] == mtime:
                return dict(cached[1])

    try:
        data = yaml.safe_load(resolved.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Catalog file {resolved} is not valid YAML") from exc
    if data is None:
        raise ValueError(f"Catalog file {resolved} is empty")
    if not isinstance(data, Mapping):
        raise ValueError(f"Catalog file {resolved} must contain a mapping at the top level")

    catalog = flatten_catalog(data)

    if use_cache:
        with _CATALOG_LOCK:
            _CATALOG_CACHE[resolved] = (mtime, catalog)

    return dict(catalog)


def parse_catalog(catalog: Mapping[str, str]) -> dict[str, Interpolation]:
    """Parse every template of a catalog, keyed and labelled by message key."""
    return {key: Interpolation.parse(template, source=key) for key, template in catalog.items()}


def invalidate_catalog_cache(path: Path | None = None) -> None:
    """Clear cached catalog entries (all or a specific file)."""

    with _CATALOG_LOCK:
        if path is None:
            _CATALOG_CACHE.clear()
        else:
            _CATALOG_CACHE.pop(path.resolve(), None)
