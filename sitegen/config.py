"""Manifest loading and decoding (JSON or YAML)."""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from .errors import ConfigError
from .logging import get_logger
from .models import CopyTarget, ReplaceTarget, SiteConfig

DEFAULT_MANIFEST = "manifest.json"
YAML_SUFFIXES = (".yml", ".yaml")

Manifest = Dict[str, SiteConfig]

_LOGGER = get_logger("config")


def load_manifest(path: Path | str) -> Manifest:
    """Read and decode a manifest file.

    Files ending in ``.yml``/``.yaml`` are parsed as YAML, everything else as JSON.
    """
    manifest_file = Path(path).expanduser()
    try:
        text = manifest_file.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"failed to read manifest from file '{manifest_file}': {exc}") from exc

    data = _parse(manifest_file, text)
    manifest = decode_manifest(data)
    _LOGGER.debug("Loaded %d site(s) from %s", len(manifest), manifest_file)
    return manifest


def _parse(path: Path, text: str) -> Any:
    if not text.strip():
        return {}
    if path.suffix.lower() in YAML_SUFFIXES:
        try:
            return yaml.safe_load(text) or {}
        except yaml.YAMLError as exc:
            raise ConfigError(f"failed to parse {path.name}: {exc}") from exc
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"failed to parse {path.name}: {exc}") from exc


def decode_manifest(data: Any) -> Manifest:
    """Decode a parsed manifest document into site configurations, keeping key order."""
    if not isinstance(data, dict):
        raise ConfigError("manifest must contain a mapping of site keys at the root")

    manifest: Manifest = {}
    for key, entry in data.items():
        key = str(key)
        if not isinstance(entry, dict):
            raise ConfigError(f"site '{key}' must be a mapping, got {_type_name(entry)}")
        manifest[key] = decode_site(key, entry)
    return manifest


def decode_site(key: str, data: Mapping[str, Any]) -> SiteConfig:
    src = _as_str(data.get("src"), key, "src")
    dst = _as_str(data.get("dst"), key, "dst")
    if not src:
        raise ConfigError(f"site '{key}': empty src")
    if not dst:
        raise ConfigError(f"site '{key}': empty dst")
    if os.path.normpath(src) == os.path.normpath(dst):
        raise ConfigError(f"site '{key}': src is identical to dst: '{src}'")

    title = _as_str(data.get("name"), key, "name") or _as_str(data.get("title"), key, "title")

    copies: Dict[str, List[CopyTarget]] = {}
    for copy_src, entry in _as_dict(data.get("copies"), key, "copies").items():
        copies[str(copy_src)] = decode_copy_targets(entry, f"{key}: copies[{copy_src}]")

    replaces: Dict[str, ReplaceTarget] = {}
    for holder, entry in _as_dict(data.get("replaces"), key, "replaces").items():
        replaces[str(holder)] = decode_replace_target(entry, f"{key}: replaces[{holder}]")

    return SiteConfig(
        key=key,
        src=src,
        dst=dst,
        title=title,
        url=_as_str(data.get("url"), key, "url"),
        cleanup=_as_bool(data.get("cleanup"), key, "cleanup"),
        copies=copies,
        replaces=replaces,
        generate_index=_as_bool(data.get("generate-index"), key, "generate-index"),
        generate_index_mode=_as_str(data.get("generate-index-mode"), key, "generate-index-mode"),
    )


def decode_copy_targets(entry: Any, where: str = "copies") -> List[CopyTarget]:
    """Normalise a string, object or list of either into a list of copy targets."""
    if isinstance(entry, list):
        if not entry:
            raise ConfigError(f"{where}: empty target list")
        return [decode_copy_target(item, where) for item in entry]
    return [decode_copy_target(entry, where)]


def decode_copy_target(entry: Any, where: str = "copies") -> CopyTarget:
    if isinstance(entry, str):
        return CopyTarget(target=entry)
    if isinstance(entry, dict):
        if "target" not in entry:
            raise ConfigError(f"{where}: missing key 'target'")
        target = entry["target"]
        if not isinstance(target, str):
            raise ConfigError(
                f"{where}: invalid data type for field 'target', expecting string, got {_type_name(target)}"
            )
        force = entry.get("force", False)
        if not isinstance(force, bool):
            raise ConfigError(
                f"{where}: invalid data type for field 'force', expecting bool, got {_type_name(force)}"
            )
        return CopyTarget(target=target, force=force)
    raise ConfigError(f"{where}: bad entry data shape: {entry!r}")


def decode_replace_target(entry: Any, where: str = "replaces") -> ReplaceTarget:
    if isinstance(entry, str):
        return ReplaceTarget(text=entry)
    if isinstance(entry, dict):
        if "text" not in entry:
            raise ConfigError(f"{where}: missing key 'text'")
        text = entry["text"]
        if not isinstance(text, str):
            raise ConfigError(
                f"{where}: invalid data type for field 'text', expecting string, got {_type_name(text)}"
            )
        count = entry.get("count", 0)
        if isinstance(count, bool) or not isinstance(count, (int, float)) or count != int(count):
            raise ConfigError(
                f"{where}: invalid data type for field 'count', expecting integer, got {_type_name(count)}"
            )
        if count < 0:
            raise ConfigError(f"{where}: negative count {int(count)}")
        return ReplaceTarget(text=text, count=int(count))
    raise ConfigError(f"{where}: bad entry data shape: {entry!r}")


def _type_name(value: Any) -> str:
    return "null" if value is None else type(value).__name__


def _as_dict(value: Any, key: str, field_name: str) -> Dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"site '{key}': field '{field_name}' must be a mapping, got {_type_name(value)}")
    return value


def _as_str(value: Any, key: str, field_name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ConfigError(f"site '{key}': field '{field_name}' must be a string, got {_type_name(value)}")
    return value


def _as_bool(value: Any, key: str, field_name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ConfigError(f"site '{key}': field '{field_name}' must be a boolean, got {_type_name(value)}")
    return value


__all__ = [
    "DEFAULT_MANIFEST",
    "Manifest",
    "decode_copy_target",
    "decode_copy_targets",
    "decode_manifest",
    "decode_replace_target",
    "decode_site",
    "load_manifest",
]
