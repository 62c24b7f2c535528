"""Manifest loading and selection.

The manifest is a YAML document holding a list of package entries, either
at the top level or under a ``packages`` key::

    packages:
      - name: dust
        description: Disk usage viewer
        gui: false
        work: false
        overrides:
          linux: du-dust
      - name: rectangle
        description: Window manager
        gui: true
        work: false
        overrides:
          linux: null

Within ``overrides`` a missing platform key inherits ``name``, a string
renames the package and an explicit null skips it on that platform.
"""

from __future__ import annotations

import time
from pathlib import Path
from typing import Any, Iterable

import yaml

from dotstrap.core.errors import ManifestNotFoundError, ManifestParseError
from dotstrap.core.logging import get_logger
from dotstrap.core.models import OVERRIDE_KEYS, Override, PackageEntry, Selection

log = get_logger(__name__)


def load(path: Path) -> list[PackageEntry]:
    """Load and validate a package manifest.

    Args:
        path: Path to the manifest file.

    Returns:
        Entries in manifest order. Entries sharing a name are kept.

    Raises:
        ManifestNotFoundError: If the file does not exist.
        ManifestParseError: If the document is not a valid manifest.
    """
    start = time.perf_counter()
    path = Path(path)
    log.debug("manifest_load_start", path=str(path))

    if not path.is_file():
        log.error("manifest_not_found", path=str(path))
        raise ManifestNotFoundError(path=str(path))

    try:
        raw = path.read_bytes()
    except OSError as e:
        log.error("manifest_read_error", path=str(path), error=str(e))
        raise ManifestParseError(f"Cannot read manifest: {e}", path=str(path)) from e

    # bytes let PyYAML detect the encoding and report bad input as a ReaderError
    try:
        document = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        log.error("manifest_yaml_error", path=str(path), error=str(e))
        raise ManifestParseError(f"Invalid YAML: {e}", path=str(path)) from e

    items = _entry_list(document, path)
    entries = [_parse_entry(item, index, path) for index, item in enumerate(items)]

    duration_ms = int((time.perf_counter() - start) * 1000)
    log.info(
        "manifest_load_complete",
        path=str(path),
        count=len(entries),
        duration_ms=duration_ms
    )

    return entries


def query(entries: Iterable[PackageEntry], selection: Selection) -> list[PackageEntry]:
    """Get the entries admitted by a selection, preserving order."""
    return [entry for entry in entries if selection.admits(entry)]


def _entry_list(document: Any, path: Path) -> list[Any]:
    if document is None:
        return []
    if isinstance(document, dict):
        if "packages" not in document:
            raise ManifestParseError(
                "Manifest mapping has no 'packages' key", path=str(path)
            )
        document = document["packages"]
        if document is None:
            return []
    if not isinstance(document, list):
        raise ManifestParseError(
            f"Expected a list of packages, got {type(document).__name__}",
            path=str(path),
        )
    return document


def _parse_entry(item: Any, index: int, path: Path) -> PackageEntry:
    if not isinstance(item, dict):
        raise ManifestParseError(
            f"Entry must be a mapping, got {type(item).__name__}",
            path=str(path),
            index=index,
        )

    name = item.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ManifestParseError(
            "Entry needs a non-empty string 'name'",
            path=str(path),
            index=index,
            field="name",
        )

    description = item.get("description")
    if description is None:
        description = ""
    elif not isinstance(description, str):
        raise ManifestParseError(
            f"'description' of {name} must be a string",
            path=str(path),
            index=index,
            field="description",
        )

    return PackageEntry(
        name=name.strip(),
        description=description,
        gui=_parse_flag(item, "gui", name, index, path),
        work=_parse_flag(item, "work", name, index, path),
        overrides=_parse_overrides(item.get("overrides"), name, index, path),
        index=index,
    )


def _parse_flag(item: dict, key: str, name: str, index: int, path: Path) -> bool:
    value = item.get(key, False)
    if value is None:
        return False
    # bool only: YAML 1.1 turns yes/no into bools already, and 0/1 are rejected
    if not isinstance(value, bool):
        raise ManifestParseError(
            f"'{key}' of {name} must be true or false, got {value!r}",
            path=str(path),
            index=index,
            field=key,
        )
    return value


def _parse_overrides(
    raw: Any, name: str, index: int, path: Path
) -> dict[str, Override]:
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ManifestParseError(
            f"'overrides' of {name} must be a mapping",
            path=str(path),
            index=index,
            field="overrides",
        )

    overrides: dict[str, Override] = {}
    for key, value in raw.items():
        if key not in OVERRIDE_KEYS:
            raise ManifestParseError(
                f"Unknown override platform {key!r} for {name}",
                path=str(path),
                index=index,
                field=f"overrides.{key}",
            )
        if value is None:
            overrides[key] = Override.skip()
        elif isinstance(value, str):
            if value.strip():
                overrides[key] = Override.rename(value.strip())
            else:
                log.debug("manifest_empty_override", package=name, platform=key)
        else:
            raise ManifestParseError(
                f"Override {key!r} of {name} must be a package name or null",
                path=str(path),
                index=index,
                field=f"overrides.{key}",
            )

    return overrides
