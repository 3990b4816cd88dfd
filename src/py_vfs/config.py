"""Start-up configuration: the root file system and an fstab of mounts.

A real system reads ``/etc/fstab`` at boot to learn which file systems
to mount where.  Our equivalent is a small JSON file::

    {
        "root_fs_type": "ext4",
        "root_name": "root",
        "log_level": "INFO",
        "mounts": [
            {"fs_type": "tmpfs", "path": "/tmp"},
            {"fs_type": "vfat", "path": "/media/usb"}
        ]
    }

Every key is optional.  Only the mount layout is configured; file
contents are never loaded or saved.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from py_vfs.logging import Logger, LogLevel
from py_vfs.router import OverlayRouter

if TYPE_CHECKING:
    from pathlib import Path


class ConfigError(RuntimeError):
    """Raise when a configuration cannot be loaded or applied.

    Examples: unreadable file, malformed JSON, unknown log level, a
    configured mount the router rejects.
    """


@dataclass(frozen=True)
class MountSpec:
    """One fstab line: which file system type to mount where."""

    fs_type: str
    path: str


@dataclass(frozen=True)
class VfsConfig:
    """Everything needed to build a router."""

    root_fs_type: str = "ext4"
    root_name: str = "root"
    mounts: tuple[MountSpec, ...] = ()
    log_level: LogLevel = LogLevel.INFO


def _parse_log_level(value: Any) -> LogLevel:
    try:
        return LogLevel[str(value).upper()]
    except KeyError as e:
        msg = f"Unknown log level: {value}"
        raise ConfigError(msg) from e


def _parse_mounts(raw: Any) -> tuple[MountSpec, ...]:
    if not isinstance(raw, list):
        msg = "'mounts' must be a list"
        raise ConfigError(msg)
    specs: list[MountSpec] = []
    for item in raw:  # pyright: ignore[reportUnknownVariableType]
        if not isinstance(item, dict) or "fs_type" not in item or "path" not in item:
            msg = f"Invalid mount entry: {item!r}"
            raise ConfigError(msg)
        fs_type = str(item["fs_type"])  # pyright: ignore[reportUnknownArgumentType]
        path = str(item["path"])  # pyright: ignore[reportUnknownArgumentType]
        specs.append(MountSpec(fs_type=fs_type, path=path))
    return tuple(specs)


def config_from_dict(data: dict[str, Any]) -> VfsConfig:
    """Build a config from already-decoded JSON data.

    Raises:
        ConfigError: If a value has the wrong shape.

    """
    defaults = VfsConfig()
    return VfsConfig(
        root_fs_type=str(data.get("root_fs_type", defaults.root_fs_type)),
        root_name=str(data.get("root_name", defaults.root_name)),
        mounts=_parse_mounts(data.get("mounts", [])),
        log_level=_parse_log_level(data.get("log_level", defaults.log_level.name)),
    )


def load_config(path: Path) -> VfsConfig:
    """Load a configuration from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or parsed.

    """
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        msg = f"Cannot load config: {e}"
        raise ConfigError(msg) from e
    if not isinstance(data, dict):
        msg = "Config root must be a JSON object"
        raise ConfigError(msg)
    return config_from_dict(data)  # pyright: ignore[reportUnknownArgumentType]


def build_router(config: VfsConfig | None = None) -> OverlayRouter:
    """Create a router and apply the configured mounts in order.

    Raises:
        ConfigError: If any configured mount is rejected.

    """
    config = config if config is not None else VfsConfig()
    router = OverlayRouter(
        root_fs_type=config.root_fs_type,
        root_name=config.root_name,
        logger=Logger(min_level=config.log_level),
    )
    for spec in config.mounts:
        outcome = router.mount(spec.fs_type, spec.path)
        if not outcome.ok:
            msg = f"Cannot mount {spec.fs_type} at {spec.path}: {outcome.error}"
            raise ConfigError(msg)
    return router
