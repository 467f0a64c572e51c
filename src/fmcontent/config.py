"""Configuration: JSON file loading and construction of disks and ACL."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from fmcontent import ConfigError
from fmcontent.acl import STRATEGIES, AclRule, RuleACL, parse_rule
from fmcontent.storage.base import DiskRegistry, StorageBackend
from fmcontent.storage.local import LocalBackend
from fmcontent.storage.memory import MemoryBackend

logger = logging.getLogger(__name__)

DRIVERS = ("local", "memory")


@dataclass(frozen=True, slots=True)
class ContentConfig:
    """Settings for listing and access control.

    Attributes:
        acl: Whether entries are tagged with ACL access levels.
        acl_hide_from_fm: Whether zero-access entries are removed from results.
        acl_strategy: ``blacklist`` or ``whitelist`` fallback when no rule matches.
        acl_rules: ACL rules in priority order.
        disks: Disk name -> driver settings (``driver`` plus driver options).
    """

    acl: bool = False
    acl_hide_from_fm: bool = False
    acl_strategy: str = "blacklist"
    acl_rules: tuple[AclRule, ...] = ()
    disks: Mapping[str, Mapping[str, Any]] = field(default_factory=dict)


def _require_bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key, False)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false, got {value!r}")
    return value


def parse_config(data: Any) -> ContentConfig:
    """Validate a decoded configuration mapping.

    Raises:
        ConfigError: On any invalid value.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration must be a JSON object")

    strategy = data.get("acl_strategy", "blacklist")
    if strategy not in STRATEGIES:
        known = ", ".join(sorted(STRATEGIES))
        raise ConfigError(f"Unknown acl_strategy '{strategy}'. Known strategies: {known}")

    raw_rules = data.get("acl_rules", [])
    if not isinstance(raw_rules, list) or not all(isinstance(raw, dict) for raw in raw_rules):
        raise ConfigError("'acl_rules' must be a list of objects")
    try:
        rules = tuple(parse_rule(raw) for raw in raw_rules)
    except (TypeError, ValueError) as exc:
        raise ConfigError(str(exc)) from exc

    disks = data.get("disks", {})
    if not isinstance(disks, dict):
        raise ConfigError("'disks' must be an object")
    for name, settings in disks.items():
        if not isinstance(settings, dict):
            raise ConfigError(f"Disk '{name}' settings must be an object")
        driver = settings.get("driver")
        if driver not in DRIVERS:
            raise ConfigError(
                f"Disk '{name}' has unknown driver {driver!r}. Known drivers: {', '.join(DRIVERS)}"
            )
        if driver == "local" and not settings.get("root"):
            raise ConfigError(f"Disk '{name}' requires 'root'")

    return ContentConfig(
        acl=_require_bool(data, "acl"),
        acl_hide_from_fm=_require_bool(data, "acl_hide_from_fm"),
        acl_strategy=strategy,
        acl_rules=rules,
        disks=disks,
    )


def load_config(path: str | Path) -> ContentConfig:
    """Read and validate a JSON configuration file.

    Raises:
        ConfigError: If the file cannot be read, is not valid JSON, or
            holds invalid values.
    """
    config_path = Path(path)
    try:
        text = config_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read config '{config_path}': {exc.strerror or exc}") from exc
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in '{config_path}': {exc}") from exc
    logger.debug("Loaded config from %s", config_path)
    return parse_config(data)


def _build_backend(settings: Mapping[str, Any], base_dir: Path | None) -> StorageBackend:
    if settings["driver"] == "local":
        root = Path(settings["root"])
        if base_dir is not None and not root.is_absolute():
            root = base_dir / root
        return LocalBackend(root, ignore=settings.get("ignore"))
    return MemoryBackend(settings.get("files"))


def build_disks(config: ContentConfig, base_dir: str | Path | None = None) -> DiskRegistry:
    """Construct backends for every configured disk.

    Args:
        config: Parsed configuration.
        base_dir: Directory that relative ``local`` roots resolve against.
    """
    base = Path(base_dir) if base_dir is not None else None
    registry = DiskRegistry()
    for name, settings in config.disks.items():
        registry.add(name, _build_backend(settings, base))
    return registry


def build_acl(config: ContentConfig) -> RuleACL:
    return RuleACL(config.acl_rules, config.acl_strategy)
