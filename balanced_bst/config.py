"""Configuration for the ``tree_balance`` demonstration driver.

A scenario describes how many random values seed the tree, the range they are
drawn from, how many out-of-range values are inserted afterwards to skew it,
and an optional seed for reproducible runs.  Scenarios can be loaded from JSON
or YAML documents; omitted keys fall back to the defaults below.
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

import yaml

logger = logging.getLogger(__name__)

__all__ = ["DemoConfig", "DemoConfigError", "load_demo_config"]


class DemoConfigError(ValueError):
    """Raised when a demo configuration document is invalid."""


@dataclass(frozen=True)
class DemoConfig:
    """Parameters of the build, skew and rebalance demonstration."""

    size: int = 15
    lower: int = 1
    upper: int = 100
    extra_count: int = 6
    extra_lower: int = 101
    extra_upper: int = 1000
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        for field_ in fields(self):
            value = getattr(self, field_.name)
            if field_.name == "seed" and value is None:
                continue
            if not isinstance(value, int) or isinstance(value, bool):
                raise DemoConfigError(f"{field_.name} must be an integer")
        if self.size < 0:
            raise DemoConfigError("size must be non-negative")
        if self.extra_count < 0:
            raise DemoConfigError("extra_count must be non-negative")
        if self.lower > self.upper:
            raise DemoConfigError("lower must not exceed upper")
        if self.extra_lower > self.extra_upper:
            raise DemoConfigError("extra_lower must not exceed extra_upper")

    def with_overrides(self, **overrides: Any) -> "DemoConfig":
        """Return a copy with every non-``None`` override applied."""

        applied = {key: value for key, value in overrides.items() if value is not None}
        return replace(self, **applied) if applied else self


def _parse_document(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise DemoConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    suffix = path.suffix.lower()
    if suffix == ".json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise DemoConfigError(f"Invalid JSON in {path}: {exc}") from exc
    if suffix in {".yaml", ".yml"}:
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise DemoConfigError(f"Invalid YAML in {path}: {exc}") from exc
    raise DemoConfigError(f"Unsupported configuration format: {path.suffix or path.name}")


def _from_mapping(payload: Mapping[str, Any]) -> DemoConfig:
    known = {field_.name for field_ in fields(DemoConfig)}
    unknown = sorted(str(key) for key in payload if key not in known)
    if unknown:
        raise DemoConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
    return DemoConfig(**payload)


def load_demo_config(path: Union[str, Path, None]) -> DemoConfig:
    """Load a :class:`DemoConfig` from *path*, or the defaults when ``None``."""

    if path is None:
        return DemoConfig()

    config_path = Path(path)
    if not config_path.is_file():
        raise DemoConfigError(f"Configuration file not found: {config_path}")

    payload = _parse_document(config_path)
    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise DemoConfigError("Configuration root must be a mapping")

    config = _from_mapping(payload)
    logger.debug("Loaded demo configuration from %s: %s", config_path, config)
    return config
