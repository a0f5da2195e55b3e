from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml


@dataclass(frozen=True)
class LoaderConfig:
    """
    Loader options.

    little_endian: byte order of every multi-byte value in binary payloads.
                   The binary_compressed size prefix is always little-endian.
    """
    little_endian: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "LoaderConfig":
        data = data or {}
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown loader option(s): {', '.join(sorted(unknown))}")
        little_endian = data.get("little_endian", True)
        if not isinstance(little_endian, bool):
            raise ValueError(f"little_endian must be true or false, got {little_endian!r}")
        return cls(little_endian=little_endian)


def load_config(path: Union[str, Path]) -> LoaderConfig:
    """Read a YAML file whose top level (or `pcd_loader:` section) holds LoaderConfig keys."""
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"Loader config must be a mapping: {path}")
    if "pcd_loader" in raw:
        raw = raw["pcd_loader"] or {}
    return LoaderConfig.from_dict(raw)
