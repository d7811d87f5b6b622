"""Configuration management with YAML and JSON support."""

from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from tilegraph.core.models import RasterConfig

_FLOAT_KEYS = ("root_ullon", "root_ullat", "root_lrlon", "root_lrlat", "lon_scale")
_INT_KEYS = ("tile_size", "max_depth")


@dataclass
class ServiceConfig:
    """Top-level configuration for the tile selector and its tooling."""

    raster: RasterConfig = field(default_factory=RasterConfig)
    log_level: str = "INFO"
    json_logs: bool = False


class ConfigLoader:
    """Load service configuration files in YAML or JSON format."""

    def __init__(self, base_dir: Optional[Path] = None) -> None:
        self._base_dir = base_dir or Path.cwd()

    def load(self, path: Path | str) -> ServiceConfig:
        """Parse a configuration file and return a populated dataclass."""

        config_path = self._resolve_path(Path(path))
        payload = self._load_payload(config_path)
        if not isinstance(payload, dict):
            raise ValueError("configuration root must be a mapping")
        return self._build_config(payload)

    def _resolve_path(self, path: Path) -> Path:
        if path.is_absolute():
            return path
        return (self._base_dir / path).resolve()

    def _load_payload(self, path: Path) -> Any:
        suffix = path.suffix.lower()
        if suffix in {".yaml", ".yml"}:
            with path.open("r", encoding="utf-8") as handle:
                return yaml.safe_load(handle) or {}
        if suffix == ".json":
            with path.open("r", encoding="utf-8") as handle:
                return json.load(handle) or {}
        raise ValueError(f"Unsupported configuration format: {suffix}")

    def _build_config(self, payload: Dict[str, Any]) -> ServiceConfig:
        raster_payload = payload.get("raster") or {}
        if not isinstance(raster_payload, dict):
            raise ValueError("raster section must be a mapping")
        raster_data = dict(raster_payload)

        bbox = raster_data.pop("root_bbox", None)
        if bbox is not None:
            if not isinstance(bbox, (list, tuple)) or len(bbox) != 4:
                raise ValueError("raster.root_bbox must be a list of four numbers")
            ullon, ullat, lrlon, lrlat = bbox
            raster_data.update(
                root_ullon=ullon, root_ullat=ullat, root_lrlon=lrlon, root_lrlat=lrlat
            )

        known = {item.name for item in fields(RasterConfig)}
        unknown = sorted(set(raster_data) - known)
        if unknown:
            raise ValueError(f"unknown raster settings: {', '.join(unknown)}")
        for key in _FLOAT_KEYS:
            if key in raster_data and raster_data[key] is not None:
                raster_data[key] = float(raster_data[key])
        for key in _INT_KEYS:
            if key in raster_data and raster_data[key] is not None:
                raster_data[key] = int(raster_data[key])

        logging_payload = payload.get("logging") or {}
        if not isinstance(logging_payload, dict):
            raise ValueError("logging section must be a mapping")

        return ServiceConfig(
            raster=RasterConfig(**raster_data),
            log_level=str(logging_payload.get("level", "INFO")),
            json_logs=bool(logging_payload.get("json", False)),
        )


def load_config(path: Path | str, *, base_dir: Optional[Path] = None) -> ServiceConfig:
    """Convenience wrapper around :class:`ConfigLoader`."""

    loader = ConfigLoader(base_dir=base_dir)
    return loader.load(path)
