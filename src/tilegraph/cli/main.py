"""CLI entry point for tilegraph."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, Optional

from tilegraph.config import ServiceConfig, load_config
from tilegraph.core.models import QueryBox
from tilegraph.geo import great_circle_distance, initial_bearing
from tilegraph.logging import configure_logging, get_logger
from tilegraph.tiling import Rasterer

LOGGER = get_logger(__name__)

DEFAULT_CONFIG = Path("configs/tilegraph.yaml")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="tilegraph command-line interface")
    parser.add_argument("--log-json", action="store_true", help="Emit logs in JSON format")
    parser.add_argument("--log-level", default=None, help="Logging level (default: config or INFO)")
    subcommands = parser.add_subparsers(dest="command", required=True)

    raster = subcommands.add_parser("raster", help="Select the tile grid covering a bounding box")
    raster.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to service configuration file (YAML or JSON)",
    )
    raster.add_argument("--ullon", type=float, required=True, help="Upper-left longitude")
    raster.add_argument("--ullat", type=float, required=True, help="Upper-left latitude")
    raster.add_argument("--lrlon", type=float, required=True, help="Lower-right longitude")
    raster.add_argument("--lrlat", type=float, required=True, help="Lower-right latitude")
    raster.add_argument(
        "--width",
        type=float,
        required=True,
        help="Viewport width in pixels",
    )

    measure = subcommands.add_parser(
        "measure",
        help="Great-circle distance (miles) and initial bearing between two points",
    )
    measure.add_argument(
        "--from",
        dest="origin",
        type=float,
        nargs=2,
        metavar=("LON", "LAT"),
        required=True,
        help="Origin longitude and latitude",
    )
    measure.add_argument(
        "--to",
        dest="destination",
        type=float,
        nargs=2,
        metavar=("LON", "LAT"),
        required=True,
        help="Destination longitude and latitude",
    )
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    cfg = _load_service_config(getattr(args, "config", None))
    configure_logging(
        level=args.log_level or cfg.log_level,
        json_logs=args.log_json or cfg.json_logs,
    )

    if args.command == "raster":
        return _handle_raster(args, cfg)
    if args.command == "measure":
        return _handle_measure(args)
    parser.error("Unknown command")
    return 1


def _load_service_config(path: Optional[Path]) -> ServiceConfig:
    resolved = _resolve_config_path(path)
    if resolved is None:
        return ServiceConfig()
    return load_config(resolved)


def _resolve_config_path(path: Optional[Path]) -> Optional[Path]:
    if path is not None:
        resolved = path.resolve()
        if not resolved.exists():
            raise SystemExit(f"Configuration file not found: {resolved}")
        return resolved
    if DEFAULT_CONFIG.exists():
        return DEFAULT_CONFIG.resolve()
    return None


def _handle_raster(args: argparse.Namespace, cfg: ServiceConfig) -> int:
    query = QueryBox(
        ullon=args.ullon,
        ullat=args.ullat,
        lrlon=args.lrlon,
        lrlat=args.lrlat,
        width=args.width,
    )
    result = Rasterer(cfg.raster).get_map_raster(query)
    print(json.dumps(result.to_dict(), indent=2))
    return 0


def _handle_measure(args: argparse.Namespace) -> int:
    lon_v, lat_v = args.origin
    lon_w, lat_w = args.destination
    payload = {
        "distance_miles": great_circle_distance(lon_v, lat_v, lon_w, lat_w),
        "bearing_degrees": initial_bearing(lon_v, lat_v, lon_w, lat_w),
    }
    print(json.dumps(payload, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
