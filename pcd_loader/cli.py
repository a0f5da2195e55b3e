#!/usr/bin/env python3
import argparse
import logging
import sys

import numpy as np

from .config import LoaderConfig, load_config
from .errors import PCDError
from .header import parse_header
from .loader import PCDLoader

log = logging.getLogger("pcd_inspect")


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Decode a PCD file and summarise its contents")
    ap.add_argument("pcd", help="Path to a .pcd file (ascii, binary or binary_compressed)")
    ap.add_argument("--config", default=None, help="YAML file with loader options")
    ap.add_argument("--big-endian", action="store_true", help="Binary payload is big-endian")
    ap.add_argument("--out", default=None, help="Write finite x y z rows to this text file")
    ap.add_argument("--limit", type=int, default=5, help="Print first N points")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="[%(levelname)s] %(name)s: %(message)s",
    )

    config = load_config(args.config) if args.config else LoaderConfig()
    if args.big_endian:
        config = LoaderConfig(little_endian=False)
    loader = PCDLoader.from_config(config)

    try:
        with open(args.pcd, "rb") as f:
            data = f.read()
        header = parse_header(data)
        cloud = loader.parse(data)
    except (OSError, PCDError) as e:
        log.error(f"Failed to decode {args.pcd}: {e}")
        return 1

    print(f"File:     {args.pcd}")
    print(f"Version:  {header.version}")
    print(f"Data:     {header.data}")
    print(f"Fields:   {' '.join(header.fields)}")
    print(f"Points:   {cloud.point_count}")
    print(f"Arrays:   {', '.join(cloud.attributes()) or '(none)'}")

    xyz = cloud.xyz()
    if xyz is not None:
        for i in range(min(args.limit, xyz.shape[0])):
            print(f"  {i}: x={xyz[i, 0]:.3f}, y={xyz[i, 1]:.3f}, z={xyz[i, 2]:.3f}")

    if args.out:
        if xyz is None:
            log.error("No x/y/z fields to write")
            return 1
        # Remove NaNs / inf
        m = np.isfinite(xyz).all(axis=1)
        np.savetxt(args.out, xyz[m], fmt="%.6f")
        print("Wrote:", args.out, "points:", int(m.sum()))

    return 0


if __name__ == "__main__":
    sys.exit(main())
