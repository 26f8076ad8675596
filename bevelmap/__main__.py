"""CLI entry point for bevelmap."""

import argparse
import logging
import sys

from . import generate
from .imageio import CHANNELS, save_maps

logger = logging.getLogger("bevelmap")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Generate bevel, distance, height and normal maps from a mask image"
    )
    parser.add_argument("mask", help="Mask image (inside = bright)")
    parser.add_argument(
        "--output", "-o", default=".",
        help="Output directory (default: current directory)"
    )
    parser.add_argument(
        "--prefix", "-p", default="",
        help="File name prefix for the written maps"
    )
    parser.add_argument(
        "--passes", "-n", type=int, default=50,
        help="Distance relaxation passes, i.e. bevel width in pixels (default: 50)"
    )
    parser.add_argument(
        "--sentinel", action="store_true",
        help="Seed unresolved pixels with an infinite-distance marker"
    )
    parser.add_argument(
        "--no-pass-scaling", action="store_true",
        help="Do not divide step costs by the pass count"
    )
    parser.add_argument(
        "--channel", "-c", default="R", choices=CHANNELS,
        help="Image channel read as the mask (default: R)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log every relaxation pass"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        result = generate(
            args.mask,
            channel=args.channel,
            pass_count=args.passes,
            use_sentinel=args.sentinel,
            divide_by_pass_count=not args.no_pass_scaling,
        )
        paths = save_maps(result, args.output, args.prefix)
    except (ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1

    print(f"Saved {len(paths)} maps ({result.width}x{result.height}) "
          f"to {paths['normal'].parent}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
