"""CLI entry point for noisemaps."""

import argparse
import logging
import sys

from . import (
    create_layered_noise_map,
    create_noise_map,
    create_noise_mask,
    invert_field,
    set_seed,
    threshold_field,
)
from .config import MapConfig
from .errors import InvalidParameterError
from .masks import MaskKind
from .noise import NoiseKind
from .renderer import save_png

LAYERED = "layered"


def setup_logging(verbose=False):
    """Configure root logging for command-line use."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s.%(msecs)03d [%(levelname)s] %(name)s:%(lineno)d | %(message)s",
        datefmt="%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _kinds():
    return ([k.value for k in NoiseKind] + [LAYERED]
            + [k.value for k in MaskKind])


def _build_parser():
    parser = argparse.ArgumentParser(
        description="Generate seeded noise maps and masks as PNG images"
    )
    parser.add_argument("kind", choices=_kinds(), help="Noise, mask or 'layered'")
    parser.add_argument(
        "--width", "-W", type=int, default=None,
        help="Map width in pixels (default: 160)"
    )
    parser.add_argument(
        "--height", "-H", type=int, default=None,
        help="Map height in pixels (default: 120)"
    )
    parser.add_argument(
        "--scale", type=int, default=None,
        help="Gradient nodes across the map (default: 4)"
    )
    parser.add_argument(
        "--layers", type=int, default=None,
        help="Octaves for layered noise (default: 3)"
    )
    parser.add_argument(
        "--persistence", type=float, default=None,
        help="Amplitude decay per octave (default: 0.5)"
    )
    parser.add_argument(
        "--option", type=float, default=None,
        help="Mask parameter: solid value, edge margin or checker size"
    )
    parser.add_argument(
        "--seed", "-s", type=int, default=None,
        help="Random seed for reproducible generation"
    )
    parser.add_argument(
        "--threshold", type=float, default=None,
        help="Binarize the map at this level"
    )
    parser.add_argument(
        "--invert", action="store_true",
        help="Invert the map before thresholding"
    )
    parser.add_argument(
        "--output", "-o", default="noise.png",
        help="Output file path (default: noise.png)"
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Log generation details"
    )
    return parser


def _generate(kind, config, option=None):
    if kind == LAYERED:
        return create_layered_noise_map(config.width, config.height,
                                        config.layers, config.scale,
                                        config.persistence)
    if kind in {k.value for k in NoiseKind}:
        return create_noise_map(kind, config.width, config.height, config.scale)
    return create_noise_mask(kind, config.width, config.height, option)


def main(argv=None):
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    config = MapConfig()
    for name in ("width", "height", "scale", "layers", "persistence"):
        value = getattr(args, name)
        if value is not None:
            setattr(config, name, value)

    try:
        if args.seed is not None:
            set_seed(args.seed)
        field = _generate(args.kind, config, args.option)
        if args.invert:
            field = invert_field(field)
        if args.threshold is not None:
            field = threshold_field(field, args.threshold)
    except InvalidParameterError as exc:
        parser.error(str(exc))

    output = save_png(field, args.output)
    print(f"Saved {args.kind} map ({field.shape[1]}x{field.shape[0]}) to {output}")


if __name__ == "__main__":
    main()
