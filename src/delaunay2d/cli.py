"""Command-line entry: triangulate an `x y` point file and print the result as JSON."""

import argparse
import io
import json
import logging
import sys

import numpy as np
import structlog

from .delaunay import triangulate_2d
from .errors import TriangulationError

logger = structlog.get_logger()


def configure_logging(level: str = "WARNING") -> None:
    """Route structlog through stdlib logging on stderr, rendered as JSON."""
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=getattr(logging, level.upper()))
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def read_points(text: str) -> np.ndarray:
    """One point per line, coordinates separated by whitespace or a comma; '#' starts a comment."""
    return np.loadtxt(io.StringIO(text.replace(",", " ")), dtype=np.float64, ndmin=2)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Delaunay triangulation and Voronoi segments of 2D points")
    parser.add_argument("input", nargs="?", default="-", help="Point file (default: stdin)")
    parser.add_argument("--lenient", action="store_true", help="Return an empty result instead of failing on bad input")
    parser.add_argument("--perimeter-scale", type=float, default=1.0, help="Enlarge the seeding perimeter triangle")
    parser.add_argument("--indent", type=int, default=None, help="Indent the JSON output")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, WARNING, ...)")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.perimeter_scale <= 0:
        parser.error("--perimeter-scale must be > 0")
    configure_logging(args.log_level)

    if args.input == "-":
        text = sys.stdin.read()
    else:
        with open(args.input, encoding="utf-8") as f:
            text = f.read()

    try:
        points = read_points(text)
    except ValueError as e:
        logger.error("Unreadable point file", input=args.input, error=str(e))
        return 2

    try:
        tri = triangulate_2d(points, strict=not args.lenient, perimeter_scale=args.perimeter_scale)
    except TriangulationError as e:
        logger.error("Triangulation failed", error=type(e).__name__, reason=str(e))
        return 1

    result = {
        "triangles": tri.triangle_count(),
        "delaunay": [[int(a), int(b)] for a, b in tri.delaunay_pairs()],
        "voronoi": [[list(p), list(q)] for p, q in tri.voronoi_segments()],
    }
    json.dump(result, sys.stdout, indent=args.indent)
    sys.stdout.write("\n")

    logger.info("Triangulation written", triangles=result["triangles"], edges=len(result["delaunay"]))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
