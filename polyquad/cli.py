from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from polyquad.config import IntegrationConfig
from polyquad.pipeline import IntegrationReport, run
from polyquad.quadrature.errors import AllocationFailure, QuadratureError

logger = logging.getLogger(__name__)

EXIT_ALLOCATION_FAILURE = 1
EXIT_INVALID_CONFIG = 2


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    ap = argparse.ArgumentParser(
        description="Integrate a polynomial numerically with the rectangular and trapezoidal rules."
    )
    ap.add_argument(
        "--coefficients",
        type=float,
        nargs="+",
        default=None,
        help="Polynomial coefficients in ascending powers: c0 c1 c2 ... (default: -10 1 0 2).",
    )
    ap.add_argument("--xmin", type=float, default=None, help="Lower end of the integration range (default: 0).")
    ap.add_argument("--xmax", type=float, default=None, help="Upper end of the integration range (default: 5).")
    ap.add_argument("--intervals", type=int, default=None, help="Number of equally spaced intervals (default: 1000).")
    ap.add_argument(
        "--config",
        default="",
        help="JSON file with any of coefficients/xmin/xmax/intervals. Command line options take precedence.",
    )
    ap.add_argument("--verbose", "-v", action="store_true", help="Log debug information to stderr.")
    return ap.parse_args(argv)


def _load_config(args: argparse.Namespace) -> IntegrationConfig:
    cfg = IntegrationConfig()
    if args.config:
        data = json.loads(Path(args.config).read_text(encoding="utf-8"))
        cfg = IntegrationConfig.from_mapping(data)
        logger.debug("loaded configuration from %s", args.config)

    overrides = {}
    if args.coefficients is not None:
        overrides["coefficients"] = tuple(args.coefficients)
    if args.xmin is not None:
        overrides["xmin"] = args.xmin
    if args.xmax is not None:
        overrides["xmax"] = args.xmax
    if args.intervals is not None:
        overrides["intervals"] = args.intervals
    return cfg.replace(**overrides)


def format_report(report: IntegrationReport) -> str:
    cfg = report.config
    left, right = report.rectangular.as_tuple()
    return (
        "\nRectangular rule - The integral between %f and %f is in the interval: [%f,%f]\n"
        % (cfg.xmin, cfg.xmax, left, right)
        + "\nTrapezoidal rule - The integral between %f and %f is : %f\n"
        % (cfg.xmin, cfg.xmax, float(report.trapezoidal))
    )


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        cfg = _load_config(args)
    except (OSError, ValueError) as exc:
        print(f"\nERROR: bad configuration: {exc}")
        return EXIT_INVALID_CONFIG

    try:
        report = run(cfg)
    except AllocationFailure as exc:
        logger.debug("allocation failed", exc_info=exc)
        print("\nERROR: cannot allocate memory")
        return EXIT_ALLOCATION_FAILURE
    except QuadratureError as exc:
        print(f"\nERROR: {exc}")
        return EXIT_INVALID_CONFIG

    sys.stdout.write(format_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
