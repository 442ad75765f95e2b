"""
Command line entry point for nipalspy.

Reads a labelled CSV file (variable names in the first row, object names
in the first column), fits a NIPALS PCA or PLS model and either prints
the results or saves them as JSON.
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .core import exceptions, nipals
from .core.driver import PCA, PLS
from .io import io

logger = logging.getLogger("nipalspy")


def setup_logging(level: str = "WARNING") -> None:
    """
    Set up logging.

    Args:
        level: Logging level
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command line arguments.

    Args:
        argv: Arguments to parse; defaults to sys.argv[1:]

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="nipalspy",
        description="NIPALS Principal Component Analysis and Partial "
        "Least Squares regression",
    )

    parser.add_argument("csv_file", help="Path to the input CSV file")

    parser.add_argument(
        "--comps",
        type=int,
        default=-1,
        help="Number of components to compute (default: number of variables)",
    )

    parser.add_argument(
        "--scale", action="store_true", help="Apply autoscaling"
    )

    parser.add_argument(
        "--output",
        default="",
        help="Path to output results as a JSON file (optional)",
    )

    parser.add_argument(
        "--method",
        default="pca",
        choices=["pca", "pls"],
        help="Model to fit",
    )

    parser.add_argument(
        "--response",
        action="append",
        default=[],
        help="Name of a CSV column to use as PLS response; repeatable",
    )

    parser.add_argument(
        "--max-iter",
        type=int,
        default=nipals.MAX_ITERATIONS,
        help="Maximum iterations per component",
    )

    parser.add_argument(
        "--tol",
        type=float,
        default=nipals.EPSILON,
        help="Convergence tolerance",
    )

    parser.add_argument(
        "--init",
        default="variance",
        choices=list(nipals.INIT_METHODS),
        help="How each component's iteration is seeded",
    )

    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed used with --init random",
    )

    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )

    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"nipalspy version: {__version__}",
    )

    return parser.parse_args(argv)


def fit_from_args(args: argparse.Namespace):
    """Reads the input file and fits the model described by `args`."""
    records = io.read_csv(args.csv_file)
    options = dict(
        n_components=args.comps,
        autoscale=args.scale,
        max_iter=args.max_iter,
        tol=args.tol,
        init=args.init,
        random_state=args.seed,
    )

    if args.method == "pca":
        if args.response:
            logger.warning("--response is ignored for PCA")
        return PCA(
            records.data,
            variable_names=records.variable_names,
            object_names=records.object_names,
            **options,
        )

    if not args.response:
        raise exceptions.InvalidParameterError(
            "PLS needs at least one --response column."
        )
    predictors, responses = io.split_columns(records, args.response)
    return PLS(
        predictors.data,
        responses.data,
        variable_names=predictors.variable_names,
        object_names=predictors.object_names,
        response_names=responses.variable_names,
        **options,
    )


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Process exit code
    """
    args = parse_args(argv)
    setup_logging(args.log_level)

    print(f"nipalspy NIPALS PCA/PLS version {__version__}")
    print("This program is distributed under the GNU General Public License v3")
    print()

    try:
        model = fit_from_args(args)
        if args.output:
            io.results_to_json(model, args.output)
            print(f"Results saved to {args.output}")
        else:
            print(io.format_results(model))
    except (exceptions.Error, OSError) as e:
        logger.error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
