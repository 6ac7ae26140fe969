#!/usr/bin/env python3
"""
Demonstration of the linalg matrix library.

Builds a couple of sample matrices and prints the rendering of sums,
scalar and matrix products, transposes and a matrix power.

Example:
    python main.py --power 5 --profile
"""

import argparse
import logging
import sys

from linalg import Matrix, MatrixError, configure_logging, get_profiler

logger = logging.getLogger("linalg.demo")


def build_samples():
    """Return the two sample matrices used by the demo."""
    mat1 = Matrix.from_rows(2, 3, [[1000., 0., 1.], [0., 3., 5.]])
    mat2 = Matrix.from_rows(2, 2, [[11., 3.], [7., 11.]])
    return mat1, mat2


def run_demo(exponent=5, out=None):
    """Print every sample computation to ``out`` (stdout by default)."""
    out = out if out is not None else sys.stdout
    profiler = get_profiler()
    mat1, mat2 = build_samples()

    steps = [
        ("A", lambda: mat1),
        ("B", lambda: mat2),
        ("B + B", lambda: mat2 + mat2),
        ("15.0 * A", lambda: 15.0 * mat1),
        ("(B @ A).T", lambda: (mat2 @ mat1).T),
        ("A.T @ B.T", lambda: mat1.T @ mat2.T),
        (f"B ** {exponent}", lambda: mat2 ** exponent),
    ]

    for name, compute in steps:
        logger.info(f"Computing {name}")
        with profiler.profile(name):
            result = compute()
        print(result, file=out)
        print(file=out)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Print sample computations with the linalg matrix library"
    )
    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Logging level (default: WARNING)'
    )
    parser.add_argument(
        '--power',
        type=int,
        default=5,
        help='Exponent of the final matrix power (default: 5)'
    )
    parser.add_argument(
        '--profile',
        action='store_true',
        help='Print an execution profile summary at the end'
    )
    args = parser.parse_args(argv)
    if args.power < 0:
        parser.error("--power must be non-negative")

    configure_logging(level=args.log_level)

    try:
        run_demo(exponent=args.power)
    except MatrixError as e:
        logger.error(f"Demo failed: {e}")
        return 1

    if args.profile:
        get_profiler().print_summary()
    return 0


if __name__ == "__main__":
    sys.exit(main())
