"""
Human-readable text rendering for matrices.

The rendering is display-only: every row on its own line with the integer
parts of the elements lined up, followed by a ``Shape: RxC`` line. It is
not meant to be parsed back into a matrix.
"""

import math

import numpy as np

from .config import DTYPE, ZERO_TOLERANCE, COLUMN_SEPARATOR, SHAPE_LABEL


def number_of_digits(value) -> int:
    """
    Number of decimal digits in the integer part of ``abs(value)``.

    Values whose magnitude is below ZERO_TOLERANCE, values below 1 and
    non-finite values all count as a single digit.
    """
    magnitude = abs(float(value))
    if magnitude < ZERO_TOLERANCE or not math.isfinite(magnitude):
        return 1
    return max(1, math.floor(math.log10(magnitude) + ZERO_TOLERANCE) + 1)


def format_element(value) -> str:
    """
    Shortest positional text for a float; integral values drop the '.0'.
    Magnitudes below ZERO_TOLERANCE print as '0'.
    """
    if abs(float(value)) < ZERO_TOLERANCE:
        return "0"
    return np.format_float_positional(DTYPE(value), trim='-')


def render(matrix) -> str:
    """Renders a matrix row by row, followed by its shape."""
    rows, cols = matrix.shape()
    width = max((number_of_digits(v) for v in matrix.data), default=0)

    lines = []
    for row in matrix.data.reshape(rows, cols):
        cells = [
            COLUMN_SEPARATOR * (width - number_of_digits(v)) + format_element(v)
            for v in row
        ]
        lines.append(COLUMN_SEPARATOR.join(cells) + "\n")
    lines.append(f"{SHAPE_LABEL}: {rows}x{cols}")
    return "".join(lines)
